"""
Tax Configuration Loader.

Loads bracket tables, standard deductions and itemized caps from YAML
parameter files, enabling:
- Annual updates without code changes
- Environment-specific overrides
- Metadata describing where each year's figures came from
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from calculator.errors import ConfigurationError

logger = logging.getLogger(__name__)

# Default config directory
CONFIG_DIR = Path(__file__).parent / "tax_parameters"

# Separator for nested keys in environment overrides
ENV_PATH_SEPARATOR = "__"


@dataclass
class ConfigMetadata:
    """Metadata about a configuration file."""
    version: str
    tax_year: int
    effective_date: str
    source: str  # "IRS", "state", "custom"
    irs_references: List[str] = field(default_factory=list)
    last_updated: str = ""
    notes: str = ""


class TaxConfigLoader:
    """
    Loads and caches tax parameter files.

    Features:
    - Automatic file discovery by tax year (tax_year_<year>.yaml)
    - Environment variable overrides of individual values
    - Structural validation before anything reaches the engine
    """

    def __init__(self, config_dir: Optional[Path] = None):
        """
        Initialize the config loader.

        Args:
            config_dir: Directory containing YAML config files.
                       Defaults to src/config/tax_parameters/
        """
        self.config_dir = Path(config_dir) if config_dir else CONFIG_DIR
        self._configs: Dict[int, Dict[str, Any]] = {}
        self._metadata: Dict[int, ConfigMetadata] = {}

    def available_years(self) -> List[int]:
        """Tax years with a parameter file on disk."""
        years = []
        for path in self.config_dir.glob("tax_year_*.yaml"):
            suffix = path.stem[len("tax_year_"):]
            if suffix.isdigit():
                years.append(int(suffix))
        return sorted(years)

    def has_year(self, tax_year: int) -> bool:
        return (self.config_dir / f"tax_year_{tax_year}.yaml").exists()

    def load_config(self, tax_year: int) -> Dict[str, Any]:
        """
        Load configuration for a specific tax year.

        Args:
            tax_year: The tax year to load (e.g., 2024)

        Returns:
            Dictionary with 'federal' and 'states' sections

        Raises:
            FileNotFoundError: If no parameter file exists for the year
            ConfigurationError: If the file is structurally invalid
        """
        if tax_year in self._configs:
            return self._configs[tax_year]

        config = self._load_from_file(tax_year)
        config = self._apply_env_overrides(config, tax_year)
        self._validate_config(config, tax_year)

        self._configs[tax_year] = config
        return config

    def _load_from_file(self, tax_year: int) -> Dict[str, Any]:
        year_file = self.config_dir / f"tax_year_{tax_year}.yaml"
        if not year_file.exists():
            raise FileNotFoundError(
                f"Tax configuration file not found: {year_file}. "
                f"Please ensure tax_year_{tax_year}.yaml exists."
            )

        logger.info(f"Loading tax config from {year_file}")
        with open(year_file, "r") as f:
            try:
                data = yaml.safe_load(f) or {}
            except yaml.YAMLError as exc:
                raise ConfigurationError(
                    f"Could not parse {year_file.name}",
                    details={"file": str(year_file), "error": str(exc)},
                ) from exc

        if "_metadata" in data:
            self._metadata[tax_year] = ConfigMetadata(**data.pop("_metadata"))
        return data

    def _apply_env_overrides(self, config: Dict[str, Any], tax_year: int) -> Dict[str, Any]:
        """
        Apply environment variable overrides to configuration.

        Nested keys are joined with a double underscore, e.g.
        TAX_2024_FEDERAL__STANDARD_DEDUCTION__SINGLE=15000
        TAX_2024_STATES__CA__STANDARD_DEDUCTION__SINGLE=5600
        """
        prefix = f"TAX_{tax_year}_"

        for key, value in os.environ.items():
            if not key.startswith(prefix):
                continue
            path = [part.lower() for part in key[len(prefix):].split(ENV_PATH_SEPARATOR)]
            # State codes are stored upper-case
            if len(path) > 1 and path[0] == "states":
                path[1] = path[1].upper()

            target = config
            for part in path[:-1]:
                target = target.setdefault(part, {})
                if not isinstance(target, dict):
                    logger.warning(f"Could not apply env override {key}: '{part}' is not a section")
                    break
            else:
                target[path[-1]] = _parse_override(value)
                logger.info(f"Applied env override: {'.'.join(path)}={value}")

        return config

    def _validate_config(self, config: Dict[str, Any], tax_year: int) -> None:
        """Validate configuration for completeness and consistency."""
        federal = config.get("federal")
        if not isinstance(federal, dict):
            raise ConfigurationError(
                f"Tax configuration for {tax_year} has no federal section",
                details={"tax_year": tax_year},
            )

        sections = {"federal": federal}
        sections.update({
            f"states.{code}": section
            for code, section in (config.get("states") or {}).items()
        })

        for name, section in sections.items():
            if not isinstance(section, dict):
                raise ConfigurationError(
                    f"Section {name} for {tax_year} must be a mapping",
                    details={"tax_year": tax_year, "section": name},
                )
            if section.get("has_income_tax", True) and not section.get("brackets"):
                raise ConfigurationError(
                    f"Section {name} for {tax_year} is missing brackets",
                    details={"tax_year": tax_year, "section": name},
                )
            missing = [p for p in ("standard_deduction",) if p not in section]
            if missing:
                logger.warning(f"Missing parameters in {name} for {tax_year}: {missing}")

    def get_metadata(self, tax_year: int) -> Optional[ConfigMetadata]:
        """Get metadata for a tax year's configuration."""
        self.load_config(tax_year)  # Ensure loaded
        return self._metadata.get(tax_year)


def _parse_override(value: str) -> Any:
    lowered = value.strip().lower()
    if lowered in ("true", "false"):
        return lowered == "true"
    try:
        if "." in value:
            return float(value)
        if value.lstrip("-").isdigit():
            return int(value)
    except ValueError:
        pass
    return value


# Global singleton
_config_loader: Optional[TaxConfigLoader] = None


def get_config_loader() -> TaxConfigLoader:
    """Get the global config loader instance."""
    global _config_loader
    if _config_loader is None:
        _config_loader = TaxConfigLoader()
    return _config_loader


def clear_config_cache() -> None:
    """Drop the loader singleton (useful for testing)."""
    global _config_loader
    _config_loader = None
