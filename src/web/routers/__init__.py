"""
FastAPI Routers - Modular endpoint organization.

Router modules:
- calculations: Federal + state tax calculation and deduction limits
- health: Liveness and configuration checks
"""

from .calculations import router as calculations_router
from .health import router as health_router

__all__ = [
    "calculations_router",
    "health_router",
]
