"""
FastAPI service for the tax estimator.

Routes:
- POST /calculate-tax            : federal + state tax with bracket breakdown
- POST /api/v1/calculate-tax     : same, versioned path
- GET  /jurisdictions            : supported states / filing statuses / years
- GET  /deduction-limits         : effective itemized caps at an income
- GET  /health, /health/live     : health checks
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from calculator.errors import TaxEngineError
from config.settings import Settings, get_settings
from web.helpers.error_responses import engine_error_response, request_validation_response
from web.routers import calculations_router, health_router

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    logging.getLogger().setLevel(settings.log_level)


def create_app(settings: Settings = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title=settings.name,
        version=settings.version,
        debug=settings.debug,
    )

    # The estimator frontend calls the API from the browser
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST"],
        allow_headers=["Content-Type"],
    )

    @app.exception_handler(TaxEngineError)
    async def tax_engine_error_handler(request: Request, exc: TaxEngineError):
        return engine_error_response(exc)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return request_validation_response(exc)

    app.include_router(calculations_router)
    app.include_router(calculations_router, prefix="/api/v1")
    app.include_router(health_router)

    logger.info(f"{settings.name} {settings.version} started ({settings.environment})")
    return app


app = create_app()
