"""FastAPI application entry point.

Run with ``uvicorn src.cmstools.main:create_app --factory``.
"""

from __future__ import annotations

from datetime import timedelta

import structlog
from fastapi import FastAPI

from .api.errors import ApiError, api_error_handler
from .auth.auth_api import router as auth_router
from .auth.auth_service import AuthService
from .core.config import AppConfig
from .logging import configure_logging
from .security.jwt import TokenService, default_service


logger = structlog.get_logger(__name__)


def create_app(
    config: AppConfig | None = None,
    tokens: TokenService | None = None,
) -> FastAPI:
    """Build FastAPI instance; installs the signing key before serving traffic."""
    cfg = config or AppConfig.build_default()
    configure_logging(cfg.log_level)

    service = tokens or default_service
    service.configure(cfg.resolve_secret())
    if not service.configured:
        logger.warning("app.startup", reason="jwt_secret_missing")

    app = FastAPI(title="cmstools")
    app.state.config = cfg
    app.state.auth_service = AuthService(
        tokens=service, token_ttl=timedelta(seconds=cfg.token_ttl_seconds)
    )
    app.add_exception_handler(ApiError, api_error_handler)  # type: ignore[arg-type]
    app.include_router(auth_router)
    return app
