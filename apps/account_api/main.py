"""account-api entrypoint and HTTP route wiring."""

from __future__ import annotations

import logging

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ledger_accounts.application.services.account_provisioning_service import (
    AccountProvisioningService,
)
from ledger_accounts.application.services.authentication_service import AuthenticationService
from ledger_accounts.config.settings import load_settings
from ledger_accounts.infrastructure.db.account_repository import SqlAlchemyAccountRepository
from ledger_accounts.infrastructure.db.session import create_session_factory
from ledger_accounts.infrastructure.http.auth_router import (
    INTERNAL_ERROR_DETAIL,
    build_auth_router,
)
from ledger_accounts.infrastructure.logging import configure_logging
from ledger_accounts.infrastructure.security.password_hasher import (
    DEFAULT_BCRYPT_ROUNDS,
    BcryptPasswordHasher,
)

ACCOUNT_API_HOST = "0.0.0.0"
ACCOUNT_API_PORT = 8000
logger = logging.getLogger(__name__)


def build_provisioning_service(
    database_url: str,
    *,
    bcrypt_rounds: int = DEFAULT_BCRYPT_ROUNDS,
) -> AccountProvisioningService:
    """Build signup service with SQLAlchemy-backed dependencies."""

    session_factory = create_session_factory(database_url)
    return AccountProvisioningService(
        accounts=SqlAlchemyAccountRepository(session_factory),
        password_hasher=BcryptPasswordHasher(rounds=bcrypt_rounds),
    )


def build_authentication_service(
    database_url: str,
    *,
    bcrypt_rounds: int = DEFAULT_BCRYPT_ROUNDS,
) -> AuthenticationService:
    """Build login service with SQLAlchemy-backed dependencies."""

    session_factory = create_session_factory(database_url)
    return AuthenticationService(
        accounts=SqlAlchemyAccountRepository(session_factory),
        password_hasher=BcryptPasswordHasher(rounds=bcrypt_rounds),
    )


def create_app(
    *,
    provisioning_service: AccountProvisioningService | None = None,
    authentication_service: AuthenticationService | None = None,
    database_url: str | None = None,
) -> FastAPI:
    """Create FastAPI app exposing account signup and login routes."""

    bcrypt_rounds = DEFAULT_BCRYPT_ROUNDS
    if database_url is None and (
        provisioning_service is None or authentication_service is None
    ):
        settings = load_settings()
        configure_logging(level=settings.log_level)
        database_url = settings.database_url
        bcrypt_rounds = settings.bcrypt_rounds

    if provisioning_service is None:
        assert database_url is not None
        provisioning_service = build_provisioning_service(
            database_url,
            bcrypt_rounds=bcrypt_rounds,
        )
    if authentication_service is None:
        assert database_url is not None
        authentication_service = build_authentication_service(
            database_url,
            bcrypt_rounds=bcrypt_rounds,
        )

    app = FastAPI()
    app.include_router(
        build_auth_router(
            provisioning_service=provisioning_service,
            authentication_service=authentication_service,
        )
    )

    @app.exception_handler(RequestValidationError)
    async def request_validation_error_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        _ = request
        logger.info("account_api_request_rejected error_count=%s", len(exc.errors()))
        return JSONResponse(status_code=400, content={"detail": "invalid request body"})

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error(
            "account_api_unhandled_error path=%s error_type=%s",
            request.url.path,
            type(exc).__name__,
        )
        return JSONResponse(status_code=500, content={"detail": INTERNAL_ERROR_DETAIL})

    return app


def run_asgi_server(*, host: str = ACCOUNT_API_HOST, port: int = ACCOUNT_API_PORT) -> None:
    """Run account-api as a long-lived ASGI process using application factory mode."""

    uvicorn.run(
        "apps.account_api.main:create_app",
        host=host,
        port=port,
        factory=True,
    )


def main() -> None:
    """Run account-api runtime process."""

    settings = load_settings()
    run_asgi_server(host=settings.account_api_host, port=settings.account_api_port)


if __name__ == "__main__":
    main()
