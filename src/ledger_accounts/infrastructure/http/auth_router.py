"""FastAPI router for account signup and login endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException

from ledger_accounts.application.dto.auth_models import (
    LoginRequest,
    LoginResponse,
    SignupRequest,
    SignupResponse,
)
from ledger_accounts.application.ports.account_repository_port import (
    AccountConflictError,
    StorageError,
)
from ledger_accounts.application.ports.password_hasher_port import HashingError
from ledger_accounts.application.services.account_provisioning_service import (
    AccountProvisioningService,
)
from ledger_accounts.application.services.authentication_service import (
    AuthenticationError,
    AuthenticationService,
)
from ledger_accounts.domain.auth.credentials import AccountValidationError

INTERNAL_ERROR_DETAIL = "internal error"

logger = logging.getLogger(__name__)


def build_auth_router(
    *,
    provisioning_service: AccountProvisioningService,
    authentication_service: AuthenticationService,
) -> APIRouter:
    """Build router exposing signup and login endpoints."""

    router = APIRouter(prefix="/auth", tags=["auth"])

    @router.post("/signup", response_model=SignupResponse, status_code=201)
    async def signup(payload: SignupRequest) -> SignupResponse:
        try:
            result = await provisioning_service.signup(
                username=payload.username,
                email=payload.email,
                password=payload.password,
            )
        except (AccountValidationError, AccountConflictError) as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        except (HashingError, StorageError) as exc:
            logger.exception("account_signup_internal_error error_type=%s", type(exc).__name__)
            raise HTTPException(status_code=500, detail=INTERNAL_ERROR_DETAIL) from exc

        return SignupResponse(
            id=result.account_id,
            email=result.email,
            username=result.username,
            money=float(result.money),
            present_money=float(result.present_money),
            profit=float(result.profit),
            transactions=result.transactions,
        )

    @router.post("/login", response_model=LoginResponse)
    async def login(payload: LoginRequest) -> LoginResponse:
        try:
            result = await authentication_service.login(
                email=payload.email,
                password=payload.password,
            )
        except AccountValidationError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        except AuthenticationError as exc:
            raise HTTPException(status_code=401, detail=str(exc)) from exc
        except (HashingError, StorageError) as exc:
            logger.exception("account_login_internal_error error_type=%s", type(exc).__name__)
            raise HTTPException(status_code=500, detail=INTERNAL_ERROR_DETAIL) from exc

        return LoginResponse(
            id=result.account_id,
            email=result.email,
            username=result.username,
            role=result.role.value,
            is_verified=result.is_verified,
        )

    return router
