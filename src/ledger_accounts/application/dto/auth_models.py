"""Pydantic models for signup and login HTTP contracts."""

from __future__ import annotations

from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class StrictModel(BaseModel):
    """Base model with strict unknown-field rejection."""

    model_config = ConfigDict(extra="forbid")


class CamelResponseModel(BaseModel):
    """Base response model serialized with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SignupRequest(StrictModel):
    """HTTP request model for account signup.

    Fields are optional so that missing values reach the provisioning
    service and fail with its validation message.
    """

    username: str | None = None
    email: str | None = None
    password: str | None = None


class SignupResponse(CamelResponseModel):
    """HTTP response model for a created account."""

    id: UUID
    email: str
    username: str
    money: float
    present_money: float
    profit: float
    transactions: list[dict[str, Any]]


class LoginRequest(StrictModel):
    """HTTP request model for credential login."""

    email: str | None = None
    password: str | None = None


class LoginResponse(CamelResponseModel):
    """HTTP response model for an authenticated account."""

    id: UUID
    email: str
    username: str
    role: str
    is_verified: bool
