"""Pydantic request/response schemas."""

from docuploader.schemas.account import (
    AccountCreate,
    AccountRead,
    AccountRegistration,
    AccountUpdate,
)
from docuploader.schemas.auth import LoginRequest, TokenResponse
from docuploader.schemas.auth_group import AuthGroupCreate, AuthGroupRead
from docuploader.schemas.document import DocumentCreate, DocumentRead, DocumentSummary
from docuploader.schemas.health import HealthResponse
from docuploader.schemas.registration import RegistrationRequest
from docuploader.schemas.user import UserCreate, UserRead, UserUpdate

__all__ = [
    "AccountCreate",
    "AccountRead",
    "AccountRegistration",
    "AccountUpdate",
    "AuthGroupCreate",
    "AuthGroupRead",
    "DocumentCreate",
    "DocumentRead",
    "DocumentSummary",
    "HealthResponse",
    "LoginRequest",
    "RegistrationRequest",
    "TokenResponse",
    "UserCreate",
    "UserRead",
    "UserUpdate",
]
