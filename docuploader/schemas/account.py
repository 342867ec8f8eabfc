"""Request/response schemas for accounts."""

from typing import Literal

from pydantic import Field, field_validator

from docuploader.models.account import ServiceLevel
from docuploader.schemas.base import CamelModel, NonBlankStr
from docuploader.schemas.document import DocumentSummary
from docuploader.schemas.user import UserRead

ServiceLevelName = Literal["BRONZE", "SILVER", "GOLD", "UNLIMITED", "ENTERPRISE"]


class AccountRegistration(CamelModel):
    """Account part of a registration payload; owner and members come from the user."""

    name: NonBlankStr
    service_level: ServiceLevelName


class AccountCreate(AccountRegistration):
    """Standalone account creation for an existing user."""

    owner_id: int = Field(..., ge=1)


class AccountUpdate(CamelModel):
    id: int = Field(..., ge=1)
    name: NonBlankStr
    service_level: ServiceLevelName


class AccountRead(CamelModel):
    id: int
    name: str
    service_level: ServiceLevelName
    owner: UserRead
    users: list[UserRead]
    documents: list[DocumentSummary]

    @field_validator("service_level", mode="before")
    @classmethod
    def service_level_name(cls, v: object) -> object:
        if isinstance(v, ServiceLevel):
            return v.name
        return v
