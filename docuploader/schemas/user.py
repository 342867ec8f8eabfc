"""Request/response schemas for users."""

from pydantic import EmailStr, Field

from docuploader.schemas.base import CamelModel, NonBlankStr


class UserCreate(CamelModel):
    """User part of a registration payload. The password is hashed before storage."""

    email: EmailStr
    password: str = Field(..., min_length=1, max_length=128, description="Password")
    first_name: NonBlankStr
    last_name: NonBlankStr
    enabled: bool = Field(
        default=False,
        description="Ignored on registration; users start disabled until confirmed.",
    )


class UserUpdate(CamelModel):
    """Replace the password of the user with the given e-mail."""

    email: EmailStr
    password: str = Field(..., min_length=1, max_length=128)


class UserRead(CamelModel):
    """User as returned by the API (no password)."""

    id: int
    email: str
    first_name: str
    last_name: str
    enabled: bool
