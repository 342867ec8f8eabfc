"""Request/response schemas for auth groups (username → role)."""

from pydantic import EmailStr

from docuploader.models.auth_group import Role
from docuploader.schemas.base import CamelModel


class AuthGroupCreate(CamelModel):
    username: EmailStr
    role: Role


class AuthGroupRead(CamelModel):
    id: int
    username: str
    role: Role
