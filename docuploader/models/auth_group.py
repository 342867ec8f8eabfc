"""ORM model for role assignments, keyed by username rather than user id."""

import enum

from sqlalchemy import Column, Enum, Integer, String

from docuploader.models.base import Base


class Role(str, enum.Enum):
    ROLE_USER = "ROLE_USER"
    ROLE_ADMIN = "ROLE_ADMIN"


class AuthGroup(Base):
    """
    One role held by a username (an e-mail). A user may have several rows.

    username is intentionally not a foreign key to users.email.
    """

    __tablename__ = "auth_groups"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(255), nullable=False, index=True)
    role = Column(Enum(Role, native_enum=False, length=32), nullable=False)
