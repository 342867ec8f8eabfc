"""SQLAlchemy ORM models."""

from docuploader.models.account import Account, ServiceLevel, account_users
from docuploader.models.auth_group import AuthGroup, Role
from docuploader.models.base import Base
from docuploader.models.document import Document
from docuploader.models.token import ConfirmationToken, PasswordResetToken
from docuploader.models.user import User

__all__ = [
    "Account",
    "AuthGroup",
    "Base",
    "ConfirmationToken",
    "Document",
    "PasswordResetToken",
    "Role",
    "ServiceLevel",
    "User",
    "account_users",
]
