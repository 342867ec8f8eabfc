"""ORM models for confirmation and password-reset tokens."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from docuploader.models.base import Base


class ConfirmationToken(Base):
    """One-time token proving control of the registration e-mail (1:1 with user)."""

    __tablename__ = "confirmation_tokens"

    id = Column(Integer, primary_key=True, autoincrement=True)
    token = Column(String(64), nullable=False, unique=True, index=True)
    expiry_date = Column(DateTime(timezone=True), nullable=False)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, unique=True)

    user = relationship("User")


class PasswordResetToken(Base):
    """
    One-time token authorizing a password change.

    Several may exist for one user; each stays valid until used or expired.
    Used tokens are kept (used=True), not deleted.
    """

    __tablename__ = "password_reset_tokens"

    id = Column(Integer, primary_key=True, autoincrement=True)
    token = Column(String(64), nullable=False, unique=True, index=True)
    expiry_date = Column(DateTime(timezone=True), nullable=False)
    used = Column(Boolean, nullable=False, default=False)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    user = relationship("User")
