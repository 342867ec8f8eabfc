"""Token store: confirmation and password-reset tokens with expiry checks."""

import enum
import logging
import uuid
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING

from sqlalchemy.orm import Session

from docuploader.core.config import get_settings
from docuploader.models import ConfirmationToken, PasswordResetToken, User
from docuploader.models.base import as_utc

if TYPE_CHECKING:
    from docuploader.core.config import Settings

logger = logging.getLogger(__name__)


class TokenStatus(str, enum.Enum):
    """Outcome of looking a token up. Kept internal; APIs expose booleans or errors."""

    VALID = "valid"
    NOT_FOUND = "not_found"
    EXPIRED = "expired"
    ALREADY_USED = "already_used"


def _now() -> datetime:
    return datetime.now(UTC)


def _new_token_value() -> str:
    return str(uuid.uuid4())


def create_confirmation_token(
    db: Session,
    user: User,
    settings: "Settings | None" = None,
) -> ConfirmationToken:
    """Add a confirmation token for user expiring after the configured TTL. Flushes, does not commit."""
    settings = settings or get_settings()
    token = ConfirmationToken(
        token=_new_token_value(),
        expiry_date=_now() + timedelta(minutes=settings.CONFIRMATION_TOKEN_TTL_MINUTES),
        user=user,
    )
    db.add(token)
    db.flush()
    return token


def find_confirmation_token(db: Session, token: str) -> ConfirmationToken | None:
    return db.query(ConfirmationToken).filter(ConfirmationToken.token == token).first()


def delete_confirmation_token(db: Session, token: ConfirmationToken) -> None:
    db.delete(token)
    db.flush()


def is_confirmation_token_expired(token: ConfirmationToken, now: datetime | None = None) -> bool:
    """Exact-timestamp check: expired as soon as expiry_date - now <= 0."""
    now = now or _now()
    return (as_utc(token.expiry_date) - now).total_seconds() <= 0


def confirmation_token_status(
    token: ConfirmationToken | None,
    now: datetime | None = None,
) -> TokenStatus:
    if token is None:
        return TokenStatus.NOT_FOUND
    if is_confirmation_token_expired(token, now):
        return TokenStatus.EXPIRED
    return TokenStatus.VALID


def create_password_reset_token(
    db: Session,
    user: User,
    settings: "Settings | None" = None,
) -> PasswordResetToken:
    """
    Add a new password-reset token for user. Flushes, does not commit.

    Earlier outstanding tokens for the same user are left untouched.
    """
    settings = settings or get_settings()
    token = PasswordResetToken(
        token=_new_token_value(),
        expiry_date=_now() + timedelta(minutes=settings.PASSWORD_RESET_TOKEN_TTL_MINUTES),
        used=False,
        user=user,
    )
    db.add(token)
    db.flush()
    return token


def find_password_reset_token(db: Session, token: str) -> PasswordResetToken | None:
    return db.query(PasswordResetToken).filter(PasswordResetToken.token == token).first()


def mark_used(db: Session, token: PasswordResetToken) -> None:
    token.used = True
    db.flush()


def is_password_reset_token_expired(token: PasswordResetToken, now: datetime | None = None) -> bool:
    """
    Calendar-day check: expired once today (UTC) is at least one day after the
    expiry date's day. A token stays usable for the rest of its expiry day.
    """
    now = now or _now()
    expiry_day = as_utc(token.expiry_date).date()
    return (now.date() - expiry_day).days >= 1


def password_reset_token_status(
    token: PasswordResetToken | None,
    now: datetime | None = None,
) -> TokenStatus:
    if token is None:
        return TokenStatus.NOT_FOUND
    if is_password_reset_token_expired(token, now):
        return TokenStatus.EXPIRED
    if token.used:
        return TokenStatus.ALREADY_USED
    return TokenStatus.VALID


def log_token_status(kind: str, token: str, status: TokenStatus) -> None:
    """Record why a token was rejected; valid tokens are not logged."""
    if status is not TokenStatus.VALID:
        logger.info("%s token rejected: status=%s token=%s", kind, status.value, token)
