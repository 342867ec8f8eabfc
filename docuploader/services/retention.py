"""Data retention: delete expired confirmation tokens and spent password-reset tokens."""

import logging
from datetime import UTC, datetime, time
from typing import TYPE_CHECKING

from sqlalchemy import or_
from sqlalchemy.orm import Session

from docuploader.models import ConfirmationToken, PasswordResetToken

if TYPE_CHECKING:
    from docuploader.core.config import Settings

logger = logging.getLogger(__name__)


def run_token_retention(
    session: Session,
    settings: "Settings",
    now: datetime | None = None,
) -> tuple[int, int]:
    """
    Delete confirmation tokens past their expiry and password-reset tokens that
    are used or expired (expiry day before today, UTC).

    Returns (confirmation_tokens_deleted, password_reset_tokens_deleted).
    Idempotent: safe to run repeatedly.
    """
    if not settings.TOKEN_RETENTION_ENABLED:
        logger.info("Token retention is disabled (TOKEN_RETENTION_ENABLED=false); skipping.")
        return (0, 0)

    now = now or datetime.now(UTC)
    start_of_today = datetime.combine(now.date(), time.min, tzinfo=UTC)

    confirmation_deleted = (
        session.query(ConfirmationToken)
        .filter(ConfirmationToken.expiry_date <= now)
        .delete(synchronize_session=False)
    )
    reset_deleted = (
        session.query(PasswordResetToken)
        .filter(
            or_(
                PasswordResetToken.used.is_(True),
                PasswordResetToken.expiry_date < start_of_today,
            )
        )
        .delete(synchronize_session=False)
    )
    session.commit()

    if confirmation_deleted or reset_deleted:
        logger.info(
            "Token retention run: now=%s, confirmation_tokens_deleted=%s, password_reset_tokens_deleted=%s",
            now.isoformat(),
            confirmation_deleted,
            reset_deleted,
        )
    return (confirmation_deleted, reset_deleted)
