"""Password-reset workflow: issue a token by e-mail, validate it, consume it."""

import logging

from sqlalchemy.orm import Session

from docuploader.core.exceptions import EntityNotFoundError, InvalidTokenError
from docuploader.core.security import hash_password
from docuploader.services import tokens, users
from docuploader.services.context import RequestContext
from docuploader.services.notifications import NotificationDispatcher, password_reset_email

logger = logging.getLogger(__name__)

TOKEN_ENTITY = "PasswordResetToken"


def request_password_reset(
    db: Session,
    email: str,
    context: RequestContext,
    dispatcher: NotificationDispatcher,
) -> None:
    """
    Create a new reset token for the user with email and queue the e-mail.

    Raises EntityNotFoundError for an unknown e-mail. Earlier tokens remain valid.
    """
    user = users.get_user_with_email(db, email)
    try:
        reset_token = tokens.create_password_reset_token(db, user)
        token_value = reset_token.token
        db.commit()
    except Exception:
        db.rollback()
        raise
    logger.info("Password reset requested for user id=%s", user.id)
    dispatcher.submit(password_reset_email(email, token_value, context.base_url))


def is_valid_password_reset_token(db: Session, token: str) -> bool:
    """True if the token exists and has not expired. Whether it was used is not checked."""
    reset_token = tokens.find_password_reset_token(db, token)
    status = tokens.password_reset_token_status(reset_token)
    tokens.log_token_status("Password reset", token, status)
    return status in (tokens.TokenStatus.VALID, tokens.TokenStatus.ALREADY_USED)


def change_password(db: Session, email: str, new_password: str, token: str) -> None:
    """
    Set a new password using a reset token and mark the token used.

    Raises EntityNotFoundError for an unknown token and InvalidTokenError when
    it is expired, already used, or issued to a different e-mail.
    """
    reset_token = tokens.find_password_reset_token(db, token)
    status = tokens.password_reset_token_status(reset_token)
    tokens.log_token_status("Password reset", token, status)
    if status is tokens.TokenStatus.NOT_FOUND:
        raise EntityNotFoundError(TOKEN_ENTITY, token=token)

    user = reset_token.user
    if status is not tokens.TokenStatus.VALID or user.email != email:
        if status is tokens.TokenStatus.VALID:
            logger.warning("Password reset token used with mismatched e-mail: token=%s", token)
        raise InvalidTokenError(TOKEN_ENTITY, token)

    try:
        user.password = hash_password(new_password)
        tokens.mark_used(db, reset_token)
        db.commit()
    except Exception:
        db.rollback()
        raise
    logger.info("Password changed for user id=%s", user.id)
