"""
Registration workflow: create user, role and account together, then ask the
user to confirm their e-mail address.
"""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from docuploader.core.exceptions import EntityCouldNotBeSavedError
from docuploader.models import User
from docuploader.schemas.registration import RegistrationRequest
from docuploader.services import accounts, auth_groups, tokens, users
from docuploader.services.context import RequestContext
from docuploader.services.notifications import NotificationDispatcher, confirmation_email

logger = logging.getLogger(__name__)


def process_registration(
    db: Session,
    registration: RegistrationRequest,
    context: RequestContext,
    dispatcher: NotificationDispatcher,
) -> User:
    """
    Save the user, auth group and account (in that order) plus a confirmation
    token in one transaction, then queue the confirmation e-mail.

    The new user owns the account and is its only member. Any failure rolls
    back all of it; duplicate e-mail or account name raise
    EntityCouldNotBeSavedError.
    """
    try:
        user = users.save_user(db, registration.user)
        auth_groups.save_auth_group(db, registration.auth_group)
        accounts.save_account(
            db,
            registration.account.name,
            registration.account.service_level,
            owner=user,
        )
        confirmation = tokens.create_confirmation_token(db, user)
        token_value = confirmation.token
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise EntityCouldNotBeSavedError(
            "Registration",
            f"the email {registration.user.email} or the account name "
            f"{registration.account.name} is already in use",
        ) from e
    except Exception:
        db.rollback()
        raise

    db.refresh(user)
    logger.info("Registered user id=%s locale=%s", user.id, context.locale)
    dispatcher.submit(confirmation_email(user.email, token_value, context.base_url))
    return user


def activate_account_with_token(db: Session, token: str) -> bool:
    """
    Enable the user owning token and delete the token.

    Returns False when the token is unknown or expired; the user is left
    unchanged and an expired token stays in place for the retention job.
    """
    confirmation = tokens.find_confirmation_token(db, token)
    status = tokens.confirmation_token_status(confirmation)
    tokens.log_token_status("Confirmation", token, status)
    if status is not tokens.TokenStatus.VALID:
        return False

    user = confirmation.user
    user.enabled = True
    tokens.delete_confirmation_token(db, confirmation)
    db.commit()
    logger.info("Activated user id=%s", user.id)
    return True
