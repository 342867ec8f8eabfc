"""User lookups, creation and password updates."""

import logging

from sqlalchemy.orm import Session

from docuploader.core.exceptions import EntityCouldNotBeSavedError, EntityNotFoundError
from docuploader.core.security import hash_password
from docuploader.models import User
from docuploader.schemas.user import UserCreate

logger = logging.getLogger(__name__)

EMAIL_TAKEN = "A user with this email already exists: "


def get_user_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(User.email == email).first()


def get_user_by_id(db: Session, user_id: int) -> User | None:
    return db.get(User, user_id)


def get_user_with_email(db: Session, email: str) -> User:
    """Return the user with email or raise EntityNotFoundError."""
    user = get_user_by_email(db, email)
    if user is None:
        raise EntityNotFoundError("User", email=email)
    return user


def exists_by_email(db: Session, email: str) -> bool:
    return db.query(User.id).filter(User.email == email).first() is not None


def save_user(db: Session, data: UserCreate) -> User:
    """
    Add a new, disabled user with a hashed password. Flushes, does not commit.

    Raises EntityCouldNotBeSavedError if the e-mail is already registered.
    """
    if exists_by_email(db, data.email):
        raise EntityCouldNotBeSavedError("User", EMAIL_TAKEN + data.email)
    user = User(
        email=data.email,
        password=hash_password(data.password),
        first_name=data.first_name,
        last_name=data.last_name,
        enabled=False,
    )
    db.add(user)
    db.flush()
    return user


def update_user(db: Session, email: str, new_password: str) -> User:
    """Replace the password of the user with email. Flushes, does not commit."""
    user = get_user_with_email(db, email)
    user.password = hash_password(new_password)
    db.flush()
    return user


def is_enabled_by_email(db: Session, email: str) -> bool:
    return bool(get_user_with_email(db, email).enabled)


def change_user_password(db: Session, email: str, new_password: str) -> User:
    """Replace a user's password and commit."""
    try:
        user = update_user(db, email, new_password)
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(user)
    return user
