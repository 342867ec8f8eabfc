"""
Account service: creation, lookups, and document/member set changes.

Changes to an account's documents or members run under optimistic locking:
the account row carries a version counter, a concurrent writer makes the
commit fail with StaleDataError, and the whole read-modify-write is retried
from a fresh read up to ACCOUNT_UPDATE_MAX_ATTEMPTS times.
"""

import logging
from collections.abc import Callable
from datetime import UTC, datetime
from typing import TYPE_CHECKING, TypeVar

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from docuploader.core.config import get_settings
from docuploader.core.exceptions import EntityCouldNotBeSavedError, EntityNotFoundError
from docuploader.models import Account, ServiceLevel, User, account_users
from docuploader.schemas.account import AccountCreate, AccountUpdate
from docuploader.schemas.document import DocumentCreate
from docuploader.services import documents, users
from docuploader.services.context import RequestContext
from docuploader.services.notifications import NotificationDispatcher, document_event_emails

if TYPE_CHECKING:
    from docuploader.core.config import Settings

logger = logging.getLogger(__name__)

T = TypeVar("T")

NAME_TAKEN = "An account with this name already exists: "
DOCUMENT_ON_ACCOUNT = "A document with this name is already on the account: "
USER_ON_ACCOUNT = "The user is already a member of the account: "
OWNER_NOT_REMOVABLE = "The owner cannot be removed from the account: "


def get_account_by_id(db: Session, account_id: int) -> Account | None:
    return db.get(Account, account_id)


def get_account_by_name(db: Session, name: str) -> Account | None:
    return db.query(Account).filter(Account.name == name).first()


def get_account_by_owner_id(db: Session, owner_id: int) -> Account | None:
    return db.query(Account).filter(Account.owner_id == owner_id).order_by(Account.id).first()


def get_accounts_by_user_id(db: Session, user_id: int) -> list[Account]:
    return (
        db.query(Account)
        .join(account_users, account_users.c.account_id == Account.id)
        .filter(account_users.c.user_id == user_id)
        .order_by(Account.id)
        .all()
    )


def get_account(db: Session, account_id: int) -> Account:
    """Return the account with account_id or raise EntityNotFoundError."""
    account = get_account_by_id(db, account_id)
    if account is None:
        raise EntityNotFoundError("Account", id=account_id)
    return account


def exists_by_name(db: Session, name: str) -> bool:
    return db.query(Account.id).filter(Account.name == name).first() is not None


def save_account(db: Session, name: str, service_level: str, owner: User) -> Account:
    """
    Add an account owned by owner, with owner as its only member. Flushes, does not commit.

    Raises EntityCouldNotBeSavedError if the name is taken.
    """
    if exists_by_name(db, name):
        raise EntityCouldNotBeSavedError("Account", NAME_TAKEN + name)
    account = Account(
        name=name,
        service_level=ServiceLevel[service_level],
        owner=owner,
        users=[owner],
        documents=[],
    )
    db.add(account)
    db.flush()
    return account


def create_account(db: Session, data: AccountCreate) -> Account:
    """Create and commit a standalone account for an existing owner."""
    owner = users.get_user_by_id(db, data.owner_id)
    if owner is None:
        raise EntityNotFoundError("User", id=data.owner_id)
    try:
        account = save_account(db, data.name, data.service_level, owner)
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise EntityCouldNotBeSavedError("Account", NAME_TAKEN + data.name) from e
    except Exception:
        db.rollback()
        raise
    db.refresh(account)
    return account


def _update_with_retry(
    db: Session,
    account_id: int,
    mutate: Callable[[Account], T],
    settings: "Settings | None" = None,
) -> tuple[Account, T]:
    """
    Load the account, apply mutate, bump the version and commit.

    On a version conflict the session is rolled back and the whole sequence
    is repeated. Domain errors raised by mutate roll back and propagate.
    """
    settings = settings or get_settings()
    attempts = settings.ACCOUNT_UPDATE_MAX_ATTEMPTS
    for attempt in range(1, attempts + 1):
        try:
            account = get_account(db, account_id)
            result = mutate(account)
            account.updated_at = datetime.now(UTC)
            db.commit()
        except StaleDataError:
            db.rollback()
            logger.warning(
                "Concurrent update on account id=%s (attempt %s/%s); retrying",
                account_id,
                attempt,
                attempts,
            )
            continue
        except Exception:
            db.rollback()
            raise
        return account, result
    raise EntityCouldNotBeSavedError(
        "Account",
        f"it was modified concurrently {attempts} times in a row; try again",
    )


def update_account(db: Session, data: AccountUpdate) -> Account:
    """Rename an account or change its service level."""

    def mutate(account: Account) -> None:
        if account.name != data.name and exists_by_name(db, data.name):
            raise EntityCouldNotBeSavedError("Account", NAME_TAKEN + data.name)
        account.name = data.name
        account.service_level = ServiceLevel[data.service_level]

    if get_account_by_id(db, data.id) is None:
        raise EntityNotFoundError("Account", account=data.id)
    try:
        account, _ = _update_with_retry(db, data.id, mutate)
    except IntegrityError as e:
        raise EntityCouldNotBeSavedError("Account", NAME_TAKEN + data.name) from e
    return account


def add_document_to_account(
    db: Session,
    data: DocumentCreate,
    account_id: int,
    dispatcher: NotificationDispatcher,
    context: RequestContext,
) -> Account:
    """
    Upload data as a new document on the account and notify every member.

    Raises EntityNotFoundError for an unknown account and
    EntityCouldNotBeSavedError if a document with the same name is already on it.
    """

    def mutate(account: Account) -> str:
        if any(doc.name == data.name for doc in account.documents):
            raise EntityCouldNotBeSavedError("Document", DOCUMENT_ON_ACCOUNT + data.name)
        document = documents.upload_document(db, data)
        account.documents.append(document)
        return document.name

    account, document_name = _update_with_retry(db, account_id, mutate)
    logger.info("Document %r added to account id=%s", document_name, account_id)
    dispatcher.submit_all(
        document_event_emails(document_name, account, True, context.base_url)
    )
    return account


def remove_document_from_account(
    db: Session,
    document_name: str,
    account_id: int,
    dispatcher: NotificationDispatcher,
    context: RequestContext,
) -> Account:
    """
    Delete the named document from the account and notify every member.

    Raises EntityNotFoundError if the account or the document on it is missing.
    """

    def mutate(account: Account) -> str:
        document = next((doc for doc in account.documents if doc.name == document_name), None)
        if document is None:
            raise EntityNotFoundError("Document", name=document_name)
        account.documents.remove(document)
        documents.delete_document(db, document)
        return document_name

    account, removed_name = _update_with_retry(db, account_id, mutate)
    logger.info("Document %r removed from account id=%s", removed_name, account_id)
    # Built from the committed account so recipients reflect its current members.
    dispatcher.submit_all(
        document_event_emails(removed_name, account, False, context.base_url)
    )
    return account


def add_user_to_account(db: Session, account_id: int, email: str) -> Account:
    """Add the user with email as a member of the account."""
    get_account(db, account_id)
    user = users.get_user_with_email(db, email)

    def mutate(account: Account) -> None:
        if any(member.id == user.id for member in account.users):
            raise EntityCouldNotBeSavedError("Account", USER_ON_ACCOUNT + email)
        account.users.append(user)

    account, _ = _update_with_retry(db, account_id, mutate)
    return account


def remove_user_from_account(db: Session, account_id: int, email: str) -> Account:
    """Remove a member from the account. The owner always stays a member."""
    get_account(db, account_id)
    user = users.get_user_with_email(db, email)

    def mutate(account: Account) -> None:
        if account.owner_id == user.id:
            raise EntityCouldNotBeSavedError("Account", OWNER_NOT_REMOVABLE + email)
        member = next((m for m in account.users if m.id == user.id), None)
        if member is None:
            raise EntityNotFoundError("User", email=email, account=account_id)
        account.users.remove(member)

    account, _ = _update_with_retry(db, account_id, mutate)
    return account
