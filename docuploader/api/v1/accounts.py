"""Account endpoints, including document and member changes on an account."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status
from sqlalchemy.orm import Session

from docuploader.api.v1.deps import get_request_context
from docuploader.core.database import get_db
from docuploader.core.exceptions import EntityNotFoundError
from docuploader.models import Account
from docuploader.schemas.account import AccountCreate, AccountRead, AccountUpdate
from docuploader.schemas.document import DocumentCreate
from docuploader.services import accounts
from docuploader.services.context import RequestContext
from docuploader.services.notifications import NotificationDispatcher, get_dispatcher

router = APIRouter()


@router.post("", response_model=AccountRead, status_code=status.HTTP_201_CREATED)
def create_account(
    body: AccountCreate,
    request: Request,
    response: Response,
    db: Annotated[Session, Depends(get_db)],
) -> Account:
    """Create an account for an existing user, who becomes owner and first member."""
    account = accounts.create_account(db, body)
    response.headers["Location"] = f"{str(request.url).rstrip('/')}/{account.id}"
    return account


@router.put("", response_model=AccountRead)
def update_account(
    body: AccountUpdate,
    db: Annotated[Session, Depends(get_db)],
) -> Account:
    """Rename an account or change its service level."""
    return accounts.update_account(db, body)


@router.get("", response_model=AccountRead | list[AccountRead])
def get_account(
    db: Annotated[Session, Depends(get_db)],
    account_id: Annotated[int | None, Query(alias="id")] = None,
    name: str | None = None,
    owner_id: Annotated[int | None, Query(alias="ownerId")] = None,
    user_id: Annotated[int | None, Query(alias="userId")] = None,
) -> Account | list[Account]:
    """
    Look accounts up by one of: id, name, ownerId (single account) or userId
    (every account the user is a member of).
    """
    if account_id is not None:
        account = accounts.get_account_by_id(db, account_id)
        if account is None:
            raise EntityNotFoundError("Account", id=account_id)
        return account
    if name is not None:
        account = accounts.get_account_by_name(db, name)
        if account is None:
            raise EntityNotFoundError("Account", name=name)
        return account
    if owner_id is not None:
        account = accounts.get_account_by_owner_id(db, owner_id)
        if account is None:
            raise EntityNotFoundError("Account", ownerId=owner_id)
        return account
    if user_id is not None:
        return accounts.get_accounts_by_user_id(db, user_id)
    raise HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail="One of id, name, ownerId or userId must be given.",
    )


@router.put("/{account_id}/documents", response_model=AccountRead)
def add_document_to_account(
    account_id: int,
    body: DocumentCreate,
    db: Annotated[Session, Depends(get_db)],
    context: Annotated[RequestContext, Depends(get_request_context)],
    dispatcher: Annotated[NotificationDispatcher, Depends(get_dispatcher)],
) -> Account:
    """Upload a document onto the account; every member is notified by e-mail."""
    return accounts.add_document_to_account(db, body, account_id, dispatcher, context)


@router.delete("/{account_id}/documents", response_model=AccountRead)
def remove_document_from_account(
    account_id: int,
    document_name: Annotated[str, Query(alias="documentName", min_length=1)],
    db: Annotated[Session, Depends(get_db)],
    context: Annotated[RequestContext, Depends(get_request_context)],
    dispatcher: Annotated[NotificationDispatcher, Depends(get_dispatcher)],
) -> Account:
    """Delete the named document from the account; every member is notified by e-mail."""
    return accounts.remove_document_from_account(db, document_name, account_id, dispatcher, context)


@router.put("/{account_id}/users", response_model=AccountRead)
def add_user_to_account(
    account_id: int,
    email: Annotated[str, Query(min_length=3)],
    db: Annotated[Session, Depends(get_db)],
) -> Account:
    return accounts.add_user_to_account(db, account_id, email)


@router.delete("/{account_id}/users", response_model=AccountRead)
def remove_user_from_account(
    account_id: int,
    email: Annotated[str, Query(min_length=3)],
    db: Annotated[Session, Depends(get_db)],
) -> Account:
    return accounts.remove_user_from_account(db, account_id, email)
