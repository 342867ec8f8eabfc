"""User endpoints: lookup, password update, enabled check and password reset."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from pydantic import EmailStr
from sqlalchemy.orm import Session

from docuploader.api.v1.auth import get_current_user
from docuploader.api.v1.deps import get_request_context
from docuploader.core.database import get_db
from docuploader.core.exceptions import EntityNotFoundError
from docuploader.models import User
from docuploader.schemas.user import UserRead, UserUpdate
from docuploader.services import password_reset, users
from docuploader.services.context import RequestContext
from docuploader.services.notifications import NotificationDispatcher, get_dispatcher

router = APIRouter()


@router.get("", response_model=UserRead)
def get_user(
    db: Annotated[Session, Depends(get_db)],
    email: str | None = None,
    user_id: Annotated[int | None, Query(alias="id")] = None,
) -> User:
    """Look a user up by email or id."""
    if email is not None:
        user = users.get_user_by_email(db, email)
        if user is None:
            raise EntityNotFoundError("User", email=email)
        return user
    if user_id is not None:
        user = users.get_user_by_id(db, user_id)
        if user is None:
            raise EntityNotFoundError("User", id=user_id)
        return user
    raise HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail="Either email or id must be given.",
    )


@router.put("", response_model=UserRead)
def update_user(
    body: UserUpdate,
    db: Annotated[Session, Depends(get_db)],
) -> User:
    """Replace the password of the user with the given e-mail."""
    return users.change_user_password(db, body.email, body.password)


@router.get("/me", response_model=UserRead)
def read_current_user(
    current_user: Annotated[User, Depends(get_current_user)],
) -> User:
    """The user identified by the Bearer token."""
    return current_user


@router.get("/reset-password/token", response_model=bool)
def is_valid_password_reset_token(
    db: Annotated[Session, Depends(get_db)],
    token: Annotated[str, Query(min_length=1)],
) -> bool:
    """True if the reset token exists and has not expired."""
    return password_reset.is_valid_password_reset_token(db, token)


@router.post(
    "/reset-password",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
def change_password(
    db: Annotated[Session, Depends(get_db)],
    email: Annotated[EmailStr, Query()],
    new_password: Annotated[str, Query(alias="newPassword", min_length=1, max_length=128)],
    token: Annotated[str, Query(min_length=1)],
) -> Response:
    """Set a new password using a reset token; each token works once."""
    password_reset.change_password(db, email, new_password, token)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{email}/is-enabled", response_model=bool)
def is_enabled(
    email: str,
    db: Annotated[Session, Depends(get_db)],
) -> bool:
    return users.is_enabled_by_email(db, email)


@router.post(
    "/{email}/reset-password",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
def request_password_reset(
    email: str,
    db: Annotated[Session, Depends(get_db)],
    context: Annotated[RequestContext, Depends(get_request_context)],
    dispatcher: Annotated[NotificationDispatcher, Depends(get_dispatcher)],
) -> Response:
    """Queue an e-mail with a password-reset link for the user with this e-mail."""
    password_reset.request_password_reset(db, email, context, dispatcher)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
