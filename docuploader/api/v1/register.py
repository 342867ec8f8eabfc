"""Registration and e-mail confirmation endpoints."""

from typing import Annotated

from fastapi import APIRouter, Body, Depends, Response, status
from sqlalchemy.orm import Session

from docuploader.api.v1.deps import get_request_context
from docuploader.core.database import get_db
from docuploader.schemas.registration import RegistrationRequest
from docuploader.services.context import RequestContext
from docuploader.services.notifications import NotificationDispatcher, get_dispatcher
from docuploader.services.registration import (
    activate_account_with_token,
    process_registration,
)

router = APIRouter()


@router.post("", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
def register(
    body: RegistrationRequest,
    db: Annotated[Session, Depends(get_db)],
    context: Annotated[RequestContext, Depends(get_request_context)],
    dispatcher: Annotated[NotificationDispatcher, Depends(get_dispatcher)],
) -> Response:
    """
    Register a new user together with their account and role.

    A confirmation e-mail is queued; the user stays disabled until the token
    from that e-mail is confirmed.
    """
    process_registration(db, body, context, dispatcher)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch("/confirm", response_model=bool)
def confirm_registration(
    token: Annotated[str, Body(min_length=1)],
    db: Annotated[Session, Depends(get_db)],
) -> bool:
    """Activate the account for a confirmation token. False if unknown or expired."""
    return activate_account_with_token(db, token)
