"""Standalone document endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status
from sqlalchemy.orm import Session

from docuploader.core.database import get_db
from docuploader.core.exceptions import EntityNotFoundError
from docuploader.models import Document
from docuploader.schemas.document import DocumentCreate, DocumentRead
from docuploader.services import documents

router = APIRouter()


@router.post("", response_model=DocumentRead, status_code=status.HTTP_201_CREATED)
def save_document(
    body: DocumentCreate,
    request: Request,
    response: Response,
    db: Annotated[Session, Depends(get_db)],
) -> Document:
    document = documents.create_document(db, body)
    response.headers["Location"] = f"{str(request.url).rstrip('/')}/{document.id}"
    return document


@router.get("", response_model=DocumentRead)
def get_document(
    db: Annotated[Session, Depends(get_db)],
    document_id: Annotated[int | None, Query(alias="id")] = None,
    document_name: Annotated[str | None, Query(alias="documentName")] = None,
) -> Document:
    """Fetch a document (with base64 content) by id or name."""
    if document_id is not None:
        document = documents.get_document_by_id(db, document_id)
        if document is None:
            raise EntityNotFoundError("Document", id=document_id)
        return document
    if document_name is not None:
        document = documents.get_document_by_name(db, document_name)
        if document is None:
            raise EntityNotFoundError("Document", name=document_name)
        return document
    raise HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail="Either id or documentName must be given.",
    )


@router.delete("/{document_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
def remove_document(
    document_id: int,
    db: Annotated[Session, Depends(get_db)],
) -> Response:
    documents.remove_document(db, document_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
