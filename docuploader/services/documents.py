"""Document store: create, look up and delete documents."""

from sqlalchemy.orm import Session

from docuploader.core.exceptions import EntityNotFoundError
from docuploader.models import Document
from docuploader.schemas.document import DocumentCreate


def upload_document(db: Session, data: DocumentCreate) -> Document:
    """Add a new document. Flushes, does not commit."""
    document = Document(content=data.content, name=data.name, extension=data.extension)
    db.add(document)
    db.flush()
    return document


def get_document_by_id(db: Session, document_id: int) -> Document | None:
    return db.get(Document, document_id)


def get_document_by_name(db: Session, name: str) -> Document | None:
    return db.query(Document).filter(Document.name == name).order_by(Document.id).first()


def delete_document(db: Session, document: Document) -> None:
    db.delete(document)
    db.flush()


def delete_document_by_id(db: Session, document_id: int) -> None:
    """Delete a document by id or raise EntityNotFoundError. Flushes, does not commit."""
    document = get_document_by_id(db, document_id)
    if document is None:
        raise EntityNotFoundError("Document", id=document_id)
    delete_document(db, document)


def create_document(db: Session, data: DocumentCreate) -> Document:
    """Store a standalone document and commit."""
    try:
        document = upload_document(db, data)
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(document)
    return document


def remove_document(db: Session, document_id: int) -> None:
    """Delete a document by id and commit. Raises EntityNotFoundError if absent."""
    try:
        delete_document_by_id(db, document_id)
        db.commit()
    except Exception:
        db.rollback()
        raise
