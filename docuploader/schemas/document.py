"""Request/response schemas for documents. Binary content travels as base64."""

import base64

from pydantic import Base64Bytes, field_serializer, field_validator

from docuploader.schemas.base import CamelModel, NonBlankStr


class DocumentCreate(CamelModel):
    """New document; content is base64-encoded in JSON."""

    content: Base64Bytes
    name: NonBlankStr
    extension: NonBlankStr

    @field_validator("content")
    @classmethod
    def validate_content(cls, v: bytes) -> bytes:
        if not v:
            raise ValueError("must not be empty")
        return v


class DocumentSummary(CamelModel):
    """Document metadata without content, used inside account payloads."""

    id: int
    name: str
    extension: str


class DocumentRead(CamelModel):
    id: int
    name: str
    extension: str
    account_id: int | None = None
    content: bytes

    @field_serializer("content")
    def serialize_content(self, v: bytes) -> str:
        return base64.b64encode(v).decode("ascii")
