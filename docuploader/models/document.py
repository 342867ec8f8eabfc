"""ORM model for uploaded documents."""

from sqlalchemy import Column, ForeignKey, Integer, LargeBinary, String
from sqlalchemy.orm import relationship

from docuploader.models.base import Base


class Document(Base):
    """
    Uploaded file. Content, name and extension never change after creation.

    A document belongs to at most one account; removing it from that
    account deletes the row.
    """

    __tablename__ = "documents"

    id = Column(Integer, primary_key=True, autoincrement=True)
    content = Column(LargeBinary, nullable=False)
    name = Column(String(1024), nullable=False, index=True)
    extension = Column(String(64), nullable=False)
    account_id = Column(
        Integer,
        ForeignKey("accounts.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )

    account = relationship("Account", back_populates="documents")

    def __repr__(self) -> str:
        return f"<Document id={self.id} name={self.name!r}>"
