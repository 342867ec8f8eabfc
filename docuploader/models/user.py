"""ORM model for application users."""

from sqlalchemy import Boolean, Column, Integer, String

from docuploader.models.base import Base


class User(Base):
    """
    Registered user. The e-mail is the login name and is globally unique.

    password holds a bcrypt hash; enabled flips to True once the
    registration e-mail has been confirmed.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password = Column(String(255), nullable=False)
    first_name = Column(String(255), nullable=False)
    last_name = Column(String(255), nullable=False)
    enabled = Column(Boolean, nullable=False, default=False)

    def __repr__(self) -> str:
        return f"<User id={self.id} email={self.email!r}>"
