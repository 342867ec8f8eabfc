"""ORM model for accounts, their service level, members and documents."""

import enum
from decimal import Decimal

from sqlalchemy import (
    Column,
    DateTime,
    Enum,
    ForeignKey,
    Integer,
    String,
    Table,
    func,
)
from sqlalchemy.orm import relationship

from docuploader.models.base import Base


class ServiceLevel(enum.Enum):
    """
    Account tier. The quota attributes are advisory metadata; nothing enforces them.

    -1 means unlimited.
    """

    BRONZE = ("Bronze", Decimal("0"), 2, 2, 1, True)
    SILVER = ("Silver", Decimal("1"), 5, 10, 1, True)
    GOLD = ("Gold", Decimal("2"), 20, 50, 2, False)
    UNLIMITED = ("Unlimited", Decimal("5"), -1, -1, 10, False)
    ENTERPRISE = ("Enterprise", Decimal("15"), -1, -1, 200, False)

    def __init__(
        self,
        display_name: str,
        price: Decimal,
        max_uploads: int,
        max_uploads_per_month: int,
        max_users: int,
        ads: bool,
    ) -> None:
        self.display_name = display_name
        self.price = price
        self.max_uploads = max_uploads
        self.max_uploads_per_month = max_uploads_per_month
        self.max_users = max_users
        self.ads = ads

    def __str__(self) -> str:
        return self.display_name


account_users = Table(
    "account_users",
    Base.metadata,
    Column(
        "account_id",
        Integer,
        ForeignKey("accounts.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "user_id",
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)


class Account(Base):
    """
    Named account owned by one user, shared with its members.

    version is an optimistic-lock counter: concurrent writers to the same
    account fail with StaleDataError instead of overwriting each other.
    """

    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False, unique=True, index=True)
    owner_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    service_level = Column(
        Enum(ServiceLevel, native_enum=False, length=32),
        nullable=False,
    )
    version = Column(Integer, nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    owner = relationship("User", foreign_keys=[owner_id])
    users = relationship("User", secondary=account_users, order_by="User.id")
    documents = relationship(
        "Document",
        back_populates="account",
        cascade="all, delete-orphan",
        order_by="Document.id",
    )

    __mapper_args__ = {"version_id_col": version}

    def __repr__(self) -> str:
        return f"<Account id={self.id} name={self.name!r}>"
