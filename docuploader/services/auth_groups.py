"""Role assignments keyed by username."""

from sqlalchemy.orm import Session

from docuploader.models import AuthGroup
from docuploader.schemas.auth_group import AuthGroupCreate


def get_auth_groups_by_username(db: Session, username: str) -> list[AuthGroup]:
    return (
        db.query(AuthGroup)
        .filter(AuthGroup.username == username)
        .order_by(AuthGroup.id)
        .all()
    )


def save_auth_group(db: Session, data: AuthGroupCreate) -> AuthGroup:
    """Add a role for data.username. Flushes, does not commit."""
    group = AuthGroup(username=data.username, role=data.role)
    db.add(group)
    db.flush()
    return group
