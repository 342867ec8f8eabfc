"""Auth group lookup endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from docuploader.core.database import get_db
from docuploader.models import AuthGroup
from docuploader.schemas.auth_group import AuthGroupRead
from docuploader.services.auth_groups import get_auth_groups_by_username

router = APIRouter()


@router.get("", response_model=list[AuthGroupRead])
def find_auth_groups_by_username(
    username: Annotated[str, Query(min_length=1)],
    db: Annotated[Session, Depends(get_db)],
) -> list[AuthGroup]:
    """Every role held by username (possibly none)."""
    return get_auth_groups_by_username(db, username)
