"""Health check endpoint: database connectivity and notification worker state."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from docuploader.core.config import settings
from docuploader.core.database import check_db_connected, get_db
from docuploader.schemas.health import HealthResponse
from docuploader.services.notifications import NotificationDispatcher, get_dispatcher

router = APIRouter()


@router.get("/", response_model=HealthResponse)
def get_health(
    db: Annotated[Session, Depends(get_db)],
    dispatcher: Annotated[NotificationDispatcher, Depends(get_dispatcher)],
) -> HealthResponse:
    """
    Return service health status, database connectivity and whether the
    e-mail worker is running. Used by load balancers and monitoring.
    """
    return HealthResponse(
        status="ok",
        environment=settings.APP_ENV,
        database="connected" if check_db_connected(db) else "disconnected",
        notifications="running" if dispatcher.running else "stopped",
    )
