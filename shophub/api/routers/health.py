# shophub/api/routers/health.py
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from shophub.data.database import get_db
from shophub.domain.errors import ServiceUnavailable
from shophub.domain.schemas import HealthOut
from shophub.utils.settings import SERVICE_NAME

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthOut)
def health_check(db: Session = Depends(get_db)):
    try:
        db.execute(text("SELECT 1"))
        db_status = "connected"
    except SQLAlchemyError:
        db_status = "disconnected"

    if db_status != "connected":
        raise ServiceUnavailable("Service Unhealthy")

    return HealthOut(
        service=SERVICE_NAME,
        status="healthy",
        timestamp=datetime.now(timezone.utc),
        version="1.0.0",
        database=db_status,
    )
