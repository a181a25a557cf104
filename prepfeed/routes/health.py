from fastapi import APIRouter, Depends, Response
from pydantic import BaseModel
from datetime import datetime
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from sqlalchemy import text
from sqlalchemy.orm import Session
import os
import logging
from .. import __version__
from ..db.database import get_db

logger = logging.getLogger(__name__)
router = APIRouter(tags=["health"])

class HealthResponse(BaseModel):
    status: str
    version: str
    timestamp: str
    environment: str
    database: str

@router.get("/health", response_model=HealthResponse)
async def health_check(db: Session = Depends(get_db)):
    """Basic health check endpoint"""
    environment = "production" if os.getenv("ENV") == "production" else "development"
    try:
        db.execute(text("SELECT 1"))
        database = "ok"
    except Exception as e:
        logger.error(f"Database health check failed: {str(e)}")
        database = "unavailable"

    return HealthResponse(
        status="healthy" if database == "ok" else "degraded",
        version=__version__,
        timestamp=datetime.now().isoformat(),
        environment=environment,
        database=database
    )

@router.get("/metrics", include_in_schema=False)
async def metrics():
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
