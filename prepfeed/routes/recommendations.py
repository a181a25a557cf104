from fastapi import APIRouter, Depends, Query, Request
from typing import List, Optional
from pydantic import BaseModel
from datetime import timedelta
import logging
from sqlalchemy.orm import Session
from ..core.auth import get_current_user_id
from ..core.config import settings
from ..db.database import get_db
from ..middleware.rate_limit import limiter
from ..models.content import ContentItem
from ..models.recommendation import (
    Recommendation,
    RecommendationWithContent,
    RecommendationsResponse,
)
from ..services.recommendation_feed import RecommendationFeed
from ..services.recommendation_generator import RecommendationGenerator

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/current-affairs/recommendations", tags=["recommendations"])

class GenerateResponse(BaseModel):
    generated: int
    recommendations: List[Recommendation]

class PruneResponse(BaseModel):
    deleted: int

@router.get("", response_model=RecommendationsResponse)
async def get_recommendations(
    limit: Optional[int] = Query(None, ge=1, le=100),
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """
    Personalised current affairs for the caller, best first.
    A caller without any recommendations gets them generated on the spot.
    """
    rows = RecommendationFeed(db).get(user_id, limit=limit)
    recommendations = [
        RecommendationWithContent(
            **Recommendation.model_validate(recommendation).model_dump(),
            content_item=ContentItem.model_validate(item)
        )
        for recommendation, item in rows
    ]
    return RecommendationsResponse(recommendations=recommendations, total=len(recommendations))

@router.post("/generate", response_model=GenerateResponse)
@limiter.limit(settings.API_RATE_LIMIT)
async def generate_recommendations(
    request: Request,
    limit: Optional[int] = Query(None, ge=1, le=100),
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """Run a generation pass now. Earlier recommendations are kept."""
    rows = RecommendationGenerator(db).generate(user_id, limit=limit)
    return GenerateResponse(
        generated=len(rows),
        recommendations=[Recommendation.model_validate(row) for row in rows]
    )

@router.post("/{recommendation_id}/viewed", response_model=Recommendation)
async def mark_recommendation_viewed(
    recommendation_id: int,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    return RecommendationFeed(db).mark_viewed(user_id, recommendation_id)

@router.delete("", response_model=PruneResponse)
async def prune_recommendations(
    older_than_days: int = Query(30, ge=0, le=3650),
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    deleted = RecommendationFeed(db).prune_older_than(user_id, timedelta(days=older_than_days))
    return PruneResponse(deleted=deleted)
