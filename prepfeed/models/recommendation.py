from datetime import datetime
from typing import List
from pydantic import BaseModel, ConfigDict
from sqlalchemy import Column, Integer, String, DateTime, Float, Boolean, Text, ForeignKey, Index
import enum
from ..db.database import Base
from .content import ContentItem

class RecommendationType(str, enum.Enum):
    EXAM_RELEVANT = "exam_relevant"
    WEAK_SUBJECT = "weak_subject"

class RecommendationDB(Base):
    __tablename__ = "current_affairs_recommendations"
    __table_args__ = (
        Index("ix_recommendations_user_score", "user_id", "score", "generated_at"),
    )

    id = Column(Integer, primary_key=True)
    user_id = Column(String(128), nullable=False)
    content_item_id = Column(Integer, ForeignKey("current_affairs.id"), nullable=False)
    recommendation_type = Column(String(32), nullable=False)
    score = Column(Float, nullable=False)
    reason = Column(Text, nullable=False)
    generated_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    viewed = Column(Boolean, default=False, nullable=False)

class Recommendation(BaseModel):
    id: int
    user_id: str
    content_item_id: int
    recommendation_type: RecommendationType
    score: float
    reason: str
    generated_at: datetime
    viewed: bool

    model_config = ConfigDict(from_attributes=True)

class RecommendationWithContent(Recommendation):
    content_item: ContentItem

class RecommendationsResponse(BaseModel):
    recommendations: List[RecommendationWithContent]
    total: int
