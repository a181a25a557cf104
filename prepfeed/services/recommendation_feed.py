from datetime import datetime, timedelta
from typing import List, Optional, Tuple
import logging
from sqlalchemy.orm import Session
from ..core.config import settings
from ..core.errors import ForbiddenError, NotFoundError, ValidationError
from ..core.monitoring import FEED_COLD_STARTS
from ..models.content import ContentItemDB
from ..models.recommendation import RecommendationDB
from .recommendation_generator import RecommendationGenerator

logger = logging.getLogger(__name__)

class RecommendationFeed:
    def __init__(self, db: Session, generator: Optional[RecommendationGenerator] = None):
        self.db = db
        self.generator = generator or RecommendationGenerator(db)

    def _has_any(self, user_id: str) -> bool:
        return (
            self.db.query(RecommendationDB.id)
            .filter(RecommendationDB.user_id == user_id)
            .first()
        ) is not None

    def _read(self, user_id: str, limit: int) -> List[Tuple[RecommendationDB, ContentItemDB]]:
        # Inner join skips rows whose article no longer exists
        return (
            self.db.query(RecommendationDB, ContentItemDB)
            .join(ContentItemDB, ContentItemDB.id == RecommendationDB.content_item_id)
            .filter(RecommendationDB.user_id == user_id)
            .order_by(
                RecommendationDB.score.desc(),
                RecommendationDB.generated_at.desc(),
                RecommendationDB.id.desc(),
            )
            .limit(limit)
            .all()
        )

    def get(self, user_id: str, limit: Optional[int] = None) -> List[Tuple[RecommendationDB, ContentItemDB]]:
        """Recommendations with their articles, best first.

        A user with no recommendation rows at all gets one synchronous
        generation run before the read.
        """
        limit = settings.RECOMMENDATION_DEFAULT_LIMIT if limit is None else limit
        if limit < 1:
            raise ValidationError("limit must be a positive integer", field="limit")

        if not self._has_any(user_id):
            FEED_COLD_STARTS.inc()
            logger.info(f"Cold start for {user_id}, generating recommendations")
            self.generator.generate(user_id, limit=limit)

        return self._read(user_id, limit)

    def mark_viewed(self, user_id: str, recommendation_id: int) -> RecommendationDB:
        recommendation = self.db.get(RecommendationDB, recommendation_id)
        if recommendation is None:
            raise NotFoundError("Recommendation", recommendation_id)
        if recommendation.user_id != user_id:
            raise ForbiddenError("Recommendation", recommendation_id)
        if not recommendation.viewed:
            recommendation.viewed = True
            self.db.commit()
            self.db.refresh(recommendation)
        return recommendation

    def prune_older_than(self, user_id: str, age: timedelta) -> int:
        """Delete the user's recommendations generated more than ``age`` ago."""
        if age < timedelta(0):
            raise ValidationError("age must not be negative", field="age")
        cutoff = datetime.utcnow() - age
        deleted = (
            self.db.query(RecommendationDB)
            .filter(RecommendationDB.user_id == user_id, RecommendationDB.generated_at <= cutoff)
            .delete(synchronize_session=False)
        )
        self.db.commit()
        logger.info(f"Pruned {deleted} recommendations for {user_id} older than {cutoff.isoformat()}")
        return deleted
