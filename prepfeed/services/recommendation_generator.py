from typing import List, Optional
import logging
from datetime import datetime
from sqlalchemy.orm import Session
from ..core.config import settings
from ..core.errors import ProfileRequiredError, ValidationError
from ..core.monitoring import RECOMMENDATIONS_GENERATED
from ..models.recommendation import RecommendationDB
from ..repositories.content_repository import ContentRepository
from ..repositories.profile_repository import ProfileRepository
from .annotation_store import AnnotationStore
from .bookmark_manager import BookmarkManager
from .interaction_recorder import InteractionRecorder
from .scoring import ScoringWeights, rank_candidates, score_candidate

logger = logging.getLogger(__name__)

class RecommendationGenerator:
    def __init__(self, db: Session, weights: Optional[ScoringWeights] = None):
        self.db = db
        self.weights = weights or ScoringWeights.from_settings()
        self.content = ContentRepository(db)
        self.profiles = ProfileRepository(db)
        self.bookmarks = BookmarkManager(db)
        self.notes = AnnotationStore(db)
        self.interactions = InteractionRecorder(db)

    def fully_engaged_ids(self, user_id: str) -> set:
        """Articles the user has both bookmarked and annotated."""
        return self.bookmarks.bookmarked_ids(user_id) & self.notes.content_ids_for_user(user_id)

    def generate(self, user_id: str, limit: Optional[int] = None) -> List[RecommendationDB]:
        """Score the user's candidate pool and persist the top ``limit`` rows.

        Earlier runs are left untouched; see RecommendationFeed.prune_older_than.
        An empty pool yields an empty list.
        """
        limit = settings.RECOMMENDATION_DEFAULT_LIMIT if limit is None else limit
        if limit < 1:
            raise ValidationError("limit must be a positive integer", field="limit")

        profile = self.profiles.get_by_user_id(user_id)
        if profile is None or not (profile.target_exam or "").strip():
            raise ProfileRequiredError(user_id)

        pool = self.content.list_by_exam_relevance(profile.target_exam)
        engaged = self.fully_engaged_ids(user_id)
        candidates = [item for item in pool if item.id not in engaged]
        if not candidates:
            logger.info(
                f"No candidates for {user_id} ({profile.target_exam}): "
                f"pool={len(pool)} fully_engaged={len(engaged)}"
            )
            return []

        activity = self.interactions.summarize(user_id)
        ranked = rank_candidates(
            score_candidate(item, profile, activity, self.weights) for item in candidates
        )[:limit]

        generated_at = datetime.utcnow()
        rows = [
            RecommendationDB(
                user_id=user_id,
                content_item_id=candidate.item.id,
                recommendation_type=candidate.recommendation_type.value,
                score=candidate.score,
                reason=candidate.reason,
                generated_at=generated_at,
                viewed=False,
            )
            for candidate in ranked
        ]
        self.db.add_all(rows)
        self.db.commit()
        for row in rows:
            self.db.refresh(row)
            RECOMMENDATIONS_GENERATED.labels(recommendation_type=row.recommendation_type).inc()

        logger.info(f"Generated {len(rows)} recommendations for {user_id} from a pool of {len(candidates)}")
        return rows
