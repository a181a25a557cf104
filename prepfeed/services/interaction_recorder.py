"""
Interaction recorder: the append-only log of what users did with articles.
"""

from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Union
import json
import logging
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from ..core.errors import ValidationError
from ..core.monitoring import INTERACTIONS_RECORDED
from ..models.content import ContentItemDB
from ..models.interaction import InteractionDB, InteractionType
from ..repositories.content_repository import ContentRepository

logger = logging.getLogger(__name__)

@dataclass
class ActivitySummary:
    """Per-user interaction counts used to personalise scoring."""
    by_content_item: Counter = field(default_factory=Counter)
    by_category: Counter = field(default_factory=Counter)
    by_type: Counter = field(default_factory=Counter)

    @property
    def total(self) -> int:
        return sum(self.by_type.values())

def _coerce_type(interaction_type: Union[str, InteractionType]) -> InteractionType:
    try:
        return InteractionType(interaction_type)
    except ValueError:
        allowed = ", ".join(t.value for t in InteractionType)
        raise ValidationError(
            f"Unknown interaction type '{interaction_type}'; expected one of: {allowed}",
            field="interaction_type"
        )

def _check_metadata(metadata: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    if metadata is None:
        return {}
    if not isinstance(metadata, Mapping):
        raise ValidationError("Interaction metadata must be a key-value map", field="metadata")
    if not all(isinstance(key, str) for key in metadata):
        raise ValidationError("Interaction metadata keys must be strings", field="metadata")
    try:
        json.dumps(metadata)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Interaction metadata must be JSON serializable: {e}", field="metadata")
    return dict(metadata)

class InteractionRecorder:
    def __init__(self, db: Session):
        self.db = db
        self.content = ContentRepository(db)

    def record(
        self,
        user_id: str,
        content_item_id: int,
        interaction_type: Union[str, InteractionType],
        metadata: Optional[Mapping[str, Any]] = None
    ) -> InteractionDB:
        """Append one interaction event.

        Raises ValidationError for an unknown type or malformed metadata and
        NotFoundError when the article does not exist. Duplicate events are
        kept; nothing else is touched.
        """
        kind = _coerce_type(interaction_type)
        payload = _check_metadata(metadata)
        self.content.require(content_item_id)

        event = InteractionDB(
            user_id=user_id,
            content_item_id=content_item_id,
            interaction_type=kind.value,
            event_metadata=payload,
        )
        self.db.add(event)
        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            logger.error(f"Failed to record {kind.value} by {user_id} on article {content_item_id}")
            raise
        self.db.refresh(event)

        INTERACTIONS_RECORDED.labels(interaction_type=kind.value).inc()
        logger.debug(f"Recorded {kind.value} by {user_id} on article {content_item_id}")
        return event

    def list_by_user(self, user_id: str, content_item_id: Optional[int] = None) -> List[InteractionDB]:
        """Events for a user, most recent first."""
        query = self.db.query(InteractionDB).filter(InteractionDB.user_id == user_id)
        if content_item_id is not None:
            query = query.filter(InteractionDB.content_item_id == content_item_id)
        return query.order_by(InteractionDB.created_at.desc(), InteractionDB.id.desc()).all()

    def summarize(self, user_id: str) -> ActivitySummary:
        summary = ActivitySummary()
        rows = (
            self.db.query(InteractionDB.content_item_id, InteractionDB.interaction_type, ContentItemDB.category)
            .outerjoin(ContentItemDB, ContentItemDB.id == InteractionDB.content_item_id)
            .filter(InteractionDB.user_id == user_id)
            .all()
        )
        for content_item_id, interaction_type, category in rows:
            summary.by_content_item[content_item_id] += 1
            summary.by_type[interaction_type] += 1
            # Orphaned events (article since removed) carry no category signal
            if category is not None:
                summary.by_category[category] += 1
        return summary
