from datetime import date, datetime, time, timedelta
from typing import List, Optional
import logging
from sqlalchemy import func
from sqlalchemy.orm import Session
from prepfeed.core.errors import NotFoundError
from prepfeed.models.content import ContentItemDB, ContentItemCreate, ContentItemWithUserData, ContentItem
from prepfeed.models.bookmark import BookmarkDB
from prepfeed.models.note import NoteDB
from prepfeed.models.interaction import InteractionDB

logger = logging.getLogger(__name__)

class ContentRepository:
    """Read access to current affairs articles.

    Articles are written by the ingestion process (or the seed facility) and
    are never mutated by the recommendation services.
    """

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, content_item_id: int) -> Optional[ContentItemDB]:
        return self.db.get(ContentItemDB, content_item_id)

    def require(self, content_item_id: int) -> ContentItemDB:
        item = self.get_by_id(content_item_id)
        if item is None:
            raise NotFoundError("ContentItem", content_item_id)
        return item

    def list_by_exam_relevance(self, exam: str) -> List[ContentItemDB]:
        """Articles tagged as relevant for ``exam``, newest first.

        Exam tags live in a JSON column, so the match is done here rather
        than in SQL; this keeps the query portable between SQLite and
        PostgreSQL at the cost of a full scan.
        """
        items = (
            self.db.query(ContentItemDB)
            .order_by(ContentItemDB.published_date.desc(), ContentItemDB.id.asc())
            .all()
        )
        return [item for item in items if item.is_relevant_for(exam)]

    def list_recent(self, limit: int = 10, category: Optional[str] = None) -> List[ContentItemDB]:
        query = self.db.query(ContentItemDB)
        if category:
            query = query.filter(ContentItemDB.category == category)
        return (
            query.order_by(ContentItemDB.published_date.desc(), ContentItemDB.id.desc())
            .limit(limit)
            .all()
        )

    def list_published_since(self, since: datetime, limit: int = 50, category: Optional[str] = None) -> List[ContentItemDB]:
        query = self.db.query(ContentItemDB).filter(ContentItemDB.published_date >= since)
        if category:
            query = query.filter(ContentItemDB.category == category)
        return (
            query.order_by(ContentItemDB.published_date.desc(), ContentItemDB.id.desc())
            .limit(limit)
            .all()
        )

    def list_by_date(self, day: date) -> List[ContentItemDB]:
        start_of_day = datetime.combine(day, time.min)
        end_of_day = start_of_day + timedelta(days=1)
        return (
            self.db.query(ContentItemDB)
            .filter(ContentItemDB.published_date >= start_of_day)
            .filter(ContentItemDB.published_date < end_of_day)
            .order_by(ContentItemDB.published_date.desc(), ContentItemDB.id.desc())
            .all()
        )

    def list_with_user_data(
        self,
        user_id: str,
        limit: int = 10,
        category: Optional[str] = None
    ) -> List[ContentItemWithUserData]:
        """Recent articles annotated with the user's bookmark, note and interaction state."""
        items = self.list_recent(limit=limit, category=category)
        if not items:
            return []
        ids = [item.id for item in items]

        bookmarked = {
            row.content_item_id
            for row in self.db.query(BookmarkDB.content_item_id)
            .filter(BookmarkDB.user_id == user_id, BookmarkDB.content_item_id.in_(ids))
        }
        noted = {
            row.content_item_id
            for row in self.db.query(NoteDB.content_item_id)
            .filter(NoteDB.user_id == user_id, NoteDB.content_item_id.in_(ids))
            .distinct()
        }
        counts = dict(
            self.db.query(InteractionDB.content_item_id, func.count(InteractionDB.id))
            .filter(InteractionDB.user_id == user_id, InteractionDB.content_item_id.in_(ids))
            .group_by(InteractionDB.content_item_id)
            .all()
        )

        return [
            ContentItemWithUserData(
                **ContentItem.model_validate(item).model_dump(),
                is_bookmarked=item.id in bookmarked,
                has_notes=item.id in noted,
                user_interactions=counts.get(item.id, 0),
            )
            for item in items
        ]

    def create(self, data: ContentItemCreate) -> ContentItemDB:
        item = ContentItemDB(**data.model_dump(mode="json", exclude={"published_date"}))
        item.published_date = data.published_date
        self.db.add(item)
        self.db.commit()
        self.db.refresh(item)
        logger.info(f"Stored article {item.id}: {item.title}")
        return item

    def count(self) -> int:
        return self.db.query(func.count(ContentItemDB.id)).scalar()
