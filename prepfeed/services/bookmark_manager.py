from typing import List, Optional, Tuple
import logging
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from ..core.monitoring import BOOKMARK_CHANGES
from ..models.bookmark import BookmarkDB
from ..models.content import ContentItemDB
from ..repositories.content_repository import ContentRepository

logger = logging.getLogger(__name__)

class BookmarkManager:
    """Saved/unsaved state per (user, article).

    Does not record interaction events; callers decide whether a change is
    worth logging (see ``remove``'s return value).
    """

    def __init__(self, db: Session):
        self.db = db
        self.content = ContentRepository(db)

    def _find(self, user_id: str, content_item_id: int) -> Optional[BookmarkDB]:
        return (
            self.db.query(BookmarkDB)
            .filter(BookmarkDB.user_id == user_id, BookmarkDB.content_item_id == content_item_id)
            .first()
        )

    def add(self, user_id: str, content_item_id: int) -> BookmarkDB:
        self.content.require(content_item_id)

        existing = self._find(user_id, content_item_id)
        if existing is not None:
            return existing

        bookmark = BookmarkDB(user_id=user_id, content_item_id=content_item_id)
        self.db.add(bookmark)
        try:
            self.db.commit()
        except IntegrityError:
            # A concurrent add won the unique constraint; hand back its row
            self.db.rollback()
            winner = self._find(user_id, content_item_id)
            if winner is None:
                raise
            logger.info(f"Concurrent bookmark add for {user_id}/{content_item_id}, returning existing row")
            return winner

        self.db.refresh(bookmark)
        BOOKMARK_CHANGES.labels(action="add").inc()
        return bookmark

    def remove(self, user_id: str, content_item_id: int) -> bool:
        deleted = (
            self.db.query(BookmarkDB)
            .filter(BookmarkDB.user_id == user_id, BookmarkDB.content_item_id == content_item_id)
            .delete(synchronize_session=False)
        )
        self.db.commit()
        if deleted:
            BOOKMARK_CHANGES.labels(action="remove").inc()
        return deleted > 0

    def is_bookmarked(self, user_id: str, content_item_id: int) -> bool:
        return self._find(user_id, content_item_id) is not None

    def bookmarked_ids(self, user_id: str) -> set:
        return {
            row.content_item_id
            for row in self.db.query(BookmarkDB.content_item_id).filter(BookmarkDB.user_id == user_id)
        }

    def list_for_user(self, user_id: str) -> List[Tuple[BookmarkDB, ContentItemDB]]:
        """Bookmarks with their articles, most recently bookmarked first."""
        # Inner join drops bookmarks whose article has gone away
        return (
            self.db.query(BookmarkDB, ContentItemDB)
            .join(ContentItemDB, ContentItemDB.id == BookmarkDB.content_item_id)
            .filter(BookmarkDB.user_id == user_id)
            .order_by(BookmarkDB.bookmarked_at.desc(), BookmarkDB.id.desc())
            .all()
        )
