from datetime import datetime
from typing import Any, Dict, List, Optional
import logging
from sqlalchemy.orm import Session
from ..core.errors import ForbiddenError, NotFoundError, ValidationError
from ..models.note import NoteDB
from ..repositories.content_repository import ContentRepository

logger = logging.getLogger(__name__)

# Marks an update argument the caller left out; None clears the position
UNSET: Any = object()

def _clean_text(note_text: str) -> str:
    if note_text is None or not note_text.strip():
        raise ValidationError("Note text must not be empty", field="note_text")
    return note_text

class AnnotationStore:
    """Owner-scoped notes on articles.

    Lookups by id distinguish a missing note (NotFoundError) from someone
    else's note (ForbiddenError). Concurrent edits by the owner are last
    write wins.
    """

    def __init__(self, db: Session):
        self.db = db
        self.content = ContentRepository(db)

    def create(
        self,
        user_id: str,
        content_item_id: int,
        note_text: str,
        highlighted: bool = False,
        position: Optional[Dict[str, Any]] = None
    ) -> NoteDB:
        note_text = _clean_text(note_text)
        self.content.require(content_item_id)

        now = datetime.utcnow()
        note = NoteDB(
            user_id=user_id,
            content_item_id=content_item_id,
            note_text=note_text,
            highlighted=bool(highlighted),
            position=position,
            created_at=now,
            updated_at=now,
        )
        self.db.add(note)
        self.db.commit()
        self.db.refresh(note)
        return note

    def get(self, note_id: int, user_id: str) -> NoteDB:
        note = self.db.get(NoteDB, note_id)
        if note is None:
            raise NotFoundError("Note", note_id)
        if note.user_id != user_id:
            logger.warning(f"User {user_id} attempted to access note {note_id} owned by another user")
            raise ForbiddenError("Note", note_id)
        return note

    def update(
        self,
        note_id: int,
        user_id: str,
        note_text: Optional[str] = None,
        highlighted: Optional[bool] = None,
        position: Optional[Dict[str, Any]] = UNSET
    ) -> NoteDB:
        note = self.get(note_id, user_id)
        if note_text is not None:
            note.note_text = _clean_text(note_text)
        if highlighted is not None:
            note.highlighted = highlighted
        if position is not UNSET:
            note.position = position
        note.updated_at = datetime.utcnow()
        self.db.commit()
        self.db.refresh(note)
        return note

    def delete(self, note_id: int, user_id: str) -> bool:
        note = self.get(note_id, user_id)
        self.db.delete(note)
        self.db.commit()
        return True

    def list_for_user(self, user_id: str, content_item_id: Optional[int] = None) -> List[NoteDB]:
        query = self.db.query(NoteDB).filter(NoteDB.user_id == user_id)
        if content_item_id is not None:
            query = query.filter(NoteDB.content_item_id == content_item_id)
        return query.order_by(NoteDB.updated_at.desc(), NoteDB.id.desc()).all()

    def content_ids_for_user(self, user_id: str) -> set:
        return {
            row.content_item_id
            for row in self.db.query(NoteDB.content_item_id).filter(NoteDB.user_id == user_id).distinct()
        }
