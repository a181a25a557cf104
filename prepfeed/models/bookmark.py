from pydantic import BaseModel, ConfigDict
from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, UniqueConstraint
from ..db.database import Base
from .content import ContentItem

class BookmarkDB(Base):
    __tablename__ = "current_affairs_bookmarks"
    # At most one row per (user, article); concurrent adds race on this constraint
    __table_args__ = (
        UniqueConstraint("user_id", "content_item_id", name="uq_bookmark_user_item"),
    )

    id = Column(Integer, primary_key=True)
    user_id = Column(String(128), nullable=False, index=True)
    content_item_id = Column(Integer, ForeignKey("current_affairs.id"), nullable=False)
    bookmarked_at = Column(DateTime, default=datetime.utcnow, nullable=False)

class Bookmark(BaseModel):
    id: int
    user_id: str
    content_item_id: int
    bookmarked_at: datetime

    model_config = ConfigDict(from_attributes=True)

class BookmarkWithContent(Bookmark):
    content_item: ContentItem
