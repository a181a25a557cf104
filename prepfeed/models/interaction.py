from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, Dict, Any
from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, JSON, Index
import enum
from ..db.database import Base

class InteractionType(str, enum.Enum):
    VIEW = "view"
    BOOKMARK_ADD = "bookmark_add"
    BOOKMARK_REMOVE = "bookmark_remove"
    NOTE_CREATED = "note_created"
    QUIZ_GENERATED = "quiz_generated"

# Database model for interactions. Rows are append-only.
class InteractionDB(Base):
    __tablename__ = "current_affairs_interactions"
    __table_args__ = (
        Index("ix_interactions_user_created", "user_id", "created_at"),
    )

    id = Column(Integer, primary_key=True)
    user_id = Column(String(128), nullable=False)
    content_item_id = Column(Integer, ForeignKey("current_affairs.id"), nullable=False, index=True)
    interaction_type = Column(String(32), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    # "metadata" is reserved on declarative classes
    event_metadata = Column("metadata", JSON, nullable=False, default=dict)

# Pydantic models
class InteractionCreate(BaseModel):
    interaction_type: InteractionType
    metadata: Dict[str, Any] = Field(default_factory=dict)

class Interaction(BaseModel):
    id: int
    user_id: str
    content_item_id: int
    interaction_type: InteractionType
    created_at: datetime
    metadata: Dict[str, Any] = Field(default_factory=dict, validation_alias="event_metadata")

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)
