from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, Dict, Any
from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, Text, Boolean, ForeignKey, JSON
from ..db.database import Base

# Notes a user attaches to an article; no uniqueness per (user, article)
class NoteDB(Base):
    __tablename__ = "current_affairs_notes"

    id = Column(Integer, primary_key=True)
    user_id = Column(String(128), nullable=False, index=True)
    content_item_id = Column(Integer, ForeignKey("current_affairs.id"), nullable=False, index=True)
    note_text = Column(Text, nullable=False)
    highlighted = Column(Boolean, default=False, nullable=False)
    position = Column(JSON, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, nullable=False)

class NoteCreate(BaseModel):
    note_text: str = Field(..., min_length=1)
    highlighted: bool = False
    position: Optional[Dict[str, Any]] = None

class NoteUpdate(BaseModel):
    note_text: Optional[str] = Field(None, min_length=1)
    highlighted: Optional[bool] = None
    position: Optional[Dict[str, Any]] = None

class Note(BaseModel):
    id: int
    user_id: str
    content_item_id: int
    note_text: str
    highlighted: bool
    position: Optional[Dict[str, Any]] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
