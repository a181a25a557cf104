from sqlalchemy import Column, Integer, String, DateTime, Text, JSON
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List
from datetime import datetime
import enum
from ..db.database import Base

class Category(str, enum.Enum):
    POLITY = "Polity"
    ECONOMY = "Economy"
    ENVIRONMENT = "Environment"
    SCIENCE = "Science"
    INTERNATIONAL = "International"
    EDUCATION = "Education"

class Importance(str, enum.Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

# Database model for current affairs articles
class ContentItemDB(Base):
    __tablename__ = "current_affairs"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    content = Column(Text, nullable=False)
    summary = Column(Text, nullable=True)
    category = Column(String(64), nullable=False, index=True)
    source = Column(String(255), nullable=True)
    published_date = Column(DateTime, nullable=False, index=True)
    tags = Column(JSON, nullable=False, default=list)
    image_url = Column(String(512), nullable=True)
    importance = Column(String(16), nullable=False, default=Importance.MEDIUM.value)
    exam_relevance = Column(JSON, nullable=False, default=list)
    read_time = Column(Integer, nullable=True)  # in minutes
    ai_key_points = Column(JSON, nullable=True)
    ai_summary = Column(Text, nullable=True)
    related_topics = Column(JSON, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    def is_relevant_for(self, exam: str) -> bool:
        wanted = exam.strip().casefold()
        return any(str(tag).strip().casefold() == wanted for tag in (self.exam_relevance or []))

# Pydantic models
class ContentItemBase(BaseModel):
    title: str
    content: str
    summary: Optional[str] = None
    category: Category
    source: Optional[str] = None
    published_date: datetime
    tags: List[str] = Field(default_factory=list)
    image_url: Optional[str] = None
    importance: Importance = Importance.MEDIUM
    exam_relevance: List[str] = Field(default_factory=list)
    read_time: Optional[int] = None
    ai_key_points: Optional[List[str]] = None
    ai_summary: Optional[str] = None
    related_topics: Optional[List[str]] = None

    model_config = ConfigDict(from_attributes=True)

class ContentItemCreate(ContentItemBase):
    pass

class ContentItem(ContentItemBase):
    id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

class ContentItemWithUserData(ContentItem):
    is_bookmarked: bool = False
    has_notes: bool = False
    user_interactions: int = 0
