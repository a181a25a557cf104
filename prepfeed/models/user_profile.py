from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional, Dict, Any, List
from datetime import datetime
from sqlalchemy import Column, String, DateTime, JSON
from ..db.database import Base

# Database model for user profiles
class UserProfileDB(Base):
    __tablename__ = "user_profiles"

    user_id = Column(String(128), primary_key=True)
    target_exam = Column(String(64), nullable=False)
    strong_subjects = Column(JSON, nullable=False, default=list)
    weak_subjects = Column(JSON, nullable=False, default=list)
    preferences = Column(JSON, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

# Pydantic models
class UserProfileBase(BaseModel):
    target_exam: str = Field(..., min_length=1, max_length=64)
    strong_subjects: List[str] = Field(default_factory=list)
    weak_subjects: List[str] = Field(default_factory=list)
    preferences: Optional[Dict[str, Any]] = None

    model_config = ConfigDict(from_attributes=True)

    @field_validator("target_exam")
    @classmethod
    def strip_exam(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("target_exam must not be blank")
        return v

class UserProfileUpdate(UserProfileBase):
    pass

class UserProfile(UserProfileBase):
    user_id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
