from typing import Optional
from datetime import datetime
from sqlalchemy.orm import Session
from prepfeed.models.user_profile import UserProfileDB, UserProfileUpdate

class ProfileRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_by_user_id(self, user_id: str) -> Optional[UserProfileDB]:
        return self.db.get(UserProfileDB, user_id)

    def upsert(self, user_id: str, data: UserProfileUpdate) -> UserProfileDB:
        """Create or replace the user's profile. Only the profile route writes here."""
        profile = self.get_by_user_id(user_id)
        if profile is None:
            profile = UserProfileDB(user_id=user_id)
            self.db.add(profile)
        profile.target_exam = data.target_exam
        profile.strong_subjects = list(data.strong_subjects)
        profile.weak_subjects = list(data.weak_subjects)
        profile.preferences = data.preferences
        profile.updated_at = datetime.utcnow()
        self.db.commit()
        self.db.refresh(profile)
        return profile
