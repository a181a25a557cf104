from fastapi import APIRouter, Depends
import logging
from sqlalchemy.orm import Session
from ..core.auth import get_current_user_id
from ..core.errors import NotFoundError
from ..db.database import get_db
from ..models.user_profile import UserProfile, UserProfileUpdate
from ..repositories.profile_repository import ProfileRepository

router = APIRouter(prefix="/profile", tags=["profile"])
logger = logging.getLogger(__name__)

@router.get("", response_model=UserProfile)
async def get_profile(
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    profile = ProfileRepository(db).get_by_user_id(user_id)
    if profile is None:
        raise NotFoundError("UserProfile", user_id)
    return profile

@router.put("", response_model=UserProfile)
async def update_profile(
    payload: UserProfileUpdate,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """Create or replace the caller's exam profile."""
    profile = ProfileRepository(db).upsert(user_id, payload)
    logger.info(f"Profile updated for {user_id}: target exam {profile.target_exam}")
    return profile
