from .content_repository import ContentRepository
from .profile_repository import ProfileRepository

__all__ = ['ContentRepository', 'ProfileRepository']
