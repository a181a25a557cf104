from .content import ContentItemDB, ContentItem, ContentItemCreate, Category, Importance
from .user_profile import UserProfileDB, UserProfile, UserProfileUpdate
from .interaction import InteractionDB, Interaction, InteractionType
from .bookmark import BookmarkDB, Bookmark, BookmarkWithContent
from .note import NoteDB, Note, NoteCreate, NoteUpdate
from .recommendation import RecommendationDB, Recommendation, RecommendationType, RecommendationWithContent

__all__ = [
    'ContentItemDB',
    'ContentItem',
    'ContentItemCreate',
    'Category',
    'Importance',
    'UserProfileDB',
    'UserProfile',
    'UserProfileUpdate',
    'InteractionDB',
    'Interaction',
    'InteractionType',
    'BookmarkDB',
    'Bookmark',
    'BookmarkWithContent',
    'NoteDB',
    'Note',
    'NoteCreate',
    'NoteUpdate',
    'RecommendationDB',
    'Recommendation',
    'RecommendationType',
    'RecommendationWithContent',
]
