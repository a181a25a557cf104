from fastapi import APIRouter, Depends, Query
from typing import List, Literal, Optional
from pydantic import BaseModel, Field
from datetime import date, datetime, timedelta
from uuid import uuid4
import logging
from sqlalchemy.orm import Session
from ..core.auth import get_current_user_id
from ..core.errors import NotFoundError
from ..db.database import get_db
from ..models.bookmark import Bookmark, BookmarkWithContent
from ..models.content import Category, ContentItem, ContentItemWithUserData
from ..models.interaction import Interaction, InteractionCreate, InteractionType
from ..models.note import Note, NoteCreate, NoteUpdate
from ..repositories.content_repository import ContentRepository
from ..services.annotation_store import AnnotationStore
from ..services.bookmark_manager import BookmarkManager
from ..services.interaction_recorder import InteractionRecorder

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/current-affairs", tags=["current-affairs"])

class ArticleDetail(ContentItem):
    is_bookmarked: bool
    has_notes: bool
    user_notes: List[Note]

class BookmarkResponse(BaseModel):
    success: bool = True
    bookmark: Bookmark

class SuccessResponse(BaseModel):
    success: bool

class NoteResponse(BaseModel):
    success: bool = True
    note: Note

class QuizGenerationRequest(BaseModel):
    timeframe: Literal["today", "week", "month"] = "week"
    num_questions: int = Field(10, ge=1, le=50)
    categories: Optional[List[Category]] = None
    exam_type: Optional[str] = None

class QuizGenerationResponse(BaseModel):
    success: bool = True
    quiz_id: str
    message: str
    articles_count: int
    article_ids: List[int]

def _timeframe_start(timeframe: str, now: datetime) -> datetime:
    if timeframe == "today":
        return now.replace(hour=0, minute=0, second=0, microsecond=0)
    if timeframe == "week":
        return now - timedelta(days=7)
    return now - timedelta(days=30)

# Literal paths are registered before the /{content_item_id} routes

@router.get("", response_model=List[ContentItemWithUserData])
async def list_current_affairs(
    limit: int = Query(10, ge=1, le=100),
    category: Optional[Category] = None,
    on_date: Optional[date] = Query(None, alias="date"),
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """Recent articles with the caller's bookmark, note and interaction state.

    With ``date`` the articles published that day are returned instead.
    """
    repository = ContentRepository(db)
    if on_date is not None:
        items = repository.list_by_date(on_date)
        return [ContentItemWithUserData(**ContentItem.model_validate(item).model_dump()) for item in items]
    return repository.list_with_user_data(
        user_id,
        limit=limit,
        category=category.value if category else None
    )

@router.get("/bookmarks/my", response_model=List[BookmarkWithContent])
async def list_my_bookmarks(
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    return [
        BookmarkWithContent(
            **Bookmark.model_validate(bookmark).model_dump(),
            content_item=ContentItem.model_validate(item)
        )
        for bookmark, item in BookmarkManager(db).list_for_user(user_id)
    ]

@router.get("/interactions/my", response_model=List[Interaction])
async def list_my_interactions(
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    return InteractionRecorder(db).list_by_user(user_id)

@router.put("/notes/{note_id}", response_model=NoteResponse)
async def update_note(
    note_id: int,
    payload: NoteUpdate,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    changes = {"note_text": payload.note_text, "highlighted": payload.highlighted}
    # An explicit "position": null clears the anchor; leaving it out keeps it
    if "position" in payload.model_fields_set:
        changes["position"] = payload.position
    note = AnnotationStore(db).update(note_id, user_id, **changes)
    return NoteResponse(note=Note.model_validate(note))

@router.delete("/notes/{note_id}", response_model=SuccessResponse)
async def delete_note(
    note_id: int,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    return SuccessResponse(success=AnnotationStore(db).delete(note_id, user_id))

@router.post("/quiz/generate", response_model=QuizGenerationResponse)
async def generate_quiz(
    request: QuizGenerationRequest,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """Register a quiz over recent articles and log it against the lead article.

    Question writing happens in the tutor service; this endpoint only picks
    the source articles and records the interaction.
    """
    since = _timeframe_start(request.timeframe, datetime.utcnow())
    category = request.categories[0].value if request.categories else None
    articles = ContentRepository(db).list_published_since(since, limit=50, category=category)
    if not articles:
        raise NotFoundError(
            "ContentItem",
            request.timeframe,
            message="No articles found for the specified timeframe"
        )

    quiz_id = uuid4().hex
    article_ids = [article.id for article in articles]
    InteractionRecorder(db).record(
        user_id,
        articles[0].id,
        InteractionType.QUIZ_GENERATED,
        {
            "quiz_id": quiz_id,
            "timeframe": request.timeframe,
            "num_questions": request.num_questions,
            "categories": [c.value for c in request.categories] if request.categories else ["all"],
            "exam_type": request.exam_type or "general",
            "article_ids": article_ids,
        }
    )
    return QuizGenerationResponse(
        quiz_id=quiz_id,
        message=f"Quiz registered with {request.num_questions} questions from {request.timeframe} current affairs",
        articles_count=len(articles),
        article_ids=article_ids
    )

@router.get("/{content_item_id}", response_model=ArticleDetail)
async def get_current_affair(
    content_item_id: int,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """Article detail for the caller; every read is logged as a view."""
    item = ContentRepository(db).require(content_item_id)
    InteractionRecorder(db).record(user_id, content_item_id, InteractionType.VIEW, {"via": "detail"})

    notes = AnnotationStore(db).list_for_user(user_id, content_item_id)
    return ArticleDetail(
        **ContentItem.model_validate(item).model_dump(),
        is_bookmarked=BookmarkManager(db).is_bookmarked(user_id, content_item_id),
        has_notes=bool(notes),
        user_notes=[Note.model_validate(note) for note in notes]
    )

@router.post("/{content_item_id}/bookmark", response_model=BookmarkResponse)
async def add_bookmark(
    content_item_id: int,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    bookmark = BookmarkManager(db).add(user_id, content_item_id)
    InteractionRecorder(db).record(user_id, content_item_id, InteractionType.BOOKMARK_ADD, {"bookmark_id": bookmark.id})
    return BookmarkResponse(bookmark=Bookmark.model_validate(bookmark))

@router.delete("/{content_item_id}/bookmark", response_model=SuccessResponse)
async def remove_bookmark(
    content_item_id: int,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    removed = BookmarkManager(db).remove(user_id, content_item_id)
    if removed:
        InteractionRecorder(db).record(user_id, content_item_id, InteractionType.BOOKMARK_REMOVE)
    return SuccessResponse(success=removed)

@router.post("/{content_item_id}/notes", response_model=NoteResponse)
async def create_note(
    content_item_id: int,
    payload: NoteCreate,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    note = AnnotationStore(db).create(
        user_id,
        content_item_id,
        payload.note_text,
        highlighted=payload.highlighted,
        position=payload.position
    )
    InteractionRecorder(db).record(user_id, content_item_id, InteractionType.NOTE_CREATED, {"note_id": note.id})
    return NoteResponse(note=Note.model_validate(note))

@router.get("/{content_item_id}/notes", response_model=List[Note])
async def list_notes(
    content_item_id: int,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    return AnnotationStore(db).list_for_user(user_id, content_item_id)

@router.get("/{content_item_id}/interactions", response_model=List[Interaction])
async def list_interactions(
    content_item_id: int,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    return InteractionRecorder(db).list_by_user(user_id, content_item_id)

@router.post("/{content_item_id}/interactions", response_model=Interaction)
async def record_interaction(
    content_item_id: int,
    payload: InteractionCreate,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """Log a client-side event (e.g. a view from the list screen)."""
    return InteractionRecorder(db).record(user_id, content_item_id, payload.interaction_type, payload.metadata)
