from datetime import datetime

import pytest
from sqlalchemy.exc import SQLAlchemyError

from prepfeed.core.errors import NotFoundError, ValidationError
from prepfeed.models.interaction import InteractionDB, InteractionType
from prepfeed.services.interaction_recorder import InteractionRecorder


def test_duplicate_views_are_both_kept(db, make_article):
    article = make_article()
    recorder = InteractionRecorder(db)

    recorder.record("student-1", article.id, "view", {})
    recorder.record("student-1", article.id, "view", {})

    events = recorder.list_by_user("student-1")
    assert len(events) == 2
    assert all(e.interaction_type == "view" for e in events)
    assert all(e.content_item_id == article.id for e in events)


def test_list_is_most_recent_first_and_filterable(db, make_article):
    first, second = make_article(), make_article()
    recorder = InteractionRecorder(db)
    a = recorder.record("student-1", first.id, InteractionType.VIEW)
    b = recorder.record("student-1", second.id, InteractionType.BOOKMARK_ADD)
    c = recorder.record("student-1", first.id, InteractionType.NOTE_CREATED, {"note_id": 7})

    assert [e.id for e in recorder.list_by_user("student-1")] == [c.id, b.id, a.id]
    assert [e.id for e in recorder.list_by_user("student-1", first.id)] == [c.id, a.id]
    assert recorder.list_by_user("someone-else") == []


def test_metadata_is_stored_as_given(db, make_article):
    article = make_article()
    event = InteractionRecorder(db).record(
        "student-1", article.id, "quiz_generated", {"quiz_id": "q1", "categories": ["Economy"]}
    )
    assert event.event_metadata == {"quiz_id": "q1", "categories": ["Economy"]}


def test_unknown_type_is_rejected(db, make_article):
    article = make_article()
    with pytest.raises(ValidationError):
        InteractionRecorder(db).record("student-1", article.id, "like")
    assert db.query(InteractionDB).count() == 0


def test_non_mapping_metadata_is_rejected(db, make_article):
    article = make_article()
    with pytest.raises(ValidationError):
        InteractionRecorder(db).record("student-1", article.id, "view", ["not", "a", "map"])
    with pytest.raises(ValidationError):
        InteractionRecorder(db).record("student-1", article.id, "view", {1: "int key"})


def test_unserializable_metadata_is_rejected_and_session_stays_usable(db, make_article):
    article = make_article()
    recorder = InteractionRecorder(db)
    with pytest.raises(ValidationError):
        recorder.record("student-1", article.id, "view", {"at": datetime(2025, 1, 1)})
    with pytest.raises(ValidationError):
        recorder.record("student-1", article.id, "view", {"nested": {"seen": {1, 2}}})

    event = recorder.record("student-1", article.id, "view", {})
    assert event.id is not None
    assert db.query(InteractionDB).count() == 1


def test_missing_article_is_not_found(db):
    with pytest.raises(NotFoundError):
        InteractionRecorder(db).record("student-1", 999, "view")


def test_history_only_grows(db, make_article):
    article = make_article()
    recorder = InteractionRecorder(db)
    counts = []
    for kind in ("view", "bookmark_add", "bookmark_remove", "view"):
        recorder.record("student-1", article.id, kind)
        counts.append(len(recorder.list_by_user("student-1")))
    assert counts == [1, 2, 3, 4]


def test_summary_counts_by_item_category_and_type(db, make_article):
    economy = make_article(category="Economy")
    science = make_article(category="Science")
    recorder = InteractionRecorder(db)
    recorder.record("student-1", economy.id, "view")
    recorder.record("student-1", economy.id, "view")
    recorder.record("student-1", science.id, "bookmark_add")
    recorder.record("student-2", science.id, "view")

    summary = recorder.summarize("student-1")
    assert summary.by_content_item[economy.id] == 2
    assert summary.by_category["Economy"] == 2
    assert summary.by_category["Science"] == 1
    assert summary.by_type["view"] == 2
    assert summary.total == 3


def test_failed_commit_rolls_back(db, make_article, monkeypatch):
    article = make_article()
    recorder = InteractionRecorder(db)
    real_commit = db.commit

    def failing_commit():
        raise SQLAlchemyError("disk full")

    monkeypatch.setattr(db, "commit", failing_commit)
    with pytest.raises(SQLAlchemyError):
        recorder.record("student-1", article.id, "view")

    monkeypatch.setattr(db, "commit", real_commit)
    recorder.record("student-1", article.id, "view")
    assert db.query(InteractionDB).count() == 1
