from datetime import datetime, timedelta

import pytest

from prepfeed.core.errors import ForbiddenError, NotFoundError, ProfileRequiredError
from prepfeed.models.recommendation import RecommendationDB
from prepfeed.services.recommendation_feed import RecommendationFeed
from prepfeed.services.recommendation_generator import RecommendationGenerator


def add_recommendation(db, user_id, content_item_id, score, generated_at, viewed=False):
    row = RecommendationDB(
        user_id=user_id,
        content_item_id=content_item_id,
        recommendation_type="exam_relevant",
        score=score,
        reason="Relevant for NEET preparation",
        generated_at=generated_at,
        viewed=viewed,
    )
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def test_cold_start_generates_once(db, make_article, make_profile, monkeypatch):
    make_profile()
    article = make_article()
    generator = RecommendationGenerator(db)
    calls = []
    real_generate = generator.generate

    def counting_generate(user_id, limit=None):
        calls.append(user_id)
        return real_generate(user_id, limit=limit)

    monkeypatch.setattr(generator, "generate", counting_generate)
    feed = RecommendationFeed(db, generator=generator)

    first = feed.get("student-1")
    assert [item.id for _, item in first] == [article.id]
    assert calls == ["student-1"]

    feed.get("student-1")
    assert calls == ["student-1"]


def test_empty_pool_returns_empty_feed(db, make_article, make_profile):
    make_profile(target_exam="JEE")
    make_article(exam_relevance=["UPSC"])
    assert RecommendationFeed(db).get("student-1") == []


def test_cold_start_without_profile_asks_for_one(db, make_article):
    make_article()
    with pytest.raises(ProfileRequiredError):
        RecommendationFeed(db).get("student-1")


def test_order_is_score_then_generated_at(db, make_article):
    a, b, c = make_article(), make_article(), make_article()
    t0 = datetime(2025, 3, 1)
    low = add_recommendation(db, "student-1", a.id, 0.8, t0 + timedelta(hours=5))
    high_old = add_recommendation(db, "student-1", b.id, 0.9, t0)
    high_new = add_recommendation(db, "student-1", c.id, 0.9, t0 + timedelta(hours=1))

    rows = RecommendationFeed(db).get("student-1", limit=10)
    assert [r.id for r, _ in rows] == [high_new.id, high_old.id, low.id]
    scores = [(r.score, r.generated_at) for r, _ in rows]
    assert scores == sorted(scores, reverse=True)


def test_limit_and_user_partitioning(db, make_article):
    a = make_article()
    t0 = datetime(2025, 3, 1)
    for i in range(5):
        add_recommendation(db, "student-1", a.id, 0.8, t0 + timedelta(minutes=i))
    add_recommendation(db, "student-2", a.id, 0.99, t0)

    rows = RecommendationFeed(db).get("student-1", limit=3)
    assert len(rows) == 3
    assert all(r.user_id == "student-1" for r, _ in rows)


def test_mark_viewed_flips_once(db, make_article):
    a = make_article()
    row = add_recommendation(db, "student-1", a.id, 0.8, datetime(2025, 3, 1))
    feed = RecommendationFeed(db)

    assert feed.mark_viewed("student-1", row.id).viewed is True
    assert feed.mark_viewed("student-1", row.id).viewed is True


def test_mark_viewed_checks_ownership(db, make_article):
    a = make_article()
    row = add_recommendation(db, "student-1", a.id, 0.8, datetime(2025, 3, 1))
    feed = RecommendationFeed(db)

    with pytest.raises(ForbiddenError):
        feed.mark_viewed("student-2", row.id)
    with pytest.raises(NotFoundError):
        feed.mark_viewed("student-1", row.id + 100)
    db.refresh(row)
    assert row.viewed is False


def test_prune_older_than(db, make_article):
    a = make_article()
    now = datetime.utcnow()
    add_recommendation(db, "student-1", a.id, 0.8, now - timedelta(days=40))
    keep = add_recommendation(db, "student-1", a.id, 0.8, now - timedelta(days=1))
    other = add_recommendation(db, "student-2", a.id, 0.8, now - timedelta(days=40))

    assert RecommendationFeed(db).prune_older_than("student-1", timedelta(days=30)) == 1
    remaining = {r.id for r in db.query(RecommendationDB).all()}
    assert remaining == {keep.id, other.id}
