from datetime import datetime

import pytest

from prepfeed.tests.conftest import auth_headers


@pytest.mark.asyncio
async def test_detail_records_view(client, make_article):
    article = make_article()

    for _ in range(2):
        response = await client.get(f"/api/v1/current-affairs/{article.id}", headers=auth_headers())
        assert response.status_code == 200

    body = response.json()
    assert body["id"] == article.id
    assert body["is_bookmarked"] is False
    assert body["user_notes"] == []

    response = await client.get(f"/api/v1/current-affairs/{article.id}/interactions", headers=auth_headers())
    events = response.json()
    assert [e["interaction_type"] for e in events] == ["view", "view"]
    assert events[0]["metadata"] == {"via": "detail"}


@pytest.mark.asyncio
async def test_unknown_article_is_404(client):
    response = await client.get("/api/v1/current-affairs/4242", headers=auth_headers())
    assert response.status_code == 404
    assert response.json()["detail"]["error_code"] == "RESOURCE_NOT_FOUND"


@pytest.mark.asyncio
async def test_bookmark_round_trip_logs_changes(client, make_article):
    article = make_article()
    url = f"/api/v1/current-affairs/{article.id}/bookmark"

    first = await client.post(url, headers=auth_headers())
    second = await client.post(url, headers=auth_headers())
    assert first.json()["bookmark"]["id"] == second.json()["bookmark"]["id"]

    listed = await client.get("/api/v1/current-affairs/bookmarks/my", headers=auth_headers())
    assert [b["content_item"]["id"] for b in listed.json()] == [article.id]

    removed = await client.delete(url, headers=auth_headers())
    again = await client.delete(url, headers=auth_headers())
    assert removed.json() == {"success": True}
    assert again.json() == {"success": False}

    events = (await client.get("/api/v1/current-affairs/interactions/my", headers=auth_headers())).json()
    assert [e["interaction_type"] for e in events] == ["bookmark_remove", "bookmark_add", "bookmark_add"]


@pytest.mark.asyncio
async def test_notes_crud_and_ownership(client, make_article):
    article = make_article()
    response = await client.post(
        f"/api/v1/current-affairs/{article.id}/notes",
        json={"note_text": "Remember the launch date", "highlighted": True, "position": {"start": 10, "end": 30}},
        headers=auth_headers()
    )
    assert response.status_code == 200
    note_id = response.json()["note"]["id"]

    response = await client.put(
        f"/api/v1/current-affairs/notes/{note_id}",
        json={"note_text": "Not yours"},
        headers=auth_headers("student-2")
    )
    assert response.status_code == 403

    response = await client.put(
        f"/api/v1/current-affairs/notes/{note_id}",
        json={"note_text": "Launch was on Monday"},
        headers=auth_headers()
    )
    assert response.json()["note"]["note_text"] == "Launch was on Monday"
    assert response.json()["note"]["highlighted"] is True

    notes = (await client.get(f"/api/v1/current-affairs/{article.id}/notes", headers=auth_headers())).json()
    assert len(notes) == 1

    assert (await client.delete(f"/api/v1/current-affairs/notes/{note_id}", headers=auth_headers("student-2"))).status_code == 403
    assert (await client.delete(f"/api/v1/current-affairs/notes/{note_id}", headers=auth_headers())).json() == {"success": True}
    assert (await client.delete(f"/api/v1/current-affairs/notes/{note_id}", headers=auth_headers())).status_code == 404

    events = (await client.get(f"/api/v1/current-affairs/{article.id}/interactions", headers=auth_headers())).json()
    assert [e["interaction_type"] for e in events] == ["note_created"]


@pytest.mark.asyncio
async def test_note_position_cleared_only_when_sent_as_null(client, make_article):
    article = make_article()
    response = await client.post(
        f"/api/v1/current-affairs/{article.id}/notes",
        json={"note_text": "Anchored", "position": {"start": 2, "end": 8}},
        headers=auth_headers()
    )
    note_id = response.json()["note"]["id"]
    url = f"/api/v1/current-affairs/notes/{note_id}"

    response = await client.put(url, json={"highlighted": True}, headers=auth_headers())
    assert response.json()["note"]["position"] == {"start": 2, "end": 8}

    response = await client.put(url, json={"position": None}, headers=auth_headers())
    assert response.status_code == 200
    assert response.json()["note"]["position"] is None
    assert response.json()["note"]["highlighted"] is True


@pytest.mark.asyncio
async def test_list_includes_user_state(client, make_article):
    older = make_article(day=1, category="Economy")
    newer = make_article(day=2, category="Science")
    await client.post(f"/api/v1/current-affairs/{older.id}/bookmark", headers=auth_headers())

    response = await client.get("/api/v1/current-affairs", headers=auth_headers())
    items = response.json()
    assert [i["id"] for i in items] == [newer.id, older.id]
    assert items[1]["is_bookmarked"] is True
    assert items[1]["user_interactions"] == 1
    assert items[0]["is_bookmarked"] is False

    response = await client.get("/api/v1/current-affairs", params={"category": "Economy"}, headers=auth_headers())
    assert [i["id"] for i in response.json()] == [older.id]


@pytest.mark.asyncio
async def test_list_by_date(client, make_article):
    day_two = make_article(day=2)
    make_article(day=3)
    response = await client.get("/api/v1/current-affairs", params={"date": "2025-01-03"}, headers=auth_headers())
    assert [i["id"] for i in response.json()] == [day_two.id]


@pytest.mark.asyncio
async def test_client_interaction_validation(client, make_article):
    article = make_article()
    response = await client.post(
        f"/api/v1/current-affairs/{article.id}/interactions",
        json={"interaction_type": "like"},
        headers=auth_headers()
    )
    assert response.status_code == 422

    response = await client.post(
        f"/api/v1/current-affairs/{article.id}/interactions",
        json={"interaction_type": "view", "metadata": {"via": "list"}},
        headers=auth_headers()
    )
    assert response.status_code == 200
    assert response.json()["metadata"] == {"via": "list"}


@pytest.mark.asyncio
async def test_quiz_generation_records_interaction(client, make_article):
    recent = make_article(published_date=datetime.utcnow())
    response = await client.post(
        "/api/v1/current-affairs/quiz/generate",
        json={"timeframe": "week", "num_questions": 5},
        headers=auth_headers()
    )
    assert response.status_code == 200
    body = response.json()
    assert body["article_ids"] == [recent.id]

    events = (await client.get("/api/v1/current-affairs/interactions/my", headers=auth_headers())).json()
    assert events[0]["interaction_type"] == "quiz_generated"
    assert events[0]["metadata"]["quiz_id"] == body["quiz_id"]


@pytest.mark.asyncio
async def test_quiz_generation_without_articles(client, make_article):
    make_article()  # published in 2025, outside the window
    response = await client.post(
        "/api/v1/current-affairs/quiz/generate",
        json={"timeframe": "today"},
        headers=auth_headers()
    )
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_health(client):
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json()["database"] == "ok"
