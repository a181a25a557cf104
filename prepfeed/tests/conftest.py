import itertools
from datetime import datetime, timedelta

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import prepfeed.models  # noqa: F401  registers every table
from prepfeed.core.auth import create_access_token
from prepfeed.db.database import Base, get_db
from prepfeed.main import app
from prepfeed.models.content import ContentItemDB
from prepfeed.models.user_profile import UserProfileDB

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

BASE_DATE = datetime(2025, 1, 1, 9, 0, 0)
_titles = itertools.count(1)


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def make_article(db):
    def _make(**overrides):
        day = overrides.pop("day", 1)
        values = {
            "title": f"Article {next(_titles)}",
            "content": "Body text",
            "summary": "Summary",
            "category": "Science",
            "source": "PIB",
            "published_date": BASE_DATE + timedelta(days=day),
            "tags": [],
            "importance": "medium",
            "exam_relevance": ["NEET"],
        }
        values.update(overrides)
        article = ContentItemDB(**values)
        db.add(article)
        db.commit()
        db.refresh(article)
        return article
    return _make


@pytest.fixture
def make_profile(db):
    def _make(user_id="student-1", target_exam="NEET", weak_subjects=None, strong_subjects=None):
        profile = UserProfileDB(
            user_id=user_id,
            target_exam=target_exam,
            weak_subjects=weak_subjects or [],
            strong_subjects=strong_subjects or [],
        )
        db.add(profile)
        db.commit()
        return profile
    return _make


def auth_headers(user_id="student-1"):
    return {"Authorization": f"Bearer {create_access_token({'sub': user_id})}"}


@pytest_asyncio.fixture
async def client(db):
    async def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()
