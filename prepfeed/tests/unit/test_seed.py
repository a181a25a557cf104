from prepfeed.data.seed import SAMPLE_CONTENT, seed_database
from prepfeed.models.content import ContentItemDB
from prepfeed.services.recommendation_generator import RecommendationGenerator


def test_seed_fills_empty_store_once(db):
    assert seed_database(db) == len(SAMPLE_CONTENT)
    assert seed_database(db) == 0
    assert db.query(ContentItemDB).count() == len(SAMPLE_CONTENT)


def test_seeded_store_serves_neet_aspirants(db, make_profile):
    seed_database(db)
    make_profile(target_exam="NEET")
    rows = RecommendationGenerator(db).generate("student-1")
    assert len(rows) == 3
    assert all("NEET" in row.reason for row in rows)
