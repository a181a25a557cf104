from datetime import datetime, timedelta
from typing import List, Dict
import logging
from sqlalchemy.orm import Session
from prepfeed.models.content import ContentItemCreate
from prepfeed.repositories.content_repository import ContentRepository

logger = logging.getLogger(__name__)

# Sample current affairs, published relative to the seeding time
SAMPLE_CONTENT: List[Dict] = [
    {
        "title": "India's New Education Policy Update",
        "content": (
            "The Ministry of Education announced comprehensive updates to the National Education Policy, "
            "emphasizing digital literacy, AI integration in curriculum, and enhanced skill development "
            "programs designed for competitive exam preparation."
        ),
        "summary": "Major updates to India's education policy focusing on digital skills and competitive exam preparation.",
        "category": "Education",
        "source": "Ministry of Education",
        "days_ago": 0,
        "tags": ["education", "policy", "digital-literacy", "competitive-exams"],
        "importance": "high",
        "exam_relevance": ["UPSC", "SSC", "Banking"],
        "read_time": 8,
        "ai_key_points": [
            "Digital literacy becomes mandatory in all educational levels",
            "New assessment methods introduced for competitive exam preparation",
        ],
        "related_topics": ["Digital India", "Skill Development"],
    },
    {
        "title": "ISRO Launches Earth Observation Satellite",
        "content": (
            "The Indian Space Research Organisation launched an earth observation satellite capable of "
            "real-time climate monitoring and disaster management support."
        ),
        "summary": "ISRO launches advanced satellite for climate monitoring and disaster management.",
        "category": "Science",
        "source": "ISRO",
        "days_ago": 1,
        "tags": ["space", "satellite", "climate", "physics"],
        "importance": "medium",
        "exam_relevance": ["UPSC", "NEET", "JEE"],
        "read_time": 6,
        "ai_key_points": [
            "Real-time climate monitoring capabilities",
            "Enhanced disaster management and prediction systems",
        ],
        "related_topics": ["Space Technology", "Climate Change"],
    },
    {
        "title": "Economic Survey Highlights Digital Payment Growth",
        "content": (
            "The latest Economic Survey reports record growth in digital payments, with UPI transactions "
            "reaching new milestones and fintech driving financial inclusion."
        ),
        "summary": "Economic Survey shows remarkable growth in digital payments and fintech adoption.",
        "category": "Economy",
        "source": "Ministry of Finance",
        "days_ago": 2,
        "tags": ["economy", "digital-payments", "upi", "fintech"],
        "importance": "high",
        "exam_relevance": ["UPSC", "SSC", "Banking", "RBI"],
        "read_time": 7,
        "ai_key_points": ["UPI transactions surge to record numbers"],
        "related_topics": ["Financial Inclusion", "UPI"],
    },
    {
        "title": "New Guidelines on Pharmaceutical Chemistry Research",
        "content": (
            "The health ministry issued guidelines for research into drug synthesis and "
            "pharmaceutical chemistry, aimed at faster approval of generic medicines."
        ),
        "summary": "Government guidelines streamline pharmaceutical chemistry research.",
        "category": "Science",
        "source": "Ministry of Health",
        "days_ago": 3,
        "tags": ["chemistry", "health", "pharma"],
        "importance": "medium",
        "exam_relevance": ["NEET", "UPSC"],
        "read_time": 5,
    },
    {
        "title": "Wetlands Added to Ramsar List",
        "content": "Five new Indian wetlands were designated as Ramsar sites of international importance.",
        "summary": "India expands its network of Ramsar wetland sites.",
        "category": "Environment",
        "source": "Ministry of Environment",
        "days_ago": 4,
        "tags": ["environment", "biodiversity", "biology"],
        "importance": "low",
        "exam_relevance": ["UPSC", "NEET"],
        "read_time": 4,
    },
]

def build_sample_content(now: datetime = None) -> List[ContentItemCreate]:
    now = now or datetime.utcnow()
    items = []
    for raw in SAMPLE_CONTENT:
        data = {k: v for k, v in raw.items() if k != "days_ago"}
        data["published_date"] = now - timedelta(days=raw["days_ago"])
        items.append(ContentItemCreate(**data))
    return items

def seed_database(db: Session) -> int:
    """Load the sample articles into an empty store. Returns the number inserted."""
    repository = ContentRepository(db)
    if repository.count() > 0:
        logger.info("Content already present, skipping seed")
        return 0

    inserted = 0
    for item in build_sample_content():
        repository.create(item)
        inserted += 1
    logger.info(f"Seeded {inserted} current affairs articles")
    return inserted
