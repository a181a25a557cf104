from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from prepfeed.core.config import settings
import logging

logger = logging.getLogger(__name__)

def build_engine(database_url: str):
    """Create an engine, pooled for server databases and thread-shared for SQLite."""
    if database_url.startswith("sqlite"):
        return create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            echo=(settings.LOG_LEVEL == "DEBUG")
        )
    return create_engine(
        database_url,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
        pool_timeout=settings.DB_POOL_TIMEOUT,
        pool_recycle=settings.DB_POOL_RECYCLE,
        pool_pre_ping=True,
        echo=(settings.LOG_LEVEL == "DEBUG")
    )

engine = build_engine(settings.DATABASE_URL)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()

logger.info(f"Database engine configured for {engine.url.get_backend_name()}")

# Database dependency
async def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def init_db() -> None:
    # Import models so every table is registered on the metadata
    from prepfeed import models  # noqa: F401
    Base.metadata.create_all(bind=engine)
