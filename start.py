import os
import sys
import uvicorn
from sqlalchemy import text
from prepfeed.core.config import settings
from prepfeed.core.logging import setup_logging
from prepfeed.db.database import engine

logger = setup_logging(settings.LOG_LEVEL, settings.LOG_JSON).getChild("start")

def check_database_connection() -> bool:
    """Check if database connection is working"""
    try:
        with engine.connect() as connection:
            connection.execute(text("SELECT 1"))
        logger.info(f"Database connection successful ({engine.url.get_backend_name()})")
        return True
    except Exception as e:
        logger.error(f"Database connection failed: {str(e)}")
        return False

if __name__ == "__main__":
    if not check_database_connection():
        logger.error("Startup checks failed, exiting...")
        sys.exit(1)

    port = int(os.getenv("PORT", 8080))
    uvicorn.run(
        "prepfeed.main:app",
        host="0.0.0.0",
        port=port,
        reload=os.getenv("ENVIRONMENT") == "development",
        workers=int(os.getenv("WEB_CONCURRENCY", 1)),
        log_level=settings.LOG_LEVEL.lower()
    )
