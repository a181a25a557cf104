import sys
import logging

from prepfeed.core.config import settings
from prepfeed.core.logging import setup_logging
from prepfeed.db.database import SessionLocal, init_db
from prepfeed.data.seed import seed_database

def main() -> int:
    setup_logging(settings.LOG_LEVEL, settings.LOG_JSON)
    logger = logging.getLogger("prepfeed.scripts.seed_db")
    logger.info("Starting database seeding process...")

    init_db()
    db = SessionLocal()
    try:
        inserted = seed_database(db)
        logger.info(f"Database seeding completed, {inserted} articles inserted")
        return 0
    except Exception as e:
        logger.error(f"Error during database seeding: {str(e)}")
        return 1
    finally:
        db.close()

if __name__ == "__main__":
    sys.exit(main())
