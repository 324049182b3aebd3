"""Database initialization script."""
import asyncio
import logging

from auth_backend.config import get_settings
from auth_backend.database import Database
from auth_backend.logging_config import configure_logging

logger = logging.getLogger("init_db")


async def init_database():
    """Create all tables against DATABASE_URL."""
    settings = get_settings()
    configure_logging(settings.log_level)

    database = Database(settings.database_url, echo=settings.debug)
    try:
        logger.info("Creating database tables...")
        await database.create_all()
        logger.info("Database initialization complete!")
    finally:
        await database.dispose()


if __name__ == "__main__":
    asyncio.run(init_database())
