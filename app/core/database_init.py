"""Database initialization module.

Creates the storefront tables from the ORM metadata on app startup. Existing
tables are left untouched, so the call is idempotent.
"""

import logging

from sqlalchemy.engine import Engine

from app.models import Base

logger = logging.getLogger(__name__)


def init_database_schema(engine: Engine) -> None:
    """Create any missing tables.

    Args:
        engine: Engine bound to settings.DATABASE_URL

    Raises:
        Exception: If DDL execution fails
    """
    try:
        Base.metadata.create_all(bind=engine)
        logger.info("Database schema initialized (%s)", ", ".join(sorted(Base.metadata.tables)))
    except Exception as e:
        logger.error(f"Failed to initialize database schema: {str(e)}")
        raise
