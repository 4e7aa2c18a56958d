# app/db/init_db.py
"""Database initialization utilities."""
import logging

from sqlalchemy import inspect
from sqlalchemy.engine import Engine

from app.db.base import Base
from app.db.session import engine as default_engine

logger = logging.getLogger(__name__)


def init_db(engine: Engine = default_engine) -> None:
    """
    Initialize the database by creating all missing tables.

    Note: This is suitable for development/testing only.
    For production, manage the schema with migrations.
    """
    existing_tables = inspect(engine).get_table_names()
    Base.metadata.create_all(bind=engine)
    created = set(Base.metadata.tables) - set(existing_tables)
    if created:
        logger.info(f"Created database tables: {sorted(created)}")
    else:
        logger.info(f"Database already initialized with {len(existing_tables)} tables")


def drop_db(engine: Engine = default_engine) -> None:
    """
    Drop all database tables.

    WARNING: This will delete all data! Only for development/testing purposes.
    """
    Base.metadata.drop_all(bind=engine)
    logger.warning("All database tables dropped")


def reset_db(engine: Engine = default_engine) -> None:
    """Drop and recreate all tables."""
    logger.warning("Resetting database...")
    drop_db(engine)
    init_db(engine)
    logger.info("Database reset complete")
