"""
Database initialization and schema creation.

This module provides functions to initialize the database schema and
verify that every catalog table exists.
"""

import logging
from typing import Optional
from sqlalchemy import inspect

from app.database.connection import DatabaseManager, get_db_manager
from app.database.models import Base

logger = logging.getLogger(__name__)

EXPECTED_TABLES = frozenset(Base.metadata.tables.keys())


def init_database(database_url: Optional[str] = None, reset: bool = False) -> DatabaseManager:
    """
    Initialize the database and create all tables.

    Args:
        database_url: SQLAlchemy URL (defaults to the configured SQLite file)
        reset: If True, drop existing tables before creating new ones

    Returns:
        DatabaseManager instance
    """
    db_manager = get_db_manager(database_url=database_url)

    if reset:
        logger.warning("Resetting database (dropping all tables)")
        db_manager.reset_database()
    else:
        db_manager.create_tables()
    logger.info("Database tables ready at %s", db_manager.display_url)

    return db_manager


def verify_schema(db_manager: DatabaseManager) -> bool:
    """
    Verify that all tables exist in the database.

    Args:
        db_manager: DatabaseManager instance

    Returns:
        True if all tables exist, False otherwise
    """
    inspector = inspect(db_manager.engine)
    existing_tables = set(inspector.get_table_names())

    missing_tables = EXPECTED_TABLES - existing_tables

    if missing_tables:
        logger.error("Missing tables: %s", sorted(missing_tables))
        return False

    logger.info("All tables exist: %s", sorted(EXPECTED_TABLES))
    return True
