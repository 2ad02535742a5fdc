"""
FastAPI dependency injection for database session and catalog services.
"""

import logging
from typing import Generator

from fastapi import Depends
from sqlalchemy.orm import Session

from app.api.config import get_database_url
from app.core.catalog import CatalogMutationService, CatalogQueryService, LifecycleCleaner
from app.database.connection import get_db_manager

logger = logging.getLogger(__name__)


def get_db() -> Generator[Session, None, None]:
    """Yield database session for FastAPI Depends()."""
    db_manager = get_db_manager(database_url=get_database_url())
    with db_manager.session_scope() as session:
        yield session


# One cleaner per process so concurrent requests share its lock
_cleaner: LifecycleCleaner | None = None


def get_cleaner() -> LifecycleCleaner:
    """Get or create the singleton LifecycleCleaner."""
    global _cleaner
    if _cleaner is None:
        _cleaner = LifecycleCleaner()
    return _cleaner


def get_query_service(
    db: Session = Depends(get_db),
    cleaner: LifecycleCleaner = Depends(get_cleaner),
) -> CatalogQueryService:
    return CatalogQueryService(db, cleaner)


def get_mutation_service(db: Session = Depends(get_db)) -> CatalogMutationService:
    return CatalogMutationService(db)
