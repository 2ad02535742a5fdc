"""
Catalog services: lifecycle cleanup, read projections and mutations.
"""

from app.core.catalog.cleaner import LifecycleCleaner
from app.core.catalog.errors import (
    CatalogError, ValidationError, ReferentialConflict, MovieNotFound, StoreError
)
from app.core.catalog.genre_refs import GenreById, GenreByName, GenreRef, parse_genre_ref
from app.core.catalog.mutations import CatalogMutationService
from app.core.catalog.queries import CatalogQueryService
from app.core.catalog.results import (
    CleanupFailure, ExportMovie, MoviePage, Pagination, QueryResult, ReconcileReport
)

__all__ = [
    "LifecycleCleaner",
    "CatalogQueryService",
    "CatalogMutationService",
    "CatalogError",
    "ValidationError",
    "ReferentialConflict",
    "MovieNotFound",
    "StoreError",
    "GenreById",
    "GenreByName",
    "GenreRef",
    "parse_genre_ref",
    "CleanupFailure",
    "ExportMovie",
    "MoviePage",
    "Pagination",
    "QueryResult",
    "ReconcileReport",
]
