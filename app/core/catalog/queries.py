"""
Read projections over the movie catalog.

Every read first runs the lifecycle cleaner so results never contain movies
whose end date passed since the previous pass. Reads never raise for store
failures: they return a QueryResult whose value is empty and whose error
describes the failure, after logging it.
"""

import logging
from datetime import date
from typing import List, Optional, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.catalog.cleaner import LifecycleCleaner
from app.core.catalog.errors import CatalogError, ValidationError
from app.core.catalog.results import ExportMovie, MoviePage, Pagination, QueryResult
from app.database import crud
from app.database.models import Genre, Movie, MovieStatus

logger = logging.getLogger(__name__)


class CatalogQueryService:
    """
    Query service bound to one database session.

    Args:
        session: Database session
        cleaner: Shared LifecycleCleaner run before each read
        today: Reference date (defaults to the current date on each call)
    """

    def __init__(self, session: Session, cleaner: LifecycleCleaner, today: Optional[date] = None):
        self.session = session
        self.cleaner = cleaner
        self._today = today

    @property
    def today(self) -> date:
        return self._today or date.today()

    def _reconcile(self) -> None:
        self.cleaner.reconcile(self.session, self.today)

    def _fail(self, empty, message: str, exc: Exception) -> QueryResult:
        self.session.rollback()
        logger.error("%s: %s", message, exc)
        return QueryResult.failure(empty, message)

    def list_movies(
        self,
        page: int = 1,
        limit: int = 10,
        status: Optional[str] = None,
        search: Optional[str] = None,
    ) -> QueryResult[MoviePage]:
        """
        Get one page of movies.

        Args:
            page: 1-based page number
            limit: Page size
            status: Status filter; None or 'all' matches every status
            search: Case-insensitive substring of title or description

        Returns:
            QueryResult wrapping a MoviePage

        Raises:
            ValidationError: If page or limit is not positive
        """
        if page < 1 or limit < 1:
            raise ValidationError("page and limit must be positive integers")

        empty = MoviePage(movies=[], pagination=Pagination(page=page, limit=limit, total=0))
        try:
            self._reconcile()
            filters = crud.build_movie_filters(status, search)
            total = crud.count_movies(self.session, filters)
            movies = crud.list_movies(self.session, filters, offset=(page - 1) * limit, limit=limit)
        except (CatalogError, SQLAlchemyError) as exc:
            return self._fail(empty, "Could not load the movie list", exc)

        return QueryResult.success(
            MoviePage(movies=movies, pagination=Pagination(page=page, limit=limit, total=total))
        )

    def export_movies(
        self,
        status: Optional[str] = None,
        search: Optional[str] = None,
        include_genres: bool = False,
    ) -> QueryResult[List[ExportMovie]]:
        """
        Get every matching movie whose end date has not passed, as flat export records.

        Ordered by status, then newest release first. No pagination.
        """
        try:
            self._reconcile()
            filters = crud.build_movie_filters(status, search)
            movies = crud.list_movies_for_export(
                self.session, self.today, filters, include_genres=include_genres
            )
            records = [ExportMovie.from_movie(m, include_genres=include_genres) for m in movies]
        except (CatalogError, SQLAlchemyError) as exc:
            return self._fail([], "Could not load movies for export", exc)
        return QueryResult.success(records)

    def get_movie(self, movie_id: int) -> QueryResult[Optional[Movie]]:
        """Get one movie by ID if its end date has not passed."""
        try:
            self._reconcile()
            movie = crud.get_active_movie(self.session, movie_id, self.today)
        except (CatalogError, SQLAlchemyError) as exc:
            return self._fail(None, f"Could not load movie {movie_id}", exc)
        return QueryResult.success(movie)

    def now_showing(self) -> QueryResult[List[Movie]]:
        """Movies now showing, newest release first."""
        return self._by_status(MovieStatus.NOW_SHOWING, ascending=False)

    def coming_soon(self) -> QueryResult[List[Movie]]:
        """Upcoming movies, earliest release first."""
        return self._by_status(MovieStatus.COMING_SOON, ascending=True)

    def _by_status(self, status: MovieStatus, ascending: bool) -> QueryResult[List[Movie]]:
        try:
            self._reconcile()
            movies = crud.get_movies_by_status(self.session, status.value, self.today, ascending=ascending)
        except (CatalogError, SQLAlchemyError) as exc:
            return self._fail([], f"Could not load '{status.value}' movies", exc)
        return QueryResult.success(movies)

    def popular(self, limit: int = 10) -> QueryResult[List[Tuple[Movie, int]]]:
        """Movies now showing ranked by number of upcoming showtimes."""
        try:
            self._reconcile()
            ranked = crud.get_popular_movies(self.session, self.today, limit=limit)
        except (CatalogError, SQLAlchemyError) as exc:
            return self._fail([], "Could not load popular movies", exc)
        return QueryResult.success(ranked)

    def all_movies(self) -> QueryResult[List[Movie]]:
        """Every movie that is neither expired by status nor by date."""
        try:
            self._reconcile()
            movies = crud.get_all_active_movies(self.session, self.today)
        except (CatalogError, SQLAlchemyError) as exc:
            return self._fail([], "Could not load movies", exc)
        return QueryResult.success(movies)

    def genres(self) -> QueryResult[List[Genre]]:
        try:
            genres = crud.get_genres(self.session)
        except SQLAlchemyError as exc:
            return self._fail([], "Could not load genres", exc)
        return QueryResult.success(genres)
