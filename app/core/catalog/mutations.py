"""
Create, update and delete operations on catalog movies.

Each operation runs in a single transaction on the bound session: it commits
on success, and rolls back before raising on any failure.
"""

import logging
from datetime import date
from typing import Any, Iterable, Mapping, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.catalog.errors import MovieNotFound, ReferentialConflict, StoreError, ValidationError
from app.core.catalog.genre_refs import parse_genre_refs, resolve_genre_ids
from app.database import crud
from app.database.models import MOVIE_STATUSES, Movie

logger = logging.getLogger(__name__)

MOVIE_FIELDS = frozenset({
    "title", "original_title", "director", "actors", "duration",
    "release_date", "end_date", "language", "subtitle", "country",
    "description", "poster_image", "banner_image", "trailer_url",
    "age_restriction", "status",
})

REQUIRED_FIELDS = ("title", "release_date", "status")


def _check_fields(fields: Mapping[str, Any]) -> None:
    unknown = set(fields) - MOVIE_FIELDS
    if unknown:
        raise ValidationError(f"Unknown movie field(s): {', '.join(sorted(unknown))}")
    status = fields.get("status")
    if status is not None and status not in MOVIE_STATUSES:
        raise ValidationError(f"Invalid status {status!r}; expected one of {', '.join(MOVIE_STATUSES)}")


class CatalogMutationService:
    """
    Mutation service bound to one database session.

    Args:
        session: Database session
        today: Reference date for deciding whether a movie is still active
    """

    def __init__(self, session: Session, today: Optional[date] = None):
        self.session = session
        self._today = today

    @property
    def today(self) -> date:
        return self._today or date.today()

    def create(self, fields: Mapping[str, Any], genres: Iterable[Any] = ()) -> int:
        """
        Create a movie and link its genres.

        Args:
            fields: Column values; title, release_date and status are required
            genres: Genre references (GenreRef, int IDs or names)

        Returns:
            ID of the new movie

        Raises:
            ValidationError: Missing required field, bad status or unknown genre ID
            StoreError: Database failure
        """
        _check_fields(fields)
        missing = [name for name in REQUIRED_FIELDS if not fields.get(name)]
        if missing:
            raise ValidationError(
                "Please provide all required fields (title, release date, status); "
                f"missing: {', '.join(missing)}"
            )
        refs = parse_genre_refs(genres)

        try:
            movie = crud.create_movie(self.session, **dict(fields))
            for genre_id in resolve_genre_ids(self.session, refs):
                crud.link_genre(self.session, movie.id_movie, genre_id)
            movie_id = movie.id_movie
            self.session.commit()
        except ValidationError:
            self.session.rollback()
            raise
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.error("Error creating movie %r: %s", fields.get("title"), exc)
            raise StoreError("Could not create the movie") from exc

        logger.info("Created movie %s (%s)", movie_id, fields.get("title"))
        return movie_id

    def update(
        self,
        movie_id: int,
        changes: Mapping[str, Any],
        genres: Optional[Iterable[Any]] = None,
    ) -> Movie:
        """
        Update an active movie.

        Only keys present in `changes` are written; every other column keeps
        its stored value. A present key is written even when falsy (e.g.
        duration=0), except that required fields cannot be cleared.

        Args:
            movie_id: Movie ID
            changes: Column values to overwrite
            genres: When not None, replaces the movie's genre links

        Returns:
            The updated Movie

        Raises:
            MovieNotFound: No active movie with this ID
            ValidationError: Bad input
            StoreError: Database failure
        """
        _check_fields(changes)
        cleared = [name for name in REQUIRED_FIELDS if name in changes and not changes[name]]
        if cleared:
            raise ValidationError(f"Required field(s) cannot be empty: {', '.join(cleared)}")
        refs = parse_genre_refs(genres) if genres is not None else None

        try:
            movie = crud.get_active_movie(self.session, movie_id, self.today)
            if movie is None:
                raise MovieNotFound(movie_id)
            crud.apply_movie_changes(self.session, movie, dict(changes))
            if refs is not None:
                crud.unlink_all_genres(self.session, movie_id)
                for genre_id in resolve_genre_ids(self.session, refs):
                    crud.link_genre(self.session, movie_id, genre_id)
            self.session.commit()
        except (MovieNotFound, ValidationError):
            self.session.rollback()
            raise
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.error("Error updating movie %s: %s", movie_id, exc)
            raise StoreError(f"Could not update movie {movie_id}") from exc

        self.session.refresh(movie)
        logger.info("Updated movie %s", movie_id)
        return movie

    def delete(self, movie_id: int) -> None:
        """
        Delete an active movie that has no showtimes.

        Raises:
            MovieNotFound: No active movie with this ID
            ReferentialConflict: Showtimes reference the movie
            StoreError: Database failure
        """
        try:
            movie = crud.get_active_movie(self.session, movie_id, self.today)
            if movie is None:
                raise MovieNotFound(movie_id)
            showtimes = crud.count_showtimes_for_movie(self.session, movie_id)
            if showtimes > 0:
                raise ReferentialConflict(
                    f"Cannot delete movie {movie_id}: it is used by {showtimes} showtime(s)"
                )
            crud.delete_movie_row(self.session, movie_id)
            self.session.commit()
        except (MovieNotFound, ReferentialConflict):
            self.session.rollback()
            raise
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.error("Error deleting movie %s: %s", movie_id, exc)
            raise StoreError(f"Could not delete movie {movie_id}") from exc

        logger.info("Deleted movie %s", movie_id)
