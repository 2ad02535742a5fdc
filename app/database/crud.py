"""
Store operations for the cinema catalog.

Functions in this module only execute statements and flush the session.
Committing and rolling back is left to the catalog services, so several
store operations can be grouped into one transaction (the expiry cascade in
particular must succeed or fail as a whole).
"""

import logging
from datetime import date
from typing import Any, Dict, List, Optional, Sequence, Tuple
from sqlalchemy import and_, delete, func, or_, select, update
from sqlalchemy.orm import Session, selectinload
from sqlalchemy.sql import ColumnElement, Delete

from app.database.models import (
    Booking, DetailBooking, Genre, GenreMovie, HomepageBanner, Movie,
    MovieStatus, OrderProduct, Payment, Showtime
)

logger = logging.getLogger(__name__)

_NO_SYNC = {"synchronize_session": False}


def active_movie_filter(today: date) -> ColumnElement:
    """Movies with no end date, or whose end date is today or later."""
    return or_(Movie.end_date.is_(None), Movie.end_date >= today)


# ==================== MOVIE LOOKUPS ====================

def get_movie(session: Session, movie_id: int) -> Optional[Movie]:
    """
    Get a movie by ID, regardless of its end date.

    Args:
        session: Database session
        movie_id: Movie ID

    Returns:
        Movie object or None if not found
    """
    return session.query(Movie).filter(Movie.id_movie == movie_id).first()


def get_active_movie(session: Session, movie_id: int, today: date) -> Optional[Movie]:
    """
    Get a movie by ID if its end date has not passed.

    Args:
        session: Database session
        movie_id: Movie ID
        today: Reference date

    Returns:
        Movie object (genres loaded) or None
    """
    return (
        session.query(Movie)
        .options(selectinload(Movie.genres))
        .filter(Movie.id_movie == movie_id, active_movie_filter(today))
        .first()
    )


def create_movie(session: Session, **fields: Any) -> Movie:
    """
    Insert a movie row and flush to obtain its ID.

    Args:
        session: Database session
        **fields: Column values

    Returns:
        Created Movie object
    """
    movie = Movie(**fields)
    session.add(movie)
    session.flush()
    return movie


def apply_movie_changes(session: Session, movie: Movie, changes: Dict[str, Any]) -> Movie:
    """
    Copy the given column values onto a movie and flush.

    Args:
        session: Database session
        movie: Movie to modify
        changes: Column name to new value

    Returns:
        The modified Movie object
    """
    for key, value in changes.items():
        setattr(movie, key, value)
    session.flush()
    return movie


def count_showtimes_for_movie(session: Session, movie_id: int) -> int:
    """Count showtimes scheduled for a movie."""
    return session.query(func.count(Showtime.id_showtime)).filter(
        Showtime.id_movie == movie_id
    ).scalar() or 0


def count_bookings_for_movie(session: Session, movie_id: int) -> int:
    """
    Count bookings made for any showtime of a movie.

    Args:
        session: Database session
        movie_id: Movie ID

    Returns:
        Number of referencing bookings
    """
    return session.query(func.count(Booking.id_booking)).join(
        Showtime, Booking.id_showtime == Showtime.id_showtime
    ).filter(Showtime.id_movie == movie_id).scalar() or 0


# ==================== EXPIRY ====================

def find_expiry_candidates(session: Session, today: date) -> List[int]:
    """
    Find movies whose end date is strictly before the reference date.

    Args:
        session: Database session
        today: Reference date

    Returns:
        List of movie IDs
    """
    rows = session.query(Movie.id_movie).filter(
        Movie.end_date.isnot(None),
        Movie.end_date < today
    ).order_by(Movie.id_movie).all()
    return [row.id_movie for row in rows]


def mark_movie_expired(session: Session, movie_id: int) -> int:
    """
    Set a movie's status to expired.

    Returns:
        Number of rows updated
    """
    result = session.execute(
        update(Movie)
        .where(Movie.id_movie == movie_id)
        .values(status=MovieStatus.EXPIRED.value),
        execution_options=_NO_SYNC,
    )
    return result.rowcount


def cascade_delete_statements(movie_id: int) -> List[Tuple[str, Delete]]:
    """
    Build the delete statements that remove a movie and every row depending on it.

    The list is in dependency order: each statement removes rows that
    reference rows removed by a later statement.

    Args:
        movie_id: Movie ID

    Returns:
        List of (table name, DELETE statement) pairs
    """
    showtime_ids = select(Showtime.id_showtime).where(Showtime.id_movie == movie_id)
    booking_ids = select(Booking.id_booking).where(Booking.id_showtime.in_(showtime_ids))

    return [
        ('detail_booking', delete(DetailBooking).where(DetailBooking.id_booking.in_(booking_ids))),
        ('order_product', delete(OrderProduct).where(OrderProduct.id_booking.in_(booking_ids))),
        ('payments', delete(Payment).where(Payment.id_booking.in_(booking_ids))),
        ('bookings', delete(Booking).where(Booking.id_showtime.in_(showtime_ids))),
        ('showtimes', delete(Showtime).where(Showtime.id_movie == movie_id)),
        ('genre_movies', delete(GenreMovie).where(GenreMovie.id_movie == movie_id)),
        ('homepage_banners', delete(HomepageBanner).where(HomepageBanner.id_movie == movie_id)),
        ('movies', delete(Movie).where(Movie.id_movie == movie_id)),
    ]


def delete_movie_cascade(session: Session, movie_id: int) -> int:
    """
    Remove a movie together with its showtimes, bookings and booking data.

    Statements run in the order given by cascade_delete_statements(). Any
    failure propagates; the caller must roll back the transaction.

    Args:
        session: Database session
        movie_id: Movie ID

    Returns:
        Number of movie rows deleted (0 or 1)
    """
    deleted = 0
    for table, statement in cascade_delete_statements(movie_id):
        result = session.execute(statement, execution_options=_NO_SYNC)
        logger.debug("Movie %s cascade: removed %s row(s) from %s", movie_id, result.rowcount, table)
        if table == 'movies':
            deleted = result.rowcount
    return deleted


def delete_movie_row(session: Session, movie_id: int) -> int:
    """
    Remove a movie that has no showtimes: genre links, banners, then the movie.

    Returns:
        Number of movie rows deleted
    """
    session.execute(delete(GenreMovie).where(GenreMovie.id_movie == movie_id), execution_options=_NO_SYNC)
    session.execute(delete(HomepageBanner).where(HomepageBanner.id_movie == movie_id), execution_options=_NO_SYNC)
    result = session.execute(delete(Movie).where(Movie.id_movie == movie_id), execution_options=_NO_SYNC)
    return result.rowcount


# ==================== GENRES ====================

def get_genre(session: Session, genre_id: int) -> Optional[Genre]:
    """Get a genre by ID."""
    return session.query(Genre).filter(Genre.id_genre == genre_id).first()


def get_genre_by_name(session: Session, name: str) -> Optional[Genre]:
    """Get a genre by exact name."""
    return session.query(Genre).filter(Genre.genre_name == name).first()


def create_genre(session: Session, name: str) -> Genre:
    """Insert a genre and flush to obtain its ID."""
    genre = Genre(genre_name=name)
    session.add(genre)
    session.flush()
    return genre


def get_or_create_genre(session: Session, name: str) -> Tuple[Genre, bool]:
    """
    Reuse the genre with this name, or create it.

    Args:
        session: Database session
        name: Genre name (case-sensitive)

    Returns:
        (Genre, created) tuple
    """
    genre = get_genre_by_name(session, name)
    if genre is not None:
        return genre, False
    return create_genre(session, name), True


def get_genres(session: Session) -> List[Genre]:
    """Get all genres ordered by name."""
    return session.query(Genre).order_by(Genre.genre_name).all()


def get_genre_count(session: Session) -> int:
    """Get total count of genres."""
    return session.query(func.count(Genre.id_genre)).scalar()


def link_genre(session: Session, movie_id: int, genre_id: int) -> GenreMovie:
    """Link a genre to a movie."""
    link = GenreMovie(id_movie=movie_id, id_genre=genre_id)
    session.add(link)
    session.flush()
    return link


def unlink_all_genres(session: Session, movie_id: int) -> int:
    """
    Remove every genre link of a movie.

    Returns:
        Number of links removed
    """
    result = session.execute(
        delete(GenreMovie).where(GenreMovie.id_movie == movie_id),
        execution_options={"synchronize_session": "evaluate"},
    )
    return result.rowcount


# ==================== LISTINGS ====================

def build_movie_filters(status: Optional[str] = None, search: Optional[str] = None) -> List[ColumnElement]:
    """
    Build WHERE conditions for admin listings.

    Args:
        status: Status to match; None or 'all' disables the filter
        search: Case-insensitive substring matched against title or description

    Returns:
        List of SQL conditions (combined with AND)
    """
    conditions = []
    if status and status != 'all':
        conditions.append(Movie.status == status)
    if search:
        pattern = f"%{search}%"
        conditions.append(or_(Movie.title.ilike(pattern), Movie.description.ilike(pattern)))
    return conditions


def count_movies(session: Session, filters: Sequence[ColumnElement] = ()) -> int:
    """Count movies matching the given conditions."""
    return session.query(func.count(Movie.id_movie)).filter(*filters).scalar() or 0


def list_movies(
    session: Session,
    filters: Sequence[ColumnElement] = (),
    offset: int = 0,
    limit: int = 10
) -> List[Movie]:
    """
    Get one page of movies, newest release first.

    Args:
        session: Database session
        filters: Conditions from build_movie_filters()
        offset: Number of records to skip
        limit: Maximum number of records to return

    Returns:
        List of Movie objects
    """
    return (
        session.query(Movie)
        .filter(*filters)
        .order_by(Movie.release_date.desc(), Movie.id_movie.desc())
        .offset(offset)
        .limit(limit)
        .all()
    )


def list_movies_for_export(
    session: Session,
    today: date,
    filters: Sequence[ColumnElement] = (),
    include_genres: bool = False
) -> List[Movie]:
    """
    Get every movie matching the filters whose end date has not passed.

    Ordered by status, then newest release first.
    """
    query = session.query(Movie).filter(*filters, active_movie_filter(today))
    if include_genres:
        query = query.options(selectinload(Movie.genres))
    return query.order_by(Movie.status.asc(), Movie.release_date.desc(), Movie.id_movie.asc()).all()


def get_movies_by_status(
    session: Session,
    status: str,
    today: date,
    ascending: bool = False
) -> List[Movie]:
    """
    Get active movies with the given status, ordered by release date.

    Args:
        session: Database session
        status: Movie status
        today: Reference date
        ascending: Oldest release first when True

    Returns:
        List of Movie objects with genres loaded
    """
    order = Movie.release_date.asc() if ascending else Movie.release_date.desc()
    return (
        session.query(Movie)
        .options(selectinload(Movie.genres))
        .filter(Movie.status == status, active_movie_filter(today))
        .order_by(order)
        .all()
    )


def get_popular_movies(session: Session, today: date, limit: int = 10) -> List[Tuple[Movie, int]]:
    """
    Rank movies now showing by their number of upcoming showtimes.

    Args:
        session: Database session
        today: Reference date; showtimes before it are not counted
        limit: Maximum number of movies

    Returns:
        List of (Movie, upcoming showtime count) tuples
    """
    showtime_count = func.count(Showtime.id_showtime).label('showtime_count')
    rows = (
        session.query(Movie, showtime_count)
        .outerjoin(
            Showtime,
            and_(Showtime.id_movie == Movie.id_movie, Showtime.show_date >= today)
        )
        .options(selectinload(Movie.genres))
        .filter(Movie.status == MovieStatus.NOW_SHOWING.value, active_movie_filter(today))
        .group_by(Movie.id_movie)
        .order_by(showtime_count.desc(), Movie.release_date.desc())
        .limit(limit)
        .all()
    )
    return [(movie, count) for movie, count in rows]


def get_all_active_movies(session: Session, today: date) -> List[Movie]:
    """Get every movie that is not expired, newest release first."""
    return (
        session.query(Movie)
        .options(selectinload(Movie.genres))
        .filter(Movie.status != MovieStatus.EXPIRED.value, active_movie_filter(today))
        .order_by(Movie.release_date.desc())
        .all()
    )
