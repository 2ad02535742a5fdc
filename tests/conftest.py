"""
Shared fixtures: an in-memory SQLite catalog with foreign keys enforced,
and small factories for movies and their dependent rows.
"""

from datetime import date, timedelta

import pytest

from app.database.connection import DatabaseManager
from app.database.models import (
    Booking, DetailBooking, Genre, GenreMovie, HomepageBanner, Movie,
    OrderProduct, Payment, Showtime
)

TODAY = date(2025, 6, 15)


@pytest.fixture
def db_manager():
    """In-memory database shared by every session of the test."""
    manager = DatabaseManager("sqlite://")
    manager.create_tables()
    yield manager
    manager.close()


@pytest.fixture
def file_db_manager(tmp_path):
    """SQLite file database; every session gets its own connection."""
    manager = DatabaseManager(f"sqlite:///{tmp_path / 'cinema.db'}")
    manager.create_tables()
    yield manager
    manager.close()


@pytest.fixture
def session(db_manager):
    """Create a new database session for testing."""
    session = db_manager.get_session()
    yield session
    session.close()


@pytest.fixture
def make_movie(session):
    """Factory inserting a committed movie; returns its ID."""
    def _make_movie(title="Test Movie", status="now showing", end_date=None,
                    release_date=TODAY - timedelta(days=7), genres=(), **fields):
        movie = Movie(
            title=title,
            status=status,
            release_date=release_date,
            end_date=end_date,
            **fields
        )
        session.add(movie)
        session.flush()
        for name in genres:
            genre = session.query(Genre).filter(Genre.genre_name == name).first()
            if genre is None:
                genre = Genre(genre_name=name)
                session.add(genre)
                session.flush()
            session.add(GenreMovie(id_movie=movie.id_movie, id_genre=genre.id_genre))
        session.commit()
        return movie.id_movie
    return _make_movie


@pytest.fixture
def add_showtime(session):
    """Factory inserting a showtime for a movie; returns its ID."""
    def _add_showtime(movie_id, show_date=TODAY):
        showtime = Showtime(id_movie=movie_id, show_date=show_date)
        session.add(showtime)
        session.commit()
        return showtime.id_showtime
    return _add_showtime


@pytest.fixture
def add_booking(session):
    """
    Factory inserting a booking for a showtime, with one payment, one
    concession order and one seat line. Returns the booking ID.
    """
    def _add_booking(showtime_id):
        booking = Booking(id_showtime=showtime_id, customer_name="Jane", total_amount=150)
        session.add(booking)
        session.flush()
        session.add_all([
            Payment(id_booking=booking.id_booking, amount=150, method="card"),
            OrderProduct(id_booking=booking.id_booking, product_name="Popcorn", quantity=1, unit_price=50),
            DetailBooking(id_booking=booking.id_booking, seat_label="A1", price=100),
        ])
        session.commit()
        return booking.id_booking
    return _add_booking


@pytest.fixture
def add_banner(session):
    """Factory inserting a homepage banner for a movie."""
    def _add_banner(movie_id, position=0):
        banner = HomepageBanner(id_movie=movie_id, image_url="https://img/banner.jpg", position=position)
        session.add(banner)
        session.commit()
        return banner.id_banner
    return _add_banner
