"""
SQLAlchemy ORM models for the cinema catalog database.

This module defines the Movie and Genre tables owned by the catalog, the
Movie-Genre junction table, and the scheduling / point-of-sale tables
(showtimes, bookings, payments, order products, booking details, homepage
banners) that reference movies and must be taken into account when a movie
is removed.

Foreign keys carry no ON DELETE CASCADE: dependent rows have to
be removed in dependency order before the rows they reference.
"""

import enum
from datetime import date, datetime, time
from typing import List, Optional
from sqlalchemy import (
    Integer, String, Text, Date, Time, Numeric, ForeignKey,
    CheckConstraint, Index, TIMESTAMP
)
from sqlalchemy.orm import DeclarativeBase, relationship, Mapped, mapped_column
from sqlalchemy.sql import func


class MovieStatus(str, enum.Enum):
    """Status tag stored on a movie row."""

    COMING_SOON = "coming soon"
    NOW_SHOWING = "now showing"
    EXPIRED = "expired"


MOVIE_STATUSES = tuple(s.value for s in MovieStatus)


class Base(DeclarativeBase):
    """Base class for all ORM models."""
    pass


class Genre(Base):
    """
    Genre table. Names are unique and compared case-sensitively.

    Attributes:
        id_genre: Primary key, auto-incremented
        genre_name: Display name of the genre (unique)
    """
    __tablename__ = 'genre'

    id_genre: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    genre_name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)

    def __repr__(self) -> str:
        return f"<Genre(id_genre={self.id_genre}, genre_name='{self.genre_name}')>"


class GenreMovie(Base):
    """Junction table linking movies and genres."""
    __tablename__ = 'genre_movies'

    id_movie: Mapped[int] = mapped_column(
        Integer, ForeignKey('movies.id_movie'), primary_key=True
    )
    id_genre: Mapped[int] = mapped_column(
        Integer, ForeignKey('genre.id_genre'), primary_key=True
    )

    def __repr__(self) -> str:
        return f"<GenreMovie(id_movie={self.id_movie}, id_genre={self.id_genre})>"


class Movie(Base):
    """
    Movie table storing catalog entries.

    Attributes:
        id_movie: Primary key, auto-incremented
        title: Movie title (required)
        original_title: Title in the original language
        director: Director name(s)
        actors: Cast list as free text
        duration: Running time in minutes
        release_date: First day the movie is shown (required)
        end_date: Last day the movie is considered active (optional)
        language / subtitle / country: Descriptive metadata
        description: Synopsis
        poster_image / banner_image / trailer_url: Media URLs
        age_restriction: Age rating label
        status: One of MOVIE_STATUSES
    """
    __tablename__ = 'movies'

    id_movie: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    original_title: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    director: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    actors: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    duration: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    release_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    language: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    subtitle: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    country: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    poster_image: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    banner_image: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    trailer_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    age_restriction: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=MovieStatus.COMING_SOON.value
    )

    # Relationships
    genres: Mapped[List["Genre"]] = relationship(
        "Genre",
        secondary="genre_movies",
        order_by="Genre.genre_name",
        viewonly=True,
    )
    showtimes: Mapped[List["Showtime"]] = relationship("Showtime", back_populates="movie")

    __table_args__ = (
        CheckConstraint(
            "status IN ('coming soon', 'now showing', 'expired')",
            name='check_movie_status'
        ),
        Index('idx_movies_status', 'status'),
        Index('idx_movies_end_date', 'end_date'),
        Index('idx_movies_release_date', 'release_date'),
    )

    @property
    def genre_names(self) -> List[str]:
        return [g.genre_name for g in self.genres]

    def __repr__(self) -> str:
        return f"<Movie(id_movie={self.id_movie}, title='{self.title}', status='{self.status}')>"


class Showtime(Base):
    """A scheduled screening of a movie."""
    __tablename__ = 'showtimes'

    id_showtime: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id_movie: Mapped[int] = mapped_column(
        Integer, ForeignKey('movies.id_movie'), nullable=False
    )
    show_date: Mapped[date] = mapped_column(Date, nullable=False)
    start_time: Mapped[Optional[time]] = mapped_column(Time, nullable=True)

    movie: Mapped["Movie"] = relationship("Movie", back_populates="showtimes")

    __table_args__ = (
        Index('idx_showtimes_movie', 'id_movie'),
        Index('idx_showtimes_date', 'show_date'),
    )

    def __repr__(self) -> str:
        return f"<Showtime(id_showtime={self.id_showtime}, id_movie={self.id_movie}, show_date={self.show_date})>"


class Booking(Base):
    """A ticket booking for a showtime."""
    __tablename__ = 'bookings'

    id_booking: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id_showtime: Mapped[int] = mapped_column(
        Integer, ForeignKey('showtimes.id_showtime'), nullable=False
    )
    customer_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    total_amount: Mapped[Optional[float]] = mapped_column(Numeric(10, 2), nullable=True)
    booked_at: Mapped[datetime] = mapped_column(
        TIMESTAMP,
        nullable=False,
        server_default=func.current_timestamp()
    )

    __table_args__ = (
        Index('idx_bookings_showtime', 'id_showtime'),
    )

    def __repr__(self) -> str:
        return f"<Booking(id_booking={self.id_booking}, id_showtime={self.id_showtime})>"


class Payment(Base):
    """Payment recorded against a booking."""
    __tablename__ = 'payments'

    id_payment: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id_booking: Mapped[int] = mapped_column(
        Integer, ForeignKey('bookings.id_booking'), nullable=False
    )
    amount: Mapped[Optional[float]] = mapped_column(Numeric(10, 2), nullable=True)
    method: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    paid_at: Mapped[Optional[datetime]] = mapped_column(TIMESTAMP, nullable=True)


class OrderProduct(Base):
    """Concession product ordered together with a booking."""
    __tablename__ = 'order_product'

    id_order_product: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id_booking: Mapped[int] = mapped_column(
        Integer, ForeignKey('bookings.id_booking'), nullable=False
    )
    product_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    unit_price: Mapped[Optional[float]] = mapped_column(Numeric(10, 2), nullable=True)


class DetailBooking(Base):
    """Per-seat line of a booking."""
    __tablename__ = 'detail_booking'

    id_detail_booking: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id_booking: Mapped[int] = mapped_column(
        Integer, ForeignKey('bookings.id_booking'), nullable=False
    )
    seat_label: Mapped[Optional[str]] = mapped_column(String(10), nullable=True)
    price: Mapped[Optional[float]] = mapped_column(Numeric(10, 2), nullable=True)


class HomepageBanner(Base):
    """Homepage banner slot promoting a movie."""
    __tablename__ = 'homepage_banners'

    id_banner: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id_movie: Mapped[int] = mapped_column(
        Integer, ForeignKey('movies.id_movie'), nullable=False
    )
    image_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
