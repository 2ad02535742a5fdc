"""
Database module for the cinema catalog.

This module provides database models, connection management, and store
operations using SQLAlchemy ORM.
"""

from app.database.models import (
    Base, Movie, MovieStatus, Genre, GenreMovie, Showtime, Booking,
    Payment, OrderProduct, DetailBooking, HomepageBanner
)
from app.database.connection import DatabaseManager, get_db_manager
from app.database.init_db import init_database, verify_schema
from app.database import crud

__all__ = [
    # Models
    'Base',
    'Movie',
    'MovieStatus',
    'Genre',
    'GenreMovie',
    'Showtime',
    'Booking',
    'Payment',
    'OrderProduct',
    'DetailBooking',
    'HomepageBanner',
    # Connection
    'DatabaseManager',
    'get_db_manager',
    # Initialization
    'init_database',
    'verify_schema',
    # Store operations
    'crud',
]
