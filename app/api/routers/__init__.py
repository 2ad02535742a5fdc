"""
API route handlers.
"""

from app.api.routers import admin_movies, movies, genres, system

__all__ = ["admin_movies", "movies", "genres", "system"]
