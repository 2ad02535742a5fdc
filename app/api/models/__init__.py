"""
Pydantic schemas for API request/response validation.
"""

from app.api.models.movie import (
    MovieResponse,
    MovieDetail,
    PopularMovie,
    ExportMovieResponse,
    PaginationResponse,
    MovieWrite,
)
from app.api.models.genre import GenreResponse

__all__ = [
    "MovieResponse",
    "MovieDetail",
    "PopularMovie",
    "ExportMovieResponse",
    "PaginationResponse",
    "MovieWrite",
    "GenreResponse",
]
