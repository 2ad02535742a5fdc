"""
Error types raised by the catalog services.
"""


class CatalogError(Exception):
    """Base class for catalog failures."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(CatalogError, ValueError):
    """Required input is missing or malformed."""

    status_code = 400


class ReferentialConflict(CatalogError):
    """The operation is blocked by rows that reference the movie."""

    status_code = 400


class MovieNotFound(CatalogError):
    """No active movie with the requested ID."""

    status_code = 404

    def __init__(self, movie_id: int):
        super().__init__(f"Movie {movie_id} not found")
        self.movie_id = movie_id


class StoreError(CatalogError):
    """The underlying database rejected or failed an operation."""

    status_code = 500
