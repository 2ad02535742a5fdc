"""
Public movie API endpoints.
"""

from fastapi import APIRouter, Depends, Query

from app.api.dependencies import get_query_service
from app.api.models.envelope import fail, ok
from app.api.models.movie import MovieDetail, PopularMovie
from app.core.catalog import CatalogQueryService

router = APIRouter(prefix="/api/movies", tags=["movies"])


def _movie_list(result):
    if not result.ok:
        return fail(500, result.error)
    return ok([MovieDetail.model_validate(m).model_dump(mode="json") for m in result.value])


@router.get("")
def list_movies(service: CatalogQueryService = Depends(get_query_service)):
    """Every movie that is not expired."""
    return _movie_list(service.all_movies())


@router.get("/now-showing")
def now_showing(service: CatalogQueryService = Depends(get_query_service)):
    """Movies now showing, newest first."""
    return _movie_list(service.now_showing())


@router.get("/coming-soon")
def coming_soon(service: CatalogQueryService = Depends(get_query_service)):
    """Upcoming movies, earliest release first."""
    return _movie_list(service.coming_soon())


@router.get("/popular")
def popular(
    limit: int = Query(10, ge=1, le=50),
    service: CatalogQueryService = Depends(get_query_service),
):
    """Movies now showing ranked by upcoming showtimes."""
    result = service.popular(limit=limit)
    if not result.ok:
        return fail(500, result.error)
    return ok([
        PopularMovie(
            **MovieDetail.model_validate(movie).model_dump(),
            showtime_count=count,
        ).model_dump(mode="json")
        for movie, count in result.value
    ])


@router.get("/{movie_id}")
def get_movie(movie_id: int, service: CatalogQueryService = Depends(get_query_service)):
    """Get movie details by ID."""
    result = service.get_movie(movie_id)
    if not result.ok:
        return fail(500, result.error)
    if result.value is None:
        return fail(404, "Movie not found", error="MovieNotFound")
    return ok(MovieDetail.model_validate(result.value).model_dump(mode="json"))
