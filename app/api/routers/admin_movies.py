"""
Admin movie management endpoints.
"""

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from app.api.dependencies import get_cleaner, get_db, get_mutation_service, get_query_service
from app.api.models.envelope import fail, ok
from app.api.models.movie import (
    ExportMovieResponse, MovieDetail, MovieResponse, MovieWrite, PaginationResponse
)
from app.core.catalog import CatalogMutationService, CatalogQueryService, LifecycleCleaner
from app.core.export import EXPORT_FORMATS, export_basename, export_filename

router = APIRouter(prefix="/api/admin/movies", tags=["admin"])


@router.get("")
def list_movies(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=1000),
    status: str | None = Query(None),
    search: str | None = Query(None),
    export: bool = Query(False),
    include_genres: bool = Query(False),
    service: CatalogQueryService = Depends(get_query_service),
):
    """List movies with pagination, or every matching movie when export=true."""
    if export:
        result = service.export_movies(status=status, search=search, include_genres=include_genres)
        if not result.ok:
            return fail(500, result.error)
        movies = [ExportMovieResponse.model_validate(m).model_dump(mode="json") for m in result.value]
        return ok({"movies": movies, "total": len(movies)})

    result = service.list_movies(page=page, limit=limit, status=status, search=search)
    if not result.ok:
        return fail(500, result.error)
    pagination = result.value.pagination
    return ok({
        "movies": [MovieResponse.model_validate(m).model_dump(mode="json") for m in result.value.movies],
        "pagination": PaginationResponse(
            page=pagination.page,
            limit=pagination.limit,
            total=pagination.total,
            total_pages=pagination.total_pages,
        ).model_dump(by_alias=True),
    })


@router.post("")
def create_movie(
    movie_in: MovieWrite,
    service: CatalogMutationService = Depends(get_mutation_service),
):
    """Create a movie; genres may be given as IDs or names."""
    movie_id = service.create(movie_in.movie_fields(), movie_in.genres or [])
    return ok(message="Movie created", movieId=movie_id)


@router.get("/export/{fmt}")
def download_export(
    fmt: str,
    status: str | None = Query(None),
    search: str | None = Query(None),
    include_genres: bool = Query(False),
    service: CatalogQueryService = Depends(get_query_service),
):
    """Download the export projection as an xlsx or docx file."""
    if fmt not in EXPORT_FORMATS:
        return fail(400, f"Unsupported export format '{fmt}'", error="ValidationError")
    result = service.export_movies(status=status, search=search, include_genres=include_genres)
    if not result.ok:
        return fail(500, result.error)
    if not result.value:
        return fail(404, "No movies to export")

    render, media_type = EXPORT_FORMATS[fmt]
    filename = export_filename(export_basename(status, search), fmt)
    return Response(
        content=render(result.value),
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post("/cleanup")
def run_cleanup(
    db: Session = Depends(get_db),
    cleaner: LifecycleCleaner = Depends(get_cleaner),
):
    """Run one lifecycle cleanup pass and report what it did."""
    report = cleaner.reconcile(db)
    return ok(report.to_dict())


@router.get("/{movie_id}")
def get_movie(movie_id: int, service: CatalogQueryService = Depends(get_query_service)):
    """Get an active movie by ID."""
    result = service.get_movie(movie_id)
    if not result.ok:
        return fail(500, result.error)
    if result.value is None:
        return fail(404, f"Movie {movie_id} not found", error="MovieNotFound")
    return ok(MovieDetail.model_validate(result.value).model_dump(mode="json"))


@router.put("/{movie_id}")
def update_movie(
    movie_id: int,
    movie_in: MovieWrite,
    service: CatalogMutationService = Depends(get_mutation_service),
):
    """Update the fields present in the body; genres, when given, replace the current ones."""
    genres = movie_in.genres if movie_in.genres_supplied() else None
    movie = service.update(movie_id, movie_in.movie_fields(), genres)
    return ok(MovieDetail.model_validate(movie).model_dump(mode="json"), message="Movie updated")


@router.delete("/{movie_id}")
def delete_movie(movie_id: int, service: CatalogMutationService = Depends(get_mutation_service)):
    """Delete a movie that has no showtimes."""
    service.delete(movie_id)
    return ok(message="Movie deleted")
