"""
Genre API endpoints.
"""

from fastapi import APIRouter, Depends

from app.api.dependencies import get_query_service
from app.api.models.envelope import fail, ok
from app.api.models.genre import GenreResponse
from app.core.catalog import CatalogQueryService

router = APIRouter(prefix="/api/genres", tags=["genres"])


@router.get("")
def list_genres(service: CatalogQueryService = Depends(get_query_service)):
    """List genres by name."""
    result = service.genres()
    if not result.ok:
        return fail(500, result.error)
    return ok([GenreResponse.model_validate(g).model_dump() for g in result.value])
