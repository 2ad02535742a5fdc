"""
System API endpoints (health).
"""

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.api.dependencies import get_db
from app.database import crud

router = APIRouter(prefix="/api", tags=["system"])


@router.get("/health")
def health_check(db: Session = Depends(get_db)):
    """Health check: database reachable."""
    try:
        movie_count = crud.count_movies(db)
        genre_count = crud.get_genre_count(db)
    except SQLAlchemyError:
        return {"status": "unhealthy", "database": "unreachable"}
    return {
        "status": "healthy",
        "database": "connected",
        "movies": movie_count,
        "genres": genre_count,
    }
