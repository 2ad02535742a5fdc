"""
FastAPI application entry point for the Cinema Catalog API.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from app.api.config import get_api_host, get_api_port, get_cors_origins, get_database_url, get_log_file, get_log_level
from app.api.models.envelope import fail
from app.api.routers import admin_movies, movies, genres, system
from app.core.catalog import CatalogError, StoreError
from app.database.connection import get_db_manager
from app.utils.logging_config import configure_api_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_api_logging(level=get_log_level(), log_file=get_log_file())
    get_db_manager(database_url=get_database_url()).create_tables()
    logger.info("Cinema Catalog API started")
    yield


app = FastAPI(
    title="Cinema Catalog API",
    description="Movie catalog management for a cinema chain: listing, export, create, update, delete and expiry cleanup",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(CatalogError)
async def catalog_error_handler(request: Request, exc: CatalogError):
    if isinstance(exc, StoreError):
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.__cause__ or exc)
    return fail(exc.status_code, exc.message, error=type(exc).__name__)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    detail = "; ".join(
        f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg')}" for err in errors
    )
    return fail(400, f"Invalid request: {detail}", error="ValidationError")


app.include_router(admin_movies.router)
app.include_router(movies.router)
app.include_router(genres.router)
app.include_router(system.router)


@app.get("/")
def root():
    """Root endpoint."""
    return {
        "message": "Cinema Catalog API",
        "docs": "/docs",
        "health": "/api/health",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.api.main:app", host=get_api_host(), port=get_api_port())
