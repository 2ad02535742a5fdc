"""
HTTP client for the Cinema Catalog admin API.

Includes the export workflow: fetch every movie matching a set of filters,
render it as a spreadsheet or document, and save it under a file name that
records the filters and the export date.
"""

import logging
import os
from datetime import date
from pathlib import Path

import requests

from app.core.catalog.results import ExportMovie
from app.core.export import export_basename, export_filename, to_docx, to_xlsx

logger = logging.getLogger(__name__)

EXPORT_FETCH_LIMIT = 1000

# export type -> (file extension, renderer)
_EXPORT_TYPES = {
    "excel": ("xlsx", to_xlsx),
    "xlsx": ("xlsx", to_xlsx),
    "docx": ("docx", to_docx),
}


class ExportError(RuntimeError):
    """Raised when an export cannot be produced."""


def get_api_base_url() -> str:
    """Get API base URL from env or default."""
    return os.getenv("API_BASE_URL", "http://localhost:8000").rstrip("/")


def list_movies(
    page: int = 1,
    limit: int = 10,
    status: str | None = None,
    search: str | None = None,
) -> dict:
    """Get one page of the admin movie list."""
    params: dict = {"page": page, "limit": limit}
    if status and status != "all":
        params["status"] = status
    if search:
        params["search"] = search
    r = requests.get(f"{get_api_base_url()}/api/admin/movies", params=params, timeout=10)
    r.raise_for_status()
    return r.json()


def run_cleanup() -> dict:
    """Trigger a lifecycle cleanup pass."""
    r = requests.post(f"{get_api_base_url()}/api/admin/movies/cleanup", timeout=30)
    r.raise_for_status()
    return r.json()


def fetch_export_movies(
    status: str | None = None,
    search: str | None = None,
    include_genres: bool = False,
) -> list[ExportMovie]:
    """
    Fetch every movie matching the filters in export form.

    Raises:
        ExportError: If the API reports a failure
    """
    params: dict = {"limit": EXPORT_FETCH_LIMIT, "export": "true"}
    if status and status != "all":
        params["status"] = status
    if search:
        params["search"] = search
    if include_genres:
        params["include_genres"] = "true"

    r = requests.get(f"{get_api_base_url()}/api/admin/movies", params=params, timeout=30)
    data = r.json()
    if not data.get("success"):
        raise ExportError(data.get("message") or "Could not fetch movies for export")
    return [ExportMovie.from_mapping(m) for m in data["data"].get("movies", [])]


def export_movies_with_filters(
    export_type: str,
    status: str | None = None,
    search: str | None = None,
    include_genres: bool = False,
    output_dir: str | Path = ".",
    on: date | None = None,
) -> dict:
    """
    Export the movies matching the filters to a file.

    Args:
        export_type: 'excel' (or 'xlsx') or 'docx'
        status: Status filter ('all' or None for every status)
        search: Title/description search term
        include_genres: Include comma-separated genres
        output_dir: Directory the file is written to
        on: Date used in the file name (defaults to today)

    Returns:
        Dict with success, message, count and path

    Raises:
        ExportError: Unknown export type, API failure, or nothing to export
    """
    if export_type not in _EXPORT_TYPES:
        raise ExportError(f"Unknown export type '{export_type}'")
    ext, render = _EXPORT_TYPES[export_type]

    try:
        movies = fetch_export_movies(status=status, search=search, include_genres=include_genres)
    except requests.RequestException as exc:
        logger.error("Export error: %s", exc)
        raise ExportError(f"Could not reach the catalog API: {exc}") from exc

    if not movies:
        raise ExportError("No movie data to export")

    path = Path(output_dir) / export_filename(export_basename(status, search), ext, on=on)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(render(movies))
    logger.info("Exported %d movies to %s", len(movies), path)

    return {
        "success": True,
        "message": f"Exported {len(movies)} movies",
        "count": len(movies),
        "path": str(path),
    }
