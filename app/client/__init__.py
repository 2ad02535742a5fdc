"""
Client helpers for the Cinema Catalog API.
"""

from app.client.api_client import ExportError, export_movies_with_filters, fetch_export_movies

__all__ = ["ExportError", "export_movies_with_filters", "fetch_export_movies"]
