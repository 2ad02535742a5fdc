#!/usr/bin/env python
"""
Export the movie catalog through the admin API.

Usage:
    python scripts/export_movies.py excel
    python scripts/export_movies.py docx --status "now showing" --include-genres
    API_BASE_URL=http://cinema.local:8000 python scripts/export_movies.py excel --search matrix -o exports/
"""

import sys
import argparse
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from app.client.api_client import ExportError, export_movies_with_filters
from app.utils.logging_config import setup_logging


def main():
    parser = argparse.ArgumentParser(description="Export movies to a spreadsheet or Word document")
    parser.add_argument("export_type", choices=["excel", "docx"], help="Output format")
    parser.add_argument("--status", default="all", help="Status filter (default: all)")
    parser.add_argument("--search", default=None, help="Title/description search term")
    parser.add_argument("--include-genres", action="store_true", help="Include genres column")
    parser.add_argument("-o", "--output-dir", default=".", help="Directory for the exported file")
    args = parser.parse_args()

    setup_logging(level="INFO")

    try:
        result = export_movies_with_filters(
            args.export_type,
            status=args.status,
            search=args.search,
            include_genres=args.include_genres,
            output_dir=args.output_dir,
        )
    except ExportError as exc:
        print(f"Export failed: {exc}", file=sys.stderr)
        return 1

    print(f"{result['message']} -> {result['path']}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
