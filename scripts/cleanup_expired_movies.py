#!/usr/bin/env python
"""
Run one lifecycle cleanup pass against the catalog database.

Movies whose end date has passed are deleted together with their
showtimes and booking data, or marked as expired when bookings reference
them. Suitable for a nightly cron job.

Usage:
    python scripts/cleanup_expired_movies.py
    python scripts/cleanup_expired_movies.py --as-of 2025-01-31
"""

import sys
import json
import argparse
from datetime import date
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from app.api.config import get_database_url
from app.core.catalog import LifecycleCleaner, StoreError
from app.database import get_db_manager
from app.utils.logging_config import configure_maintenance_logging


def main():
    parser = argparse.ArgumentParser(description="Delete or expire movies past their end date")
    parser.add_argument("--database-url", default=None, help="SQLAlchemy URL (default: $DATABASE_URL)")
    parser.add_argument("--as-of", type=date.fromisoformat, default=None, help="Reference date (YYYY-MM-DD)")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    configure_maintenance_logging(debug=args.debug)

    db_manager = get_db_manager(database_url=args.database_url or get_database_url())
    session = db_manager.get_session()
    try:
        report = LifecycleCleaner().reconcile(session, now=args.as_of)
    except StoreError as exc:
        print(f"Cleanup failed: {exc}", file=sys.stderr)
        return 1
    finally:
        session.close()

    print(json.dumps(report.to_dict(), indent=2))
    return 0 if not report.failures else 2


if __name__ == "__main__":
    sys.exit(main())
