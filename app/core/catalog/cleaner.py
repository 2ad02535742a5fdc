"""
Lifecycle cleanup of movies whose end date has passed.

Every expired movie is resolved independently:

- if any booking references one of its showtimes, the movie is kept and its
  status is set to "expired";
- otherwise the movie and all its dependent rows are deleted in one
  transaction. If that transaction fails it is rolled back entirely and the
  movie is soft-expired instead, so it still disappears from active listings.

A failure on one movie never stops the pass.
"""

import logging
import threading
from datetime import date
from typing import Callable, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.catalog.errors import StoreError
from app.core.catalog.results import CleanupFailure, ReconcileReport
from app.database import crud

logger = logging.getLogger(__name__)


def _describe(exc: SQLAlchemyError) -> str:
    orig = getattr(exc, "orig", None)
    return str(orig) if orig is not None else str(exc)


class LifecycleCleaner:
    """
    Reconciles the catalog with the calendar.

    One instance is shared per process; its lock ensures that two overlapping
    requests never run cascades on the same candidates at the same time.

    Usage:
        cleaner = LifecycleCleaner()
        report = cleaner.reconcile(session)
    """

    def __init__(self, clock: Callable[[], date] = date.today):
        self._clock = clock
        self._lock = threading.Lock()

    def reconcile(self, session: Session, now: Optional[date] = None) -> ReconcileReport:
        """
        Run one cleanup pass.

        Args:
            session: Database session. Committed once per resolved movie.
            now: Reference date; movies with end_date < now are candidates.
                Defaults to today.

        Returns:
            ReconcileReport with deleted/expired counts and fallback failures

        Raises:
            StoreError: If the candidate scan itself fails
        """
        today = now or self._clock()
        with self._lock:
            return self._run(session, today)

    def _run(self, session: Session, today: date) -> ReconcileReport:
        report = ReconcileReport()
        try:
            candidates = crud.find_expiry_candidates(session, today)
        except SQLAlchemyError as exc:
            session.rollback()
            logger.error("Error scanning for expired movies: %s", _describe(exc))
            raise StoreError("Could not scan for expired movies") from exc

        for movie_id in candidates:
            self._resolve(session, movie_id, report)

        if candidates:
            logger.info(
                "Cleanup completed. Deleted %d expired movie(s), marked %d as expired, %d failure(s)",
                report.deleted_count, report.expired_count, len(report.failures)
            )
        return report

    def _resolve(self, session: Session, movie_id: int, report: ReconcileReport) -> None:
        try:
            booking_count = crud.count_bookings_for_movie(session, movie_id)
            if booking_count > 0:
                crud.mark_movie_expired(session, movie_id)
                session.commit()
                report.expired_count += 1
                logger.info("Movie %s marked as expired (has %d bookings)", movie_id, booking_count)
                return

            deleted = crud.delete_movie_cascade(session, movie_id)
            session.commit()
            report.deleted_count += deleted
            if deleted:
                logger.info("Deleted expired movie %s", movie_id)
            else:
                logger.debug("Expired movie %s was already removed", movie_id)
        except SQLAlchemyError as exc:
            session.rollback()
            error = _describe(exc)
            logger.error("Error deleting expired movie %s: %s", movie_id, error)
            report.failures.append(CleanupFailure(movie_id=movie_id, error=error))
            self._fallback_expire(session, movie_id, report)

    def _fallback_expire(self, session: Session, movie_id: int, report: ReconcileReport) -> None:
        try:
            crud.mark_movie_expired(session, movie_id)
            session.commit()
        except SQLAlchemyError as exc:
            session.rollback()
            logger.error("Error marking movie %s as expired: %s", movie_id, _describe(exc))
            return
        report.expired_count += 1
        logger.warning("Movie %s marked as expired after failed deletion", movie_id)
