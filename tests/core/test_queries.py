"""
Tests for the catalog query service.
"""

from datetime import date, timedelta

import pytest
from sqlalchemy.exc import OperationalError

from app.core.catalog import CatalogQueryService, LifecycleCleaner, ValidationError
from app.database import crud
from app.database.models import Movie

TODAY = date(2025, 6, 15)


@pytest.fixture
def service(session):
    return CatalogQueryService(session, LifecycleCleaner(), today=TODAY)


class TestListMovies:
    """Tests for the paginated admin listing."""

    def test_pagination(self, service, make_movie):
        """23 movies, 10 per page: the third page holds 3 and there are 3 pages."""
        for i in range(23):
            make_movie(title=f"Movie {i}", release_date=TODAY - timedelta(days=i))

        result = service.list_movies(page=3, limit=10)

        assert result.ok
        assert len(result.value.movies) == 3
        assert result.value.pagination.total == 23
        assert result.value.pagination.total_pages == 3
        # newest release first: the last page holds the oldest three
        assert [m.title for m in result.value.movies] == ["Movie 20", "Movie 21", "Movie 22"]

    def test_search_is_case_insensitive_substring(self, service, make_movie):
        make_movie(title="The Great Escape")
        make_movie(title="Heist", description="The GREATEST robbery")
        make_movie(title="Up")

        for term in ("great", "GREAT", "eat"):
            titles = {m.title for m in service.list_movies(search=term).value.movies}
            assert titles == {"The Great Escape", "Heist"}

    def test_status_filter(self, service, make_movie):
        make_movie(title="Now", status="now showing")
        make_movie(title="Soon", status="coming soon")

        assert [m.title for m in service.list_movies(status="coming soon").value.movies] == ["Soon"]
        assert service.list_movies(status="all").value.pagination.total == 2

    def test_runs_cleaner_first(self, service, session, make_movie):
        """Movies past their end date without bookings are gone before the listing."""
        make_movie(title="Old", end_date=TODAY - timedelta(days=1))
        make_movie(title="Current")

        result = service.list_movies()

        assert [m.title for m in result.value.movies] == ["Current"]
        assert session.query(Movie).count() == 1

    def test_invalid_page(self, service):
        with pytest.raises(ValidationError):
            service.list_movies(page=0)

    def test_store_failure_returns_empty_result(self, service, make_movie, monkeypatch):
        """A failing query is reported through the result, not raised."""
        make_movie()

        def broken(*args, **kwargs):
            raise OperationalError("SELECT", {}, Exception("connection lost"))

        monkeypatch.setattr(crud, "list_movies", broken)
        result = service.list_movies()

        assert not result.ok
        assert result.error
        assert result.value.movies == []
        assert result.value.pagination.total == 0


class TestExportMovies:
    """Tests for the export projection."""

    def test_excludes_movies_past_end_date(self, service, make_movie, add_showtime, add_booking):
        """Soft-expired movies stay in the table but never reach an export."""
        booked = make_movie(title="Booked", end_date=TODAY - timedelta(days=2))
        add_booking(add_showtime(booked, show_date=TODAY - timedelta(days=3)))
        make_movie(title="Active", end_date=TODAY + timedelta(days=10))

        result = service.export_movies()

        assert [m.title for m in result.value] == ["Active"]
        assert service.list_movies(status="expired").value.pagination.total == 1

    def test_genres_and_order(self, service, make_movie):
        make_movie(title="B", status="now showing", release_date=TODAY - timedelta(days=1), genres=["Drama", "Action"])
        make_movie(title="A", status="coming soon", release_date=TODAY + timedelta(days=5))
        make_movie(title="C", status="now showing", release_date=TODAY - timedelta(days=9))

        records = service.export_movies(include_genres=True).value

        # status ascending, then newest release first
        assert [r.title for r in records] == ["A", "B", "C"]
        assert records[1].genres == "Action, Drama"
        assert records[0].genres == ""

        without = service.export_movies().value
        assert all(r.genres is None for r in without)

    def test_filters_apply(self, service, make_movie):
        make_movie(title="Matrix", status="now showing")
        make_movie(title="Matrix Reloaded", status="coming soon")

        titles = [r.title for r in service.export_movies(status="now showing", search="matrix").value]
        assert titles == ["Matrix"]


class TestPublicReads:
    """Tests for single-movie and public list reads."""

    def test_get_movie(self, service, make_movie):
        movie_id = make_movie(title="Found", genres=["Action"])

        result = service.get_movie(movie_id)

        assert result.ok
        assert result.value.title == "Found"
        assert result.value.genre_names == ["Action"]
        assert service.get_movie(9999).value is None

    def test_get_movie_hides_soft_expired(self, service, make_movie, add_showtime, add_booking):
        movie_id = make_movie(end_date=TODAY - timedelta(days=1))
        add_booking(add_showtime(movie_id, show_date=TODAY - timedelta(days=2)))

        result = service.get_movie(movie_id)

        assert result.ok
        assert result.value is None

    def test_now_showing_and_coming_soon(self, service, make_movie):
        make_movie(title="Now 1", status="now showing", release_date=TODAY - timedelta(days=10))
        make_movie(title="Now 2", status="now showing", release_date=TODAY - timedelta(days=1))
        make_movie(title="Soon 1", status="coming soon", release_date=TODAY + timedelta(days=10))
        make_movie(title="Soon 2", status="coming soon", release_date=TODAY + timedelta(days=1))

        assert [m.title for m in service.now_showing().value] == ["Now 2", "Now 1"]
        assert [m.title for m in service.coming_soon().value] == ["Soon 2", "Soon 1"]

    def test_all_movies_skips_expired_status(self, service, make_movie):
        make_movie(title="Shown", status="now showing")
        make_movie(title="Flagged", status="expired")

        assert [m.title for m in service.all_movies().value] == ["Shown"]

    def test_popular(self, service, make_movie, add_showtime):
        first = make_movie(title="First")
        second = make_movie(title="Second")
        for _ in range(3):
            add_showtime(second, show_date=TODAY + timedelta(days=1))
        add_showtime(first, show_date=TODAY)

        ranked = service.popular().value
        assert [(m.title, count) for m, count in ranked] == [("Second", 3), ("First", 1)]

    def test_genres(self, service, make_movie):
        make_movie(genres=["Thriller", "Action"])
        assert [g.genre_name for g in service.genres().value] == ["Action", "Thriller"]
