"""
API tests for the admin movie endpoints.

Uses FastAPI TestClient with the database session dependency pointed at the
in-memory test database.
"""

from datetime import date, timedelta
from io import BytesIO

import pytest
from fastapi.testclient import TestClient
from openpyxl import load_workbook

from app.api.dependencies import get_db
from app.api.main import app
from app.database import crud

TODAY = date.today()


@pytest.fixture
def client(session):
    def override_get_db():
        yield session

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def _payload(**overrides):
    payload = {
        "title": "Dune",
        "release_date": TODAY.isoformat(),
        "status": "now showing",
    }
    payload.update(overrides)
    return payload


class TestCreateAndGet:
    """Tests for POST /api/admin/movies and GET /api/admin/movies/{id}."""

    def test_create_requires_title(self, client, session):
        """A body without a title is rejected with the envelope, not a bare 422."""
        payload = _payload()
        del payload["title"]

        r = client.post("/api/admin/movies", json=payload)

        assert r.status_code == 400
        body = r.json()
        assert body["success"] is False
        assert body["error"] == "ValidationError"
        assert "required" in body["message"].lower()
        assert crud.count_movies(session) == 0

    def test_create_and_get(self, client, session):
        action = crud.create_genre(session, "Action")
        session.commit()

        r = client.post(
            "/api/admin/movies",
            json=_payload(cast="Timothée Chalamet", poster_url="https://img/dune.jpg",
                          duration=155, genres=[action.id_genre, "Sci-Fi"]),
        )
        assert r.status_code == 200
        body = r.json()
        assert body["success"] is True
        assert body["message"] == "Movie created"
        movie_id = body["movieId"]

        r = client.get(f"/api/admin/movies/{movie_id}")
        assert r.status_code == 200
        data = r.json()["data"]
        assert data["title"] == "Dune"
        assert data["actors"] == "Timothée Chalamet"
        assert data["poster_image"] == "https://img/dune.jpg"
        assert data["duration"] == 155
        assert data["release_date"] == TODAY.isoformat()
        assert data["genres"] == ["Action", "Sci-Fi"]

    def test_create_unknown_genre_id(self, client, session):
        r = client.post("/api/admin/movies", json=_payload(genres=[12345]))
        assert r.status_code == 400
        assert crud.count_movies(session) == 0

    def test_create_invalid_status(self, client):
        r = client.post("/api/admin/movies", json=_payload(status="archived"))
        assert r.status_code == 400
        assert r.json()["error"] == "ValidationError"

    def test_get_not_found(self, client):
        r = client.get("/api/admin/movies/999999")
        assert r.status_code == 404
        assert r.json()["success"] is False
        assert r.json()["error"] == "MovieNotFound"


class TestListing:
    """Tests for GET /api/admin/movies."""

    def test_pagination(self, client, make_movie):
        for i in range(12):
            make_movie(title=f"Movie {i}")

        r = client.get("/api/admin/movies", params={"page": 2, "limit": 5})

        assert r.status_code == 200
        data = r.json()["data"]
        assert len(data["movies"]) == 5
        assert data["pagination"] == {"page": 2, "limit": 5, "total": 12, "totalPages": 3}

    def test_invalid_page(self, client):
        r = client.get("/api/admin/movies", params={"page": 0})
        assert r.status_code == 400
        assert r.json()["error"] == "ValidationError"

    def test_search_and_status(self, client, make_movie):
        make_movie(title="The Great Escape", status="now showing")
        make_movie(title="Great Expectations", status="coming soon")

        r = client.get("/api/admin/movies", params={"search": "GREAT", "status": "coming soon"})

        titles = [m["title"] for m in r.json()["data"]["movies"]]
        assert titles == ["Great Expectations"]

    def test_export_listing(self, client, make_movie):
        make_movie(title="Shown", genres=["Drama", "Action"])
        make_movie(title="Gone", end_date=TODAY - timedelta(days=1))

        r = client.get("/api/admin/movies", params={"export": "true", "include_genres": "true"})

        assert r.status_code == 200
        data = r.json()["data"]
        assert data["total"] == 1
        assert data["movies"][0]["title"] == "Shown"
        assert data["movies"][0]["genres"] == "Action, Drama"


class TestUpdateAndDelete:
    """Tests for PUT and DELETE /api/admin/movies/{id}."""

    def test_update_present_fields_only(self, client, make_movie):
        movie_id = make_movie(title="Heat", duration=170, director="Michael Mann", genres=["Crime"])

        r = client.put(f"/api/admin/movies/{movie_id}", json={"duration": 0})

        assert r.status_code == 200
        body = r.json()
        assert body["message"] == "Movie updated"
        assert body["data"]["duration"] == 0
        assert body["data"]["title"] == "Heat"
        assert body["data"]["director"] == "Michael Mann"
        assert body["data"]["genres"] == ["Crime"]

    def test_update_replaces_genres(self, client, make_movie):
        movie_id = make_movie(genres=["Crime"])

        r = client.put(f"/api/admin/movies/{movie_id}", json={"genres": ["Drama", "Thriller"]})

        assert r.json()["data"]["genres"] == ["Drama", "Thriller"]

    def test_update_missing_movie(self, client):
        r = client.put("/api/admin/movies/999999", json={"title": "X"})
        assert r.status_code == 404
        assert r.json()["error"] == "MovieNotFound"

    def test_delete(self, client, make_movie):
        movie_id = make_movie()

        r = client.delete(f"/api/admin/movies/{movie_id}")

        assert r.status_code == 200
        assert r.json() == {"success": True, "message": "Movie deleted"}
        assert client.get(f"/api/admin/movies/{movie_id}").status_code == 404

    def test_delete_with_showtimes(self, client, session, make_movie, add_showtime):
        movie_id = make_movie()
        add_showtime(movie_id, show_date=TODAY)

        r = client.delete(f"/api/admin/movies/{movie_id}")

        assert r.status_code == 400
        assert r.json()["error"] == "ReferentialConflict"
        assert crud.get_movie(session, movie_id) is not None


class TestExportDownload:
    """Tests for GET /api/admin/movies/export/{fmt}."""

    def test_xlsx_download(self, client, make_movie):
        make_movie(title="Shown", status="now showing")
        make_movie(title="Later", status="coming soon")

        r = client.get("/api/admin/movies/export/xlsx", params={"status": "now showing"})

        assert r.status_code == 200
        assert r.headers["content-type"].startswith(
            "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
        )
        expected = f"movies_export_now_showing_{TODAY.isoformat()}.xlsx"
        assert expected in r.headers["content-disposition"]
        sheet = load_workbook(BytesIO(r.content)).active
        assert sheet.max_row == 2
        assert sheet.cell(row=2, column=3).value == "Shown"

    def test_docx_download(self, client, make_movie):
        make_movie()
        r = client.get("/api/admin/movies/export/docx")
        assert r.status_code == 200
        assert f"movies_export_{TODAY.isoformat()}.docx" in r.headers["content-disposition"]

    def test_unknown_format(self, client, make_movie):
        make_movie()
        r = client.get("/api/admin/movies/export/pdf")
        assert r.status_code == 400

    def test_nothing_to_export(self, client):
        r = client.get("/api/admin/movies/export/xlsx")
        assert r.status_code == 404
        assert r.json()["success"] is False


class TestCleanup:
    """Tests for POST /api/admin/movies/cleanup."""

    def test_cleanup_report(self, client, session, make_movie, add_showtime, add_booking):
        gone = make_movie(title="Gone", end_date=TODAY - timedelta(days=3))
        kept = make_movie(title="Kept", end_date=TODAY - timedelta(days=3))
        add_booking(add_showtime(kept, show_date=TODAY - timedelta(days=4)))

        r = client.post("/api/admin/movies/cleanup")

        assert r.status_code == 200
        assert r.json()["data"] == {"deletedCount": 1, "expiredCount": 1, "failures": []}
        assert crud.get_movie(session, gone) is None
        assert crud.get_movie(session, kept).status == "expired"


class TestPublicEndpoints:
    """Tests for /api/movies, /api/genres and /api/health."""

    def test_now_showing_and_coming_soon(self, client, make_movie):
        make_movie(title="Now", status="now showing")
        make_movie(title="Soon", status="coming soon", release_date=TODAY + timedelta(days=3))

        now = client.get("/api/movies/now-showing").json()["data"]
        soon = client.get("/api/movies/coming-soon").json()["data"]

        assert [m["title"] for m in now] == ["Now"]
        assert [m["title"] for m in soon] == ["Soon"]

    def test_popular(self, client, make_movie, add_showtime):
        movie_id = make_movie(title="Busy")
        add_showtime(movie_id, show_date=TODAY + timedelta(days=1))
        add_showtime(movie_id, show_date=TODAY + timedelta(days=2))

        data = client.get("/api/movies/popular").json()["data"]

        assert data[0]["title"] == "Busy"
        assert data[0]["showtime_count"] == 2

    def test_public_movie_not_found(self, client):
        r = client.get("/api/movies/999999")
        assert r.status_code == 404
        assert r.json()["success"] is False

    def test_genres(self, client, make_movie):
        make_movie(genres=["Thriller", "Action"])

        r = client.get("/api/genres")

        assert r.status_code == 200
        assert [g["name"] for g in r.json()["data"]] == ["Action", "Thriller"]

    def test_health(self, client, make_movie):
        make_movie()
        r = client.get("/api/health")
        assert r.status_code == 200
        assert r.json()["status"] == "healthy"
        assert r.json()["movies"] == 1
