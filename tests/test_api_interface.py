"""Tests for the REST API."""

import csv
import io

import pytest
from fastapi.testclient import TestClient

from sitelens import __version__
from sitelens.api.app import create_app
from sitelens.config import AppSettings

from .helpers import SAMPLE_PAGE_URL, wait_for_status


def _create(client, url=SAMPLE_PAGE_URL, **options):
    body = {"url": url}
    if options:
        body["options"] = options
    response = client.post("/api/sessions", json=body)
    assert response.status_code == 201
    return response.json()


class TestSessionEndpoints:
    """Test session creation and retrieval."""

    def test_create_returns_pending_session(self, test_client):
        data = _create(test_client)

        assert data["id"] == 1
        assert data["url"] == SAMPLE_PAGE_URL
        assert data["domain"] == "site.test"
        assert data["status"] == "pending"
        assert data["results"] is None
        assert data["options"] == {
            "images": True,
            "colors": True,
            "typography": False,
            "content": False,
        }

    def test_create_keeps_url_as_sent(self, test_client):
        data = _create(test_client, url="http://Site.test")

        assert data["url"] == "http://Site.test"
        assert data["domain"] == "site.test"
        assert test_client.get(f"/api/sessions/{data['id']}").json()["url"] == (
            "http://Site.test"
        )

    def test_session_completes_with_enabled_results(self, test_client):
        created = _create(test_client, typography=True, content=True, images=False)

        data = wait_for_status(test_client, created["id"])

        assert data["status"] == "completed"
        assert data["errorMessage"] is None
        results = data["results"]
        assert "images" not in results
        assert [c.get("hex") or c.get("rgb") for c in results["colors"]] == [
            "#FF0000",
            "rgb(1,2,3)",
            "#abc",
        ]
        assert results["typography"][0] == {
            "fontFamily": "Georgia, serif",
            "fontSize": "32px",
            "fontWeight": "700",
            "element": "h1",
        }
        assert results["content"][0] == {
            "text": "Main Title",
            "element": "h1",
            "hierarchy": 1,
        }

    def test_images_resolved_against_page(self, test_client):
        created = _create(test_client)

        data = wait_for_status(test_client, created["id"])

        assert data["results"]["images"] == [
            {
                "src": "http://site.test/img/logo.png",
                "alt": "Logo",
                "width": 120,
                "height": 40,
            },
            {"src": "https://cdn.test/banner.jpg", "alt": ""},
        ]

    def test_session_fails_on_fetch_error(self, test_client):
        created = _create(test_client, url="http://site.test/missing")

        data = wait_for_status(test_client, created["id"])

        assert data["status"] == "failed"
        assert data["errorMessage"] == "HTTP 404: Not Found"
        assert data["results"] is None

    @pytest.mark.parametrize(
        "body",
        [
            {},
            {"url": "not a url"},
            {"url": "ftp://site.test/file"},
            {"url": SAMPLE_PAGE_URL, "options": {"images": "sometimes"}},
        ],
    )
    def test_create_rejects_invalid_body(self, test_client, body):
        response = test_client.post("/api/sessions", json=body)

        assert response.status_code == 400
        data = response.json()
        assert data["error"] == "VALIDATION_ERROR"
        assert data["message"] == "Invalid request data"
        assert data["details"]["errors"]

    def test_get_unknown_session(self, test_client):
        response = test_client.get("/api/sessions/999")

        assert response.status_code == 404
        assert response.json()["error"] == "NOT_FOUND"

    def test_delete_session(self, test_client):
        created = _create(test_client)
        wait_for_status(test_client, created["id"])

        response = test_client.delete(f"/api/sessions/{created['id']}")

        assert response.status_code == 200
        assert response.json() == {"deleted": True, "id": created["id"]}
        assert test_client.get(f"/api/sessions/{created['id']}").status_code == 404
        assert test_client.delete(f"/api/sessions/{created['id']}").status_code == 404


class TestListingEndpoints:
    """Test listing, recent and statistics endpoints."""

    def test_list_newest_first(self, test_client):
        ids = [_create(test_client)["id"] for _ in range(3)]
        for session_id in ids:
            wait_for_status(test_client, session_id)

        data = test_client.get("/api/sessions").json()

        assert [item["id"] for item in data] == list(reversed(ids))

    def test_recent_honours_limit(self, test_client):
        for _ in range(4):
            _create(test_client)

        everything = test_client.get("/api/sessions").json()
        recent = test_client.get("/api/sessions/recent", params={"limit": 2}).json()

        assert [item["id"] for item in recent] == [
            item["id"] for item in everything[:2]
        ]

    @pytest.mark.parametrize("limit", ["abc", "0", "-3", ""])
    def test_recent_invalid_limit_uses_default(self, test_client, limit):
        for _ in range(12):
            _create(test_client)

        recent = test_client.get("/api/sessions/recent", params={"limit": limit})

        assert recent.status_code == 200
        assert len(recent.json()) == 10

    def test_recent_without_limit(self, test_client):
        _create(test_client)

        assert len(test_client.get("/api/sessions/recent").json()) == 1

    def test_statistics_empty(self, test_client):
        data = test_client.get("/api/sessions/statistics").json()

        assert data == {
            "totalScrapes": 0,
            "totalImages": 0,
            "totalColors": 0,
            "totalTypography": 0,
            "successRate": 0,
        }

    def test_statistics_after_scrapes(self, test_client):
        ok = _create(test_client, typography=True)
        bad = _create(test_client, url="http://site.test/missing")
        wait_for_status(test_client, ok["id"])
        wait_for_status(test_client, bad["id"])

        data = test_client.get("/api/sessions/statistics").json()

        assert data["totalScrapes"] == 2
        assert data["totalImages"] == 2
        assert data["totalColors"] == 3
        assert data["totalTypography"] == 5
        assert data["successRate"] == 50


class TestExportEndpoint:
    """Test session export downloads."""

    def test_export_json(self, test_client):
        created = _create(test_client)
        wait_for_status(test_client, created["id"])

        response = test_client.post("/api/export", json={"format": "json"})

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("application/json")
        assert (
            response.headers["content-disposition"]
            == 'attachment; filename="scraped-data.json"'
        )
        assert [item["id"] for item in response.json()] == [created["id"]]

    def test_export_csv_selected_sessions(self, test_client):
        first = _create(test_client)
        second = _create(test_client)
        wait_for_status(test_client, first["id"])
        wait_for_status(test_client, second["id"])

        response = test_client.post(
            "/api/export",
            json={"format": "csv", "sessionIds": [second["id"], 404]},
        )

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert (
            response.headers["content-disposition"]
            == 'attachment; filename="scraped-data.csv"'
        )
        rows = list(csv.reader(io.StringIO(response.text)))
        assert len(rows) == 2
        assert rows[1][0] == str(second["id"])
        assert rows[1][5:] == ["2", "3"]

    def test_export_csv_without_sessions(self, test_client):
        response = test_client.post("/api/export", json={"format": "csv"})

        assert response.status_code == 200
        assert response.text.startswith('"ID","URL"')
        assert "\n" not in response.text

    def test_export_invalid_format(self, test_client):
        response = test_client.post("/api/export", json={"format": "xml"})

        assert response.status_code == 400
        data = response.json()
        assert data["error"] == "API_ERROR"
        assert data["message"] == "Invalid export format: xml"


class TestSystemEndpoints:
    """Test health reporting."""

    def test_health(self, test_client):
        _create(test_client)

        data = test_client.get("/health").json()

        assert data["status"] == "healthy"
        assert data["version"] == __version__
        assert data["sessions"] == 1
        assert "timestamp" in data

    def test_debug_setting_reaches_app(self):
        app = create_app(AppSettings(_env_file=None, debug=True))

        assert app.debug is True

    def test_missing_storage_reports_server_error(self, test_settings):
        # Without entering the client the lifespan never attaches components
        client = TestClient(create_app(test_settings))

        response = client.get("/api/sessions")

        assert response.status_code == 500
        data = response.json()
        assert data["error"] == "INTERNAL_ERROR"
        assert data["message"] == "Session storage not initialized"
