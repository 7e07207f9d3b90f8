"""HTTP surface tests against an app with an injected dataset cache."""

import pytest
from fastapi.testclient import TestClient

from app import create_app
from services.cache import CACHE_TTL_SECONDS, DatasetCache

from conftest import FakeSource


def _client(source, clock) -> TestClient:
    return TestClient(create_app(dataset_cache=DatasetCache(source=source, clock=clock)))


@pytest.fixture
def client(sample_dataset, clock):
    return _client(FakeSource(sample_dataset), clock)


class TestCarbonIntensity:
    def test_filter_and_sort(self, client):
        resp = client.get(
            "/api/carbon-intensity",
            params={"country": "Germany", "sort": "carbon_intensity", "order": "desc"},
        )
        assert resp.status_code == 200
        body = resp.json()
        assert body["success"] is True
        assert body["total"] == 2
        assert [r["carbon_intensity"] for r in body["data"]] == [300, 280]
        assert body["filters_applied"]["order"] == "desc"

    def test_intensity_range(self, client):
        body = client.get(
            "/api/carbon-intensity", params={"min_intensity": "100", "max_intensity": "290"}
        ).json()
        assert body["data"] == [{"country": "Germany", "country_code": "DE", "carbon_intensity": 280}]

    def test_pagination(self, client, sample_dataset):
        body = client.get("/api/carbon-intensity", params={"limit": "1", "page": "2"}).json()
        assert body["data"] == [sample_dataset[1]]
        assert (body["page"], body["limit"], body["pages"], body["total"]) == (2, 1, 3, 3)

    def test_unparseable_params_do_not_error(self, client):
        resp = client.get(
            "/api/carbon-intensity", params={"min_intensity": "lots", "page": "x", "limit": "y"}
        )
        assert resp.status_code == 200
        assert resp.json()["total"] == 3

    def test_cold_start_failure_returns_500(self, clock, fetch_error):
        client = _client(FakeSource(fetch_error), clock)
        resp = client.get("/api/carbon-intensity")
        assert resp.status_code == 500
        body = resp.json()
        assert body["success"] is False
        assert body["error"] == "Failed to fetch carbon intensity data"
        assert "connection refused" in body["message"]

    def test_stale_data_served_when_refresh_fails(self, sample_dataset, clock, fetch_error):
        source = FakeSource(sample_dataset, fetch_error)
        client = _client(source, clock)

        client.get("/api/carbon-intensity")
        clock.advance(CACHE_TTL_SECONDS + 1)
        resp = client.get("/api/carbon-intensity")

        assert resp.status_code == 200
        assert resp.json()["total"] == 3
        assert source.calls == 2

    def test_cors_headers(self, client):
        resp = client.get("/api/carbon-intensity", headers={"Origin": "https://example.org"})
        assert resp.headers["access-control-allow-origin"] == "*"
        assert resp.headers["x-content-type-options"] == "nosniff"

    def test_cors_origin_header_without_origin(self, client):
        resp = client.get("/api/carbon-intensity")
        assert resp.headers["access-control-allow-origin"] == "*"

    def test_preflight(self, client):
        resp = client.options(
            "/api/carbon-intensity",
            headers={"Origin": "https://example.org", "Access-Control-Request-Method": "GET"},
        )
        assert resp.status_code == 200


class TestCountries:
    def test_lists_distinct_sorted(self, client):
        body = client.get("/api/countries").json()
        assert body == {"success": True, "total": 2, "countries": ["France", "Germany"]}

    def test_failure_returns_500(self, clock, fetch_error):
        resp = _client(FakeSource(fetch_error), clock).get("/api/countries")
        assert resp.status_code == 500
        assert resp.json()["error"] == "Failed to fetch countries"


class TestHealth:
    def test_ok_after_fetch(self, client):
        resp = client.get("/health")
        assert resp.status_code == 200
        body = resp.json()
        assert body["status"] == "OK"
        assert body["total_records"] == 3
        assert body["last_updated"].startswith("2023-11-14T22:13:20")
        assert body["timestamp"]

    def test_error_without_dataset(self, clock, fetch_error):
        resp = _client(FakeSource(fetch_error), clock).get("/health")
        assert resp.status_code == 503
        body = resp.json()
        assert body["status"] == "ERROR"
        assert body["total_records"] == 0
        assert body["last_updated"] is None

    def test_ready_makes_no_upstream_call(self, clock):
        source = FakeSource()
        resp = _client(source, clock).get("/ready")
        assert resp.json()["status"] == "ok"
        assert source.calls == 0


class TestStatic:
    def test_index_links(self, client):
        body = client.get("/").json()
        assert body["endpoints"]["data"] == "/api/carbon-intensity"

    def test_docs_lists_parameters(self, client):
        body = client.get("/api/docs").json()
        params = body["endpoints"]["GET /api/carbon-intensity"]["parameters"]
        assert set(params) == {
            "country", "country_code", "min_intensity", "max_intensity",
            "search", "sort", "order", "page", "limit",
        }
