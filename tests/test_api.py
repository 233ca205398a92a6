import pytest
from fastapi.testclient import TestClient

from conftest import FakeRegistryClient, make_hit
from image_search.main import app, get_search_service
from image_search.services.search_service import SearchService


@pytest.fixture
def client_factory(registry_settings):
    def _build(fake, registries):
        service = SearchService(fake, registry_settings(registries))
        app.dependency_overrides[get_search_service] = lambda: service
        return TestClient(app)

    yield _build
    app.dependency_overrides.clear()


def test_health():
    response = TestClient(app).get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_search_without_registry_client_is_unavailable():
    response = TestClient(app).get("/search", params={"term": "alpine"})

    assert response.status_code == 503


def test_post_search(client_factory):
    fake = FakeRegistryClient(
        hits={"docker.io": [make_hit("alpine", "x" * 50, stars=10, official=True)]}
    )
    http = client_factory(fake, ["docker.io"])

    response = http.post("/search", json={"term": "alpine", "is_official": True})

    assert response.status_code == 200
    body = response.json()
    assert body["term"] == "alpine"
    [result] = body["results"]
    assert result["name"] == "docker.io/library/alpine"
    assert result["official"] == "[OK]"
    assert len(result["description"]) == 47


def test_get_search_applies_filters(client_factory):
    fake = FakeRegistryClient(
        hits={"quay.io": [make_hit("a", stars=1), make_hit("b", stars=50)]}
    )
    http = client_factory(fake, ["quay.io"])

    response = http.get("/search", params={"term": "x", "stars": 10, "no_trunc": True})

    assert response.status_code == 200
    assert [r["name"] for r in response.json()["results"]] == ["quay.io/b"]


def test_all_registries_failing_is_bad_gateway(client_factory):
    fake = FakeRegistryClient(
        errors={"docker.io": RuntimeError("denied"), "quay.io": RuntimeError("timeout")}
    )
    http = client_factory(fake, ["docker.io", "quay.io"])

    response = http.get("/search", params={"term": "alpine"})

    assert response.status_code == 502
    assert response.json()["detail"] == [
        {"registry": "docker.io", "error": "denied"},
        {"registry": "quay.io", "error": "timeout"},
    ]
