"""Tests for the HTTP surface."""

import pytest
from fastapi.testclient import TestClient

from docviewer.engine.errors import LoadError
from docviewer.server import create_app


@pytest.fixture
def client(store):
    async def loader():
        return store

    with TestClient(create_app(loader=loader)) as test_client:
        yield test_client


@pytest.fixture
def failed_client():
    async def loader():
        raise LoadError("manifest unreachable")

    with TestClient(create_app(loader=loader)) as test_client:
        yield test_client


# =============================================================================
# HEALTH
# =============================================================================


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert response.headers["x-content-type-options"] == "nosniff"
    assert response.headers["cache-control"] == "no-cache"
    assert "x-request-id" in response.headers
    assert "content-security-policy" not in response.headers


def test_ready_when_documents_and_renderer_loaded(client):
    response = client.get("/ready")

    assert response.status_code == 200
    assert response.json()["checks"] == {"documents": True, "renderer": True}


def test_not_ready_after_load_failure(failed_client):
    response = failed_client.get("/ready")

    assert response.status_code == 503
    assert response.json()["checks"]["documents"] is False


# =============================================================================
# DOCUMENTS
# =============================================================================


def test_nav_groups_documents_by_section(client):
    data = client.get("/v1/nav").json()

    assert data["total_documents"] == 3
    assert [s["label"] for s in data["sections"]] == ["Guides", "General"]
    assert [d["slug"] for d in data["sections"][0]["documents"]] == ["getting-started", "api"]


def test_rendered_document_includes_toc_and_pagination(client):
    data = client.get("/v1/docs/api").json()

    assert data["title"] == "API"
    assert 'data-label="Name"' in data["html"]
    assert 'data-highlighted="yes"' in data["html"]
    assert [e["text"] for e in data["toc"]] == ["Endpoints"]
    assert data["pagination"]["previous_slug"] == "getting-started"
    assert data["pagination"]["next_slug"] == "faq"


def test_unknown_document_is_404(client):
    response = client.get("/v1/docs/missing")

    assert response.status_code == 404
    assert response.json() == {"success": False, "error": "No document with slug 'missing'"}


def test_nav_unavailable_after_load_failure(failed_client):
    response = failed_client.get("/v1/nav")

    assert response.status_code == 503
    assert response.json()["error"] == "Documentation not loaded"


# =============================================================================
# SESSIONS
# =============================================================================


def test_session_starts_on_first_document(client):
    view = client.post("/v1/sessions", json={}).json()

    assert view["session_id"]
    assert view["active_slug"] == "getting-started"
    assert view["render_count"] == 1
    assert view["pagination"]["previous_enabled"] is False
    assert view["pagination"]["next_enabled"] is True


def test_session_events_search_and_open_result(client):
    session_id = client.post("/v1/sessions", json={"fragment": "faq"}).json()["session_id"]
    events_url = f"/v1/sessions/{session_id}/events"

    view = client.post(events_url, json={"event": "search_input", "params": {"query": "user id"}}).json()
    assert view["search"]["status"] == "results"
    assert [r["slug"] for r in view["search"]["results"]] == ["getting-started", "api"]

    view = client.post(
        events_url, json={"event": "search_select", "params": {"slug": "getting-started"}}
    ).json()
    assert view["active_slug"] == "getting-started"
    assert view["fragment"] == "getting-started"
    assert "search-emphasis" in view["content_html"]

    assert client.get(f"/v1/sessions/{session_id}").json()["active_slug"] == "getting-started"


def test_invalid_event_params_are_400(client):
    session_id = client.post("/v1/sessions", json={}).json()["session_id"]

    response = client.post(
        f"/v1/sessions/{session_id}/events", json={"event": "nav_click", "params": {}}
    )

    assert response.status_code == 400
    assert response.json()["success"] is False
    assert "Invalid parameter" in response.json()["error"]


def test_unknown_event_name_is_rejected(client):
    session_id = client.post("/v1/sessions", json={}).json()["session_id"]

    response = client.post(f"/v1/sessions/{session_id}/events", json={"event": "double_click"})
    assert response.status_code == 422


def test_closed_session_is_gone(client):
    session_id = client.post("/v1/sessions", json={}).json()["session_id"]

    assert client.delete(f"/v1/sessions/{session_id}").json() == {"success": True}
    assert client.get(f"/v1/sessions/{session_id}").status_code == 404
    assert client.delete(f"/v1/sessions/{session_id}").status_code == 404


def test_session_after_load_failure_shows_message(failed_client):
    view = failed_client.post("/v1/sessions", json={}).json()

    assert "Failed to load documentation list." in view["content_html"]
    assert view["nav"] == []


# =============================================================================
# DEGRADED RENDERING
# =============================================================================


class ExplodingRenderer:
    def render(self, text: str) -> str:
        raise RuntimeError("boom")

    def render_inline(self, text: str) -> str:
        raise RuntimeError("boom")


def broken_factory():
    raise RuntimeError("markdown library missing")


@pytest.mark.parametrize("factory", [broken_factory, ExplodingRenderer])
def test_document_unavailable_without_working_renderer(store, factory):
    async def loader():
        return store

    with TestClient(create_app(loader=loader, renderer_factory=factory)) as test_client:
        response = test_client.get("/v1/docs/api")
        view = test_client.post("/v1/sessions", json={}).json()

    assert response.status_code == 503
    assert response.json() == {"success": False, "error": "Failed to render this document."}
    assert response.headers["cache-control"] == "no-cache"
    assert "Failed to render this document." in view["content_html"]
    assert view["toc"]["visible"] is False


# =============================================================================
# RESPONSE HEADERS
# =============================================================================


def test_documents_are_cacheable_with_markup_policy(client):
    response = client.get("/v1/docs/api")

    assert response.headers["cache-control"] == "public, max-age=300"
    assert "script-src" not in response.headers["content-security-policy"]
    assert response.headers["content-security-policy"].startswith("default-src 'none'")
    assert client.get("/v1/nav").headers["cache-control"] == "public, max-age=300"


def test_missing_document_is_not_cached(client):
    assert client.get("/v1/docs/missing").headers["cache-control"] == "no-cache"


def test_session_views_are_never_stored(client):
    response = client.post("/v1/sessions", json={})

    assert response.headers["cache-control"] == "no-store"
    assert "frame-ancestors 'none'" in response.headers["content-security-policy"]
