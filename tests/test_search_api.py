"""
FastAPI contract tests for the search endpoints.

The orchestrator is wired to a FakeSearchClient through dependency overrides,
so no provider calls or network access happen here.
"""

import pytest
from fakes import FakeSearchClient, grounding
from fastapi.testclient import TestClient

import server.dependencies as deps
from api.base_client import ProviderReply
from context.session_store import SessionStore
from models.errors import SearchProviderError
from models.search_result import SearchResult
from orchestrator.core import SearchOrchestrator
from server.app import create_app
from server.schemas.responses import SearchResponseDTO
from tools.web.contracts import Citation

pytestmark = pytest.mark.integration


@pytest.fixture()
def api_client():
    store = SessionStore()
    client = FakeSearchClient()
    orchestrator = SearchOrchestrator(client=client, store=store)

    app = create_app()
    app.dependency_overrides[deps.get_orchestrator] = lambda: orchestrator
    app.dependency_overrides[deps.get_store] = lambda: store
    return TestClient(app), client, store


def test_health(api_client):
    http, _, _ = api_client
    r = http.get("/health")
    assert r.status_code == 200
    body = r.json()
    assert body["status"] == "healthy"
    assert body["active_sessions"] == 0


def test_search_returns_session_summary_and_sources(api_client):
    http, fake, _ = api_client
    fake.replies.append(
        ProviderReply(
            text="Overview: grounded answer",
            grounding_metadata=grounding(("Source", "https://source.example"), supports=[("cited", [0])]),
        )
    )

    r = http.get("/api/search", params={"q": "what is grounding"})

    assert r.status_code == 200
    body = r.json()
    assert body["sessionId"]
    assert "<h2>Overview grounded answer</h2>" in body["summary"]
    assert body["sources"] == [{"title": "Source", "url": "https://source.example", "snippet": "cited"}]
    assert body["outcome"] == "started"
    assert "restartReason" not in body
    assert fake.calls[0][1] == "what is grounding"


def test_search_requires_query(api_client):
    http, fake, _ = api_client
    for params in ({}, {"q": ""}):
        r = http.get("/api/search", params=params)
        assert r.status_code == 400
        assert r.json() == {"message": "Query parameter 'q' is required"}
    assert fake.calls == []


def test_follow_up_continues_session(api_client):
    http, fake, store = api_client
    session_id = http.get("/api/search", params={"q": "a"}).json()["sessionId"]

    r = http.post("/api/follow-up", json={"sessionId": session_id, "query": "b"})

    assert r.status_code == 200
    body = r.json()
    assert "sessionId" not in body
    assert body["outcome"] == "continued"
    assert "Answer to b" in body["summary"]
    assert len(store) == 1
    assert [t.query for t in fake.calls[-1][0]] == ["a"]


def test_follow_up_on_unknown_session_returns_new_session(api_client):
    http, _, store = api_client

    r = http.post("/api/follow-up", json={"sessionId": "nonexistent-id", "query": "b"})

    assert r.status_code == 200
    body = r.json()
    assert body["sessionId"] != "nonexistent-id"
    assert body["sessionId"] in store
    assert body["outcome"] == "restarted"
    assert body["restartReason"] == "session_miss"


@pytest.mark.parametrize(
    "payload",
    [{}, {"query": "b"}, {"sessionId": "abc"}, {"sessionId": "", "query": "b"}, {"sessionId": "abc", "query": ""}],
)
def test_follow_up_requires_session_and_query(api_client, payload):
    http, fake, _ = api_client
    r = http.post("/api/follow-up", json=payload)
    assert r.status_code == 400
    assert "message" in r.json()
    assert fake.calls == []


def test_provider_failure_returns_500_with_message(api_client):
    http, fake, _ = api_client
    fake.replies.append(SearchProviderError("API key not valid"))

    r = http.get("/api/search", params={"q": "a"})

    assert r.status_code == 500
    assert r.json() == {"message": "API key not valid"}


def test_chat_endpoint_handles_search_and_follow_up(api_client):
    http, _, _ = api_client
    started = http.get("/api/chat", params={"q": "a"})
    assert started.status_code == 200
    session_id = started.json()["sessionId"]

    followed = http.post("/api/chat", json={"sessionId": session_id, "query": "b"})
    assert followed.status_code == 200
    assert followed.json()["outcome"] == "continued"
    assert "sessionId" not in followed.json()


def test_unsupported_method(api_client):
    http, _, _ = api_client
    r = http.delete("/api/search")
    assert r.status_code == 405
    assert "message" in r.json()


def test_request_id_header(api_client):
    http, _, _ = api_client
    assert http.get("/health").headers["X-Request-ID"].startswith("req_")
    echoed = http.get("/health", headers={"X-Request-ID": "req_custom"})
    assert echoed.headers["X-Request-ID"] == "req_custom"


def test_response_dto_from_search_result():
    result = SearchResult(
        session_id="abc123",
        formatted_answer="<p>x</p>",
        sources=[Citation(title="T", url="https://t.example", snippet="s")],
        outcome="continued",
    )

    dto = SearchResponseDTO.from_search_result(result, include_session_id=False)

    assert dto.model_dump(by_alias=True, exclude_none=True) == {
        "summary": "<p>x</p>",
        "sources": [{"title": "T", "url": "https://t.example", "snippet": "s"}],
        "outcome": "continued",
    }
