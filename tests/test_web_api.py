from __future__ import annotations

import logging

from conftest import FailingGenerator, StubGenerator
from legal_assist.agent import factory
from legal_assist.chat.handler import handle_chat_message
from legal_assist.chat.models import GeneratedReply
from legal_assist.chat.orchestrator import ChatOrchestrator
from legal_assist.config import Settings
from legal_assist.logging_config import HANDLER_NAME
from legal_assist.storage.session_store import InMemorySessionStore
from legal_assist.web.app import create_app


def test_chat_then_fetch_messages(client):
    assert client.get("/api/messages/S1").get_json() == []

    r = client.post("/api/chat", json={"message": "What is a contract?", "sessionId": "S1"})
    assert r.status_code == 200
    reply = r.get_json()
    assert reply["role"] == "assistant"
    assert reply["category"] == "contracts"
    assert reply["sources"] == ["Restatement (Second) of Contracts"]
    assert reply["sessionId"] == "S1"

    turns = client.get("/api/messages/S1").get_json()
    assert [t["role"] for t in turns] == ["user", "assistant"]
    assert turns[0]["content"] == "What is a contract?"
    assert turns[1]["category"] is not None
    assert turns[1]["id"] == reply["id"]
    assert "createdAt" in turns[0]


def test_empty_message_is_rejected_without_new_turns(client):
    client.post("/api/chat", json={"message": "Earlier question", "sessionId": "S1"})
    before = client.get("/api/messages/S1").get_json()

    r = client.post("/api/chat", json={"message": "", "sessionId": "S1"})

    assert r.status_code == 400
    body = r.get_json()
    assert body["ok"] is False
    assert body["error"] == "Message is required"
    assert client.get("/api/messages/S1").get_json() == before


def test_invalid_category_and_non_json_body_are_client_errors(client):
    r = client.post("/api/chat", json={"message": "hi", "sessionId": "S1", "category": "space"})
    assert r.status_code == 400
    assert "Invalid category" in r.get_json()["error"]

    r = client.post("/api/chat", data="not json", content_type="text/plain")
    assert r.status_code == 400

    assert client.get("/api/sessions").get_json() == []


def test_category_all_is_accepted(client, generator):
    r = client.post("/api/chat", json={"message": "hi", "sessionId": "S1", "category": "all"})

    assert r.status_code == 200
    assert generator.calls[0][1] is None


def test_delete_message_then_not_found(client):
    client.post("/api/chat", json={"message": "Delete me", "sessionId": "S1"})
    turn_id = client.get("/api/messages/S1").get_json()[0]["id"]

    r1 = client.delete(f"/api/messages/{turn_id}")
    assert r1.status_code == 204
    assert r1.data == b""

    r2 = client.delete(f"/api/messages/{turn_id}")
    assert r2.status_code == 404
    assert r2.get_json()["error"] == "Message not found"

    remaining = client.get("/api/messages/S1").get_json()
    assert turn_id not in [t["id"] for t in remaining]


def test_delete_with_non_integer_id_is_bad_request(client):
    r = client.delete("/api/messages/abc")
    assert r.status_code == 400
    assert r.get_json()["error"] == "Invalid message ID"


def test_sessions_lists_known_session_ids(client):
    client.post("/api/chat", json={"message": "a", "sessionId": "beta"})
    client.post("/api/chat", json={"message": "b", "sessionId": "alpha"})

    assert sorted(client.get("/api/sessions").get_json()) == ["alpha", "beta"]


def test_generator_failure_still_returns_reply():
    store = InMemorySessionStore()
    app = create_app(orchestrator=ChatOrchestrator(store=store, generator=FailingGenerator()), settings=Settings())
    app.testing = True

    with app.test_client() as c:
        r = c.post("/api/chat", json={"message": "Help", "sessionId": "S1"})

        assert r.status_code == 200
        assert r.get_json()["category"] == "error"
        assert len(c.get("/api/messages/S1").get_json()) == 2


class ExplodingStore(InMemorySessionStore):
    def list_by_session(self, session_id):
        raise RuntimeError("disk on fire")


def test_unexpected_error_is_generic_500(generator):
    app = create_app(orchestrator=ChatOrchestrator(store=ExplodingStore(), generator=generator), settings=Settings())
    app.testing = True

    with app.test_client() as c:
        r = c.get("/api/messages/S1")

    assert r.status_code == 500
    body = r.get_json()
    assert body["ok"] is False
    assert "disk on fire" not in body["error"]


def test_health(client):
    assert client.get("/api/health").get_json() == {"ok": True}


def test_session_id_is_used_as_given(client):
    r = client.post("/api/chat", json={"message": "Hi", "sessionId": " S1"})
    assert r.get_json()["sessionId"] == " S1"

    assert len(client.get("/api/messages/%20S1").get_json()) == 2
    assert client.get("/api/messages/S1").get_json() == []
    assert client.get("/api/sessions").get_json() == [" S1"]


def test_whitespace_only_session_id_is_rejected(client):
    r = client.post("/api/chat", json={"message": "Hi", "sessionId": "   "})

    assert r.status_code == 400
    assert r.get_json()["error"] == "Session ID is required"


def test_empty_sources_reach_the_client():
    generator = StubGenerator(GeneratedReply(content="Answer", category="tax", sources=[]))
    app = create_app(orchestrator=ChatOrchestrator(store=InMemorySessionStore(), generator=generator), settings=Settings())
    app.testing = True

    with app.test_client() as c:
        reply = c.post("/api/chat", json={"message": "q", "sessionId": "S1"}).get_json()
        stored = c.get("/api/messages/S1").get_json()

    assert reply["sources"] == []
    assert stored[1]["sources"] == []
    assert stored[0]["sources"] is None


def test_app_serves_the_default_orchestrator(monkeypatch, orchestrator):
    monkeypatch.setattr(factory, "_DEFAULT_ORCHESTRATOR", orchestrator)

    handle_chat_message({"message": "hi", "sessionId": "S1"})

    app = create_app(settings=Settings())
    app.testing = True
    with app.test_client() as c:
        turns = c.get("/api/messages/S1").get_json()

    assert [t["role"] for t in turns] == ["user", "assistant"]


def test_app_has_no_secret_key(orchestrator):
    app = create_app(orchestrator=orchestrator, settings=Settings())
    assert app.secret_key is None


def test_create_app_configures_logging_once(orchestrator):
    create_app(orchestrator=orchestrator, settings=Settings(log_level="DEBUG"))
    create_app(orchestrator=orchestrator, settings=Settings(log_level="DEBUG"))

    root = logging.getLogger()
    ours = [h for h in root.handlers if h.get_name() == HANDLER_NAME]
    assert len(ours) == 1
    assert root.level == logging.DEBUG
