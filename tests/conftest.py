from __future__ import annotations

import pytest

from legal_assist.chat.orchestrator import ChatOrchestrator
from legal_assist.chat.models import GeneratedReply
from legal_assist.config import Settings
from legal_assist.storage.session_store import InMemorySessionStore
from legal_assist.web.app import create_app


class StubGenerator:
    """Records calls and answers with a fixed contracts reply."""

    def __init__(self, reply: GeneratedReply | None = None):
        self.reply = reply or GeneratedReply(
            content="A contract is a legally enforceable agreement.",
            category="contracts",
            sources=["Restatement (Second) of Contracts"],
        )
        self.calls: list[tuple[str, str | None, list[dict[str, str]]]] = []

    def generate(self, message, category, history):
        self.calls.append((message, category, history))
        return self.reply


class FailingGenerator:
    def generate(self, message, category, history):
        raise ConnectionError("provider unreachable")


@pytest.fixture
def store():
    return InMemorySessionStore()


@pytest.fixture
def generator():
    return StubGenerator()


@pytest.fixture
def orchestrator(store, generator):
    return ChatOrchestrator(store=store, generator=generator)


@pytest.fixture
def client(orchestrator):
    app = create_app(orchestrator=orchestrator, settings=Settings())
    app.testing = True
    with app.test_client() as c:
        yield c
