from __future__ import annotations

from legal_assist.agent.generator import OpenAIResponseGenerator
from legal_assist.chat.orchestrator import ChatOrchestrator
from legal_assist.config import Settings, load_settings
from legal_assist.storage.session_store import InMemorySessionStore, SessionStore


_SETTINGS: Settings | None = None
_DEFAULT_ORCHESTRATOR: ChatOrchestrator | None = None


def get_settings() -> Settings:
    global _SETTINGS
    if _SETTINGS is None:
        _SETTINGS = load_settings()
    return _SETTINGS


def build_orchestrator(settings: Settings, store: SessionStore | None = None) -> ChatOrchestrator:
    generator = OpenAIResponseGenerator(
        api_key=settings.openai_api_key,
        model=settings.openai_model,
        temperature=settings.openai_temperature,
        timeout=settings.openai_timeout,
    )
    return ChatOrchestrator(
        store=store or InMemorySessionStore(),
        generator=generator,
        history_window=settings.history_window,
    )


def build_default_orchestrator() -> ChatOrchestrator:
    """Build (and memoize) the process-wide orchestrator and its store."""

    global _DEFAULT_ORCHESTRATOR
    if _DEFAULT_ORCHESTRATOR is not None:
        return _DEFAULT_ORCHESTRATOR

    _DEFAULT_ORCHESTRATOR = build_orchestrator(get_settings())
    return _DEFAULT_ORCHESTRATOR
