"""Chat handler: validate a raw request and delegate to the orchestrator."""

from __future__ import annotations

from typing import Any

from legal_assist.agent.factory import build_default_orchestrator, get_settings
from legal_assist.chat.models import ChatTurn
from legal_assist.chat.orchestrator import ChatOrchestrator
from legal_assist.chat.validation import parse_chat_request


def handle_chat_message(
    payload: Any,
    orchestrator: ChatOrchestrator | None = None,
    max_chars: int | None = None,
) -> ChatTurn:
    """Validate a raw request payload and submit it.

    Uses the memoized default orchestrator (the one the web app serves) unless
    one is passed in. Raises ValidationError before anything is stored.
    """

    if max_chars is None:
        max_chars = get_settings().max_message_chars
    request = parse_chat_request(payload, max_chars=max_chars)
    orchestrator = orchestrator or build_default_orchestrator()
    return orchestrator.submit(request)
