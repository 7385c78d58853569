from __future__ import annotations

from typing import Any

from legal_assist.chat.models import ALL_CATEGORIES, LEGAL_CATEGORIES, ChatRequest
from legal_assist.config import DEFAULT_MAX_MESSAGE_CHARS
from legal_assist.errors import ValidationError


def _truncate(text: str, limit: int) -> str:
    if len(text) <= limit:
        return text
    return text[: max(0, limit - 1)] + "…"


def parse_chat_request(payload: Any, max_chars: int = DEFAULT_MAX_MESSAGE_CHARS) -> ChatRequest:
    """Validate a `POST /chat` body.

    The session id is opaque and used as-is; it only has to contain something
    other than whitespace. Raises ValidationError with a user-facing message;
    callers must not touch the store before this returns.
    """

    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object")

    message = payload.get("message")
    session_id = payload.get("sessionId")
    category = payload.get("category")

    if not isinstance(message, str) or not message.strip():
        raise ValidationError("Message is required")
    if not isinstance(session_id, str) or not session_id.strip():
        raise ValidationError("Session ID is required")

    if category is not None:
        if not isinstance(category, str) or category not in (ALL_CATEGORIES, *LEGAL_CATEGORIES):
            allowed = ", ".join((ALL_CATEGORIES, *LEGAL_CATEGORIES))
            raise ValidationError(f"Invalid category {category!r}; expected one of: {allowed}")

    if max_chars > 0:
        message = _truncate(message.strip(), max_chars)

    return ChatRequest(message=message.strip(), session_id=session_id, category=category)
