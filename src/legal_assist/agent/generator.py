"""Response generators: the external collaborator that writes assistant replies.

`OpenAIResponseGenerator` is a thin wrapper around the OpenAI chat completions
API. It raises on any failure; the orchestrator decides what the user sees.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Protocol

from openai import OpenAI

from legal_assist.agent.prompts import build_messages
from legal_assist.chat.models import GeneratedReply
from legal_assist.errors import MalformedReplyError

logger = logging.getLogger(__name__)

_JSON_OBJECT = re.compile(r"\{.*\}", re.DOTALL)


class ResponseGenerator(Protocol):
    def generate(
        self,
        message: str,
        category: str | None,
        history: list[dict[str, str]],
    ) -> GeneratedReply: ...


def _strip_code_fences(text: str) -> str:
    t = text.strip()
    if t.startswith("```") and t.endswith("```"):
        t = re.sub(r"^```[A-Za-z0-9_-]*\s*", "", t, flags=re.DOTALL)
        t = re.sub(r"\s*```$", "", t, flags=re.DOTALL)
    return t.strip()


def parse_reply(text: str | None) -> GeneratedReply:
    """Turn raw model output into a GeneratedReply, or raise MalformedReplyError."""

    if not text or not text.strip():
        raise MalformedReplyError("Empty response from model")

    t = _strip_code_fences(text)
    try:
        data: Any = json.loads(t)
    except json.JSONDecodeError:
        m = _JSON_OBJECT.search(t)
        if not m:
            raise MalformedReplyError("Model response is not JSON")
        try:
            data = json.loads(m.group(0))
        except json.JSONDecodeError as e:
            raise MalformedReplyError(f"Model response is not JSON: {e}") from e

    if not isinstance(data, dict):
        raise MalformedReplyError("Expected a JSON object")

    content = data.get("content")
    category = data.get("category")
    sources = data.get("sources")

    if not isinstance(content, str) or not content.strip():
        raise MalformedReplyError("Missing 'content' in model response")
    if not isinstance(category, str) or not category.strip():
        raise MalformedReplyError("Missing 'category' in model response")
    if sources is None:
        sources = []
    if not isinstance(sources, list) or not all(isinstance(s, str) for s in sources):
        raise MalformedReplyError("'sources' must be a list of strings")

    return GeneratedReply(content=content, category=category.strip(), sources=sources)


class OpenAIResponseGenerator:
    def __init__(
        self,
        api_key: str | None,
        model: str = "gpt-4o",
        temperature: float = 0.7,
        timeout: float = 30.0,
        client: OpenAI | None = None,
    ) -> None:
        self.api_key = api_key
        self.model = model
        self.temperature = temperature
        self.timeout = timeout
        self._client = client

    @property
    def client(self) -> OpenAI:
        # Built lazily so the app starts (and falls back per request) without a key.
        if self._client is None:
            if not self.api_key:
                raise RuntimeError("Missing OPENAI_API_KEY")
            # Single attempt: a failed call goes straight to the fallback reply.
            self._client = OpenAI(api_key=self.api_key, timeout=self.timeout, max_retries=0)
        return self._client

    def generate(
        self,
        message: str,
        category: str | None,
        history: list[dict[str, str]],
    ) -> GeneratedReply:
        messages = build_messages(message, category, history)
        logger.debug("Requesting completion: model=%s messages=%d", self.model, len(messages))

        response = self.client.chat.completions.create(
            model=self.model,
            messages=messages,
            response_format={"type": "json_object"},
            temperature=self.temperature,
        )

        if not response.choices:
            raise MalformedReplyError("Model returned no choices")
        return parse_reply(response.choices[0].message.content)
