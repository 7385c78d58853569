"""Chat orchestration: persist a user message, ask the generator, persist the reply."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from legal_assist.agent.generator import ResponseGenerator
from legal_assist.chat.models import ChatRequest, ChatTurn, GeneratedReply, NewTurn
from legal_assist.config import DEFAULT_HISTORY_WINDOW
from legal_assist.storage.session_store import SessionStore

logger = logging.getLogger(__name__)


@dataclass
class ChatOrchestrator:
    store: SessionStore
    generator: ResponseGenerator
    history_window: int = DEFAULT_HISTORY_WINDOW

    def submit(self, request: ChatRequest) -> ChatTurn:
        """Run one chat turn and return the stored assistant reply.

        Flow:
        1. Store the user message (no category/sources)
        2. Read the last `history_window` turns of the session as context
        3. Ask the generator, falling back on any failure
        4. Store and return the assistant turn

        The user turn is written before the generator runs; if the process dies
        in between, the session keeps a user turn without a reply.
        """

        user_turn = self.store.append(
            NewTurn(session_id=request.session_id, content=request.message, role="user")
        )
        logger.info("Stored user turn %s for session %s", user_turn.id, request.session_id)

        history = [
            {"role": t.role, "content": t.content}
            for t in self.store.recent_by_session(request.session_id, self.history_window)
        ]

        reply = self._generate(request, history)

        assistant_turn = self.store.append(
            NewTurn(
                session_id=request.session_id,
                content=reply.content,
                role="assistant",
                category=reply.category,
                sources=list(reply.sources),
            )
        )
        logger.info(
            "Stored assistant turn %s for session %s (category=%s)",
            assistant_turn.id,
            request.session_id,
            reply.category,
        )
        return assistant_turn

    def _generate(self, request: ChatRequest, history: list[dict[str, str]]) -> GeneratedReply:
        try:
            reply = self.generator.generate(request.message, request.topic, history)
        except Exception:
            logger.exception("Error generating legal response for session %s", request.session_id)
            return GeneratedReply.fallback()

        if not isinstance(reply, GeneratedReply) or not reply.is_well_formed():
            logger.warning("Generator returned malformed reply for session %s: %r", request.session_id, reply)
            return GeneratedReply.fallback()

        return reply
