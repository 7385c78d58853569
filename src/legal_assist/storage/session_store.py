"""Session-keyed storage for chat turns.

The orchestrator and the web layer only talk to :class:`SessionStore`, so the
in-memory implementation can later be swapped for a persistent one.
"""

from __future__ import annotations

import itertools
from abc import ABC, abstractmethod
from datetime import datetime, timezone

from legal_assist.chat.models import ChatTurn, NewTurn


class SessionStore(ABC):
    @abstractmethod
    def append(self, new_turn: NewTurn) -> ChatTurn:
        """Assign an id and timestamp, append to the session, return the stored turn."""

    @abstractmethod
    def list_by_session(self, session_id: str) -> list[ChatTurn]:
        """All turns of a session in insertion order; empty for unknown sessions."""

    @abstractmethod
    def delete_by_id(self, turn_id: int) -> bool:
        """Remove a turn. Returns False when no turn has that id."""

    @abstractmethod
    def list_session_ids(self) -> set[str]: ...

    @abstractmethod
    def clear(self) -> None:
        """Drop every session."""

    def recent_by_session(self, session_id: str, limit: int) -> list[ChatTurn]:
        if limit <= 0:
            return []
        return self.list_by_session(session_id)[-limit:]


class InMemorySessionStore(SessionStore):
    """Process-lifetime store: session_id -> ordered list of turns.

    Ids come from a shared counter and are never reused, even after deletion.
    A secondary id -> session_id index keeps deletes from scanning every session.
    """

    def __init__(self) -> None:
        self._sessions: dict[str, list[ChatTurn]] = {}
        self._session_by_turn: dict[int, str] = {}
        self._ids = itertools.count(1)

    def append(self, new_turn: NewTurn) -> ChatTurn:
        turn = ChatTurn(
            id=next(self._ids),
            session_id=new_turn.session_id,
            content=new_turn.content,
            role=new_turn.role,
            category=new_turn.category or None,
            sources=list(new_turn.sources) if new_turn.sources is not None else None,
            created_at=datetime.now(timezone.utc),
        )
        self._sessions.setdefault(turn.session_id, []).append(turn)
        self._session_by_turn[turn.id] = turn.session_id
        return turn

    def list_by_session(self, session_id: str) -> list[ChatTurn]:
        return list(self._sessions.get(session_id, ()))

    def delete_by_id(self, turn_id: int) -> bool:
        session_id = self._session_by_turn.pop(turn_id, None)
        if session_id is None:
            return False

        turns = self._sessions.get(session_id, [])
        for index, turn in enumerate(turns):
            if turn.id == turn_id:
                del turns[index]
                break
        return True

    def list_session_ids(self) -> set[str]:
        # An emptied session is the same as one that never existed.
        return {session_id for session_id, turns in self._sessions.items() if turns}

    def clear(self) -> None:
        self._sessions.clear()
        self._session_by_turn.clear()
