from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Literal


Role = Literal["user", "assistant"]

LEGAL_CATEGORIES: tuple[str, ...] = (
    "contracts",
    "family",
    "employment",
    "property",
    "ip",
    "criminal",
    "immigration",
    "personal_injury",
    "tax",
    "bankruptcy",
)

# Client-side "no filter" choice; never stored on a turn.
ALL_CATEGORIES = "all"

FALLBACK_CONTENT = "I'm sorry, I encountered an error processing your request. Please try again later."
FALLBACK_CATEGORY = "error"
FALLBACK_SOURCES: tuple[str, ...] = ("System error",)


@dataclass(frozen=True)
class NewTurn:
    """A turn as handed to the store, before it has an id or timestamp."""

    session_id: str
    content: str
    role: Role
    category: str | None = None
    sources: list[str] | None = None


@dataclass(frozen=True)
class ChatTurn:
    id: int
    session_id: str
    content: str
    role: Role
    created_at: datetime
    category: str | None = None
    sources: list[str] | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "sessionId": self.session_id,
            "content": self.content,
            "role": self.role,
            "category": self.category,
            "sources": list(self.sources) if self.sources is not None else None,
            "createdAt": self.created_at.isoformat(),
        }


@dataclass(frozen=True)
class ChatRequest:
    message: str
    session_id: str
    category: str | None = None

    @property
    def topic(self) -> str | None:
        """Category to pass to the generator; `all` means no filter."""

        if not self.category or self.category == ALL_CATEGORIES:
            return None
        return self.category


@dataclass(frozen=True)
class GeneratedReply:
    content: str
    category: str
    sources: list[str] = field(default_factory=list)

    @classmethod
    def fallback(cls) -> GeneratedReply:
        return cls(content=FALLBACK_CONTENT, category=FALLBACK_CATEGORY, sources=list(FALLBACK_SOURCES))

    def is_well_formed(self) -> bool:
        return (
            isinstance(self.content, str)
            and isinstance(self.category, str)
            and isinstance(self.sources, list)
            and all(isinstance(s, str) for s in self.sources)
        )
