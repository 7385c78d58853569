"""LegalAssist: a chat relay that answers general legal questions via an LLM."""

from legal_assist.chat.handler import handle_chat_message
from legal_assist.chat.orchestrator import ChatOrchestrator

__all__ = ["ChatOrchestrator", "handle_chat_message"]
