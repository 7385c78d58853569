from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv


DEFAULT_MODEL = "gpt-4o"
DEFAULT_TEMPERATURE = 0.7
DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_HISTORY_WINDOW = 6
DEFAULT_MAX_MESSAGE_CHARS = 2000


def _get_int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _get_float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class Settings:
    openai_api_key: str | None = None
    openai_model: str = DEFAULT_MODEL
    openai_temperature: float = DEFAULT_TEMPERATURE
    openai_timeout: float = DEFAULT_TIMEOUT_SECONDS
    history_window: int = DEFAULT_HISTORY_WINDOW
    max_message_chars: int = DEFAULT_MAX_MESSAGE_CHARS
    log_level: str = "INFO"


def load_settings() -> Settings:
    """Read settings from the environment, after loading a local `.env` if present."""

    load_dotenv()

    return Settings(
        openai_api_key=os.getenv("OPENAI_API_KEY") or None,
        openai_model=os.getenv("OPENAI_MODEL") or DEFAULT_MODEL,
        openai_temperature=_get_float_env("OPENAI_TEMPERATURE", DEFAULT_TEMPERATURE),
        openai_timeout=_get_float_env("OPENAI_TIMEOUT", DEFAULT_TIMEOUT_SECONDS),
        history_window=_get_int_env("CHAT_HISTORY_WINDOW", DEFAULT_HISTORY_WINDOW),
        max_message_chars=_get_int_env("CHAT_MAX_MESSAGE_CHARS", DEFAULT_MAX_MESSAGE_CHARS),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
    )
