from __future__ import annotations


class LegalAssistError(Exception):
    """Base class for errors raised by legal_assist."""


class ValidationError(LegalAssistError):
    """Incoming chat request is unusable; nothing has been stored."""


class MalformedReplyError(LegalAssistError):
    """The model answered, but not with the JSON object we asked for."""
