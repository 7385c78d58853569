"""Logging setup, applied by the web app factory."""

import logging
import sys

HANDLER_NAME = "legal_assist"


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging with an ISO-ish timestamp format.

    Safe to call more than once: only the handler installed here is replaced,
    handlers added by a WSGI server or test runner are left alone.
    """
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        if handler.get_name() == HANDLER_NAME:
            root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )

    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    root_logger.addHandler(handler)

    # The SDK logs every HTTP request at INFO.
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("openai").setLevel(logging.WARNING)
