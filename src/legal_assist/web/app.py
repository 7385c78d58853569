import logging
import os

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from legal_assist.agent.factory import build_default_orchestrator, get_settings
from legal_assist.chat.handler import handle_chat_message
from legal_assist.chat.orchestrator import ChatOrchestrator
from legal_assist.config import Settings, _get_int_env
from legal_assist.errors import ValidationError
from legal_assist.logging_config import configure_logging

logger = logging.getLogger(__name__)


def _error(message: str, status: int):
    return jsonify({"ok": False, "error": message}), status


def create_app(orchestrator: ChatOrchestrator | None = None, settings: Settings | None = None) -> Flask:
    """Build the Flask app.

    Serves the process-wide default orchestrator unless one is passed in, so
    `handle_chat_message` and the HTTP routes share one store.
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    orchestrator = orchestrator or build_default_orchestrator()
    store = orchestrator.store

    app = Flask(__name__)

    @app.get("/api/health")
    def api_health():
        return jsonify({"ok": True})

    @app.get("/api/messages/<session_id>")
    def api_list_messages(session_id: str):
        return jsonify([t.to_dict() for t in store.list_by_session(session_id)])

    # validates the body, stores the user turn, asks the model, returns the stored reply
    @app.post("/api/chat")
    def api_chat():
        payload = request.get_json(silent=True)
        try:
            turn = handle_chat_message(payload, orchestrator=orchestrator, max_chars=settings.max_message_chars)
        except ValidationError as e:
            return _error(str(e), 400)
        return jsonify(turn.to_dict())

    @app.get("/api/sessions")
    def api_sessions():
        return jsonify(sorted(store.list_session_ids()))

    @app.delete("/api/messages/<turn_id>")
    def api_delete_message(turn_id: str):
        try:
            parsed_id = int(turn_id, 10)
        except ValueError:
            return _error("Invalid message ID", 400)

        if not store.delete_by_id(parsed_id):
            return _error("Message not found", 404)

        logger.info("Deleted turn %s", parsed_id)
        return "", 204

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        # Routing errors (404/405) keep their own status.
        if isinstance(e, HTTPException):
            return _error(e.description or e.name, e.code or 500)
        logger.exception("Unhandled error for %s %s", request.method, request.path)
        return _error("Failed to process your request. Please try again.", 500)

    return app


if __name__ == "__main__":
    app = create_app()

    host = os.getenv("HOST", "127.0.0.1")
    port = _get_int_env("PORT", 5000)
    debug = os.getenv("FLASK_DEBUG", "").strip() == "1"

    app.run(host=host, port=port, debug=debug)
