"""Flask application for Notepad."""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from notepad.exc import (
    DoesNotExist,
    ProtectedFolder,
    StoreCorrupted,
    Unauthorized,
    ValidationError,
)
from notepad.services.logs import get_logger
from notepad.state import ApplicationState
from notepad.web.routes import api

if TYPE_CHECKING:
    from notepad.settings import Settings
    from notepad.stores import Store

#: Methods that change the notebook and so get the simulated latency.
MUTATING_METHODS = frozenset({"POST", "PUT", "PATCH", "DELETE"})

logger = get_logger(__name__)


def register_error_handlers(app: Flask) -> None:
    """
    Map exceptions to JSON error responses.

    Args:
        app: The Flask application

    """

    @app.errorhandler(ValidationError)
    def handle_validation_error(error: ValidationError):
        return jsonify(error.to_dict()), 400

    @app.errorhandler(Unauthorized)
    def handle_unauthorized(error: Unauthorized):
        return jsonify({"message": error.message}), 401

    @app.errorhandler(ProtectedFolder)
    def handle_protected_folder(error: ProtectedFolder):
        return jsonify({"message": str(error)}), 400

    @app.errorhandler(DoesNotExist)
    def handle_does_not_exist(error: DoesNotExist):
        return jsonify({"message": str(error)}), 404

    @app.errorhandler(HTTPException)
    def handle_http_exception(error: HTTPException):
        return jsonify({"message": error.description}), error.code

    @app.errorhandler(StoreCorrupted)
    @app.errorhandler(Exception)
    def handle_unexpected(error: Exception):
        logger.exception(
            "request.failed", method=request.method, path=request.path
        )
        return jsonify({"message": "Internal server error"}), 500


def create_app(settings: Settings | None = None, store: Store | None = None) -> Flask:
    """
    Create the Flask application.

    Keyword Args:
        settings: Replace the application settings
        store: Use this store instead of the one named by the settings

    Returns:
        The Flask application

    """
    state = ApplicationState()
    if settings is not None or store is not None:
        state.configure(settings or state.settings, store=store)

    app = Flask(__name__)
    app.config.update(state.settings.flask_config)
    app.register_blueprint(api)
    register_error_handlers(app)

    @app.before_request
    def simulate_latency() -> None:
        delay = ApplicationState().settings.simulated_latency
        if delay and request.method in MUTATING_METHODS:
            time.sleep(delay)

    return app
