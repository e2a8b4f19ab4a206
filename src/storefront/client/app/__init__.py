"""Application factory exposing the reference-data client over HTTP."""

from __future__ import annotations

from flask import Flask, jsonify
from werkzeug.exceptions import BadRequest

from storefront.client.config.settings import get_settings
from storefront.client.version import get_project_version

from .http import EXTENSION_KEY, problem_response
from .routes import register_routes
from .session import CatalogSession, SessionRunner


def create_app(
    session: CatalogSession | None = None,
    *,
    prefetch: tuple[str, ...] = (),
) -> Flask:
    """Create the Flask application and start its catalog session."""

    app = Flask(__name__)

    if session is None:
        session = CatalogSession(get_settings())

    runner = SessionRunner(session, timeout=session.settings.timeout_seconds * 3)
    runner.run(session.start(*prefetch))
    app.extensions[EXTENSION_KEY] = runner

    register_routes(app)

    @app.route("/health", methods=["GET"])
    def health_check():
        """Simple health check endpoint for infrastructure monitoring."""

        payload = {
            "status": "ok",
            "version": get_project_version(),
            "resources": session.catalog.resource_keys,
            "cached": session.store.keys(),
            "language": session.localization.current_language,
        }
        return jsonify(payload)

    @app.errorhandler(BadRequest)
    def handle_bad_request(error: BadRequest):
        """Return consistent JSON responses for malformed payloads."""

        message = error.description or "Invalid request"
        return problem_response("bad_request", status=400, message=message).to_response()

    @app.errorhandler(ValueError)
    def handle_value_error(error: ValueError):
        """Surface invalid selections such as unsupported languages to clients."""

        return problem_response(
            "validation_error", status=400, message=str(error)
        ).to_response()

    return app


__all__ = ["create_app"]
