"""Expose the localization state and language selection to front-end consumers."""

from __future__ import annotations

from flask import Blueprint, jsonify, request
from werkzeug.exceptions import BadRequest

from storefront.client.app.http import parse_json_object, session_runner
from storefront.client.app.localization import LocalizationManager, LocalizationState

blueprint = Blueprint("localization", __name__, url_prefix="/api/v1/localization")


async def _select_language(manager: LocalizationManager, code: str) -> LocalizationState:
    manager.set_language(code)
    await manager.wait_until_idle()
    return manager.state()


@blueprint.get("/")
def get_localization_state():
    """Return the active language, its table and the supported languages."""

    manager = session_runner().session.localization
    return jsonify(manager.state().as_dict()), 200


@blueprint.put("/language")
def set_language():
    """Select a new display language and return the resolved state."""

    payload = parse_json_object(request)
    code = payload.get("code")
    if not isinstance(code, str) or not code.strip():
        raise BadRequest("Field 'code' must be a non-empty string")

    runner = session_runner()
    state = runner.run(_select_language(runner.session.localization, code))
    return jsonify(state.as_dict()), 200


@blueprint.get("/t")
def translate():
    """Translate one dotted key for the active language."""

    key = request.args.get("key")
    if not key:
        raise BadRequest("Query parameter 'key' is required")

    manager = session_runner().session.localization
    value = manager.t(key, request.args.get("default"))
    return jsonify({"key": key, "value": value, "language": manager.current_language}), 200
