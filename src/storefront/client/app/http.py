"""HTTP helpers shared by the catalog and localization blueprints."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from flask import Request, current_app, jsonify
from werkzeug.exceptions import BadRequest

from .session import SessionRunner

EXTENSION_KEY = "storefront"


@dataclass(frozen=True)
class ProblemResponse:
    """Lightweight representation of an RFC 7807-style error payload."""

    error: str
    status: int
    message: str | None = None
    extra: Mapping[str, Any] | None = None

    def as_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.error, "status": self.status}
        if self.message:
            payload["message"] = self.message
        if self.extra:
            payload.update(self.extra)
        return payload

    def to_response(self) -> tuple[Any, int]:
        return jsonify(self.as_dict()), self.status


def problem_response(
    error: str,
    *,
    status: int,
    message: str | None = None,
    **extra: Any,
) -> ProblemResponse:
    """Convenience factory mirroring Flask's ``jsonify`` interface."""

    return ProblemResponse(error=error, status=status, message=message, extra=extra or None)


def parse_json_object(req: Request) -> dict[str, Any]:
    """Extract a JSON object body from ``req`` or raise ``BadRequest``."""

    data = req.get_json(silent=True)
    if data is None:
        raise BadRequest("Request body must be valid JSON")
    if not isinstance(data, Mapping):
        raise BadRequest("Request JSON must be an object")
    return dict(data)


def session_runner() -> SessionRunner:
    """Return the runner registered on the current application."""

    return current_app.extensions[EXTENSION_KEY]


__all__ = [
    "EXTENSION_KEY",
    "ProblemResponse",
    "parse_json_object",
    "problem_response",
    "session_runner",
]
