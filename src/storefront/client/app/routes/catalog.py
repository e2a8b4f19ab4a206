"""Expose cached catalog resources to the presentation layer."""

from __future__ import annotations

from flask import Blueprint, jsonify

from storefront.client.app.http import problem_response, session_runner
from storefront.client.app.services import ResourceBinding, UnknownResourceError
from storefront.client.app.services.resources import dump_data

blueprint = Blueprint("catalog", __name__, url_prefix="/api/v1/catalog")


def _binding(resource: str) -> ResourceBinding | None:
    try:
        return session_runner().session.catalog.binding(resource)
    except UnknownResourceError:
        return None


def _unknown(resource: str):
    return problem_response(
        "not_found",
        status=404,
        message=f"Unknown catalog resource: {resource}",
    ).to_response()


@blueprint.get("/")
def list_resources():
    """Return the registered resource keys."""

    return jsonify({"resources": session_runner().session.catalog.resource_keys}), 200


@blueprint.get("/<resource>")
def get_resource(resource: str):
    """Return the resolved value for ``resource``, fetching it on first use."""

    binding = _binding(resource)
    if binding is None:
        return _unknown(resource)

    session_runner().run(binding.access())
    return jsonify(binding.view().as_dict()), 200


@blueprint.post("/<resource>/refetch")
def refetch_resource(resource: str):
    """Force a new remote attempt for ``resource``."""

    binding = _binding(resource)
    if binding is None:
        return _unknown(resource)

    session_runner().run(binding.refetch())
    return jsonify(binding.view().as_dict()), 200


@blueprint.get("/<resource>/<slug>")
def get_resource_item(resource: str, slug: str):
    """Return one entry of a sequence resource by slug."""

    runner = session_runner()
    if _binding(resource) is None:
        return _unknown(resource)

    item = runner.run(runner.session.catalog.find_by_slug(resource, slug))
    if item is None:
        return problem_response(
            "not_found",
            status=404,
            message=f"No {resource} entry with slug {slug!r}",
        ).to_response()
    return jsonify({"resource": resource, "data": dump_data(item)}), 200
