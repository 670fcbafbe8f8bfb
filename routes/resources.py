"""Placeholder CRUD blueprints for the tracker's resources.

Every route requires a bearer token; handlers only echo what they were
asked to do until the resources get real models.
"""

from __future__ import annotations
from http import HTTPStatus

from flask import Blueprint, jsonify, request

from auth import protect_blueprint

RESOURCES = (
    ("venues", "venue"),
    ("contacts", "contact"),
    ("performances", "performance"),
    ("communications", "communication"),
    ("documents", "document"),
)


def _make_resource_bp(plural: str, singular: str) -> Blueprint:
    bp = protect_blueprint(Blueprint(plural, __name__))

    @bp.route("", methods=["GET"])
    def list_items():
        return jsonify({"message": f"Get all {plural}"})

    @bp.route("/<item_id>", methods=["GET"])
    def get_item(item_id: str):
        return jsonify({"message": f"Get {singular} with ID {item_id}"})

    @bp.route("", methods=["POST"])
    def create_item():
        data = request.get_json(silent=True) or {}
        return (
            jsonify({"message": f"Create a new {singular}", "data": data}),
            HTTPStatus.CREATED,
        )

    @bp.route("/<item_id>", methods=["PUT"])
    def update_item(item_id: str):
        data = request.get_json(silent=True) or {}
        return jsonify({"message": f"Update {singular} with ID {item_id}", "data": data})

    @bp.route("/<item_id>", methods=["DELETE"])
    def delete_item(item_id: str):
        return jsonify({"message": f"Delete {singular} with ID {item_id}"})

    return bp


def resource_blueprints() -> list[Blueprint]:
    """Build a fresh set of blueprints; one app registers each set once."""
    return [_make_resource_bp(plural, singular) for plural, singular in RESOURCES]
