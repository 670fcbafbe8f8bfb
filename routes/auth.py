"""Authentication blueprint providing register, login and profile endpoints."""

from __future__ import annotations
from http import HTTPStatus

from flask import Blueprint, Flask, current_app, jsonify, request
from flask_limiter import Limiter

from auth import current_user_id, get_auth_service, token_required
from utils.request_validation import parse_json_request, pick_fields

auth_bp = Blueprint("auth", __name__)

# Endpoints held to AUTH_RATE_LIMIT instead of the default limit.
RATE_LIMITED_ENDPOINTS = ("auth.register", "auth.login")


def _auth_rate_limit() -> str:
    return current_app.config.get("AUTH_RATE_LIMIT", "10 per minute")


def apply_auth_rate_limits(app: Flask, limiter: Limiter) -> None:
    """Wrap the credential endpoints of ``app`` with ``limiter``'s auth limit."""
    for endpoint in RATE_LIMITED_ENDPOINTS:
        view = app.view_functions[endpoint]
        app.view_functions[endpoint] = limiter.limit(_auth_rate_limit)(view)


@auth_bp.route("/register", methods=["POST"])
def register() -> tuple:
    """Register a new user with a name, email and password."""
    payload = parse_json_request(request)
    name, email, password = pick_fields(payload, "name", "email", "password")

    result = get_auth_service().register(name, email, password)
    return jsonify(result.to_dict()), HTTPStatus.CREATED


@auth_bp.route("/login", methods=["POST"])
def login() -> tuple:
    """Authenticate a user and return a bearer token."""
    payload = parse_json_request(request)
    email, password = pick_fields(payload, "email", "password")

    result = get_auth_service().login(email, password)
    return jsonify(result.to_dict()), HTTPStatus.OK


@auth_bp.route("/profile", methods=["GET"])
@token_required
def profile() -> tuple:
    """Return the profile of the token's user."""
    user = get_auth_service().get_profile(current_user_id())
    return jsonify(user.to_dict()), HTTPStatus.OK
