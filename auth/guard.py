"""Access guard for routes that require a bearer token."""

from __future__ import annotations

import logging
from functools import wraps

from flask import Blueprint, g, request

from .errors import TokenError, Unauthorized
from .service import get_auth_service

logger = logging.getLogger(__name__)


def require_token() -> str:
    """Verify the request's bearer token and attach the user id to ``g``."""

    scheme, _, token = request.headers.get("Authorization", "").partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token:
        logger.info("Rejected %s %s: missing", request.method, request.path)
        raise Unauthorized()

    try:
        user_id = get_auth_service().tokens.verify(token)
    except TokenError as exc:
        logger.info("Rejected %s %s: %s", request.method, request.path, exc.kind)
        raise Unauthorized() from exc

    g.user_id = user_id
    return user_id


def token_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        require_token()
        return view(*args, **kwargs)

    return wrapper


def protect_blueprint(bp: Blueprint) -> Blueprint:
    """Guard every route on ``bp``."""

    @bp.before_request
    def _guard():
        require_token()

    return bp


def current_user_id() -> str:
    return g.user_id
