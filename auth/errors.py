"""Error taxonomy for authentication and access control."""

from __future__ import annotations

from http import HTTPStatus


class AuthError(Exception):
    """Base class for errors that are translated into client responses."""

    status_code = HTTPStatus.BAD_REQUEST
    title = "Bad Request"
    default_message = "The request could not be processed."

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AuthError):
    """Malformed input; ``fields`` maps each offending field to a message."""

    default_message = "Invalid input."

    def __init__(self, fields: dict[str, str], message: str | None = None):
        self.fields = dict(fields)
        super().__init__(message)


class DuplicateEmail(AuthError):
    status_code = HTTPStatus.CONFLICT
    title = "Conflict"
    default_message = "A user with that email already exists."


class InvalidCredentials(AuthError):
    """Shared by unknown-email and wrong-password logins."""

    status_code = HTTPStatus.UNAUTHORIZED
    title = "Unauthorized"
    default_message = "Invalid email or password."


class Unauthorized(AuthError):
    status_code = HTTPStatus.UNAUTHORIZED
    title = "Unauthorized"
    default_message = "Not authorized."


class NotFound(AuthError):
    status_code = HTTPStatus.NOT_FOUND
    title = "Not Found"
    default_message = "User not found."


class HashingError(Exception):
    """The password hasher failed for reasons unrelated to the input."""


class TokenError(Exception):
    """Bearer token rejected. ``kind`` is for internal logs only."""

    kind = "invalid"


class InvalidSignature(TokenError):
    kind = "invalid_signature"


class TokenExpired(TokenError):
    kind = "expired"


class MalformedToken(TokenError):
    kind = "malformed"
