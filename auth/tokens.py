"""
Bearer token issuance and verification.

Tokens are Flask-JWT-Extended access tokens (HS256). The signing secret
and the validity window come from ``AuthSettings`` and are copied into
the app config by the factory; verification needs no store lookup.
"""

from __future__ import annotations

from datetime import timedelta

from flask_jwt_extended import create_access_token, decode_token
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt import ExpiredSignatureError, InvalidSignatureError, InvalidTokenError

from .errors import InvalidSignature, MalformedToken, TokenExpired


class TokenService:
    """Mints and checks signed, time-limited access tokens."""

    def __init__(self, ttl: timedelta):
        self.ttl = ttl

    def issue(self, user_id: str) -> str:
        return create_access_token(identity=str(user_id), expires_delta=self.ttl)

    def verify(self, token: str) -> str:
        """Return the user id embedded in ``token``.

        Raises ``InvalidSignature``, ``TokenExpired`` or ``MalformedToken``.
        """
        try:
            claims = decode_token(token)
        except ExpiredSignatureError as exc:
            raise TokenExpired("Token has expired.") from exc
        except InvalidSignatureError as exc:
            raise InvalidSignature("Token signature mismatch.") from exc
        except (InvalidTokenError, JWTExtendedException) as exc:
            raise MalformedToken(str(exc)) from exc

        if claims.get("type") != "access":
            raise MalformedToken("Not an access token.")

        subject = claims.get("sub")
        if not isinstance(subject, str) or not subject:
            raise MalformedToken("Token has no subject.")
        return subject
