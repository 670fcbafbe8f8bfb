"""Authentication: password hashing, bearer tokens and the access guard."""

from .errors import (
    AuthError,
    DuplicateEmail,
    HashingError,
    InvalidCredentials,
    InvalidSignature,
    MalformedToken,
    NotFound,
    TokenError,
    TokenExpired,
    Unauthorized,
    ValidationError,
)
from .passwords import PasswordHasher
from .tokens import TokenService
from .service import AuthResult, AuthService, get_auth_service
from .guard import current_user_id, protect_blueprint, require_token, token_required

__all__ = [
    "AuthError",
    "AuthResult",
    "AuthService",
    "DuplicateEmail",
    "HashingError",
    "InvalidCredentials",
    "InvalidSignature",
    "MalformedToken",
    "NotFound",
    "PasswordHasher",
    "TokenError",
    "TokenExpired",
    "TokenService",
    "Unauthorized",
    "ValidationError",
    "current_user_id",
    "get_auth_service",
    "protect_blueprint",
    "require_token",
    "token_required",
]
