"""
Registration, login and profile lookup.

Each attempt moves Received -> Validated -> Authenticated or Rejected;
rejections are raised as ``AuthError`` subclasses.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from email_validator import EmailNotValidError, validate_email
from flask import current_app

from models.user import NAME_MAX_LENGTH
from storage.abstract_credential_store import AbstractCredentialStore, UserProfile

from .errors import DuplicateEmail, InvalidCredentials, NotFound, ValidationError
from .tokens import TokenService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthResult:
    """A successful register or login: the user plus a fresh bearer token."""

    user: UserProfile
    token: str

    def to_dict(self) -> dict:
        return {**self.user.to_dict(), "token": self.token}


def _text_field(fields: dict, field: str, value: Any, *, strip: bool = True) -> str:
    """Return ``value`` as usable text, recording a message in ``fields`` if it is not."""
    if value is None:
        value = ""
    if not isinstance(value, str):
        fields[field] = f"{field} must be a string"
        return ""
    try:
        # Lone surrogates survive JSON decoding but cannot be hashed or stored.
        value.encode("utf-8")
    except UnicodeEncodeError:
        fields[field] = f"{field} must be valid text"
        return ""
    if strip:
        value = value.strip()
    if not value:
        fields[field] = f"{field} is required"
    return value


def is_valid_email(value: str) -> bool:
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


class AuthService:
    """Orchestrates the credential store and the token service."""

    def __init__(self, store: AbstractCredentialStore, tokens: TokenService):
        self.store = store
        self.tokens = tokens

    def register(self, name: Any, email: Any, password: Any) -> AuthResult:
        name, email, password = self._validate_registration(name, email, password)

        if self.store.find_by_email(email) is not None:
            logger.info("Registration rejected: email already registered")
            raise DuplicateEmail()

        # The store's unique constraint is authoritative if a concurrent insert won.
        user = self.store.create(name, email, password)
        logger.info("Registered user %s", user.id)
        return AuthResult(user=user, token=self.tokens.issue(user.id))

    def login(self, email: Any, password: Any) -> AuthResult:
        fields = {}
        email = _text_field(fields, "email", email)
        password = _text_field(fields, "password", password, strip=False)
        if fields:
            raise ValidationError(fields)

        user = self.store.find_by_email(email)
        if not self.store.check_password(user.id if user else None, password):
            logger.info("Login rejected: invalid credentials")
            raise InvalidCredentials()

        logger.info("Login: %s", user.id)
        return AuthResult(user=user, token=self.tokens.issue(user.id))

    def get_profile(self, user_id: str) -> UserProfile:
        user = self.store.find_by_id(user_id)
        if user is None:
            logger.info("Profile lookup for missing user %s", user_id)
            raise NotFound()
        return user

    @staticmethod
    def _validate_registration(name: Any, email: Any, password: Any) -> tuple[str, str, str]:
        fields = {}

        name = _text_field(fields, "name", name)
        if len(name) > NAME_MAX_LENGTH:
            fields["name"] = f"name must be at most {NAME_MAX_LENGTH} characters"

        email = _text_field(fields, "email", email)
        if email and not is_valid_email(email):
            fields["email"] = "email must be a valid email address"

        password = _text_field(fields, "password", password, strip=False)

        if fields:
            raise ValidationError(fields)
        return name, email, password


def get_auth_service() -> AuthService:
    """Return the service wired into the current app by the factory."""
    return current_app.extensions["auth_service"]
