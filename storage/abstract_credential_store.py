"""Credential store abstraction layer."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime

from models.user import DEFAULT_ROLE


@dataclass(frozen=True)
class UserProfile:
    """A stored user as seen outside the store; carries no password hash."""

    id: str
    name: str
    email: str
    role: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "role": self.role,
        }


def normalize_email(raw_email: str | None) -> str:
    """Normalize an email string by stripping whitespace and lowering case."""
    return (raw_email or "").strip().lower()


class AbstractCredentialStore(ABC):
    """Interface for user credential persistence."""

    @abstractmethod
    def find_by_email(self, email: str) -> UserProfile | None:
        """Return the user registered under ``email``, if any."""

    @abstractmethod
    def find_by_id(self, user_id: str) -> UserProfile | None:
        """Return the user with the given id, if any."""

    @abstractmethod
    def create(
        self, name: str, email: str, password: str, *, role: str = DEFAULT_ROLE
    ) -> UserProfile:
        """Hash ``password`` and persist a new user.

        Raises ``DuplicateEmail`` when the email is already taken at write time.
        """

    @abstractmethod
    def update_password(self, user_id: str, new_password: str) -> bool:
        """Rehash and store ``new_password``; return False if it already matches."""

    @abstractmethod
    def check_password(self, user_id: str | None, password: str) -> bool:
        """Verify ``password`` for the user; costs the same when the user is unknown."""
