"""SQLAlchemy-backed credential store."""

from __future__ import annotations

import logging
import secrets

from sqlalchemy.exc import IntegrityError

from auth.errors import DuplicateEmail, NotFound
from auth.passwords import PasswordHasher
from models import db
from models.user import DEFAULT_ROLE, User

from .abstract_credential_store import AbstractCredentialStore, UserProfile, normalize_email

logger = logging.getLogger(__name__)


def _to_profile(user: User) -> UserProfile:
    return UserProfile(
        id=user.id,
        name=user.name,
        email=user.email,
        role=user.role,
        created_at=user.created_at,
        updated_at=user.updated_at,
    )


class SQLCredentialStore(AbstractCredentialStore):
    """Persist users in the ``users`` table through the Flask-SQLAlchemy session."""

    def __init__(self, hasher: PasswordHasher):
        self._hasher = hasher
        self._dummy_hash: str | None = None

    def _get(self, user_id: str) -> User | None:
        return db.session.get(User, user_id)

    def _get_by_email(self, email: str) -> User | None:
        return User.query.filter_by(email=normalize_email(email)).first()

    def find_by_email(self, email: str) -> UserProfile | None:
        user = self._get_by_email(email)
        return _to_profile(user) if user is not None else None

    def find_by_id(self, user_id: str) -> UserProfile | None:
        user = self._get(user_id)
        return _to_profile(user) if user is not None else None

    def create(
        self, name: str, email: str, password: str, *, role: str = DEFAULT_ROLE
    ) -> UserProfile:
        user = User(
            name=name,
            email=normalize_email(email),
            role=role or DEFAULT_ROLE,
            password_hash=self._hasher.hash(password),
        )
        db.session.add(user)
        try:
            db.session.commit()
        except IntegrityError as exc:
            db.session.rollback()
            if "email" not in str(exc.orig).lower():
                raise
            logger.warning("Insert rejected by unique email constraint")
            raise DuplicateEmail() from exc

        logger.info("Created user %s with role %s", user.id, user.role)
        return _to_profile(user)

    def update_password(self, user_id: str, new_password: str) -> bool:
        user = self._get(user_id)
        if user is None:
            raise NotFound()
        if self._hasher.verify(new_password, user.password_hash):
            return False

        user.password_hash = self._hasher.hash(new_password)
        db.session.commit()
        logger.info("Password updated for user %s", user.id)
        return True

    def check_password(self, user_id: str | None, password: str) -> bool:
        user = self._get(user_id) if user_id else None
        if user is None:
            self._hasher.verify(password, self._get_dummy_hash())
            return False
        return self._hasher.verify(password, user.password_hash)

    def _get_dummy_hash(self) -> str:
        if self._dummy_hash is None:
            self._dummy_hash = self._hasher.hash(secrets.token_urlsafe(16))
        return self._dummy_hash
