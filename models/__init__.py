"""Database initialization and model exports."""

from flask_sqlalchemy import SQLAlchemy


db = SQLAlchemy()

# Import models to register them with SQLAlchemy metadata.
from .user import DEFAULT_ROLE, User  # noqa: E402,F401

__all__ = [
    "db",
    "DEFAULT_ROLE",
    "User",
]
