"""Application configuration module."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Mapping

logger = logging.getLogger(__name__)

DEVELOPMENT_ENVIRONMENTS = ("development", "testing")
DEV_JWT_SECRET = "dev-only-insecure-secret-never-use-in-production"
MIN_HASH_ITERATIONS = 10_000


class ConfigurationError(RuntimeError):
    """Raised when the application cannot start with the given configuration."""


class Config:
    """Base configuration for the Flask application."""

    # Core
    APP_ENV = os.getenv("APP_ENV", "production")
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY")
    TOKEN_TTL_DAYS = int(os.getenv("TOKEN_TTL_DAYS", "30"))
    PASSWORD_HASH_ITERATIONS = int(os.getenv("PASSWORD_HASH_ITERATIONS", "600000"))
    DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///venue_tracker.db")
    SQLALCHEMY_DATABASE_URI = DATABASE_URL
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Logging
    LOG_LEVEL = os.getenv("LOG_LEVEL")
    LOG_DIR = os.getenv("LOG_DIR")

    # CORS
    _raw_origins = os.getenv("ORIGINS", "*")
    if _raw_origins.strip() == "*":
        CORS_ORIGINS = "*"
    else:
        CORS_ORIGINS = [o.strip() for o in _raw_origins.split(",") if o.strip()]

    # Rate limiting
    RATELIMIT_ENABLED = True
    RATELIMIT_DEFAULT = os.getenv("RATE_LIMIT", "60 per minute")
    AUTH_RATE_LIMIT = os.getenv("AUTH_RATE_LIMIT", "10 per minute")
    RATELIMIT_HEADERS_ENABLED = True
    RATELIMIT_STORAGE_URI = os.getenv("RATELIMIT_STORAGE_URI", "memory://")
    RATELIMIT_KEY_PREFIX = os.getenv("RATELIMIT_KEY_PREFIX", "")


@dataclass(frozen=True)
class AuthSettings:
    """Resolved authentication settings, built once at startup and injected."""

    jwt_secret: str
    token_ttl: timedelta
    hash_iterations: int

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "AuthSettings":
        env = (mapping.get("APP_ENV") or "production").lower()
        secret = mapping.get("JWT_SECRET_KEY")
        if not secret:
            if env not in DEVELOPMENT_ENVIRONMENTS:
                raise ConfigurationError(
                    "JWT_SECRET_KEY must be set when APP_ENV is {!r}.".format(env)
                )
            logger.warning("JWT_SECRET_KEY is not set; using the development secret")
            secret = DEV_JWT_SECRET

        ttl_days = mapping.get("TOKEN_TTL_DAYS")
        ttl_days = 30 if ttl_days is None else int(ttl_days)
        if ttl_days <= 0:
            raise ConfigurationError("TOKEN_TTL_DAYS must be positive.")

        iterations = int(mapping.get("PASSWORD_HASH_ITERATIONS") or 0)
        if iterations < MIN_HASH_ITERATIONS:
            raise ConfigurationError(
                f"PASSWORD_HASH_ITERATIONS must be at least {MIN_HASH_ITERATIONS}."
            )

        return cls(
            jwt_secret=secret,
            token_ttl=timedelta(days=ttl_days),
            hash_iterations=iterations,
        )
