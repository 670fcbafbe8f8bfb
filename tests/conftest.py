"""Shared pytest fixtures for the application tests."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest
from flask import Flask
from flask.testing import FlaskClient

ROOT_DIR = Path(__file__).resolve().parent.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from app import create_app  # noqa: E402
from auth import AuthService  # noqa: E402
from config import MIN_HASH_ITERATIONS, Config  # noqa: E402
from models import db  # noqa: E402


class _BaseTestConfig(Config):
    TESTING = True
    APP_ENV = "testing"
    JWT_SECRET_KEY = "test-secret-key-with-enough-length-for-hs256"
    PASSWORD_HASH_ITERATIONS = MIN_HASH_ITERATIONS
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    RATELIMIT_ENABLED = False
    LOG_DIR = None
    CORS_ORIGINS = "*"


@pytest.fixture()
def app() -> Flask:
    """Create a Flask application instance for tests."""

    application = create_app(_BaseTestConfig)

    with application.app_context():
        db.create_all()

    yield application

    with application.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    """Return a test client for the Flask app."""

    return app.test_client()


@pytest.fixture()
def app_ctx(app: Flask):
    """Push an application context for tests calling services directly."""

    with app.app_context():
        yield app


@pytest.fixture()
def auth_service(app_ctx: Flask) -> AuthService:
    """Return the auth service wired into the test app."""

    return app_ctx.extensions["auth_service"]


@pytest.fixture()
def build_app():
    """Return a factory building apps from the test config plus overrides."""

    def _build(**overrides) -> Flask:
        config_class = type("OverrideConfig", (_BaseTestConfig,), dict(overrides))
        return create_app(config_class)

    return _build
