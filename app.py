"""Application factory."""

import json
import logging
import os
import uuid

from flask import Flask, g, jsonify, request
from flask_cors import CORS
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException

from auth import AuthError, AuthService, PasswordHasher, TokenService, Unauthorized
from config import AuthSettings, Config
from extensions import jwt, migrate
from models import db
from routes.auth import apply_auth_rate_limits, auth_bp
from routes.resources import resource_blueprints
from storage import SQLCredentialStore
from utils.log_setup import configure_logging

logger = logging.getLogger(__name__)

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "no-referrer",
}


def build_auth_service(settings: AuthSettings) -> AuthService:
    """Wire the hasher, credential store and token service together."""
    hasher = PasswordHasher(iterations=settings.hash_iterations)
    return AuthService(
        store=SQLCredentialStore(hasher),
        tokens=TokenService(ttl=settings.token_ttl),
    )


def create_app(config_class: type[Config] = Config) -> Flask:
    """Create and configure the Flask application."""
    app = Flask(__name__)
    app.config.from_object(config_class)
    configure_logging(app)

    # Resolved once; a missing secret outside development stops startup here.
    settings = AuthSettings.from_mapping(app.config)
    app.config["JWT_SECRET_KEY"] = settings.jwt_secret
    app.config["JWT_ACCESS_TOKEN_EXPIRES"] = settings.token_ttl

    # Core subsystems
    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)

    # CORS
    CORS(
        app,
        resources={r"/*": {"origins": app.config.get("CORS_ORIGINS", "*")}},
        supports_credentials=True,
    )

    app.extensions["auth_service"] = build_auth_service(settings)

    # Blueprints
    app.register_blueprint(auth_bp, url_prefix="/api/auth")
    for bp in resource_blueprints():
        app.register_blueprint(bp, url_prefix=f"/api/{bp.name}")

    # Rate limiting, one limiter per app
    if not app.config.get("RATELIMIT_KEY_PREFIX"):
        app.config["RATELIMIT_KEY_PREFIX"] = str(uuid.uuid4())
    limiter = Limiter(key_func=get_remote_address)
    limiter.init_app(app)
    apply_auth_rate_limits(app, limiter)
    app.extensions["rate_limiter"] = limiter

    # Health
    @app.route("/health", methods=["GET"])
    def health_check():
        return jsonify({"status": "ok"})

    _register_request_hooks(app)
    _register_error_handlers(app)

    return app


def check_database(app: Flask) -> bool:
    """Return True if the configured database answers a trivial query."""
    with app.app_context():
        try:
            db.session.execute(text("SELECT 1"))
        except SQLAlchemyError:
            logger.exception("Unable to connect to the database")
            return False
    logger.info("Database connection established successfully")
    return True


def _request_id() -> str:
    return g.get("request_id") or str(uuid.uuid4())


def _register_request_hooks(app: Flask) -> None:
    """Request ids, security headers and access logging."""

    @app.before_request
    def _assign_request_id():
        g.request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())

    @app.after_request
    def _finish_response(response):
        request_id = g.get("request_id")
        if request_id:
            response.headers.setdefault("X-Request-ID", request_id)
        for header, value in SECURITY_HEADERS.items():
            response.headers.setdefault(header, value)
        logger.info(
            "%s %s %s [%s]", request.method, request.path, response.status_code, request_id
        )
        return response


def _register_error_handlers(app: Flask) -> None:
    """Register JSON error handlers with request IDs."""

    @app.errorhandler(AuthError)
    def _handle_auth_error(error: AuthError):
        payload = {
            "error": error.title,
            "detail": error.message,
            "request_id": _request_id(),
        }
        fields = getattr(error, "fields", None)
        if fields:
            payload["fields"] = fields
        response = jsonify(payload)
        response.status_code = int(error.status_code)
        if isinstance(error, Unauthorized):
            response.headers["WWW-Authenticate"] = "Bearer"
        return response

    @app.errorhandler(HTTPException)
    def _handle_http_exception(error: HTTPException):
        request_id = _request_id()
        response = error.get_response()
        payload = {
            "error": getattr(error, "name", "Error"),
            "detail": error.description,
            "request_id": request_id,
        }
        response.data = json.dumps(payload)
        response.content_type = "application/json"
        response.headers.setdefault("X-Request-ID", request_id)
        return response

    @app.errorhandler(Exception)
    def _handle_unexpected(error: Exception):
        request_id = _request_id()
        app.logger.exception("Unhandled application error [%s]", request_id, exc_info=error)
        payload = {
            "error": "Internal Server Error",
            "detail": "An unexpected error occurred.",
            "request_id": request_id,
        }
        response = jsonify(payload)
        response.status_code = 500
        response.headers.setdefault("X-Request-ID", request_id)
        return response


if __name__ == "__main__":
    application = create_app()
    if check_database(application):
        application.run(host="0.0.0.0", port=int(os.environ.get("PORT", 5000)))
