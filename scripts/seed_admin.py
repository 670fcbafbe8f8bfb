"""Seed an administrator user."""

import os

from app import create_app
from config import Config
from models import db

ADMIN_NAME = os.getenv("ADMIN_NAME", "Administrator")
ADMIN_EMAIL = os.getenv("ADMIN_EMAIL", "admin@example.com")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "AdminPass123")


def main(config_class: type[Config] = Config) -> str:
    app = create_app(config_class)
    with app.app_context():
        db.create_all()
        store = app.extensions["auth_service"].store
        admin = store.find_by_email(ADMIN_EMAIL)
        if admin is None:
            store.create(ADMIN_NAME, ADMIN_EMAIL, ADMIN_PASSWORD, role="admin")
            action = "created"
        elif store.update_password(admin.id, ADMIN_PASSWORD):
            action = "updated"
        else:
            action = "unchanged"
    print(f"Admin user {action}: {ADMIN_EMAIL}")
    return action


if __name__ == "__main__":
    main()
