"""Credential storage backends."""

from .abstract_credential_store import AbstractCredentialStore, UserProfile, normalize_email
from .sql_credential_store import SQLCredentialStore

__all__ = ["AbstractCredentialStore", "SQLCredentialStore", "UserProfile", "normalize_email"]
