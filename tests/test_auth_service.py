"""Tests for the auth service state machine."""

from __future__ import annotations

import pytest

from auth import DuplicateEmail, InvalidCredentials, NotFound, ValidationError
from models.user import NAME_MAX_LENGTH, User


def test_register_then_login_returns_same_user(auth_service):
    registered = auth_service.register("Ann", "ann@x.com", "p@ss1234")

    assert registered.token
    assert registered.user.role == "user"
    assert auth_service.tokens.verify(registered.token) == registered.user.id

    logged_in = auth_service.login("ann@x.com", "p@ss1234")
    assert logged_in.user.id == registered.user.id
    assert auth_service.tokens.verify(logged_in.token) == registered.user.id


def test_result_dict_has_public_fields_and_token(auth_service):
    result = auth_service.register("Ann", "ann@x.com", "p@ss1234").to_dict()

    assert set(result) == {"id", "name", "email", "role", "token"}
    assert result["name"] == "Ann"
    assert result["email"] == "ann@x.com"


@pytest.mark.parametrize(
    "name, email, password, bad_field",
    [
        ("", "ann@x.com", "p@ss1234", "name"),
        ("   ", "ann@x.com", "p@ss1234", "name"),
        ("Ann", "", "p@ss1234", "email"),
        ("Ann", "not-an-email", "p@ss1234", "email"),
        ("Ann", "ann@", "p@ss1234", "email"),
        ("Ann", "ann@x.com", "", "password"),
        ("Ann", "ann@x.com", None, "password"),
        (42, "ann@x.com", "p@ss1234", "name"),
    ],
)
def test_register_rejects_invalid_input(auth_service, name, email, password, bad_field):
    with pytest.raises(ValidationError) as excinfo:
        auth_service.register(name, email, password)

    assert bad_field in excinfo.value.fields
    assert User.query.count() == 0


def test_register_reports_every_invalid_field(auth_service):
    with pytest.raises(ValidationError) as excinfo:
        auth_service.register("", "bad", "")

    assert set(excinfo.value.fields) == {"name", "email", "password"}


def test_duplicate_registration_is_rejected(auth_service):
    auth_service.register("Ann", "ann@x.com", "p@ss1234")

    with pytest.raises(DuplicateEmail):
        auth_service.register("Ann Again", "ANN@x.com", "other-pass")

    assert User.query.count() == 1


def test_duplicate_detected_by_store_when_precheck_races(auth_service, monkeypatch):
    auth_service.register("Ann", "ann@x.com", "p@ss1234")
    # Simulate a concurrent insert that landed after the pre-insert lookup.
    monkeypatch.setattr(auth_service.store, "find_by_email", lambda email: None)

    with pytest.raises(DuplicateEmail):
        auth_service.register("Ann", "ann@x.com", "p@ss1234")

    assert User.query.count() == 1


def test_wrong_password_and_unknown_email_are_indistinguishable(auth_service):
    auth_service.register("Ann", "ann@x.com", "p@ss1234")

    with pytest.raises(InvalidCredentials) as wrong_password:
        auth_service.login("ann@x.com", "wrong-password")
    with pytest.raises(InvalidCredentials) as unknown_email:
        auth_service.login("nobody@x.com", "p@ss1234")

    assert type(wrong_password.value) is type(unknown_email.value)
    assert wrong_password.value.message == unknown_email.value.message
    assert wrong_password.value.status_code == unknown_email.value.status_code


def test_unknown_email_still_runs_a_password_check(auth_service, monkeypatch):
    calls = []
    hasher = auth_service.store._hasher
    original_verify = hasher.verify

    def _counting_verify(plaintext, hashed):
        calls.append(hashed)
        return original_verify(plaintext, hashed)

    monkeypatch.setattr(hasher, "verify", _counting_verify)

    with pytest.raises(InvalidCredentials):
        auth_service.login("nobody@x.com", "p@ss1234")

    assert len(calls) == 1
    assert calls[0]


@pytest.mark.parametrize(
    "email, password",
    [("", "p@ss1234"), ("ann@x.com", ""), (None, None)],
)
def test_login_requires_both_fields(auth_service, email, password):
    with pytest.raises(ValidationError):
        auth_service.login(email, password)


def test_login_is_case_insensitive_on_email(auth_service):
    registered = auth_service.register("Ann", "ann@x.com", "p@ss1234")

    assert auth_service.login(" ANN@X.COM ", "p@ss1234").user.id == registered.user.id


def test_get_profile_returns_public_fields(auth_service):
    registered = auth_service.register("Ann", "ann@x.com", "p@ss1234")

    profile = auth_service.get_profile(registered.user.id)

    assert profile.to_dict() == {
        "id": registered.user.id,
        "name": "Ann",
        "email": "ann@x.com",
        "role": "user",
    }


def test_get_profile_for_missing_user_raises_not_found(auth_service):
    with pytest.raises(NotFound):
        auth_service.get_profile("ghost")


@pytest.mark.parametrize(
    "name, email, password, bad_field",
    [
        ("Ann", "ann@x.com", "p\ud800ss", "password"),
        ("A\udc00nn", "ann@x.com", "p@ss1234", "name"),
        ("Ann", "a\ud800nn@x.com", "p@ss1234", "email"),
    ],
)
def test_register_rejects_unencodable_text(auth_service, name, email, password, bad_field):
    with pytest.raises(ValidationError) as excinfo:
        auth_service.register(name, email, password)

    assert excinfo.value.fields[bad_field] == f"{bad_field} must be valid text"
    assert User.query.count() == 0


def test_login_rejects_unencodable_password(auth_service):
    auth_service.register("Ann", "ann@x.com", "p@ss1234")

    with pytest.raises(ValidationError) as excinfo:
        auth_service.login("ann@x.com", "p\ud800ss")

    assert excinfo.value.fields == {"password": "password must be valid text"}


def test_register_enforces_name_length(auth_service):
    with pytest.raises(ValidationError) as excinfo:
        auth_service.register("a" * (NAME_MAX_LENGTH + 1), "ann@x.com", "p@ss1234")

    assert "name" in excinfo.value.fields

    result = auth_service.register("a" * NAME_MAX_LENGTH, "ann@x.com", "p@ss1234")
    assert len(result.user.name) == NAME_MAX_LENGTH


@pytest.mark.parametrize(
    "name, message",
    [
        (None, "name is required"),
        ("  ", "name is required"),
        (42, "name must be a string"),
        (["Ann"], "name must be a string"),
    ],
)
def test_register_field_messages(auth_service, name, message):
    with pytest.raises(ValidationError) as excinfo:
        auth_service.register(name, "ann@x.com", "p@ss1234")

    assert excinfo.value.fields == {"name": message}


def test_password_whitespace_is_kept(auth_service):
    auth_service.register("Ann", "ann@x.com", " p@ss1234 ")

    with pytest.raises(InvalidCredentials):
        auth_service.login("ann@x.com", "p@ss1234")
    assert auth_service.login("ann@x.com", " p@ss1234 ").user.email == "ann@x.com"
