from datetime import timedelta

import pytest
from pydantic import ValidationError

from shophub.domain.errors import Conflict, Unauthorized
from shophub.domain.identity import GUEST, Identity
from shophub.domain.schemas import PasswordChange, UserLogin, UserRegister
from shophub.services.auth_service import AuthService, create_token

from conftest import PASSWORD


def register(svc, username="dave", email="Dave@Example.com"):
    return svc.register(UserRegister(username=username, email=email, password="Passw0rd"))


def test_register_returns_user_and_token(db):
    svc = AuthService(db)

    result = register(svc)

    assert result["user"].username == "dave"
    assert result["user"].email == "dave@example.com"
    assert svc.resolve_identity(result["token"]) == Identity(user_id=result["user"].id)


def test_register_duplicate(db):
    svc = AuthService(db)
    register(svc)

    with pytest.raises(Conflict):
        register(svc, username="other")
    with pytest.raises(Conflict):
        register(svc, email="other@example.com")


@pytest.mark.parametrize(
    "data",
    [
        {"username": "ab", "email": "a@example.com", "password": "Passw0rd"},
        {"username": "bad name", "email": "a@example.com", "password": "Passw0rd"},
        {"username": "dave", "email": "not-an-email", "password": "Passw0rd"},
        {"username": "dave", "email": "a@example.com", "password": "password1"},
        {"username": "dave", "email": "a@example.com", "password": "Pa1"},
    ],
)
def test_register_payload_validation(data):
    with pytest.raises(ValidationError):
        UserRegister(**data)


def test_login(db, alice):
    svc = AuthService(db)

    result = svc.login(UserLogin(email="ALICE@example.com", password=PASSWORD))

    assert result["user"].id == alice.id
    assert svc.resolve_identity(result["token"]).user_id == alice.id


def test_login_wrong_password(db, alice):
    with pytest.raises(Unauthorized) as exc:
        AuthService(db).login(UserLogin(email="alice@example.com", password="Wrong123"))

    assert exc.value.message == "Invalid email or password"


def test_login_unknown_email(db):
    with pytest.raises(Unauthorized):
        AuthService(db).login(UserLogin(email="ghost@example.com", password=PASSWORD))


def test_change_password(db, alice, alice_id):
    svc = AuthService(db)

    with pytest.raises(Unauthorized):
        svc.change_password(alice_id, PasswordChange(current_password="Nope1234", new_password="NewPass1"))

    svc.change_password(alice_id, PasswordChange(current_password=PASSWORD, new_password="NewPass1"))

    assert svc.login(UserLogin(email="alice@example.com", password="NewPass1"))["user"].id == alice.id
    with pytest.raises(Unauthorized):
        svc.login(UserLogin(email="alice@example.com", password=PASSWORD))


def test_profile(db, alice, alice_id):
    svc = AuthService(db)

    assert svc.profile(alice_id).username == "alice"
    with pytest.raises(Unauthorized):
        svc.profile(GUEST)


def test_missing_token_is_guest(db):
    assert AuthService(db).resolve_identity(None) is GUEST
    assert AuthService(db).resolve_identity("") is GUEST


def test_expired_token(db, alice):
    token = create_token(alice.id, expires_delta=timedelta(seconds=-5))

    with pytest.raises(Unauthorized) as exc:
        AuthService(db).resolve_identity(token)

    assert exc.value.message == "Token expired"


def test_garbage_token(db):
    with pytest.raises(Unauthorized):
        AuthService(db).resolve_identity("not.a.token")


def test_token_for_deleted_user(db):
    with pytest.raises(Unauthorized):
        AuthService(db).resolve_identity(create_token(12345))
