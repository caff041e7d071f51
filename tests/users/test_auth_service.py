from __future__ import annotations

import pytest

from teacher_portal.core.constants import (
    ACCESS_TOKEN_KEY,
    AUTH_SESSION_KEYS,
    REFRESH_TOKEN_KEY,
    USER_EMAIL_KEY,
    USER_ID_KEY,
    USER_NAME_KEY,
    USER_ROLE_KEY,
)
from teacher_portal.core.exceptions import AuthenticationError, MalformedResponse, RequestFailed, ValidationError
from teacher_portal.storage.memory_store import MemoryKeyValueStore
from teacher_portal.users.http_auth_gateway import HttpAuthGateway
from teacher_portal.users.model import AuthResult
from teacher_portal.users.service import AuthService


def auth_result(**user):
    return AuthResult.from_api(
        {
            "accessToken": "access-1",
            "refreshToken": "refresh-1",
            "user": {"id": 7, "email": "t@x.edu", "name": "Prof T", "role": "teacher", **user},
        }
    )


class FakeAuthGateway:
    def __init__(self, result=None, error=None):
        self.result = result or auth_result()
        self.error = error
        self.calls = []

    def login(self, email, password):
        self.calls.append(("login", email))
        if self.error:
            raise self.error
        return self.result

    def register(self, email, password, name, role):
        self.calls.append(("register", email, name, role))
        if self.error:
            raise self.error
        return self.result

    def refresh(self, refresh_token):
        self.calls.append(("refresh", refresh_token))
        if self.error:
            raise self.error
        return AuthResult(access_token="access-2", refresh_token="refresh-2")


def test_login_persists_session_keys():
    store = MemoryKeyValueStore()
    service = AuthService(FakeAuthGateway(), store)

    session = service.login(" t@x.edu ", "secret")

    assert session.user_id == "7"
    assert store.get(ACCESS_TOKEN_KEY) == "access-1"
    assert store.get(REFRESH_TOKEN_KEY) == "refresh-1"
    assert store.get(USER_ID_KEY) == "7"
    assert store.get(USER_EMAIL_KEY) == "t@x.edu"
    assert store.get(USER_NAME_KEY) == "Prof T"
    assert store.get(USER_ROLE_KEY) == "teacher"
    assert service.current_session() == session
    assert service.is_authenticated() is True


def test_login_validates_before_calling_backend():
    gateway = FakeAuthGateway()
    service = AuthService(gateway, MemoryKeyValueStore())

    with pytest.raises(ValidationError):
        service.login("not-an-email", "secret")
    with pytest.raises(ValidationError):
        service.login("t@x.edu", "  ")
    assert gateway.calls == []


def test_rejected_credentials_raise_authentication_error():
    store = MemoryKeyValueStore()
    service = AuthService(FakeAuthGateway(error=RequestFailed("Invalid credentials", status=401)), store)

    with pytest.raises(AuthenticationError, match="Invalid credentials"):
        service.login("t@x.edu", "wrong")
    assert store.get(ACCESS_TOKEN_KEY) is None


def test_server_errors_propagate_as_request_failed():
    service = AuthService(FakeAuthGateway(error=RequestFailed("boom", status=500)), MemoryKeyValueStore())

    with pytest.raises(RequestFailed) as exc:
        service.login("t@x.edu", "secret")
    assert not isinstance(exc.value, AuthenticationError)


def test_malformed_body_is_not_treated_as_rejection():
    error = MalformedResponse("Expected a JSON object from the auth service", status=400)
    service = AuthService(FakeAuthGateway(error=error), MemoryKeyValueStore())

    with pytest.raises(MalformedResponse):
        service.login("t@x.edu", "secret")


def test_register_rejects_unknown_role():
    gateway = FakeAuthGateway()
    service = AuthService(gateway, MemoryKeyValueStore())

    with pytest.raises(ValidationError, match="Unknown role"):
        service.register("t@x.edu", "secret", "Prof T", "dean")
    assert gateway.calls == []


def test_register_falls_back_to_submitted_profile():
    gateway = FakeAuthGateway(result=AuthResult(access_token="a", refresh_token="r"))
    service = AuthService(gateway, MemoryKeyValueStore())

    session = service.register("t@x.edu", "secret", "Prof T", "ta")

    assert (session.email, session.name, session.role) == ("t@x.edu", "Prof T", "ta")
    assert gateway.calls == [("register", "t@x.edu", "Prof T", "ta")]


def test_refresh_replaces_tokens_only():
    store = MemoryKeyValueStore()
    service = AuthService(FakeAuthGateway(), store)
    session = service.login("t@x.edu", "secret")

    refreshed = service.refresh(session)

    assert refreshed.access_token == "access-2"
    assert refreshed.email == session.email
    assert store.get(REFRESH_TOKEN_KEY) == "refresh-2"


def test_logout_clears_every_session_key():
    store = MemoryKeyValueStore()
    service = AuthService(FakeAuthGateway(), store)
    service.login("t@x.edu", "secret")

    service.logout()

    assert all(store.get(key) is None for key in AUTH_SESSION_KEYS)
    assert service.current_session() is None
    assert service.is_authenticated() is False


class StubClient:
    def __init__(self, body):
        self.body = body
        self.posted = []

    def post(self, path, *, json=None):
        self.posted.append((path, json))
        return self.body


def test_gateway_rejects_non_object_body():
    with pytest.raises(MalformedResponse):
        HttpAuthGateway(StubClient(["nope"])).login("t@x.edu", "secret")


def test_gateway_rejects_body_without_tokens():
    with pytest.raises(MalformedResponse, match="accessToken"):
        HttpAuthGateway(StubClient({"message": "ok"})).login("t@x.edu", "secret")


def test_gateway_refresh_posts_refresh_token():
    client = StubClient({"accessToken": "a", "refreshToken": "r"})

    result = HttpAuthGateway(client).refresh("old")

    assert result.access_token == "a"
    assert client.posted == [("/auth/refresh-token", {"refreshToken": "old"})]
