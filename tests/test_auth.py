from types import SimpleNamespace

import jwt
import pytest

from recipe_magic_core.auth import bearer_token, resolve_user, send_magic_link
from recipe_magic_core.errors import AuthenticationError, BackendError

SECRET = "test-jwt-secret-with-at-least-32-bytes!"


class FakeAuth:
    def __init__(self, user=None, error=None):
        self.user = user
        self.error = error
        self.otp_requests = []

    def sign_in_with_otp(self, credentials):
        if self.error is not None:
            raise self.error
        self.otp_requests.append(credentials)

    def get_user(self, token):
        if self.error is not None:
            raise self.error
        return SimpleNamespace(user=self.user)


class FakeClient:
    def __init__(self, auth):
        self.auth = auth


def test_bearer_token():
    assert bearer_token("Bearer abc.def") == "abc.def"

    with pytest.raises(AuthenticationError, match="Missing Authorization header"):
        bearer_token(None)
    with pytest.raises(AuthenticationError, match="Invalid Authorization header format"):
        bearer_token("Basic dXNlcg==")


def test_resolve_user_with_local_secret(monkeypatch):
    monkeypatch.setenv("SUPABASE_JWT_SECRET", SECRET)
    token = jwt.encode(
        {"sub": "user-1", "email": "cook@example.com", "aud": "authenticated"},
        SECRET,
        algorithm="HS256",
    )

    ctx = resolve_user(token)

    assert ctx.user_id == "user-1"
    assert ctx.email == "cook@example.com"
    assert ctx.access_token == token


def test_resolve_user_rejects_wrong_audience(monkeypatch):
    monkeypatch.setenv("SUPABASE_JWT_SECRET", SECRET)
    token = jwt.encode({"sub": "user-1", "aud": "anon"}, SECRET, algorithm="HS256")

    with pytest.raises(AuthenticationError, match="Invalid token"):
        resolve_user(token)


def test_resolve_user_requires_subject(monkeypatch):
    monkeypatch.setenv("SUPABASE_JWT_SECRET", SECRET)
    token = jwt.encode({"aud": "authenticated"}, SECRET, algorithm="HS256")

    with pytest.raises(AuthenticationError, match="no user ID"):
        resolve_user(token)


def test_resolve_user_with_supabase(monkeypatch):
    monkeypatch.delenv("SUPABASE_JWT_SECRET", raising=False)
    user = SimpleNamespace(id="user-7", email="seven@example.com")
    client = FakeClient(FakeAuth(user=user))

    ctx = resolve_user("opaque-token", client=client)

    assert ctx.user_id == "user-7"
    assert ctx.email == "seven@example.com"


def test_resolve_user_with_supabase_rejection(monkeypatch):
    monkeypatch.delenv("SUPABASE_JWT_SECRET", raising=False)
    client = FakeClient(FakeAuth(error=RuntimeError("invalid JWT")))

    with pytest.raises(AuthenticationError, match="invalid JWT"):
        resolve_user("opaque-token", client=client)


def test_send_magic_link(monkeypatch):
    monkeypatch.setenv("MAGIC_LINK_REDIRECT_URL", "https://recipes.example.com")
    auth = FakeAuth()

    send_magic_link(" cook@example.com ", client=FakeClient(auth))

    assert auth.otp_requests == [
        {
            "email": "cook@example.com",
            "options": {"email_redirect_to": "https://recipes.example.com"},
        }
    ]


def test_send_magic_link_requires_email():
    with pytest.raises(ValueError):
        send_magic_link("  ", client=FakeClient(FakeAuth()))


def test_send_magic_link_provider_error():
    auth = FakeAuth(error=RuntimeError("Email rate limit exceeded"))

    with pytest.raises(BackendError, match="Email rate limit exceeded"):
        send_magic_link("cook@example.com", client=FakeClient(auth))
