import time

import jwt
import pytest
from fastapi.testclient import TestClient

from api.dependencies import get_recipe_backend
from api.main import app
from recipe_magic_core.errors import BackendError, WebhookError

SECRET = "test-jwt-secret-with-at-least-32-bytes!"


def make_token(user_id="user-1", email="cook@example.com", expires_in=3600):
    payload = {
        "sub": user_id,
        "email": email,
        "aud": "authenticated",
        "exp": int(time.time()) + expires_in,
    }
    return jwt.encode(payload, SECRET, algorithm="HS256")


def auth_header(user_id="user-1", email="cook@example.com"):
    return {"Authorization": f"Bearer {make_token(user_id, email)}"}


@pytest.fixture
def client(monkeypatch, backend):
    monkeypatch.setenv("SUPABASE_JWT_SECRET", SECRET)
    app.dependency_overrides[get_recipe_backend] = lambda: backend
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["service"] == "recipe-magic-api"


def test_missing_authorization_is_401(client):
    response = client.get("/api/v1/recipes")

    assert response.status_code == 401
    assert response.json()["detail"] == "Missing Authorization header"


def test_malformed_authorization_is_401(client):
    response = client.get("/api/v1/recipes", headers={"Authorization": "Token abc"})

    assert response.status_code == 401


def test_expired_token_is_401(client):
    token = make_token(expires_in=-60)

    response = client.get("/api/v1/recipes", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401
    assert response.json()["detail"] == "Token expired"


def test_create_and_list_my_recipes(client):
    response = client.post(
        "/api/v1/recipes",
        json={
            "title": "Toast",
            "ingredients": "bread\nbutter",
            "instructions": "Toast\nSpread",
            "prep_time": 2,
        },
        headers=auth_header(),
    )

    assert response.status_code == 201
    created = response.json()
    assert created["title"] == "Toast"
    assert created["ingredients"] == ["bread", "butter"]
    assert created["servings"] == 4
    assert created["difficulty"] == "medium"
    assert created["cook_time"] is None
    assert created["total_time"] == 2
    assert created["is_ai_generated"] is False
    assert created["user_id"] == "user-1"

    mine = client.get("/api/v1/recipes", headers=auth_header()).json()
    assert [r["id"] for r in mine] == [created["id"]]

    theirs = client.get("/api/v1/recipes", headers=auth_header("user-2")).json()
    assert theirs == []


def test_create_recipe_requires_title(client):
    response = client.post("/api/v1/recipes", json={"title": ""}, headers=auth_header())

    assert response.status_code == 422


@pytest.mark.parametrize(
    "payload, detail",
    [
        ({"title": "   ", "ingredients": "", "instructions": ""}, "Please enter a recipe title"),
        ({"title": "Soup", "ingredients": " \n \n", "instructions": "Boil"}, "Please add at least one ingredient"),
        ({"title": "Soup", "ingredients": "water"}, "Please add at least one instruction"),
    ],
)
def test_create_recipe_rejects_incomplete_form(client, payload, detail):
    response = client.post("/api/v1/recipes", json=payload, headers=auth_header())

    assert response.status_code == 400
    assert response.json()["detail"] == detail
    assert client.get("/api/v1/recipes", headers=auth_header()).json() == []


def test_share_and_discover(client):
    created = client.post(
        "/api/v1/recipes",
        json={"title": "Soup", "ingredients": "water", "instructions": "Boil"},
        headers=auth_header(),
    ).json()

    denied = client.post(f"/api/v1/recipes/{created['id']}/share", headers=auth_header("user-2"))
    assert denied.status_code == 404
    assert client.get("/api/v1/recipes/public", headers=auth_header()).json() == []

    shared = client.post(f"/api/v1/recipes/{created['id']}/share", headers=auth_header())
    assert shared.status_code == 200
    assert shared.json()["is_public"] is True
    assert "Discover" in shared.json()["message"]

    public = client.get("/api/v1/recipes/public", headers=auth_header("user-2")).json()
    assert [r["title"] for r in public] == ["Soup"]


def test_recipe_detail_and_markdown(client):
    created = client.post(
        "/api/v1/recipes",
        json={"title": "Soup", "ingredients": "water", "instructions": "Boil"},
        headers=auth_header(),
    ).json()

    detail = client.get(f"/api/v1/recipes/{created['id']}", headers=auth_header())
    assert detail.status_code == 200
    assert detail.json()["title"] == "Soup"

    hidden = client.get(f"/api/v1/recipes/{created['id']}", headers=auth_header("user-2"))
    assert hidden.status_code == 404

    md = client.get(f"/api/v1/recipes/{created['id']}/markdown", headers=auth_header())
    assert md.status_code == 200
    assert md.headers["content-type"].startswith("text/markdown")
    assert md.text.startswith("# Soup")
    assert "1. Boil" in md.text


def test_generate_recipe(client, monkeypatch, sample_output):
    monkeypatch.setattr(
        "recipe_magic_core.engine.generate_recipe_text", lambda prompt: sample_output
    )

    response = client.post(
        "/api/v1/recipe-generations",
        json={"prompt": "write a recipe of Biryani"},
        headers=auth_header(),
    )

    assert response.status_code == 201
    body = response.json()
    assert body["display_name"] == "Biryani"
    assert body["recipe"]["title"] == "Chicken Biryani"
    assert body["recipe"]["is_ai_generated"] is True
    assert body["recipe"]["dietary_tags"] == ["gluten-free", "halal"]

    mine = client.get("/api/v1/recipes", headers=auth_header()).json()
    assert len(mine) == 1


def test_generate_recipe_webhook_failure_is_502(client, monkeypatch):
    def failing(prompt):
        raise WebhookError("Error llamando al webhook: 500 Server Error")

    monkeypatch.setattr("recipe_magic_core.engine.generate_recipe_text", failing)

    response = client.post(
        "/api/v1/recipe-generations",
        json={"prompt": "recipe for lasagna"},
        headers=auth_header(),
    )

    assert response.status_code == 502
    assert response.json()["detail"] == "Error in generating recipe."
    assert client.get("/api/v1/recipes", headers=auth_header()).json() == []


def test_generate_recipe_empty_prompt_is_400(client):
    response = client.post(
        "/api/v1/recipe-generations", json={"prompt": "  "}, headers=auth_header()
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "Please enter a recipe request"


def test_backend_error_message_is_returned(client):
    class RejectingBackend:
        def insert(self, table, row):
            raise BackendError('new row violates row-level security policy for table "recipes"')

        def select(self, table, filters, order_by=None, descending=False):
            return []

        def update(self, table, values, filters):
            return []

    app.dependency_overrides[get_recipe_backend] = lambda: RejectingBackend()

    response = client.post(
        "/api/v1/recipes",
        json={"title": "Soup", "ingredients": "water", "instructions": "Boil"},
        headers=auth_header(),
    )

    assert response.status_code == 400
    assert response.json()["detail"] == 'new row violates row-level security policy for table "recipes"'


def test_unconfigured_hosted_backend_is_503(monkeypatch):
    monkeypatch.setenv("SUPABASE_JWT_SECRET", SECRET)
    monkeypatch.setenv("RECIPE_BACKEND", "supabase")
    monkeypatch.delenv("SUPABASE_URL", raising=False)
    monkeypatch.delenv("SUPABASE_ANON_KEY", raising=False)

    response = TestClient(app).get("/api/v1/recipes", headers=auth_header())

    assert response.status_code == 503
    assert response.json()["detail"] == "Supabase not configured"


def test_current_user_with_profile(client, backend):
    backend.insert("profiles", {"user_id": "user-1", "full_name": "Ada Cook"})

    body = client.get("/api/v1/auth/user", headers=auth_header()).json()

    assert body["id"] == "user-1"
    assert body["display_name"] == "Ada Cook"
    assert body["profile"]["full_name"] == "Ada Cook"


def test_current_user_without_profile(client):
    body = client.get("/api/v1/auth/user", headers=auth_header("user-9", "nine@example.com")).json()

    assert body["display_name"] == "nine@example.com"
    assert body["profile"] is None


def test_verify_token(client):
    ok = client.post("/api/v1/auth/verify-token", json={"token": make_token()}).json()
    bad = client.post("/api/v1/auth/verify-token", json={"token": "not-a-jwt"}).json()

    assert ok == {"valid": True, "user_id": "user-1", "email": "cook@example.com", "error": None}
    assert bad["valid"] is False
    assert bad["error"]


def test_magic_link(client, monkeypatch):
    sent = []
    monkeypatch.setattr(
        "api.routes.auth.send_magic_link",
        lambda email, redirect_to=None: sent.append((email, redirect_to)),
    )

    response = client.post("/api/v1/auth/magic-link", json={"email": "cook@example.com"})

    assert response.status_code == 200
    assert response.json()["message"] == "Check your email for the magic link!"
    assert sent == [("cook@example.com", None)]


def test_magic_link_provider_error(client, monkeypatch):
    def rejecting(email, redirect_to=None):
        raise BackendError("Email rate limit exceeded")

    monkeypatch.setattr("api.routes.auth.send_magic_link", rejecting)

    response = client.post("/api/v1/auth/magic-link", json={"email": "cook@example.com"})

    assert response.status_code == 400
    assert response.json()["detail"] == "Email rate limit exceeded"
