"""Unit tests for HTTP application endpoints.

Tests use Starlette TestClient for fast, synchronous testing without
spawning real servers or opening sockets.
"""

import pytest
from starlette.testclient import TestClient

from autotyper.http import create_app
from autotyper.http.app import error_to_json
from autotyper.codegen import ConfigError, DSLError


@pytest.fixture
def client():
    """Create test client."""
    return TestClient(create_app())


# === POST /dsl ===


def test_post_dsl_returns_all_artifacts(client, sample_dsl) -> None:
    """POST /dsl returns the type, interface, zod schema and example."""
    response = client.post("/dsl", json={"dsl": sample_dsl})
    assert response.status_code == 200
    data = response.json()
    assert data["typeName"] == "User"
    assert data["type"].startswith("export type User = {\n")
    assert data["interface"].startswith("export interface User {\n")
    assert "export const UserSchema = z.object({" in data["zod"]
    assert ".strict()" not in data["zod"]
    assert set(data["example"]) == {"email", "password", "createdAt", "tags"}
    assert data["normalized"]["props"][2] == {
        "name": "isAdmin",
        "type": "boolean",
        "required": False,
    }


def test_post_dsl_legacy_dialect(client, sample_dsl, legacy_sample_dsl) -> None:
    """The old format yields the same declarations."""
    modern = client.post("/dsl", json={"dsl": sample_dsl}).json()
    legacy = client.post("/dsl", json={"dsl": legacy_sample_dsl}).json()
    assert legacy["type"] == modern["type"]
    assert legacy["zod"] == modern["zod"]


def test_post_dsl_options(client, sample_dsl) -> None:
    """Request options are merged over the defaults."""
    response = client.post(
        "/dsl",
        json={"dsl": sample_dsl, "options": {"strictZod": True, "emitExample": False}},
    )
    assert response.status_code == 200
    data = response.json()
    assert "}).strict();" in data["zod"]
    assert "example" not in data
    assert "interface" in data


def test_post_dsl_optional_by_default(client) -> None:
    response = client.post(
        "/dsl", json={"dsl": "User email:s id!", "options": {"optionalByDefault": True}}
    )
    assert response.json()["example"] == {"id": ""}


def test_post_dsl_error_fields(client) -> None:
    """DSL errors come back as 400 with message, token, index and hint."""
    response = client.post("/dsl", json={"dsl": "User name:s email:"})
    assert response.status_code == 400
    assert response.json() == {
        "error": "Bad token (dangling ':')",
        "index": 1,
        "token": "email:",
        "hint": "Use email:s (not email:)",
    }


def test_post_dsl_missing_dsl(client) -> None:
    response = client.post("/dsl", json={})
    assert response.status_code == 400
    assert response.json()["error"] == "Empty DSL"


def test_post_dsl_invalid_json(client) -> None:
    response = client.post(
        "/dsl", content=b"not json", headers={"Content-Type": "application/json"}
    )
    assert response.status_code == 400
    assert response.json() == {"error": "Request body must be valid JSON"}


def test_post_dsl_body_not_object(client) -> None:
    response = client.post("/dsl", json=["User email:s"])
    assert response.status_code == 400
    assert response.json() == {"error": "Request body must be a JSON object"}


def test_post_dsl_dsl_not_string(client) -> None:
    response = client.post("/dsl", json={"dsl": 42})
    assert response.status_code == 400
    assert response.json() == {"error": "'dsl' must be a string"}


def test_post_dsl_options_not_object(client) -> None:
    response = client.post("/dsl", json={"dsl": "User email:s", "options": "strict"})
    assert response.status_code == 400
    assert response.json() == {"error": "Options must be an object, got str"}


def test_dsl_rejects_get(client) -> None:
    """GET /dsl returns 405 Method Not Allowed."""
    response = client.get("/dsl")
    assert response.status_code == 405


# === GET /t and /all ===


def test_type_text(client) -> None:
    """GET /t returns only the type declaration as plain text."""
    response = client.get("/t", params={"dsl": "User email:s isAdmin?:b"})
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    assert response.text == "export type User = {\n  email: string;\n  isAdmin?: boolean;\n};\n"


def test_type_text_error(client) -> None:
    response = client.get("/t")
    assert response.status_code == 400
    assert response.text == (
        "Error: Empty DSL\n"
        'Hint: Example: "User email:s password:s isAdmin?:b createdAt:d tags:s[]"\n'
    )


def test_all_text(client, sample_dsl) -> None:
    """GET /all returns every artifact under banner comments."""
    response = client.get("/all", params={"dsl": sample_dsl})
    assert response.status_code == 200
    text = response.text
    assert text.startswith("// --- TYPE ---\nexport type User = {")
    assert "// --- INTERFACE ---" in text
    assert "// --- ZOD ---" in text
    assert "// --- EXAMPLE (required fields only) ---" in text
    assert ".strict()" not in text


def test_all_text_strict(client) -> None:
    response = client.get("/all", params={"dsl": "User email:s", "strict": "true"})
    assert "}).strict();" in response.text


def test_all_text_strict_needs_true(client) -> None:
    response = client.get("/all", params={"dsl": "User email:s", "strict": "1"})
    assert ".strict()" not in response.text


def test_all_text_error(client) -> None:
    response = client.get("/all", params={"dsl": "User"})
    assert response.status_code == 400
    assert response.text.startswith("Error: No properties provided\nHint: ")


# === Misc ===


def test_index_shows_usage(client) -> None:
    response = client.get("/")
    assert response.status_code == 200
    assert response.text.startswith("Try:\nPOST /dsl")


def test_unknown_route_returns_404(client) -> None:
    response = client.get("/nonexistent")
    assert response.status_code == 404


def test_cors_preflight(client) -> None:
    response = client.options(
        "/dsl",
        headers={
            "Origin": "http://localhost:5173",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "Content-Type",
        },
    )
    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "*"
    assert "POST" in response.headers["access-control-allow-methods"]


def test_cors_simple_request(client) -> None:
    response = client.get("/", headers={"Origin": "http://localhost:5173"})
    assert response.headers["access-control-allow-origin"] == "*"


def test_error_to_json() -> None:
    err = DSLError("Empty token", token='"":s', index=0, hint="Example: email:s")
    assert error_to_json(err)["token"] == '"":s'
    assert error_to_json(ConfigError("boom")) == {"error": "boom"}
