"""API endpoint tests."""

from datetime import timedelta

from tenant_accounts.services.tokens import SessionClaims


def _register(client, email="a@x.com", password="abcd1234", firstname="A", lastname="B"):
    return client.post(
        "/api/v1/auth/register",
        json={"firstname": firstname, "lastname": lastname, "email": email, "password": password},
    )


def test_root(client):
    response = client.get("/")
    assert response.status_code == 200
    assert "message" in response.json()


def test_health_check(client):
    """Test health check endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_register_user(client):
    """Test user registration."""
    response = _register(client)
    assert response.status_code == 201
    data = response.json()
    assert data["email"] == "a@x.com"
    assert data["token_type"] == "bearer"
    assert "access_token" in data


def test_register_duplicate_email(client):
    """Same email twice: second registration is rejected."""
    assert _register(client, password="abcd1234", firstname="A", lastname="B").status_code == 201

    response = _register(client, password="zxy98765", firstname="C", lastname="D")
    assert response.status_code == 400
    assert response.json() == {"kind": "duplicate_email", "detail": "Email already registered"}


def test_register_invalid_password(client):
    response = _register(client, password="onlyletters")
    assert response.status_code == 400
    assert response.json()["kind"] == "validation_error"


def test_register_non_object_body(client):
    response = client.post("/api/v1/auth/register", json=["not", "an", "object"])
    assert response.status_code == 400
    assert response.json()["kind"] == "validation_error"


def test_login(client):
    """Test user login."""
    _register(client)
    response = client.post("/api/v1/auth/login", json={"email": "a@x.com", "password": "abcd1234"})
    assert response.status_code == 200
    assert response.json()["email"] == "a@x.com"
    assert "access_token" in response.json()


def test_login_with_address_as_registered(client):
    assert _register(client, email="bob@Example.COM").status_code == 201
    response = client.post(
        "/api/v1/auth/login", json={"email": "bob@Example.COM", "password": "abcd1234"}
    )
    assert response.status_code == 200


def test_login_missing_fields(client):
    response = client.post("/api/v1/auth/login", json={"email": "a@x.com"})
    assert response.status_code == 400
    assert response.json()["kind"] == "missing_fields"


def test_login_failures_look_identical(client):
    """Wrong password and unknown email give the same response."""
    _register(client)
    wrong_password = client.post(
        "/api/v1/auth/login", json={"email": "a@x.com", "password": "wrongpass"}
    )
    unknown_email = client.post(
        "/api/v1/auth/login", json={"email": "nobody@x.com", "password": "abcd1234"}
    )

    assert wrong_password.status_code == 401
    assert unknown_email.status_code == 401
    assert wrong_password.json() == unknown_email.json()
    assert wrong_password.json() == {
        "kind": "invalid_credentials",
        "detail": "Incorrect email or password",
    }
    assert wrong_password.headers["www-authenticate"] == "Bearer"


def test_guest_login(client):
    response = client.post("/api/v1/auth/guest")
    assert response.status_code == 201
    data = response.json()
    assert data["guest_name"].startswith("guest-")
    assert data["access_token"]


def test_resolve_storage(client, auth_headers):
    response = client.get("/api/v1/auth/storage", headers=auth_headers)
    assert response.status_code == 200
    data = response.json()
    assert data["tenant"] == auth_headers.email
    assert data["guest"] is False
    assert data["storage_pointer"].endswith(".db")


def test_resolve_storage_for_guest(client):
    guest = client.post("/api/v1/auth/guest").json()
    response = client.get(
        "/api/v1/auth/storage", headers={"Authorization": f"Bearer {guest['access_token']}"}
    )
    assert response.status_code == 200
    assert response.json()["tenant"] == guest["guest_name"]
    assert response.json()["guest"] is True


def test_resolve_storage_requires_token(client):
    response = client.get("/api/v1/auth/storage")
    assert response.status_code == 401
    assert response.json()["kind"] == "invalid_token"


def test_bad_tokens_look_identical(client):
    """Tampered and expired tokens are both a plain 401."""
    context = client.app.state.context
    claims = SessionClaims(tenant="a@x.com", storage_pointer="a_x_com-" + "0" * 64 + ".db")
    expired = context.tokens.issue(claims, ttl=timedelta(seconds=-1))
    tampered = context.tokens.issue(claims) + "x"

    responses = [
        client.get("/api/v1/auth/storage", headers={"Authorization": f"Bearer {token}"})
        for token in (expired, tampered)
    ]

    assert [r.status_code for r in responses] == [401, 401]
    assert responses[0].json() == responses[1].json()
    assert responses[0].json() == {
        "kind": "invalid_token",
        "detail": "Invalid authentication credentials",
    }


def test_error_body_is_documented(client):
    schema = client.get("/openapi.json").json()
    register = schema["paths"]["/api/v1/auth/register"]["post"]["responses"]
    assert register["400"]["content"]["application/json"]["schema"]["$ref"].endswith(
        "/ErrorResponse"
    )
