from datetime import timedelta

from washify.domain.users.repository import UserRepository
from washify.models import User, UserRole
from washify.security import create_access_token

from .conftest import DEFAULT_PASSWORD, auth_headers


def test_signup_creates_customer_and_returns_token(client, db):
    response = client.post(
        "/api/auth/signup",
        json={"name": "Jane Doe", "email": "Jane@Example.com", "password": "secret123"},
    )

    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "User created successfully"
    assert body["token"]
    assert body["user"]["email"] == "jane@example.com"
    assert body["user"]["role"] == "CUSTOMER"
    assert "password" not in body["user"]

    stored = db.query(User).filter(User.email == "jane@example.com").one()
    assert stored.password != "secret123"


def test_signup_with_duplicate_email_conflicts_without_new_row(client, db, customer):
    before = db.query(User).count()

    response = client.post(
        "/api/auth/signup",
        json={"name": "Someone Else", "email": customer.email, "password": "another1"},
    )

    assert response.status_code == 409
    assert response.json() == {"error": "User with this email already exists"}
    assert db.query(User).count() == before


def test_email_taken_after_the_check_still_conflicts(client, db, monkeypatch, customer):
    before = db.query(User).count()
    monkeypatch.setattr(UserRepository, "get_by_email", staticmethod(lambda *args: None))

    response = client.post(
        "/api/auth/signup",
        json={"name": "Someone Else", "email": customer.email, "password": "another1"},
    )

    assert response.status_code == 409
    assert response.json() == {"error": "User with this email already exists"}
    assert db.query(User).count() == before


def test_signup_rejects_invalid_input(client):
    response = client.post(
        "/api/auth/signup",
        json={"name": "J", "email": "not-an-email", "password": "123"},
    )

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "Invalid input data"
    assert "email" in body["details"]
    assert "password" in body["details"]


def test_signup_accepts_operator_role_and_phone(client):
    response = client.post(
        "/api/auth/signup",
        json={
            "name": "Olga Operator",
            "email": "olga@example.com",
            "password": "secret123",
            "role": "OPERATOR",
            "phone": "+1-555-0100",
        },
    )

    assert response.status_code == 201
    assert response.json()["user"]["role"] == "OPERATOR"
    assert response.json()["user"]["phone"] == "+1-555-0100"


def test_login_returns_token(client, customer):
    response = client.post(
        "/api/auth/login", json={"email": customer.email, "password": DEFAULT_PASSWORD}
    )

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Login successful"
    assert body["user"]["id"] == customer.id

    me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {body['token']}"})
    assert me.status_code == 200


def test_login_failures_share_one_generic_message(client, customer):
    wrong_password = client.post(
        "/api/auth/login", json={"email": customer.email, "password": "wrong-password"}
    )
    unknown_email = client.post(
        "/api/auth/login", json={"email": "nobody@example.com", "password": DEFAULT_PASSWORD}
    )

    assert wrong_password.status_code == 401
    assert unknown_email.status_code == 401
    assert wrong_password.json() == unknown_email.json() == {"error": "Invalid email or password"}


def test_me_includes_counts_and_token_info(client, operator, make_business):
    make_business(operator)

    response = client.get("/api/auth/me", headers=auth_headers(operator))

    assert response.status_code == 200
    body = response.json()
    assert body["user"]["id"] == operator.id
    assert body["user"]["_count"] == {"ownedBusinesses": 1, "bookings": 0, "reviews": 0}
    assert body["tokenInfo"]["userId"] == operator.id
    assert body["tokenInfo"]["role"] == "OPERATOR"
    assert body["tokenInfo"]["expiresAt"] > body["tokenInfo"]["issuedAt"]


def test_me_for_deleted_user_is_not_found(client):
    token = create_access_token("00000000-0000-4000-8000-000000000000", "gone@example.com", "CUSTOMER")

    response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 404
    assert response.json() == {"error": "User not found"}


def test_missing_token_is_rejected(client):
    response = client.get("/api/auth/me")

    assert response.status_code == 401
    assert response.json() == {"error": "Authorization token required"}


def test_malformed_token_is_rejected(client):
    response = client.get("/api/auth/me", headers={"Authorization": "Bearer not.a.token"})

    assert response.status_code == 401
    assert response.json() == {"error": "Invalid token"}


def test_expired_token_is_rejected(client, customer):
    token = create_access_token(
        customer.id, customer.email, UserRole.CUSTOMER.value, expires_delta=timedelta(seconds=-30)
    )

    response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401
    assert response.json() == {"error": "Token expired"}


def test_token_with_unknown_role_is_rejected(client, customer):
    token = create_access_token(customer.id, customer.email, "SUPERUSER")

    response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401
