"""Registro, login y manejo de contraseña."""

from datetime import date
from decimal import Decimal

from app.api.auth_extra import RESET_TOKENS
from app.models.enums import TransactionType
from app.models.transaction import Transaction
from app.models.user import User


def login(client, email, password):
    return client.post("/auth/login", data={"username": email, "password": password})


def test_register_and_login(client):
    response = client.post(
        "/auth/register",
        json={"email": "Luis@Example.com", "password": "clave-segura", "full_name": "Luis Gómez"},
    )
    assert response.status_code == 200
    assert response.json()["email"] == "luis@example.com"

    response = login(client, "  LUIS@example.com ", "clave-segura")
    assert response.status_code == 200
    token = response.json()["access_token"]

    me = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    assert me.json()["full_name"] == "Luis Gómez"


def test_register_duplicate_email(client, user):
    response = client.post("/auth/register", json={"email": user.email, "password": "x"})
    assert response.status_code == 400
    assert response.json()["detail"] == "Email ya registrado"


def test_login_with_wrong_password(client, user):
    response = login(client, user.email, "incorrecta")
    assert response.status_code == 401


def test_protected_route_requires_token(client):
    assert client.get("/auth/me").status_code == 401
    assert client.get("/auth/me", headers={"Authorization": "Bearer basura"}).status_code == 401


def test_logout_revokes_token(client, user):
    token = login(client, user.email, "secreto123").json()["access_token"]
    headers = {"Authorization": f"Bearer {token}"}

    assert client.post("/auth/logout", headers=headers).status_code == 200
    assert client.get("/auth/me", headers=headers).status_code == 401


def test_change_password(client, user, auth_headers):
    response = client.post(
        "/auth/change-password",
        json={"current_password": "secreto123", "new_password": "nueva-clave"},
        headers=auth_headers,
    )
    assert response.status_code == 200
    assert login(client, user.email, "nueva-clave").status_code == 200

    response = client.post(
        "/auth/change-password",
        json={"current_password": "secreto123", "new_password": "otra"},
        headers=auth_headers,
    )
    assert response.status_code == 400


def test_forgot_and_reset_password(client, user):
    RESET_TOKENS.clear()
    response = client.post("/auth/forgot-password", json={"email": user.email})
    assert response.status_code == 200
    token = next(iter(RESET_TOKENS))

    response = client.post("/auth/reset-password", json={"token": token, "new_password": "recuperada"})
    assert response.status_code == 200
    assert login(client, user.email, "recuperada").status_code == 200

    # el token es de un solo uso
    response = client.post("/auth/reset-password", json={"token": token, "new_password": "otra"})
    assert response.status_code == 400


def test_forgot_password_does_not_reveal_unknown_email(client):
    RESET_TOKENS.clear()
    response = client.post("/auth/forgot-password", json={"email": "nadie@example.com"})
    assert response.status_code == 200
    assert RESET_TOKENS == {}


def test_created_at_is_timezone_aware(user_factory):
    user = User(email="tz@example.com", hashed_password="x")
    tx = Transaction(
        user_id=user.id, amount=Decimal("1.00"), type=TransactionType.income, transaction_date=date(2025, 6, 1)
    )

    assert user.created_at.utcoffset() is not None
    assert tx.created_at.utcoffset() is not None
    # y se puede persistir
    assert user_factory(email="persistido@example.com").id is not None
