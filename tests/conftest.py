"""Fixtures compartidas: base SQLite temporal, cliente HTTP y usuarios de prueba."""

import os
import tempfile
from datetime import date
from decimal import Decimal
from pathlib import Path

# Debe definirse antes de importar app.* (app.database crea el engine al importar)
_TEST_DB_DIR = tempfile.mkdtemp(prefix="finanzas-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{Path(_TEST_DB_DIR) / 'test.db'}"
os.environ.setdefault("SECRET_KEY", "clave-de-pruebas")
os.environ["TRANSACTION_STORE"] = "sql"

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel

from app.core.clock import FixedClock, get_clock
from app.core.security import create_access_token, get_password_hash
from app.database import engine
from app.main import app
from app.models.enums import TransactionType
from app.models.transaction import Transaction
from app.models.user import User

TODAY = date(2025, 7, 1)


@pytest.fixture(autouse=True)
def database():
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture()
def session(database):
    with Session(database) as session:
        yield session


@pytest.fixture()
def clock():
    return FixedClock(TODAY)


@pytest.fixture()
def client(clock):
    app.dependency_overrides[get_clock] = lambda: clock
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()


def make_user(session, email="ana@example.com", password="secreto123") -> User:
    user = User(email=email, full_name="Ana Pérez", hashed_password=get_password_hash(password))
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


@pytest.fixture()
def user_factory(session):
    def _make(email="ana@example.com", password="secreto123"):
        return make_user(session, email=email, password=password)

    return _make


@pytest.fixture()
def user(user_factory):
    return user_factory()


@pytest.fixture()
def auth_headers(user):
    token = create_access_token(data={"sub": str(user.id)})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def add_transaction(session):
    """Inserta una transacción; montos como str para no pasar por float."""

    def _add(user, amount, type, transaction_date, is_paid=True, due_date=None, description=None):
        tx = Transaction(
            user_id=user.id,
            amount=Decimal(amount),
            type=TransactionType(type),
            is_paid=is_paid,
            transaction_date=transaction_date,
            due_date=due_date,
            description=description,
        )
        session.add(tx)
        session.commit()
        session.refresh(tx)
        return tx

    return _add
