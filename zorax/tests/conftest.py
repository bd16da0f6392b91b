import os
import tempfile

# Configure before anything imports zorax.core.config.
os.environ["DATABASE_URI"] = "sqlite://"
os.environ["PASSWORD_HASH_ROUNDS"] = "4"
os.environ["LOG_DIR"] = os.path.join(tempfile.gettempdir(), "zorax-test-logs")
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
from fastapi.testclient import TestClient

from zorax.db.session import Base, SessionLocal, engine
from zorax.main import app

EXPENSE_PAYLOAD = {
    "date": "2024-05-01",
    "time": "10:30",
    "name": "Office rent",
    "type": "Rent",
    "detail": "May rent",
    "paymentType": "Cash",
    "amount": 1500.5,
}


@pytest.fixture(autouse=True)
def fresh_schema():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    # entering the context runs the lifespan, which seeds admin/786786 and staff1/1234
    with TestClient(app) as c:
        yield c


def login(client, username, password):
    return client.post("/api/login", json={"username": username, "password": password})


@pytest.fixture
def as_admin(client):
    assert login(client, "admin", "786786").status_code == 200
    return client


@pytest.fixture
def as_staff(client):
    assert login(client, "staff1", "1234").status_code == 200
    return client
