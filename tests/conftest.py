import pytest
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from ziel.config import Settings
from ziel.main import create_app

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "admin-secret"


def student_payload(**overrides):
    payload = {
        "name": "Asha Rao",
        "email": "asha@example.com",
        "contactNo": "9876543210",
        "address": "12 Hill Road",
        "className": "XII",
        "courses": {
            "physics": {"selected": True, "fee": 100, "classes": 3},
            "chemistry": {"selected": False},
        },
        "courseMode": "offline",
        "startDate": "2024-06-01",
        "endDate": "2025-03-31",
        "password": "secret123",
    }
    payload.update(overrides)
    return payload


def teacher_payload(**overrides):
    payload = {
        "name": "Ravi Kumar",
        "email": "ravi@example.com",
        "password": "teach123",
        "contactNo": "9123456780",
        "address": "4 Lake View",
        "teacherType": "full-time",
        "subjects": {"math": {"selected": True, "fee": 500}},
    }
    payload.update(overrides)
    return payload


def bearer(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        jwt_secret="test-secret",
        bcrypt_rounds=4,
        database_name="ziel_test",
        admin_email=ADMIN_EMAIL,
        admin_password=ADMIN_PASSWORD,
    )


@pytest.fixture
def client(settings):
    app = create_app(settings, client=AsyncMongoMockClient())
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def admin_token(client):
    res = client.post("/api/v1/auth/teachers/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
    assert res.status_code == 200
    client.cookies.clear()
    return res.json()["token"]


@pytest.fixture
def register_student(client):
    def _register(**overrides):
        res = client.post("/api/v1/students", json=student_payload(**overrides))
        client.cookies.clear()
        return res
    return _register


@pytest.fixture
def register_teacher(client):
    def _register(**overrides):
        res = client.post("/api/v1/auth/teachers/register", json=teacher_payload(**overrides))
        client.cookies.clear()
        return res
    return _register
