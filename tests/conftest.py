from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from recipe_api.core.config import Settings
from recipe_api.main import create_application

SECRET = "test-secret"


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    """Settings pointing at a fresh SQLite file per test; cheap bcrypt rounds."""
    return Settings(
        _env_file=None,
        secret_key=SECRET,
        database_url=f"sqlite:///{tmp_path / 'recipes.db'}",
        database_create_tables=True,
        password_hash_rounds=4,
    )


@pytest.fixture()
def client(settings: Settings):
    app = create_application(settings)
    with TestClient(app) as c:
        yield c


def register(client, name="Alice", email="alice@cook.io", password="longpass1", phone="1234567890"):
    body = {"name": name, "email": email, "password": password}
    if phone is not None:
        body["phone"] = phone
    return client.post("/register", json=body)


def login(client, email="alice@cook.io", password="longpass1") -> str:
    res = client.post("/login", json={"email": email, "password": password})
    assert res.status_code == 200, res.text
    return res.json()["token"]


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def alice(client):
    """Registered user: (user record, auth headers)."""
    res = register(client)
    assert res.status_code == 201, res.text
    return res.json(), bearer(login(client))


@pytest.fixture()
def bob(client):
    res = register(client, name="Bob", email="bob@cook.io")
    assert res.status_code == 201, res.text
    return res.json(), bearer(login(client, email="bob@cook.io"))
