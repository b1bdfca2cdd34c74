import uuid
from datetime import timedelta

from conftest import SECRET, bearer, login
from recipe_api.core.security import issue_token
from recipe_api.services.store import UserStore


def test_update_user_fields(client, alice):
    user, headers = alice
    res = client.put(
        f"/user/{user['id']}",
        json={"name": "  Alicia ", "phone": "0987654321"},
        headers=headers,
    )
    assert res.status_code == 200
    body = res.json()
    assert body["id"] == user["id"]
    assert body["name"] == "Alicia"
    assert body["phone"] == "0987654321"
    assert body["email"] == "alice@cook.io"
    assert "password" not in body


def test_update_password_is_hashed_and_usable(client, alice):
    user, headers = alice
    res = client.put(f"/user/{user['id']}", json={"password": "newpass99"}, headers=headers)
    assert res.status_code == 200
    assert login(client, password="newpass99")
    res = client.post("/login", json={"email": "alice@cook.io", "password": "longpass1"})
    assert res.status_code == 401


def test_update_email_taken_conflicts(client, alice, bob):
    user, headers = alice
    res = client.put(f"/user/{user['id']}", json={"email": "BOB@cook.io"}, headers=headers)
    assert res.status_code == 409
    # Bob still owns the address
    assert login(client, email="bob@cook.io")


def test_update_email_lowercased(client, alice):
    user, headers = alice
    res = client.put(f"/user/{user['id']}", json={"email": "Alice.New@Cook.io"}, headers=headers)
    assert res.status_code == 200
    assert res.json()["email"] == "alice.new@cook.io"
    assert login(client, email="alice.new@cook.io")


def test_update_rejects_invalid_shape(client, alice):
    user, headers = alice
    res = client.put(f"/user/{user['id']}", json={"password": "short"}, headers=headers)
    assert res.status_code == 400


def test_update_missing_user_is_404(client):
    ghost = str(uuid.uuid4())
    token = issue_token({"id": ghost, "name": "Ghost", "email": "g@cook.io"}, SECRET, timedelta(days=1))
    res = client.put(f"/user/{ghost}", json={"name": "Ghost"}, headers=bearer(token))
    assert res.status_code == 404
    assert res.json()["detail"] == "User not found"


def test_update_does_not_touch_recipes(client, alice):
    user, headers = alice
    client.post(
        "/recipes",
        json={"category": "c", "name": "Soup", "description": "d"},
        headers=headers,
    )
    client.put(f"/user/{user['id']}", json={"name": "Alicia"}, headers=headers)
    names = [r["name"] for r in client.get("/recipes", headers=headers).json()]
    assert names == ["Soup"]


def test_email_collision_caught_by_unique_index(client, alice, bob, monkeypatch):
    user, headers = alice

    async def no_match(self, email):
        return None

    monkeypatch.setattr(UserStore, "find_by_email", no_match)
    res = client.put(f"/user/{user['id']}", json={"email": "bob@cook.io", "name": "Alicia"}, headers=headers)
    assert res.status_code == 409

    monkeypatch.undo()
    assert login(client, email="bob@cook.io")
    assert login(client, email="alice@cook.io")
