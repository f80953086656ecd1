"""
Tests for POST /users.
"""

from unittest.mock import MagicMock

from pymongo.errors import ServerSelectionTimeoutError


class TestCreateUser:

    def test_create_customer(self, client, database):
        response = client.post("/users", json={"username": "alice", "role": "customer"})
        assert response.status_code == 201
        data = response.json()
        assert data["username"] == "alice"
        assert data["role"] == "customer"
        assert data["action_plan"] == []
        assert isinstance(data["_id"], str)
        assert database.users.count_documents({}) == 1

    def test_create_administrator(self, client):
        response = client.post("/users", json={"username": "root", "role": "administrator"})
        assert response.status_code == 201
        assert response.json()["role"] == "administrator"

    def test_invalid_role_is_rejected(self, client, database):
        response = client.post("/users", json={"username": "mallory", "role": "superuser"})
        assert response.status_code == 400
        assert response.json() == {"message": "Invalid role specified"}
        assert database.users.count_documents({}) == 0

    def test_missing_role_is_rejected(self, client, database):
        response = client.post("/users", json={"username": "bob"})
        assert response.status_code == 400
        assert database.users.count_documents({}) == 0

    def test_duplicate_username(self, client, database):
        first = client.post("/users", json={"username": "carol", "role": "customer"})
        second = client.post("/users", json={"username": "carol", "role": "administrator"})
        assert first.status_code == 201
        assert second.status_code == 500
        body = second.json()
        assert body["message"] == "Error creating user"
        assert body["error"]["name"] == "DuplicateKeyError"
        assert database.users.count_documents({"username": "carol"}) == 1

    def test_missing_username(self, client, database):
        response = client.post("/users", json={"role": "customer"})
        assert response.status_code == 500
        body = response.json()
        assert body["message"] == "Error creating user"
        assert body["error"]["name"] == "ValidationError"
        assert body["error"]["errors"][0]["loc"] == ["username"]
        assert database.users.count_documents({}) == 0

    def test_action_plan_cannot_be_set_on_create(self, client):
        response = client.post("/users", json={
            "username": "dave",
            "role": "customer",
            "action_plan": [{"label": "Clean Now", "action_url": "/clean"}],
        })
        assert response.status_code == 201
        assert response.json()["action_plan"] == []

    def test_database_failure(self, client, database, monkeypatch):
        users = MagicMock()
        users.insert_one.side_effect = ServerSelectionTimeoutError("no servers available")
        monkeypatch.setattr(database, "users", users)
        response = client.post("/users", json={"username": "erin", "role": "customer"})
        assert response.status_code == 500
        assert response.json()["error"]["message"] == "no servers available"

    def test_non_object_body(self, client):
        response = client.post("/users", json=["alice", "customer"])
        assert response.status_code == 400
        assert "detail" in response.json()
