import uuid

from aidemoi_platform.api_service.main import app
from aidemoi_platform.api_service.stores import UserStore


def new_user(**overrides):
    unique = uuid.uuid4().hex[:8]
    data = {"username": f"user_{unique}", "email": f"user_{unique}@example.com", "password": "testing12345"}
    data.update(overrides)
    return data


def test_list_users_empty(client):
    resp = client.get("/api/v1/users")
    assert resp.status_code == 200
    assert resp.json() == []


def test_create_user(client):
    data = new_user()
    resp = client.post("/api/v1/users", json=data)
    assert resp.status_code == 201
    body = resp.json()
    assert isinstance(body["id"], int)
    assert body["username"] == data["username"]
    assert body["email"] == data["email"]
    assert body["createdAt"]
    assert body["updatedAt"]
    assert "password" not in body
    assert "password_hash" not in body


def test_created_user_can_log_in(client):
    data = new_user()
    client.post("/api/v1/users", json=data)

    resp = client.post("/api/v1/auth/login", json={"email": data["email"], "password": data["password"]})
    assert resp.status_code == 200


def test_create_user_duplicate_email_returns_400(client):
    data = new_user()
    assert client.post("/api/v1/users", json=data).status_code == 201

    resp = client.post("/api/v1/users", json=new_user(email=data["email"]))
    assert resp.status_code == 400
    assert "email already exists" in resp.json()["error"]["message"]


def test_create_user_missing_fields(client):
    resp = client.post("/api/v1/users", json={"password": "testing12345"})
    assert resp.status_code == 400
    assert resp.json()["error"]["statusCode"] == 400


def test_list_users_ordered_by_id(client):
    ids = [client.post("/api/v1/users", json=new_user()).json()["id"] for _ in range(3)]
    listed = [user["id"] for user in client.get("/api/v1/users").json()]
    assert listed == sorted(ids)


def test_get_user_by_id(client):
    created = client.post("/api/v1/users", json=new_user()).json()
    resp = client.get(f"/api/v1/users/{created['id']}")
    assert resp.status_code == 200
    assert resp.json() == created


def test_get_missing_user_returns_404(client):
    resp = client.get("/api/v1/users/999999")
    assert resp.status_code == 404
    assert resp.json() == {"error": {"message": "User not found", "statusCode": 404}}


def test_get_user_with_non_integer_id_returns_400(client):
    assert client.get("/api/v1/users/abc").status_code == 400


def test_update_user(client):
    created = client.post("/api/v1/users", json=new_user()).json()
    changes = new_user(username="renamed", password="newpassword")

    resp = client.put(f"/api/v1/users/{created['id']}", json=changes)
    assert resp.status_code == 200
    assert resp.json()["username"] == "renamed"
    assert resp.json()["email"] == changes["email"]

    login = client.post("/api/v1/auth/login", json={"email": changes["email"], "password": "newpassword"})
    assert login.status_code == 200


def test_update_user_keeping_own_email(client):
    data = new_user()
    created = client.post("/api/v1/users", json=data).json()

    resp = client.put(f"/api/v1/users/{created['id']}", json={"username": "same-email", "email": data["email"]})
    assert resp.status_code == 200
    assert resp.json()["username"] == "same-email"


def test_update_user_email_taken_by_other_returns_400(client):
    first = client.post("/api/v1/users", json=new_user()).json()
    second = client.post("/api/v1/users", json=new_user()).json()

    resp = client.put(f"/api/v1/users/{second['id']}", json={"username": "x", "email": first["email"]})
    assert resp.status_code == 400


def test_update_missing_user_returns_404(client):
    resp = client.put("/api/v1/users/999999", json=new_user())
    assert resp.status_code == 404


def test_delete_user(client):
    created = client.post("/api/v1/users", json=new_user()).json()

    resp = client.delete(f"/api/v1/users/{created['id']}")
    assert resp.status_code == 204
    assert resp.content == b""
    assert client.get(f"/api/v1/users/{created['id']}").status_code == 404


def test_delete_missing_user_returns_404(client):
    assert client.delete("/api/v1/users/999999").status_code == 404


def test_user_timestamps_are_utc_with_z_suffix(client):
    body = client.post("/api/v1/users", json=new_user()).json()
    assert body["createdAt"].endswith("Z")
    assert body["updatedAt"].endswith("Z")


def test_user_store_count_tracks_creates_and_deletes(client):
    def count():
        with app.state.session_factory() as db:
            return UserStore(db).count()

    assert count() == 0
    ids = [client.post("/api/v1/users", json=new_user()).json()["id"] for _ in range(2)]
    assert count() == 2

    client.delete(f"/api/v1/users/{ids[0]}")
    assert count() == 1
