import pytest

from vulms.extensions import db
from vulms.models.user import User


def test_signup_then_login(app):
    client = app.test_client()
    resp = client.post("/api/signup", json={
        "username": "thandi", "email": "thandi@univen.ac.za", "password": "pw12345", "role": "student",
    })
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["message"] == "Registration successful"

    user = db.session.get(User, body["userId"])
    assert user.role == "student"
    assert user.password_hash != "pw12345"

    resp = client.post("/api/login", json={"email": "thandi@univen.ac.za", "password": "pw12345"})
    assert resp.status_code == 200
    assert resp.get_json()["user"] == {
        "id": user.id, "username": "thandi", "email": "thandi@univen.ac.za", "role": "student",
    }
    assert client.get("/api/session").get_json()["user"]["username"] == "thandi"


def test_signup_role_defaults_to_student(app):
    body = app.test_client().post("/api/signup", json={
        "username": "sipho", "email": "sipho@univen.ac.za", "password": "pw",
    }).get_json()
    assert db.session.get(User, body["userId"]).role == "student"


@pytest.mark.parametrize("payload", [
    {"email": "a@b.c", "password": "pw"},
    {"username": "a", "password": "pw"},
    {"username": "a", "email": "a@b.c"},
])
def test_signup_missing_fields(app, payload):
    resp = app.test_client().post("/api/signup", json=payload)
    assert resp.status_code == 400
    assert resp.get_json() == {"error": "All fields are required"}


def test_signup_duplicate(app, alice):
    resp = app.test_client().post("/api/signup", json={
        "username": "alice", "email": "other@univen.ac.za", "password": "pw",
    })
    assert resp.status_code == 400
    assert resp.get_json() == {"error": "Username or email already exists"}

    resp = app.test_client().post("/api/signup", json={
        "username": "other", "email": alice.email, "password": "pw",
    })
    assert resp.status_code == 400


def test_admin_signup_is_off_by_default(app):
    resp = app.test_client().post("/api/signup", json={
        "username": "boss", "email": "boss@univen.ac.za", "password": "pw", "role": "admin",
    })
    assert resp.status_code == 400
    assert db.session.query(User).count() == 0


def test_admin_signup_when_allowed(app):
    app.config["ALLOW_ADMIN_SIGNUP"] = True
    body = app.test_client().post("/api/signup", json={
        "username": "boss", "email": "boss@univen.ac.za", "password": "pw", "role": "admin",
    }).get_json()
    assert db.session.get(User, body["userId"]).role == "admin"


def test_signup_unknown_role(app):
    resp = app.test_client().post("/api/signup", json={
        "username": "x", "email": "x@univen.ac.za", "password": "pw", "role": "librarian",
    })
    assert resp.status_code == 400


@pytest.mark.parametrize("payload, error", [
    ({"username": "x", "email": "x@univen.ac.za", "password": "pw", "role": 5}, "role must be a string"),
    ({"username": 42, "email": "x@univen.ac.za", "password": "pw"}, "username must be a string"),
    ({"username": "x", "email": "x@univen.ac.za", "password": 12345}, "password must be a string"),
])
def test_signup_rejects_non_string_fields(app, payload, error):
    resp = app.test_client().post("/api/signup", json=payload)
    assert resp.status_code == 400
    assert resp.get_json() == {"error": error}
    assert db.session.query(User).count() == 0


@pytest.mark.parametrize("path", ["/api/signup", "/api/login", "/api/token"])
def test_array_body_is_rejected(app, path):
    resp = app.test_client().post(path, json=["alice@univen.ac.za", "secret123"])
    assert resp.status_code == 400
    assert resp.get_json() == {"error": "Request body must be a JSON object"}


def test_login_with_non_string_email(app, alice):
    resp = app.test_client().post("/api/login", json={"email": ["alice"], "password": "secret123"})
    assert resp.status_code == 400


def test_login_failures(app, alice):
    client = app.test_client()
    resp = client.post("/api/login", json={"email": alice.email})
    assert resp.status_code == 400
    assert resp.get_json() == {"error": "Email and password are required"}

    resp = client.post("/api/login", json={"email": alice.email, "password": "wrong"})
    assert resp.status_code == 401
    assert resp.get_json() == {"error": "Invalid credentials"}

    resp = client.post("/api/login", json={"email": "nobody@univen.ac.za", "password": "secret123"})
    assert resp.status_code == 401


def test_logout_clears_session(alice_client):
    assert alice_client.get("/api/session").status_code == 200
    assert alice_client.post("/api/logout").get_json() == {"message": "Logout successful"}

    resp = alice_client.get("/api/session")
    assert resp.status_code == 401
    assert resp.get_json() == {"error": "Not authenticated"}
    assert alice_client.get("/api/my-books").status_code == 401


def test_bearer_token_identity(app, alice, make_book):
    client = app.test_client()
    resp = client.post("/api/token", json={"email": alice.email, "password": "secret123"})
    assert resp.status_code == 200
    token = resp.get_json()["access_token"]
    headers = {"Authorization": f"Bearer {token}"}

    book = make_book()
    resp = client.post("/api/borrow", json={"bookId": book.id}, headers=headers)
    assert resp.status_code == 200
    assert len(client.get("/api/my-books", headers=headers).get_json()) == 1
    assert client.get("/api/admin/stats", headers=headers).status_code == 403


def test_bearer_token_for_admin(app, admin):
    client = app.test_client()
    token = client.post("/api/token", json={"email": admin.email, "password": "admin123"}).get_json()["access_token"]
    resp = client.get("/api/admin/stats", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 200


def test_token_with_bad_password(app, alice):
    resp = app.test_client().post("/api/token", json={"email": alice.email, "password": "nope"})
    assert resp.status_code == 401


def test_health(app):
    assert app.test_client().get("/health").get_json() == {"ok": True}
