import pytest
from werkzeug.security import generate_password_hash

from vulms import create_app
from vulms.extensions import db
from vulms.models.book import Book
from vulms.models.user import User


@pytest.fixture
def app_config(tmp_path):
    # one SQLite file per test so threads get real separate connections
    return {
        "TESTING": True,
        "SQLALCHEMY_DATABASE_URI": f"sqlite:///{tmp_path / 'library.db'}",
        "SQLALCHEMY_ENGINE_OPTIONS": {},
        "SECRET_KEY": "test-secret",
        "JWT_SECRET_KEY": "test-jwt-secret-key-with-enough-bytes-0123456789",
        "MAIL_SUPPRESS_SEND": True,
        "SCHEDULER_ENABLED": False,
    }


@pytest.fixture
def app(app_config):
    app = create_app(app_config)
    with app.app_context():
        yield app
        db.session.remove()
        db.engine.dispose()


@pytest.fixture
def make_user(app):
    def _make(username, role="student", password="secret123"):
        user = User(
            username=username,
            email=f"{username}@univen.ac.za",
            password_hash=generate_password_hash(password),
            role=role,
        )
        db.session.add(user)
        db.session.commit()
        return user
    return _make


@pytest.fixture
def make_book(app):
    def _make(title="Database Systems", copies=1, author="Edgar Codd", genre="Computer Science", **extra):
        book = Book(
            title=title,
            author=author,
            genre=genre,
            total_copies=copies,
            available_copies=copies,
            available=True,
            **extra,
        )
        db.session.add(book)
        db.session.commit()
        return book
    return _make


@pytest.fixture
def admin(make_user):
    return make_user("admin", role="admin", password="admin123")


@pytest.fixture
def alice(make_user):
    return make_user("alice")


@pytest.fixture
def bob(make_user):
    return make_user("bob")


def login(client, user, password="secret123"):
    resp = client.post("/api/login", json={"email": user.email, "password": password})
    assert resp.status_code == 200, resp.get_json()
    return client


@pytest.fixture
def alice_client(app, alice):
    return login(app.test_client(), alice)


@pytest.fixture
def bob_client(app, bob):
    return login(app.test_client(), bob)


@pytest.fixture
def admin_client(app, admin):
    return login(app.test_client(), admin, password="admin123")
