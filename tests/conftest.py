import mongomock
import pytest
from fastapi.testclient import TestClient

from booknest.db.mongo import ensure_indexes, get_db
from booknest.main import app
from booknest.models.schemas import Book

GATSBY = {"title": "The Great Gatsby", "author": "F. Scott Fitzgerald", "genre": "Classic Literature", "price": 12.99}
MOCKINGBIRD = {"title": "To Kill a Mockingbird", "author": "Harper Lee", "genre": "Classic Literature", "price": 14.99}
DUNE = {"title": "Dune", "author": "Frank Herbert", "genre": "Science Fiction", "price": 16.99, "featured": True}


def make_book(book_id="b1", price=10.0, title="Book"):
    return Book(id=book_id, title=title, author="Author", genre="Fiction", price=price)


def auth(token):
    return {"Authorization": f"Bearer {token}"}


def register(client, name, email, password="secret123"):
    res = client.post("/api/auth/register", json={"name": name, "email": email, "password": password})
    assert res.status_code == 201, res.text
    return res.json()


@pytest.fixture
def db():
    database = mongomock.MongoClient()["booknest_test"]
    ensure_indexes(database)
    return database


@pytest.fixture
def client(db):
    app.dependency_overrides[get_db] = lambda: db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def admin_token(client):
    # first account becomes the admin
    return register(client, "Admin User", "admin@booknest.com")["token"]


@pytest.fixture
def user_token(client, admin_token):
    return register(client, "Demo User", "user@example.com")["token"]


@pytest.fixture
def books(client, admin_token):
    created = []
    for payload in (GATSBY, MOCKINGBIRD, DUNE):
        res = client.post("/api/books", json=payload, headers=auth(admin_token))
        assert res.status_code == 201, res.text
        created.append(res.json())
    return created
