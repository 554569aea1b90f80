from tests.conftest import GATSBY, auth


def test_list_books(client, books):
    res = client.get("/api/books")
    assert res.status_code == 200
    assert [b["title"] for b in res.json()] == ["The Great Gatsby", "To Kill a Mockingbird", "Dune"]
    assert res.json()[0]["inStock"] is True


def test_filter_books(client, books):
    assert [b["title"] for b in client.get("/api/books", params={"genre": "Science Fiction"}).json()] == ["Dune"]
    assert [b["title"] for b in client.get("/api/books", params={"q": "harper"}).json()] == ["To Kill a Mockingbird"]
    assert [b["title"] for b in client.get("/api/books", params={"featured": True}).json()] == ["Dune"]


def test_search_text_is_matched_literally(client, admin_token, books):
    client.post("/api/books", json={**GATSBY, "title": "C++ Primer (5th Edition)"}, headers=auth(admin_token))
    assert [b["title"] for b in client.get("/api/books", params={"q": "c++"}).json()] == ["C++ Primer (5th Edition)"]
    res = client.get("/api/books", params={"q": "("})
    assert res.status_code == 200
    assert [b["title"] for b in res.json()] == ["C++ Primer (5th Edition)"]
    assert client.get("/api/books", params={"q": "G.tsby"}).json() == []


def test_get_book(client, books):
    res = client.get(f"/api/books/{books[0]['id']}")
    assert res.status_code == 200
    assert res.json()["price"] == 12.99


def test_get_missing_book(client, books):
    assert client.get("/api/books/64b7f0c2a1b2c3d4e5f60718").status_code == 404
    assert client.get("/api/books/not-an-id").status_code == 400


def test_create_requires_admin(client, user_token):
    assert client.post("/api/books", json=GATSBY).status_code == 401
    res = client.post("/api/books", json=GATSBY, headers=auth(user_token))
    assert res.status_code == 403
    assert res.json() == {"detail": "Admin role required"}


def test_create_rejects_negative_price(client, admin_token):
    res = client.post("/api/books", json={**GATSBY, "price": -1}, headers=auth(admin_token))
    assert res.status_code == 422


def test_update_book(client, admin_token, books):
    book_id = books[0]["id"]
    res = client.put(f"/api/books/{book_id}", json={"price": 9.99, "inStock": False}, headers=auth(admin_token))
    assert res.status_code == 200
    assert res.json()["price"] == 9.99
    assert res.json()["inStock"] is False
    assert res.json()["title"] == "The Great Gatsby"


def test_update_by_non_admin_is_forbidden(client, user_token, books):
    res = client.put(f"/api/books/{books[0]['id']}", json={"price": 1}, headers=auth(user_token))
    assert res.status_code == 403


def test_delete_book(client, admin_token, books):
    book_id = books[0]["id"]
    assert client.delete(f"/api/books/{book_id}", headers=auth(admin_token)).json() == {"deleted": True}
    assert client.get(f"/api/books/{book_id}").status_code == 404
    assert client.delete(f"/api/books/{book_id}", headers=auth(admin_token)).status_code == 404
