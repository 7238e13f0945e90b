def _titles(resp):
    return [b["title"] for b in resp.get_json()]


def test_catalog_is_public_and_sorted_by_title(app, make_book):
    make_book(title="Quantum Mechanics", author="Max Planck", genre="Physics")
    make_book(title="Database Systems", author="Edgar Codd", genre="Computer Science")

    resp = app.test_client().get("/api/books")

    assert resp.status_code == 200
    assert _titles(resp) == ["Database Systems", "Quantum Mechanics"]
    first = resp.get_json()[0]
    assert first["available"] is True
    assert first["available_copies"] == first["total_copies"] == 1


def test_search_matches_title_or_author(app, make_book):
    make_book(title="Machine Learning Introduction", author="Geoffrey Hinton", genre="AI")
    make_book(title="Artificial Intelligence Basics", author="Alan Turing", genre="AI")
    make_book(title="Physics Fundamentals", author="Albert Einstein", genre="Physics")
    client = app.test_client()

    assert _titles(client.get("/api/books?search=learning")) == ["Machine Learning Introduction"]
    assert _titles(client.get("/api/books?search=turing")) == ["Artificial Intelligence Basics"]
    assert _titles(client.get("/api/books?search=al&genre=AI")) == ["Artificial Intelligence Basics"]


def test_genre_filter_and_all(app, make_book):
    make_book(title="Quantum Mechanics", genre="Physics")
    make_book(title="Database Systems", genre="Computer Science")
    client = app.test_client()

    assert _titles(client.get("/api/books?genre=Physics")) == ["Quantum Mechanics"]
    assert len(client.get("/api/books?genre=All").get_json()) == 2


def test_genres_are_distinct_and_sorted(app, make_book):
    make_book(title="A", genre="Physics")
    make_book(title="B", genre="AI")
    make_book(title="C", genre="Physics")

    assert app.test_client().get("/api/genres").get_json() == ["AI", "Physics"]


def test_single_book(app, make_book):
    book = make_book(title="Database Systems", isbn="978-0777888999")
    client = app.test_client()

    resp = client.get(f"/api/books/{book.id}")
    assert resp.status_code == 200
    assert resp.get_json()["isbn"] == "978-0777888999"

    resp = client.get("/api/books/4242")
    assert resp.status_code == 404
    assert resp.get_json() == {"error": "Book not found"}
