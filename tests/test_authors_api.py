"""
Tests for the /api/authors endpoints through the Flask test client.
"""
from models import storage, search_index
from models.author import Author


class TestCreateAuthor:

    def test_create_returns_201_with_location_and_alert(self, client):
        resp = client.post("/api/authors", json={"name": "Frank Herbert"})

        assert resp.status_code == 201
        body = resp.get_json()
        assert body["name"] == "Frank Herbert"
        assert isinstance(body["id"], int)
        assert resp.headers["Location"] == f"/api/authors/{body['id']}"
        assert resp.headers["X-bookshelfApp-alert"] == f"A new author is created with identifier {body['id']}"
        assert resp.headers["X-bookshelfApp-params"] == str(body["id"])

    def test_create_indexes_the_author(self, client):
        body = client.post("/api/authors", json={"name": "Frank Herbert"}).get_json()

        assert search_index.get(Author, body["id"]).name == "Frank Herbert"

    def test_create_with_id_is_rejected_without_writing(self, client):
        resp = client.post("/api/authors", json={"id": 5, "name": "Frank Herbert"})

        assert resp.status_code == 400
        assert resp.get_json() == {
            "entityName": "author",
            "errorKey": "idexists",
            "message": "A new author cannot already have an ID",
        }
        assert resp.headers["X-bookshelfApp-error"] == "error.idexists"
        assert resp.headers["X-bookshelfApp-params"] == "author"
        assert storage.count(Author) == 0
        assert search_index.count(Author) == 0

    def test_name_too_long_is_422(self, client):
        resp = client.post("/api/authors", json={"name": "x" * 256})

        assert resp.status_code == 422
        assert resp.get_json()["error"] == "VALIDATION_ERROR"
        assert "name" in resp.get_json()["details"]

    def test_unknown_field_is_422(self, client):
        resp = client.post("/api/authors", json={"name": "A", "books": []})

        assert resp.status_code == 422


class TestUpdateAuthor:

    def test_update_overwrites(self, client, make_author):
        author = make_author("Frank Herbert")

        resp = client.put("/api/authors", json={"id": author.id, "name": "F. Herbert"})

        assert resp.status_code == 200
        assert resp.get_json() == {"id": author.id, "name": "F. Herbert"}
        assert resp.headers["X-bookshelfApp-alert"] == f"A author is updated with identifier {author.id}"
        assert client.get(f"/api/authors/{author.id}").get_json()["name"] == "F. Herbert"

    def test_update_reindexes(self, client, make_author):
        author = make_author("Frank Herbert")

        client.put("/api/authors", json={"id": author.id, "name": "Brian Herbert"})

        assert [a.name for a in search_index.search(Author, "brian")] == ["Brian Herbert"]
        assert search_index.search(Author, "frank") == []

    def test_update_without_id_creates(self, client):
        resp = client.put("/api/authors", json={"name": "Frank Herbert"})

        assert resp.status_code == 201
        assert resp.headers["Location"] == f"/api/authors/{resp.get_json()['id']}"
        assert storage.count(Author) == 1

    def test_update_unknown_id_is_404(self, client):
        resp = client.put("/api/authors", json={"id": 999, "name": "Nobody"})

        assert resp.status_code == 404
        assert resp.data == b""
        assert storage.count(Author) == 0


class TestGetAuthor:

    def test_get_after_create_returns_same_body(self, client):
        created = client.post("/api/authors", json={"name": "Frank Herbert"}).get_json()

        resp = client.get(f"/api/authors/{created['id']}")

        assert resp.status_code == 200
        assert resp.get_json() == created

    def test_get_missing_is_404_with_empty_body(self, client):
        resp = client.get("/api/authors/12345")

        assert resp.status_code == 404
        assert resp.data == b""


class TestDeleteAuthor:

    def test_delete_then_get_is_404_and_search_is_empty(self, client, make_author):
        author = make_author("Zebulon Quartermaine")

        resp = client.delete(f"/api/authors/{author.id}")

        assert resp.status_code == 200
        assert resp.headers["X-bookshelfApp-alert"] == f"A author is deleted with identifier {author.id}"
        assert client.get(f"/api/authors/{author.id}").status_code == 404
        assert client.get("/api/_search/authors/quartermaine").get_json() == []

    def test_delete_is_idempotent(self, client):
        assert client.delete("/api/authors/4242").status_code == 200
        assert client.delete("/api/authors/4242").status_code == 200

    def test_delete_author_with_books_is_400(self, client, make_author, make_book):
        author_id = make_author().id
        make_book(author_id=author_id)

        resp = client.delete(f"/api/authors/{author_id}")

        assert resp.status_code == 400
        assert resp.get_json()["message"] == "Foreign key constraint failed."
        # the rollback expired the fixture instance; check both sides by id
        assert storage.exists(Author, author_id)
        assert search_index.get(Author, author_id) is not None


class TestListAuthors:

    def test_default_page_is_id_ascending(self, client, make_author):
        ids = [make_author(f"Author {i}").id for i in range(3)]

        resp = client.get("/api/authors")

        assert resp.status_code == 200
        assert [a["id"] for a in resp.get_json()] == ids
        assert resp.headers["X-Total-Count"] == "3"

    def test_sort_by_name_desc(self, client, make_author):
        for name in ("Banks", "Asimov", "Clarke"):
            make_author(name)

        resp = client.get("/api/authors?sort=name,desc&sort=id")

        assert [a["name"] for a in resp.get_json()] == ["Clarke", "Banks", "Asimov"]

    def test_unknown_sort_field_is_400(self, client):
        resp = client.get("/api/authors?sort=birthday,asc")

        assert resp.status_code == 400
        assert "birthday" in resp.get_json()["message"]

    def test_page_size_and_links(self, client, make_author):
        for i in range(5):
            make_author(f"Author {i}")

        resp = client.get("/api/authors?page=1&size=2")

        assert len(resp.get_json()) == 2
        assert resp.headers["Link"] == (
            '</api/authors?page=2&size=2>; rel="next",'
            '</api/authors?page=0&size=2>; rel="prev",'
            '</api/authors?page=2&size=2>; rel="last",'
            '</api/authors?page=0&size=2>; rel="first"'
        )

    def test_non_integer_page_is_400(self, client):
        assert client.get("/api/authors?page=abc").status_code == 400


class TestSearchAuthors:

    def test_search_returns_matches(self, client, make_author):
        make_author("Frank Herbert")
        make_author("Isaac Asimov")

        resp = client.get("/api/_search/authors/asimov")

        assert resp.status_code == 200
        assert [a["name"] for a in resp.get_json()] == ["Isaac Asimov"]

    def test_search_without_match_is_empty_list(self, client, make_author):
        make_author("Frank Herbert")

        resp = client.get("/api/_search/authors/tolkien")

        assert resp.status_code == 200
        assert resp.get_json() == []
