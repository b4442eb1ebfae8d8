"""
Tests for the application factory: health, root, and search reindexing.
"""
from api import create_app, reindex
from models import search_index
from models.author import Author
from models.book import Book


def test_health_reports_index_counts(client, make_author):
    make_author()

    resp = client.get("/api/health")

    assert resp.status_code == 200
    assert resp.get_json() == {"status": "ok", "version": "1.0.0", "indexed": {"authors": 1, "books": 0}}


def test_root_points_to_docs(client):
    assert client.get("/").get_json()["docs"] == "/apidocs/"


def test_unknown_route_uses_error_envelope(client):
    resp = client.get("/api/nothing-here")

    assert resp.status_code == 404
    assert resp.get_json()["error"] == "NOT_FOUND"


def test_reindex_rebuilds_from_store(app, make_author, make_book):
    author = make_author("Frank Herbert")
    make_book(title="Dune", author_id=author.id)
    search_index.clear()

    counts = reindex()

    assert counts == {"Author": 1, "Book": 1}
    assert [b.author.name for b in search_index.search(Book, "dune")] == ["Frank Herbert"]


def test_reindex_cli_command(app, make_author):
    make_author("Frank Herbert")
    search_index.clear()

    result = app.test_cli_runner().invoke(args=["reindex"])

    assert result.exit_code == 0
    assert "Author: 1 documents indexed" in result.output
    assert search_index.count(Author) == 1


def test_startup_reindex(app, make_author):
    make_author("Frank Herbert")
    search_index.clear()

    create_app("dev")

    assert search_index.count(Author) == 1
