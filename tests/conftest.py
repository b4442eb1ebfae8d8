"""Pytest configuration and shared fixtures."""
import os

# Must be set before `models` is imported: DBStorage picks its engine from it
os.environ["APP_ENV"] = "test"

import pytest

from api import create_app
from models import storage, search_index
from models.author import Author
from models.book import Book


@pytest.fixture
def app():
    """
    A fresh app over an empty database and an empty search index.

    The in-memory SQLite database is shared by the whole test process, so it
    is dropped and recreated for every test.
    """
    app = create_app("test")
    storage.reset()
    search_index.clear()
    yield app
    storage.close()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_author(app):
    """Store an author directly (bypassing the API) and index it."""
    def _make(name="Frank Herbert"):
        author = storage.persist(Author(name=name))
        search_index.save(author)
        return author
    return _make


@pytest.fixture
def make_book(app):
    """Store a book directly (bypassing the API) and index it."""
    def _make(title="Dune", description=None, publication_date=None, author_id=None):
        book = storage.persist(Book(
            title=title,
            description=description,
            publication_date=publication_date,
            author_id=author_id,
        ))
        search_index.save(book)
        return book
    return _make
