from flask import Blueprint

from models import search_index
from models.author import Author
from models.book import Book

bp = Blueprint("health", __name__)


@bp.get("/health")
def health():
    """
    Health check
    ---
    tags:
      - Health
    responses:
      200:
        description: API is up
        schema:
          type: object
          properties:
            status:
              type: string
              example: ok
            version:
              type: string
              example: 1.0.0
            indexed:
              type: object
              description: Documents per search index
    """
    return {
        "status": "ok",
        "version": "1.0.0",
        "indexed": {"authors": search_index.count(Author), "books": search_index.count(Book)},
    }, 200
