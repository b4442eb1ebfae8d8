from __future__ import annotations

import logging

from flask import Blueprint, request, jsonify

from models import storage, search_index
from models.book import Book
from models.mappers import book as book_mapper
from models.schemas.book import BookDTO, BookDTOSchema

from .errors import ConflictError, NotFoundError
from .utils.alerts import entity_creation_alert, entity_update_alert, entity_deletion_alert
from .utils.pagination import parse_pagination, parse_sort, pagination_headers

logger = logging.getLogger(__name__)

bp = Blueprint("books", __name__)

ENTITY_NAME = "book"
BASE_URL = "/api/books"

dto_schema = BookDTOSchema()
dto_list_schema = BookDTOSchema(many=True)

# Sorting allowlist: API field -> SQLAlchemy column (wire and attribute names)
SORT_COLUMNS = {
    "id": Book.id,
    "title": Book.title,
    "description": Book.description,
    "publicationDate": Book.publication_date,
    "publication_date": Book.publication_date,
    "authorId": Book.author_id,
    "author_id": Book.author_id,
}


def _create(dto: BookDTO):
    if dto.id is not None:
        raise ConflictError(ENTITY_NAME, "idexists", "A new book cannot already have an ID")
    book = storage.persist(book_mapper.to_entity(dto))
    result = book_mapper.to_dto(book)
    search_index.save(book)
    headers = {"Location": f"{BASE_URL}/{result.id}"}
    headers.update(entity_creation_alert(ENTITY_NAME, str(result.id)))
    return jsonify(dto_schema.dump(result)), 201, headers


@bp.post("/books")
def create_book():
    """
    Create a book
    ---
    tags: [Books]
    consumes:
      - application/json
    parameters:
      - in: body
        name: body
        required: true
        schema:
          type: object
          properties:
            title: { type: string, maxLength: 255 }
            description: { type: string }
            publicationDate: { type: string, format: date }
            authorId: { type: integer }
    responses:
      201: { description: "Created; the Location header points at the new book" }
      400: { description: "The body already carries an id, or authorId is unknown" }
      422: { description: Validation error }
    """
    dto = dto_schema.load(request.get_json(silent=True) or {})
    logger.debug("REST request to save Book : %s", dto)
    return _create(dto)


@bp.put("/books")
def update_book():
    """
    Update a book (creates it when the body has no id)

    An id that is not stored is rejected with 404, never inserted: ids are
    assigned by the store on create.
    ---
    tags: [Books]
    consumes:
      - application/json
    parameters:
      - in: body
        name: body
        required: true
        schema:
          type: object
          properties:
            id: { type: integer }
            title: { type: string, maxLength: 255 }
            description: { type: string }
            publicationDate: { type: string, format: date }
            authorId: { type: integer }
    responses:
      200: { description: Updated }
      201: { description: "Created (no id in body)" }
      400: { description: Unknown authorId }
      404: { description: No book with this id }
      422: { description: Validation error }
    """
    dto = dto_schema.load(request.get_json(silent=True) or {})
    logger.debug("REST request to update Book : %s", dto)
    if dto.id is None:
        return _create(dto)
    if not storage.exists(Book, dto.id):
        raise NotFoundError(ENTITY_NAME, dto.id)
    book = storage.persist(book_mapper.to_entity(dto))
    result = book_mapper.to_dto(book)
    search_index.save(book)
    return jsonify(dto_schema.dump(result)), 200, entity_update_alert(ENTITY_NAME, str(dto.id))


@bp.get("/books")
def list_books():
    """
    List books, one page at a time
    ---
    tags: [Books]
    parameters:
      - in: query
        name: page
        type: integer
        default: 0
      - in: query
        name: size
        type: integer
        default: 20
      - in: query
        name: sort
        type: array
        items: { type: string }
        collectionFormat: multi
        description: "field[,asc|desc]; allowed fields: id, title, description, publicationDate, authorId"
    responses:
      200: { description: "OK; X-Total-Count and Link headers describe the pages" }
      400: { description: Bad paging or sort parameter }
    """
    logger.debug("REST request to get a page of Books")
    page, size = parse_pagination()
    order_by = parse_sort(SORT_COLUMNS, Book)
    result = storage.find_page(Book, page, size, order_by)
    body = dto_list_schema.dump([book_mapper.to_dto(b) for b in result.content])
    return jsonify(body), 200, pagination_headers(result, BASE_URL)


@bp.get("/books/<int:book_id>")
def get_book(book_id: int):
    """
    Get a book by id
    ---
    tags: [Books]
    parameters:
      - in: path
        name: book_id
        type: integer
        required: true
    responses:
      200: { description: OK }
      404: { description: Not found }
    """
    logger.debug("REST request to get Book : %s", book_id)
    book = storage.get(Book, book_id)
    if book is None:
        raise NotFoundError(ENTITY_NAME, book_id)
    return jsonify(dto_schema.dump(book_mapper.to_dto(book)))


@bp.delete("/books/<int:book_id>")
def delete_book(book_id: int):
    """
    Delete a book (idempotent)
    ---
    tags: [Books]
    parameters:
      - in: path
        name: book_id
        type: integer
        required: true
    responses:
      200: { description: "Deleted (or already absent)" }
    """
    logger.debug("REST request to delete Book : %s", book_id)
    storage.delete_by_id(Book, book_id)
    search_index.delete(Book, book_id)
    return "", 200, entity_deletion_alert(ENTITY_NAME, str(book_id))


@bp.get("/_search/books/<query>")
def search_books(query: str):
    """
    Full-text search over books (title, description, date and author name)
    ---
    tags: [Books]
    parameters:
      - in: path
        name: query
        type: string
        required: true
        description: "Words to look for; a trailing * matches a prefix"
    responses:
      200: { description: "Matching books, most relevant first" }
    """
    logger.debug("REST request to search Books for query %s", query)
    results = search_index.search(Book, query)
    return jsonify(dto_list_schema.dump([book_mapper.to_dto(b) for b in results]))
