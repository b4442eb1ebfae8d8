from __future__ import annotations

import logging

from flask import Blueprint, request, jsonify

from models import storage, search_index
from models.author import Author
from models.mappers import author as author_mapper
from models.schemas.author import AuthorDTO, AuthorDTOSchema

from .errors import ConflictError, NotFoundError
from .utils.alerts import entity_creation_alert, entity_update_alert, entity_deletion_alert
from .utils.pagination import parse_pagination, parse_sort, pagination_headers

logger = logging.getLogger(__name__)

bp = Blueprint("authors", __name__)

ENTITY_NAME = "author"
BASE_URL = "/api/authors"

dto_schema = AuthorDTOSchema()
dto_list_schema = AuthorDTOSchema(many=True)

# Sorting allowlist: API field -> SQLAlchemy column
SORT_COLUMNS = {
    "id": Author.id,
    "name": Author.name,
}


def _create(dto: AuthorDTO):
    if dto.id is not None:
        raise ConflictError(ENTITY_NAME, "idexists", "A new author cannot already have an ID")
    author = storage.persist(author_mapper.to_entity(dto))
    result = author_mapper.to_dto(author)
    search_index.save(author)
    headers = {"Location": f"{BASE_URL}/{result.id}"}
    headers.update(entity_creation_alert(ENTITY_NAME, str(result.id)))
    return jsonify(dto_schema.dump(result)), 201, headers


@bp.post("/authors")
def create_author():
    """
    Create an author
    ---
    tags: [Authors]
    consumes:
      - application/json
    parameters:
      - in: body
        name: body
        required: true
        schema:
          type: object
          properties:
            name: { type: string, maxLength: 255 }
    responses:
      201: { description: "Created; the Location header points at the new author" }
      400: { description: The body already carries an id }
      422: { description: Validation error }
    """
    dto = dto_schema.load(request.get_json(silent=True) or {})
    logger.debug("REST request to save Author : %s", dto)
    return _create(dto)


@bp.put("/authors")
def update_author():
    """
    Update an author (creates it when the body has no id)

    An id that is not stored is rejected with 404, never inserted: ids are
    assigned by the store on create.
    ---
    tags: [Authors]
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
            name: { type: string, maxLength: 255 }
    responses:
      200: { description: Updated }
      201: { description: "Created (no id in body)" }
      404: { description: No author with this id }
      422: { description: Validation error }
    """
    dto = dto_schema.load(request.get_json(silent=True) or {})
    logger.debug("REST request to update Author : %s", dto)
    if dto.id is None:
        return _create(dto)
    if not storage.exists(Author, dto.id):
        raise NotFoundError(ENTITY_NAME, dto.id)
    author = storage.persist(author_mapper.to_entity(dto))
    result = author_mapper.to_dto(author)
    search_index.save(author)
    return jsonify(dto_schema.dump(result)), 200, entity_update_alert(ENTITY_NAME, str(dto.id))


@bp.get("/authors")
def list_authors():
    """
    List authors, one page at a time
    ---
    tags: [Authors]
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
        description: "field[,asc|desc]; allowed fields: id, name"
    responses:
      200: { description: "OK; X-Total-Count and Link headers describe the pages" }
      400: { description: Bad paging or sort parameter }
    """
    logger.debug("REST request to get a page of Authors")
    page, size = parse_pagination()
    order_by = parse_sort(SORT_COLUMNS, Author)
    result = storage.find_page(Author, page, size, order_by)
    body = dto_list_schema.dump([author_mapper.to_dto(a) for a in result.content])
    return jsonify(body), 200, pagination_headers(result, BASE_URL)


@bp.get("/authors/<int:author_id>")
def get_author(author_id: int):
    """
    Get an author by id
    ---
    tags: [Authors]
    parameters:
      - in: path
        name: author_id
        type: integer
        required: true
    responses:
      200: { description: OK }
      404: { description: Not found }
    """
    logger.debug("REST request to get Author : %s", author_id)
    author = storage.get(Author, author_id)
    if author is None:
        raise NotFoundError(ENTITY_NAME, author_id)
    return jsonify(dto_schema.dump(author_mapper.to_dto(author)))


@bp.delete("/authors/<int:author_id>")
def delete_author(author_id: int):
    """
    Delete an author (idempotent)
    ---
    tags: [Authors]
    parameters:
      - in: path
        name: author_id
        type: integer
        required: true
    responses:
      200: { description: "Deleted (or already absent)" }
      400: { description: Books still reference this author }
    """
    logger.debug("REST request to delete Author : %s", author_id)
    storage.delete_by_id(Author, author_id)
    search_index.delete(Author, author_id)
    return "", 200, entity_deletion_alert(ENTITY_NAME, str(author_id))


@bp.get("/_search/authors/<query>")
def search_authors(query: str):
    """
    Full-text search over authors, most relevant first
    ---
    tags: [Authors]
    parameters:
      - in: path
        name: query
        type: string
        required: true
        description: "Words to look for; a trailing * matches a prefix"
    responses:
      200: { description: "Matching authors, possibly none" }
    """
    logger.debug("REST request to search Authors for query %s", query)
    results = search_index.search(Author, query)
    return jsonify(dto_list_schema.dump([author_mapper.to_dto(a) for a in results]))
