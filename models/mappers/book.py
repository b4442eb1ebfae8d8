"""
Mapper between the Book entity and BookDTO.

to_dto flattens the author (author.id -> author_id, author.name -> author_name).
to_entity goes the other way with the id alone: the Book it builds refers to
its author through an AuthorRef and carries no loaded Author, so author_name
is dropped. The round trip is lossy on purpose.
"""
from __future__ import annotations

from typing import Optional

from models.author import AuthorRef
from models.book import Book
from models.schemas.book import BookDTO


def author_from_id(author_id: Optional[int]) -> Optional[AuthorRef]:
    if author_id is None:
        return None
    return AuthorRef(author_id)


def to_dto(book: Optional[Book]) -> Optional[BookDTO]:
    if book is None:
        return None
    author = book.author
    return BookDTO(
        id=book.id,
        title=book.title,
        description=book.description,
        publication_date=book.publication_date,
        author_id=author.id if author is not None else book.author_id,
        author_name=author.name if author is not None else None,
    )


def to_entity(dto: Optional[BookDTO]) -> Optional[Book]:
    if dto is None:
        return None
    return Book(
        id=dto.id,
        title=dto.title,
        description=dto.description,
        publication_date=dto.publication_date,
        author_ref=author_from_id(dto.author_id),
    )
