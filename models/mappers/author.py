"""Mapper between the Author entity and AuthorDTO (plain field copy)."""
from __future__ import annotations

from typing import Optional

from models.author import Author
from models.schemas.author import AuthorDTO


def to_dto(author: Optional[Author]) -> Optional[AuthorDTO]:
    if author is None:
        return None
    return AuthorDTO(id=author.id, name=author.name)


def to_entity(dto: Optional[AuthorDTO]) -> Optional[Author]:
    if dto is None:
        return None
    return Author(id=dto.id, name=dto.name)
