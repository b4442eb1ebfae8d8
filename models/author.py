from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy import Column, String
from sqlalchemy.orm import relationship

from models.base_model import BaseModel, Base


class Author(BaseModel, Base):
    __tablename__ = "authors"
    __document_fields__ = ("name",)

    name = Column(String(255), nullable=True)

    # Inverse side; never included in AuthorDTO
    books = relationship("Book", back_populates="author")


@dataclass(frozen=True)
class AuthorRef:
    """
    Reference-only placeholder for an Author: carries the id and nothing else.

    Produced when a Book is rebuilt from its DTO. It stands in for a foreign
    key and must never be treated as a loaded Author (there is no name).
    """

    id: int
    resolved: bool = False
