#!/usr/bin/env python3
"""
Shared SQLAlchemy base and mixin for the Bookshelf API.

- Integer primary key assigned by the database (autoincrement); the store is
  the only authority for identity, clients never choose ids.
- to_document() / from_document() give the flat snapshot kept by the search
  index (see models/search_index.py).

Notes:
- Entities built by the mappers are transient; they become persistent only
  through DBStorage.persist(), which merges them into the current session.
"""

from __future__ import annotations

from sqlalchemy import Column, Integer
from sqlalchemy.orm import declarative_base

# Declarative base for all models
Base = declarative_base()


class BaseModel:
    """
    Base mixin for all persistent models.

    Subclasses list the scalar columns mirrored into the search index in
    ``__document_fields__``.
    """

    __document_fields__: tuple = ()

    id = Column(Integer, primary_key=True, autoincrement=True)

    def __init__(self, *args, **kwargs):
        """
        Allow attribute initialization via kwargs without requiring a session here.
        No id is generated; a None id means "not stored yet".
        """
        for key, value in kwargs.items():
            if key != "__class__":
                setattr(self, key, value)

    def __str__(self) -> str:
        """Human-friendly representation including id and fields."""
        fields = {name: getattr(self, name, None) for name in self.__document_fields__}
        return f"[{self.__class__.__name__}] ({self.id}) {fields}"

    __repr__ = __str__

    def to_document(self) -> dict:
        """
        Return the snapshot stored by the search index:
        - id plus every name in __document_fields__
        - dates are kept as date objects (the index lives in process memory)
        """
        doc = {"id": self.id}
        for name in self.__document_fields__:
            doc[name] = getattr(self, name, None)
        return doc

    @classmethod
    def from_document(cls, doc: dict):
        """Rebuild a detached (never added to a session) instance from a snapshot."""
        return cls(**{k: v for k, v in doc.items() if k == "id" or k in cls.__document_fields__})

