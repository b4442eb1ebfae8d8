from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from marshmallow import Schema, fields, post_load, validate


@dataclass
class BookDTO:
    id: Optional[int] = None
    title: Optional[str] = None
    description: Optional[str] = None
    publication_date: Optional[date] = None
    author_id: Optional[int] = None
    # read-only on the way in; filled from the loaded author on the way out
    author_name: Optional[str] = None


class BookDTOSchema(Schema):
    """
    Wire shape of a Book, with the author flattened:
    {"id", "title", "description", "publicationDate", "authorId", "authorName"}
    """

    id = fields.Integer(allow_none=True, load_default=None)
    title = fields.String(allow_none=True, load_default=None, validate=validate.Length(max=255))
    description = fields.String(allow_none=True, load_default=None)
    publication_date = fields.Date(data_key="publicationDate", allow_none=True, load_default=None)
    author_id = fields.Integer(data_key="authorId", allow_none=True, load_default=None)
    author_name = fields.String(data_key="authorName", allow_none=True, load_default=None)

    @post_load
    def make_dto(self, data, **kwargs):
        return BookDTO(**data)
