from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from marshmallow import Schema, fields, post_load, validate


@dataclass
class AuthorDTO:
    id: Optional[int] = None
    name: Optional[str] = None


class AuthorDTOSchema(Schema):
    """Wire shape of an Author: {"id", "name"}."""

    id = fields.Integer(allow_none=True, load_default=None)
    name = fields.String(allow_none=True, load_default=None, validate=validate.Length(max=255))

    @post_load
    def make_dto(self, data, **kwargs):
        return AuthorDTO(**data)
