"""Python client for the Bookshelf API: entity resources and list controllers."""
from .parse_links import parse_links
from .resources import EntityResource
from .list_controller import (
    ListController,
    ListState,
    author_list_controller,
    book_list_controller,
)

__all__ = [
    "EntityResource",
    "ListController",
    "ListState",
    "author_list_controller",
    "book_list_controller",
    "parse_links",
]
