"""
List controller for the entity screens of the single-page client.

The view state is an immutable ListState: every operation takes the current
state and returns the next one, nothing is kept on the controller itself.

Paging is additive (infinite scroll): load_all() and load_page() append the
fetched page to the items already shown; reset() is the only way back to an
empty list. Results are applied in call order, there is no cancellation of
a request superseded by a newer one.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional, Tuple

import requests

from .parse_links import parse_links
from .resources import EntityResource

logger = logging.getLogger(__name__)

PAGE_SIZE = 20

AUTHOR_FORM = {"name": None, "id": None}
BOOK_FORM = {"title": None, "description": None, "publicationDate": None, "id": None}


@dataclass(frozen=True)
class ListState:
    items: Tuple[Dict, ...] = ()
    page: int = 0
    predicate: str = "id"
    # True sorts the predicate ascending
    reverse: bool = True
    search_query: Optional[str] = None
    links: Dict[str, Optional[int]] = field(default_factory=dict)

    def sort_params(self) -> List[str]:
        return [f"{self.predicate},{'asc' if self.reverse else 'desc'}", "id"]


class ListController:
    def __init__(self, resource: EntityResource, empty_form: Dict, page_size: int = PAGE_SIZE) -> None:
        self.resource = resource
        self._empty_form = dict(empty_form)
        self.page_size = page_size

    def load_all(self, state: ListState) -> ListState:
        """Fetch state.page and append it to the items already loaded."""
        items, headers = self.resource.query(page=state.page, size=self.page_size, sort=state.sort_params())
        links = parse_links(headers.get("link")) if headers.get("link") else {}
        logger.debug("Loaded page %s of %s: %s items", state.page, self.resource.entity, len(items))
        return replace(state, items=state.items + tuple(items), links=links)

    def reset(self, state: ListState) -> ListState:
        """Back to page 0 with no items, then load it (used after a sort change)."""
        return self.load_all(replace(state, page=0, items=()))

    def load_page(self, state: ListState, page: int) -> ListState:
        """Load another page on top of the current items."""
        return self.load_all(replace(state, page=page))

    def sort(self, state: ListState, predicate: str, reverse: bool) -> ListState:
        return self.reset(replace(state, predicate=predicate, reverse=reverse))

    def search(self, state: ListState, query: Optional[str] = None) -> ListState:
        """
        Replace the items with the search results. When the search endpoint
        answers 404 the regular listing is loaded instead.
        """
        query = state.search_query if query is None else query
        state = replace(state, search_query=query)
        try:
            results = self.resource.search(query)
        except requests.HTTPError as e:
            if e.response is not None and e.response.status_code == 404:
                logger.info("Search for %r not found, falling back to the listing", query)
                return self.load_all(state)
            raise
        return replace(state, items=tuple(results))

    def clear(self) -> Dict:
        """Empty model for the create/edit form."""
        return dict(self._empty_form)

    def refresh(self, state: ListState) -> Tuple[ListState, Dict]:
        return self.reset(state), self.clear()


def author_list_controller(base_url: str, session=None) -> ListController:
    return ListController(EntityResource(base_url, "authors", session=session), AUTHOR_FORM)


def book_list_controller(base_url: str, session=None) -> ListController:
    return ListController(EntityResource(base_url, "books", session=session), BOOK_FORM)
