"""
HTTP client for one entity's REST endpoints (/api/<entity> and
/api/_search/<entity>), built on requests.

The session is injectable so tests can pass a fake one. Non-2xx responses
raise requests.HTTPError; callers decide which statuses they handle.
"""
from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

import requests
from requests.utils import quote


class EntityResource:
    """
    Usage:
        books = EntityResource("http://localhost:8080", "books")
        items, headers = books.query(page=0, size=20, sort=["title,asc", "id"])
        created = books.save({"title": "Dune"})
    """

    def __init__(
        self,
        base_url: str,
        entity: str,
        session: Optional[Any] = None,
        timeout: Optional[float] = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self.entity = entity
        self._session = session if session is not None else requests.Session()
        self._timeout = timeout

    @property
    def url(self) -> str:
        return f"{self._base_url}/api/{self.entity}"

    @property
    def search_url(self) -> str:
        return f"{self._base_url}/api/_search/{self.entity}"

    def query(
        self, page: int = 0, size: int = 20, sort: Optional[Sequence[str]] = None
    ) -> Tuple[List[Dict], Mapping[str, str]]:
        """One page of records plus the response headers (Link, X-Total-Count)."""
        params: Dict[str, Any] = {"page": page, "size": size}
        if sort:
            params["sort"] = list(sort)
        response = self._session.get(self.url, params=params, timeout=self._timeout)
        response.raise_for_status()
        return response.json(), response.headers

    def get(self, id: int) -> Dict:
        response = self._session.get(f"{self.url}/{id}", timeout=self._timeout)
        response.raise_for_status()
        return response.json()

    def save(self, dto: Dict) -> Dict:
        response = self._session.post(self.url, json=dto, timeout=self._timeout)
        response.raise_for_status()
        return response.json()

    def update(self, dto: Dict) -> Dict:
        response = self._session.put(self.url, json=dto, timeout=self._timeout)
        response.raise_for_status()
        return response.json()

    def delete(self, id: int) -> None:
        response = self._session.delete(f"{self.url}/{id}", timeout=self._timeout)
        response.raise_for_status()

    def search(self, query: Optional[str]) -> List[Dict]:
        """A missing query hits the bare search URL, which the server answers with 404."""
        response = self._session.get(f"{self.search_url}/{quote(query or '', safe='')}", timeout=self._timeout)
        response.raise_for_status()
        return response.json()
