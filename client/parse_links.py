"""Parse the RFC 5988 Link header produced by the paging endpoints."""
from __future__ import annotations

from typing import Dict, Optional
from urllib.parse import urlparse, parse_qs

from requests.utils import parse_header_links


def parse_links(header: Optional[str]) -> Dict[str, Optional[int]]:
    """
    Map each rel ("next", "prev", "last", "first") to the page number in its url.

    >>> parse_links('</api/books?page=1&size=20>; rel="next",</api/books?page=0&size=20>; rel="first"')
    {'next': 1, 'first': 0}
    """
    if not header:
        raise ValueError("input must not be of zero length")
    links = {}
    for link in parse_header_links(header):
        rel = link.get("rel")
        if not rel:
            raise ValueError(f"link has no rel: {link.get('url')}")
        page = parse_qs(urlparse(link["url"]).query).get("page")
        links[rel] = int(page[0]) if page else None
    return links
