"""
Pagination helpers shared by the entity blueprints:
- parse_pagination(): zero-based page/size from the query string
- parse_sort(): repeated ?sort=field[,asc|desc] into SQLAlchemy order clauses
- pagination_headers(): X-Total-Count and an RFC 5988 Link header
"""
from __future__ import annotations

from typing import Dict, List, Tuple

from flask import request, abort, current_app

from models.page import Page


def parse_pagination() -> Tuple[int, int]:
    default_size = current_app.config.get("DEFAULT_PAGE_SIZE", 20)
    max_size = current_app.config.get("MAX_PAGE_SIZE", 100)
    try:
        page = int(request.args.get("page", "0"))
        size = int(request.args.get("size", str(default_size)))
    except ValueError:
        abort(400, description="page and size must be integers")
    page = max(page, 0)
    size = max(1, min(size, max_size))
    return page, size


def parse_sort(columns: Dict, model) -> List:
    """
    columns maps the sort names accepted on the wire to model columns.
    Each ?sort= value is "field" or "field,asc" / "field,desc" (default asc).
    Without any sort parameter the result is id ascending.
    """
    order_by = []
    for raw in request.args.getlist("sort"):
        parts = [p.strip() for p in raw.split(",") if p.strip()]
        if not parts:
            continue
        direction = "asc"
        if len(parts) > 1 and parts[-1].lower() in ("asc", "desc"):
            direction = parts.pop().lower()
        for key in parts:
            col = columns.get(key)
            if col is None:
                abort(400, description=f"Unsupported sort field: {key}. Allowed: {', '.join(sorted(columns))}")
            order_by.append(col.desc() if direction == "desc" else col.asc())
    return order_by or [model.id.asc()]


def _page_uri(base_url: str, page: int, size: int) -> str:
    return f"{base_url}?page={page}&size={size}"


def pagination_headers(page: Page, base_url: str) -> Dict[str, str]:
    """
    Headers for one page of results:
      X-Total-Count: total number of rows
      Link: next (if any), prev (if any), last, first
    """
    links = []
    if page.has_next:
        links.append(f'<{_page_uri(base_url, page.number + 1, page.size)}>; rel="next"')
    if page.has_previous:
        links.append(f'<{_page_uri(base_url, page.number - 1, page.size)}>; rel="prev"')
    last_page = page.total_pages - 1 if page.total_pages > 0 else 0
    links.append(f'<{_page_uri(base_url, last_page, page.size)}>; rel="last"')
    links.append(f'<{_page_uri(base_url, 0, page.size)}>; rel="first"')
    return {"X-Total-Count": str(page.total_elements), "Link": ",".join(links)}
