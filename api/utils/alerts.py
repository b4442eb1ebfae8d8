"""Alert headers read by the single-page client after each write."""
from __future__ import annotations

from typing import Dict

from flask import current_app


def _app_name() -> str:
    return current_app.config.get("APP_NAME", "bookshelfApp")


def alert(message: str, param: str) -> Dict[str, str]:
    name = _app_name()
    return {f"X-{name}-alert": message, f"X-{name}-params": param}


def entity_creation_alert(entity_name: str, param: str) -> Dict[str, str]:
    return alert(f"A new {entity_name} is created with identifier {param}", param)


def entity_update_alert(entity_name: str, param: str) -> Dict[str, str]:
    return alert(f"A {entity_name} is updated with identifier {param}", param)


def entity_deletion_alert(entity_name: str, param: str) -> Dict[str, str]:
    return alert(f"A {entity_name} is deleted with identifier {param}", param)


def failure_alert(entity_name: str, error_key: str) -> Dict[str, str]:
    name = _app_name()
    return {f"X-{name}-error": f"error.{error_key}", f"X-{name}-params": entity_name}
