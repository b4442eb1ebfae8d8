"""Page descriptor returned by DBStorage.find_page()."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List


@dataclass
class Page:
    content: List = field(default_factory=list)
    number: int = 0  # zero-based
    size: int = 20
    total_elements: int = 0

    @property
    def total_pages(self) -> int:
        if self.size <= 0:
            return 0
        return -(-self.total_elements // self.size)

    @property
    def has_next(self) -> bool:
        return self.number + 1 < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.number > 0
