"""List Filters — pagination and optional filters passed to repository list().

Invariants:
    - limit: 10 when page_size <= 0, 100 when page_size > 100, else page_size
    - offset: (page - 1) * limit, with page <= 0 treated as page 1
    - total_pages(total) == ceil(total / limit)

Design Decisions:
    - Frozen dataclasses: filters are values, built once by the list handler
    - Clamping lives here (not in the adapter) so every repository pages identically
"""

import math
from dataclasses import dataclass

from costing_master.core.value_objects import ParameterCategory, UOMCategory

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


@dataclass(frozen=True)
class Pagination:
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE

    @property
    def effective_page(self) -> int:
        return self.page if self.page > 0 else 1

    @property
    def limit(self) -> int:
        if self.page_size <= 0:
            return DEFAULT_PAGE_SIZE
        if self.page_size > MAX_PAGE_SIZE:
            return MAX_PAGE_SIZE
        return self.page_size

    @property
    def offset(self) -> int:
        return (self.effective_page - 1) * self.limit

    def total_pages(self, total: int) -> int:
        return math.ceil(total / self.limit)


@dataclass(frozen=True)
class UOMListFilter(Pagination):
    category: UOMCategory | None = None


@dataclass(frozen=True)
class ParameterListFilter(Pagination):
    category: ParameterCategory | None = None
    is_active: bool | None = None
