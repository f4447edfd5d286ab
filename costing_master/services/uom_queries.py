"""UOM Queries — get and list handlers for units of measure."""

from dataclasses import dataclass

from costing_master.core.list_filter import UOMListFilter
from costing_master.core.repository_protocols import UOMRepository
from costing_master.core.uom import UnitOfMeasure
from costing_master.core.value_objects import UOMCategory, UOMCode


@dataclass(frozen=True)
class GetUOMQuery:
    uom_code: str


@dataclass(frozen=True)
class ListUOMsQuery:
    page: int = 1
    page_size: int = 10
    category: str | None = None


@dataclass(frozen=True)
class ListUOMsResult:
    uoms: list[UnitOfMeasure]
    total: int
    filter: UOMListFilter


class GetUOMHandler:
    """Handles GetUOM. A malformed code never reaches the repository."""

    def __init__(self, repo: UOMRepository):
        self.repo = repo

    async def handle(self, query: GetUOMQuery) -> UnitOfMeasure:
        code = UOMCode.parse(query.uom_code)
        return await self.repo.get_by_code(code)


class ListUOMsHandler:
    """Handles ListUOMs. Returns the repository page and total unchanged."""

    def __init__(self, repo: UOMRepository):
        self.repo = repo

    async def handle(self, query: ListUOMsQuery) -> ListUOMsResult:
        category = (
            UOMCategory.parse(query.category) if query.category is not None else None
        )
        list_filter = UOMListFilter(
            page=query.page, page_size=query.page_size, category=category,
        )
        uoms, total = await self.repo.list(list_filter)
        return ListUOMsResult(uoms=uoms, total=total, filter=list_filter)
