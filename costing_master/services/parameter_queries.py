"""Parameter Queries — get and list handlers for parameters."""

from dataclasses import dataclass

from costing_master.core.list_filter import ParameterListFilter
from costing_master.core.parameter import Parameter
from costing_master.core.repository_protocols import ParameterRepository
from costing_master.core.value_objects import ParameterCategory, ParameterCode


@dataclass(frozen=True)
class GetParameterQuery:
    parameter_code: str


@dataclass(frozen=True)
class ListParametersQuery:
    page: int = 1
    page_size: int = 10
    category: str | None = None
    is_active: bool | None = None


@dataclass(frozen=True)
class ListParametersResult:
    parameters: list[Parameter]
    total: int
    filter: ParameterListFilter


class GetParameterHandler:
    """Handles GetParameter."""

    def __init__(self, repo: ParameterRepository):
        self.repo = repo

    async def handle(self, query: GetParameterQuery) -> Parameter:
        code = ParameterCode.parse(query.parameter_code)
        return await self.repo.get_by_code(code)


class ListParametersHandler:
    """Handles ListParameters. Category validated only when given."""

    def __init__(self, repo: ParameterRepository):
        self.repo = repo

    async def handle(self, query: ListParametersQuery) -> ListParametersResult:
        category = (
            ParameterCategory.parse(query.category)
            if query.category is not None else None
        )
        list_filter = ParameterListFilter(
            page=query.page,
            page_size=query.page_size,
            category=category,
            is_active=query.is_active,
        )
        parameters, total = await self.repo.list(list_filter)
        return ListParametersResult(
            parameters=parameters, total=total, filter=list_filter,
        )
