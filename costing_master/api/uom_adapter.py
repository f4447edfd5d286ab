"""UOM Request Handler — boundary adapter between UOM schemas and handlers.

Invariants:
    - Never raises for domain or infrastructure failures: every outcome is an envelope
    - Every handler call runs under the configured deadline
    - Wire enums are converted with UOM_CATEGORY_MAPPING in both directions
    - A list request with no category (or *_UNSPECIFIED) lists every category

Design Decisions:
    - Handlers injected, not built here: the adapter is testable with fakes
    - Exception caught at this boundary only; task cancellation (BaseException)
      still propagates
"""

from costing_master.api.response_formatter import ResponseFormatter, format_rfc3339
from costing_master.core.uom import UnitOfMeasure
from costing_master.schemas.envelope import AuditInfo, EmptyResponse
from costing_master.schemas.enum_mapping import UOM_CATEGORY_MAPPING
from costing_master.schemas.uom import (
    CreateUOMRequest, DeleteUOMRequest, GetUOMRequest, ListUOMsRequest,
    ListUOMsResponse, UOMData, UOMResponse, UpdateUOMRequest,
)
from costing_master.services.deadline import run_with_deadline
from costing_master.services.uom_commands import (
    CreateUOMCommand, CreateUOMHandler, DeleteUOMCommand, DeleteUOMHandler,
    UpdateUOMCommand, UpdateUOMHandler,
)
from costing_master.services.uom_queries import (
    GetUOMHandler, GetUOMQuery, ListUOMsHandler, ListUOMsQuery,
)


def to_uom_data(uom: UnitOfMeasure) -> UOMData:
    return UOMData(
        uom_code=uom.code.value,
        uom_name=uom.name,
        uom_category=UOM_CATEGORY_MAPPING.to_wire(uom.category.value),
        is_base_uom=uom.is_base_uom,
        audit=AuditInfo(
            created_at=format_rfc3339(uom.created_at),
            created_by=uom.created_by,
            updated_at=format_rfc3339(uom.updated_at),
            updated_by=uom.updated_by,
        ),
    )


class UOMRequestHandler:
    """Serves the five UOM operations."""

    def __init__(
        self,
        create_handler: CreateUOMHandler,
        update_handler: UpdateUOMHandler,
        delete_handler: DeleteUOMHandler,
        get_handler: GetUOMHandler,
        list_handler: ListUOMsHandler,
        formatter: ResponseFormatter,
        actor: str = "system",
        timeout_seconds: float | None = None,
    ):
        self.create_handler = create_handler
        self.update_handler = update_handler
        self.delete_handler = delete_handler
        self.get_handler = get_handler
        self.list_handler = list_handler
        self.formatter = formatter
        self.actor = actor
        self.timeout_seconds = timeout_seconds

    async def create_uom(self, req: CreateUOMRequest) -> UOMResponse:
        cmd = CreateUOMCommand(
            uom_code=req.uom_code,
            uom_name=req.uom_name,
            category=UOM_CATEGORY_MAPPING.to_domain(req.uom_category),
            is_base_uom=req.is_base_uom,
            created_by=self.actor,
        )
        try:
            uom = await run_with_deadline(
                "CreateUOM", self.create_handler.handle(cmd), self.timeout_seconds,
            )
        except Exception as e:
            return UOMResponse(base=self.formatter.from_error(e, "CreateUOM"))
        return UOMResponse(
            base=self.formatter.created("UOM created successfully"),
            data=to_uom_data(uom),
        )

    async def get_uom(self, req: GetUOMRequest) -> UOMResponse:
        query = GetUOMQuery(uom_code=req.uom_code)
        try:
            uom = await run_with_deadline(
                "GetUOM", self.get_handler.handle(query), self.timeout_seconds,
            )
        except Exception as e:
            return UOMResponse(base=self.formatter.from_error(e, "GetUOM"))
        return UOMResponse(
            base=self.formatter.success("UOM retrieved successfully"),
            data=to_uom_data(uom),
        )

    async def list_uoms(self, req: ListUOMsRequest) -> ListUOMsResponse:
        category = None
        if req.category is not None:
            category = UOM_CATEGORY_MAPPING.to_domain(req.category) or None
        query = ListUOMsQuery(
            page=req.page, page_size=req.page_size, category=category,
        )
        try:
            result = await run_with_deadline(
                "ListUOMs", self.list_handler.handle(query), self.timeout_seconds,
            )
        except Exception as e:
            return ListUOMsResponse(base=self.formatter.from_error(e, "ListUOMs"))
        return ListUOMsResponse(
            base=self.formatter.success("UOMs retrieved successfully"),
            data=[to_uom_data(u) for u in result.uoms],
            pagination=self.formatter.pagination(result.filter, result.total),
        )

    async def update_uom(self, req: UpdateUOMRequest) -> UOMResponse:
        cmd = UpdateUOMCommand(
            uom_code=req.uom_code,
            uom_name=req.uom_name,
            category=UOM_CATEGORY_MAPPING.to_domain(req.uom_category),
            is_base_uom=req.is_base_uom,
            updated_by=self.actor,
        )
        try:
            uom = await run_with_deadline(
                "UpdateUOM", self.update_handler.handle(cmd), self.timeout_seconds,
            )
        except Exception as e:
            return UOMResponse(base=self.formatter.from_error(e, "UpdateUOM"))
        return UOMResponse(
            base=self.formatter.success("UOM updated successfully"),
            data=to_uom_data(uom),
        )

    async def delete_uom(self, req: DeleteUOMRequest) -> EmptyResponse:
        cmd = DeleteUOMCommand(uom_code=req.uom_code)
        try:
            await run_with_deadline(
                "DeleteUOM", self.delete_handler.handle(cmd), self.timeout_seconds,
            )
        except Exception as e:
            return EmptyResponse(base=self.formatter.from_error(e, "DeleteUOM"))
        return EmptyResponse(base=self.formatter.success("UOM deleted successfully"))
