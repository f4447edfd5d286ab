"""UOM Routes — HTTP gateway for the UOM service.

Invariants:
    - Domain outcomes travel in the envelope: these routes answer HTTP 200 (201 on a
      successful create) even when base.status_code reports 4xx/5xx
    - The path code wins over any uom_code in an update body
"""

from fastapi import APIRouter, Depends, Query, Response, status

from costing_master.api.dependencies import get_uom_request_handler
from costing_master.api.uom_adapter import UOMRequestHandler
from costing_master.schemas.envelope import EmptyResponse
from costing_master.schemas.enum_mapping import UOMCategoryWire
from costing_master.schemas.uom import (
    CreateUOMRequest, DeleteUOMRequest, GetUOMRequest, ListUOMsRequest,
    ListUOMsResponse, UOMResponse, UpdateUOMRequest,
)

router = APIRouter(prefix="/api/v1/uoms", tags=["uoms"])


@router.post("", response_model=UOMResponse)
async def create_uom(
    body: CreateUOMRequest,
    response: Response,
    handler: UOMRequestHandler = Depends(get_uom_request_handler),
):
    """Create a unit of measure."""
    result = await handler.create_uom(body)
    if result.base.is_success:
        response.status_code = status.HTTP_201_CREATED
    return result


@router.get("", response_model=ListUOMsResponse)
async def list_uoms(
    page: int = Query(1),
    page_size: int = Query(10),
    category: UOMCategoryWire | None = Query(None),
    handler: UOMRequestHandler = Depends(get_uom_request_handler),
):
    """List units of measure, optionally filtered by category."""
    return await handler.list_uoms(
        ListUOMsRequest(page=page, page_size=page_size, category=category),
    )


@router.get("/{uom_code}", response_model=UOMResponse)
async def get_uom(
    uom_code: str,
    handler: UOMRequestHandler = Depends(get_uom_request_handler),
):
    return await handler.get_uom(GetUOMRequest(uom_code=uom_code))


@router.put("/{uom_code}", response_model=UOMResponse)
async def update_uom(
    uom_code: str,
    body: UpdateUOMRequest,
    handler: UOMRequestHandler = Depends(get_uom_request_handler),
):
    return await handler.update_uom(body.model_copy(update={"uom_code": uom_code}))


@router.delete("/{uom_code}", response_model=EmptyResponse)
async def delete_uom(
    uom_code: str,
    handler: UOMRequestHandler = Depends(get_uom_request_handler),
):
    return await handler.delete_uom(DeleteUOMRequest(uom_code=uom_code))
