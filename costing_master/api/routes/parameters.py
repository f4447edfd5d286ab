"""Parameter Routes — HTTP gateway for the Parameter service.

Invariants:
    - Same envelope-first status semantics as the UOM routes
    - is_active list filter is three-state: omitted lists both active and inactive
"""

from fastapi import APIRouter, Depends, Query, Response, status

from costing_master.api.dependencies import get_parameter_request_handler
from costing_master.api.parameter_adapter import ParameterRequestHandler
from costing_master.schemas.envelope import EmptyResponse
from costing_master.schemas.enum_mapping import ParameterCategoryWire
from costing_master.schemas.parameter import (
    CreateParameterRequest, DeleteParameterRequest, GetParameterRequest,
    ListParametersRequest, ListParametersResponse, ParameterResponse,
    UpdateParameterRequest,
)

router = APIRouter(prefix="/api/v1/parameters", tags=["parameters"])


@router.post("", response_model=ParameterResponse)
async def create_parameter(
    body: CreateParameterRequest,
    response: Response,
    handler: ParameterRequestHandler = Depends(get_parameter_request_handler),
):
    """Create a costing parameter."""
    result = await handler.create_parameter(body)
    if result.base.is_success:
        response.status_code = status.HTTP_201_CREATED
    return result


@router.get("", response_model=ListParametersResponse)
async def list_parameters(
    page: int = Query(1),
    page_size: int = Query(10),
    category: ParameterCategoryWire | None = Query(None),
    is_active: bool | None = Query(None),
    handler: ParameterRequestHandler = Depends(get_parameter_request_handler),
):
    """List parameters, optionally filtered by category and active flag."""
    return await handler.list_parameters(ListParametersRequest(
        page=page, page_size=page_size, category=category, is_active=is_active,
    ))


@router.get("/{parameter_code}", response_model=ParameterResponse)
async def get_parameter(
    parameter_code: str,
    handler: ParameterRequestHandler = Depends(get_parameter_request_handler),
):
    return await handler.get_parameter(
        GetParameterRequest(parameter_code=parameter_code),
    )


@router.put("/{parameter_code}", response_model=ParameterResponse)
async def update_parameter(
    parameter_code: str,
    body: UpdateParameterRequest,
    handler: ParameterRequestHandler = Depends(get_parameter_request_handler),
):
    return await handler.update_parameter(
        body.model_copy(update={"parameter_code": parameter_code}),
    )


@router.delete("/{parameter_code}", response_model=EmptyResponse)
async def delete_parameter(
    parameter_code: str,
    handler: ParameterRequestHandler = Depends(get_parameter_request_handler),
):
    return await handler.delete_parameter(
        DeleteParameterRequest(parameter_code=parameter_code),
    )
