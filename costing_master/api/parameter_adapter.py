"""Parameter Request Handler — boundary adapter between Parameter schemas and handlers.

Invariants:
    - Never raises for domain or infrastructure failures: every outcome is an envelope
    - Every handler call runs under the configured deadline
    - Absent optionals (uom, min/max, description) stay None end to end; an empty
      uom string is treated as absent
"""

from costing_master.api.response_formatter import ResponseFormatter, format_rfc3339
from costing_master.core.parameter import Parameter
from costing_master.schemas.envelope import AuditInfo, EmptyResponse
from costing_master.schemas.enum_mapping import (
    DATA_TYPE_MAPPING, PARAMETER_CATEGORY_MAPPING,
)
from costing_master.schemas.parameter import (
    CreateParameterRequest, DeleteParameterRequest, GetParameterRequest,
    ListParametersRequest, ListParametersResponse, ParameterData,
    ParameterResponse, UpdateParameterRequest,
)
from costing_master.services.deadline import run_with_deadline
from costing_master.services.parameter_commands import (
    CreateParameterCommand, CreateParameterHandler, DeleteParameterCommand,
    DeleteParameterHandler, UpdateParameterCommand, UpdateParameterHandler,
)
from costing_master.services.parameter_queries import (
    GetParameterHandler, GetParameterQuery, ListParametersHandler,
    ListParametersQuery,
)


def to_parameter_data(parameter: Parameter) -> ParameterData:
    return ParameterData(
        parameter_code=parameter.code.value,
        parameter_name=parameter.name,
        parameter_category=PARAMETER_CATEGORY_MAPPING.to_wire(
            parameter.category.value,
        ),
        data_type=DATA_TYPE_MAPPING.to_wire(parameter.data_type.value),
        uom=parameter.uom,
        min_value=parameter.min_value,
        max_value=parameter.max_value,
        allowed_values=parameter.allowed_values,
        is_mandatory=parameter.is_mandatory,
        description=parameter.description,
        is_active=parameter.is_active,
        audit=AuditInfo(
            created_at=format_rfc3339(parameter.created_at),
            created_by=parameter.created_by,
            updated_at=format_rfc3339(parameter.updated_at),
            updated_by=parameter.updated_by,
        ),
    )


class ParameterRequestHandler:
    """Serves the five Parameter operations."""

    def __init__(
        self,
        create_handler: CreateParameterHandler,
        update_handler: UpdateParameterHandler,
        delete_handler: DeleteParameterHandler,
        get_handler: GetParameterHandler,
        list_handler: ListParametersHandler,
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

    async def create_parameter(
        self, req: CreateParameterRequest,
    ) -> ParameterResponse:
        cmd = CreateParameterCommand(
            parameter_code=req.parameter_code,
            parameter_name=req.parameter_name,
            category=PARAMETER_CATEGORY_MAPPING.to_domain(req.parameter_category),
            data_type=DATA_TYPE_MAPPING.to_domain(req.data_type),
            created_by=self.actor,
            uom=req.uom or None,
            min_value=req.min_value,
            max_value=req.max_value,
            allowed_values=list(req.allowed_values),
            is_mandatory=req.is_mandatory,
            description=req.description,
        )
        try:
            parameter = await run_with_deadline(
                "CreateParameter", self.create_handler.handle(cmd),
                self.timeout_seconds,
            )
        except Exception as e:
            return ParameterResponse(
                base=self.formatter.from_error(e, "CreateParameter"),
            )
        return ParameterResponse(
            base=self.formatter.created("Parameter created successfully"),
            data=to_parameter_data(parameter),
        )

    async def get_parameter(self, req: GetParameterRequest) -> ParameterResponse:
        query = GetParameterQuery(parameter_code=req.parameter_code)
        try:
            parameter = await run_with_deadline(
                "GetParameter", self.get_handler.handle(query),
                self.timeout_seconds,
            )
        except Exception as e:
            return ParameterResponse(
                base=self.formatter.from_error(e, "GetParameter"),
            )
        return ParameterResponse(
            base=self.formatter.success("Parameter retrieved successfully"),
            data=to_parameter_data(parameter),
        )

    async def list_parameters(
        self, req: ListParametersRequest,
    ) -> ListParametersResponse:
        category = None
        if req.category is not None:
            category = PARAMETER_CATEGORY_MAPPING.to_domain(req.category) or None
        query = ListParametersQuery(
            page=req.page, page_size=req.page_size,
            category=category, is_active=req.is_active,
        )
        try:
            result = await run_with_deadline(
                "ListParameters", self.list_handler.handle(query),
                self.timeout_seconds,
            )
        except Exception as e:
            return ListParametersResponse(
                base=self.formatter.from_error(e, "ListParameters"),
            )
        return ListParametersResponse(
            base=self.formatter.success("Parameters retrieved successfully"),
            data=[to_parameter_data(p) for p in result.parameters],
            pagination=self.formatter.pagination(result.filter, result.total),
        )

    async def update_parameter(
        self, req: UpdateParameterRequest,
    ) -> ParameterResponse:
        cmd = UpdateParameterCommand(
            parameter_code=req.parameter_code,
            parameter_name=req.parameter_name,
            category=PARAMETER_CATEGORY_MAPPING.to_domain(req.parameter_category),
            data_type=DATA_TYPE_MAPPING.to_domain(req.data_type),
            updated_by=self.actor,
            uom=req.uom or None,
            min_value=req.min_value,
            max_value=req.max_value,
            allowed_values=list(req.allowed_values),
            is_mandatory=req.is_mandatory,
            description=req.description,
            is_active=req.is_active,
        )
        try:
            parameter = await run_with_deadline(
                "UpdateParameter", self.update_handler.handle(cmd),
                self.timeout_seconds,
            )
        except Exception as e:
            return ParameterResponse(
                base=self.formatter.from_error(e, "UpdateParameter"),
            )
        return ParameterResponse(
            base=self.formatter.success("Parameter updated successfully"),
            data=to_parameter_data(parameter),
        )

    async def delete_parameter(
        self, req: DeleteParameterRequest,
    ) -> EmptyResponse:
        cmd = DeleteParameterCommand(parameter_code=req.parameter_code)
        try:
            await run_with_deadline(
                "DeleteParameter", self.delete_handler.handle(cmd),
                self.timeout_seconds,
            )
        except Exception as e:
            return EmptyResponse(
                base=self.formatter.from_error(e, "DeleteParameter"),
            )
        return EmptyResponse(
            base=self.formatter.success("Parameter deleted successfully"),
        )
