"""Parameter Schemas — request and response messages for the Parameter service.

Invariants:
    - Lengths mirror the mst_parameter columns (code 50, name 200, uom 20)
    - Optional numeric bounds stay None when omitted (absent is not 0.0)
"""

from pydantic import BaseModel, Field

from costing_master.schemas.envelope import AuditInfo, BaseResponse, PaginationMeta
from costing_master.schemas.enum_mapping import DataTypeWire, ParameterCategoryWire


class CreateParameterRequest(BaseModel):
    parameter_code: str = Field(min_length=1, max_length=50)
    parameter_name: str = Field(min_length=1, max_length=200)
    parameter_category: ParameterCategoryWire = ParameterCategoryWire.UNSPECIFIED
    data_type: DataTypeWire = DataTypeWire.UNSPECIFIED
    uom: str | None = Field(None, max_length=20)
    min_value: float | None = None
    max_value: float | None = None
    allowed_values: list[str] = Field(default_factory=list)
    is_mandatory: bool = False
    description: str | None = Field(None, max_length=2000)


class UpdateParameterRequest(BaseModel):
    parameter_code: str = Field("", max_length=50)
    parameter_name: str = Field(min_length=1, max_length=200)
    parameter_category: ParameterCategoryWire = ParameterCategoryWire.UNSPECIFIED
    data_type: DataTypeWire = DataTypeWire.UNSPECIFIED
    uom: str | None = Field(None, max_length=20)
    min_value: float | None = None
    max_value: float | None = None
    allowed_values: list[str] = Field(default_factory=list)
    is_mandatory: bool = False
    description: str | None = Field(None, max_length=2000)
    is_active: bool = True


class GetParameterRequest(BaseModel):
    parameter_code: str


class DeleteParameterRequest(BaseModel):
    parameter_code: str


class ListParametersRequest(BaseModel):
    page: int = 1
    page_size: int = 10
    category: ParameterCategoryWire | None = None
    is_active: bool | None = None


class ParameterData(BaseModel):
    parameter_code: str
    parameter_name: str
    parameter_category: ParameterCategoryWire
    data_type: DataTypeWire
    uom: str | None = None
    min_value: float | None = None
    max_value: float | None = None
    allowed_values: list[str] = Field(default_factory=list)
    is_mandatory: bool
    description: str | None = None
    is_active: bool
    audit: AuditInfo


class ParameterResponse(BaseModel):
    """Create / Get / Update response."""
    base: BaseResponse
    data: ParameterData | None = None


class ListParametersResponse(BaseModel):
    base: BaseResponse
    data: list[ParameterData] = Field(default_factory=list)
    pagination: PaginationMeta | None = None
