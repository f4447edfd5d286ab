"""UOM Schemas — request and response messages for the UOM service.

Invariants:
    - Lengths mirror the mst_uom columns (code 20, name 100)
    - Code pattern and category membership are NOT checked here; the domain owns them
      so "kg" reaches the handler and fails as InvalidCodeError
"""

from pydantic import BaseModel, Field

from costing_master.schemas.envelope import AuditInfo, BaseResponse, PaginationMeta
from costing_master.schemas.enum_mapping import UOMCategoryWire


class CreateUOMRequest(BaseModel):
    uom_code: str = Field(min_length=1, max_length=20)
    uom_name: str = Field(min_length=1, max_length=100)
    uom_category: UOMCategoryWire = UOMCategoryWire.UNSPECIFIED
    is_base_uom: bool = False


class UpdateUOMRequest(BaseModel):
    uom_code: str = Field("", max_length=20)
    uom_name: str = Field(min_length=1, max_length=100)
    uom_category: UOMCategoryWire = UOMCategoryWire.UNSPECIFIED
    is_base_uom: bool = False


class GetUOMRequest(BaseModel):
    uom_code: str


class DeleteUOMRequest(BaseModel):
    uom_code: str


class ListUOMsRequest(BaseModel):
    page: int = 1
    page_size: int = 10
    category: UOMCategoryWire | None = None


class UOMData(BaseModel):
    uom_code: str
    uom_name: str
    uom_category: UOMCategoryWire
    is_base_uom: bool
    audit: AuditInfo


class UOMResponse(BaseModel):
    """Create / Get / Update response."""
    base: BaseResponse
    data: UOMData | None = None


class ListUOMsResponse(BaseModel):
    base: BaseResponse
    data: list[UOMData] = Field(default_factory=list)
    pagination: PaginationMeta | None = None
