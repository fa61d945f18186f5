from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

ColumnType = Literal["categorical", "numerical", "temporal", "unknown"]
ChartType = Literal["bar", "line", "pie", "area"]
AggregationType = Literal["sum", "average", "count"]

FilterValue = Union[str, int, float]
FilterSet = Dict[str, List[FilterValue]]


class ColumnSchema(BaseModel):
    name: str
    type: ColumnType
    unique_values: Optional[List[str]] = None
    min: Optional[float] = None
    max: Optional[float] = None
    sample_values: List[Any] = Field(default_factory=list)


class ChartSpec(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    type: ChartType
    title: str
    label_column: str
    value_column: str
    aggregation: AggregationType


class ChartDataPoint(BaseModel):
    label: str
    value: float


class UploadResponse(BaseModel):
    dataset_id: str = Field(..., description="Unique identifier for the uploaded dataset")
    file_name: str
    row_count: int
    columns: List[ColumnSchema]


class SchemaOverrideRequest(BaseModel):
    overrides: Dict[str, ColumnType] = Field(default_factory=dict)


class ChartUpdateRequest(BaseModel):
    type: Optional[ChartType] = None
    aggregation: Optional[AggregationType] = None


class FilterRequest(BaseModel):
    filters: FilterSet = Field(default_factory=dict)


class DashboardSummary(BaseModel):
    total_rows: int
    filtered_rows: int
    column_count: int
    numerical_count: int
    value_column: Optional[str] = None
    value_total: float = 0.0
    value_average: float = 0.0
    category_column: Optional[str] = None
    unique_categories: int = 0
    is_filtered: bool = False


class ChartPayload(BaseModel):
    spec: ChartSpec
    color: str
    data: List[ChartDataPoint]


class DashboardResponse(BaseModel):
    file_name: str
    summary: DashboardSummary
    charts: List[ChartPayload]
    empty_reason: Optional[str] = None


class SaveDashboardRequest(BaseModel):
    dataset_id: str
    owner_id: str
    name: str = Field(..., min_length=1)
    is_public: bool = False


class UpdateDashboardRequest(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    is_public: Optional[bool] = None


class DashboardInfo(BaseModel):
    id: str
    owner_id: str
    name: str
    file_name: str
    row_count: int
    is_public: bool
    share_id: Optional[str] = None
    created_at: datetime


class LoadedDashboardResponse(BaseModel):
    dataset_id: str
    dashboard: DashboardInfo
    columns: List[ColumnSchema]
