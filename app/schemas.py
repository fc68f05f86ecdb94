"""Pydantic схемы для API"""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from app.history import SortDirection, SortKey
from app.measurements import MeasurementKind, ValidationErrorKind


class CalculationRecord(BaseModel):
    """One stored BMI calculation, as returned by the IMC backend"""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: int
    height: float = Field(..., alias="altura", description="Height in meters")
    weight: float = Field(..., alias="peso", description="Weight in kg")
    index: float = Field(..., alias="resultado", description="Computed BMI")
    category: str = Field(..., alias="categoria", description="Bajo peso / Normal / Sobrepeso / Obesidad")
    timestamp: datetime = Field(..., alias="createdAt")


class NormalizeInputRequest(BaseModel):
    text: str = ""


class NormalizeInputResponse(BaseModel):
    text: str


class ValidateInputRequest(BaseModel):
    text: str = ""
    kind: MeasurementKind


class ValidateInputResponse(BaseModel):
    """Outcome of validating one field; invalid input is not an HTTP error"""
    valid: bool
    value: Optional[float] = None
    error_kind: Optional[ValidationErrorKind] = None
    message: Optional[str] = None


class CalculateRequest(BaseModel):
    """Raw text of both form fields, exactly as typed"""
    altura: str = Field(default="", description="Height in meters, ',' or '.' separator")
    peso: str = Field(default="", description="Weight in kg, ',' or '.' separator")


class HistoryPageResponse(BaseModel):
    items: List[CalculationRecord]
    total_pages: int
    display_total_pages: int
    current_page: int
    page_size: int
    total_records: int


class SortStateResponse(BaseModel):
    key: SortKey
    direction: SortDirection


class EvolutionPointResponse(BaseModel):
    timestamp: datetime
    index: float
    weight: float


class CategorySummaryResponse(BaseModel):
    name: str
    count: int
    average_index: float
    share: float = Field(..., description="Percent of all records")


class DashboardResponse(BaseModel):
    total_records: int
    last_index: Optional[float] = None
    most_frequent_category: Optional[str] = None
    evolution: List[EvolutionPointResponse]
    categories: List[CategorySummaryResponse]
