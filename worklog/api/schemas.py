"""
Request and response models for the work log REST API.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional, List, Literal

from ..core.schema import parse_iso_datetime

ImpactLevel = Literal["low", "medium", "high", "very_high"]


class WorkLogCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    title: str
    description: str
    date: Optional[str] = None
    impact: str = ""
    impact_level: ImpactLevel = Field("medium", alias="impactLevel")
    component: str = ""
    hours_spent: float = Field(0, ge=0, allow_inf_nan=False, alias="hoursSpent")
    issues: str = ""
    iterations: int = Field(0, ge=0)
    failures: str = ""
    metrics: str = ""
    images: List[str] = Field(default_factory=list)

    @field_validator('title')
    @classmethod
    def title_must_not_be_empty(cls, v):
        if not v.strip():
            raise ValueError('Title is required')
        return v

    @field_validator('description')
    @classmethod
    def description_must_not_be_empty(cls, v):
        if not v.strip():
            raise ValueError('Description is required')
        return v

    @field_validator('component')
    @classmethod
    def component_is_trimmed(cls, v):
        # Stored the same way as the component record it registers
        return v.strip()

    @field_validator('date')
    @classmethod
    def date_must_be_iso8601(cls, v):
        if v is not None and parse_iso_datetime(v) is None:
            raise ValueError('date must be an ISO-8601 timestamp')
        return v


class WorkLogUpdate(WorkLogCreate):
    """Partial update: every field optional, but an explicit null is rejected."""

    title: Optional[str] = None
    description: Optional[str] = None
    impact: Optional[str] = None
    impact_level: Optional[ImpactLevel] = Field(None, alias="impactLevel")
    component: Optional[str] = None
    hours_spent: Optional[float] = Field(None, ge=0, allow_inf_nan=False, alias="hoursSpent")
    issues: Optional[str] = None
    iterations: Optional[int] = Field(None, ge=0)
    failures: Optional[str] = None
    metrics: Optional[str] = None
    images: Optional[List[str]] = None

    @field_validator('*', mode='before')
    @classmethod
    def field_must_not_be_null(cls, v, info):
        if v is None:
            name = cls.model_fields[info.field_name].alias or info.field_name
            raise ValueError(f'{name} cannot be null')
        return v


class ComponentCreate(BaseModel):
    name: str

    @field_validator('name')
    @classmethod
    def name_must_not_be_empty(cls, v):
        if not v.strip():
            raise ValueError('Name is required')
        return v.strip()


class WorkLogResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    date: str
    title: str
    description: str
    impact: str
    impact_level: ImpactLevel = Field(alias="impactLevel")
    component: str
    hours_spent: float = Field(alias="hoursSpent")
    issues: str
    iterations: int
    failures: str
    metrics: str
    images: List[str]


class ComponentResponse(BaseModel):
    id: str
    name: str


class UploadResponse(BaseModel):
    url: str


class HealthResponse(BaseModel):
    status: str
    version: str
    worklog_count: int
    component_count: int


class ErrorResponse(BaseModel):
    message: str


class ValidationErrorResponse(BaseModel):
    message: str
    field: Optional[str] = None
