"""
Core data models for the Offboarding Engine.

This module defines the Pydantic models used throughout the system
for the employee record, clearance checklist items, service duration
and end-of-service entitlement figures.
"""

from datetime import date, datetime, timezone
from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator


class WorkflowStage(str, Enum):
    """Stages of the offboarding workflow."""
    DATA_ENTRY = "DATA_ENTRY"
    CLEARANCE = "CLEARANCE"
    COMPLETED = "COMPLETED"


class EmployeeRecord(BaseModel):
    """Resignation details captured during data entry."""
    name: str = Field("", description="Full name of the employee")
    job_title: str = Field("", description="Job title or role")
    start_date: Optional[date] = Field(None, description="Employment start date")
    resignation_date: Optional[date] = Field(None, description="Date the resignation takes effect")
    reason: str = Field("", description="Optional reason for resigning")

    @field_validator('name', 'job_title', 'reason', mode='before')
    @classmethod
    def blank_if_missing(cls, v: Any) -> Any:
        return "" if v is None else v


class ServiceDuration(BaseModel):
    """Length of service in whole years, residual months and decimal years."""
    years: int = 0
    months: int = 0

    @computed_field
    @property
    def decimal_years(self) -> float:
        return self.years + self.months / 12


def _non_negative_number(v: Any) -> float:
    """Coerce user input to a float, treating blanks, junk and negatives as zero."""
    if v is None or v == "":
        return 0.0
    try:
        value = float(v)
    except (TypeError, ValueError):
        return 0.0
    if value != value or value < 0:  # NaN or negative
        return 0.0
    return value


class FinancialInputs(BaseModel):
    """Inputs to the entitlement calculator."""
    salary: float = Field(0.0, description="Monthly salary")
    start_date: date = Field(..., description="Service start date used for the calculation")
    vacation_days: float = Field(0.0, description="Unused vacation days")

    @field_validator('salary', 'vacation_days', mode='before')
    @classmethod
    def coerce_amount(cls, v: Any) -> float:
        return _non_negative_number(v)


class EntitlementResult(BaseModel):
    """Monetary end-of-service entitlements."""
    end_of_service_benefit: float = 0.0
    vacation_compensation: float = 0.0
    total: float = 0.0


class ClearanceItem(BaseModel):
    """A single department sign-off on the clearance checklist."""
    model_config = ConfigDict(validate_assignment=True)

    id: str = Field(..., description="Stable item identifier")
    title: str
    department: str = Field(..., description="Department responsible for the sign-off")
    completed: bool = False
    signature: str = ""
    comments: Optional[str] = None

    @property
    def is_cleared(self) -> bool:
        """Whether the item is both ticked off and signed."""
        return self.completed and len(self.signature) > 0


class TransitionRecord(BaseModel):
    """Record of a single stage change in the workflow."""
    from_stage: WorkflowStage
    to_stage: WorkflowStage
    action: str = Field(..., description="Workflow operation that caused the change")
    occurred_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class OffboardingSummary(BaseModel):
    """Read-only snapshot of a workflow, used for display and reporting."""
    workflow_id: str
    stage: WorkflowStage
    employee: EmployeeRecord
    service_duration: ServiceDuration
    service_duration_text: str = ""
    clearance_items: List[ClearanceItem] = Field(default_factory=list)
    clearance_complete: bool = False
    clearance_requested_on: Optional[date] = None
    entitlements: Optional[EntitlementResult] = None


# Type aliases for convenience
ClearanceItems = List[ClearanceItem]
TransitionHistory = List[TransitionRecord]
