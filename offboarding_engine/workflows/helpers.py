"""
Workflow Helper Functions for the Offboarding Engine.

Utility functions for workflow processing, including resignation field
validation, service duration text and report building.
"""

import logging
from datetime import date
from typing import Any, Dict, Optional

from ..engine.date_math import whole_days_mod30, whole_months_mod12, whole_years
from ..models import EmployeeRecord, OffboardingSummary

logger = logging.getLogger(__name__)

REQUIRED_FIELD_MESSAGES = {
    "name": "Name is required",
    "job_title": "Job title is required",
    "resignation_date": "Resignation date is required",
}


def validate_resignation_fields(fields: Dict[str, Any]) -> Dict[str, str]:
    """
    Validate submitted resignation details.

    Args:
        fields: Field values keyed by EmployeeRecord field name

    Returns:
        Dictionary of field name to error message (empty if valid)
    """
    errors = {}

    name = fields.get("name") or ""
    if not name.strip():
        errors["name"] = REQUIRED_FIELD_MESSAGES["name"]

    job_title = fields.get("job_title") or ""
    if not job_title.strip():
        errors["job_title"] = REQUIRED_FIELD_MESSAGES["job_title"]

    if fields.get("resignation_date") is None:
        errors["resignation_date"] = REQUIRED_FIELD_MESSAGES["resignation_date"]

    return errors


def format_service_duration(start_date: Optional[date], end_date: Optional[date]) -> str:
    """
    Format the service duration as text, e.g. ``"3 years 2 months 14 days"``.

    Years are shown only when non-zero; months when non-zero or there are
    no whole years; days when non-zero or there are neither whole years
    nor months.

    Args:
        start_date: Service start date
        end_date: Service end date

    Returns:
        Duration text, or an empty string when either date is missing
    """
    if start_date is None or end_date is None:
        return ""

    years = whole_years(start_date, end_date)
    months = whole_months_mod12(start_date, end_date)
    days = whole_days_mod30(start_date, end_date)

    parts = []
    if years > 0:
        parts.append(f"{years} {'year' if years == 1 else 'years'}")
    if months > 0 or years == 0:
        parts.append(f"{months} {'month' if months == 1 else 'months'}")
    if days > 0 or (years == 0 and months == 0):
        parts.append(f"{days} {'day' if days == 1 else 'days'}")

    return " ".join(parts)


def format_date(value: Optional[date], date_format: str = "%d/%m/%Y") -> str:
    """Format an optional date for display."""
    if value is None:
        return "N/A"
    return value.strftime(date_format)


def format_amount(amount: float, currency: str = "SAR") -> str:
    """Format a monetary amount with two decimals and thousands separators."""
    return f"{amount:,.2f} {currency}"


def describe_employee(record: EmployeeRecord) -> str:
    """One-line description of an employee record for log messages."""
    return f"{record.name.strip() or '<unnamed>'} ({record.job_title.strip() or 'no title'})"


def create_offboarding_report(summary: OffboardingSummary) -> Dict[str, Any]:
    """
    Create a flat report of an offboarding workflow for display or export.

    Args:
        summary: OffboardingSummary snapshot

    Returns:
        Dictionary with the report fields
    """
    cleared = len([i for i in summary.clearance_items if i.is_cleared])
    total = len(summary.clearance_items)

    report = {
        "workflow_id": summary.workflow_id,
        "stage": summary.stage.value,
        "employee_name": summary.employee.name,
        "job_title": summary.employee.job_title,
        "start_date": summary.employee.start_date.isoformat() if summary.employee.start_date else None,
        "resignation_date": (summary.employee.resignation_date.isoformat()
                             if summary.employee.resignation_date else None),
        "reason": summary.employee.reason,
        "service_duration": summary.service_duration_text,
        "decimal_years": summary.service_duration.decimal_years,
        "clearance_requested_on": (summary.clearance_requested_on.isoformat()
                                   if summary.clearance_requested_on else None),
        "cleared_items": cleared,
        "pending_items": total - cleared,
        "clearance_complete": summary.clearance_complete,
        "sign_offs": [
            {"department": i.department, "title": i.title, "signature": i.signature}
            for i in summary.clearance_items if i.is_cleared
        ],
    }

    if summary.entitlements is not None:
        report["entitlements"] = summary.entitlements.model_dump()

    return report
