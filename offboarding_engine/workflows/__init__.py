"""
Workflows Package for the Offboarding Engine.

This package provides the offboarding workflow state machine and
its helper functions.
"""

from .helpers import (
    create_offboarding_report,
    format_amount,
    format_date,
    format_service_duration,
    validate_resignation_fields,
)
from .offboarding import OffboardingWorkflow

__all__ = [
    "OffboardingWorkflow",
    "validate_resignation_fields",
    "format_service_duration",
    "format_date",
    "format_amount",
    "create_offboarding_report",
]
