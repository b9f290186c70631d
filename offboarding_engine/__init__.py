"""
Offboarding Engine

Employee offboarding workflow: capture resignation details, walk the
department clearance checklist, and compute end-of-service entitlements.
"""

__version__ = "1.0.0"
__author__ = "Offboarding Engine Team"
__email__ = "team@example.com"

from .engine.checklist import ClearanceChecklist
from .engine.entitlements import (
    calculate_entitlements,
    compute_end_of_service_benefit,
    compute_service_duration,
    compute_total_entitlement,
    compute_vacation_compensation,
)
from .models import WorkflowStage
from .workflows.offboarding import OffboardingWorkflow

__all__ = [
    "ClearanceChecklist",
    "OffboardingWorkflow",
    "WorkflowStage",
    "calculate_entitlements",
    "compute_end_of_service_benefit",
    "compute_service_duration",
    "compute_total_entitlement",
    "compute_vacation_compensation",
]
