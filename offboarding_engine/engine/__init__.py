"""
Engine Package for the Offboarding Engine.

Date arithmetic, entitlement calculation and the clearance checklist.
"""

from .checklist import DEFAULT_CLEARANCE_CATALOG, ClearanceChecklist
from .date_math import (
    whole_days,
    whole_days_mod30,
    whole_months,
    whole_months_mod12,
    whole_years,
)
from .entitlements import (
    calculate_entitlements,
    compute_end_of_service_benefit,
    compute_service_duration,
    compute_total_entitlement,
    compute_vacation_compensation,
)

__all__ = [
    "ClearanceChecklist",
    "DEFAULT_CLEARANCE_CATALOG",
    "whole_years",
    "whole_months",
    "whole_months_mod12",
    "whole_days",
    "whole_days_mod30",
    "calculate_entitlements",
    "compute_service_duration",
    "compute_end_of_service_benefit",
    "compute_vacation_compensation",
    "compute_total_entitlement",
]
