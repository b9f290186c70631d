"""
Entitlement Calculator for the Offboarding Engine.

Derives length of service and the monetary end-of-service entitlements
(severance benefit and unused-vacation compensation) from salary, dates
and leave balance. All functions are pure.
"""

import logging
from datetime import date
from typing import Optional

from ..models import EntitlementResult, FinancialInputs, ServiceDuration
from .date_math import whole_months_mod12, whole_years

logger = logging.getLogger(__name__)

# Service below this many years earns no end-of-service benefit
MINIMUM_SERVICE_YEARS = 2
# Half-salary rate up to and including this many years, full rate beyond
TIER_THRESHOLD_YEARS = 5
DAYS_PER_SALARY_MONTH = 30


def compute_service_duration(start: Optional[date], end: Optional[date]) -> ServiceDuration:
    """
    Compute the length of service between two dates.

    Args:
        start: Service start date
        end: Service end (resignation) date

    Returns:
        ServiceDuration, zero when either date is missing
    """
    if start is None or end is None:
        return ServiceDuration()

    if end < start:
        logger.warning(f"Service end date {end} precedes start date {start}")

    return ServiceDuration(
        years=whole_years(start, end),
        months=whole_months_mod12(start, end),
    )


def compute_end_of_service_benefit(decimal_years: float, salary: float) -> float:
    """
    Compute the tiered end-of-service benefit.

    - under 2 years: nothing
    - 2 to 5 years inclusive: half a month's salary per year
    - over 5 years: a full month's salary per year for the whole service,
      including the first five years

    The jump at exactly five years is the policy as written and is kept.
    """
    if decimal_years < MINIMUM_SERVICE_YEARS:
        return 0.0
    if decimal_years <= TIER_THRESHOLD_YEARS:
        return (salary / 2) * decimal_years

    first_five_years = TIER_THRESHOLD_YEARS * salary
    remaining_years = (decimal_years - TIER_THRESHOLD_YEARS) * salary
    return first_five_years + remaining_years


def compute_vacation_compensation(salary: float, vacation_days: float) -> float:
    """Pay out unused vacation days at a daily rate of salary / 30."""
    daily_rate = salary / DAYS_PER_SALARY_MONTH
    return daily_rate * vacation_days


def compute_total_entitlement(decimal_years: float, salary: float, vacation_days: float) -> float:
    """Sum of the end-of-service benefit and vacation compensation."""
    return (compute_end_of_service_benefit(decimal_years, salary)
            + compute_vacation_compensation(salary, vacation_days))


def calculate_entitlements(inputs: FinancialInputs, end_date: Optional[date]) -> EntitlementResult:
    """
    Compute the full entitlement breakdown for a set of financial inputs.

    Args:
        inputs: Salary, service start date and unused vacation days
        end_date: Service end date; no service is counted when missing

    Returns:
        EntitlementResult with each component and the total
    """
    duration = compute_service_duration(inputs.start_date, end_date)
    benefit = compute_end_of_service_benefit(duration.decimal_years, inputs.salary)
    vacation = compute_vacation_compensation(inputs.salary, inputs.vacation_days)

    return EntitlementResult(
        end_of_service_benefit=benefit,
        vacation_compensation=vacation,
        total=benefit + vacation,
    )
