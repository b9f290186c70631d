"""
Date duration helpers for the Offboarding Engine.

Whole-unit differences between two calendar dates. Years and months are
counted on the calendar (anniversaries), not by dividing elapsed days;
the day residue uses a fixed 30-day month.

All helpers return the difference ``b - a``: positive when ``b`` falls
after ``a``, negative (with the same magnitude) when it falls before.
"""

import calendar
from datetime import date, datetime
from typing import Union

DateLike = Union[date, datetime]

DAYS_PER_MONTH = 30


def _as_date(value: DateLike) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def _is_last_day_of_month(d: date) -> bool:
    return d.day == calendar.monthrange(d.year, d.month)[1]


def _ordered(a: DateLike, b: DateLike):
    """Return (earlier, later, sign) for the pair."""
    a, b = _as_date(a), _as_date(b)
    if b >= a:
        return a, b, 1
    return b, a, -1


def _signed(value: int, magnitude: int) -> int:
    return -magnitude if value < 0 else magnitude


def _months_between(earlier: date, later: date) -> int:
    months = (later.year - earlier.year) * 12 + (later.month - earlier.month)
    # The last month only counts once its anniversary day is reached. A
    # later date on the last day of a shorter month completes the month.
    # Unlike date-fns, Jan 31 -> Feb 28 of a leap year is still 0 months,
    # and 2020-02-29 -> 2021-02-28 is a full year since it is a month end.
    if later.day < earlier.day and not _is_last_day_of_month(later):
        months -= 1
    return months


def whole_months(a: DateLike, b: DateLike) -> int:
    """Number of full calendar months from ``a`` to ``b``."""
    earlier, later, sign = _ordered(a, b)
    return sign * _months_between(earlier, later)


def whole_years(a: DateLike, b: DateLike) -> int:
    """Number of full calendar years from ``a`` to ``b``."""
    months = whole_months(a, b)
    # Derived from the month count so years and months never disagree
    # around 29 February.
    return _signed(months, abs(months) // 12)


def whole_months_mod12(a: DateLike, b: DateLike) -> int:
    """Full months left over after the whole years, in ``0..11`` for ``b >= a``."""
    months = whole_months(a, b)
    return _signed(months, abs(months) % 12)


def whole_days(a: DateLike, b: DateLike) -> int:
    """Number of full days from ``a`` to ``b``."""
    return (_as_date(b) - _as_date(a)).days


def whole_days_mod30(a: DateLike, b: DateLike) -> int:
    """Day residue using a fixed 30-day month, in ``0..29`` for ``b >= a``."""
    days = whole_days(a, b)
    return _signed(days, abs(days) % DAYS_PER_MONTH)
