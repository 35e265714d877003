"""Helper functions for analysing loaded datasets."""

from __future__ import annotations

import calendar
import math
from datetime import MAXYEAR, MINYEAR, datetime, timezone

from dateutil.relativedelta import relativedelta


def year_to_datetime(year: float) -> datetime:
    """
    Convert a fractional year (e.g., `1990.5`) to an UTC datetime.

    The whole part is the year (truncated toward zero) and the fractional
    part is interpreted as a fraction of the days in that year (taking
    leap years into account). The result has second precision and ignores
    leap seconds.

    Only years representable by `datetime` are supported, that is
    `1 <= year < 10000`.

    Raises:
        ValueError: if year is outside of the supported range.
    """
    if not MINYEAR <= year < MAXYEAR + 1:
        raise ValueError(f"year must be in [{MINYEAR}, {MAXYEAR + 1}), got: {year}")
    whole = math.trunc(year)
    days_in_year = 366 if calendar.isleap(whole) else 365
    day_float = (year - whole) * days_in_year
    days = math.floor(day_float)
    seconds = round((day_float - days) * 86400)
    start = datetime(whole, 1, 1, tzinfo=timezone.utc)
    return start + relativedelta(days=days, seconds=seconds)
