"""Reporting periods for weight history."""

import calendar
from datetime import datetime, timedelta
from enum import Enum


class TimePeriod(Enum):
    """Lookback windows offered for history and charts."""

    THREE_DAYS = "three_days"
    WEEK = "week"
    FIFTEEN_DAYS = "fifteen_days"
    MONTH = "month"
    THREE_MONTHS = "three_months"
    SIX_MONTHS = "six_months"
    YEAR = "year"

    @property
    def days(self) -> int:
        """Nominal length of the period in days."""
        return _DAYS[self]

    def start(self, now: datetime) -> datetime:
        """Return the start of the period ending at ``now``."""
        months = _CALENDAR_MONTHS.get(self)
        if months is None:
            return now - timedelta(days=self.days)
        return _subtract_months(now, months)

    def date_range(self, now: datetime) -> tuple[datetime, datetime]:
        """Return ``(start, now)``."""
        return self.start(now), now


_DAYS = {
    TimePeriod.THREE_DAYS: 3,
    TimePeriod.WEEK: 7,
    TimePeriod.FIFTEEN_DAYS: 15,
    TimePeriod.MONTH: 30,
    TimePeriod.THREE_MONTHS: 90,
    TimePeriod.SIX_MONTHS: 180,
    TimePeriod.YEAR: 365,
}

_CALENDAR_MONTHS = {
    TimePeriod.THREE_MONTHS: 3,
    TimePeriod.SIX_MONTHS: 6,
    TimePeriod.YEAR: 12,
}


def _subtract_months(moment: datetime, months: int) -> datetime:
    month_index = moment.year * 12 + (moment.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)
