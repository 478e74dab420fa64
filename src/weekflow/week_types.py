"""Immutable result dataclasses returned by the week calculator."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta


@dataclass(frozen=True)
class WeekRange:
    """Monday-to-Sunday boundaries of a single week.

    Both fields are timezone-aware UTC datetimes at 00:00:00.
    """

    start: datetime
    end: datetime

    def contains(self, value: date | datetime) -> bool:
        """Return True when the calendar day of ``value`` falls inside the week.

        Datetimes are compared by their UTC calendar day; naive datetimes are
        treated as UTC.
        """
        if isinstance(value, datetime):
            if value.tzinfo is not None:
                value = value.astimezone(self.start.tzinfo)
            value = value.date()
        return self.start.date() <= value <= self.end.date()

    def days(self) -> list[date]:
        """Return the seven calendar days of the week, Monday first."""
        first = self.start.date()
        return [first + timedelta(days=offset) for offset in range(7)]

    def to_dict(self) -> dict[str, str]:
        return {"start": self.start.date().isoformat(), "end": self.end.date().isoformat()}


@dataclass(frozen=True)
class WeekInfo:
    """Week number together with the boundaries of the same week."""

    week_number: int
    start: datetime
    end: datetime

    @property
    def week_range(self) -> WeekRange:
        return WeekRange(start=self.start, end=self.end)

    def to_dict(self) -> dict[str, int | str]:
        return {"week_number": self.week_number, **self.week_range.to_dict()}
