"""
Clock -- injectable source of "now" and "today".

Salary cycle status, default posting dates and invoice issue dates all
depend on the current date.  Services receive a Clock in their constructor
and never call ``datetime.now()`` or ``date.today()`` themselves, so every
cycle-boundary decision can be replayed with a DeterministicClock.

``today()`` is the calendar date in the clock's business timezone.  For an
office in India that is IST: a payment entered at 01:00 IST belongs to
that day even though it is still the previous day in UTC.
"""

from abc import ABC, abstractmethod
from datetime import date, datetime, time, timedelta, timezone, tzinfo

IST = timezone(timedelta(hours=5, minutes=30), "IST")


class Clock(ABC):
    """
    Abstract clock.

    Guarantees:
        - ``now()`` is timezone-aware.
        - ``today()`` is ``now()`` converted to ``business_tz``, as a date.
    """

    business_tz: tzinfo = timezone.utc

    @abstractmethod
    def now(self) -> datetime:
        ...

    def today(self) -> date:
        return self.now().astimezone(self.business_tz).date()


class SystemClock(Clock):
    """Wall-clock time."""

    def __init__(self, business_tz: tzinfo = timezone.utc):
        self.business_tz = business_tz

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class DeterministicClock(Clock):
    """
    Clock frozen at a given instant until moved explicitly.

    A plain ``date`` is taken as midnight of that day in ``business_tz``.
    """

    def __init__(
        self,
        at: date | datetime | None = None,
        business_tz: tzinfo = timezone.utc,
    ):
        self.business_tz = business_tz
        self._now = self._coerce(at or datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc))

    def _coerce(self, at: date | datetime) -> datetime:
        if isinstance(at, datetime):
            return at if at.tzinfo else at.replace(tzinfo=self.business_tz)
        return datetime.combine(at, time(), tzinfo=self.business_tz)

    def now(self) -> datetime:
        return self._now

    def set_time(self, at: date | datetime) -> None:
        self._now = self._coerce(at)

    def advance(self, days: int = 0, seconds: int = 0) -> None:
        """Move forward, e.g. ``advance(days=31)`` to the next salary cycle."""
        self._now += timedelta(days=days, seconds=seconds)
