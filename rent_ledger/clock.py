"""Clock abstraction used to decide which rent months have elapsed."""

from datetime import datetime
from typing import Protocol

from rent_ledger.billing.months import add_months


class Clock(Protocol):
    """Anything that can report the current local time."""

    def now(self) -> datetime: ...


class SystemClock:
    """Wall-clock time."""

    def now(self) -> datetime:
        return datetime.now()


class FixedClock:
    """Manually driven clock for tests and replays.

    Parameters
    ----------
    moment : datetime
        Initial value returned by ``now()``.
    """

    def __init__(self, moment: datetime) -> None:
        self._moment = moment

    def now(self) -> datetime:
        return self._moment

    def set(self, moment: datetime) -> None:
        self._moment = moment

    def advance_months(self, months: int = 1) -> datetime:
        """Move the clock forward by whole calendar months."""
        self._moment = add_months(self._moment, months)
        return self._moment
