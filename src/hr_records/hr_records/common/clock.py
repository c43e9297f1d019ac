from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Protocol


class Clock(Protocol):
    """Source of the current calendar date and wall-clock time of day."""

    def today(self) -> date:
        raise NotImplementedError

    def now_time(self) -> time:
        raise NotImplementedError


class SystemClock(Clock):
    def today(self) -> date:
        return date.today()

    def now_time(self) -> time:
        return datetime.now().time().replace(microsecond=0)


@dataclass
class FixedClock(Clock):
    """Clock pinned to a given moment. Tests move it with `set`."""

    moment: datetime

    def set(self, moment: datetime) -> None:
        self.moment = moment

    def today(self) -> date:
        return self.moment.date()

    def now_time(self) -> time:
        return self.moment.time().replace(microsecond=0)
