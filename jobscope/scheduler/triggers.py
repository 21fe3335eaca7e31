"""
Custom APScheduler triggers.

DailyAtTimeTrigger fires at a wall-clock time of day every N calendar days.
IntervalTrigger(days=N) adds a fixed N x 24h instead, which drifts by an
hour across DST changes.
"""

from datetime import date, datetime, time, timedelta
from typing import Optional

from apscheduler.triggers.base import BaseTrigger
from apscheduler.util import astimezone


class DailyAtTimeTrigger(BaseTrigger):
    """
    Fire at `at_time` on `start_date`, then every `interval_days` days.

    Dates are stepped on the calendar and each fire time is localized in
    `timezone`, so the time of day stays fixed across DST changes.
    """

    __slots__ = "interval_days", "at_time", "start_date", "timezone"

    def __init__(self, interval_days: int, at_time: time, start_date: date, timezone):
        if interval_days < 1:
            raise ValueError("interval_days must be at least 1")

        self.interval_days = interval_days
        self.at_time = at_time
        self.start_date = start_date
        self.timezone = astimezone(timezone)

    def _fire_time(self, day: date) -> datetime:
        naive = datetime.combine(day, self.at_time)
        # pytz zones need localize(); zoneinfo zones take tzinfo directly
        if hasattr(self.timezone, "localize"):
            return self.timezone.localize(naive)
        return naive.replace(tzinfo=self.timezone)

    def get_next_fire_time(
        self, previous_fire_time: Optional[datetime], now: datetime
    ) -> Optional[datetime]:
        if previous_fire_time is not None:
            day = previous_fire_time.astimezone(self.timezone).date()
            return self._fire_time(day + timedelta(days=self.interval_days))

        day = self.start_date
        today = now.astimezone(self.timezone).date()
        if today > day:
            elapsed = (today - day).days
            day += timedelta(days=elapsed - elapsed % self.interval_days)

        fire_time = self._fire_time(day)
        if fire_time < now:
            fire_time = self._fire_time(day + timedelta(days=self.interval_days))
        return fire_time

    def __getstate__(self):
        return {
            "version": 1,
            "interval_days": self.interval_days,
            "at_time": self.at_time,
            "start_date": self.start_date,
            "timezone": self.timezone,
        }

    def __setstate__(self, state):
        self.interval_days = state["interval_days"]
        self.at_time = state["at_time"]
        self.start_date = state["start_date"]
        self.timezone = state["timezone"]

    def __str__(self):
        return f"daily[every {self.interval_days} days at {self.at_time.isoformat()}]"

    def __repr__(self):
        return (
            f"<{self.__class__.__name__} (interval_days={self.interval_days}, "
            f"at_time='{self.at_time.isoformat()}', timezone='{self.timezone}')>"
        )
