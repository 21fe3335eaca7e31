"""
Schedule descriptor.

Turns the little the scheduler exposes about a job (its display name and
its upcoming run times) into a short human-readable label plus a detail
string. The result is for display only and is not authoritative.

Inference order, first match wins:
1. Name patterns - a literal, ordered table of substrings (case-sensitive)
2. Interval between the first two upcoming runs
3. ("Scheduled", "Custom schedule")

NOTE for maintainers: the name table is matched on raw substrings, so a
job named e.g. "cronjob-reporter" that actually runs daily is labelled
"Cron schedule". Observers rely on the exact labels; keep the table as is.
"""

from datetime import datetime, timedelta
from typing import Optional, Sequence, Tuple

ScheduleLabel = Tuple[str, str]

# Only checked when the name also contains "every" or "interval".
INTERVAL_NAME_PATTERNS: Tuple[Tuple[Tuple[str, ...], ScheduleLabel], ...] = (
    (("10s", "10-s"), ("Every 10 seconds", "Duration: 10s")),
    (("5s",), ("Every 5 seconds", "Duration: 5s")),
    (("minute",), ("Every minute", "Duration: 1m")),
)

NAME_PATTERNS: Tuple[Tuple[Tuple[str, ...], ScheduleLabel], ...] = (
    (("cron",), ("Cron schedule", "Cron: * * * * *")),
    (("daily",), ("Daily", "Daily schedule")),
    (("weekly",), ("Weekly", "Weekly: Mon, Wed, Fri")),
    (("random",), ("Random interval", "Random: 5-15s")),
    (("singleton",), ("Every 5 seconds (singleton)", "Duration: 5s, Mode: Singleton")),
    (("limited",), ("Every 7 seconds (limited)", "Duration: 7s, Max runs: 3")),
    (("parameter",), ("Every 12 seconds", "Duration: 12s")),
    (("context",), ("Every 8 seconds", "Duration: 8s")),
    (("one-time", "onetime"), ("One time only", "OneTime job")),
)

DEFAULT_LABEL: ScheduleLabel = ("Scheduled", "Custom schedule")


def _match(name: str, table) -> Optional[ScheduleLabel]:
    for needles, label in table:
        if any(needle in name for needle in needles):
            return label
    return None


def describe_from_name(name: str) -> Optional[ScheduleLabel]:
    """Look the job name up in the pattern table. Returns None on no match."""
    if not name:
        return None

    if "every" in name or "interval" in name:
        label = _match(name, INTERVAL_NAME_PATTERNS)
        if label:
            return label

    return _match(name, NAME_PATTERNS)


def describe_interval(interval: timedelta) -> ScheduleLabel:
    """
    Render an interval as ("Every N <unit>", "Duration: N<u>").

    Units are chosen by thresholds (<1m seconds, <1h minutes, <24h hours,
    otherwise days) and the count is truncated, not rounded.
    """
    if interval < timedelta(minutes=1):
        seconds = int(interval.total_seconds())
        return f"Every {seconds} seconds", f"Duration: {seconds}s"
    if interval < timedelta(hours=1):
        minutes = int(interval.total_seconds() // 60)
        return f"Every {minutes} minutes", f"Duration: {minutes}m"
    if interval < timedelta(hours=24):
        hours = int(interval.total_seconds() // 3600)
        return f"Every {hours} hours", f"Duration: {hours}h"
    days = int(interval.total_seconds() // 86400)
    return f"Every {days} days", f"Duration: {days}d"


def describe_schedule(name: str, next_runs: Sequence[datetime]) -> ScheduleLabel:
    """
    Infer (schedule, schedule_detail) for a job.

    Args:
        name: Job display name
        next_runs: Upcoming run times, soonest first

    Returns:
        Tuple of short label and detail string
    """
    label = describe_from_name(name)
    if label:
        return label

    if len(next_runs) >= 2:
        return describe_interval(next_runs[1] - next_runs[0])

    return DEFAULT_LABEL
