"""Clock formatting and deciding which alarms are due."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

from .model import Alarm

_LABEL_LIMIT = 127


def _now(moment: datetime | None) -> datetime:
    return moment if moment is not None else datetime.now()


def clock_text(moment: datetime | None = None) -> str:
    """The time of day as HH:MM:SS."""
    return _now(moment).strftime("%H:%M:%S")


def minute_text(moment: datetime | None = None) -> str:
    """The time of day as HH:MM, the form alarms are stored in."""
    return _now(moment).strftime("%H:%M")


def sunday_weekday(moment: datetime | None = None) -> int:
    """The weekday numbered 0=Sunday .. 6=Saturday."""
    return (_now(moment).weekday() + 1) % 7


def due_alarms(alarms: Iterable[Alarm], moment: datetime | None = None) -> list[Alarm]:
    """Active alarms set for this minute that ring on this weekday, in order."""
    current = _now(moment)
    hour_minute = minute_text(current)
    weekday = sunday_weekday(current)
    return [
        alarm
        for alarm in alarms
        if alarm.active and alarm.time == hour_minute and alarm.rings_on(weekday)
    ]


def list_label(alarm: Alarm) -> str:
    """The text shown for an alarm in the alarm list."""
    suffix = " [Activa]" if alarm.active else ""
    return f"{alarm.time}  |  {alarm.name}{suffix}"[:_LABEL_LIMIT]