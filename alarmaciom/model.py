"""Alarm records, the in-memory alarm book and the configuration file."""

from __future__ import annotations

import os
import re
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, field
from pathlib import Path

MAX_ALARMS = 100
MAX_NAME = 64
MAX_TIME = 6

CONFIG_DIR = Path(".config") / "alarmaciom"
CONFIG_FILE_NAME = ".alarma.config"

_INT = r"\s*([+-]?\d+)"
_RECORD = re.compile(
    _INT
    + r",([^,]{1,%d}),([^,]{1,%d})," % (MAX_NAME - 1, MAX_TIME - 1)
    + _INT
    + ("," + _INT) * 7
    + r"\s*"
)


class AlarmError(Exception):
    """Base class for alarm book errors."""


class AlarmLimitError(AlarmError):
    """Raised when the alarm book cannot hold another alarm."""


class AlarmNotFoundError(AlarmError, LookupError):
    """Raised when no alarm has the requested id."""


def _clip_name(name: str) -> str:
    return name[: MAX_NAME - 1]


def _clip_time(time: str) -> str:
    return time[: MAX_TIME - 1]


def _normalise_days(days: Iterable[object]) -> tuple[bool, ...]:
    result = tuple(bool(day) for day in days)
    if len(result) != 7:
        raise ValueError("days must hold exactly 7 entries, Sunday first")
    return result


@dataclass
class Alarm:
    """One alarm: a name, an HH:MM time, an on/off flag and weekdays (Sunday first)."""

    id: int
    name: str
    time: str
    active: bool = True
    days: tuple[bool, ...] = field(default=(False,) * 7)

    def __post_init__(self) -> None:
        self.days = _normalise_days(self.days)
        self.active = bool(self.active)

    def is_repeating(self) -> bool:
        """True when at least one weekday is marked."""
        return any(self.days)

    def rings_on(self, weekday: int) -> bool:
        """Whether the alarm may ring on a weekday numbered 0=Sunday .. 6=Saturday."""
        return not self.is_repeating() or self.days[weekday]

    def to_line(self) -> str:
        """The alarm as one configuration file record, without the newline."""
        fields = [str(self.id), self.name, self.time, str(int(self.active))]
        fields.extend(str(int(day)) for day in self.days)
        return ",".join(fields)

    @classmethod
    def from_line(cls, line: str) -> Alarm:
        """Parse one configuration file record; raise ValueError if it is malformed."""
        match = _RECORD.fullmatch(line)
        if match is None:
            raise ValueError(f"malformed alarm record: {line!r}")
        return cls._from_match(match)

    @classmethod
    def _from_match(cls, match: re.Match[str]) -> Alarm:
        groups = match.groups()
        return cls(
            id=int(groups[0]),
            name=groups[1],
            time=groups[2],
            active=int(groups[3]) != 0,
            days=tuple(int(value) != 0 for value in groups[4:]),
        )


class AlarmBook:
    """An ordered collection of alarms with a fixed capacity."""

    def __init__(self, alarms: Iterable[Alarm] = (), limit: int = MAX_ALARMS) -> None:
        self.limit = limit
        self._alarms: list[Alarm] = list(alarms)[:limit]

    def add(self, name: str, time: str, days: Sequence[object]) -> Alarm:
        """Append a new active alarm and return it."""
        if len(self._alarms) >= self.limit:
            raise AlarmLimitError(f"no room for more than {self.limit} alarms")
        new_id = self._alarms[-1].id + 1 if self._alarms else 1
        alarm = Alarm(new_id, _clip_name(name), _clip_time(time), True, tuple(days))
        self._alarms.append(alarm)
        return alarm

    def update(
        self,
        alarm_id: int,
        name: str | None,
        time: str | None,
        active: bool,
        days: Sequence[object] | None,
    ) -> Alarm:
        """Change an alarm; None for name, time or days leaves that field as it is."""
        alarm = self.find(alarm_id)
        if alarm is None:
            raise AlarmNotFoundError(alarm_id)
        if name is not None:
            alarm.name = _clip_name(name)
        if time is not None:
            alarm.time = _clip_time(time)
        alarm.active = bool(active)
        if days is not None:
            alarm.days = _normalise_days(days)
        return alarm

    def remove(self, alarm_id: int) -> Alarm:
        """Remove the alarm with the given id and return it."""
        for position, alarm in enumerate(self._alarms):
            if alarm.id == alarm_id:
                return self._alarms.pop(position)
        raise AlarmNotFoundError(alarm_id)

    def find(self, alarm_id: int) -> Alarm | None:
        """The alarm with the given id, or None."""
        return next((alarm for alarm in self._alarms if alarm.id == alarm_id), None)

    def __iter__(self) -> Iterator[Alarm]:
        return iter(self._alarms)

    def __len__(self) -> int:
        return len(self._alarms)


def default_config_path(home: str | os.PathLike[str] | None = None) -> Path:
    """Where alarms are stored for the given (or current) home directory."""
    if home is None:
        home = os.environ.get("HOME") or Path.home()
    return Path(home) / CONFIG_DIR / CONFIG_FILE_NAME


def load_alarms(
    path: str | os.PathLike[str] | None = None, limit: int = MAX_ALARMS
) -> list[Alarm]:
    """Read alarms until the first malformed record; a missing file gives none."""
    target = Path(path) if path is not None else default_config_path()
    try:
        text = target.read_text(encoding="utf-8")
    except OSError:
        return []
    alarms: list[Alarm] = []
    position = 0
    while len(alarms) < limit:
        match = _RECORD.match(text, position)
        if match is None:
            break
        alarms.append(Alarm._from_match(match))
        position = match.end()
    return alarms


def save_alarms(
    alarms: Iterable[Alarm], path: str | os.PathLike[str] | None = None
) -> None:
    """Write all alarms, one record per line, creating the directory if needed."""
    target = Path(path) if path is not None else default_config_path()
    target.parent.mkdir(mode=0o700, parents=True, exist_ok=True)
    with target.open("w", encoding="utf-8") as handle:
        for alarm in alarms:
            handle.write(alarm.to_line() + "\n")