# alarmaciom

A small desktop alarm clock built on Tk. It shows a digital clock, a list of
your alarms, and lets you add, edit and delete them. When an alarm's time
comes it rings until you dismiss the "¡Alarma!" message.

The window's texts are in Spanish.

## Installing and starting

```
pip install .
alarmaciom
```

The window needs the `tkinter` module of your Python installation (on some
systems a separate package such as `python3-tk`).

The window opens with the current time, updated every second. Use
**Agregar alarma** to create an alarm; each row in the list shows
`HH:MM  |  name`, followed by `[Activa]` when the alarm is on, and has
**Editar** and **Eliminar** buttons.

To keep alarms in another file than the default one:

```
alarmaciom --config path/to/alarms.txt
```

## How alarms behave

Each alarm has:

- a name (at most 63 characters),
- a time in `HH:MM` form (at most 5 characters),
- an on/off switch,
- a set of weekdays, Sunday first (`D L M M J V S`).

New alarms start switched on, with Monday to Saturday marked.

An alarm rings when it is switched on, its time equals the current hour and
minute, and today is one of its marked weekdays. An alarm with no weekdays
marked is a one-off: it rings on any day its time comes and is switched off
once you dismiss it. Only one alarm rings at a time; if several are due, the
first in the list rings. A repeating alarm dismissed within its own minute
rings again on the next tick of that minute.

## Where alarms are kept

Alarms are saved after every change to `~/.config/alarmaciom/.alarma.config`
(the directory is created if needed), one alarm per line:

```
id,name,HH:MM,active,sun,mon,tue,wed,thu,fri,sat
```

for example

```
1,Despertar,07:30,1,0,1,1,1,1,1,0
```

At most 100 alarms are kept. Loading stops at the first line it cannot read,
so a name containing a comma, or an empty name, cuts the list short at that
alarm. A missing file simply means no alarms.

## Using it from Python

The alarm list and the scheduling rules can be used without the window:

```python
from datetime import datetime
from pathlib import Path

from alarmaciom.model import default_config_path, load_alarms
from alarmaciom.schedule import due_alarms, list_label

path = default_config_path(Path.home())
alarms = load_alarms(path, 100)
for alarm in due_alarms(alarms, datetime.now()):
    print(list_label(alarm))
```

- `alarmaciom.model` provides the `Alarm` record (`is_repeating`, `rings_on`,
  `to_line`, `from_line`), `AlarmBook` for adding, updating, finding and
  removing alarms, `load_alarms`, `save_alarms` and `default_config_path`.
  `AlarmBook` raises `AlarmLimitError` when full and `AlarmNotFoundError` for
  an unknown id, both subclasses of `AlarmError`.
- `alarmaciom.schedule` provides `clock_text`, `minute_text`,
  `sunday_weekday`, `due_alarms` and `list_label`.
- `alarmaciom.ui` provides `Ringer`, `AlarmController` (which saves after
  every change and rings due alarms), `AlarmApp` and `main`.

## What it does not do

The alarm does not play a sound file. By default `Ringer` writes the terminal
bell character to standard output once a second until the alarm is
dismissed; a different sound can be supplied by passing a `play` callable to
`Ringer`. The time entered for an alarm is not checked: an alarm whose time
is not in `HH:MM` form never rings.

## Running the tests

```
pip install .[test]
pytest
```