import pytest

from alarmaciom.model import (
    MAX_ALARMS,
    MAX_NAME,
    Alarm,
    AlarmBook,
    AlarmError,
    AlarmLimitError,
    AlarmNotFoundError,
    default_config_path,
    load_alarms,
    save_alarms,
)

WEEKDAYS = (False, True, True, True, True, True, False)
NO_DAYS = (False,) * 7


def test_add_assigns_increasing_ids():
    book = AlarmBook()
    first = book.add("Wake", "07:30", WEEKDAYS)
    second = book.add("Lunch", "13:00", NO_DAYS)
    assert first.id == 1
    assert second.id == first.id + 1
    assert len(book) == 2
    assert [a.name for a in book] == ["Wake", "Lunch"]
    assert second.active is True


def test_add_after_removal_uses_last_id():
    book = AlarmBook()
    a = book.add("a", "01:00", NO_DAYS)
    b = book.add("b", "02:00", NO_DAYS)
    c = book.add("c", "03:00", NO_DAYS)
    book.remove(b.id)
    d = book.add("d", "04:00", NO_DAYS)
    assert d.id == c.id + 1
    assert [x.id for x in book] == [a.id, c.id, d.id]


def test_add_respects_limit():
    book = AlarmBook(limit=2)
    book.add("a", "01:00", NO_DAYS)
    book.add("b", "02:00", NO_DAYS)
    with pytest.raises(AlarmLimitError):
        book.add("c", "03:00", NO_DAYS)
    assert len(book) == 2


def test_default_limit_is_max_alarms():
    book = AlarmBook()
    for _ in range(MAX_ALARMS):
        book.add("x", "05:00", NO_DAYS)
    with pytest.raises(AlarmError):
        book.add("y", "05:00", NO_DAYS)


def test_add_clips_name_and_time():
    book = AlarmBook()
    alarm = book.add("n" * 200, "07:30:45", NO_DAYS)
    assert alarm.name == "n" * (MAX_NAME - 1)
    assert alarm.time == "07:30"


def test_update_changes_fields():
    book = AlarmBook()
    alarm = book.add("Wake", "07:30", WEEKDAYS)
    book.update(alarm.id, "Gym", "06:15", False, NO_DAYS)
    found = book.find(alarm.id)
    assert found.name == "Gym"
    assert found.time == "06:15"
    assert found.active is False
    assert found.days == NO_DAYS


def test_update_with_none_keeps_fields():
    book = AlarmBook()
    alarm = book.add("Wake", "07:30", WEEKDAYS)
    book.update(alarm.id, None, None, False, None)
    found = book.find(alarm.id)
    assert (found.name, found.time, found.days) == ("Wake", "07:30", WEEKDAYS)
    assert found.active is False


def test_update_missing_raises():
    book = AlarmBook()
    with pytest.raises(AlarmNotFoundError):
        book.update(42, "x", "00:00", True, None)


def test_remove_missing_raises_lookup_error():
    book = AlarmBook()
    book.add("a", "01:00", NO_DAYS)
    with pytest.raises(LookupError):
        book.remove(99)
    assert len(book) == 1


def test_find_missing_is_none():
    book = AlarmBook()
    book.add("a", "01:00", NO_DAYS)
    assert book.find(7) is None


def test_days_must_have_seven_entries():
    with pytest.raises(ValueError):
        Alarm(1, "x", "01:00", True, (True, False))


def test_rings_on():
    repeating = Alarm(1, "x", "07:00", True, WEEKDAYS)
    once = Alarm(2, "y", "07:00", True, NO_DAYS)
    assert repeating.is_repeating()
    assert not once.is_repeating()
    assert repeating.rings_on(1)
    assert not repeating.rings_on(0)
    assert all(once.rings_on(day) for day in range(7))


def test_to_line_worked_example():
    alarm = Alarm(1, "Wake", "07:30", True, WEEKDAYS)
    assert alarm.to_line() == "1,Wake,07:30,1,0,1,1,1,1,1,0"


def test_line_round_trip():
    alarm = Alarm(5, "Take pills", "21:45", False, (True, False, True, False, True, False, True))
    assert Alarm.from_line(alarm.to_line()) == alarm


def test_from_line_rejects_long_name():
    line = Alarm(1, "n" * MAX_NAME, "07:30", True, NO_DAYS).to_line()
    with pytest.raises(ValueError):
        Alarm.from_line(line)


def test_from_line_rejects_missing_fields():
    with pytest.raises(ValueError):
        Alarm.from_line("1,Wake,07:30,1")


def test_save_and_load_round_trip(tmp_path):
    path = tmp_path / "nested" / "alarms.config"
    book = AlarmBook()
    book.add("Wake", "07:30", WEEKDAYS)
    book.add("Meeting", "10:00", NO_DAYS)
    book.update(2, None, None, False, None)
    save_alarms(book, path)
    assert load_alarms(path) == list(book)


def test_load_missing_file_is_empty(tmp_path):
    assert load_alarms(tmp_path / "absent.config") == []


def test_load_stops_at_malformed_record(tmp_path):
    path = tmp_path / "alarms.config"
    good = Alarm(1, "Wake", "07:30", True, WEEKDAYS)
    later = Alarm(3, "Late", "23:00", True, NO_DAYS)
    path.write_text(good.to_line() + "\nnot a record\n" + later.to_line() + "\n")
    assert load_alarms(path) == [good]


def test_load_honours_limit(tmp_path):
    path = tmp_path / "alarms.config"
    alarms = [Alarm(i, f"a{i}", "08:00", True, NO_DAYS) for i in range(1, 6)]
    save_alarms(alarms, path)
    assert load_alarms(path, 3) == alarms[:3]


def test_default_config_path(tmp_path):
    path = default_config_path(tmp_path)
    assert path.name == ".alarma.config"
    assert path.parent == tmp_path / ".config" / "alarmaciom"