import io

import pytest

from philosophers.args import Settings, usage_text
from philosophers.clock import now_ms
from philosophers.simulation import (
    all_fed,
    find_death,
    kill_all,
    main,
    monitor_routine,
    philosopher_routine,
    run,
)
from philosophers.table import Printer, seat_philosophers


def _lines(out):
    return [line.split(" ", 2) for line in out.getvalue().splitlines()]


def test_single_philosopher_dies():
    out = io.StringIO()
    settings = Settings(1, 200, 100, 100)
    assert run(settings, out) == 1
    lines = _lines(out)
    assert lines[0][1:] == ["1", "has taken a fork"]
    assert lines[-1][1:] == ["1", "died"]
    assert int(lines[-1][0]) > settings.time_to_die


def test_everyone_fed_stops_without_death():
    out = io.StringIO()
    settings = Settings(5, 800, 50, 50, meals=2)
    assert run(settings, out) is None
    lines = _lines(out)
    assert all(status != "died" for _, _, status in lines)
    for index in range(1, 6):
        meals = [l for l in lines if l[1] == str(index) and l[2] == "is eating"]
        assert len(meals) >= 2


def test_timestamps_never_decrease():
    out = io.StringIO()
    run(Settings(4, 800, 40, 40, meals=2), out)
    stamps = [int(stamp) for stamp, _, _ in _lines(out)]
    assert stamps
    assert stamps == sorted(stamps)


def test_death_is_the_last_line():
    out = io.StringIO()
    run(Settings(3, 100, 200, 50), out)
    lines = _lines(out)
    statuses = [status for _, _, status in lines]
    assert statuses.count("died") == 1
    assert statuses[-1] == "died"


def test_kill_all_marks_everyone_and_releases_printer():
    printer = Printer(io.StringIO())
    table = seat_philosophers(Settings(3, 100, 50, 50), now_ms(), printer)
    printer.lock.acquire()
    kill_all(table, printer)
    assert all(p.is_dead() for p in table)
    assert printer.lock.locked() is False


def test_all_fed_waits_for_every_meal():
    printer = Printer(io.StringIO())
    table = seat_philosophers(Settings(2, 100, 50, 50, meals=1), now_ms(), printer)
    assert all_fed(table, printer) is False
    table[0].record_meal()
    assert all_fed(table, printer) is False
    table[1].record_meal()
    assert all_fed(table, printer) is True
    assert printer.lock.locked() is True


def test_all_fed_false_without_meal_limit():
    printer = Printer(io.StringIO())
    table = seat_philosophers(Settings(2, 100, 50, 50), now_ms(), printer)
    for philosopher in table:
        philosopher.record_meal()
    assert all_fed(table, printer) is False
    assert printer.lock.locked() is False


def test_find_death_reports_first_starved():
    out = io.StringIO()
    printer = Printer(out)
    table = seat_philosophers(Settings(3, 100, 50, 50), now_ms() - 10_000, printer)
    dead = find_death(table, printer)
    assert dead is table[0]
    assert table[0].is_dead() is True
    assert table[1].is_dead() is False
    assert out.getvalue().endswith(" 1 died\n")
    assert printer.lock.locked() is True


def test_find_death_none_when_fresh():
    out = io.StringIO()
    printer = Printer(out)
    table = seat_philosophers(Settings(3, 1000, 50, 50), now_ms(), printer)
    assert find_death(table, printer) is None
    assert out.getvalue() == ""


def test_monitor_returns_starved_philosopher():
    out = io.StringIO()
    printer = Printer(out)
    table = seat_philosophers(Settings(2, 100, 50, 50), now_ms() - 1000, printer)
    assert monitor_routine(table, printer) is table[0]
    assert all(p.is_dead() for p in table)
    assert printer.lock.locked() is False


def test_routine_of_dead_philosopher_prints_nothing():
    out = io.StringIO()
    printer = Printer(out)
    table = seat_philosophers(Settings(2, 100, 50, 50), now_ms() - 100, printer)
    table[1].kill()
    philosopher_routine(table[1])
    assert out.getvalue() == ""
    assert table[0].fork.locked() is False
    assert table[1].fork.locked() is False


@pytest.mark.parametrize(
    "argv", [[], ["1", "2", "3"], ["0", "100", "100", "100"], ["4", "x", "1", "1"]]
)
def test_main_rejects_bad_input(argv, capsys):
    assert main(argv) == 1
    captured = capsys.readouterr()
    assert captured.err == usage_text()
    assert captured.out == ""


def test_main_runs_simulation(capsys):
    assert main(["1", "100", "50", "50"]) == 0
    captured = capsys.readouterr()
    assert captured.out.splitlines()[-1].endswith(" 1 died")