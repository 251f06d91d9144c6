"""Threads that run the philosophers and the monitor that watches them."""

from __future__ import annotations

import sys
import threading
import time
from collections.abc import Sequence
from typing import TextIO

from .args import InputError, Settings, parse_args, usage_text
from .clock import elapsed_ms, now_ms
from .table import START_DELAY_MS, Philosopher, Printer, Status, seat_philosophers

# The monitor starts checking this many milliseconds after the start time.
MONITOR_DELAY_MS = 30


def _wait_until(start: int, delay_ms: int) -> None:
    while elapsed_ms(start) < delay_ms:
        time.sleep(0.0001)


def _grab_forks(philosopher: Philosopher) -> bool:
    """Take both forks; return False if the philosopher died meanwhile."""
    if philosopher.index % 2 == 1:
        first, second = philosopher.next_fork, philosopher.fork
    else:
        first, second = philosopher.fork, philosopher.next_fork
    if philosopher.is_dead():
        return False
    first.acquire()
    philosopher.printer.report(philosopher, Status.TAKE_FORK)
    if philosopher.is_dead():
        first.release()
        return False
    second.acquire()
    philosopher.printer.report(philosopher, Status.TAKE_FORK)
    return True


def _eat_and_sleep(philosopher: Philosopher) -> bool:
    """Eat, put both forks down and sleep; return False on death."""
    printer = philosopher.printer
    printer.report(philosopher, Status.EAT)
    philosopher.record_meal()
    philosopher.pause(philosopher.time_to_eat)
    philosopher.fork.release()
    philosopher.next_fork.release()
    printer.report(philosopher, Status.SLEEP)
    return philosopher.pause(philosopher.time_to_sleep)


def philosopher_routine(philosopher: Philosopher) -> None:
    """Think, take forks, eat and sleep until the simulation ends."""
    _wait_until(philosopher.start, START_DELAY_MS)
    if philosopher.seats == 1:
        philosopher.printer.report(philosopher, Status.TAKE_FORK)
        philosopher.pause(philosopher.time_to_eat)
        return
    time.sleep((philosopher.index % 2) * 0.002)
    while True:
        philosopher.printer.report(philosopher, Status.THINK)
        if philosopher.is_dead():
            return
        if not _grab_forks(philosopher) or not _eat_and_sleep(philosopher):
            return


def kill_all(philosophers: Sequence[Philosopher], printer: Printer) -> None:
    """End the simulation for everyone and unlock the printer."""
    for philosopher in philosophers:
        philosopher.kill()
    printer.release()


def all_fed(philosophers: Sequence[Philosopher], printer: Printer) -> bool:
    """Return True, with the printer locked, once every meal quota is met."""
    if any(philosopher.meals_left() != 0 for philosopher in philosophers):
        return False
    printer.lock.acquire()
    return True


def find_death(
    philosophers: Sequence[Philosopher], printer: Printer
) -> Philosopher | None:
    """Report and return the first starved philosopher, if there is one."""
    for philosopher in philosophers:
        if philosopher.starved(now_ms()):
            printer.report_death(philosopher)
            return philosopher
    return None


def monitor_routine(
    philosophers: Sequence[Philosopher], printer: Printer
) -> Philosopher | None:
    """Watch the table until someone starves or everyone has eaten enough.

    Returns the philosopher who died, or None when all were fed.
    """
    if not philosophers:
        return None
    _wait_until(philosophers[0].start, MONITOR_DELAY_MS)
    while True:
        time.sleep(0.001)
        dead = find_death(philosophers, printer)
        if dead is not None:
            kill_all(philosophers, printer)
            return dead
        if all_fed(philosophers, printer):
            kill_all(philosophers, printer)
            return None


def run(settings: Settings, out: TextIO | None = None) -> int | None:
    """Run one simulation; return the index of the philosopher who died."""
    start = now_ms()
    printer = Printer(out)
    table = seat_philosophers(settings, start, printer)
    threads = [
        threading.Thread(target=philosopher_routine, args=(philosopher,))
        for philosopher in table
    ]
    for thread in threads:
        thread.start()
    outcome: list[Philosopher | None] = []
    monitor = threading.Thread(
        target=lambda: outcome.append(monitor_routine(table, printer))
    )
    monitor.start()
    monitor.join()
    for thread in threads:
        thread.join()
    dead = outcome[0] if outcome else None
    return dead.index if dead is not None else None


def main(argv: Sequence[str] | None = None) -> int:
    """Command-line entry point; returns the process exit status."""
    args = sys.argv[1:] if argv is None else list(argv)
    try:
        settings = parse_args(args)
    except InputError:
        sys.stderr.write(usage_text())
        return 1
    run(settings, sys.stdout)
    return 0


if __name__ == "__main__":
    sys.exit(main())