"""Philosophers seated around the table, their forks and the shared printer."""

from __future__ import annotations

import sys
import threading
import time
from enum import Enum
from typing import TextIO

from .args import Settings
from .clock import elapsed_ms, now_ms

# Philosophers start this many milliseconds after the recorded start time.
START_DELAY_MS = 15


class Status(Enum):
    """Events that are reported for a philosopher."""

    DIED = "died"
    TAKE_FORK = "has taken a fork"
    EAT = "is eating"
    SLEEP = "is sleeping"
    THINK = "is thinking"


class Printer:
    """Serialises status lines; holding ``lock`` silences everyone else."""

    def __init__(self, out: TextIO | None = None) -> None:
        self.out = out if out is not None else sys.stdout
        self.lock = threading.Lock()

    def _write(self, philosopher: Philosopher, status: Status) -> None:
        stamp = elapsed_ms(philosopher.start) - START_DELAY_MS
        self.out.write(f"{stamp} {philosopher.index} {status.value}\n")
        self.out.flush()

    def report(self, philosopher: Philosopher, status: Status) -> None:
        """Print a status line unless the philosopher is already dead."""
        with self.lock, philosopher.access:
            if philosopher._dead and status is not Status.DIED:
                return
            self._write(philosopher, status)

    def report_death(self, philosopher: Philosopher) -> None:
        """Print the death line and keep the printer locked afterwards."""
        self.lock.acquire()
        self._write(philosopher, Status.DIED)

    def release(self) -> None:
        """Unlock the printer after a death report or a final check."""
        self.lock.release()


class Philosopher:
    """One seat at the table with its own fork and a link to the next fork."""

    def __init__(
        self, index: int, settings: Settings, start: int, printer: Printer
    ) -> None:
        self.index = index
        self.seats = settings.philosophers
        self.time_to_die = settings.time_to_die
        self.time_to_eat = settings.time_to_eat
        self.time_to_sleep = settings.time_to_sleep
        self.start = start
        self.last_meal = start + START_DELAY_MS
        self.printer = printer
        self.fork = threading.Lock()
        self.next_fork = self.fork
        self.access = threading.Lock()
        self._dead = False
        self._meals = settings.meals

    def __repr__(self) -> str:
        return f"Philosopher(index={self.index}, seats={self.seats})"

    def is_dead(self) -> bool:
        """Return whether the simulation has ended for this philosopher."""
        with self.access:
            return self._dead

    def kill(self) -> None:
        """Mark the philosopher as finished."""
        with self.access:
            self._dead = True

    def record_meal(self) -> None:
        """Note a meal now and count it towards the required number."""
        with self.access:
            if self._dead:
                return
            self.last_meal = now_ms()
            if self._meals is not None and self._meals > 0:
                self._meals -= 1

    def meals_left(self) -> int | None:
        """Return the meals still required, or None when unlimited."""
        with self.access:
            return self._meals

    def starved(self, now: int) -> bool:
        """Mark the philosopher dead and return True if ``now`` is too late."""
        with self.access:
            if now - self.last_meal > self.time_to_die:
                self._dead = True
                return True
            return False

    def pause(self, duration_ms: int) -> bool:
        """Wait ``duration_ms``; return False early if the philosopher dies."""
        begin = now_ms()
        while now_ms() - begin < duration_ms:
            if self.is_dead():
                return False
            time.sleep(0.0005)
        return True


def seat_philosophers(
    settings: Settings, start: int, printer: Printer
) -> list[Philosopher]:
    """Create the philosophers, each reaching for its neighbour's fork."""
    table = [
        Philosopher(index, settings, start, printer)
        for index in range(1, settings.philosophers + 1)
    ]
    for philosopher, neighbour in zip(table, table[1:] + table[:1]):
        philosopher.next_fork = neighbour.fork
    return table