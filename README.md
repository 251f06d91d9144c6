# philosophers

This package simulates the dining philosophers problem. Each philosopher
runs in its own thread at a round table and has one fork on each side. A
philosopher thinks, picks up both forks, eats, puts the forks down and
sleeps, and then does it all again. A monitor thread watches the table.
It stops the simulation when a philosopher starves. It also stops it
when every philosopher has eaten the required number of meals.

## Installation

```
pip install .
```

## Usage

```
philo number_of_philosophers time_to_die time_to_eat time_to_sleep [number_of_times_each_philosopher_must_eat]
```

`python -m philosophers.simulation` takes the same arguments.

All times are in milliseconds. There must be four or five arguments.
Each one must be made of decimal digits only and must not be zero. A
value above 2147483647 counts as zero, so it is rejected too.

Examples:

```
philo 5 800 200 200
philo 4 410 200 200 7
```

Each event goes to standard output on its own line, in the form
`<timestamp_ms> <philosopher> <action>`. The timestamp is the number of
milliseconds since the simulation started. Philosophers are numbered
from 1. The actions are:

- `has taken a fork`
- `is eating`
- `is sleeping`
- `is thinking`
- `died`

Once a philosopher dies, or every meal quota has been met, nothing more
is printed.

A philosopher who sits alone has only one fork. They take it, never get
to eat, and starve once `time_to_die` has passed.

If the arguments are invalid, a usage message goes to standard error and
the command exits with status 1. Otherwise it exits with status 0 when
the simulation ends.

## Using it from Python

```python
import sys

from philosophers.args import InputError, parse_args
from philosophers.simulation import run

try:
    settings = parse_args(["5", "800", "200", "200", "3"])
except InputError:
    raise SystemExit(1)

dead = run(settings, sys.stdout)
print("starved:", dead)
```

Modules:

- `philosophers.args`
  - `parse_args` takes the arguments that follow the program name and returns a frozen `Settings` dataclass. Its fields are `philosophers`, `time_to_die`, `time_to_eat`, `time_to_sleep`, and `meals`, which is `None` when there is no limit.
  - Invalid input raises `InputError`, a subclass of `ValueError`.
  - `usage_text` returns the usage message.
- `philosophers.simulation`
  - `run(settings, out=None)` starts the philosopher threads and the monitor, and waits for all of them to finish. It returns the number of the philosopher who starved, or `None` if everyone was fed. Lines are written to `out`, or to standard output when `out` is `None`.
  - `main(argv=None)` is the command-line entry point and returns the exit status.
- `philosophers.table` holds the pieces of the table:
  - `Philosopher`, with its fork and the neighbour's fork.
  - `Printer`, which serialises the output lines.
  - the `Status` enumeration.
  - `seat_philosophers`, which builds the table.
- `philosophers.clock` provides `now_ms` and `elapsed_ms`, both in milliseconds.

## Running the tests

```
pip install ".[test]"
pytest
```