# mlfq-dispatcher

Building blocks for experimenting with process dispatching on POSIX systems:

- `mlfq_dispatcher.pcb`: process control blocks that start, suspend, resume
  and terminate real child processes with signals.
- `mlfq_dispatcher.jobs`: reading, parsing, generating and writing job lists,
  plus the `mlfq-random` command.
- `mlfq_dispatcher.sigtrap`: a worker process that ticks once a second and
  reports the process-control signals it receives, run as `mlfq-sigtrap`.

## Installation

```
pip install .
```

Python 3.10 or later is required. Controlling child processes needs a POSIX
system, because it is done with `SIGTSTP`, `SIGCONT` and `SIGINT`.

## What this package does not do

The package has no scheduler. It does not include a command or class that reads
a job list and dispatches the jobs, whether first-come-first-served or with a
feedback queue, and it does not compute turnaround, waiting or response times.
It provides the job lists, the process control blocks and the worker process
that such a dispatcher would use.

## Job files

A job file has one job per line: the arrival time, the service time and,
optionally, a priority level:

```
0, 3, 0
2, 6, 1
4, 4, 2
```

Lines that do not start with the expected fields are skipped. Anything after
the expected fields is ignored.

## Generating a job list

```
mlfq-random jobs.txt
mlfq-random --no-priority jobs.txt
```

The command asks for:

1. the number of jobs (asked again until it is at least one),
2. the mean of the Poisson distribution for the gaps between arrivals,
3. the rate of the exponential distribution for service times.

It writes the jobs to the given file and overwrites the file if it exists.
Arrival times add up the Poisson gaps, and every service time is at least one.
Each job also gets a random priority level from 0 to 2, unless
`--no-priority` is given. A service rate that is not positive, an end of input
or a file that cannot be written is reported on standard error, and the
command exits with status 1.

## The worker process

```
mlfq-sigtrap [seconds]
```

The worker prints its process id and a tick count once a second, for 60 seconds
unless another number is given. Each line is coloured with one of 32 colour
pairs chosen from the process id. It traps `SIGINT`, `SIGQUIT`, `SIGHUP`,
`SIGTERM`, `SIGABRT` and `SIGTSTP` and reports each one before acting on it:

- `SIGINT`, `SIGQUIT`, `SIGHUP` and `SIGTERM` end the process.
- `SIGTSTP` stops the process. When it is continued, it prints `SIGCONT`.
- `SIGABRT` is raised again with its default action.

An argument that does not start with a digit, or more than one argument, prints
the usage text. The command then exits with status 127.

## Using the package from Python

### Job lists

```python
import random
from mlfq_dispatcher.jobs import JobSpec, format_jobs, generate_jobs, parse_jobs

jobs = parse_jobs(["0, 3, 0", "not a job", "2, 6, 1"])
# [JobSpec(arrival_time=0, service_time=3, priority=0),
#  JobSpec(arrival_time=2, service_time=6, priority=1)]

format_jobs(jobs)
# '0, 3, 0\n2, 6, 1\n'

parse_jobs(["0, 3"], with_priority=False)
# [JobSpec(arrival_time=0, service_time=3, priority=None)]

generated = generate_jobs(5, 2.0, 0.5, random.Random(1))
```

`read_jobs(path, with_priority=True)` parses a file and raises `OSError` if the
file cannot be opened. `poisson_interval(mean, rng)` and
`exponential_service(rate, rng)` draw single values. `generate_jobs` and
`exponential_service` raise `ValueError` for a rate that is not positive.
`generate_jobs` also raises `ValueError` for a count below one.

### Process control blocks

```python
from mlfq_dispatcher.pcb import ProcessBlock, Status, header

block = ProcessBlock(arrival_time=0, service_time=3, priority=0,
                     args=("mlfq-sigtrap",))
block.start()      # launches the process and prints a header and a row
block.suspend()    # SIGTSTP, waits until stopped
block.resume()     # prints a header and a row, then SIGCONT
block.terminate()  # SIGINT, waits for exit
assert block.status is Status.TERMINATED
```

`remaining_cpu_time` defaults to the service time. The default program is
`./process`. `start()` continues the process if it is already running.
`resume()`, `suspend()` and `terminate()` raise `RuntimeError` for a block that
was never started. Reports go to `out` if it is set, and to standard output if
not. With `brief=True` a block prints the short table instead.

`format_row()` and `header()` give the full table (pid, arrival, service,
remaining cpu, last queued, priority, status). `format_simple_row()` and
`simple_header()` give the short one (pid, arrival, service, cpu, status).

### The worker

`mlfq_dispatcher.sigtrap` also provides `strip_path(pathname)`,
`colour_for(pid)` and `usage(program)`, which the command uses.

## Running the tests

```
pip install .[test]
pytest
```