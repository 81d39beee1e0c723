"""Job lists: reading, writing and random generation."""

from __future__ import annotations

import math
import os
import random
import re
import sys
from dataclasses import dataclass
from typing import Iterable, Optional, Protocol, Sequence

_TWO_FIELDS = re.compile(r"\s*([+-]?\d+),\s*([+-]?\d+)")
_THREE_FIELDS = re.compile(r"\s*([+-]?\d+),\s*([+-]?\d+),\s*([+-]?\d+)")

PRIORITY_LEVELS = 3


class _RandomSource(Protocol):
    def random(self) -> float: ...

    def randrange(self, stop: int) -> int: ...


@dataclass(frozen=True)
class JobSpec:
    """One line of a job list: arrival time, service time and, optionally, priority."""

    arrival_time: int
    service_time: int
    priority: Optional[int] = None


def parse_jobs(lines: Iterable[str], with_priority: bool = True) -> list[JobSpec]:
    """Parse job lines of the form ``arrival, service[, priority]``.

    Lines that do not start with the expected fields are skipped; anything
    after the expected fields is ignored.
    """
    pattern = _THREE_FIELDS if with_priority else _TWO_FIELDS
    jobs = []
    for line in lines:
        match = pattern.match(line)
        if match is None:
            continue
        numbers = [int(group) for group in match.groups()]
        jobs.append(JobSpec(*numbers))
    return jobs


def read_jobs(path: str | os.PathLike, with_priority: bool = True) -> list[JobSpec]:
    """Read a job list file; raises ``OSError`` if it cannot be opened."""
    with open(path, encoding="utf-8") as stream:
        return parse_jobs(stream, with_priority)


def poisson_interval(mean: float, rng: _RandomSource) -> int:
    """Draw a Poisson-distributed interval with the given mean."""
    limit = math.exp(-mean)
    k = 0
    product = 1.0
    while True:
        k += 1
        product *= rng.random()
        if product <= limit:
            return k - 1


def exponential_service(rate: float, rng: _RandomSource) -> int:
    """Draw a service time of at least one from an exponential distribution."""
    if rate <= 0:
        raise ValueError("service rate must be positive")
    u = rng.random()
    return 1 + math.floor(math.log(1 - u) / -rate)


def generate_jobs(
    count: int,
    arrival_mean: float,
    service_rate: float,
    rng: Optional[_RandomSource] = None,
    with_priority: bool = True,
) -> list[JobSpec]:
    """Generate ``count`` jobs with cumulative Poisson arrivals."""
    if count < 1:
        raise ValueError("the number of jobs to be dispatched must be at least one")
    if service_rate <= 0:
        raise ValueError("service rate must be positive")
    if rng is None:
        rng = random.Random()
    jobs = []
    arrival = 0
    for _ in range(count):
        arrival += poisson_interval(arrival_mean, rng)
        service = exponential_service(service_rate, rng)
        priority = rng.randrange(PRIORITY_LEVELS) if with_priority else None
        jobs.append(JobSpec(arrival, service, priority))
    return jobs


def format_jobs(jobs: Iterable[JobSpec]) -> str:
    """Render jobs in the job list file format, one per line."""
    lines = []
    for job in jobs:
        fields = [job.arrival_time, job.service_time]
        if job.priority is not None:
            fields.append(job.priority)
        lines.append(", ".join(str(value) for value in fields) + "\n")
    return "".join(lines)


def _ask_count() -> int:
    while True:
        reply = input("Please enter the number of jobs that are to be dispatched: ")
        try:
            count = int(reply.strip())
        except ValueError:
            count = 0
        if count >= 1:
            return count
        print(
            "Sorry, the number of jobs to be dispatched must be at least one.",
            file=sys.stderr,
        )


def _ask_float(prompt: str) -> float:
    while True:
        reply = input(prompt)
        try:
            return float(reply.strip())
        except ValueError:
            print("ERROR: Enter a number", file=sys.stderr)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Prompt for generation parameters and write a random job list."""
    program = os.path.basename(sys.argv[0]) if sys.argv and sys.argv[0] else "random"
    args = list(sys.argv[1:] if argv is None else argv)
    with_priority = True
    if "--no-priority" in args:
        args.remove("--no-priority")
        with_priority = False
    if len(args) != 1:
        print(f"Usage: {program} [--no-priority] [filename]", file=sys.stderr)
        return 1
    path = args[0]

    try:
        count = _ask_count()
        arrival_mean = _ask_float(
            "Please enter the mean of the random Poisson distribution for "
            "intervals between job arrivals: "
        )
        service_rate = _ask_float(
            "Please enter the inverse of the mean of the random exponential "
            "distribution for job execution duration: "
        )
    except EOFError:
        print("FATAL: Unexpected end of input.", file=sys.stderr)
        return 1

    try:
        jobs = generate_jobs(count, arrival_mean, service_rate, random.Random(), with_priority)
    except ValueError as exc:
        print(f"FATAL: {exc}.", file=sys.stderr)
        return 1

    try:
        with open(path, "w", encoding="utf-8") as stream:
            stream.write(format_jobs(jobs))
    except OSError:
        print("FATAL: Unable to open file for writing.", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())