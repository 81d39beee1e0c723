"""Process control blocks and the child processes they drive."""

from __future__ import annotations

import os
import signal
import subprocess
import sys
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Optional, TextIO

DEFAULT_PRIORITY = -1
DEFAULT_PROGRAM = "./process"

_HEADER = "    pid arrive  service  cpu_remain  last_queued  priority   status"
_SIMPLE_HEADER = "    pid arrive  service    cpu  status"


class Status(IntEnum):
    """Life-cycle state of a process control block."""

    UNINITIALIZED = 0
    INITIALIZED = 1
    READY = 2
    RUNNING = 3
    SUSPENDED = 4
    TERMINATED = 5


def header() -> str:
    """Column header matching :meth:`ProcessBlock.format_row`."""
    return _HEADER


def simple_header() -> str:
    """Column header matching :meth:`ProcessBlock.format_simple_row`."""
    return _SIMPLE_HEADER


@dataclass(eq=False)
class ProcessBlock:
    """A job together with the operating-system process that runs it.

    Equality is identity: two blocks with the same numbers are still
    different jobs.
    """

    arrival_time: int = 0
    service_time: int = 0
    priority: int = DEFAULT_PRIORITY
    remaining_cpu_time: Optional[int] = None
    last_queued: int = -1
    cycle_time: int = 0
    status: Status = Status.UNINITIALIZED
    pid: int = 0
    args: tuple[str, ...] = (DEFAULT_PROGRAM,)
    brief: bool = False
    out: Optional[TextIO] = field(default=None, repr=False)
    _process: Optional[subprocess.Popen] = field(
        default=None, init=False, repr=False
    )

    def __post_init__(self) -> None:
        if self.remaining_cpu_time is None:
            self.remaining_cpu_time = self.service_time
        self.status = Status(self.status)
        self.args = tuple(self.args)

    @property
    def _stream(self) -> TextIO:
        return self.out if self.out is not None else sys.stdout

    def _report(self) -> None:
        stream = self._stream
        if self.brief:
            print(simple_header(), file=stream)
            print(self.format_simple_row(), file=stream)
        else:
            print(header(), file=stream)
            print(self.format_row(), file=stream)
        stream.flush()

    def _require_started(self, action: str) -> None:
        if not self.pid:
            raise RuntimeError(f"cannot {action} a process that was never started")

    def start(self) -> None:
        """Launch the process, or continue it if it is already running."""
        if not self.pid:
            self._stream.flush()
            self._process = subprocess.Popen(list(self.args))
            self.pid = self._process.pid
            self.status = Status.RUNNING
            self._report()
        else:
            os.kill(self.pid, signal.SIGCONT)
        self.status = Status.RUNNING

    def resume(self) -> None:
        """Continue a suspended process."""
        self._require_started("resume")
        self.status = Status.RUNNING
        self._report()
        os.kill(self.pid, signal.SIGCONT)

    def suspend(self) -> None:
        """Stop the process and wait until it has stopped."""
        self._require_started("suspend")
        os.kill(self.pid, signal.SIGTSTP)
        os.waitpid(self.pid, os.WUNTRACED)
        self.status = Status.SUSPENDED

    def terminate(self) -> None:
        """Interrupt the process and wait for it to exit."""
        self._require_started("terminate")
        os.kill(self.pid, signal.SIGINT)
        if self._process is not None:
            self._process.wait()
        else:
            os.waitpid(self.pid, os.WUNTRACED)
        self.status = Status.TERMINATED

    def format_row(self) -> str:
        """One table row with every scheduling attribute."""
        return (
            f"{self.pid:7d}{self.arrival_time:7d}{self.service_time:9d}"
            f"{self.remaining_cpu_time:12d}{self.last_queued:13d}"
            f"{self.priority:10d}    {self.status.name}"
        )

    def format_simple_row(self) -> str:
        """One short table row: pid, arrival, service, cpu left and status."""
        label = self.status.name
        if self.status is Status.TERMINATED:
            label = "PCB_TERMINATED"
        return (
            f"{self.pid:7d}{self.arrival_time:7d}{self.service_time:9d}"
            f"{self.remaining_cpu_time:7d}  {label}"
        )