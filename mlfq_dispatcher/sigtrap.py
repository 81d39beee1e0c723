"""A ticking test process that traps and reports process-control signals."""

from __future__ import annotations

import contextlib
import os
import select
import signal
import socket
import sys
import time
from typing import Optional, Sequence

DEFAULT_TIME = 60
DEFAULT_NAME = "sigtrap"

BLACK = "\033[30m"
RED = "\033[31m"
GREEN = "\033[32m"
YELLOW = "\033[33m"
BLUE = "\033[34m"
MAGENTA = "\033[35m"
CYAN = "\033[36m"
WHITE = "\033[37m"

ON_BLACK = "\033[40m"
ON_RED = "\033[41m"
ON_GREEN = "\033[42m"
ON_YELLOW = "\033[43m"
ON_BLUE = "\033[44m"
ON_MAGENTA = "\033[45m"
ON_CYAN = "\033[46m"
ON_WHITE = "\033[47m"

NORMAL = "\033[0m"

COLOURS = (
    BLACK + ON_WHITE, CYAN + ON_RED, GREEN + ON_MAGENTA,
    BLUE + ON_YELLOW, BLACK + ON_CYAN, WHITE + ON_RED,
    BLUE + ON_GREEN, YELLOW + ON_MAGENTA, BLACK + ON_GREEN,
    YELLOW + ON_RED, BLUE + ON_CYAN, MAGENTA + ON_WHITE,
    BLACK + ON_YELLOW, GREEN + ON_RED, BLUE + ON_WHITE,
    CYAN + ON_MAGENTA,
    WHITE + ON_BLACK, RED + ON_CYAN, MAGENTA + ON_GREEN,
    YELLOW + ON_BLUE, CYAN + ON_BLACK, RED + ON_WHITE,
    GREEN + ON_BLUE, MAGENTA + ON_YELLOW, GREEN + ON_BLACK,
    RED + ON_YELLOW, CYAN + ON_BLUE, WHITE + ON_MAGENTA,
    YELLOW + ON_BLACK, RED + ON_GREEN, WHITE + ON_BLUE,
    MAGENTA + ON_CYAN,
)

_TRAPPED = (
    signal.SIGINT,
    signal.SIGQUIT,
    signal.SIGHUP,
    signal.SIGTERM,
    signal.SIGABRT,
    signal.SIGTSTP,
)

_EXITING = (
    (signal.SIGINT, "SIGINT"),
    (signal.SIGQUIT, "SIGQUIT"),
    (signal.SIGHUP, "SIGHUP"),
)


def strip_path(pathname: Optional[str]) -> Optional[str]:
    """Return the file-name part of a path, or None if there is none."""
    if not pathname:
        return None
    _, slash, name = pathname.rpartition("/")
    if not slash:
        return pathname
    return name or None


def colour_for(pid: int) -> str:
    """Pick the terminal colour pair that identifies a process."""
    return COLOURS[pid % len(COLOURS)]


def usage(program: Optional[str]) -> str:
    """Usage text for the program named by ``program``."""
    name = strip_path(program) or DEFAULT_NAME
    return (
        "\n"
        f"  program: {name} - trap and report process control signals\n\n"
        "    usage:\n\n"
        f"      {name} [seconds]\n\n"
        "      where [seconds] is the lifetime of the program - default = 60s.\n\n"
        "    the program sleeps for a second, reports process id and tick count\n"
        "    before sleeping again. any process control signals: SIGINT, SIGQUIT\n"
        "    SIGHUP, SIGTERM, SIGABRT, SIGCONT, SIGTSTP, are trapped and\n"
        "    reported before being actioned.\n\n"
    )


def _leading_int(text: str) -> int:
    digits = ""
    for char in text:
        if not char.isdigit():
            break
        digits += char
    return int(digits) if digits else 0


class _Trap:
    """Signal bookkeeping and the tick loop."""

    def __init__(self) -> None:
        self.pid = os.getpid()
        self.colour = colour_for(self.pid)
        self.received: set[int] = set()
        self.continued = False
        self._reader, self._writer = socket.socketpair()
        self._reader.setblocking(False)
        self._writer.setblocking(False)
        self._old_handlers: dict[int, object] = {}
        self._old_wakeup = -1

    def say(self, message: str) -> None:
        sys.stdout.write(f"{self.colour}{self.pid:7d}; {message}{BLACK}{NORMAL}\n")
        sys.stdout.flush()

    def _handle(self, signum: int, frame: object) -> None:
        self.received.add(signum)

    def __enter__(self) -> "_Trap":
        self._old_wakeup = signal.set_wakeup_fd(
            self._writer.fileno(), warn_on_full_buffer=False
        )
        for signum in _TRAPPED:
            self._old_handlers[signum] = signal.signal(signum, self._handle)
        return self

    def __exit__(self, *exc: object) -> None:
        for signum, handler in self._old_handlers.items():
            with contextlib.suppress(TypeError, ValueError, OSError):
                signal.signal(signum, handler)
        signal.set_wakeup_fd(self._old_wakeup)
        self._reader.close()
        self._writer.close()

    def _drain(self) -> None:
        with contextlib.suppress(BlockingIOError, InterruptedError):
            while self._reader.recv(4096):
                pass

    def nap(self, seconds: float) -> bool:
        """Sleep; return True if the tick should be reported."""
        start = time.monotonic()
        deadline = start + seconds
        while True:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                return True
            ready, _, _ = select.select([self._reader], [], [], remaining)
            if ready:
                self._drain()
                return time.monotonic() - start > seconds / 2

    def _suspend_self(self) -> None:
        signal.pthread_sigmask(signal.SIG_UNBLOCK, {signal.SIGTSTP})
        signal.signal(signal.SIGTSTP, signal.SIG_DFL)
        signal.raise_signal(signal.SIGTSTP)
        signal.signal(signal.SIGTSTP, self._handle)
        self.continued = True

    def _abort(self) -> None:
        signal.signal(signal.SIGABRT, signal.SIG_DFL)
        signal.raise_signal(signal.SIGABRT)

    def run(self, cycle: int) -> int:
        ticks = 0
        while ticks < cycle:
            if self.continued:
                self.continued = False
                self.say("SIGCONT")

            if self.nap(1.0):
                ticks += 1
                self.say(f"tick {ticks}")

            for signum, label in _EXITING:
                if signum in self.received:
                    self.say(label)
                    return 0
            if signal.SIGTSTP in self.received:
                self.received.discard(signal.SIGTSTP)
                self.say("SIGTSTP")
                self._suspend_self()
            if signal.SIGABRT in self.received:
                self.say("SIGABRT")
                self._abort()
            if signal.SIGTERM in self.received:
                self.say("SIGTERM")
                return 0
        return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Tick once a second for the given lifetime, reporting signals received."""
    program = sys.argv[0] if sys.argv else DEFAULT_NAME
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) > 1 or (len(args) == 1 and not args[0][:1].isdigit()):
        sys.stdout.write(usage(program))
        sys.stdout.flush()
        return 127

    with _Trap() as trap:
        trap.say("START")
        with contextlib.suppress(OSError, AttributeError):
            os.setpriority(os.PRIO_PROCESS, 0, 20)
        cycle = DEFAULT_TIME if not args else _leading_int(args[0])
        if cycle <= 0:
            cycle = 1
        return trap.run(cycle)


if __name__ == "__main__":
    sys.exit(main())