import os
import signal
import threading

import pytest

from mlfq_dispatcher.sigtrap import (
    BLACK,
    COLOURS,
    NORMAL,
    ON_WHITE,
    colour_for,
    main,
    strip_path,
    usage,
)


@pytest.mark.parametrize(
    "path, expected",
    [
        ("/usr/local/bin/sigtrap", "sigtrap"),
        ("process", "process"),
        ("./process", "process"),
        ("some/dir/", None),
        ("", None),
        (None, None),
    ],
)
def test_strip_path(path, expected):
    assert strip_path(path) == expected


def test_colour_for_first_pair():
    assert colour_for(0) == BLACK + ON_WHITE


def test_colour_for_wraps_around():
    assert len(COLOURS) == 32
    for pid in range(40):
        assert colour_for(pid) == colour_for(pid + 32)


def test_usage_uses_stripped_name():
    text = usage("/opt/tools/prog")
    assert "program: prog - trap and report process control signals" in text
    assert "      prog [seconds]\n" in text
    assert "/opt/tools" not in text


def test_usage_falls_back_to_default_name():
    assert "program: sigtrap -" in usage("somewhere/")
    assert "program: sigtrap -" in usage(None)


@pytest.mark.parametrize("argv", [["abc"], ["1", "2"], ["-3"]])
def test_main_rejects_bad_arguments(argv, capsys):
    assert main(argv) == 127
    out = capsys.readouterr().out
    assert "trap and report process control signals" in out


def _lines(out):
    return [line for line in out.splitlines() if line]


def test_main_ticks_for_lifetime(capsys):
    assert main(["1"]) == 0
    lines = _lines(capsys.readouterr().out)
    pid = os.getpid()
    colour = colour_for(pid)
    assert lines[0] == f"{colour}{pid:7d}; START{BLACK}{NORMAL}"
    assert lines[1] == f"{colour}{pid:7d}; tick 1{BLACK}{NORMAL}"
    assert len(lines) == 2


def test_main_zero_lifetime_means_one_tick(capsys):
    assert main(["0"]) == 0
    lines = _lines(capsys.readouterr().out)
    assert len(lines) == 2
    assert lines[-1].endswith(f"; tick 1{BLACK}{NORMAL}")


def test_main_reports_hangup_and_exits(capsys):
    previous = signal.getsignal(signal.SIGHUP)
    main_id = threading.main_thread().ident
    timer = threading.Timer(
        0.2, lambda: signal.pthread_kill(main_id, signal.SIGHUP)
    )
    timer.start()
    try:
        assert main(["5"]) == 0
    finally:
        timer.join()
    lines = _lines(capsys.readouterr().out)
    assert lines[-1].endswith(f"; SIGHUP{BLACK}{NORMAL}")
    assert not any("tick" in line for line in lines)
    assert signal.getsignal(signal.SIGHUP) == previous