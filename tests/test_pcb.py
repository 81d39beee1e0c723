import io
import os
import sys

import pytest

from mlfq_dispatcher.pcb import (
    DEFAULT_PRIORITY,
    ProcessBlock,
    Status,
    header,
    simple_header,
)

SLEEPER = (sys.executable, "-c", "import time; time.sleep(30)")


def _sleeper(**kwargs):
    return ProcessBlock(arrival_time=0, service_time=3, args=SLEEPER, out=io.StringIO(), **kwargs)


def _alive(pid):
    try:
        os.kill(pid, 0)
    except ProcessLookupError:
        return False
    return True


def test_headers_are_fixed():
    assert header() == "    pid arrive  service  cpu_remain  last_queued  priority   status"
    assert simple_header() == "    pid arrive  service    cpu  status"


def test_status_values():
    assert [s.value for s in Status] == [0, 1, 2, 3, 4, 5]
    assert Status(5) is Status.TERMINATED


def test_defaults():
    block = ProcessBlock()
    assert block.pid == 0
    assert block.priority == DEFAULT_PRIORITY
    assert block.last_queued == -1
    assert block.cycle_time == 0
    assert block.status is Status.UNINITIALIZED
    assert block.args == ("./process",)


def test_remaining_time_defaults_to_service_time():
    block = ProcessBlock(arrival_time=2, service_time=7)
    assert block.remaining_cpu_time == 7
    explicit = ProcessBlock(service_time=7, remaining_cpu_time=3)
    assert explicit.remaining_cpu_time == 3


def test_equality_is_identity():
    a = ProcessBlock(arrival_time=1, service_time=2)
    b = ProcessBlock(arrival_time=1, service_time=2)
    assert a != b
    assert a == a


def test_format_row_fields_and_widths():
    block = ProcessBlock(
        arrival_time=4, service_time=9, priority=1, last_queued=12,
        status=Status.SUSPENDED,
    )
    row = block.format_row()
    assert row.endswith("    SUSPENDED")
    assert len(row) == 62 + len("SUSPENDED")
    assert row.split() == ["0", "4", "9", "9", "12", "1", "SUSPENDED"]


def test_format_row_pinned():
    block = ProcessBlock(arrival_time=1, service_time=5, priority=2, status=Status.INITIALIZED)
    assert block.format_row() == (
        "      0      1        5           5           -1         2    INITIALIZED"
    )


def test_format_simple_row():
    block = ProcessBlock(arrival_time=3, service_time=6, status=Status.READY)
    row = block.format_simple_row()
    assert row.split() == ["0", "3", "6", "6", "READY"]
    assert row[simple_header().index("status"):] == "READY"


def test_format_simple_row_terminated_label():
    block = ProcessBlock(service_time=1, status=Status.TERMINATED)
    assert block.format_simple_row().endswith("  PCB_TERMINATED")
    assert block.format_row().endswith("    TERMINATED")


@pytest.mark.parametrize("action", ["resume", "suspend", "terminate"])
def test_control_before_start_raises(action):
    block = ProcessBlock(service_time=2)
    with pytest.raises(RuntimeError):
        getattr(block, action)()
    assert block.status is Status.UNINITIALIZED


def test_start_missing_program_raises():
    block = ProcessBlock(service_time=1, args=("./definitely-missing-program",), out=io.StringIO())
    with pytest.raises(OSError):
        block.start()


def test_brief_report_uses_simple_layout():
    block = _sleeper(brief=True)
    block.start()
    try:
        lines = block.out.getvalue().splitlines()
        assert lines[0] == simple_header()
        assert lines[1] == block.format_simple_row()
    finally:
        block.terminate()
    assert block.status is Status.TERMINATED