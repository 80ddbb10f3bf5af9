import io

import pytest

from talawa.timer import ScopedTimer, format_duration


def _clock(*values):
    return iter(values).__next__


def test_minimum_duration_shown():
    assert format_duration(0.0) == "0.001 ms"


def test_sub_second_duration():
    assert format_duration(0.5) == "0.5 ms"


def test_seconds_duration():
    assert format_duration(2.5) == "2.5 s"


def test_unit_switches_at_one_second():
    assert format_duration(0.999).endswith(" ms")
    assert format_duration(1.0).endswith(" s")


def test_timer_prints_on_exit():
    out = io.StringIO()
    with ScopedTimer("build", out=out, clock=_clock(10.0, 12.0)) as timer:
        assert out.getvalue() == ""
    assert timer.elapsed == pytest.approx(2.0)
    assert out.getvalue() == f"[TIMER] build: {format_duration(2.0)}\n"


def test_timer_prints_even_when_block_raises():
    out = io.StringIO()
    with pytest.raises(ValueError):
        with ScopedTimer("step", out=out, clock=_clock(0.0, 0.25)):
            raise ValueError("boom")
    assert out.getvalue().startswith("[TIMER] step: ")
    assert out.getvalue().endswith(" ms\n")