import io
import math

import pytest

from arithbench import state as state_mod
from arithbench.report import Report, Severity
from arithbench.state import Arithmetic, sign


def ieee_state():
    return Arithmetic(radix=2.0, u1=2.0 ** -53, u2=2.0 ** -52)


def make_report():
    out = io.StringIO()
    return Report(out), out


@pytest.mark.parametrize("x,expected", [(3.5, 1.0), (0.0, 1.0), (-0.0, 1.0), (-2.0, -1.0)])
def test_sign(x, expected):
    assert sign(x) == expected


def test_random_updates_seed_and_is_deterministic():
    a = Arithmetic(random1=1.0 / 3.0, random9=math.sqrt(3.0))
    b = Arithmetic(random1=1.0 / 3.0, random9=math.sqrt(3.0))
    first = a.random()
    assert first == a.random1
    assert [first, a.random(), a.random()] == [b.random(), b.random(), b.random()]


def test_random_values_stay_small():
    a = Arithmetic(random1=1.0 / 3.0, random9=math.sqrt(3.0))
    values = [a.random() for _ in range(20)]
    assert all(0.0 <= v < 2.0 for v in values)


def test_pseudo_zero_zero_is_silent():
    report, out = make_report()
    assert state_mod.test_pseudo_zero(ieee_state(), report, 0.0) == 0
    assert out.getvalue() == ""


def test_pseudo_zero_tiny_value_is_ok():
    state = ieee_state()
    report, out = make_report()
    assert state_mod.test_pseudo_zero(state, report, 1e-300) == 0
    assert "This is O.K." in out.getvalue()
    assert state.random1 == 1e-300
    assert state.random2 == 1e-300
    assert report.total() == 0


def test_pseudo_zero_nan_is_defect():
    report, out = make_report()
    result = state_mod.test_pseudo_zero(ieee_state(), report, math.nan)
    assert result == 1
    assert "This is a DEFECT!" in out.getvalue()
    assert "Multiplication does not commute!" in out.getvalue()
    assert report.counts[Severity.DEFECT] > 0
    assert report.page == 2