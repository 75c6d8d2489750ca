import io
import sys

import pytest

from arithbench.radix import (
    check_extra_precision,
    check_guard_digits,
    check_small_integers,
    find_radix_and_precision,
)
from arithbench.report import Report, Severity
from arithbench.state import Arithmetic


def _fresh():
    out = io.StringIO()
    return Arithmetic(), Report(out=out), out


@pytest.fixture
def discovered():
    state, report, out = _fresh()
    find_radix_and_precision(state, report)
    return state, report, out


def test_small_integers_pass():
    state, report, out = _fresh()
    check_small_integers(state, report)
    assert report.total() == 0
    assert "-1, 0, 1/2, 1, 2, 3, 4, 5, 9, 27, 32 & 240 are O.K." in out.getvalue()
    assert report.milestone == 10


def test_radix_is_binary(discovered):
    state, report, out = discovered
    assert state.radix == sys.float_info.radix
    assert "Radix confirmed." in out.getvalue()


def test_precision_matches_mantissa(discovered):
    state, _, _ = discovered
    assert state.precision == sys.float_info.mant_dig


def test_ulps_match_epsilon(discovered):
    state, _, _ = discovered
    assert state.u2 == sys.float_info.epsilon
    assert state.u1 == sys.float_info.epsilon / 2
    assert state.u2 == state.radix * state.u1


def test_derived_quantities(discovered):
    state, report, out = discovered
    assert state.w == 1.0 / state.u1
    assert state.f9 == 1.0 - state.u1
    assert state.b_minus_u2 == state.radix - state.u2
    assert report.total() == 0
    assert report.milestone == 25
    assert "confirms closest relative separation U1 ." in out.getvalue()


def test_extra_precision_clean(discovered):
    state, report, out = discovered
    page = report.page
    check_extra_precision(state, report)
    text = out.getvalue()
    assert "Disagreements" not in text
    assert report.total() == 0
    assert report.page == page + 1
    assert "Diagnosis resumes after milestone Number 30" in text


def test_extra_precision_detects_wrong_ulp(discovered):
    state, report, out = discovered
    state.u1 = state.u1 / 2
    check_extra_precision(state, report)
    assert report.counts[Severity.FAILURE] == 1
    assert "Precision test appears to be inconsistent..." in out.getvalue()


def test_guard_digits_present(discovered):
    state, report, out = discovered
    check_guard_digits(state, report)
    assert state.g_mult and state.g_div and state.g_add_sub
    assert report.total() == 0
    text = out.getvalue()
    assert "Subtraction appears to be normalized, as it should be." in text
    assert "*, /, and - appear to have guard digits, as they should." in text


def test_guard_digits_detect_bad_ulp(discovered):
    state, report, _ = discovered
    state.u2 = state.u2 * 3
    check_guard_digits(state, report)
    assert state.g_add_sub is False
    assert report.total() > 0


def test_full_sequence_has_no_problems():
    state, report, _ = _fresh()
    check_small_integers(state, report)
    find_radix_and_precision(state, report)
    check_extra_precision(state, report)
    check_guard_digits(state, report)
    assert report.total() == 0
    assert report.milestone == 35