import io

import pytest

from arithbench.radix import check_guard_digits, find_radix_and_precision
from arithbench.report import Report, Severity
from arithbench.rounding import check_division_rounding, check_multiplication_rounding
from arithbench.sqrt import check_sqrt, check_sqrt_rounding
from arithbench.state import Arithmetic, Rounding


@pytest.fixture
def diagnosed():
    out = io.StringIO()
    report = Report(out=out)
    state = Arithmetic()
    find_radix_and_precision(state, report)
    check_guard_digits(state, report)
    check_multiplication_rounding(state, report)
    check_division_rounding(state, report)
    return state, report, out


def test_sqrt_passes_monotonicity(diagnosed):
    state, report, out = diagnosed
    check_sqrt(state, report)
    assert "sqrt has passed a test for Monotonicity." in out.getvalue()
    assert report.total() == 0


def test_sqrt_without_errors_does_not_pause(diagnosed):
    state, report, _ = diagnosed
    page = report.page
    check_sqrt(state, report)
    assert report.page == page


def test_sqrt_resets_error_bounds(diagnosed):
    state, report, _ = diagnosed
    state.min_sq_er = -5.0
    state.max_sq_er = 5.0
    check_sqrt(state, report)
    assert state.min_sq_er == 0.0
    assert state.max_sq_er == 0.0


def test_sqrt_rounds_correctly(diagnosed):
    state, report, out = diagnosed
    check_sqrt(state, report)
    check_sqrt_rounding(state, report)
    assert state.r_sqrt == Rounding.ROUNDED
    assert "Square root appears to be correctly rounded." in out.getvalue()
    assert report.counts[Severity.FAILURE] == 0


def test_sqrt_error_bounds_within_half_ulp(diagnosed):
    state, report, _ = diagnosed
    check_sqrt(state, report)
    check_sqrt_rounding(state, report)
    assert state.min_sq_er >= 0.0
    assert state.max_sq_er <= 0.0


def test_sqrt_rounding_anomaly_is_a_failure(diagnosed):
    state, report, out = diagnosed
    check_sqrt(state, report)
    state.a1 = 3.0
    check_sqrt_rounding(state, report)
    assert state.r_sqrt == Rounding.OTHER
    assert report.counts[Severity.FAILURE] == 1
    text = out.getvalue()
    assert "fails test whether sqrt rounds or chops." in text
    assert "Square root is neither chopped nor correctly rounded." in text