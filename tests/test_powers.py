import io
import math

import pytest

from arithbench.powers import (
    PowerChecker,
    check_exp2,
    check_extreme_powers,
    check_small_powers,
    compute_exp2,
)
from arithbench.radix import check_guard_digits, find_radix_and_precision
from arithbench.report import Report, Severity
from arithbench.rounding import check_division_rounding, check_multiplication_rounding
from arithbench.state import Arithmetic
from arithbench.underflow import find_underflow


@pytest.fixture
def prepared():
    out = io.StringIO()
    report = Report(out)
    state = Arithmetic()
    find_radix_and_precision(state, report)
    check_guard_digits(state, report)
    check_multiplication_rounding(state, report)
    check_division_rounding(state, report)
    out.seek(0)
    out.truncate()
    return state, report, out


def test_compute_exp2_matches_library():
    assert math.isclose(compute_exp2(), math.exp(2.0), rel_tol=1e-14)


def test_compare_equal_values(prepared):
    state, report, out = prepared
    checker = PowerChecker(state, report)
    assert checker.compare(8.0, 8.0, 2.0, 3.0) is True
    assert checker.discrepancies == 0
    assert out.getvalue() == ""


def test_compare_reports_first_miss_only(prepared):
    state, report, out = prepared
    checker = PowerChecker(state, report)
    assert checker.compare(1.0, 2.0, 3.0, 4.0) is False
    assert checker.compare(1.0, 2.0, 3.0, 4.0) is False
    assert checker.discrepancies == 2
    assert report.counts[Severity.DEFECT] == 1
    text = out.getvalue()
    assert "which compared unequal to correct 1.00000000000000000e+00" in text
    assert text.count("DEFECT:  computing") == 1


def test_compare_zero_base_only_warns(prepared):
    state, report, out = prepared
    checker = PowerChecker(state, report)
    assert checker.compare(1.0, 2.0, 0.0, -1.0) is False
    assert "WARNING:  computing" in out.getvalue()
    assert report.counts[Severity.DEFECT] == 0


def test_summarize_mentions_repeats(prepared):
    state, report, out = prepared
    checker = PowerChecker(state, report)
    checker.compare(1.0, 2.0, 3.0, 4.0)
    checker.compare(1.0, 2.0, 3.0, 4.0)
    assert checker.summarize() == 2
    assert "Similar discrepancies have occurred 2 times." in out.getvalue()


def test_run_stops_at_last_exponent(prepared):
    state, report, _ = prepared
    checker = PowerChecker(state, report)
    exponent, x = checker.run(2.0, 2.0, 1, 5)
    assert exponent == 6
    assert x == 2.0 ** 5
    assert checker.discrepancies == 0


def test_run_stops_when_x_reaches_w(prepared):
    state, report, _ = prepared
    checker = PowerChecker(state, report)
    exponent, x = checker.run(state.radix, state.radix, 1, 1000)
    assert x == state.w
    assert exponent == int(state.precision)
    assert checker.discrepancies == 0


def test_small_powers_are_exact(prepared):
    state, report, out = prepared
    assert check_small_powers(state, report) == 0
    text = out.getvalue()
    assert "Diagnosis resumes after milestone Number 90" in text
    assert "... no discrepancies found." in text
    assert report.counts[Severity.DEFECT] == 0


def test_exp2_accuracy_is_adequate(prepared):
    state, report, out = prepared
    assert check_exp2(state, report) == 0
    assert "Accuracy seems adequate." in out.getvalue()
    assert report.counts[Severity.DEFECT] == 0


def test_extreme_powers_are_exact(prepared):
    state, report, out = prepared
    find_underflow(state, report)
    assert check_extreme_powers(state, report) == 0
    assert " ... no discrepancies found." in out.getvalue()


def test_extreme_powers_detect_wrong_reciprocal(prepared):
    state, report, out = prepared
    find_underflow(state, report)
    state.c_inverse *= 2.0
    assert check_extreme_powers(state, report) == 2
    assert report.counts[Severity.DEFECT] == 1
    assert "Similar discrepancies have occurred 2 times." in out.getvalue()