import io

import pytest

from arithbench.radix import check_guard_digits, find_radix_and_precision
from arithbench.report import Report, Severity
from arithbench.rounding import (
    NO_TRIALS,
    check_addition_rounding,
    check_commutativity,
    check_division_rounding,
    check_multiplication_rounding,
    check_sticky_bit,
)
from arithbench.state import Arithmetic, Rounding


@pytest.fixture
def diagnosed():
    out = io.StringIO()
    report = Report(out=out)
    state = Arithmetic()
    find_radix_and_precision(state, report)
    check_guard_digits(state, report)
    return state, report, out


def _run_all_rounding(state, report):
    check_multiplication_rounding(state, report)
    check_division_rounding(state, report)
    check_addition_rounding(state, report)
    check_sticky_bit(state, report)


def test_multiplication_rounds_correctly(diagnosed):
    state, report, out = diagnosed
    check_multiplication_rounding(state, report)
    assert state.r_mult == Rounding.ROUNDED
    assert "Multiplication appears to round correctly." in out.getvalue()
    assert report.counts[Severity.FAILURE] == 0


def test_multiplication_picks_radix_as_a1(diagnosed):
    state, report, _ = diagnosed
    check_multiplication_rounding(state, report)
    assert state.a1 == state.radix
    assert state.a1 * state.a_inverse == 1.0
    assert state.radix_d2 * 2.0 == state.radix


def test_multiplication_check_pauses_at_milestone(diagnosed):
    state, report, out = diagnosed
    page = report.page
    check_multiplication_rounding(state, report)
    assert report.page == page + 1
    assert "Diagnosis resumes after milestone Number 40" in out.getvalue()


def test_division_rounds_correctly(diagnosed):
    state, report, out = diagnosed
    check_multiplication_rounding(state, report)
    check_division_rounding(state, report)
    assert state.r_div == Rounding.ROUNDED
    assert state.b_inverse * state.radix == 1.0
    assert "Division appears to round correctly." in out.getvalue()


def test_addition_rounds_correctly(diagnosed):
    state, report, out = diagnosed
    check_multiplication_rounding(state, report)
    check_division_rounding(state, report)
    check_addition_rounding(state, report)
    assert state.r_add_sub == Rounding.ROUNDED
    assert "Addition/Subtraction appears to round correctly." in out.getvalue()


def test_addition_without_guard_digit_neither_rounds_nor_chops(diagnosed):
    state, report, out = diagnosed
    check_multiplication_rounding(state, report)
    check_division_rounding(state, report)
    state.g_add_sub = False
    check_addition_rounding(state, report)
    assert state.r_add_sub == Rounding.OTHER
    assert "Addition/Subtraction neither rounds nor chops." in out.getvalue()


def test_sticky_bit_found(diagnosed):
    state, report, out = diagnosed
    _run_all_rounding(state, report)
    assert state.sticky_bit == 1.0
    assert "Sticky bit apparently used correctly." in out.getvalue()
    assert report.total() == 0


def test_sticky_bit_needs_correct_rounding(diagnosed):
    state, report, out = diagnosed
    check_multiplication_rounding(state, report)
    check_division_rounding(state, report)
    check_addition_rounding(state, report)
    state.r_mult = Rounding.OTHER
    check_sticky_bit(state, report)
    assert state.sticky_bit == 0.0
    assert "Sticky bit used incorrectly or not at all." in out.getvalue()
    assert report.counts[Severity.FLAW] == 1


def test_multiplication_commutes(diagnosed):
    state, report, out = diagnosed
    _run_all_rounding(state, report)
    check_commutativity(state, report)
    assert f"No failures found in {NO_TRIALS} integer pairs." in out.getvalue()
    assert report.counts[Severity.DEFECT] == 0
    assert state.random1 != state.third
    assert 0.0 <= state.random1 < 2.0