"""Overflow threshold, square roots of extreme values, range balance, X / X."""

from __future__ import annotations

import math

from arithbench.report import Report, Severity
from arithbench.state import Arithmetic


def _trap(report: Report, exc: BaseException) -> None:
    report.fp_errors += 1
    report.write(f"\n* * * FLOATING-POINT ERROR: {exc} * * *\n")


def _sqrt(x: float) -> float:
    """Square root that yields NaN for negative arguments instead of raising."""
    return math.sqrt(x) if x >= 0.0 else math.nan


def find_overflow(state: Arithmetic, report: Report) -> None:
    """Search for the overflow threshold V and the saturation value V0."""
    report.milestone = 160
    report.pause()
    report.write("Searching for Overflow threshold:\n")
    report.write("This may generate an error.\n")
    h_inverse, u2 = state.h_inverse, state.u2

    y = -state.c_inverse
    v9 = h_inverse * y
    v = 0.0
    saturates = True
    try:
        while True:
            v = y
            y = v9
            v9 = h_inverse * y
            if not v9 < y:
                break
    except ArithmeticError as exc:
        _trap(report, exc)
        saturates = False
        v9 = y

    z = v9
    report.write("Can `Z = -Y' overflow?\n")
    report.write(f"Trying it on Y = {y:.17e} .\n")
    v9 = -y
    v0 = v9
    if v - y == v + v0:
        report.write("Seems O.K.\n")
    else:
        report.write("finds a ")
        report.bad_cond(Severity.FLAW, "-(-Y) differs from Y.\n")

    if z != y:
        report.bad_cond(Severity.SERIOUS, "")
        report.write(f"overflow past {y:.17e}\n\tshrinks to {z:.17e} .\n")

    if saturates:
        y = v * (h_inverse * u2 - h_inverse)
        z = y + ((1.0 - h_inverse) * u2) * v
        if z < v0:
            y = z
        if y < v0:
            v = y
        if v0 - v < v0:
            v = v0
    else:
        v = y * (h_inverse * u2 - h_inverse)
        v = v + ((1.0 - h_inverse) * u2) * y

    report.write(f"Overflow threshold is V  = {v:.17e} .\n")
    if saturates:
        report.write(f"Overflow saturates at V0 = {v0:.17e} .\n")
    else:
        report.write("There is no saturation value because the system traps on overflow.\n")
    report.write(f"No Overflow should be signaled for V * 1 = {v * 1.0:.17e}\n")
    report.write(f"                           nor for V / 1 = {v / 1.0:.17e} .\n")
    report.write("Any overflow signal separating this * from the one\n")
    report.write("above is a DEFECT.\n")

    state.v = v
    state.v0 = v0

    report.milestone = 170
    uf_thold = state.uf_thold
    if not (-v < v and -v0 < v0 and -uf_thold < v and uf_thold < v):
        report.bad_cond(Severity.FAILURE, "Comparisons involving ")
        report.write(
            "+-%g, +-%g\nand +-%g are confused by Overflow." % (v, v0, uf_thold)
        )


def check_extreme_sqrt(state: Arithmetic, report: Report) -> None:
    """Check sqrt(Z) ^ 2 against Z near the underflow and overflow thresholds."""
    report.milestone = 175
    radix, e9, u1, w = state.radix, state.e9, state.u1, state.w
    report.write("\n")
    for z in (state.uf_thold, state.e0, state.pseudo_zero):
        if z == 0.0:
            continue
        root = _sqrt(z)
        y = root * root
        if y / (1.0 - radix * e9) < z or y > (1.0 + radix * e9) * z:
            report.bad_cond(Severity.SERIOUS if root > u1 else Severity.DEFECT, "")
            report.write(f"Comparison alleges that what prints as Z = {z:.17e}\n")
            report.write(f" is too far from sqrt(Z) ^ 2 = {y:.17e} .\n")

    report.milestone = 180
    for z in (state.v, state.v0):
        root = _sqrt(z)
        x = (1.0 - radix * e9) * root
        square = root * x
        if square < (1.0 - 2.0 * radix * e9) * z or square > z:
            report.bad_cond(Severity.SERIOUS if x < w else Severity.DEFECT, "")
            report.write("Comparison alleges that Z = %17e\n" % z)
            report.write(f" is too far from sqrt(Z) ^ 2 ({square:.17e}) .\n")


def check_range_balance(state: Arithmetic, report: Report) -> None:
    """Check that UfThold * V is not too far from 1."""
    report.milestone = 190
    report.pause()
    x = state.uf_thold * state.v
    y = state.radix * state.radix
    if x * y < 1.0 or x > y:
        if x * y < state.u1 or x > y / state.u1:
            report.bad_cond(Severity.DEFECT, "Badly")
        else:
            report.bad_cond(Severity.FLAW, "")
        report.write(
            " unbalanced range; UfThold * V = %.17e\n\t%s\n" % (x, "is too far from 1.\n")
        )


def check_self_division(state: Arithmetic, report: Report) -> None:
    """Check that X / X == 1 for a handful of representative X."""
    report.milestone = 200
    samples = (state.f9, 1.0 + state.u2, state.v, state.uf_thold, state.radix)
    for index, x in enumerate(samples, start=1):
        try:
            v9 = (x / x - 0.5) - 0.5
        except ArithmeticError as exc:
            _trap(report, exc)
            report.write("  X / X  traps when X = %g\n" % x)
            continue
        if v9 == 0.0:
            continue
        if v9 == -state.u1 and index < 5:
            report.bad_cond(Severity.FLAW, "")
        else:
            report.bad_cond(Severity.SERIOUS, "")
        report.write(f"  X / X differs from 1 when X = {x:.17e}\n")
        report.write(f"  instead, X / X - 1/2 - 1/2 = {v9:.17e} .\n")