"""Underflow thresholds: abrupt, gradual or fuzzy underflow."""

from __future__ import annotations

import math

from arithbench.report import Report, Severity
from arithbench.state import Arithmetic, test_pseudo_zero


def _trap(report: Report, exc: BaseException) -> None:
    report.fp_errors += 1
    report.write(f"\n* * * FLOATING-POINT ERROR: {exc} * * *\n")


def _log(x: float) -> float:
    if x > 0.0:
        return math.log(x)
    return -math.inf if x == 0.0 else math.nan


def _floor(x: float) -> float:
    return float(math.floor(x)) if math.isfinite(x) else x


def find_underflow(state: Arithmetic, report: Report) -> None:
    """Seek the underflow thresholds UfThold and E0 and a pseudo-zero."""
    report.milestone = 110
    radix, u1, u2, b_inverse = state.radix, state.u1, state.u2, state.b_inverse
    report.write("Seeking Underflow thresholds UfThold and E0.\n")

    d = u1
    if state.precision != math.floor(state.precision):
        d = b_inverse
        x = state.precision
        while True:
            d = d * b_inverse
            x = x - 1.0
            if not x > 0.0:
                break

    # d is a power of 1/radix below 1.
    y = 1.0
    z = d
    while True:
        c = y
        y = z
        z = y * y
        if not (y > z and z + z > z):
            break
    y = c
    z = y * d
    while True:
        c = y
        y = z
        z = y * d
        if not (y > z and z + z > z):
            break

    h_inverse = 2.0 if radix < 2.0 else radix
    h = 1.0 / h_inverse
    c_inverse = 1.0 / c
    e0 = c
    z = e0 * h
    while True:
        y = e0
        e0 = z
        z = e0 * h
        if not (e0 > z and z + z > z):
            break

    uf_thold = e0
    e1 = 0.0
    q = 0.0
    e9 = u2
    s = 1.0 + e9
    d = c * s
    underflow = 0.0
    pseudo_zero = 0.0
    y1 = 0.0
    y2 = 0.0
    if d <= c:
        e9 = radix * u2
        s = 1.0 + e9
        d = c * s
        if d <= c:
            report.bad_cond(Severity.FAILURE, "multiplication gets too many last digits wrong.\n")
            underflow = e0
            y1 = 0.0
            pseudo_zero = z
            report.pause()
    else:
        underflow = d
        pseudo_zero = underflow * h
        uf_thold = 0.0
        while True:
            y1 = underflow
            underflow = pseudo_zero
            if e1 + e1 <= e1:
                y2 = underflow * h_inverse
                e1 = abs(y1 - y2)
                q = y1
                if uf_thold == 0.0 and y1 != y2:
                    uf_thold = y1
            pseudo_zero = pseudo_zero * h
            if not (underflow > pseudo_zero and pseudo_zero + pseudo_zero > pseudo_zero):
                break

    state.c = c
    state.c_inverse = c_inverse
    state.h = h
    state.h_inverse = h_inverse
    state.e0 = e0
    state.e1 = e1
    state.e9 = e9
    state.uf_thold = uf_thold
    state.underflow = underflow
    state.pseudo_zero = pseudo_zero
    state.uf_s = s
    state.uf_q = q
    state.uf_y = y
    state.uf_y1 = y1
    state.uf_y2 = y2

    if pseudo_zero != 0.0:
        report.write("\n")
        if pseudo_zero <= 0.0:
            report.bad_cond(Severity.FAILURE, "Positive expressions can underflow to an\n")
            report.write("allegedly negative value\n")
            report.write("PseudoZero that prints out as: %g .\n" % pseudo_zero)
            x = -pseudo_zero
            if x <= 0.0:
                report.write("But -PseudoZero, which should be\n")
                report.write("positive, isn't; it prints out as  %g .\n" % x)
        else:
            report.bad_cond(Severity.FLAW, "Underflow can stick at an allegedly positive\n")
            report.write("value PseudoZero that prints out as %g .\n" % pseudo_zero)
        test_pseudo_zero(state, report, pseudo_zero)


def classify_underflow(state: Arithmetic, report: Report) -> None:
    """Decide whether underflow is gradual and settle the threshold UfThold."""
    report.milestone = 120
    u1, u2 = state.u1, state.u2
    h, c_inverse = state.h, state.c_inverse
    e0, e1, s, q, y = state.e0, state.e1, state.uf_s, state.uf_q, state.uf_y
    uf_thold = state.uf_thold

    if c_inverse * y > c_inverse * state.uf_y1:
        s = h * s
        e0 = state.underflow

    if not (e1 == 0.0 or e1 == e0):
        report.bad_cond(Severity.DEFECT, "")
        if e1 < e0:
            report.write("Products underflow at a higher")
            report.write(" threshold than differences.\n")
            if state.pseudo_zero == 0.0:
                e0 = e1
        else:
            report.write("Difference underflows at a higher")
            report.write(" threshold than products.\n")

    report.write("Smallest strictly positive number found is E0 = %g .\n" % e0)
    state.e0 = e0
    discrepancies = test_pseudo_zero(state, report, e0)
    underflow = e0
    if discrepancies == 1:
        underflow = y

    case = 4
    if e1 == 0.0:
        case = 3
    if uf_thold == 0.0:
        case -= 2

    not_gradual = True
    if case == 1:
        uf_thold = underflow
        if c_inverse * q != (c_inverse * y) * s:
            uf_thold = y
            report.bad_cond(Severity.FAILURE, "Either accuracy deteriorates as numbers\n")
            report.write(f"approach a threshold = {uf_thold:.17e}\n")
            report.write(f" coming down from {state.c:.17e}\n")
            report.write(" or else multiplication gets too many last digits wrong.\n")
        report.pause()
    elif case == 2:
        report.bad_cond(Severity.FAILURE, "Underflow confuses Comparison, which alleges that\n")
        report.write("Q == Y while denying that |Q - Y| == 0; these values\n")
        report.write(f"print out as Q = {q:.17e}, Y = {state.uf_y2:.17e} .\n")
        report.write(f"|Q - Y| = {abs(q - state.uf_y2):.17e} .\n")
        uf_thold = q
    elif case == 4:
        if q == uf_thold and e1 == e0 and abs(uf_thold - e1 / state.e9) <= e1:
            not_gradual = False
            report.write("Underflow is gradual; it incurs Absolute Error =\n")
            report.write("(roundoff in UfThold) < E0.\n")
            y = e0 * c_inverse
            y = y * (1.5 + u2)
            x = c_inverse * (1.0 + u2)
            y = y / x
            state.ieee = y == e0

    if not_gradual:
        report.write("\n")
        try:
            r = math.sqrt(underflow / uf_thold)
        except (ArithmeticError, ValueError) as exc:
            _trap(report, exc)
            report.write("Underflow / UfThold failed!\n")
            r = h + h
        if r <= h:
            z = r * uf_thold
            x = z * (1.0 + r * h * (1.0 + h))
        else:
            z = uf_thold
            x = z * (1.0 + h * h * (1.0 + h))
        if not (x == z or x - z != 0.0):
            report.bad_cond(Severity.FLAW, "")
            report.write(f"X = {x:.17e}\n\tis not equal to Z = {z:.17e} .\n")
            report.write(f"yet X - Z yields {x - z:.17e} .\n")
            report.write("    Should this NOT signal Underflow, ")
            report.write("this is a SERIOUS DEFECT\nthat causes ")
            report.write("confusion when innocent statements like\n")
            report.write("    if (X == Z)  ...  else")
            report.write("  ... (f(X) - f(Z)) / (X - Z) ...\n")
            report.write("encounter Division by Zero although actually\n")
            try:
                ratio = (x / z - 0.5) - 0.5
            except ArithmeticError as exc:
                _trap(report, exc)
                report.write("X / Z fails!\n")
            else:
                report.write("X / Z = 1 + %g .\n" % ratio)

    report.write("The Underflow threshold is %.17e, %s\n" % (uf_thold, " below which"))
    report.write("calculation may suffer larger Relative error than ")
    report.write("merely roundoff.\n")

    y2 = u1 * u1
    y = y2 * y2
    y2 = y * u1
    if y2 <= uf_thold:
        if y > e0:
            report.bad_cond(Severity.DEFECT, "")
            power = 5
        else:
            report.bad_cond(Severity.SERIOUS, "")
            power = 4
        report.write("Range is too narrow; U1^%d Underflows.\n" % power)

    state.uf_s = s
    state.underflow = underflow
    state.uf_thold = uf_thold
    state.uf_discrepancies = discrepancies


def check_underflow_power(state: Arithmetic, report: Report) -> None:
    """Check that a power expected to underflow gives a tiny, sane value."""
    report.milestone = 130
    h_inverse, uf_thold, e9 = state.h_inverse, state.uf_thold, state.e9

    y = -_floor(0.5 - 240.0 * _log(uf_thold) / math.log(h_inverse)) / 240.0
    y2 = y + y
    report.write("Since underflow occurs below the threshold\n")
    report.write(f"UfThold = ({h_inverse:.17e}) ^ ({y:.17e})\nonly underflow ")
    report.write(f"should afflict the expression\n\t({h_inverse:.17e}) ^ ({y2:.17e});\n")
    report.write("actually calculating yields:")
    try:
        v9 = math.pow(h_inverse, y2)
    except (OverflowError, ValueError) as exc:
        _trap(report, exc)
        report.bad_cond(Severity.SERIOUS, "trap on underflow.\n")
        return

    report.write(f" {v9:.17e} .\n")
    if not (v9 >= 0.0 and v9 <= (state.radix + state.radix + e9) * uf_thold):
        report.bad_cond(Severity.SERIOUS, "this is not between 0 and underflow\n")
        report.write(f"   threshold = {uf_thold:.17e} .\n")
    elif not v9 > uf_thold * (1.0 + e9):
        report.write("This computed value is O.K.\n")
    else:
        report.bad_cond(Severity.DEFECT, "this is not between 0 and underflow\n")
        report.write(f"   threshold = {uf_thold:.17e} .\n")