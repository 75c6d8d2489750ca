"""Small-integer sanity checks, radix and precision discovery, guard digits."""

from __future__ import annotations

import math

from arithbench.report import Report, Severity
from arithbench.state import Arithmetic, test_pseudo_zero


def check_small_integers(state: Arithmetic, report: Report) -> None:
    """Check arithmetic on -1, 0, 1/2 and a few small integers."""
    report.milestone = 7
    report.write("Program is now RUNNING tests on small integers:\n")

    report.tst_cond(Severity.FAILURE, 0.0 + 0.0 == 0.0, "0+0 != 0")
    report.tst_cond(Severity.FAILURE, 1.0 - 1.0 == 0.0, "1-1 != 0")
    report.tst_cond(Severity.FAILURE, 1.0 > 0.0, "1 <= 0")
    report.tst_cond(Severity.FAILURE, 1.0 + 1.0 == 2.0, "1+1 != 2")

    z = -0.0
    if z != 0.0:
        report.counts[Severity.FAILURE] += 1
        report.write("Comparison alleges that -0.0 is Non-zero!\n")
        state.u2 = 0.001
        state.radix = 1.0
        test_pseudo_zero(state, report, z)

    report.tst_cond(Severity.FAILURE, 3.0 == 2.0 + 1.0, "3 != 2+1")
    report.tst_cond(Severity.FAILURE, 4.0 == 3.0 + 1.0, "4 != 3+1")
    report.tst_cond(Severity.FAILURE, 4.0 + 2.0 * (-2.0) == 0.0, "4+2*(-2) != 0")
    report.tst_cond(Severity.FAILURE, 4.0 - 3.0 - 1.0 == 0.0, "4-3-1 != 0")

    minus_one = -1.0
    report.tst_cond(
        Severity.FAILURE,
        minus_one == (0 - 1.0)
        and minus_one + 1.0 == 0.0
        and 1.0 + minus_one == 0.0
        and minus_one + abs(1.0) == 0.0
        and minus_one + minus_one * minus_one == 0.0,
        "-1+1 != 0, (-1)+abs(1) != 0, or -1+(-1)*(-1) != 0",
    )
    report.tst_cond(Severity.FAILURE, 0.5 + minus_one + 0.5 == 0.0, "1/2 + (-1) + 1/2 != 0")

    report.milestone = 10

    report.tst_cond(
        Severity.FAILURE,
        9.0 == 3.0 * 3.0
        and 27.0 == 9.0 * 3.0
        and 8.0 == 4.0 + 4.0
        and 32.0 == 8.0 * 4.0
        and 32.0 - 27.0 - 4.0 - 1.0 == 0.0,
        "9 != 3*3, 27 != 9*3, 32 != 8*4, or 32-27-4-1 != 0",
    )
    report.tst_cond(
        Severity.FAILURE,
        5.0 == 4.0 + 1.0
        and 240.0 == 4.0 * 5.0 * 3.0 * 4.0
        and 240.0 / 3.0 - 4.0 * 4.0 * 5.0 == 0.0
        and 240.0 / 4.0 - 5.0 * 3.0 * 4.0 == 0.0
        and 240.0 / 5.0 - 4.0 * 3.0 * 4.0 == 0.0,
        "5 != 4+1, 240/3 != 80, 240/4 != 60, or 240/5 != 48",
    )

    if report.counts[Severity.FAILURE] == 0:
        report.write("-1, 0, 1/2, 1, 2, 3, 4, 5, 9, 27, 32 & 240 are O.K.\n")
        report.write("\n")


def _settle_above_one(x: float) -> float:
    """Shrink an estimate down to one ulp of numbers just above 1."""
    while True:
        u = x
        y = 1.0 + (0.5 * u + 32.0 * u * u)
        x = y - 1.0
        if u <= x or x <= 0.0:
            return u


def _settle_below_one(x: float) -> float:
    """Shrink an estimate down to one ulp of numbers just below 1."""
    while True:
        u = x
        y = 0.5 - (0.5 * u + 32.0 * u * u)
        x = 0.5 + y
        y = 0.5 - x
        x = 0.5 + y
        if u <= x or x <= 0.0:
            return u


def find_radix_and_precision(state: Arithmetic, report: Report) -> None:
    """Discover the radix, the precision and the ulps U1 and U2."""
    report.write("Searching for Radix and Precision.\n")
    w = 1.0
    while True:
        w = w + w
        y = w + 1.0
        z = y - w
        y = z - 1.0
        if not (-1.0 + abs(y) < 0.0):
            break

    # Now w is just big enough that |((w+1)-w)-1| >= 1.
    precision = 0.0
    y = 1.0
    while True:
        radix = w + y
        y = y + y
        radix = radix - w
        if radix != 0.0:
            break
    if radix < 2.0:
        radix = 1.0
    report.write("Radix = %f\n" % radix)

    if radix != 1:
        w = 1.0
        while True:
            precision = precision + 1.0
            w = w * radix
            y = w + 1.0
            if (y - w) != 1.0:
                break

    u1 = 1.0 / w
    u2 = radix * u1
    report.write("Closest relative separation found is U1 = %.7e\n" % u1)
    report.write("\n")
    report.write("Recalculating radix and precision\n")

    e0 = radix
    e1 = u1

    x = 4.0 / 3.0
    third = x - 1.0
    f6 = 0.5 - third
    x = f6 + f6
    x = abs(x - third)
    if x < u2:
        x = u2
    u2 = _settle_above_one(x)

    x = 2.0 / 3.0
    f6 = x - 0.5
    third = f6 + f6
    x = third - 0.5
    x = abs(x + f6)
    if x < u1:
        x = u1
    u1 = _settle_below_one(x)

    if u1 == e1:
        report.write("confirms closest relative separation U1 .\n")
    else:
        report.write("gets better closest relative separation U1 = %.7e .\n" % u1)

    w = 1.0 / u1
    f9 = (0.5 - u1) + 0.5
    radix = math.floor(0.01 + u2 / u1)
    radix = float(radix)

    if radix == e0:
        report.write("Radix confirmed.\n")
    else:
        report.write("MYSTERY: recalculated Radix = %.7e .\n" % radix)

    report.tst_cond(Severity.DEFECT, radix <= 8.0 + 8.0, "Radix is too big: roundoff problems")
    report.tst_cond(
        Severity.FLAW,
        radix == 2.0 or radix == 10 or radix == 1.0,
        "Radix is not as good as 2 or 10",
    )

    report.milestone = 20
    report.tst_cond(Severity.FAILURE, f9 - 0.5 < 0.5, "(1-U1)-1/2 < 1/2 is FALSE, prog. fails?")
    x = f9
    y = x - 0.5
    z = y - 0.5
    report.tst_cond(
        Severity.FAILURE,
        x != 1.0 or z == 0.0,
        "Comparison is fuzzy,X=1 but X-1/2-1/2 != 0",
    )

    report.milestone = 25
    b_minus_u2 = radix - 1.0
    b_minus_u2 = (b_minus_u2 - u2) + 1.0

    if radix != 1.0:
        x = -240.0 * math.log(u1) / math.log(radix)
        y = math.floor(0.5 + x)
        if abs(x - y) * 4.0 < 1.0:
            x = float(y)
        precision = x / 240.0
        y = math.floor(0.5 + precision)
        if abs(precision - y) * 240.0 < 0.5:
            precision = float(y)

    if precision != math.floor(precision) or radix == 1.0:
        report.write("Precision cannot be characterized by an Integer number\n")
        report.write("of significant digits but, by itself, this is a minor flaw.\n")
    if radix == 1.0:
        report.write("logarithmic encoding has precision characterized solely by U1.\n")
    else:
        report.write("The number of significant digits of the Radix is %f .\n" % precision)

    report.tst_cond(
        Severity.SERIOUS,
        u2 * 9.0 * 9.0 * 240.0 < 1.0,
        "Precision worse than 5 decimal figures  ",
    )

    state.radix = radix
    state.precision = precision
    state.u1 = u1
    state.u2 = u2
    state.w = w
    state.f9 = f9
    state.third = third
    state.b_minus_u2 = b_minus_u2


def check_extra_precision(state: Arithmetic, report: Report) -> None:
    """Look for subexpressions evaluated with more precision than stored."""
    report.milestone = 30
    u1, u2, f9, radix = state.u1, state.u2, state.f9, state.radix

    z2 = _settle_above_one(abs(((4.0 / 3.0 - 1.0) - 1.0 / 4.0) * 3.0 - 1.0 / 4.0))

    x = y = z = abs((3.0 / 4.0 - 2.0 / 3.0) * 3.0 - 1.0 / 4.0)
    while True:
        z1 = z
        z = (1.0 / 2.0 - ((1.0 / 2.0 - (0.5 * z1 + 32.0 * z1 * z1)) + 1.0 / 2.0)) + 1.0 / 2.0
        if z1 <= z or z <= 0.0:
            break
    while True:
        while True:
            y1 = y
            y = (0.5 - ((0.5 - (0.5 * y1 + 32.0 * y1 * y1)) + 0.5)) + 0.5
            if y1 <= y or y <= 0.0:
                break
        x1 = x
        x = ((0.5 * x1 + 32.0 * x1 * x1) - f9) + f9
        if x1 <= x or x <= 0.0:
            break

    if x1 != y1 or x1 != z1:
        report.bad_cond(Severity.SERIOUS, "Disagreements among the values X1, Y1, Z1,\n")
        report.write("respectively  %.7e,  %.7e,  %.7e,\n" % (x1, y1, z1))
        report.write("are symptoms of inconsistencies introduced\n")
        report.write("by extra-precise evaluation of arithmetic subexpressions.\n")
        report.notify("Possibly some part of this")
        if x1 == u1 or y1 == u1 or z1 == u1:
            report.write("That feature is not tested further by this program.\n")
    elif z1 != u1 or z2 != u2:
        if z1 >= u1 or z2 >= u2:
            report.bad_cond(Severity.FAILURE, "")
            report.notify("Precision")
            report.write("\tU1 = %.7e, Z1 - U1 = %.7e\n" % (u1, z1 - u1))
            report.write("\tU2 = %.7e, Z2 - U2 = %.7e\n" % (u2, z2 - u2))
        else:
            if z1 <= 0.0 or z2 <= 0.0:
                report.write("Because of unusual Radix = %f" % radix)
                report.write(", or exact rational arithmetic a result\n")
                report.write("Z1 = %.7e, or Z2 = %.7e " % (z1, z2))
                report.notify("of an\nextra-precision")
            if z1 != z2 or z1 > 0.0:
                x = z1 / u1
                y = z2 / u2
                if y > x:
                    x = y
                q = -math.log(x)
                report.write("Some subexpressions appear to be calculated extra\n")
                report.write("precisely with about %g extra B-digits, i.e.\n" % (q / math.log(radix)))
                report.write("roughly %g extra significant decimals.\n" % (q / math.log(10.0)))
            report.write("That feature is not tested further by this program.\n")
    report.pause()


def check_guard_digits(state: Arithmetic, report: Report) -> None:
    """Check normalization of subtraction and guard digits in *, / and -."""
    report.milestone = 35
    radix, u1, u2, f9, w = state.radix, state.u1, state.u2, state.f9, state.w

    if radix >= 2.0:
        x = w / (radix * radix)
        y = x + 1.0
        z = y - x
        t = z + u2
        x = t - z
        report.tst_cond(Severity.FAILURE, x == u2, "Subtraction is not normalized X=Y,X+Z != Y+Z!")
        if x == u2:
            report.write("Subtraction appears to be normalized, as it should be.")

    report.write("\nChecking for guard digit in *, /, and -.\n")
    y = f9 * 1.0
    z = 1.0 * f9
    x = f9 - 0.5
    y = (y - 0.5) - x
    z = (z - 0.5) - x
    x = 1.0 + u2
    t = x * radix
    r = radix * x
    x = t - radix
    x = x - radix * u2
    t = r - radix
    t = t - radix * u2
    x = x * (radix - 1.0)
    t = t * (radix - 1.0)
    state.g_mult = x == 0.0 and y == 0.0 and z == 0.0 and t == 0.0
    if not state.g_mult:
        report.tst_cond(Severity.SERIOUS, False, "* lacks a Guard Digit, so 1*X != X")

    z = radix * u2
    x = 1.0 + z
    y = abs((x + z) - x * x) - u2
    x = 1.0 - u2
    z = abs((x - u2) - x * x) - u1
    report.tst_cond(Severity.FAILURE, y <= 0.0 and z <= 0.0, "* gets too many final digits wrong.\n")

    y = 1.0 - u2
    x = 1.0 + u2
    z = 1.0 / y
    y = z - x
    x = 1.0 / 3.0
    z = 3.0 / 9.0
    x = x - z
    t = 9.0 / 27.0
    z = z - t
    report.tst_cond(
        Severity.DEFECT,
        x == 0.0 and y == 0.0 and z == 0.0,
        "Division lacks a Guard Digit, so error can exceed 1 ulp\n"
        "or  1/3  and  3/9  and  9/27 may disagree",
    )

    y = f9 / 1.0
    x = f9 - 0.5
    y = (y - 0.5) - x
    x = 1.0 + u2
    t = x / 1.0
    x = t - x
    state.g_div = x == 0.0 and y == 0.0 and z == 0.0
    if not state.g_div:
        report.tst_cond(Severity.SERIOUS, False, "Division lacks a Guard Digit, so X/1 != X")

    x = 1.0 / (1.0 + u2)
    y = x - 0.5 - 0.5
    report.tst_cond(Severity.SERIOUS, y < 0.0, "Computed value of 1/1.000..1 >= 1")

    x = 1.0 - u2
    y = 1.0 + radix * u2
    z = x * radix
    t = y * radix
    r = z / radix
    sticky = t / radix
    x = r - x
    y = sticky - y
    report.tst_cond(
        Severity.FAILURE,
        x == 0.0 and y == 0.0,
        "* and/or / gets too many last digits wrong",
    )

    y = 1.0 - u1
    x = 1.0 - f9
    y = 1.0 - y
    t = radix - u2
    z = radix - state.b_minus_u2
    t = radix - t
    state.g_add_sub = x == u1 and y == u1 and z == u2 and t == u2
    if not state.g_add_sub:
        report.tst_cond(Severity.SERIOUS, False, "- lacks Guard Digit, so cancellation is obscured")

    if f9 != 1.0 and f9 - 1.0 >= 0.0:
        report.bad_cond(Severity.SERIOUS, "comparison alleges  (1-U1) < 1  although\n")
        report.write("  subtraction yields  (1-U1) - 1 = 0 , thereby vitiating\n")
        report.write("  such precautions against division by zero as\n")
        report.write("  ...  if (X == 1.0) {.....} else {.../(X-1.0)...}\n")

    if state.g_mult and state.g_div and state.g_add_sub:
        report.write("     *, /, and - appear to have guard digits, as they should.\n")