"""Rounding of multiplication, division and addition; sticky bit; commutativity."""

from __future__ import annotations

import math

from arithbench.report import Report, Severity
from arithbench.state import Arithmetic, Rounding

NO_TRIALS = 20


def _find_a1(radix: float) -> float:
    """Return the small base (the radix, 2 or 10) whose powers are probed later."""
    a1 = 2.0
    while True:
        a_inverse = radix
        while True:
            x = a_inverse
            a_inverse = a_inverse / a1
            if math.floor(a_inverse) != a_inverse:
                break
        if x == 1.0 or a1 > 3.0:
            break
        a1 = 10.0
    return radix if x == 1.0 else a1


def check_multiplication_rounding(state: Arithmetic, report: Report) -> None:
    """Decide whether multiplication rounds correctly, chops, or does neither."""
    report.milestone = 40
    report.pause()
    report.write("Checking rounding on multiply, divide and add/subtract.\n")
    state.r_mult = Rounding.OTHER
    state.r_div = Rounding.OTHER
    state.r_add_sub = Rounding.OTHER
    radix, u2 = state.radix, state.u2
    state.radix_d2 = radix / 2.0

    state.a1 = _find_a1(radix)
    state.a_inverse = 1.0 / state.a1

    x, y = state.a1, state.a_inverse
    while True:
        z = x * y - 0.5
        report.tst_cond(Severity.FAILURE, z == 0.5, "X * (1/X) differs from 1")
        done = x == radix
        x = radix
        y = 1.0 / x
        if done:
            break

    y2 = 1.0 + u2
    y1 = 1.0 - u2
    x = 1.5 - u2
    y = 1.5 + u2
    z = (x - u2) * y2
    t = y * y1
    z = z - x
    t = t - x
    x = x * y2
    y = (y + u2) * y1
    x = x - 1.5
    y = y - 1.5

    if not (x == 0.0 and y == 0.0 and z == 0.0 and t <= 0.0):
        report.write("* is neither chopped nor correctly rounded.\n")
        return

    x = (1.5 + u2) * y2
    y = 1.5 - u2 - u2
    z = 1.5 + u2 + u2
    t = (1.5 - u2) * y1
    x = x - (z + u2)
    sticky = y * y1
    s = z * y2
    t = t - y
    y = (u2 - y) + sticky
    z = s - (z + u2 + u2)
    sticky = (y2 + u2) * y1
    y1 = y2 * y1
    sticky = sticky - y2
    y1 = y1 - 0.5

    if x == 0.0 and y == 0.0 and z == 0.0 and t == 0.0 and sticky == 0.0 and y1 == 0.5:
        state.r_mult = Rounding.ROUNDED
        report.write("Multiplication appears to round correctly.\n")
    elif (
        x + u2 == 0.0
        and y < 0.0
        and z + u2 == 0.0
        and t < 0.0
        and sticky + u2 == 0.0
        and y1 < 0.5
    ):
        state.r_mult = Rounding.CHOPPED
        report.write("Multiplication appears to chop.\n")
    else:
        report.write("* is neither chopped nor correctly rounded.\n")

    if state.r_mult == Rounding.ROUNDED and not state.g_mult:
        report.notify("Multiplication")


def check_division_rounding(state: Arithmetic, report: Report) -> None:
    """Decide whether division rounds correctly, chops, or does neither."""
    report.milestone = 45
    radix, u1, u2, f9 = state.radix, state.u1, state.u2, state.f9

    y2 = 1.0 + u2
    y1 = 1.0 - u2
    z = 1.5 + u2 + u2
    x = z / y2
    t = 1.5 - u2 - u2
    y = (t - u2) / y1
    z = (z + u2) / y2
    x = x - 1.5
    y = y - t
    t = t / y1
    z = z - (1.5 + u2)
    t = (u2 - 1.5) + t

    if not (x > 0.0 or y > 0.0 or z > 0.0 or t > 0.0):
        x = 1.5 / y2
        y = 1.5 - u2
        z = 1.5 + u2
        x = x - y
        t = 1.5 / y1
        y = y / y1
        t = t - (z + u2)
        y = y - z
        z = z / y2
        y1 = (y2 + u2) / y2
        z = z - 1.5
        y2 = y1 - y2
        y1 = (f9 - u1) / f9
        if (
            x == 0.0
            and y == 0.0
            and z == 0.0
            and t == 0.0
            and y2 == 0.0
            and y1 - 0.5 == f9 - 0.5
        ):
            state.r_div = Rounding.ROUNDED
            report.write("Division appears to round correctly.\n")
            if not state.g_div:
                report.notify("Division")
        elif x < 0.0 and y < 0.0 and z < 0.0 and t < 0.0 and y2 < 0.0 and y1 - 0.5 < f9 - 0.5:
            state.r_div = Rounding.CHOPPED
            report.write("Division appears to chop.\n")

    if state.r_div == Rounding.OTHER:
        report.write("/ is neither chopped nor correctly rounded.\n")

    state.b_inverse = 1.0 / radix
    report.tst_cond(
        Severity.FAILURE,
        state.b_inverse * radix - 0.5 == 0.5,
        "Radix * ( 1 / Radix ) differs from 1",
    )


def check_addition_rounding(state: Arithmetic, report: Report) -> None:
    """Check carry propagation and decide how addition/subtraction rounds."""
    report.milestone = 50
    radix, u1, u2, f9 = state.radix, state.u1, state.u2, state.f9

    report.tst_cond(
        Severity.FAILURE,
        (f9 + u1) - 0.5 == 0.5 and (state.b_minus_u2 + u2) - 1.0 == radix - 1.0,
        "Incomplete carry-propagation in Addition",
    )
    x = 1.0 - u1 * u1
    y = 1.0 + u2 * (1.0 - u2)
    z = f9 - 0.5
    x = (x - 0.5) - z
    y = y - 1.0
    if x == 0.0 and y == 0.0:
        state.r_add_sub = Rounding.CHOPPED
        report.write("Add/Subtract appears to be chopped.\n")

    neither = "Addition/Subtraction neither rounds nor chops.\n"
    if not state.g_add_sub:
        report.write(neither)
        return

    x = (0.5 + u2) * u2
    y = (0.5 - u2) * u2
    x = 1.0 + x
    y = 1.0 + y
    x = (1.0 + u2) - x
    y = 1.0 - y
    if not (x == 0.0 and y == 0.0):
        report.write(neither)
        return

    x = (0.5 + u2) * u1
    y = (0.5 - u2) * u1
    x = 1.0 - x
    y = 1.0 - y
    x = f9 - x
    y = 1.0 - y
    if x == 0.0 and y == 0.0:
        state.r_add_sub = Rounding.ROUNDED
        report.write("Addition/Subtraction appears to round correctly.\n")
    else:
        report.write(neither)


def _sticky_bit_works(state: Arithmetic) -> bool:
    radix, u1, u2, f9 = state.radix, state.u1, state.u2, state.f9

    x = (0.5 + u1) * u2
    y = 0.5 * u2
    z = 1.0 + y
    t = 1.0 + x
    if not (z - 1.0 <= 0.0 and t - 1.0 >= u2):
        return False

    z = t + y
    y = z - x
    if not (z - t >= u2 and y - t == 0.0):
        return False

    x = (0.5 + u1) * u1
    y = 0.5 * u1
    z = 1.0 - y
    t = 1.0 - x
    if not (z - 1.0 == 0.0 and t - f9 == 0.0):
        return False

    z = (0.5 - u1) * u1
    t = f9 - z
    q = f9 - y
    if not (t - f9 == 0.0 and f9 - u1 - q == 0.0):
        return False

    z = (1.0 + u2) * 1.5
    t = (1.5 + u2) - z + u2
    x = 1.0 + 0.5 / radix
    y = 1.0 + radix * u2
    z = x * y
    if not (t == 0.0 and x + radix * u2 - z == 0.0):
        return False

    if radix != 2.0:
        x = 2.0 + u2
        y = x / 2.0
        return y - 1.0 == 0.0
    return True


def check_sticky_bit(state: Arithmetic, report: Report) -> None:
    """Look for a sticky bit and tally guard-digit and rounding shortcomings."""
    radix, u2 = state.radix, state.u2

    s = 1.0
    x = 1.0 + 0.5 * (1.0 + 0.5)
    y = (1.0 + u2) * 0.5
    z = x - y
    t = y - x
    if z + t != 0.0:
        s = 0.0
        report.bad_cond(Severity.FLAW, "(X - Y) + (Y - X) is non zero!\n")

    sticky = 0.0
    if (
        state.g_mult
        and state.g_div
        and state.g_add_sub
        and state.r_mult == Rounding.ROUNDED
        and state.r_div == Rounding.ROUNDED
        and state.r_add_sub == Rounding.ROUNDED
        and math.floor(state.radix_d2) == state.radix_d2
    ):
        report.write("Checking for sticky bit.\n")
        if _sticky_bit_works(state):
            sticky = s
    state.sticky_bit = sticky

    if sticky == 1.0:
        report.write("Sticky bit apparently used correctly.\n")
    else:
        report.write("Sticky bit used incorrectly or not at all.\n")

    report.tst_cond(
        Severity.FLAW,
        not (
            not state.g_mult
            or not state.g_div
            or not state.g_add_sub
            or state.r_mult == Rounding.OTHER
            or state.r_div == Rounding.OTHER
            or state.r_add_sub == Rounding.OTHER
        ),
        "lack(s) of guard digits or failure(s) to correctly round or chop\n"
        "(noted above) count as one flaw in the final tally below",
    )
    del radix


def check_commutativity(state: Arithmetic, report: Report) -> None:
    """Check that X * Y == Y * X on pseudo-random pairs."""
    report.milestone = 60
    u1, u2 = state.u1, state.u2
    report.write("\n")
    report.write("Does Multiplication commute?  ")
    report.write("Testing on %d random pairs.\n" % NO_TRIALS)

    state.random9 = math.sqrt(3.0)
    state.random1 = state.third
    trial = 1
    while True:
        x = state.random()
        y = state.random()
        z9 = y * x
        z = x * y
        z9 = z - z9
        trial += 1
        if trial > NO_TRIALS or z9 != 0.0:
            break

    if trial == NO_TRIALS:
        state.random1 = 1.0 + 0.5 / 3.0
        state.random2 = (u2 + u1) + 1.0
        z9 = (1.0 + 0.5 / 3.0) * ((u2 + u1) + 1.0) - (1.0 + 0.5 / 3.0) * ((u2 + u1) + 1.0)

    if not (trial == NO_TRIALS or z9 == 0.0):
        report.bad_cond(Severity.DEFECT, "X * Y == Y * X trial fails.\n")
    else:
        report.write("     No failures found in %d integer pairs.\n" % NO_TRIALS)