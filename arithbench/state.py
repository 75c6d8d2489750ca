"""Quantities shared by the stages of the floating-point diagnosis."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import IntEnum

from arithbench.report import Report, Severity


class Rounding(IntEnum):
    """How an operation was found to round."""

    OTHER = 0
    ROUNDED = 1
    CHOPPED = 2


def sign(x: float) -> float:
    """Return 1.0 for non-negative values and -1.0 otherwise."""
    return 1.0 if x >= 0.0 else -1.0


@dataclass
class Arithmetic:
    """What the diagnosis has learned about the arithmetic so far."""

    radix: float = 0.0
    radix_d2: float = 0.0
    precision: float = 0.0
    u1: float = 0.0
    u2: float = 0.0
    w: float = 0.0
    f9: float = 0.0
    third: float = 0.0
    b_inverse: float = 0.0
    b_minus_u2: float = 0.0
    a1: float = 0.0
    a_inverse: float = 0.0

    g_mult: bool = False
    g_div: bool = False
    g_add_sub: bool = False
    r_mult: Rounding = Rounding.OTHER
    r_div: Rounding = Rounding.OTHER
    r_add_sub: Rounding = Rounding.OTHER
    r_sqrt: Rounding = Rounding.OTHER
    sticky_bit: float = 0.0

    min_sq_er: float = 0.0
    max_sq_er: float = 0.0

    random1: float = 0.0
    random2: float = 0.0
    random9: float = 0.0

    c: float = 0.0
    c_inverse: float = 0.0
    h: float = 0.0
    h_inverse: float = 0.0
    e0: float = 0.0
    e1: float = 0.0
    e9: float = 0.0
    uf_thold: float = 0.0
    underflow: float = 0.0
    pseudo_zero: float = 0.0
    uf_s: float = 0.0
    uf_q: float = 0.0
    uf_y: float = 0.0
    uf_y1: float = 0.0
    uf_y2: float = 0.0
    uf_discrepancies: int = 0
    ieee: bool = False

    v: float = 0.0
    v0: float = 0.0

    def random(self) -> float:
        """Advance the pseudo-random sequence and return its next value."""
        x = self.random1 + self.random9
        y = x * x
        y = y * y
        x = x * y
        y = x - math.floor(x)
        self.random1 = y + x * 0.000005
        return self.random1


def test_pseudo_zero(state: Arithmetic, report: Report, z: float) -> int:
    """Check that a tiny nonzero z behaves like a number.

    Returns 1 when a discrepancy was found, otherwise 0.
    """
    discrepancies = 0
    if z == 0.0:
        return discrepancies

    report.write("Since comparison denies Z = 0, evaluating (Z + Z) / Z should be safe.\n")
    try:
        q9 = (z + z) / z
    except ArithmeticError as exc:
        report.fp_errors += 1
        report.write(f"\n* * * FLOATING-POINT ERROR: {exc} * * *\n")
        q9 = None

    if q9 is not None:
        report.write(f"What the machine gets for (Z + Z) / Z is  {q9:.17e} .\n")
    if q9 is not None and abs(q9 - 2.0) < state.radix * state.u2:
        report.write("This is O.K., provided Over/Underflow has NOT just been signaled.\n")
    elif q9 is None or q9 < 1.0 or q9 > 2.0:
        discrepancies = 1
        report.counts[Severity.SERIOUS] += 1
        report.write("This is a VERY SERIOUS DEFECT!\n")
    else:
        discrepancies = 1
        report.counts[Severity.DEFECT] += 1
        report.write("This is a DEFECT!\n")

    state.random1 = z * 1.0
    state.random2 = 1.0 * z
    v9 = z / 1.0
    if z == state.random1 and z == state.random2 and z == v9:
        if discrepancies > 0:
            report.pause()
        return discrepancies

    discrepancies = 1
    report.bad_cond(Severity.DEFECT, "What prints as Z = ")
    report.write(f"{z:.17e}\n\tcompares different from  ")
    if z != state.random1:
        report.write(f"Z * 1 = {state.random1:.17e} ")
    if not (z == state.random2 or state.random2 == state.random1):
        report.write("1 * Z == %g\n" % state.random2)
    if z != v9:
        report.write(f"Z / 1 = {v9:.17e}\n")
    if state.random2 != state.random1:
        report.counts[Severity.DEFECT] += 1
        report.bad_cond(Severity.DEFECT, "Multiplication does not commute!\n")
        report.write(f"\tComparison alleges that 1 * Z = {state.random2:.17e}\n")
        report.write(f"\tdiffers from Z * 1 = {state.random1:.17e}\n")
    report.pause()
    return discrepancies


test_pseudo_zero.__test__ = False