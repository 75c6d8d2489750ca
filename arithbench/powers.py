"""Accuracy of integer powers, of X^((X+1)/(X-1)) near 1, and of extreme powers."""

from __future__ import annotations

import math

from arithbench.report import Report, Severity
from arithbench.rounding import NO_TRIALS
from arithbench.state import Arithmetic


def _power(x: float, y: float) -> float:
    """Raise x to y, giving infinities and NaN where the math library would."""
    odd_integer = y.is_integer() and int(y) % 2 == 1
    try:
        return math.pow(x, y)
    except OverflowError:
        return -math.inf if x < 0.0 and odd_integer else math.inf
    except ValueError:
        if x == 0.0:
            return math.copysign(math.inf, x) if odd_integer else math.inf
        return math.nan


class PowerChecker:
    """Compares computed powers with exact products and counts discrepancies."""

    def __init__(self, state: Arithmetic, report: Report):
        self.state = state
        self.report = report
        self.discrepancies = 0

    def compare(self, x: float, y: float, z: float, q: float) -> bool:
        """Check that y, the computed z ** q, equals x; report the first miss."""
        if y == x:
            return True
        if self.discrepancies <= 0:
            if z == 0.0 and q <= 0.0:
                self.report.write("WARNING:  computing\n")
            else:
                self.report.bad_cond(Severity.DEFECT, "computing\n")
            self.report.write(f"\t({z:.17e}) ^ ({q:.17e})\n")
            self.report.write(f"\tyielded {y:.17e};\n")
            self.report.write(f"\twhich compared unequal to correct {x:.17e} ;\n")
            self.report.write(f"\t\tthey differ by {y - x:.17e} .\n")
        self.discrepancies += 1
        return False

    def run(self, x: float, z: float, first: int, last: int) -> tuple[int, float]:
        """Compare z ** i with x for i from first up, multiplying x by z each step.

        Stops after exponent ``last`` or once x reaches W. Returns the next
        exponent and the last value of x.
        """
        exponent = first
        while True:
            q = float(exponent)
            self.compare(x, _power(z, q), z, q)
            exponent += 1
            if exponent > last:
                break
            x = z * x
            if not x < self.state.w:
                break
        return exponent, x

    def summarize(self) -> int:
        """Mention repeated discrepancies and return how many there were."""
        if self.discrepancies > 0:
            self.report.write(
                "Similar discrepancies have occurred %d times.\n" % self.discrepancies
            )
        return self.discrepancies


def check_small_powers(state: Arithmetic, report: Report) -> int:
    """Test Z^i for small integers Z and i; return the number of discrepancies."""
    report.milestone = 90
    report.pause()
    report.write("Testing powers Z^i for small Integers Z and i.\n")

    zeros = PowerChecker(state, report)
    z = -0.0
    exponent = 0
    while True:
        exponent, x = zeros.run(1.0, z, exponent, 3)
        if exponent <= 10:
            exponent, x = zeros.run(x, z, 1023, 3)
        if z == -1.0:
            break
        z = -1.0
        exponent = -4
    first_count = zeros.summarize()

    checker = PowerChecker(state, report)
    z = state.a1
    last = int(math.floor(2.0 * math.log(state.w) / math.log(state.a1)))
    while True:
        checker.run(z, z, 1, last)
        if z == state.a_inverse:
            break
        z = state.a_inverse

    report.milestone = 100
    z = 3.0
    while True:
        checker.run(z, z, 1, NO_TRIALS)
        while True:
            z = z + 2.0
            if 3.0 * math.floor(z / 3.0) != z:
                break
        if not z < 8.0 * 3.0:
            break
    if checker.discrepancies > 0:
        report.write("Errors like this may invalidate financial calculations\n")
        report.write("\tinvolving interest rates.\n")
    checker.summarize()

    total = checker.discrepancies + first_count
    if total == 0:
        report.write("... no discrepancies found.\n")
    if total > 0:
        report.pause()
    else:
        report.write("\n")
    return total


def compute_exp2() -> float:
    """Sum a series for exp(2) using only basic arithmetic."""
    x = 0.0
    i = 2
    y = 2.0 * 3.0
    q = 0.0
    while True:
        z = x
        i += 1
        y = y / (i + i)
        r = y + q
        x = z + r
        q = (z - x) + r
        if not x > z:
            break
    z = (1.5 + 1.0 / 8.0) + x / (1.5 * 32.0)
    x = z * z
    return x * x


def check_exp2(state: Arithmetic, report: Report) -> int:
    """Compare X^((X + 1) / (X - 1)) with exp(2) as X nears 1.

    Returns 1 when the error was too large, otherwise 0.
    """
    report.milestone = 140
    u1, u2, f9, b_inverse = state.u1, state.u2, state.f9, state.b_inverse
    report.write("\n")
    exp2 = compute_exp2()
    x = f9
    y = x - u1
    discrepancies = 0
    report.write(
        f"Testing X^((X + 1) / (X - 1)) vs. exp(2) = {exp2:.17e} as X -> 1.\n"
    )
    trial = 1
    while True:
        z = x - b_inverse
        z = (x + 1.0) / (z - (1.0 - b_inverse))
        q = _power(x, z) - exp2
        if abs(q) > 240.0 * u2:
            discrepancies = 1
            v9 = (x - b_inverse) - (1.0 - b_inverse)
            report.bad_cond(Severity.DEFECT, "Calculated")
            report.write(f" {_power(x, z):.17e} for\n")
            report.write(f"\t(1 + ({v9:.17e}) ^ ({z:.17e});\n")
            report.write(f"\tdiffers from correct value by {q:.17e} .\n")
            report.write("\tThis much error may spoil financial\n")
            report.write("\tcalculations involving tiny interest rates.\n")
            break
        z = (y - x) * 2.0 + y
        x = y
        y = z
        z = 1.0 + (x - f9) * (x - f9)
        if z > 1.0 and trial < NO_TRIALS:
            trial += 1
        elif x > 1.0:
            if discrepancies == 0:
                report.write("Accuracy seems adequate.\n")
            break
        else:
            x = 1.0 + u2
            y = u2 + u2
            y += x
            trial = 1
    return discrepancies


def check_extreme_powers(state: Arithmetic, report: Report) -> int:
    """Test powers of the base at four nearly extreme values."""
    report.milestone = 150
    report.write("Testing powers Z^Q at four nearly extreme values.\n")
    checker = PowerChecker(state, report)
    z = state.a1
    q = float(math.floor(0.5 - math.log(state.c) / math.log(state.a1)))
    while True:
        checker.compare(state.c_inverse, _power(z, q), z, q)
        q = -q
        checker.compare(state.c, _power(z, q), z, q)
        if z < 1.0:
            break
        z = state.a_inverse
    checker.summarize()
    if checker.discrepancies == 0:
        report.write(" ... no discrepancies found.\n")
    report.write("\n")
    return checker.discrepancies