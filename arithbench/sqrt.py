"""Square root accuracy, monotonicity and rounding."""

from __future__ import annotations

import math
from dataclasses import dataclass

from arithbench.report import Report, Severity
from arithbench.rounding import NO_TRIALS
from arithbench.state import Arithmetic, Rounding, sign


def _note_error(state: Arithmetic, sq_er: float) -> None:
    if sq_er < state.min_sq_er:
        state.min_sq_er = sq_er
    if sq_er > state.max_sq_er:
        state.max_sq_er = sq_er


def _sqrt_of_square(
    state: Arithmetic, report: Report, x: float, one_ulp: float, severity: Severity
) -> bool:
    """Check sqrt(x * x) against x; return True when it is off."""
    xb = x * state.b_inverse
    xa = x - xb
    sq_er = ((math.sqrt(x * x) - xb) - xa) / one_ulp
    if sq_er == 0.0:
        return False
    _note_error(state, sq_er)
    report.bad_cond(severity, "\n")
    report.write(f"sqrt( {x * x:.17e}) - {x:.17e}  = {one_ulp * sq_er:.17e}\n")
    report.write("\tinstead of correct value 0 .\n")
    return True


def check_sqrt(state: Arithmetic, report: Report) -> None:
    """Test sqrt on special values, exact squares and for monotonicity."""
    report.milestone = 70
    radix, u1, u2, b_inverse = state.radix, state.u1, state.u2, state.b_inverse

    report.write("\nRunning test of square root(x).\n")
    report.tst_cond(
        Severity.FAILURE,
        0.0 == math.sqrt(0.0) and -0.0 == math.sqrt(-0.0) and 1.0 == math.sqrt(1.0),
        "Square root of 0.0, -0.0 or 1.0 wrong",
    )
    state.min_sq_er = 0.0
    state.max_sq_er = 0.0

    errors = [
        _sqrt_of_square(state, report, radix, u2, Severity.SERIOUS),
        _sqrt_of_square(state, report, b_inverse, b_inverse * u1, Severity.SERIOUS),
        _sqrt_of_square(state, report, u1, u1 * u1, Severity.SERIOUS),
    ]
    if any(errors):
        report.pause()

    report.write("Testing if sqrt(X * X) == X for %d Integers X.\n" % NO_TRIALS)
    x = 2.0
    y = radix
    if radix != 1.0:
        while True:
            x = y
            y = radix * y
            if y - x >= NO_TRIALS:
                break
    one_ulp = x * u2
    for _ in range(NO_TRIALS):
        x = x + 1.0
        if _sqrt_of_square(state, report, x, one_ulp, Severity.DEFECT):
            break

    report.write("Test for sqrt monotonicity.\n")
    step = -1
    x = state.b_minus_u2
    y = radix
    z = radix + radix * u2
    monotonic = False
    while True:
        step += 1
        x = math.sqrt(x)
        q = math.sqrt(y)
        z = math.sqrt(z)
        if x > q or q > z:
            break
        q = float(math.floor(q + 0.5))
        if not (step > 0 or radix == q * q):
            monotonic = True
            break
        if step > 0:
            if step > 1:
                monotonic = True
                break
            y = y * b_inverse
            x = y - u1
            z = y + u1
        else:
            y = q
            x = y - u2
            z = y + u2

    if monotonic:
        report.write("sqrt has passed a test for Monotonicity.\n")
    else:
        report.bad_cond(Severity.DEFECT, "")
        report.write(f"sqrt(X) is non-monotonic for X near {y:.7e} .\n")


@dataclass
class _RootSearch:
    """Working values of the search for square roots that are hard to round."""

    state: Arithmetic
    d: float
    q: float = 0.0
    z: float = 0.0
    z1: float = 0.0
    z2: float = 0.0
    x8: float = 0.0
    hits: int = 0

    def new_d(self) -> None:
        radix = self.state.radix
        x = self.z1 * self.q
        x = math.floor(0.5 - x / radix) * radix + x
        self.q = (self.q - x * self.z) / radix + x * x * (self.d / radix)
        self.z = self.z - 2.0 * x * self.d
        if self.z <= 0.0:
            self.z = -self.z
            self.z1 = -self.z1
        self.d = radix * self.d

    def probe(self, x: float, y: float) -> None:
        radix, w = self.state.radix, self.state.w
        z2 = self.z2
        if x - radix < z2 - radix or x - z2 > w - z2:
            return
        self.hits += 1
        x2 = math.sqrt(x * self.d)
        y2 = (x2 - z2) - (y - z2)
        x2 = self.x8 / (y - 0.5)
        x2 = x2 - 0.5 * x2 * x2
        sq_er = (y2 + 0.5) + (0.5 - x2)
        if sq_er < self.state.min_sq_er:
            self.state.min_sq_er = sq_er
        sq_er = y2 - x2
        if sq_er > self.state.max_sq_er:
            self.state.max_sq_er = sq_er


def _sqrt_rounding_is_anomalous(state: Arithmetic) -> bool:
    """Probe sqrt near hard cases; return True if the arithmetic defeats the probe."""
    radix, u2, f9, w = state.radix, state.u2, state.f9, state.w
    d = float(math.floor(0.5 + math.pow(radix, 1.0 + state.precision - math.floor(state.precision))))
    x = d / radix
    y = d / state.a1
    if x != math.floor(x) or y != math.floor(y):
        return True

    search = _RootSearch(state, d)
    x = 0.0
    search.z2 = x
    y = 1.0
    y2 = y
    search.z1 = radix - 1.0
    four_d = 4.0 * d
    while True:
        if y2 > search.z2:
            q = radix
            y1 = y
            while True:
                x1 = abs(q + math.floor(0.5 - q / y1) * y1)
                q = y1
                y1 = x1
                if x1 <= 0.0:
                    break
            if q <= 1.0:
                search.z2 = y2
                search.z = y
        y = y + 2.0
        x = x + 8.0
        y2 = y2 + x
        if y2 >= four_d:
            y2 = y2 - four_d
        if y >= d:
            break

    x8 = four_d - search.z2
    search.q = (x8 + search.z * search.z) / four_d
    search.x8 = x8 / 8.0
    if search.q != math.floor(search.q):
        return True

    found = False
    while True:
        x = search.z1 * search.z
        x = x - math.floor(x / radix) * radix
        if x == 1.0:
            found = True
            break
        search.z1 = search.z1 - 1.0
        if search.z1 <= 0.0:
            break
    if not found:
        return True

    if search.z1 > state.radix_d2:
        search.z1 = search.z1 - radix
    while True:
        search.new_d()
        if u2 * search.d >= f9:
            break
    d = search.d
    if d * radix - d != w - d:
        return True

    z, q = search.z, search.q
    search.z2 = d
    z2 = d
    search.hits = 0
    search.probe(d + z + q, d + (1.0 + z) * 0.5)
    x = d - z + d
    search.probe(x + q + x, d + (1.0 - z) * 0.5 + d)
    search.new_d()
    d = search.d
    if d - z2 != w - z2:
        return True
    z, q = search.z, search.q
    search.probe((d - z2) + (z2 - z + q), (d - z2) + (z2 + (1.0 - z) * 0.5))
    search.probe(q, (1.0 + z) * 0.5)
    return search.hits == 0


def check_sqrt_rounding(state: Arithmetic, report: Report) -> None:
    """Measure sqrt errors in ulps and decide whether sqrt rounds or chops."""
    report.milestone = 80
    radix, u1, u2, f9 = state.radix, state.u1, state.u2, state.f9

    state.min_sq_er += 0.5
    state.max_sq_er -= 0.5
    y = (math.sqrt(1.0 + u2) - 1.0) / u2
    sq_er = (y - 1.0) + u2 / 8.0
    if sq_er > state.max_sq_er:
        state.max_sq_er = sq_er
    sq_er = y + u2 / 8.0
    if sq_er < state.min_sq_er:
        state.min_sq_er = sq_er
    y = ((math.sqrt(f9) - u2) - (1.0 - u2)) / u1
    sq_er = y + u1 / 8.0
    if sq_er > state.max_sq_er:
        state.max_sq_er = sq_er
    sq_er = (y + 1.0) + u1 / 8.0
    if sq_er < state.min_sq_er:
        state.min_sq_er = sq_er

    one_ulp = u2
    x = one_ulp
    for index in (1, 2, 3):
        y = math.sqrt((x + u1 + x) + f9)
        y = ((y - u2) - ((1.0 - u2) + x)) / one_ulp
        z = ((u1 - x) + f9) * 0.5 * x * x / one_ulp
        sq_er = (y + 0.5) + z
        if sq_er < state.min_sq_er:
            state.min_sq_er = sq_er
        sq_er = (y - 0.5) + z
        if sq_er > state.max_sq_er:
            state.max_sq_er = sq_er
        if index in (1, 3):
            x = one_ulp * sign(x) * math.floor(8.0 / (9.0 * math.sqrt(one_ulp)))
        else:
            one_ulp = u1
            x = -one_ulp

    report.milestone = 85
    wrong = False
    anomaly = False
    state.r_sqrt = Rounding.OTHER
    if radix != 1.0:
        report.write("Testing whether sqrt is rounded or chopped.\n")
        anomaly = _sqrt_rounding_is_anomalous(state)
        if anomaly:
            report.bad_cond(Severity.FAILURE, "Anomalous arithmetic with Integer < ")
            report.write(f"Radix^Precision = {state.w:.7e}\n")
            report.write(" fails test whether sqrt rounds or chops.\n")
            wrong = True

    if not anomaly:
        if not (state.min_sq_er < 0.0 or state.max_sq_er > 0.0):
            state.r_sqrt = Rounding.ROUNDED
            report.write("Square root appears to be correctly rounded.\n")
        elif (
            state.max_sq_er + u2 > u2 - 0.5
            or state.min_sq_er > 0.5
            or state.min_sq_er + radix < 0.5
        ):
            wrong = True
        else:
            state.r_sqrt = Rounding.CHOPPED
            report.write("Square root appears to be chopped.\n")

    if wrong:
        report.write("Square root is neither chopped nor correctly rounded.\n")
        report.write(f"Observed errors run from {state.min_sq_er - 0.5:.7e} ")
        report.write(f"to {0.5 + state.max_sq_er:.7e} ulps.\n")
        report.tst_cond(
            Severity.SERIOUS,
            state.max_sq_er - state.min_sq_er < radix * radix,
            "sqrt gets too many last digits wrong",
        )