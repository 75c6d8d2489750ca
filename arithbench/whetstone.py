"""Double precision Whetstone benchmark."""

from __future__ import annotations

import math
import re
import sys
import time
from dataclasses import dataclass
from typing import Sequence

T = 0.499975
T1 = 0.50025
T2 = 2.0
DEFAULT_LOOPS = 1000
ITERATIONS = 1
USAGE = "usage: whetstone [-c] [loops]\n"

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


class UsageError(ValueError):
    """Raised when the command line cannot be understood."""


@dataclass(frozen=True)
class ModuleOutput:
    """Values a benchmark module leaves behind after its loop."""

    module: int
    n: int
    j: int
    k: int
    x1: float
    x2: float
    x3: float
    x4: float

    def __str__(self) -> str:
        return "%7d %7d %7d %12.4e %12.4e %12.4e %12.4e" % (
            self.n, self.j, self.k, self.x1, self.x2, self.x3, self.x4,
        )


@dataclass(frozen=True)
class WhetstoneOptions:
    """Command-line settings of the benchmark."""

    continuous: bool = False
    loops: int = DEFAULT_LOOPS


def array_as_parameter(e: Sequence[float], t: float, t2: float) -> tuple[float, float, float, float]:
    """Apply the six-pass array update to four values and return the result."""
    e1, e2, e3, e4 = e
    for _ in range(6):
        e1 = (e1 + e2 + e3 - e4) * t
        e2 = (e1 + e2 - e3 + e4) * t
        e3 = (e1 - e2 + e3 + e4) * t
        e4 = (-e1 + e2 + e3 + e4) / t2
    return e1, e2, e3, e4


def procedure_call(x: float, y: float, t: float, t2: float) -> float:
    """Return the value the procedure-call module computes from x and y."""
    x1 = t * (x + y)
    y1 = t * (x1 + y)
    return (x1 + y1) / t2


def run_whetstone(loops: int) -> list[ModuleOutput]:
    """Run one major loop of the benchmark and return each module's output."""
    n1 = 0
    n2 = 12 * loops
    n3 = 14 * loops
    n4 = 345 * loops
    n6 = 210 * loops
    n7 = 32 * loops
    n8 = 899 * loops
    n9 = 616 * loops
    n10 = 0
    n11 = 93 * loops
    outputs: list[ModuleOutput] = []

    # Module 1: simple identifiers
    x1, x2, x3, x4 = 1.0, -1.0, -1.0, -1.0
    for _ in range(n1):
        x1 = (x1 + x2 + x3 - x4) * T
        x2 = (x1 + x2 - x3 + x4) * T
        x3 = (x1 - x2 + x3 + x4) * T
        x4 = (-x1 + x2 + x3 + x4) * T
    outputs.append(ModuleOutput(1, n1, n1, n1, x1, x2, x3, x4))

    # Module 2: array elements (slot 0 is never used)
    e = [0.0, 1.0, -1.0, -1.0, -1.0]
    for _ in range(n2):
        e[1] = (e[1] + e[2] + e[3] - e[4]) * T
        e[2] = (e[1] + e[2] - e[3] + e[4]) * T
        e[3] = (e[1] - e[2] + e[3] + e[4]) * T
        e[4] = (-e[1] + e[2] + e[3] + e[4]) * T
    outputs.append(ModuleOutput(2, n2, n3, n2, *e[1:]))

    # Module 3: array as parameter
    for _ in range(n3):
        e[1:] = array_as_parameter(e[1:], T, T2)
    j = 6
    outputs.append(ModuleOutput(3, n3, n2, n2, *e[1:]))

    # Module 4: conditional jumps
    j = 1
    for _ in range(n4):
        j = 2 if j == 1 else 3
        j = 0 if j > 2 else 1
        j = 1 if j < 1 else 0
    outputs.append(ModuleOutput(4, n4, j, j, x1, x2, x3, x4))

    # Module 6: integer arithmetic
    j, k, l = 1, 2, 3
    for _ in range(n6):
        j = j * (k - j) * (l - k)
        k = l * k - (l - j) * k
        l = (l - k) * (k + j)
        e[l - 1] = float(j + k + l)
        e[k - 1] = float(j * k * l)
    outputs.append(ModuleOutput(6, n6, j, k, *e[1:]))

    # Module 7: trigonometric functions
    x = y = 0.5
    for _ in range(n7):
        x = T * math.atan(T2 * math.sin(x) * math.cos(x) / (math.cos(x + y) + math.cos(x - y) - 1.0))
        y = T * math.atan(T2 * math.sin(y) * math.cos(y) / (math.cos(x + y) + math.cos(x - y) - 1.0))
    outputs.append(ModuleOutput(7, n7, j, k, x, x, y, y))

    # Module 8: procedure calls
    x = y = z = 1.0
    for _ in range(n8):
        z = procedure_call(x, y, T, T2)
    outputs.append(ModuleOutput(8, n8, j, k, x, y, z, z))

    # Module 9: array references
    j, k, l = 1, 2, 3
    e[1], e[2], e[3] = 1.0, 2.0, 3.0
    for _ in range(n9):
        e[j] = e[k]
        e[k] = e[l]
        e[l] = e[j]
    outputs.append(ModuleOutput(9, n9, j, k, *e[1:]))

    # Module 10: integer arithmetic
    j, k = 2, 3
    for _ in range(n10):
        j = j + k
        k = j + k
        j = k - j
        k = k - j - j
    outputs.append(ModuleOutput(10, n10, j, k, x1, x2, x3, x4))

    # Module 11: standard functions
    x = 0.75
    for _ in range(n11):
        x = math.sqrt(math.exp(math.log(x) / T1))
    outputs.append(ModuleOutput(11, n11, j, k, x, x, x, x))

    return outputs


def rating(loops: int, iterations: int, seconds: float) -> float:
    """Return the Whetstone rating in thousands of instructions per second."""
    if seconds <= 0:
        raise ValueError("Insufficient duration- Increase the LOOP count")
    return (100.0 * loops * iterations) / seconds


def format_rating(kips: float) -> str:
    """Describe a rating in KIPS, or in MIPS once it reaches a thousand."""
    if kips >= 1000.0:
        return "Double Precision Whetstones: %.1f MIPS" % (kips / 1000.0)
    return "Double Precision Whetstones: %.1f KIPS" % kips


def _leading_int(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def parse_args(argv: Sequence[str]) -> WhetstoneOptions:
    """Read the continuous flag and an optional loop count."""
    continuous = False
    loops = DEFAULT_LOOPS
    for arg in argv:
        if arg.startswith("-c") or arg.startswith("c"):
            continuous = True
        elif _leading_int(arg) > 0:
            loops = _leading_int(arg)
        else:
            raise UsageError(USAGE.strip())
    return WhetstoneOptions(continuous=continuous, loops=loops)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the benchmark from the command line."""
    args = sys.argv[1:] if argv is None else list(argv)
    try:
        options = parse_args(args)
    except UsageError:
        sys.stderr.write(USAGE)
        return 1

    while True:
        start = int(time.time())
        run_whetstone(options.loops)
        finish = int(time.time())
        elapsed = finish - start

        print()
        try:
            kips = rating(options.loops, ITERATIONS, elapsed)
        except ValueError as exc:
            print(exc)
            return 1
        print(f"Loops: {options.loops}, Iterations: {ITERATIONS}, Duration: {elapsed} sec.")
        print(format_rating(kips))
        if not options.continuous:
            return 0


if __name__ == "__main__":
    sys.exit(main())