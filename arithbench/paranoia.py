"""Full diagnosis of the floating-point arithmetic and its command line."""

from __future__ import annotations

import argparse
import sys
from typing import Iterable, Sequence, TextIO

from arithbench.overflow import (
    check_extreme_sqrt,
    check_range_balance,
    check_self_division,
    find_overflow,
)
from arithbench.powers import check_exp2, check_extreme_powers, check_small_powers
from arithbench.radix import (
    check_extra_precision,
    check_guard_digits,
    check_small_integers,
    find_radix_and_precision,
)
from arithbench.report import Report, Severity
from arithbench.rounding import (
    check_addition_rounding,
    check_commutativity,
    check_division_rounding,
    check_multiplication_rounding,
    check_sticky_bit,
)
from arithbench.sqrt import check_sqrt, check_sqrt_rounding
from arithbench.state import Arithmetic, Rounding
from arithbench.underflow import check_underflow_power, classify_underflow, find_underflow

_BANNERS = (
    (
        "Some machines halt on overflow, underflow or division by zero.",
        "If yours can be told to carry on with a substitute value instead,",
        "do so; otherwise run the diagnosis anyway and note how far it gets.",
        "Answer questions with Y or N (either case).\n",
    ),
    (
        "The diagnosis is meant to grow as new arithmetic oddities turn up.",
        "When recording results, note the following alongside them:",
        "\tPrecision:\tdouble;",
        "\tMachine, compiler and optimisation settings used.\n",
    ),
    (
        "The diagnosis reports on:",
        "     the Radix and the Precision (significant digits carried);",
        "     U2, one unit in the last place of numbers just above 1.0;",
        "     U1, one unit in the last place of numbers just below 1.0;",
        "     guard digits in multiply, divide and subtract;",
        "     whether multiply, divide, add/subtract and sqrt round or chop;",
        "     whether a sticky bit is used in rounding;",
        "     the underflow threshold, and whether underflow is gradual;",
        "     the overflow threshold V and saturation value V0;",
        "     the consistency of comparison with subtraction.",
        "     Powers are spot-checked; decimal conversion is not examined.",
    ),
    (
        "Findings are graded, from mildest to worst, as",
        "   FLAWs, e.g. no sticky bit,",
        "   DEFECTs and SERIOUS DEFECTs, e.g. no guard digit, and",
        "   FAILUREs, e.g. 2+2 == 5.",
        "A failure may spoil the diagnoses that follow it.\n",
        "A radix representation of numbers is assumed, though a logarithmic",
        "encoding is also recognised.\n",
    ),
)

_TALLY_LABELS = {
    Severity.FAILURE: "FAILUREs  encountered =",
    Severity.SERIOUS: "SERIOUS DEFECTs  discovered =",
    Severity.DEFECT: "DEFECTs  discovered =",
    Severity.FLAW: "FLAWs  discovered =",
}


def _trap(report: Report, exc: BaseException) -> None:
    report.fp_errors += 1
    report.write(f"\n* * * FLOATING-POINT ERROR: {exc} * * *\n")


def _try_divide(report: Report, label: str, numerator: float) -> None:
    report.write(f"    Trying to compute {label} produces ...")
    try:
        result = numerator / 0.0
    except ArithmeticError as exc:
        _trap(report, exc)
    else:
        report.write(f"  {result:.7e} .\n")


def check_division_by_zero(state: Arithmetic, report: Report) -> None:
    """Show what 1 / 0 and 0 / 0 produce, if the user agrees to try."""
    report.milestone = 210
    report.write("\nWhat message and/or values does Division by Zero produce?\n")
    questions = (
        (
            "This can interupt your program.  You can skip this part if you wish.\n"
            "Do you wish to compute 1 / 0? ",
            "",
            "1 / 0",
            1.0,
        ),
        ("\nDo you wish to compute 0 / 0? ", "\n", "0 / 0", 0.0),
    )
    for question, lead, label, numerator in questions:
        if report.ask(question):
            report.write(lead)
            _try_divide(report, label, numerator)
        else:
            report.write("O.K.\n")


def _verdict(state: Arithmetic, counts) -> list[str]:
    failure = counts[Severity.FAILURE]
    serious = counts[Severity.SERIOUS]
    defect = counts[Severity.DEFECT]
    flaw = counts[Severity.FLAW]
    grave = failure + serious

    if grave + defect + flaw > 0:
        lines = []
        if grave + defect == 0:
            lines.append("The arithmetic diagnosed seems Satisfactory though flawed.\n")
        if grave == 0 and defect > 0:
            lines.append(
                "The arithmetic diagnosed may be Acceptable\ndespite inconvenient Defects.\n"
            )
        if grave > 0:
            lines.append("The arithmetic diagnosed has unacceptable Serious Defects.\n")
        if failure > 0:
            lines.append(
                "Potentially fatal FAILURE may have spoiled this"
                " program's subsequent diagnoses.\n"
            )
        return lines

    lines = ["No failures, defects nor flaws have been discovered.\n"]
    modes = (state.r_mult, state.r_div, state.r_add_sub, state.r_sqrt)
    if any(mode != Rounding.ROUNDED for mode in modes):
        lines.append("The arithmetic diagnosed seems Satisfactory.\n")
        return lines

    radix, precision = state.radix, state.precision
    if state.sticky_bit >= 1.0 and radix in (2.0, 10.0):
        standard = "754" if radix == 2.0 and precision in (24.0, 53.0) else "854"
        tail = (
            ".\n"
            if state.ieee
            else ",\nexcept for possibly Double Rounding during Gradual Underflow.\n"
        )
        lines.append(
            f"Rounding appears to conform to the proposed IEEE standard P{standard}{tail}"
        )
    lines.append("The arithmetic diagnosed appears to be Excellent!\n")
    return lines


def summarize(state: Arithmetic, report: Report) -> int:
    """Write the final tally and verdict; return the number of problems found."""
    report.milestone = 220
    report.pause()
    report.write("\n")
    counts = report.counts
    for severity in Severity:
        if counts[severity]:
            report.write(f"The number of  {_TALLY_LABELS[severity]:<29} {counts[severity]}.\n")
    report.write("\n")

    for line in _verdict(state, counts):
        report.write(line)

    if report.fp_errors:
        report.write(
            f"\nA total of {report.fp_errors} floating point exceptions were registered.\n"
        )
    report.write("\nPARANOIA:\n  Normal end of execution.\n")
    return report.total()


_STEPS = (
    check_small_integers,
    find_radix_and_precision,
    check_extra_precision,
    check_guard_digits,
    check_multiplication_rounding,
    check_division_rounding,
    check_addition_rounding,
    check_sticky_bit,
    check_commutativity,
    check_sqrt,
    check_sqrt_rounding,
    check_small_powers,
    find_underflow,
    classify_underflow,
    check_underflow_power,
    check_exp2,
    check_extreme_powers,
    find_overflow,
    check_extreme_sqrt,
    check_range_balance,
    check_self_division,
    check_division_by_zero,
    summarize,
)


def run(out: TextIO | None = None, answers: Iterable[str] | None = None) -> Report:
    """Run the whole diagnosis, writing to ``out``; return the report."""
    report = Report(out, answers)
    state = Arithmetic()
    report.milestone = 0
    for banner in _BANNERS:
        report.lines(banner)
        report.pause()
    for step in _STEPS:
        step(state, report)
    return report


def main(argv: Sequence[str] | None = None) -> int:
    """Run the diagnosis from the command line."""
    parser = argparse.ArgumentParser(
        prog="paranoia",
        description="Diagnose the floating-point arithmetic of this machine.",
    )
    parser.add_argument(
        "--batch",
        action="store_true",
        help="do not pause or ask questions; answer yes to every question",
    )
    args = parser.parse_args(argv)
    answers = None if args.batch else sys.stdin
    run(sys.stdout, answers)
    return 0


if __name__ == "__main__":
    sys.exit(main())