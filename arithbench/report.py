"""Output and error tallies of the floating-point diagnosis."""

from __future__ import annotations

import sys
from enum import IntEnum
from typing import Iterable, TextIO


class Severity(IntEnum):
    """How bad a diagnosed problem is; lower values are worse."""

    FAILURE = 0
    SERIOUS = 1
    DEFECT = 2
    FLAW = 3

    @property
    def label(self) -> str:
        return _LABELS[self]


_LABELS = {
    Severity.FAILURE: "FAILURE",
    Severity.SERIOUS: "SERIOUS DEFECT",
    Severity.DEFECT: "DEFECT",
    Severity.FLAW: "FLAW",
}


class Report:
    """Writes the diagnosis and counts problems by severity.

    ``answers`` supplies replies to prompts. When it is None the run is
    non-interactive: pauses do not wait and every question is answered yes.
    """

    def __init__(self, out: TextIO | None = None, answers: Iterable[str] | None = None):
        self.out = out if out is not None else sys.stdout
        self._answers = iter(answers) if answers is not None else None
        self.counts = {severity: 0 for severity in Severity}
        self.milestone = 0
        self.page = 1
        self.fp_errors = 0

    def write(self, text: str) -> None:
        self.out.write(text)

    def lines(self, lines: Iterable[str]) -> None:
        """Write each string on a line of its own."""
        for line in lines:
            self.write(line + "\n")

    def bad_cond(self, severity: Severity, text: str) -> None:
        """Count a problem and start its message."""
        severity = Severity(severity)
        self.counts[severity] += 1
        self.write(f"{severity.label}:  {text}")

    def tst_cond(self, severity: Severity, valid: bool, text: str) -> bool:
        """Report a problem unless the condition holds; return the condition."""
        if not valid:
            self.bad_cond(severity, text)
            self.write(".\n")
        return bool(valid)

    def notify(self, subject: str) -> None:
        self.write(f"{subject} test appears to be inconsistent...\n")
        self.write("   PLEASE REPORT THIS!\n")

    def _next_answer(self) -> str:
        self.out.flush()
        return next(self._answers, "") if self._answers is not None else ""

    def pause(self) -> None:
        """Wait for the user when interactive, then move to the next page."""
        if self._answers is not None:
            self.write("\nTo continue, press RETURN")
            self._next_answer()
        self.write(
            f"\nDiagnosis resumes after milestone Number {self.milestone}"
            f"          Page: {self.page}\n\n"
        )
        self.milestone += 1
        self.page += 1

    def ask(self, question: str) -> bool:
        """Ask a yes/no question; non-interactive runs always answer yes."""
        if self._answers is None:
            return True
        self.write(question)
        return self._next_answer()[:1] in ("Y", "y")

    def total(self) -> int:
        return sum(self.counts.values())