# arithbench

Two classic tools for looking at a machine's floating-point arithmetic:

- **paranoia** works out the radix, precision, guard digits, rounding
  behaviour, square-root accuracy, underflow and overflow thresholds of
  the floating-point arithmetic in use. It then sorts whatever it finds
  into failures, serious defects, defects and flaws.
- **whetstone** runs the double-precision Whetstone benchmark and reports
  its speed in KIPS or MIPS.

## Installation

```
pip install .
```

## Paranoia

```
paranoia            # interactive: pauses between pages, asks questions
paranoia --batch    # no pauses; every question is answered yes
```

The diagnosis runs in stages. In interactive mode it waits for you to
press RETURN between pages. Near the end it asks whether to compute
`1 / 0` and `0 / 0`; an answer starting with `Y` or `y` means yes. A
summary closes the run with a tally by severity and a verdict, for
example: "The arithmetic diagnosed appears to be Excellent!"

From Python, `arithbench.paranoia.run(out, answers)` runs the whole
diagnosis and returns the `Report`. It writes to the text stream `out`
(standard output if `None`) and takes replies to the prompts from the
iterable `answers`; with `answers=None` it neither pauses nor asks, and
answers every question yes.

The checks live in separate modules (`radix`, `rounding`, `sqrt`,
`powers`, `underflow`, `overflow`, plus `check_division_by_zero` and
`summarize` in `paranoia`). Each works on a shared
`arithbench.state.Arithmetic` and reports through an
`arithbench.report.Report`, whose `counts` hold the number of findings
for each `Severity` (`FAILURE`, `SERIOUS`, `DEFECT`, `FLAW`) and whose
`total()` gives their sum.

Python floats are always double precision, so the diagnosis examines
double-precision arithmetic only. Floating-point errors that Python
raises as exceptions are caught, counted and reported where a trap would
occur.

## Whetstone

```
whetstone            # 1000 loops, one run
whetstone 5000       # a different loop count
whetstone -c         # repeat continuously
```

Example output:

```
Loops: 1000, Iterations: 1, Duration: 3 sec.
Double Precision Whetstones: 33.3 KIPS
```

Timing is measured in whole seconds. If the run takes less than one
second the command prints "Insufficient duration- Increase the LOOP
count" and exits with status 1. An argument that is neither `-c` (or
anything starting with `c`) nor a positive number prints
`usage: whetstone [-c] [loops]` and exits with status 1.

From Python, `arithbench.whetstone.run_whetstone(loops)` runs the modules
once and returns a list of `ModuleOutput` values, one per module.
`rating(loops, iterations, seconds)` turns a timing into KIPS (raising
`ValueError` for a non-positive duration), `format_rating(kips)` gives
the line that is printed, and `parse_args(argv)` returns the
`WhetstoneOptions` for a command line.

## Running the tests

```
pip install .[test]
pytest
```