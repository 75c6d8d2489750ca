import io

from arithbench.paranoia import check_division_by_zero, main, run, summarize
from arithbench.report import Report, Severity
from arithbench.state import Arithmetic, Rounding


def test_division_by_zero_batch_traps_twice():
    out = io.StringIO()
    report = Report(out)
    check_division_by_zero(Arithmetic(), report)
    text = out.getvalue()
    assert report.fp_errors == 2
    assert "Trying to compute 1 / 0 produces ..." in text
    assert "Trying to compute 0 / 0 produces ..." in text
    assert report.milestone == 210


def test_division_by_zero_declined():
    out = io.StringIO()
    report = Report(out, ["n", "N"])
    check_division_by_zero(Arithmetic(), report)
    text = out.getvalue()
    assert report.fp_errors == 0
    assert text.count("O.K.\n") == 2
    assert "Do you wish to compute 1 / 0? " in text


def test_division_by_zero_one_accepted():
    out = io.StringIO()
    report = Report(out, ["y", "n"])
    check_division_by_zero(Arithmetic(), report)
    text = out.getvalue()
    assert report.fp_errors == 1
    assert "Trying to compute 1 / 0" in text
    assert "Trying to compute 0 / 0" not in text


def test_summarize_flawed_only():
    out = io.StringIO()
    report = Report(out)
    report.counts[Severity.FLAW] = 1
    assert summarize(Arithmetic(), report) == 1
    text = out.getvalue()
    assert "FLAWs  discovered =" in text
    assert "Satisfactory though flawed." in text
    assert text.endswith("  Normal end of execution.\n")


def test_summarize_failures():
    out = io.StringIO()
    report = Report(out)
    report.counts[Severity.FAILURE] = 2
    assert summarize(Arithmetic(), report) == 2
    text = out.getvalue()
    assert "FAILUREs  encountered =" in text
    assert "unacceptable Serious Defects." in text
    assert "Potentially fatal FAILURE" in text


def test_summarize_excellent_ieee():
    out = io.StringIO()
    report = Report(out)
    state = Arithmetic()
    state.r_mult = state.r_div = state.r_add_sub = state.r_sqrt = Rounding.ROUNDED
    state.sticky_bit = 1.0
    state.radix = 2.0
    state.precision = 53.0
    state.ieee = True
    report.fp_errors = 3
    assert summarize(state, report) == 0
    text = out.getvalue()
    assert "the proposed IEEE standard P754.\n" in text
    assert "Excellent!" in text
    assert "A total of 3 floating point exceptions were registered." in text


def test_full_run_batch():
    out = io.StringIO()
    report = run(out, None)
    text = out.getvalue()
    assert "Radix = 2.000000" in text
    assert report.counts[Severity.FAILURE] == 0
    assert text.endswith("  Normal end of execution.\n")
    assert ("No failures, defects nor flaws" in text) == (report.total() == 0)
    assert "To continue, press RETURN" not in text
    assert report.milestone > 220


def test_main_batch(capsys):
    assert main(["--batch"]) == 0
    text = capsys.readouterr().out
    assert "Normal end of execution." in text
    assert "Searching for Overflow threshold:" in text


def test_main_interactive_reads_stdin(capsys, monkeypatch):
    monkeypatch.setattr("sys.stdin", io.StringIO(""))
    assert main([]) == 0
    text = capsys.readouterr().out
    assert "To continue, press RETURN" in text
    assert "Do you wish to compute 0 / 0? " in text
    assert "Trying to compute 1 / 0" not in text