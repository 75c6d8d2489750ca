from unittest.mock import patch

import pytest

from arithbench import whetstone
from arithbench.whetstone import (
    ModuleOutput,
    UsageError,
    WhetstoneOptions,
    array_as_parameter,
    format_rating,
    main,
    parse_args,
    procedure_call,
    rating,
    run_whetstone,
)


def test_parse_args_defaults():
    assert parse_args([]) == WhetstoneOptions(continuous=False, loops=1000)


def test_parse_args_continuous_and_loops():
    options = parse_args(["-c", "50"])
    assert options.continuous is True
    assert options.loops == 50


def test_parse_args_bare_c_means_continuous():
    assert parse_args(["c"]).continuous is True


def test_parse_args_leading_digits():
    assert parse_args(["12abc"]).loops == 12


@pytest.mark.parametrize("arg", ["bogus", "0", "-5", ""])
def test_parse_args_rejects(arg):
    with pytest.raises(UsageError):
        parse_args([arg])


def test_procedure_call_exact_binary_values():
    # With t = 1/2 and t2 = 2 every step is exact: 1 + 1 halves to 1.
    assert procedure_call(1.0, 1.0, 0.5, 2.0) == 1.0


def test_procedure_call_zero_inputs():
    assert procedure_call(0.0, 0.0, 0.5, 2.0) == 0.0


def test_array_as_parameter_keeps_zero():
    assert array_as_parameter([0.0, 0.0, 0.0, 0.0], 0.5, 2.0) == (0.0, 0.0, 0.0, 0.0)


def test_run_whetstone_module_counts():
    outputs = run_whetstone(1)
    assert [o.module for o in outputs] == [1, 2, 3, 4, 6, 7, 8, 9, 10, 11]
    by_module = {o.module: o for o in outputs}
    assert by_module[1].n == 0
    assert by_module[2].n == 12
    assert by_module[3].n == 14
    assert by_module[11].n == 93


def test_run_whetstone_module3_follows_module2():
    by_module = {o.module: o for o in run_whetstone(1)}
    values = (by_module[2].x1, by_module[2].x2, by_module[2].x3, by_module[2].x4)
    for _ in range(by_module[3].n):
        values = array_as_parameter(values, whetstone.T, whetstone.T2)
    m3 = by_module[3]
    assert (m3.x1, m3.x2, m3.x3, m3.x4) == values


def test_run_whetstone_integer_module_is_stable():
    by_module = {o.module: o for o in run_whetstone(2)}
    assert (by_module[6].j, by_module[6].k) == (1, 2)
    assert (by_module[9].j, by_module[9].k) == (1, 2)
    assert {by_module[9].x1, by_module[9].x2, by_module[9].x3} <= {2.0, 3.0}


def test_run_whetstone_procedure_module():
    by_module = {o.module: o for o in run_whetstone(1)}
    m8 = by_module[8]
    assert m8.x3 == procedure_call(1.0, 1.0, whetstone.T, whetstone.T2)
    assert m8.x1 == m8.x2 == 1.0


def test_module_output_format_width():
    text = str(ModuleOutput(1, 5, 6, 7, 1.0, 2.0, 3.0, 4.0))
    assert text.split() == ["5", "6", "7", "1.0000e+00", "2.0000e+00", "3.0000e+00", "4.0000e+00"]


def test_rating_scales_with_loops():
    assert rating(20, 1, 3) == pytest.approx(2 * rating(10, 1, 3))


def test_rating_rejects_non_positive_duration():
    with pytest.raises(ValueError):
        rating(10, 1, 0)


def test_format_rating_units():
    assert format_rating(999.0).endswith("999.0 KIPS")
    assert format_rating(1000.0).endswith("MIPS")


def test_main_usage_error(capsys):
    assert main(["bogus"]) == 1
    assert "usage:" in capsys.readouterr().err


def test_main_reports_rating(capsys):
    with patch("arithbench.whetstone.time") as fake_time:
        fake_time.time.side_effect = [100, 102]
        assert main(["1"]) == 0
    out = capsys.readouterr().out
    assert "Loops: 1, Iterations: 1, Duration: 2 sec." in out
    assert "KIPS" in out


def test_main_insufficient_duration(capsys):
    with patch("arithbench.whetstone.time") as fake_time:
        fake_time.time.side_effect = [100, 100]
        assert main(["1"]) == 1
    assert "Insufficient duration" in capsys.readouterr().out