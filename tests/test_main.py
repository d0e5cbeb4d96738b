from __future__ import annotations

import io

import pytest

from main import EXIT_CALCULATION_ERROR, EXIT_OK, EXIT_USAGE_ERROR, main


def test_prints_results(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["2+2", "1/3"]) == EXIT_OK
    assert capsys.readouterr().out == "4\n0.333333333333\n"


def test_options(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["-p", "3", "--degrees", "--balance-parentheses", "sin(30)*(1/3"]) == EXIT_OK
    assert capsys.readouterr().out == "0.167\n"


def test_rpn_option(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--rpn", "3 4 +"]) == EXIT_OK
    assert capsys.readouterr().out == "7\n"


def test_errors_go_to_stderr(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["1/0", "2*3"]) == EXIT_CALCULATION_ERROR
    captured = capsys.readouterr()
    assert captured.out == "6\n"
    assert captured.err.startswith("error: ")


def test_reads_stdin(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO("1+1\n\n2*3\n"))
    assert main([]) == EXIT_OK
    assert capsys.readouterr().out == "2\n\n6\n"


def test_usage_error() -> None:
    assert main(["--precision", "many"]) == EXIT_USAGE_ERROR


def test_out_of_range_literal_is_a_calculation_error(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["1e9999999999999999999", "1e500000000000000000*1e500000000000000000"]) == (
        EXIT_CALCULATION_ERROR
    )
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err.count("error: ") == 2
