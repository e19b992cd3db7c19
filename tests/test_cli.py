from __future__ import annotations

from pathlib import Path

import cli


def test_cli_booth_prints_trace_and_result(capsys):
    rc = cli.main(["booth", "3", "-4", "--width", "4"])
    assert rc == 0
    out = capsys.readouterr().out
    assert out.count("[step]") == 9
    assert "[booth] 3 x -4 = -12" in out
    assert "11110100" in out


def test_cli_quiet_and_binary_operands(capsys):
    rc = cli.main(["non-restoring", "0b1000", "0b0011", "--width", "4", "--quiet"])
    assert rc == 0
    out = capsys.readouterr().out
    assert "[step]" not in out
    assert "[non-restoring] 8 / 3 = 2 r 2" in out


def test_cli_dump_then_show_verify(tmp_path: Path, capsys):
    path = tmp_path / "run.jsonl"
    rc = cli.main(["restoring", "11", "3", "--width", "4", "--dump-jsonl", str(path), "--note", "demo"])
    assert rc == 0
    assert path.exists()
    assert "[io] wrote" in capsys.readouterr().out

    rc = cli.main(["show", "--load-jsonl", str(path), "--verify"])
    assert rc == 0
    out = capsys.readouterr().out
    assert "algorithm=restoring" in out
    assert "quotient=3  remainder=2" in out
    assert "[verify] ok" in out


def test_cli_reports_engine_errors(capsys):
    assert cli.main(["restoring", "5", "0", "--width", "4"]) == 2
    assert "Cannot divide by zero" in capsys.readouterr().out

    assert cli.main(["booth", "8", "1", "--width", "4"]) == 2
    assert "[error]" in capsys.readouterr().out

    assert cli.main(["booth", "x", "1"]) == 2
    assert "not a well-formed integer" in capsys.readouterr().out


def test_cli_show_missing_file(tmp_path: Path, capsys):
    assert cli.main(["show", "--load-jsonl", str(tmp_path / "nope.jsonl")]) == 2
    assert "[error]" in capsys.readouterr().out
