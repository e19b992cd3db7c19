from __future__ import annotations

import dataclasses
import json
from pathlib import Path

import pytest

from arith_engine import run_algorithm
from replay import TraceCursor, decode_final_registers, verify_trace
from trace_jsonl import dump_run_jsonl, load_trace_jsonl


def _roundtrip(tmp_path: Path, name: str, a: int, b: int, width: int):
    run = run_algorithm(name, a, b, width)
    path = tmp_path / f"{name}.jsonl"
    dump_run_jsonl(run, str(path))
    return run, load_trace_jsonl(str(path))


@pytest.mark.parametrize(
    "name,a,b,expected",
    [
        ("booth", -8, -8, {"product": 64}),
        ("booth", 3, -4, {"product": -12}),
        ("restoring", 11, 3, {"quotient": 3, "remainder": 2}),
        ("non-restoring", 8, 3, {"quotient": 2, "remainder": 2}),
        ("non-restoring", 15, 15, {"quotient": 1, "remainder": 0}),
    ],
)
def test_decode_final_registers(tmp_path: Path, name, a, b, expected):
    _, record = _roundtrip(tmp_path, name, a, b, 4)
    assert decode_final_registers(record) == expected


def test_decode_final_registers_requires_correction(tmp_path: Path):
    _, record = _roundtrip(tmp_path, "non-restoring", 8, 3, 4)
    stripped = dataclasses.replace(record, correction=None)
    with pytest.raises(ValueError):
        decode_final_registers(stripped)


@pytest.mark.parametrize("name,a,b", [("booth", 7, -3), ("restoring", 200, 7), ("non-restoring", 200, 8)])
def test_verify_trace_accepts_genuine_runs(tmp_path: Path, name, a, b):
    _, record = _roundtrip(tmp_path, name, a, b, 8)
    assert verify_trace(record) is True


def test_verify_trace_detects_tampering(tmp_path: Path):
    run = run_algorithm("restoring", 11, 3, 4)
    path = tmp_path / "r.jsonl"
    dump_run_jsonl(run, str(path))

    lines = path.read_text(encoding="utf-8").splitlines()
    step = json.loads(lines[5])
    step["registers"]["A"] = "0111"
    lines[5] = json.dumps(step)
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")

    record = load_trace_jsonl(str(path))
    with pytest.raises(ValueError, match="step 4"):
        verify_trace(record)


def test_trace_cursor_navigation():
    run = run_algorithm("booth", 3, -4, 4)
    cur = TraceCursor(run.steps)
    assert cur.total == 9
    assert cur.at_start and not cur.at_end
    assert cur.prev().ordinal == 0  # clamped at the start

    assert cur.next().ordinal == 1
    assert cur.seek(100).ordinal == 8
    assert cur.at_end
    assert cur.next().ordinal == 8  # clamped at the end

    assert cur.seek(5).label == "A = A - M"
    assert cur.position == 5
    assert cur.reset() is run.steps[0]


def test_trace_cursor_rejects_empty():
    with pytest.raises(ValueError):
        TraceCursor([])
