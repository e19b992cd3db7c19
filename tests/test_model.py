from __future__ import annotations

import json

from arith_engine import run_algorithm


def test_booth_run_to_dict_is_json_ready():
    run = run_algorithm("booth", 3, -4, 4)
    out = json.loads(json.dumps(run.to_dict()))
    assert out["algorithm"] == "booth"
    assert (out["multiplicand"], out["multiplier"], out["bit_width"]) == (3, -4, 4)
    assert out["result_binary"] == "11110100"
    assert out["result_decimal"] == -12
    assert out["steps"] == [s.to_dict() for s in run.steps]
    assert "correction" not in out


def test_division_run_to_dict_is_json_ready():
    for name in ("restoring", "non-restoring"):
        run = run_algorithm(name, 11, 3, 4)
        out = json.loads(json.dumps(run.to_dict()))
        assert out["algorithm"] == name
        assert (out["dividend"], out["divisor"]) == (11, 3)
        assert (out["quotient_binary"], out["quotient_decimal"]) == ("0011", 3)
        assert (out["remainder_binary"], out["remainder_decimal"]) == ("0010", 2)
        assert len(out["steps"]) == len(run.steps)
        assert out["steps"][0]["registers"]["Q"] == "1011"
        assert out["correction"] is None


def test_division_run_to_dict_keeps_correction():
    run = run_algorithm("non-restoring", 8, 3, 4)
    assert run.correction is not None
    out = json.loads(json.dumps(run.to_dict()))
    assert out["correction"] == run.correction.to_dict()
    assert out["correction"]["registers"]["A"] == "0010"
    assert (out["quotient_decimal"], out["remainder_decimal"]) == (2, 2)
