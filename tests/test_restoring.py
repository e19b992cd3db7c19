from __future__ import annotations

import pytest

from arith_model import DivideByZeroError, InvalidFormatError, RangeError
from restoring import run_restoring_division
from tests._helpers import all_unsigned, sample_division_pairs


def test_restoring_11_by_3_width_4():
    run = run_restoring_division(11, 3, 4)
    assert run.binary_dividend == "1011"
    assert run.binary_divisor == "0011"
    assert (run.quotient_binary, run.quotient_decimal) == ("0011", 3)
    assert (run.remainder_binary, run.remainder_decimal) == ("0010", 2)
    assert run.correction is None


def test_restoring_11_by_3_trace():
    run = run_restoring_division(11, 3, 4)
    assert len(run.steps) == 3 * 4 + 1
    assert run.steps[0].registers == {"A": "0000", "Q": "1011", "M": "0011"}

    # iteration 1: shift, trial subtraction underflows, restore
    assert run.steps[1].label == "Left shift A,Q"
    assert run.steps[1].registers == {"A": "0001", "Q": "0110", "M": "0011"}
    assert run.steps[2].label == "A = A - M"
    assert run.steps[2].registers["A"] == "1110"
    assert run.steps[3].label == "Restore A, Q[n-1]=0"
    assert run.steps[3].registers == {"A": "0001", "Q": "0110", "M": "0011"}

    # iteration 3: first successful subtraction
    assert run.steps[9].label == "Keep A, Q[n-1]=1"
    assert run.steps[9].registers == {"A": "0010", "Q": "1001", "M": "0011"}

    last = run.steps[-1].registers
    assert (last["Q"], last["A"]) == (run.quotient_binary, run.remainder_binary)


def test_restoring_equal_partial_remainder_commits():
    # 3 / 3: at the last iteration A' == 0, which keeps the subtraction
    run = run_restoring_division(3, 3, 4)
    assert run.steps[-2].registers["A"] == "0000"
    assert run.steps[-1].label == "Keep A, Q[n-1]=1"
    assert (run.quotient_decimal, run.remainder_decimal) == (1, 0)


def test_restoring_exhaustive_width_4():
    for a in all_unsigned(4):
        for b in all_unsigned(4)[1:]:
            run = run_restoring_division(a, b, 4)
            assert run.quotient_decimal == a // b, (a, b)
            assert run.remainder_decimal == a % b, (a, b)
            assert run.quotient_decimal * b + run.remainder_decimal == a


@pytest.mark.parametrize("width,n", [(8, 200), (16, 60), (32, 20)])
def test_restoring_sampled_wider(width, n):
    for a, b in sample_division_pairs(width, n):
        run = run_restoring_division(a, b, width)
        assert (run.quotient_decimal, run.remainder_decimal) == divmod(a, b), (a, b)
        assert len(run.steps) == 3 * width + 1


def test_restoring_divide_by_zero():
    with pytest.raises(DivideByZeroError):
        run_restoring_division(5, 0, 4)
    with pytest.raises(DivideByZeroError):
        run_restoring_division("7", "0b0000", 4)


def test_restoring_range_and_format_errors():
    with pytest.raises(RangeError):
        run_restoring_division(-1, 3, 4)
    with pytest.raises(RangeError):
        run_restoring_division(16, 3, 4)
    with pytest.raises(RangeError):
        run_restoring_division(5, -3, 4)
    with pytest.raises(InvalidFormatError):
        run_restoring_division("twelve", 3, 4)
