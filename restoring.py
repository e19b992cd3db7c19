"""Restoring division (unsigned), step by step.

Registers: A (partial remainder), Q (dividend, becomes the quotient),
M (divisor). Per iteration:

  1. shift [A, Q] left; the MSB of Q enters the LSB of A
  2. A' = A - M
  3. A' negative -> restore A, Q[n-1] = 0
     otherwise   -> keep A', Q[n-1] = 1

"Negative" is the sign of the exact difference. The bit that left A on the
shift is A's top bit for the subtraction; for operands below 2^(n-1) it is
always 0 and the test is simply MSB(A') == 1.
"""

from __future__ import annotations

from arith_model import DEFAULT_BIT_WIDTH, DivideByZeroError, DivisionRun, Step
from binary_word import (
    BinaryWord,
    decode_unsigned,
    encode_unsigned,
    left_shift,
    subtract_extended,
    unsigned_range,
    with_lsb,
    zeros,
)
from operands import check_range, parse_operand, resolve_bit_width


def prepare_division(
    dividend: int | str,
    divisor: int | str,
    bit_width: int | None,
) -> tuple[int, int, int]:
    """Validate division inputs. Returns (dividend, divisor, bit_width).

    Shared by the restoring and non-restoring dividers.
    """
    w = resolve_bit_width(bit_width)
    q = parse_operand(dividend, w, signed=False, name="Dividend")
    m = parse_operand(divisor, w, signed=False, name="Divisor")
    if m == 0:
        raise DivideByZeroError("Cannot divide by zero")
    lo, hi = unsigned_range(w)
    check_range(q, lo, hi, name="Dividend", bit_width=w)
    check_range(m, lo + 1, hi, name="Divisor", bit_width=w)
    return q, m, w


def _snapshot(a: BinaryWord, q: BinaryWord, m: BinaryWord) -> dict[str, str]:
    return {"A": str(a), "Q": str(q), "M": str(m)}


def run_restoring_division(
    dividend: int | str,
    divisor: int | str,
    bit_width: int | None = DEFAULT_BIT_WIDTH,
) -> DivisionRun:
    """Divide dividend by divisor with the restoring algorithm.

    Raises InvalidFormatError, UnsupportedWidthError, DivideByZeroError or
    RangeError before any step is produced.
    """
    dd, dv, w = prepare_division(dividend, divisor, bit_width)

    m = encode_unsigned(dv, w)
    q = dividend_word = encode_unsigned(dd, w)
    a = zeros(w)

    steps: list[Step] = [
        Step(
            ordinal=0,
            iteration=0,
            label="Initial values",
            registers=_snapshot(a, q, m),
            explanation="Initialize A to 0, Q to the dividend.",
        )
    ]

    for i in range(1, w + 1):
        a, a_top = left_shift(a, q.msb)
        q, _ = left_shift(q)
        steps.append(
            Step(
                ordinal=len(steps),
                iteration=i,
                label="Left shift A,Q",
                registers=_snapshot(a, q, m),
                explanation="Shift A and Q left by 1 bit. MSB of Q moves to LSB of A.",
            )
        )

        trial, negative = subtract_extended(a, a_top, m, 0)
        steps.append(
            Step(
                ordinal=len(steps),
                iteration=i,
                label="A = A - M",
                registers=_snapshot(trial, q, m),
                explanation="Subtract divisor from A.",
            )
        )

        if negative:
            q = with_lsb(q, 0)
            steps.append(
                Step(
                    ordinal=len(steps),
                    iteration=i,
                    label="Restore A, Q[n-1]=0",
                    registers=_snapshot(a, q, m),
                    explanation="A is negative, restore A to previous value and set Q[n-1] = 0.",
                )
            )
        else:
            a = trial
            q = with_lsb(q, 1)
            steps.append(
                Step(
                    ordinal=len(steps),
                    iteration=i,
                    label="Keep A, Q[n-1]=1",
                    registers=_snapshot(a, q, m),
                    explanation="A is positive, keep the subtraction result and set Q[n-1] = 1.",
                )
            )

    return DivisionRun(
        algorithm="restoring",
        dividend=dd,
        divisor=dv,
        bit_width=w,
        binary_dividend=str(dividend_word),
        binary_divisor=str(m),
        steps=tuple(steps),
        quotient_binary=str(q),
        quotient_decimal=decode_unsigned(q),
        remainder_binary=str(a),
        remainder_decimal=decode_unsigned(a),
    )


__all__ = ["prepare_division", "run_restoring_division"]
