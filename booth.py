"""Booth's signed multiplication, step by step.

Registers: A (accumulator), Q (multiplier, low half of the product),
Q_1 (the bit shifted out of Q) and M (multiplicand, fixed for the run).

Each iteration looks at (Q[last], Q_1):
  01 -> A = A + M
  10 -> A = A - M
  00, 11 -> nothing
then shifts [A, Q, Q_1] right by one. After bit_width iterations the
product is A ++ Q, read as a 2*bit_width-bit two's complement value.

A + M and A - M can leave the bit_width-bit signed range (e.g. 0 - (-8)
at width 4). The engine keeps the sign of the exact result and feeds it
back into A on the shift, which is the same as carrying one extra sign bit.
"""

from __future__ import annotations

from arith_model import DEFAULT_BIT_WIDTH, BoothRun, Step
from binary_word import (
    BinaryWord,
    add_extended,
    arithmetic_right_shift,
    concat,
    decode,
    encode,
    signed_range,
    subtract_extended,
    zeros,
)
from operands import check_range, parse_operand, resolve_bit_width


def _snapshot(a: BinaryWord, q: BinaryWord, q_1: int, m: BinaryWord) -> dict[str, str]:
    return {"A": str(a), "Q": str(q), "Q_1": str(q_1), "M": str(m)}


def run_booth_multiplication(
    multiplicand: int | str,
    multiplier: int | str,
    bit_width: int | None = DEFAULT_BIT_WIDTH,
) -> BoothRun:
    """Multiply two signed integers with Booth's algorithm.

    Raises InvalidFormatError, UnsupportedWidthError or RangeError before
    any step is produced.
    """
    w = resolve_bit_width(bit_width)
    md = parse_operand(multiplicand, w, signed=True, name="Multiplicand")
    mr = parse_operand(multiplier, w, signed=True, name="Multiplier")
    lo, hi = signed_range(w)
    check_range(md, lo, hi, name="Multiplicand", bit_width=w)
    check_range(mr, lo, hi, name="Multiplier", bit_width=w)

    m = encode(md, w)
    q = multiplier_word = encode(mr, w)
    a = zeros(w)
    q_1 = 0

    steps: list[Step] = [
        Step(
            ordinal=0,
            iteration=0,
            label="Initial values",
            registers=_snapshot(a, q, q_1, m),
            explanation="Initialize A to 0, Q to the multiplier, and Q₋₁ to 0.",
        )
    ]

    for i in range(1, w + 1):
        q0 = q.lsb
        if (q0, q_1) == (0, 1):
            a, a_sign = add_extended(a, a.msb, m, m.msb)
            label = "A = A + M"
            explanation = "Q₀ = 0, Q₋₁ = 1: Add multiplicand to A"
        elif (q0, q_1) == (1, 0):
            a, a_sign = subtract_extended(a, a.msb, m, m.msb)
            label = "A = A - M"
            explanation = "Q₀ = 1, Q₋₁ = 0: Subtract multiplicand from A"
        else:
            a_sign = a.msb
            label = "No operation"
            explanation = f"Q₀ = {q0}, Q₋₁ = {q_1}: No arithmetic operation needed"

        steps.append(
            Step(
                ordinal=len(steps),
                iteration=i,
                label=label,
                registers=_snapshot(a, q, q_1, m),
                explanation=explanation,
            )
        )

        a, a_out = arithmetic_right_shift(a, a_sign)
        q, q_1 = arithmetic_right_shift(q, a_out)

        steps.append(
            Step(
                ordinal=len(steps),
                iteration=i,
                label="Arithmetic right shift",
                registers=_snapshot(a, q, q_1, m),
                explanation="Perform arithmetic right shift on [A, Q, Q₋₁]",
            )
        )

    product = concat(a, q)
    return BoothRun(
        multiplicand=md,
        multiplier=mr,
        bit_width=w,
        binary_multiplicand=str(m),
        binary_multiplier=str(multiplier_word),
        steps=tuple(steps),
        result_binary=str(product),
        result_decimal=decode(product),
    )


__all__ = ["run_booth_multiplication"]
