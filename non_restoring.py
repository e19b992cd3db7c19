"""Non-restoring division (unsigned), step by step.

Same registers as the restoring divider plus S, the sign of the partial
remainder: [S, A] is a (bit_width+1)-bit two's complement value.

Per iteration:
  1. shift [S, A, Q] left
  2. if the previous S was 0: A = A - M, else A = A + M;
     Q[n-1] = 1 if the new S is 0, else 0

No restore sub-step: a negative partial remainder is fixed by adding M in
the next iteration instead. If the last remainder is negative a single
correction A = A + M runs after the loop (correct_remainder()).
"""

from __future__ import annotations

from arith_model import DEFAULT_BIT_WIDTH, DivisionRun, Step
from binary_word import (
    BinaryWord,
    add_extended,
    decode_unsigned,
    encode_unsigned,
    left_shift,
    subtract_extended,
    with_lsb,
    zeros,
)
from restoring import prepare_division


def _snapshot(s: int, a: BinaryWord, q: BinaryWord, m: BinaryWord) -> dict[str, str]:
    return {"S": str(s), "A": str(a), "Q": str(q), "M": str(m)}


def correct_remainder(
    s: int,
    a: BinaryWord,
    q: BinaryWord,
    m: BinaryWord,
    ordinal: int,
) -> tuple[int, BinaryWord, Step | None]:
    """Final transition: add M back when the last remainder is negative.

    Returns (S, A, step); step is None when no correction was needed.
    """
    if s == 0:
        return s, a, None
    a, s = add_extended(a, s, m, 0)
    step = Step(
        ordinal=ordinal,
        iteration=q.width,
        label="Correct remainder: A = A + M",
        registers=_snapshot(s, a, q, m),
        explanation="Final remainder is negative: add divisor back to A.",
    )
    return s, a, step


def run_non_restoring_division(
    dividend: int | str,
    divisor: int | str,
    bit_width: int | None = DEFAULT_BIT_WIDTH,
) -> DivisionRun:
    """Divide dividend by divisor with the non-restoring algorithm.

    Same contract as run_restoring_division(); the quotient and remainder
    are always identical, only the trace differs.
    """
    dd, dv, w = prepare_division(dividend, divisor, bit_width)

    m = encode_unsigned(dv, w)
    q = dividend_word = encode_unsigned(dd, w)
    a = zeros(w)
    s = 0

    steps: list[Step] = [
        Step(
            ordinal=0,
            iteration=0,
            label="Initial values",
            registers=_snapshot(s, a, q, m),
            explanation="Initialize S and A to 0, Q to the dividend.",
        )
    ]

    for i in range(1, w + 1):
        prev_s = s
        a, s = left_shift(a, q.msb)
        q, _ = left_shift(q)
        steps.append(
            Step(
                ordinal=len(steps),
                iteration=i,
                label="Left shift S,A,Q",
                registers=_snapshot(s, a, q, m),
                explanation="Shift S, A and Q left by 1 bit. MSB of Q moves to LSB of A.",
            )
        )

        if prev_s == 0:
            a, s = subtract_extended(a, s, m, 0)
            op_label = "A = A - M"
            why = "Previous remainder was non-negative: subtract divisor from A."
        else:
            a, s = add_extended(a, s, m, 0)
            op_label = "A = A + M"
            why = "Previous remainder was negative: add divisor to A."

        q_bit = 1 - s
        q = with_lsb(q, q_bit)
        sign_word = "non-negative" if s == 0 else "negative"
        steps.append(
            Step(
                ordinal=len(steps),
                iteration=i,
                label=f"{op_label}, Q[n-1]={q_bit}",
                registers=_snapshot(s, a, q, m),
                explanation=f"{why} A is {sign_word}, set Q[n-1] = {q_bit}.",
            )
        )

    s, a, correction = correct_remainder(s, a, q, m, ordinal=len(steps))

    return DivisionRun(
        algorithm="non-restoring",
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
        correction=correction,
    )


__all__ = ["correct_remainder", "run_non_restoring_division"]
