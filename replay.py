"""
Replay utilities for loaded traces.

decode_final_registers(TraceRecord) reads the result back out of the last
register snapshot (and the correction, if any), without running anything.
verify_trace(TraceRecord) re-runs the engine on the recorded operands and
checks the trace step by step.
TraceCursor walks a trace forwards and backwards, clamped at both ends.
"""

from __future__ import annotations

from collections.abc import Sequence

from arith_engine import run_algorithm
from arith_model import Step
from binary_word import decode, decode_unsigned, from_bitstring
from trace_jsonl import TraceRecord


def decode_final_registers(record: TraceRecord) -> dict[str, int]:
    """Booth -> {"product"}; division -> {"quotient", "remainder"}."""
    last = record.steps[-1]
    if record.algorithm == "booth":
        regs = last.registers
        return {"product": decode(from_bitstring(regs["A"] + regs["Q"]))}

    regs = last.registers
    quotient = decode_unsigned(from_bitstring(regs["Q"]))
    remainder_regs = record.correction.registers if record.correction is not None else regs
    if remainder_regs.get("S", "0") != "0":
        raise ValueError("final remainder is negative and no correction was recorded")
    remainder = decode_unsigned(from_bitstring(remainder_regs["A"]))
    return {"quotient": quotient, "remainder": remainder}


def _first_difference(got: Step, want: Step) -> str | None:
    for field in ("ordinal", "iteration", "label", "registers", "explanation"):
        if getattr(got, field) != getattr(want, field):
            return field
    return None


def verify_trace(record: TraceRecord) -> bool:
    """Re-run the recorded computation and compare every step.

    Returns True when the trace matches; raises ValueError on the first
    mismatch.
    """
    a, b = record.operands
    run = run_algorithm(record.algorithm, a, b, record.bit_width)

    if len(run.steps) != len(record.steps):
        raise ValueError(f"step count mismatch: recorded {len(record.steps)}, expected {len(run.steps)}")
    for got, want in zip(record.steps, run.steps):
        field = _first_difference(got, want)
        if field is not None:
            raise ValueError(f"step {want.ordinal}: {field} differs from a fresh run")

    fresh_correction = getattr(run, "correction", None)
    if (record.correction is None) != (fresh_correction is None):
        raise ValueError("correction step presence differs from a fresh run")
    if record.correction is not None and _first_difference(record.correction, fresh_correction) is not None:
        raise ValueError("correction step differs from a fresh run")

    if record.result is not None and record.result != run.result_fields():
        raise ValueError("summary result differs from a fresh run")
    return True


class TraceCursor:
    """Step navigation over a finished trace."""

    def __init__(self, steps: Sequence[Step]) -> None:
        if not steps:
            raise ValueError("cannot navigate an empty trace")
        self._steps = tuple(steps)
        self._pos = 0

    @property
    def position(self) -> int:
        return self._pos

    @property
    def total(self) -> int:
        return len(self._steps)

    @property
    def current(self) -> Step:
        return self._steps[self._pos]

    @property
    def at_start(self) -> bool:
        return self._pos == 0

    @property
    def at_end(self) -> bool:
        return self._pos == len(self._steps) - 1

    def seek(self, index: int) -> Step:
        self._pos = max(0, min(len(self._steps) - 1, index))
        return self.current

    def next(self) -> Step:
        return self.seek(self._pos + 1)

    def prev(self) -> Step:
        return self.seek(self._pos - 1)

    def reset(self) -> Step:
        return self.seek(0)


__all__ = ["decode_final_registers", "verify_trace", "TraceCursor"]
