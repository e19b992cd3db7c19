#!/usr/bin/env python3
"""
arith_engine.py: Booth multiplication, restoring and non-restoring division
simulated on fixed-width registers (4/8/16/32 bits).

Every run returns the final registers, the decoded result and the ordered
trace of register snapshots, one Step per micro-operation:

  - Booth:          1 + 2n steps  (operation, arithmetic right shift)
  - restoring:      1 + 3n steps  (shift, subtract, restore-or-keep)
  - non-restoring:  1 + 2n steps  (shift, add-or-subtract) + optional correction

Runs are pure: no state survives a call, the same inputs give the same trace.

CLI:
  python3 arith_engine.py booth 3 -4 --width 4
  python3 arith_engine.py restoring 11 3 --width 4 --dump-jsonl run.jsonl
"""

from __future__ import annotations

from arith_model import ALGORITHMS, DEFAULT_BIT_WIDTH, BoothRun, DivisionRun
from booth import run_booth_multiplication
from non_restoring import run_non_restoring_division
from restoring import run_restoring_division

_RUNNERS = {
    "booth": run_booth_multiplication,
    "restoring": run_restoring_division,
    "non-restoring": run_non_restoring_division,
}


def run_algorithm(
    name: str,
    a: int | str,
    b: int | str,
    bit_width: int | None = DEFAULT_BIT_WIDTH,
) -> BoothRun | DivisionRun:
    """Dispatch by algorithm name ("booth", "restoring", "non-restoring")."""
    runner = _RUNNERS.get(name)
    if runner is None:
        raise ValueError(f"Unknown algorithm: {name!r} (expected one of {', '.join(ALGORITHMS)})")
    return runner(a, b, bit_width)


__all__ = [
    "run_algorithm",
    "run_booth_multiplication",
    "run_restoring_division",
    "run_non_restoring_division",
]


if __name__ == "__main__":
    from cli import main

    raise SystemExit(main())
