#!/usr/bin/env python3
"""CLI for the arithmetic trace engine.

Usage examples:
  - Booth multiplication, 4-bit registers:
      python3 cli.py booth 3 -4 --width 4

  - Restoring division + dump the trace as JSONL:
      python3 cli.py restoring 11 3 --width 4 --dump-jsonl run.jsonl

  - Binary operands are accepted with a 0b prefix:
      python3 cli.py non-restoring 0b1011 0b0011 --width 4

  - Load a JSONL trace, print it and check it against a fresh run:
      python3 cli.py show --load-jsonl run.jsonl --verify
"""

from __future__ import annotations

import argparse
from collections.abc import Iterable

from arith_engine import run_algorithm
from arith_model import ALGORITHMS, SUPPORTED_WIDTHS, BoothRun, DivisionRun, EngineError, Step, utc_now_iso
from operands import resolve_bit_width
from replay import decode_final_registers, verify_trace
from trace_jsonl import dump_run_jsonl, load_trace_jsonl


def build_argparser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="arith_engine",
        description="Booth multiplication, restoring and non-restoring division on fixed-width registers.",
    )
    sub = ap.add_subparsers(dest="cmd", required=True)

    helps = {
        "booth": ("Signed multiplication with Booth's algorithm", "Multiplicand", "Multiplier"),
        "restoring": ("Unsigned restoring division", "Dividend", "Divisor"),
        "non-restoring": ("Unsigned non-restoring division", "Dividend", "Divisor"),
    }
    for name in ALGORITHMS:
        text, first, second = helps[name]
        p = sub.add_parser(name, help=text)
        p.add_argument("a", help=f"{first} (decimal, or binary with 0b prefix)")
        p.add_argument("b", help=f"{second} (decimal, or binary with 0b prefix)")
        p.add_argument(
            "--width",
            type=int,
            default=None,
            choices=SUPPORTED_WIDTHS,
            help="Register width in bits (default 8).",
        )
        p.add_argument("--dump-jsonl", help="Write the trace to JSONL (file path).")
        p.add_argument("--note", default=None, help="Free-text note stored in the JSONL header.")
        p.add_argument("--quiet", action="store_true", help="Print only the result, not every step.")

    p_show = sub.add_parser("show", help="Print a JSONL trace")
    p_show.add_argument("--load-jsonl", required=True, help="Input JSONL path")
    p_show.add_argument("--verify", action="store_true", help="Re-run the computation and compare every step.")

    return ap


def _format_step(step: Step) -> str:
    regs = "  ".join(f"{k}={v}" for k, v in step.registers.items())
    return f"[step] {step.ordinal:>3}  it={step.iteration:<2}  {regs}  {step.label}"


def _print_steps(steps: Iterable[Step]) -> None:
    for step in steps:
        print(_format_step(step))


def _print_result(run: BoothRun | DivisionRun) -> None:
    tag = f"[{run.algorithm}]"
    if isinstance(run, BoothRun):
        print(
            f"{tag} {run.multiplicand} x {run.multiplier} = {run.result_decimal}  "
            f"({run.binary_multiplicand} x {run.binary_multiplier} = {run.result_binary})"
        )
    else:
        print(
            f"{tag} {run.dividend} / {run.divisor} = {run.quotient_decimal} r {run.remainder_decimal}  "
            f"(Q={run.quotient_binary}  A={run.remainder_binary})"
        )
    print(f"{tag} width={run.bit_width}  steps={len(run.steps)}")


def _cmd_run(args: argparse.Namespace) -> int:
    width = resolve_bit_width(args.width)
    run = run_algorithm(args.cmd, args.a, args.b, width)

    if not args.quiet:
        _print_steps(run.steps)
        correction = getattr(run, "correction", None)
        if correction is not None:
            print(_format_step(correction))
    _print_result(run)

    if args.dump_jsonl:
        dump_run_jsonl(run, args.dump_jsonl, include_summary=True, created_utc=utc_now_iso(), note=args.note)
        print(f"[io] wrote {args.dump_jsonl}")
    return 0


def _cmd_show(args: argparse.Namespace) -> int:
    record = load_trace_jsonl(args.load_jsonl)
    a, b = record.operands
    print(f"[trace] algorithm={record.algorithm}  width={record.bit_width}  operands={a},{b}  steps={len(record.steps)}")
    _print_steps(record.steps)
    if record.correction is not None:
        print(_format_step(record.correction))

    decoded = decode_final_registers(record)
    print("[trace] " + "  ".join(f"{k}={v}" for k, v in decoded.items()))

    if args.verify:
        verify_trace(record)
        print("[verify] ok: trace matches a fresh run")
    return 0


def main(argv: list[str] | None = None) -> int:
    ap = build_argparser()
    args = ap.parse_args(argv)

    try:
        if args.cmd == "show":
            return _cmd_show(args)
        return _cmd_run(args)
    except (EngineError, ValueError, OSError) as e:
        print(f"[error] {e}")
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
