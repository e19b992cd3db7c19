"""JSONL backend for engine traces.

File format (v1):
  - First line: header {"type":"trace","version":1,"algorithm":...,"bit_width":...,"operands":[a,b],...}
  - Next lines: one step each {"ordinal":...,"iteration":...,"label":...,"registers":{...},"explanation":...}
  - Optional: correction {"type":"correction", <step fields>} (non-restoring only)
  - Optional last line: summary {"type":"summary","k":...,"result":{...}}

The loaded form is a TraceRecord: the run as data, without re-running the
engine. See replay.py for checking a record against a fresh run.
"""

from __future__ import annotations

import json
from dataclasses import dataclass

from arith_model import ALGORITHMS, SUPPORTED_WIDTHS, BoothRun, DivisionRun, Step

_STEP_KEYS = {"ordinal", "iteration", "label", "registers", "explanation"}

# register name -> width in bits (None = bit_width)
_REGISTER_WIDTHS: dict[str, dict[str, int | None]] = {
    "booth": {"A": None, "Q": None, "Q_1": 1, "M": None},
    "restoring": {"A": None, "Q": None, "M": None},
    "non-restoring": {"S": 1, "A": None, "Q": None, "M": None},
}


@dataclass(frozen=True)
class TraceRecord:
    """A run as loaded from JSONL (format-agnostic)."""

    algorithm: str
    bit_width: int
    operands: tuple[int, int]
    steps: list[Step]
    correction: Step | None = None
    result: dict[str, object] | None = None
    created_utc: str | None = None
    note: str | None = None


def _dumps(obj: dict) -> str:
    return json.dumps(obj, separators=(",", ":"), ensure_ascii=False)


def dump_run_jsonl(
    run: BoothRun | DivisionRun,
    path: str,
    include_summary: bool = True,
    *,
    created_utc: str | None = None,
    note: str | None = None,
) -> None:
    """Write a run to JSONL: header, steps in order, correction, summary."""
    header: dict[str, object] = {
        "type": "trace",
        "version": 1,
        "algorithm": run.algorithm,
        "bit_width": run.bit_width,
        "operands": list(run.operands),
    }
    if created_utc:
        header["created_utc"] = created_utc
    if note:
        header["note"] = note

    with open(path, "w", encoding="utf-8") as f:
        f.write(_dumps(header) + "\n")

        for step in run.steps:
            f.write(_dumps(step.to_dict()) + "\n")

        correction = getattr(run, "correction", None)
        if correction is not None:
            f.write(_dumps({"type": "correction", **correction.to_dict()}) + "\n")

        if include_summary:
            summary = {"type": "summary", "k": len(run.steps), "result": run.result_fields()}
            f.write(_dumps(summary) + "\n")


def _validate_header(obj: dict) -> TraceRecord:
    allowed = {"type", "version", "algorithm", "bit_width", "operands", "created_utc", "note"}
    extra = set(obj.keys()) - allowed
    if extra:
        raise ValueError(f"Header: unexpected keys: {sorted(extra)}")

    if obj.get("type") != "trace":
        raise ValueError("Header: type must be 'trace'")
    if obj.get("version") != 1:
        raise ValueError("Header: version must be 1")
    algorithm = obj.get("algorithm")
    if algorithm not in ALGORITHMS:
        raise ValueError(f"Header: unknown algorithm {algorithm!r}")
    bit_width = obj.get("bit_width")
    if bit_width not in SUPPORTED_WIDTHS or isinstance(bit_width, bool):
        raise ValueError(f"Header: bit_width must be one of {list(SUPPORTED_WIDTHS)}")
    operands = obj.get("operands")
    if (
        not isinstance(operands, list)
        or len(operands) != 2
        or not all(isinstance(x, int) and not isinstance(x, bool) for x in operands)
    ):
        raise ValueError("Header: operands must be a list of two ints")
    for key in ("created_utc", "note"):
        if key in obj and not isinstance(obj[key], str):
            raise ValueError(f"Header: {key} must be a string")

    return TraceRecord(
        algorithm=algorithm,
        bit_width=bit_width,
        operands=(operands[0], operands[1]),
        steps=[],
        created_utc=obj.get("created_utc"),
        note=obj.get("note"),
    )


def _validate_step(obj: dict, header: TraceRecord, *, what: str = "Step") -> Step:
    extra = set(obj.keys()) - _STEP_KEYS
    if extra:
        raise ValueError(f"{what}: unexpected keys: {sorted(extra)}")
    missing = _STEP_KEYS - set(obj.keys())
    if missing:
        raise ValueError(f"{what}: missing keys: {sorted(missing)}")

    ordinal = obj["ordinal"]
    iteration = obj["iteration"]
    if not isinstance(ordinal, int) or isinstance(ordinal, bool) or ordinal < 0:
        raise ValueError(f"{what}: ordinal must be int >= 0")
    if not isinstance(iteration, int) or isinstance(iteration, bool) or not (0 <= iteration <= header.bit_width):
        raise ValueError(f"{what} {ordinal}: iteration must be int in [0..{header.bit_width}]")
    if not isinstance(obj["label"], str) or not isinstance(obj["explanation"], str):
        raise ValueError(f"{what} {ordinal}: label and explanation must be strings")

    registers = obj["registers"]
    if not isinstance(registers, dict):
        raise ValueError(f"{what} {ordinal}: registers must be an object")
    expected = _REGISTER_WIDTHS[header.algorithm]
    if set(registers.keys()) != set(expected.keys()):
        raise ValueError(f"{what} {ordinal}: registers must be {sorted(expected)}")
    for name, fixed in expected.items():
        value = registers[name]
        want = header.bit_width if fixed is None else fixed
        if not isinstance(value, str) or len(value) != want or any(ch not in "01" for ch in value):
            raise ValueError(f"{what} {ordinal}: register {name} must be a {want}-bit bitstring")

    return Step(
        ordinal=ordinal,
        iteration=iteration,
        label=obj["label"],
        registers={name: registers[name] for name in expected},
        explanation=obj["explanation"],
    )


def _validate_summary(obj: dict) -> dict:
    allowed = {"type", "k", "result"}
    extra = set(obj.keys()) - allowed
    if extra:
        raise ValueError(f"Summary: unexpected keys: {sorted(extra)}")
    if obj.get("type") != "summary":
        raise ValueError("Summary: type must be 'summary'")
    if "result" in obj and not isinstance(obj["result"], dict):
        raise ValueError("Summary: result must be an object")
    return obj


def load_trace_jsonl(path: str) -> TraceRecord:
    header: TraceRecord | None = None
    steps: list[Step] = []
    correction: Step | None = None
    summary: dict | None = None

    with open(path, encoding="utf-8") as f:
        for lineno, line in enumerate(f, start=1):
            line = line.strip()
            if not line:
                continue
            try:
                obj = json.loads(line)
            except json.JSONDecodeError as e:
                raise ValueError(f"Invalid JSON at line {lineno}: {e}") from e
            if not isinstance(obj, dict):
                raise ValueError(f"Line {lineno}: expected a JSON object")

            if header is None:
                header = _validate_header(obj)
                continue

            if summary is not None:
                raise ValueError(f"Line {lineno}: nothing may follow the summary")

            kind = obj.get("type")
            if kind == "summary":
                summary = _validate_summary(obj)
                continue
            if kind == "correction":
                if correction is not None:
                    raise ValueError(f"Line {lineno}: duplicate correction")
                if header.algorithm != "non-restoring":
                    raise ValueError(f"Line {lineno}: correction only exists for non-restoring division")
                fields = {k: v for k, v in obj.items() if k != "type"}
                correction = _validate_step(fields, header, what="Correction")
                continue
            if correction is not None:
                raise ValueError(f"Line {lineno}: step after correction")

            step = _validate_step(obj, header)
            if step.ordinal != len(steps):
                raise ValueError(f"Line {lineno}: expected ordinal {len(steps)}, got {step.ordinal}")
            steps.append(step)

    if header is None:
        raise ValueError("Empty file or missing trace header")
    if not steps:
        raise ValueError("No step records found")
    if correction is not None and correction.ordinal != len(steps):
        raise ValueError(f"Correction: ordinal must be {len(steps)}")
    if summary is not None and "k" in summary and summary["k"] != len(steps):
        raise ValueError(f"Summary: k={summary['k']} but {len(steps)} steps were read")

    return TraceRecord(
        algorithm=header.algorithm,
        bit_width=header.bit_width,
        operands=header.operands,
        steps=steps,
        correction=correction,
        result=summary.get("result") if summary else None,
        created_utc=header.created_utc,
        note=header.note,
    )


__all__ = ["TraceRecord", "dump_run_jsonl", "load_trace_jsonl"]
