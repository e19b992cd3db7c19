"""Arithmetic engine data model (format-agnostic).

This module contains only the dataclasses returned by the engines, the
error taxonomy and the default configuration. No arithmetic and no file I/O
lives here.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timezone
from types import MappingProxyType

# --- Default config ---------------------------------------------------------

SUPPORTED_WIDTHS: tuple[int, ...] = (4, 8, 16, 32)
DEFAULT_BIT_WIDTH = 8

ALGORITHMS: tuple[str, ...] = ("booth", "restoring", "non-restoring")


# --- Errors -----------------------------------------------------------------


class EngineError(ValueError):
    """Base class for every error reported before a run starts."""


class RangeError(EngineError):
    pass


class DivideByZeroError(EngineError):
    pass


class InvalidFormatError(EngineError):
    pass


class UnsupportedWidthError(EngineError):
    pass


# --- Trace records ----------------------------------------------------------


@dataclass(frozen=True)
class Step:
    """One micro-step of a run.

    ordinal is the position in the trace (0 = initial values).
    iteration is 0 for the initial values and 1..bit_width for loop steps.
    registers maps a register name to its bitstring after the step; it is
    stored as a read-only view.
    """

    ordinal: int
    iteration: int
    label: str
    registers: Mapping[str, str]
    explanation: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "registers", MappingProxyType(dict(self.registers)))

    def to_dict(self) -> dict[str, object]:
        return {
            "ordinal": self.ordinal,
            "iteration": self.iteration,
            "label": self.label,
            "registers": dict(self.registers),
            "explanation": self.explanation,
        }


@dataclass(frozen=True)
class BoothRun:
    """Result of a Booth multiplication run."""

    multiplicand: int
    multiplier: int
    bit_width: int
    binary_multiplicand: str
    binary_multiplier: str
    steps: tuple[Step, ...]
    result_binary: str  # A ++ Q, 2*bit_width bits
    result_decimal: int

    algorithm = "booth"

    @property
    def operands(self) -> tuple[int, int]:
        return (self.multiplicand, self.multiplier)

    def result_fields(self) -> dict[str, object]:
        return {"result_binary": self.result_binary, "result_decimal": self.result_decimal}

    def to_dict(self) -> dict[str, object]:
        return {
            "algorithm": self.algorithm,
            "bit_width": self.bit_width,
            "multiplicand": self.multiplicand,
            "multiplier": self.multiplier,
            "binary_multiplicand": self.binary_multiplicand,
            "binary_multiplier": self.binary_multiplier,
            "steps": [s.to_dict() for s in self.steps],
            **self.result_fields(),
        }


@dataclass(frozen=True)
class DivisionRun:
    """Result of a restoring or non-restoring division run.

    correction is only set by the non-restoring divider, when the last
    partial remainder was negative and M had to be added back.
    """

    algorithm: str
    dividend: int
    divisor: int
    bit_width: int
    binary_dividend: str
    binary_divisor: str
    steps: tuple[Step, ...]
    quotient_binary: str
    quotient_decimal: int
    remainder_binary: str
    remainder_decimal: int
    correction: Step | None = None

    @property
    def operands(self) -> tuple[int, int]:
        return (self.dividend, self.divisor)

    def result_fields(self) -> dict[str, object]:
        return {
            "quotient_binary": self.quotient_binary,
            "quotient_decimal": self.quotient_decimal,
            "remainder_binary": self.remainder_binary,
            "remainder_decimal": self.remainder_decimal,
        }

    def to_dict(self) -> dict[str, object]:
        out: dict[str, object] = {
            "algorithm": self.algorithm,
            "bit_width": self.bit_width,
            "dividend": self.dividend,
            "divisor": self.divisor,
            "binary_dividend": self.binary_dividend,
            "binary_divisor": self.binary_divisor,
            "steps": [s.to_dict() for s in self.steps],
            **self.result_fields(),
        }
        out["correction"] = None if self.correction is None else self.correction.to_dict()
        return out


def utc_now_iso() -> str:
    """UTC now in ISO format without microseconds, suffixed with 'Z'."""
    return datetime.now(timezone.utc).replace(microsecond=0).isoformat().replace("+00:00", "Z")


__all__ = [
    "ALGORITHMS",
    "DEFAULT_BIT_WIDTH",
    "SUPPORTED_WIDTHS",
    "EngineError",
    "RangeError",
    "DivideByZeroError",
    "InvalidFormatError",
    "UnsupportedWidthError",
    "Step",
    "BoothRun",
    "DivisionRun",
    "utc_now_iso",
]
