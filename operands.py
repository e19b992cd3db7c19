"""Boundary parsing for engine inputs.

Operands arrive as ints or as text typed by a user: a decimal ("-4", "+11")
or a raw binary pattern with a 0b prefix ("0b1100"). Anything else is an
InvalidFormatError and never reaches binary_word.
"""

from __future__ import annotations

import re

from arith_model import (
    DEFAULT_BIT_WIDTH,
    SUPPORTED_WIDTHS,
    InvalidFormatError,
    RangeError,
    UnsupportedWidthError,
)
from binary_word import decode, decode_unsigned, from_bitstring

_DECIMAL_RE = re.compile(r"[+-]?\d+")
_BINARY_RE = re.compile(r"0[bB][01]+")


def resolve_bit_width(bit_width: int | None) -> int:
    """None -> DEFAULT_BIT_WIDTH; otherwise must be one of SUPPORTED_WIDTHS."""
    if bit_width is None:
        return DEFAULT_BIT_WIDTH
    if isinstance(bit_width, bool) or not isinstance(bit_width, int):
        raise UnsupportedWidthError(f"bit width must be an int, got {bit_width!r}")
    if bit_width not in SUPPORTED_WIDTHS:
        allowed = ", ".join(map(str, SUPPORTED_WIDTHS))
        raise UnsupportedWidthError(f"bit width must be one of {allowed} (got {bit_width})")
    return bit_width


def parse_operand(raw: int | str, bit_width: int, *, signed: bool, name: str = "operand") -> int:
    """Turn raw user input into an int.

    Binary patterns are bit patterns, not magnitudes: with signed=True
    "0b1100" at width 4 is -4. Patterns shorter than bit_width are
    zero-extended; longer ones are a RangeError.
    Range checks on decimal values are left to the caller.
    """
    if isinstance(raw, bool):
        raise InvalidFormatError(f"{name}: expected an integer, got {raw!r}")
    if isinstance(raw, int):
        return raw
    if not isinstance(raw, str):
        raise InvalidFormatError(f"{name}: expected an integer, got {type(raw).__name__}")

    text = raw.strip()
    if _DECIMAL_RE.fullmatch(text):
        digits = text.lstrip("+-").lstrip("0") or "0"
        # more decimal digits than bits cannot fit in bit_width bits
        if len(digits) > bit_width:
            raise RangeError(f"{name}: a {len(digits)}-digit value does not fit in {bit_width} bits")
        return -int(digits) if text.startswith("-") else int(digits)
    if _BINARY_RE.fullmatch(text):
        digits = text[2:]
        if len(digits) > bit_width:
            raise RangeError(f"{name}: pattern {text} is wider than {bit_width} bits")
        word = from_bitstring(digits.rjust(bit_width, "0"))
        return decode(word) if signed else decode_unsigned(word)

    raise InvalidFormatError(f"{name}: not a well-formed integer: {raw!r}")


def check_range(value: int, lo: int, hi: int, *, name: str, bit_width: int) -> None:
    if not (lo <= value <= hi):
        raise RangeError(f"{name} must be between {lo} and {hi} for {bit_width}-bit representation")


__all__ = ["resolve_bit_width", "parse_operand", "check_range"]
