from __future__ import annotations

import pytest

from arith_model import DEFAULT_BIT_WIDTH, InvalidFormatError, RangeError, UnsupportedWidthError
from operands import parse_operand, resolve_bit_width


def test_resolve_bit_width_default_and_supported():
    assert resolve_bit_width(None) == DEFAULT_BIT_WIDTH == 8
    for w in (4, 8, 16, 32):
        assert resolve_bit_width(w) == w


@pytest.mark.parametrize("bad", [0, 3, 5, 64, True, "8"])
def test_resolve_bit_width_rejects(bad):
    with pytest.raises(UnsupportedWidthError):
        resolve_bit_width(bad)


def test_parse_decimal_text():
    assert parse_operand("42", 8, signed=True) == 42
    assert parse_operand(" -7 ", 8, signed=True) == -7
    assert parse_operand("+3", 8, signed=False) == 3
    assert parse_operand(-5, 8, signed=True) == -5


def test_parse_binary_patterns():
    assert parse_operand("0b1100", 4, signed=True) == -4
    assert parse_operand("0b1100", 4, signed=False) == 12
    assert parse_operand("0b11", 4, signed=True) == 3  # zero-extended
    with pytest.raises(RangeError):
        parse_operand("0b10000", 4, signed=False)


@pytest.mark.parametrize("bad", ["", "  ", "1.5", "abc", "0x1F", "0b102", "--3", None, 2.0, True])
def test_parse_rejects_malformed(bad):
    with pytest.raises(InvalidFormatError):
        parse_operand(bad, 8, signed=True)  # type: ignore[arg-type]


def test_parse_decimal_too_long_is_range_error():
    with pytest.raises(RangeError):
        parse_operand("1" * 5000, 8, signed=True)
    with pytest.raises(RangeError):
        parse_operand("-" + "9" * 33, 32, signed=True)
    # leading zeros do not count
    assert parse_operand("0" * 5000 + "7", 4, signed=False) == 7
    assert parse_operand("-0007", 4, signed=True) == -7
