"""Fixed-width two's-complement bit vectors.

A BinaryWord is an immutable tuple of bits, index 0 = most significant bit.
Every operation returns a new word of the same width; nothing here grows or
truncates a word except concat(), which is explicit about it.

Arithmetic is done bit by bit with ripple-carry full adders, so that the
engines can report carries and shifted-out bits exactly as a register file
would.
"""

from __future__ import annotations

from dataclasses import dataclass

from arith_model import RangeError


@dataclass(frozen=True)
class BinaryWord:
    bits: tuple[int, ...]

    def __post_init__(self) -> None:
        if not self.bits:
            raise ValueError("BinaryWord must have at least one bit")
        if any(b not in (0, 1) for b in self.bits):
            raise ValueError("bits must be 0 or 1")

    @property
    def width(self) -> int:
        return len(self.bits)

    @property
    def msb(self) -> int:
        return self.bits[0]

    @property
    def lsb(self) -> int:
        return self.bits[-1]

    def __str__(self) -> str:
        return "".join("1" if b else "0" for b in self.bits)


# --- Construction / conversion ---------------------------------------------


def signed_range(width: int) -> tuple[int, int]:
    return (-(1 << (width - 1)), (1 << (width - 1)) - 1)


def unsigned_range(width: int) -> tuple[int, int]:
    return (0, (1 << width) - 1)


def zeros(width: int) -> BinaryWord:
    return BinaryWord((0,) * width)


def from_bitstring(s: str) -> BinaryWord:
    s = s.strip()
    if not s or any(ch not in "01" for ch in s):
        raise ValueError(f"not a bitstring: {s!r}")
    return BinaryWord(tuple(1 if ch == "1" else 0 for ch in s))


def _bits_of(n: int, width: int) -> tuple[int, ...]:
    return tuple((n >> i) & 1 for i in range(width - 1, -1, -1))


def encode(value: int, width: int) -> BinaryWord:
    """Signed value -> width-bit two's complement."""
    lo, hi = signed_range(width)
    if not (lo <= value <= hi):
        raise RangeError(f"{value} does not fit in {width}-bit two's complement [{lo}..{hi}]")
    if value >= 0:
        return BinaryWord(_bits_of(value, width))
    # invert-then-increment of the magnitude
    return negate(BinaryWord(_bits_of(-value, width)))


def encode_unsigned(value: int, width: int) -> BinaryWord:
    lo, hi = unsigned_range(width)
    if not (lo <= value <= hi):
        raise RangeError(f"{value} does not fit in {width}-bit unsigned [{lo}..{hi}]")
    return BinaryWord(_bits_of(value, width))


def decode_unsigned(word: BinaryWord) -> int:
    n = 0
    for b in word.bits:
        n = (n << 1) | b
    return n


def decode(word: BinaryWord) -> int:
    """width-bit two's complement -> signed value."""
    if word.msb == 0:
        return decode_unsigned(word)
    # negate(min) == min, whose unsigned reading is exactly the magnitude
    return -decode_unsigned(negate(word))


def concat(hi: BinaryWord, lo: BinaryWord) -> BinaryWord:
    """hi ++ lo as one word of width hi.width + lo.width."""
    return BinaryWord(hi.bits + lo.bits)


def with_lsb(word: BinaryWord, bit: int) -> BinaryWord:
    return BinaryWord(word.bits[:-1] + (bit,))


# --- Arithmetic -------------------------------------------------------------


def _check_same_width(x: BinaryWord, y: BinaryWord) -> None:
    if x.width != y.width:
        raise ValueError(f"width mismatch: {x.width} vs {y.width}")


def full_adder(a: int, b: int, cin: int) -> tuple[int, int]:
    s = (a ^ b) ^ cin
    cout = (a & b) | (cin & (a ^ b))
    return s, cout


def add_with_carry(x: BinaryWord, y: BinaryWord, carry_in: int = 0) -> tuple[BinaryWord, int]:
    """Ripple-carry x + y + carry_in. Returns (sum mod 2^width, carry_out)."""
    _check_same_width(x, y)
    out: list[int] = []
    c = carry_in
    for a, b in zip(reversed(x.bits), reversed(y.bits)):
        s, c = full_adder(a, b, c)
        out.append(s)
    return BinaryWord(tuple(reversed(out))), c


def add(x: BinaryWord, y: BinaryWord) -> BinaryWord:
    # carry-out is dropped: fixed-width wraparound
    s, _ = add_with_carry(x, y)
    return s


def invert(x: BinaryWord) -> BinaryWord:
    return BinaryWord(tuple(1 - b for b in x.bits))


def negate(x: BinaryWord) -> BinaryWord:
    s, _ = add_with_carry(invert(x), zeros(x.width), carry_in=1)
    return s


def subtract(x: BinaryWord, y: BinaryWord) -> BinaryWord:
    return add(x, negate(y))


def add_extended(x: BinaryWord, x_ext: int, y: BinaryWord, y_ext: int) -> tuple[BinaryWord, int]:
    """Add over width+1 bits.

    x_ext and y_ext are the extra top bits of the two operands (the sign
    extension for signed words, 0 for unsigned ones). Returns the low word
    and the top bit of the (width+1)-bit sum.
    """
    s, c = add_with_carry(x, y)
    return s, x_ext ^ y_ext ^ c


def subtract_extended(x: BinaryWord, x_ext: int, y: BinaryWord, y_ext: int) -> tuple[BinaryWord, int]:
    """Subtract over width+1 bits: x + ~y + 1, see add_extended()."""
    s, c = add_with_carry(x, invert(y), carry_in=1)
    return s, x_ext ^ (1 - y_ext) ^ c


# --- Shifts -----------------------------------------------------------------


def arithmetic_right_shift(word: BinaryWord, bit_in: int | None = None) -> tuple[BinaryWord, int]:
    """Shift right by one. Returns (shifted, bit that left the LSB).

    The new MSB is bit_in; without it the current MSB is duplicated (plain
    sign extension). Combined registers pass the neighbour's bit in.
    """
    if bit_in is None:
        bit_in = word.msb
    return BinaryWord((bit_in,) + word.bits[:-1]), word.lsb


def left_shift(word: BinaryWord, bit_in: int = 0) -> tuple[BinaryWord, int]:
    """Shift left by one. Returns (shifted, bit that left the MSB)."""
    return BinaryWord(word.bits[1:] + (bit_in,)), word.msb


__all__ = [
    "BinaryWord",
    "signed_range",
    "unsigned_range",
    "zeros",
    "from_bitstring",
    "encode",
    "encode_unsigned",
    "decode",
    "decode_unsigned",
    "concat",
    "with_lsb",
    "full_adder",
    "add_with_carry",
    "add",
    "invert",
    "negate",
    "subtract",
    "add_extended",
    "subtract_extended",
    "arithmetic_right_shift",
    "left_shift",
]
