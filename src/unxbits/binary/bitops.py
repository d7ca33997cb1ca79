from __future__ import annotations
import logging
from typing import Optional

from .selector import Selector, SelectorError, resolve

logger = logging.getLogger(__name__)

# Hard capacity: every word is treated as an unsigned 64-bit value.
# Bit 0 is the LSB, bit 63 the MSB.
WORD_BITS = 64
WORD_MASK = (1 << WORD_BITS) - 1


def _check_index(name: str, v: object) -> int:
    if isinstance(v, bool) or not isinstance(v, int):
        raise TypeError(f"{name} must be an int, got {type(v).__name__}")
    return v


class BitOps:
    """
    Read-only view over one packed unsigned word.

        BitOps(0b010).set_at(1)          -> True
        BitOps(0b1110111).value_at(range(2, 5)) -> 0b101
        BitOps(0b1110111).value_at(2)    -> 0b1

    `set_at` and `value_at` answer None (not False / 0) when the question
    names no bits: a negative index or offset, or an empty range.
    """
    __slots__ = ("_bits",)

    def __init__(self, bits: int):
        bits = _check_index("bits", bits)
        if not (0 <= bits <= WORD_MASK):
            raise ValueError(f"bits out of range for a {WORD_BITS}-bit word: {bits}")
        self._bits = bits

    @property
    def bits(self) -> int: return self._bits

    def __int__(self) -> int: return self._bits
    def __index__(self) -> int: return self._bits
    def __repr__(self) -> str: return f"BitOps(0x{self._bits:x})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, BitOps):
            return self._bits == other._bits
        return NotImplemented

    def __hash__(self) -> int: return hash(("BitOps", self._bits))

    def __getitem__(self, key: int | slice) -> Optional[int]:
        if isinstance(key, slice):
            if key.step not in (None, 1):
                raise SelectorError(f"bit slice must be contiguous, got step {key.step}")
            start = 0 if key.start is None else key.start
            # b[n:] with n past the word still selects one (zero) bit
            stop = max(start + 1, WORD_BITS) if key.stop is None else key.stop
            return self.value_at(range(start, stop))
        return self.value_at(key)

    # ---- core operations ----

    def set_at(self, index: int) -> Optional[bool]:
        """True / False for bit `index`; None when index < 0."""
        index = _check_index("index", index)
        if index < 0:
            return None
        if index >= WORD_BITS:
            return False
        return (self._bits & (1 << index)) != 0

    def value_at(self, selector: Selector) -> Optional[int]:
        """
        Extract a run of bits and right-align it.
        An int selects one bit; a range / BitRange selects `cardinality`
        bits starting at its `minimum`. Positions past the word read as 0.
        """
        where = resolve(selector)
        if where is None:
            logger.debug("value_at(%r) on 0x%x: no bits selected", selector, self._bits)
            return None
        offset, length = where
        mask = self._make_mask(length, offset)
        return (self._bits & mask) >> offset

    def _make_mask(self, length: int, offset: int) -> int:
        # Non-positive lengths and negative or out-of-word offsets give an empty mask.
        if length <= 0 or offset < 0 or offset >= WORD_BITS:
            return 0
        length = min(length, WORD_BITS - offset)
        return ((1 << length) - 1) << offset

    # ---- whole-word helpers ----

    def reverse(self) -> int:
        """Significant bits in reverse order: 0b1100101 -> 0b1010011."""
        if self._bits == 0:
            return 0
        return int(format(self._bits, "b")[::-1], 2)

    def rol(self, bitsize: int, steps: int) -> int:
        """Rotate the low `bitsize` bits left: rol(0b11110000 in 8, 2) -> 0b11000011."""
        return self._rotate(bitsize, steps)

    def ror(self, bitsize: int, steps: int) -> int:
        """Rotate the low `bitsize` bits right: ror(0b11110000 in 8, 2) -> 0b00111100."""
        return self._rotate(bitsize, -steps)

    def _rotate(self, bitsize: int, steps: int) -> int:
        bitsize = _check_index("bitsize", bitsize)
        steps = _check_index("steps", steps)
        if not (1 <= bitsize <= WORD_BITS):
            raise ValueError(f"bitsize must be 1..{WORD_BITS}, got {bitsize}")
        mask = self._make_mask(bitsize, 0)
        v = self._bits & mask
        steps %= bitsize
        return ((v << steps) | (v >> (bitsize - steps))) & mask
