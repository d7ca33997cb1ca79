from typing import Optional

import pytest

from unxbits.binary.bitops import BitOps
from unxbits.binary.selector import BitRange, RangeLike, SelectorError, resolve


class Interval:
    """Third-party range type exposing only the two-method interface."""

    def __init__(self, lo, hi):
        self.lo, self.hi = lo, hi

    def cardinality(self) -> int:
        return max(self.hi - self.lo + 1, 0)

    def minimum(self) -> Optional[int]:
        return self.lo if self.hi >= self.lo else None


def test_resolve_shapes():
    assert resolve(5) == (5, 1)
    assert resolve(range(3, 7)) == (3, 4)
    assert resolve(BitRange(2, 3)) == (2, 3)
    assert resolve(BitRange.inclusive(7, 13)) == (7, 7)
    assert resolve(Interval(0, 6)) == (0, 7)


def test_resolve_no_value():
    assert resolve(-1) is None
    assert resolve(range(0)) is None
    assert resolve(BitRange.inclusive(4, 3)) is None
    assert resolve(Interval(-2, 1)) is None
    assert resolve(Interval(5, 1)) is None


def test_custom_range_like_drives_value_at():
    assert isinstance(Interval(0, 1), RangeLike)
    assert BitOps(0b1110111).value_at(Interval(2, 4)) == 0b101


def test_stepped_range_is_rejected():
    with pytest.raises(SelectorError):
        resolve(range(0, 10, 3))
    with pytest.raises(SelectorError):
        resolve(range(9, 0, -2))


def test_descending_range_is_contiguous():
    assert resolve(range(5, 0, -1)) == (1, 5)
    assert resolve(range(0, 5, -1)) is None
    assert BitOps(0b111110).value_at(range(5, 0, -1)) == 0b11111
    assert BitOps(0b1110111).value_at(range(4, 1, -1)) == 0b101


def test_non_int_range_bounds_are_rejected():
    with pytest.raises(SelectorError):
        BitOps(0b110).value_at(BitRange(1.5, 2))
    with pytest.raises(SelectorError):
        resolve(Interval(1.0, 3.0))


def test_bit_range_interface():
    r = BitRange(4, 0)
    assert r.cardinality() == 0
    assert r.minimum() is None
    assert BitRange(4, 2).minimum() == 4
