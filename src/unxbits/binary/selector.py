from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Protocol, Tuple, Union, runtime_checkable


class SelectorError(TypeError):
    pass


@runtime_checkable
class RangeLike(Protocol):
    """Anything that describes a contiguous run of bit positions."""

    def cardinality(self) -> int: ...
    def minimum(self) -> Optional[int]: ...


@dataclass(frozen=True)
class BitRange:
    offset: int
    length: int

    @classmethod
    def inclusive(cls, lo: int, hi: int) -> "BitRange":
        """Bits lo..hi, both ends included; empty when hi < lo."""
        return cls(offset=lo, length=max(hi - lo + 1, 0))

    def cardinality(self) -> int:
        return max(self.length, 0)

    def minimum(self) -> Optional[int]:
        return self.offset if self.length >= 1 else None


class _PyRange:
    __slots__ = ("r",)

    def __init__(self, r: range):
        # ascending or descending, but without gaps
        if abs(r.step) != 1:
            raise SelectorError(f"bit range must be contiguous, got step {r.step}")
        self.r = r

    def cardinality(self) -> int: return len(self.r)
    def minimum(self) -> Optional[int]: return min(self.r) if len(self.r) else None


Selector = Union[int, range, BitRange, RangeLike]


def as_range_like(selector: object) -> RangeLike:
    if isinstance(selector, bool):
        raise SelectorError("bool is not a bit selector")
    if isinstance(selector, int):
        return BitRange(offset=selector, length=1)
    if isinstance(selector, range):
        return _PyRange(selector)
    if isinstance(selector, RangeLike):
        return selector
    raise SelectorError(f"unsupported bit selector: {type(selector).__name__}")


def resolve(selector: object) -> Optional[Tuple[int, int]]:
    """
    Turn a selector into (offset, length).
    Returns None when the selector names no bits: an empty range,
    length < 1 or a negative offset.
    """
    rl = as_range_like(selector)
    offset = rl.minimum()
    if offset is None:
        return None
    length = rl.cardinality()
    for what, v in (("minimum", offset), ("cardinality", length)):
        if isinstance(v, bool) or not isinstance(v, int):
            raise SelectorError(f"bit selector {what} must be an int, got {type(v).__name__}")
    if length < 1 or offset < 0:
        return None
    return offset, length
