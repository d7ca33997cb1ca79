from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Iterable, Tuple, Union

from ..bitops import BitOps, WORD_BITS
from ..fmt import bin_
from ..selector import BitRange
from unxbits.models.word import DecodedWord

logger = logging.getLogger(__name__)

# Bit numbering: 0 is the LSB of the word as read little-endian from the record.


class PlanError(ValueError):
    pass


@dataclass(frozen=True)
class FlagField:
    name: str
    bits: Union[int, BitRange]  # int -> one-bit flag, BitRange -> multi-bit field

    @property
    def span(self) -> BitRange:
        if isinstance(self.bits, int):
            return BitRange(self.bits, 1)
        return self.bits

    def read(self, word: BitOps):
        if isinstance(self.bits, int):
            return word.set_at(self.bits)
        return word.value_at(self.bits)


@dataclass(frozen=True)
class FlagPlan:
    name: str
    width_bits: int
    fields: Tuple[FlagField, ...]

    @property
    def used_mask(self) -> int:
        m = 0
        for f in self.fields:
            m |= ((1 << f.span.length) - 1) << f.span.offset
        return m


def _is_index(v: object) -> bool:
    return isinstance(v, int) and not isinstance(v, bool)


def flag(name: str, bit: int) -> FlagField:
    return FlagField(name, bit)


def field(name: str, lo: int, hi: int) -> FlagField:
    """Multi-bit field covering bits lo..hi inclusive."""
    return FlagField(name, BitRange.inclusive(lo, hi))


def build_plan(name: str, width_bits: int, fields: Iterable[FlagField]) -> FlagPlan:
    """
    Validate and freeze a plan: names are unique, every field lies inside
    the word and fields do not overlap.
    """
    if not (1 <= width_bits <= WORD_BITS):
        raise PlanError(f"{name}: width must be 1..{WORD_BITS}, got {width_bits}")
    fields = tuple(fields)
    seen = set()
    used = 0
    for f in fields:
        if f.name in seen:
            raise PlanError(f"{name}: duplicate field {f.name!r}")
        seen.add(f.name)
        if not _is_index(f.bits) and not (
            isinstance(f.bits, BitRange) and _is_index(f.bits.offset) and _is_index(f.bits.length)
        ):
            raise PlanError(f"{name}.{f.name}: bits must be an int or an int BitRange, got {f.bits!r}")
        span = f.span
        if span.length < 1 or span.offset < 0:
            raise PlanError(f"{name}.{f.name}: empty or negative bit span {span}")
        if span.offset + span.length > width_bits:
            raise PlanError(f"{name}.{f.name}: bits {span.offset}..{span.offset + span.length - 1} "
                            f"exceed {width_bits}-bit word")
        m = ((1 << span.length) - 1) << span.offset
        if used & m:
            raise PlanError(f"{name}.{f.name}: overlaps an earlier field")
        used |= m
    return FlagPlan(name, width_bits, fields)


def decode_word(word: BitOps | int, plan: FlagPlan) -> DecodedWord:
    """Read every field of `plan` out of one word, in plan order."""
    if not isinstance(word, BitOps):
        word = BitOps(word)
    if word.bits >> plan.width_bits:
        raise ValueError(f"{plan.name}: word 0x{word.bits:x} wider than {plan.width_bits} bits")

    out = {f.name: f.read(word) for f in plan.fields}

    # reserved bits MUST be zero and MUST be ignored
    reserved = word.bits & ~plan.used_mask
    if reserved:
        logger.debug("%s: reserved bits set: %s", plan.name, bin_(reserved, plan.width_bits))

    return DecodedWord(
        plan=plan.name,
        word=word.bits,
        width_bits=plan.width_bits,
        fields=out,
        reserved_set=bool(reserved),
    )
