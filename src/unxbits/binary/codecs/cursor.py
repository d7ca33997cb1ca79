from __future__ import annotations
import struct

from ..bitops import BitOps

# Record words in BIFF8 / MS-OSHARED are little-endian.
_WORD_FMT = {1: "<B", 2: "<H", 4: "<I", 8: "<Q"}


class Cursor:
    __slots__ = ("buf", "pos")

    def __init__(self, data: bytes | bytearray | memoryview):
        self.buf = memoryview(data)
        self.pos = 0

    def remaining(self) -> int: return len(self.buf) - self.pos
    def tell(self) -> int: return self.pos

    def seek(self, pos: int) -> None:
        if not (0 <= pos <= len(self.buf)): raise ValueError(f"seek out of bounds: {pos}")
        self.pos = pos

    def skip(self, n: int) -> None: self.seek(self.pos + n)

    def take(self, n: int) -> bytes:
        end = self.pos + n
        if n < 0 or end > len(self.buf): raise ValueError(f"underrun: need {n} at {self.pos}")
        out = self.buf[self.pos:end].tobytes()
        self.pos = end
        return out

    def peek(self, n: int) -> bytes:
        end = self.pos + n
        if n < 0 or end > len(self.buf): raise ValueError("peek underrun")
        return self.buf[self.pos:end].tobytes()

    def _unpack(self, fmt: str, n: int) -> int:
        return struct.unpack(fmt, self.take(n))[0]
    def u8(self) -> int:  return self._unpack("<B", 1)
    def u16(self) -> int: return self._unpack("<H", 2)
    def u32(self) -> int: return self._unpack("<I", 4)
    def u64(self) -> int: return self._unpack("<Q", 8)

    def word(self, nbytes: int) -> BitOps:
        """Read an nbytes little-endian unsigned word (1..8 bytes) as BitOps."""
        if not (1 <= nbytes <= 8): raise ValueError("word size 1..8 bytes")
        fmt = _WORD_FMT.get(nbytes)
        if fmt is not None:
            return BitOps(self._unpack(fmt, nbytes))
        return BitOps(int.from_bytes(self.take(nbytes), "little"))
