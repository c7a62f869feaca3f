"""Bounds-checked little-endian reads over a packet body."""

from __future__ import annotations

import struct

from .errors import InvalidFormatError

_U8 = struct.Struct("<B")
_U16 = struct.Struct("<H")
_U32 = struct.Struct("<I")
_I16 = struct.Struct("<h")
_F32 = struct.Struct("<f")
_F64 = struct.Struct("<d")


class ByteReader:
    """Sequential reader with a position over an immutable byte buffer.

    Every read checks that enough bytes remain and raises
    InvalidFormatError otherwise, so a short packet body never yields
    garbage values or an IndexError.
    """

    def __init__(self, data: bytes | bytearray | memoryview, what: str = "packet"):
        self._data = data
        self._what = what
        self.pos = 0

    def __len__(self) -> int:
        return len(self._data)

    @property
    def remaining(self) -> int:
        return len(self._data) - self.pos

    def _need(self, n: int) -> None:
        if n < 0 or self.pos + n > len(self._data):
            raise InvalidFormatError(
                f"{self._what}: need {n} bytes at offset {self.pos}, "
                f"only {self.remaining} available")

    def _unpack(self, fmt: struct.Struct):
        self._need(fmt.size)
        value = fmt.unpack_from(self._data, self.pos)[0]
        self.pos += fmt.size
        return value

    def u8(self) -> int:
        return self._unpack(_U8)

    def u16(self) -> int:
        return self._unpack(_U16)

    def u32(self) -> int:
        return self._unpack(_U32)

    def i16(self) -> int:
        return self._unpack(_I16)

    def f32(self) -> float:
        return self._unpack(_F32)

    def f64(self) -> float:
        return self._unpack(_F64)

    def raw(self, n: int) -> bytes:
        self._need(n)
        out = bytes(self._data[self.pos:self.pos + n])
        self.pos += n
        return out

    def utf8(self, n: int) -> str:
        """Read an *n*-byte UTF-8 string, replacing undecodable bytes."""
        return self.raw(n).decode("utf-8", errors="replace")

    def rest_utf8(self) -> str:
        return self.utf8(self.remaining)

    def skip(self, n: int) -> None:
        self._need(n)
        self.pos += n

    def seek(self, pos: int) -> None:
        if pos < 0 or pos > len(self._data):
            raise InvalidFormatError(
                f"{self._what}: offset {pos} outside {len(self._data)} bytes")
        self.pos = pos
