"""Little-endian, length-prefixed primitive encoding for comparison files.

Encodings:
    u32 / u64        unsigned little-endian integers
    f32              IEEE-754 single precision
    string           u32 byte length + UTF-8 bytes
    uuid             16 raw bytes (RFC 4122 byte order)
    vec3             3 x f32
    list             u32 item count + items
"""

from __future__ import annotations

import struct
from collections.abc import Callable, Iterable
from typing import TypeVar
from uuid import UUID

from pathcomp.core.types import Vec3
from pathcomp.storage.errors import DecodeError

T = TypeVar("T")

_U32 = struct.Struct("<I")
_U64 = struct.Struct("<Q")
_VEC3 = struct.Struct("<3f")


class BinaryWriter:
    """Append-only byte buffer."""

    def __init__(self) -> None:
        self._buffer = bytearray()

    def getvalue(self) -> bytes:
        return bytes(self._buffer)

    def u32(self, value: int) -> None:
        self._buffer += _U32.pack(value)

    def u64(self, value: int) -> None:
        self._buffer += _U64.pack(value)

    def string(self, value: str) -> None:
        data = value.encode("utf-8")
        self.u32(len(data))
        self._buffer += data

    def uuid(self, value: UUID) -> None:
        self._buffer += value.bytes

    def vec3(self, value: Vec3) -> None:
        self._buffer += _VEC3.pack(*value)

    def items(self, values: Iterable[T], write: Callable[[T], None]) -> None:
        values = list(values)
        self.u32(len(values))
        for value in values:
            write(value)


class BinaryReader:
    """Cursor over an immutable byte buffer.

    Every read past the end raises :class:`DecodeError`; callers use
    :meth:`expect_end` to reject trailing garbage.
    """

    def __init__(self, data: bytes) -> None:
        self._data = memoryview(data)
        self._offset = 0

    @property
    def offset(self) -> int:
        return self._offset

    @property
    def remaining(self) -> int:
        return len(self._data) - self._offset

    def _take(self, size: int) -> memoryview:
        if size < 0 or self.remaining < size:
            raise DecodeError(
                f"Unexpected end of data at offset {self._offset} "
                f"(wanted {size} bytes, {self.remaining} left)"
            )
        chunk = self._data[self._offset : self._offset + size]
        self._offset += size
        return chunk

    def u32(self) -> int:
        return int(_U32.unpack(self._take(_U32.size))[0])

    def u64(self) -> int:
        return int(_U64.unpack(self._take(_U64.size))[0])

    def string(self) -> str:
        length = self.u32()
        try:
            return bytes(self._take(length)).decode("utf-8")
        except UnicodeDecodeError as e:
            raise DecodeError(f"Invalid UTF-8 string at offset {self._offset}") from e

    def uuid(self) -> UUID:
        return UUID(bytes=bytes(self._take(16)))

    def vec3(self) -> Vec3:
        x, y, z = _VEC3.unpack(self._take(_VEC3.size))
        return (x, y, z)

    def items(self, read: Callable[[], T]) -> list[T]:
        count = self.u32()
        # Every item takes at least one byte, so a larger count is corrupt
        if count > self.remaining:
            raise DecodeError(f"Item count {count} exceeds remaining {self.remaining} bytes")
        return [read() for _ in range(count)]

    def expect_end(self) -> None:
        if self.remaining:
            raise DecodeError(f"{self.remaining} trailing bytes after offset {self._offset}")
