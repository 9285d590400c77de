"""Primitive field encodings used by the wire protocol."""

from __future__ import annotations

import asyncio
import struct
import uuid
from typing import Callable, Iterable, Optional, TypeVar

T = TypeVar("T")

MAX_VARINT_SIZE = 5
MAX_STRING_LENGTH = 32767

_INT32_MIN = -(1 << 31)
_INT32_MAX = (1 << 31) - 1


class ProtocolError(ValueError):
    """Raised when bytes received from a peer cannot be decoded."""


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - (1 << 32) if value & 0x80000000 else value


def _varint_step(num: int, index: int, byte: int) -> tuple[int, bool]:
    """Fold one byte into a VarInt being decoded; return the new value and whether it is complete."""
    num |= (byte & 0x7F) << (7 * index)
    if index + 1 > MAX_VARINT_SIZE:
        raise ProtocolError("VarInt too big")
    return num, not byte & 0x80


def encode_varint(value: int) -> bytes:
    """Encode a signed 32-bit integer as a VarInt."""
    if not _INT32_MIN <= value <= _INT32_MAX:
        raise ValueError(f"VarInt out of range: {value}")
    temp = value & 0xFFFFFFFF
    out = bytearray()
    while temp & ~0x7F:
        out.append((temp & 0x7F) | 0x80)
        temp >>= 7
    out.append(temp)
    return bytes(out)


async def read_varint_async(stream: asyncio.StreamReader) -> int:
    """Read one VarInt from an asyncio stream."""
    num = 0
    index = 0
    while True:
        try:
            chunk = await stream.readexactly(1)
        except asyncio.IncompleteReadError as exc:
            raise ProtocolError("unexpected end of stream while reading VarInt") from exc
        num, done = _varint_step(num, index, chunk[0])
        if done:
            return _to_int32(num)
        index += 1


class PacketReader:
    """Sequential decoder over a bounded packet body."""

    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)
        self._pos = 0

    @property
    def remaining(self) -> int:
        """Number of bytes not yet consumed."""
        return len(self._data) - self._pos

    def _take(self, size: int) -> bytes:
        if size > self.remaining:
            raise ProtocolError(
                f"unexpected end of packet: needed {size} bytes, {self.remaining} left"
            )
        chunk = self._data[self._pos:self._pos + size]
        self._pos += size
        return chunk

    def _unpack(self, fmt: str):
        return struct.unpack(fmt, self._take(struct.calcsize(fmt)))[0]

    def read_varint(self) -> int:
        num = 0
        index = 0
        while True:
            num, done = _varint_step(num, index, self._take(1)[0])
            if done:
                return _to_int32(num)
            index += 1

    def read_bool(self) -> bool:
        return self._take(1)[0] != 0

    def read_byte(self) -> int:
        return self._unpack(">b")

    def read_unsigned_byte(self) -> int:
        return self._unpack(">B")

    def read_short(self) -> int:
        return self._unpack(">h")

    def read_unsigned_short(self) -> int:
        return self._unpack(">H")

    def read_int(self) -> int:
        return self._unpack(">i")

    def read_long(self) -> int:
        return self._unpack(">q")

    def read_float(self) -> float:
        return self._unpack(">f")

    def read_double(self) -> float:
        return self._unpack(">d")

    def read_string(self) -> str:
        length = self.read_varint()
        if length < 0 or length > MAX_STRING_LENGTH:
            raise ProtocolError("String length invalid")
        raw = self._take(length)
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ProtocolError("Invalid UTF-8") from exc

    def read_uuid(self) -> uuid.UUID:
        return uuid.UUID(bytes=self._take(16))

    def read_remaining(self) -> bytes:
        """Consume and return everything left in the packet."""
        return self._take(self.remaining)

    def read_optional(self, read_item: Callable[["PacketReader"], T]) -> Optional[T]:
        """Read a presence flag followed, if set, by one item."""
        if self.read_bool():
            return read_item(self)
        return None

    def read_array(self, read_item: Callable[["PacketReader"], T]) -> list[T]:
        """Read a VarInt count followed by that many items."""
        count = self.read_varint()
        if count < 0:
            raise ProtocolError(f"negative array length: {count}")
        return [read_item(self) for _ in range(count)]


class PacketWriter:
    """Accumulates encoded fields into a byte string."""

    def __init__(self) -> None:
        self._buffer = bytearray()

    def __len__(self) -> int:
        return len(self._buffer)

    def _pack(self, fmt: str, value) -> None:
        try:
            self._buffer += struct.pack(fmt, value)
        except struct.error as exc:
            raise ValueError(f"value {value!r} does not fit format {fmt!r}") from exc

    def write_varint(self, value: int) -> None:
        self._buffer += encode_varint(value)

    def write_bool(self, value: bool) -> None:
        self._buffer.append(1 if value else 0)

    def write_byte(self, value: int) -> None:
        self._pack(">b", value)

    def write_unsigned_byte(self, value: int) -> None:
        self._pack(">B", value)

    def write_short(self, value: int) -> None:
        self._pack(">h", value)

    def write_unsigned_short(self, value: int) -> None:
        self._pack(">H", value)

    def write_int(self, value: int) -> None:
        self._pack(">i", value)

    def write_long(self, value: int) -> None:
        self._pack(">q", value)

    def write_float(self, value: float) -> None:
        self._pack(">f", value)

    def write_double(self, value: float) -> None:
        self._pack(">d", value)

    def write_string(self, value: str) -> None:
        raw = value.encode("utf-8")
        self.write_varint(len(raw))
        self._buffer += raw

    def write_uuid(self, value: uuid.UUID) -> None:
        self._buffer += value.bytes

    def write_bytes(self, data: bytes) -> None:
        self._buffer += data

    def write_optional(
        self, value: Optional[T], write_item: Callable[["PacketWriter", T], None]
    ) -> None:
        """Write a presence flag followed, if present, by the value."""
        if value is None:
            self.write_bool(False)
        else:
            self.write_bool(True)
            write_item(self, value)

    def write_array(
        self, items: Iterable[T], write_item: Callable[["PacketWriter", T], None]
    ) -> None:
        """Write a VarInt count followed by every item."""
        items = list(items)
        self.write_varint(len(items))
        for item in items:
            write_item(self, item)

    def getvalue(self) -> bytes:
        return bytes(self._buffer)