"""Block positions packed into a single 64-bit integer."""

from __future__ import annotations

from dataclasses import dataclass

from nullspace.types import PacketReader, PacketWriter

_MASK_26 = 0x3FFFFFF
_MASK_12 = 0xFFF
_MASK_64 = (1 << 64) - 1


def _sign_extend(value: int, bits: int) -> int:
    sign = 1 << (bits - 1)
    value &= (1 << bits) - 1
    return value - (1 << bits) if value & sign else value


@dataclass(frozen=True)
class Position:
    """A block position: 26-bit x and z, 12-bit y."""

    x: int
    y: int
    z: int

    def to_long(self) -> int:
        """Pack as ``x << 38 | z << 12 | y`` and return it as a signed 64-bit value."""
        packed = (
            ((self.x & _MASK_26) << 38)
            | ((self.z & _MASK_26) << 12)
            | (self.y & _MASK_12)
        )
        return _sign_extend(packed, 64)

    @classmethod
    def from_long(cls, value: int) -> "Position":
        """Unpack a 64-bit value, signed or unsigned, into a position."""
        value &= _MASK_64
        x = _sign_extend(value >> 38, 26)
        z = _sign_extend(value >> 12, 26)
        y = _sign_extend(value, 12)
        return cls(x, y, z)

    def write(self, writer: PacketWriter) -> None:
        writer.write_long(self.to_long())

    @classmethod
    def read(cls, reader: PacketReader) -> "Position":
        return cls.from_long(reader.read_long())