"""Namespaced identifiers such as ``minecraft:stone``."""

from __future__ import annotations

import re
from dataclasses import dataclass

from nullspace.types import PacketReader, PacketWriter, ProtocolError

DEFAULT_NAMESPACE = "minecraft"

_NAMESPACE_RE = re.compile(r"[a-z0-9._-]*")
_VALUE_RE = re.compile(r"[a-z0-9._/-]*")


@dataclass(frozen=True)
class Identifier:
    """A namespace and a value, written on the wire as ``namespace:value``."""

    namespace: str
    value: str

    def __str__(self) -> str:
        return f"{self.namespace}:{self.value}"

    @classmethod
    def minecraft(cls, value: str) -> "Identifier":
        """Create an identifier in the default namespace."""
        return cls(DEFAULT_NAMESPACE, value)

    @classmethod
    def parse(cls, text: str) -> "Identifier":
        """Parse ``namespace:value`` or a bare value; raise ValueError on bad characters."""
        namespace, sep, value = text.partition(":")
        if not sep:
            namespace, value = DEFAULT_NAMESPACE, text
        if not _NAMESPACE_RE.fullmatch(namespace):
            raise ValueError(f"Invalid character in identifier namespace: '{namespace}'")
        if not _VALUE_RE.fullmatch(value):
            raise ValueError(f"Invalid character in identifier value: '{value}'")
        return cls(namespace, value)

    @classmethod
    def coerce(cls, text: str) -> "Identifier":
        """Parse text, falling back to ``minecraft:invalid_identifier`` if it is malformed."""
        try:
            return cls.parse(text)
        except ValueError:
            return cls.minecraft("invalid_identifier")

    def write(self, writer: PacketWriter) -> None:
        writer.write_string(str(self))

    @classmethod
    def read(cls, reader: PacketReader) -> "Identifier":
        text = reader.read_string()
        try:
            return cls.parse(text)
        except ValueError as exc:
            raise ProtocolError(str(exc)) from exc