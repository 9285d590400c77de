"""Player profiles and data-pack descriptors."""

from __future__ import annotations

import uuid as _uuid
from dataclasses import dataclass, field
from typing import List, Optional

from nullspace.types import PacketReader, PacketWriter


def _write_str(writer: PacketWriter, value: str) -> None:
    writer.write_string(value)


def _read_str(reader: PacketReader) -> str:
    return reader.read_string()


@dataclass
class GameProfileProperty:
    """A signed or unsigned profile property such as skin textures."""

    name: str
    value: str
    signature: Optional[str] = None

    def write(self, writer: PacketWriter) -> None:
        writer.write_string(self.name)
        writer.write_string(self.value)
        writer.write_optional(self.signature, _write_str)

    @classmethod
    def read(cls, reader: PacketReader) -> "GameProfileProperty":
        name = reader.read_string()
        value = reader.read_string()
        signature = reader.read_optional(_read_str)
        return cls(name, value, signature)


@dataclass
class GameProfile:
    """A player's identity: UUID, name and properties."""

    uuid: _uuid.UUID
    username: str
    properties: List[GameProfileProperty] = field(default_factory=list)

    def write(self, writer: PacketWriter) -> None:
        writer.write_uuid(self.uuid)
        writer.write_string(self.username)
        writer.write_array(self.properties, lambda w, prop: prop.write(w))

    @classmethod
    def read(cls, reader: PacketReader) -> "GameProfile":
        player_uuid = reader.read_uuid()
        username = reader.read_string()
        properties = reader.read_array(GameProfileProperty.read)
        return cls(player_uuid, username, properties)


@dataclass
class KnownPack:
    """A data pack that one side of the connection knows about."""

    namespace: str
    id: str
    version: str

    def write(self, writer: PacketWriter) -> None:
        writer.write_string(self.namespace)
        writer.write_string(self.id)
        writer.write_string(self.version)

    @classmethod
    def read(cls, reader: PacketReader) -> "KnownPack":
        namespace = reader.read_string()
        pack_id = reader.read_string()
        version = reader.read_string()
        return cls(namespace, pack_id, version)