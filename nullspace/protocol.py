"""Packet framing, connection phases and the incoming packet registry."""

from __future__ import annotations

import enum
import logging
from typing import Any, Dict, Optional, Protocol, Tuple

from nullspace.types import PacketReader, encode_varint

log = logging.getLogger(__name__)


class ConnectionPhase(enum.Enum):
    """The protocol state a connection is in; it selects which packets are valid."""

    HANDSHAKING = "handshaking"
    STATUS = "status"
    LOGIN = "login"
    CONFIGURATION = "configuration"
    PLAY = "play"


class IncomingPacket(Protocol):
    """A packet type the server can decode and act on."""

    @classmethod
    def decode(cls, reader: PacketReader) -> "IncomingPacket": ...

    async def handle(self, connection: Any) -> None: ...


def frame_packet(packet_id: int, body: bytes) -> bytes:
    """Prefix a packet id and body with the VarInt length of both."""
    content = encode_varint(packet_id) + bytes(body)
    return encode_varint(len(content)) + content


async def send_packet(stream, packet_id: int, body: bytes) -> None:
    """Frame an already encoded body and write it to an asyncio stream writer."""
    stream.write(frame_packet(packet_id, body))
    await stream.drain()


class PacketRegistry:
    """Maps a phase and packet id to the packet type that decodes and handles it."""

    def __init__(self) -> None:
        self._handlers: Dict[Tuple[ConnectionPhase, int], type] = {}

    def __contains__(self, key: Tuple[ConnectionPhase, int]) -> bool:
        return key in self._handlers

    def register(self, phase: ConnectionPhase, packet_id: int, packet_type: type) -> None:
        """Route packets with this id in this phase to ``packet_type``."""
        self._handlers[(phase, packet_id)] = packet_type

    async def handle_packet(
        self,
        phase: ConnectionPhase,
        packet_id: int,
        reader: PacketReader,
        connection: Any,
    ) -> Optional[IncomingPacket]:
        """Decode and handle one packet; unknown packets are logged and skipped.

        Returns the decoded packet, or None when no type is registered for it.
        """
        packet_type = self._handlers.get((phase, packet_id))
        if packet_type is None:
            log.info("Unknown packet: %d", packet_id)
            return None
        packet = packet_type.decode(reader)
        await packet.handle(connection)
        return packet