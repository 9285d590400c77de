"""A single client connection and its packet loop."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Union

from nullspace.protocol import ConnectionPhase, PacketRegistry, frame_packet
from nullspace.types import PacketReader, PacketWriter, ProtocolError, read_varint_async

DEFAULT_REGISTRY_DIR = Path("registries")


class Connection:
    """Reads framed packets from a client and dispatches them by phase."""

    def __init__(
        self,
        reader: asyncio.StreamReader,
        writer,
        phase: ConnectionPhase = ConnectionPhase.HANDSHAKING,
        registry_dir: Union[str, Path, None] = None,
    ) -> None:
        self.reader = reader
        self.writer = writer
        self.phase = phase
        self.registry_dir = Path(registry_dir) if registry_dir is not None else DEFAULT_REGISTRY_DIR
        self.is_alive = True

    async def close(self) -> None:
        """Stop the packet loop and close the socket."""
        self.is_alive = False
        self.writer.close()
        await self.writer.wait_closed()

    async def _read_frame(self) -> bytes:
        length = await read_varint_async(self.reader)
        if length < 0:
            raise ProtocolError(f"negative packet length: {length}")
        try:
            return await self.reader.readexactly(length)
        except asyncio.IncompleteReadError as exc:
            raise ProtocolError("unexpected end of stream while reading packet body") from exc

    async def run(self, registry: PacketRegistry) -> None:
        """Handle packets until the connection is closed; stream errors propagate."""
        while self.is_alive:
            body = PacketReader(await self._read_frame())
            packet_id = body.read_varint()
            await registry.handle_packet(self.phase, packet_id, body, self)

    async def send_packet(self, packet_id: int, packet) -> None:
        """Encode a packet with its ``write`` method and send it framed."""
        body = PacketWriter()
        packet.write(body)
        self.writer.write(frame_packet(packet_id, body.getvalue()))
        await self.writer.drain()