"""Packets clients send to the server, with the server's reaction to each."""

from __future__ import annotations

import json
import logging
import uuid as _uuid
from dataclasses import dataclass, field
from typing import Any, Dict, List

from nullspace.identifier import Identifier
from nullspace.profiles import KnownPack
from nullspace.protocol import ConnectionPhase
from nullspace.registries import send_all_registries
from nullspace.responses import (
    FeatureFlagsResponse,
    FinishConfigurationResponse,
    KnownPacksResponse,
    LoginResponse,
    LoginSuccessResponse,
    PluginMessageConfigurationResponse,
    PongResponse,
    StatusResponse,
    SynchronizePlayerPositionResponse,
)
from nullspace.types import PacketReader, ProtocolError

log = logging.getLogger(__name__)

PROTOCOL_VERSION = 774
VERSION_NAME = "1.21.11"
BRAND_CHANNEL = Identifier("minecraft", "brand")


def status_payload() -> Dict[str, Any]:
    """The server-list status document sent in reply to a status request."""
    return {
        "version": {"name": VERSION_NAME, "protocol": PROTOCOL_VERSION},
        "players": {
            "max": 1000,
            "online": 0,
            "sample": [
                {"name": "UnknownData", "id": "04984259-3bf4-4551-9a54-7489e53d8be4"}
            ],
        },
        "description": {
            "text": "§b§lNULLSPACE | Rust server\n§r§7Built for 1000+ players."
        },
    }


@dataclass
class HandshakeRequest:
    """Opens a connection and states which phase the client wants next."""

    protocol_version: int
    server_address: str
    port: int
    next_state: int

    @classmethod
    def decode(cls, reader: PacketReader) -> "HandshakeRequest":
        return cls(
            protocol_version=reader.read_varint(),
            server_address=reader.read_string(),
            port=reader.read_unsigned_short(),
            next_state=reader.read_varint(),
        )

    async def handle(self, connection) -> None:
        log.info(
            "Handling handshake, protocol %d and %d as intent...",
            self.protocol_version,
            self.next_state,
        )
        if self.protocol_version != PROTOCOL_VERSION:
            raise ProtocolError("Protocol version mismatch")
        if self.next_state == 1:
            log.info("Switching to STATUS phase")
            connection.phase = ConnectionPhase.STATUS
        elif self.next_state == 2:
            log.info("Switching to LOGIN phase")
            connection.phase = ConnectionPhase.LOGIN
        else:
            raise ProtocolError(f"Invalid next state intent: {self.next_state}")


@dataclass
class StatusRequest:
    """Asks for the server-list status."""

    @classmethod
    def decode(cls, reader: PacketReader) -> "StatusRequest":
        return cls()

    async def handle(self, connection) -> None:
        log.info("Handling status request...")
        text = json.dumps(
            status_payload(), separators=(",", ":"), sort_keys=True, ensure_ascii=False
        )
        await connection.send_packet(0x00, StatusResponse(text))


@dataclass
class PingRequest:
    """Carries a timestamp that the server echoes before closing."""

    timestamp: int

    @classmethod
    def decode(cls, reader: PacketReader) -> "PingRequest":
        return cls(reader.read_long())

    async def handle(self, connection) -> None:
        log.info("Handling ping request...")
        await connection.send_packet(0x01, PongResponse(self.timestamp))
        await connection.close()


@dataclass
class LoginStartRequest:
    """Starts login with the player's name and UUID."""

    name: str
    player_uuid: _uuid.UUID

    @classmethod
    def decode(cls, reader: PacketReader) -> "LoginStartRequest":
        return cls(reader.read_string(), reader.read_uuid())

    async def handle(self, connection) -> None:
        log.info("Handling login start request...")
        response = LoginSuccessResponse.from_parts(self.player_uuid, self.name, [])
        await connection.send_packet(0x02, response)


@dataclass
class LoginAcknowledgedRequest:
    """Confirms login success; the connection moves to configuration."""

    @classmethod
    def decode(cls, reader: PacketReader) -> "LoginAcknowledgedRequest":
        return cls()

    async def handle(self, connection) -> None:
        log.info("Handling login acknowledged request...")
        log.info("Switching to CONFIGURATION phase")
        connection.phase = ConnectionPhase.CONFIGURATION


@dataclass
class ClientInformationRequest:
    """The client's settings: locale, view distance, chat and skin options."""

    locale: str
    view_distance: int
    chat_mode: int
    chat_colors: bool
    displayed_skin_parts: int
    main_hand: int
    enable_text_filtering: bool
    allow_server_listings: bool
    particle_status: int

    @classmethod
    def decode(cls, reader: PacketReader) -> "ClientInformationRequest":
        return cls(
            locale=reader.read_string(),
            view_distance=reader.read_byte(),
            chat_mode=reader.read_varint(),
            chat_colors=reader.read_bool(),
            displayed_skin_parts=reader.read_unsigned_byte(),
            main_hand=reader.read_varint(),
            enable_text_filtering=reader.read_bool(),
            allow_server_listings=reader.read_bool(),
            particle_status=reader.read_varint(),
        )

    async def handle(self, connection) -> None:
        log.info("Handling client information request...")
        log.info("Client information: %r", self)


@dataclass
class PluginMessageConfigurationRequest:
    """A plugin channel message sent during configuration."""

    channel: Identifier
    data: bytes

    @classmethod
    def decode(cls, reader: PacketReader) -> "PluginMessageConfigurationRequest":
        channel = Identifier.read(reader)
        return cls(channel, reader.read_remaining())

    async def handle(self, connection) -> None:
        log.info("Handling Plugin Message on channel: %s", self.channel)
        if self.channel == BRAND_CHANNEL:
            brand = PacketReader(self.data).read_string()
            log.info("Client Brand: %s", brand)
            if brand != "vanilla":
                log.info("Modded client detected!")
        else:
            log.info("Unknown plugin configuration channel: %s", self.channel)

        await connection.send_packet(0x01, PluginMessageConfigurationResponse.nullspace())
        await connection.send_packet(0x0C, FeatureFlagsResponse.nullspace())
        await connection.send_packet(0x0E, KnownPacksResponse.nullspace())


@dataclass
class KnownPacksRequest:
    """The data packs the client knows; answered with registries and tags."""

    known_packs: List[KnownPack] = field(default_factory=list)

    @classmethod
    def decode(cls, reader: PacketReader) -> "KnownPacksRequest":
        return cls(reader.read_array(KnownPack.read))

    async def handle(self, connection) -> None:
        log.info("Handling known packs request...")
        log.info("Known packs: %r", self.known_packs)
        await send_all_registries(connection.writer, connection.registry_dir)
        await connection.send_packet(0x03, FinishConfigurationResponse())


@dataclass
class AcknowledgeFinishConfigurationRequest:
    """Confirms the end of configuration; the player enters the world."""

    @classmethod
    def decode(cls, reader: PacketReader) -> "AcknowledgeFinishConfigurationRequest":
        return cls()

    async def handle(self, connection) -> None:
        log.info("Handling acknowledge finished request...")
        log.info("Switching to PLAY phase")
        connection.phase = ConnectionPhase.PLAY
        await connection.send_packet(0x30, LoginResponse.nullspace())
        await connection.send_packet(0x46, SynchronizePlayerPositionResponse.nullspace())


@dataclass
class TeleportConfirmationRequest:
    """Confirms that the client applied a teleport."""

    teleport_id: int

    @classmethod
    def decode(cls, reader: PacketReader) -> "TeleportConfirmationRequest":
        return cls(reader.read_varint())

    async def handle(self, connection) -> None:
        log.info("Handling teleport confirmation request...")
        log.info("Teleport ID: %d", self.teleport_id)