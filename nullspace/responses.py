"""Packets the server sends to clients."""

from __future__ import annotations

import uuid as _uuid
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from nullspace.identifier import Identifier
from nullspace.position import Position
from nullspace.profiles import GameProfile, GameProfileProperty, KnownPack
from nullspace.types import PacketWriter

BRAND = "Nullspace"


def _write_identifier(writer: PacketWriter, value: Identifier) -> None:
    value.write(writer)


def _write_position(writer: PacketWriter, value: Position) -> None:
    value.write(writer)


@dataclass
class FeatureFlagsResponse:
    """Feature flags enabled on the server."""

    flags: List[Identifier] = field(default_factory=list)

    def write(self, writer: PacketWriter) -> None:
        writer.write_array(self.flags, _write_identifier)

    @classmethod
    def nullspace(cls) -> "FeatureFlagsResponse":
        return cls([Identifier("minecraft", "vanilla")])


@dataclass
class FinishConfigurationResponse:
    """Tells the client that configuration is complete; has no body."""

    body: bytes = b""

    def write(self, writer: PacketWriter) -> None:
        writer.write_bytes(self.body)


@dataclass
class KnownPacksResponse:
    """Data packs the server knows about."""

    packs: List[KnownPack] = field(default_factory=list)

    def write(self, writer: PacketWriter) -> None:
        writer.write_array(self.packs, lambda w, pack: pack.write(w))

    @classmethod
    def nullspace(cls) -> "KnownPacksResponse":
        return cls([KnownPack("minecraft", "core", "1.21.11")])


@dataclass
class PluginMessageConfigurationResponse:
    """A plugin channel message: channel identifier followed by raw data."""

    channel: Identifier
    data: bytes

    def write(self, writer: PacketWriter) -> None:
        self.channel.write(writer)
        writer.write_bytes(self.data)

    @classmethod
    def nullspace(cls) -> "PluginMessageConfigurationResponse":
        payload = PacketWriter()
        payload.write_string(BRAND)
        return cls(Identifier("minecraft", "brand"), payload.getvalue())


@dataclass
class LoginSuccessResponse:
    """Completes login by sending the player's profile."""

    profile: GameProfile

    def write(self, writer: PacketWriter) -> None:
        self.profile.write(writer)

    @classmethod
    def from_parts(
        cls,
        uuid: _uuid.UUID,
        username: str,
        properties: Iterable[GameProfileProperty],
    ) -> "LoginSuccessResponse":
        return cls(GameProfile(uuid, username, list(properties)))


@dataclass
class LoginResponse:
    """The play-phase login packet describing the world the player joins."""

    entity_id: int
    is_hardcore: bool
    dimension_names: List[Identifier]
    max_players: int
    view_distance: int
    simulation_distance: int
    reduced_debug_info: bool
    enable_respawn_screen: bool
    do_limited_crafting: bool
    dimension_type: int
    dimension_name: Identifier
    hashed_seed: int
    game_mode: int
    previous_game_mode: int
    is_debug: bool
    is_flat: bool
    has_death_location: bool
    death_dimension_name: Optional[Identifier]
    death_location: Optional[Position]
    portal_cooldown: int
    sea_level: int
    enforces_secure_chat: bool

    def write(self, writer: PacketWriter) -> None:
        writer.write_int(self.entity_id)
        writer.write_bool(self.is_hardcore)
        writer.write_array(self.dimension_names, _write_identifier)
        writer.write_varint(self.max_players)
        writer.write_varint(self.view_distance)
        writer.write_varint(self.simulation_distance)
        writer.write_bool(self.reduced_debug_info)
        writer.write_bool(self.enable_respawn_screen)
        writer.write_bool(self.do_limited_crafting)
        writer.write_varint(self.dimension_type)
        self.dimension_name.write(writer)
        writer.write_long(self.hashed_seed)
        writer.write_unsigned_byte(self.game_mode)
        writer.write_byte(self.previous_game_mode)
        writer.write_bool(self.is_debug)
        writer.write_bool(self.is_flat)
        writer.write_bool(self.has_death_location)
        if self.has_death_location:
            writer.write_optional(self.death_dimension_name, _write_identifier)
            writer.write_optional(self.death_location, _write_position)
        writer.write_varint(self.portal_cooldown)
        writer.write_varint(self.sea_level)
        writer.write_bool(self.enforces_secure_chat)

    @classmethod
    def nullspace(cls) -> "LoginResponse":
        overworld = Identifier("minecraft", "overworld")
        return cls(
            entity_id=2,
            is_hardcore=False,
            dimension_names=[overworld],
            max_players=1000,
            view_distance=10,
            simulation_distance=10,
            reduced_debug_info=False,
            enable_respawn_screen=True,
            do_limited_crafting=False,
            dimension_type=0,
            dimension_name=overworld,
            hashed_seed=0,
            game_mode=1,
            previous_game_mode=0,
            is_debug=False,
            is_flat=False,
            has_death_location=False,
            death_dimension_name=None,
            death_location=None,
            portal_cooldown=0,
            sea_level=64,
            enforces_secure_chat=True,
        )


@dataclass
class SynchronizePlayerPositionResponse:
    """Teleports the player to an absolute position."""

    teleport_id: int
    x: float
    y: float
    z: float
    velocity_x: float
    velocity_y: float
    velocity_z: float
    yaw: float
    pitch: float
    flags: int

    def write(self, writer: PacketWriter) -> None:
        writer.write_varint(self.teleport_id)
        for coordinate in (
            self.x,
            self.y,
            self.z,
            self.velocity_x,
            self.velocity_y,
            self.velocity_z,
        ):
            writer.write_double(coordinate)
        writer.write_float(self.yaw)
        writer.write_float(self.pitch)
        writer.write_int(self.flags)

    @classmethod
    def nullspace(cls) -> "SynchronizePlayerPositionResponse":
        return cls(0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0)


@dataclass
class PongResponse:
    """Echoes the timestamp of a ping request."""

    timestamp: int

    def write(self, writer: PacketWriter) -> None:
        writer.write_long(self.timestamp)


@dataclass
class StatusResponse:
    """Server list status as a JSON string."""

    json_response: str

    def write(self, writer: PacketWriter) -> None:
        writer.write_string(self.json_response)