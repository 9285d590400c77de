import json
import uuid

import pytest

from nullspace.identifier import Identifier
from nullspace.position import Position
from nullspace.profiles import GameProfile, GameProfileProperty, KnownPack
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
from nullspace.types import PacketReader, PacketWriter

PLAYER_ID = uuid.UUID("04984259-3bf4-4551-9a54-7489e53d8be4")


def _encode(packet):
    writer = PacketWriter()
    packet.write(writer)
    return writer.getvalue()


def test_finish_configuration_has_empty_body():
    assert _encode(FinishConfigurationResponse()) == b""


def test_feature_flags_nullspace():
    reader = PacketReader(_encode(FeatureFlagsResponse.nullspace()))
    assert reader.read_array(Identifier.read) == [Identifier("minecraft", "vanilla")]
    assert reader.remaining == 0


def test_known_packs_nullspace():
    reader = PacketReader(_encode(KnownPacksResponse.nullspace()))
    assert reader.read_array(KnownPack.read) == [KnownPack("minecraft", "core", "1.21.11")]
    assert reader.remaining == 0


def test_plugin_message_nullspace_carries_brand():
    packet = PluginMessageConfigurationResponse.nullspace()
    assert packet.data == b"\x09Nullspace"
    reader = PacketReader(_encode(packet))
    assert reader.read_string() == "minecraft:brand"
    assert reader.read_string() == "Nullspace"
    assert reader.remaining == 0


def test_plugin_message_data_is_raw():
    packet = PluginMessageConfigurationResponse(Identifier("a", "b"), b"\xff\x00\x01")
    assert _encode(packet) == b"\x03a:b\xff\x00\x01"


def test_login_success_roundtrip():
    props = [GameProfileProperty("textures", "v", None)]
    packet = LoginSuccessResponse.from_parts(PLAYER_ID, "Steve", props)
    reader = PacketReader(_encode(packet))
    assert GameProfile.read(reader) == GameProfile(PLAYER_ID, "Steve", props)
    assert reader.remaining == 0


def _read_login_head(reader):
    return [
        reader.read_int(),
        reader.read_bool(),
        reader.read_array(Identifier.read),
        reader.read_varint(),
        reader.read_varint(),
        reader.read_varint(),
        reader.read_bool(),
        reader.read_bool(),
        reader.read_bool(),
        reader.read_varint(),
        Identifier.read(reader),
        reader.read_long(),
        reader.read_unsigned_byte(),
        reader.read_byte(),
        reader.read_bool(),
        reader.read_bool(),
        reader.read_bool(),
    ]


def test_login_response_nullspace_fields():
    packet = LoginResponse.nullspace()
    reader = PacketReader(_encode(packet))
    overworld = Identifier("minecraft", "overworld")
    head = _read_login_head(reader)
    assert head == [
        2, False, [overworld], 1000, 10, 10, False, True, False,
        0, overworld, 0, 1, 0, False, False, False,
    ]
    assert reader.read_varint() == 0
    assert reader.read_varint() == 64
    assert reader.read_bool() is True
    assert reader.remaining == 0


def test_login_response_with_death_location():
    packet = LoginResponse.nullspace()
    packet.has_death_location = True
    packet.death_dimension_name = Identifier("minecraft", "the_nether")
    packet.death_location = Position(10, -20, 30)
    reader = PacketReader(_encode(packet))
    head = _read_login_head(reader)
    assert head[-1] is True
    assert reader.read_optional(Identifier.read) == Identifier("minecraft", "the_nether")
    assert reader.read_optional(Position.read) == Position(10, -20, 30)
    assert [reader.read_varint(), reader.read_varint(), reader.read_bool()] == [0, 64, True]
    assert reader.remaining == 0


def test_login_response_death_fields_ignored_without_flag():
    plain = _encode(LoginResponse.nullspace())
    packet = LoginResponse.nullspace()
    packet.death_location = Position(1, 2, 3)
    assert _encode(packet) == plain


def test_synchronize_position_roundtrip():
    packet = SynchronizePlayerPositionResponse(7, 1.5, 64.0, -2.25, 0.0, 0.5, 0.0, 90.0, -45.0, 3)
    reader = PacketReader(_encode(packet))
    assert reader.read_varint() == 7
    assert [reader.read_double() for _ in range(6)] == [1.5, 64.0, -2.25, 0.0, 0.5, 0.0]
    assert reader.read_float() == 90.0
    assert reader.read_float() == -45.0
    assert reader.read_int() == 3
    assert reader.remaining == 0


def test_synchronize_position_nullspace_is_zero():
    data = _encode(SynchronizePlayerPositionResponse.nullspace())
    assert set(data) == {0}


@pytest.mark.parametrize("timestamp", [0, 1234567890123, -1])
def test_pong_echoes_timestamp(timestamp):
    reader = PacketReader(_encode(PongResponse(timestamp)))
    assert reader.read_long() == timestamp
    assert reader.remaining == 0


def test_status_response_is_prefixed_json():
    document = {"version": {"name": "1.21.11", "protocol": 774}}
    packet = StatusResponse(json.dumps(document))
    reader = PacketReader(_encode(packet))
    assert json.loads(reader.read_string()) == document
    assert reader.remaining == 0