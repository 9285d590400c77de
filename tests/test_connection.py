import asyncio

import pytest

from nullspace.connection import Connection
from nullspace.protocol import ConnectionPhase, PacketRegistry, frame_packet
from nullspace.types import PacketReader, PacketWriter, ProtocolError, encode_varint


class FakeWriter:
    def __init__(self):
        self.data = bytearray()
        self.closed = False

    def write(self, chunk):
        self.data += chunk

    async def drain(self):
        pass

    def close(self):
        self.closed = True

    async def wait_closed(self):
        pass


class AdvancePacket:
    def __init__(self, value):
        self.value = value

    @classmethod
    def decode(cls, reader):
        return cls(reader.read_varint())

    async def handle(self, connection):
        connection.seen.append(self.value)
        connection.phase = ConnectionPhase.PLAY


class ClosePacket:
    @classmethod
    def decode(cls, reader):
        return cls()

    async def handle(self, connection):
        await connection.close()


class Pong:
    def __init__(self, timestamp):
        self.timestamp = timestamp

    def write(self, writer):
        writer.write_long(self.timestamp)


def _registry():
    registry = PacketRegistry()
    registry.register(ConnectionPhase.HANDSHAKING, 0x00, AdvancePacket)
    registry.register(ConnectionPhase.PLAY, 0x00, ClosePacket)
    return registry


def _reader(data, eof=True):
    reader = asyncio.StreamReader()
    reader.feed_data(data)
    if eof:
        reader.feed_eof()
    return reader


def _connection(data):
    conn = Connection(_reader(data), FakeWriter(), ConnectionPhase.HANDSHAKING, "regs")
    conn.seen = []
    return conn


@pytest.mark.asyncio
async def test_run_dispatches_until_closed():
    body = PacketWriter()
    body.write_varint(42)
    data = frame_packet(0x00, body.getvalue()) + frame_packet(0x00, b"")
    conn = _connection(data)
    await conn.run(_registry())
    assert conn.seen == [42]
    assert conn.phase is ConnectionPhase.PLAY
    assert conn.is_alive is False
    assert conn.writer.closed is True


@pytest.mark.asyncio
async def test_unknown_packets_are_skipped():
    body = PacketWriter()
    body.write_varint(7)
    data = frame_packet(0x55, b"\x01\x02") + frame_packet(0x00, body.getvalue())
    conn = _connection(data + frame_packet(0x00, b""))
    await conn.run(_registry())
    assert conn.seen == [7]


@pytest.mark.asyncio
async def test_end_of_stream_raises():
    conn = _connection(b"")
    with pytest.raises(ProtocolError):
        await conn.run(_registry())


@pytest.mark.asyncio
async def test_truncated_body_raises():
    conn = _connection(encode_varint(10) + b"\x00\x01")
    with pytest.raises(ProtocolError):
        await conn.run(_registry())


@pytest.mark.asyncio
async def test_negative_length_raises():
    conn = _connection(encode_varint(-1))
    with pytest.raises(ProtocolError):
        await conn.run(_registry())


@pytest.mark.asyncio
async def test_send_packet_frames_body():
    conn = _connection(b"")
    await conn.send_packet(0x01, Pong(123456789))
    reader = PacketReader(bytes(conn.writer.data))
    assert reader.read_varint() == reader.remaining
    assert reader.read_varint() == 0x01
    assert reader.read_long() == 123456789
    assert reader.remaining == 0


@pytest.mark.asyncio
async def test_defaults():
    conn = Connection(_reader(b""), FakeWriter())
    assert conn.phase is ConnectionPhase.HANDSHAKING
    assert conn.registry_dir.name == "registries"
    await conn.close()
    assert conn.is_alive is False