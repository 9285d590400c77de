"""The listening server: accepts clients and runs each connection."""

from __future__ import annotations

import argparse
import asyncio
import logging
from pathlib import Path
from typing import Optional, Sequence, Union

from nullspace.connection import DEFAULT_REGISTRY_DIR, Connection
from nullspace.protocol import ConnectionPhase, PacketRegistry
from nullspace.requests import (
    AcknowledgeFinishConfigurationRequest,
    ClientInformationRequest,
    HandshakeRequest,
    KnownPacksRequest,
    LoginAcknowledgedRequest,
    LoginStartRequest,
    PingRequest,
    PluginMessageConfigurationRequest,
    StatusRequest,
    TeleportConfirmationRequest,
)

log = logging.getLogger(__name__)

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 25565


def register_all(registry: PacketRegistry) -> None:
    """Register every packet the server understands."""
    registry.register(ConnectionPhase.HANDSHAKING, 0x00, HandshakeRequest)

    registry.register(ConnectionPhase.STATUS, 0x00, StatusRequest)
    registry.register(ConnectionPhase.STATUS, 0x01, PingRequest)

    registry.register(ConnectionPhase.LOGIN, 0x00, LoginStartRequest)
    registry.register(ConnectionPhase.LOGIN, 0x03, LoginAcknowledgedRequest)

    registry.register(ConnectionPhase.CONFIGURATION, 0x00, ClientInformationRequest)
    registry.register(ConnectionPhase.CONFIGURATION, 0x02, PluginMessageConfigurationRequest)
    registry.register(ConnectionPhase.CONFIGURATION, 0x03, AcknowledgeFinishConfigurationRequest)
    registry.register(ConnectionPhase.CONFIGURATION, 0x07, KnownPacksRequest)

    registry.register(ConnectionPhase.PLAY, 0x00, TeleportConfirmationRequest)


async def serve(
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
    registry_dir: Union[str, Path] = DEFAULT_REGISTRY_DIR,
) -> None:
    """Accept connections forever, handling each one until it closes."""
    registry = PacketRegistry()
    register_all(registry)

    async def handle_client(reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
        connection = Connection(reader, writer, ConnectionPhase.HANDSHAKING, registry_dir)
        try:
            await connection.run(registry)
        except Exception as exc:
            log.error("Connection error at phase %s: %r", connection.phase.name, exc)
        else:
            log.info("Connection closed cleanly at phase %s", connection.phase.name)
        finally:
            if connection.is_alive:
                connection.is_alive = False
                writer.close()

    server = await asyncio.start_server(handle_client, host, port)
    log.info("Server running on %s:%d (Target: 1.20.1 / Proto: 763)", host, port)
    async with server:
        await server.serve_forever()


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Parse command-line options and run the server until interrupted."""
    parser = argparse.ArgumentParser(prog="nullspace", description="Run the game server.")
    parser.add_argument("--host", default=DEFAULT_HOST, help="address to listen on")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT, help="port to listen on")
    parser.add_argument(
        "--registry-dir",
        default=str(DEFAULT_REGISTRY_DIR),
        help="directory holding the registry data files",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(message)s")
    try:
        asyncio.run(serve(args.host, args.port, args.registry_dir))
    except KeyboardInterrupt:
        pass
    return 0