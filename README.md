# nullspace

A small asyncio server that speaks the Minecraft Java Edition network
protocol (protocol version 774). It answers server-list status and ping
requests. It lets a client log in and runs the configuration phase. It
then moves the player into the play phase.

## Installation

```
pip install .
```

The package has no runtime dependencies outside the standard library.

## Running the server

```
nullspace
```

The server listens on `0.0.0.0:25565` by default and logs at INFO level.
The options are:

- `--host`: the address to listen on.
- `--port`: the port to listen on.
- `--registry-dir`: the directory that holds the registry data files.
  The default is `registries`, relative to the current directory.

Run `nullspace --help` to list them.

During configuration the server reads pre-encoded packet bodies from the
registry directory. It sends each whitelisted file there as a Registry
Data packet (id `0x07`), in file-name order. Examples are
`minecraft_dimension_type.bin` and `minecraft_worldgen_biome.bin`; the
full list is `nullspace.registries.REGISTRY_WHITELIST`. If
`packet_tags.bin` is present, the server then sends it as an Update Tags
packet (id `0x0D`).

## What happens on a connection

1. **Handshaking**: the handshake must carry protocol version 774. Any
   other version raises `ProtocolError`. Intent `1` switches the
   connection to *status* and intent `2` to *login*. Any other intent is
   an error.
2. **Status**: a status request gets a JSON status document in reply
   (see `nullspace.requests.status_payload`). A ping gets its timestamp
   echoed back, and then the connection is closed.
3. **Login**: Login Start is answered with Login Success, which carries
   the client's name and UUID and no properties. Login Acknowledged moves
   the connection to *configuration*.
4. **Configuration**: the client's information packet is logged. When the
   client sends a plugin message, the server replies with three packets:
   its own brand (`Nullspace`), the `minecraft:vanilla` feature flag, and
   the known pack `minecraft:core` version `1.21.11`. When the client
   sends its known packs, the server sends the registry data and tags,
   then Finish Configuration. When the client acknowledges that, the
   connection moves to *play*.
5. **Play**: the server sends the play-phase login packet and an initial
   player position at the origin. Teleport confirmations are logged.

Packets with no registered handler are logged and skipped. If an error
is raised while a connection is handled, it is logged and the connection
is closed.

## What it does not do

There is no world behind the play phase. The server sends no chunks,
entities or other players. It handles no play-phase packets except the
teleport confirmation. It has no encryption, no compression and no
account authentication. No registry data files come with the package; you
must supply them in the registry directory.

## Using the library

The wire types can be used on their own:

```python
from nullspace.types import PacketReader, PacketWriter
from nullspace.identifier import Identifier

writer = PacketWriter()
writer.write_varint(300)
Identifier.minecraft("brand").write(writer)

reader = PacketReader(writer.getvalue())
assert reader.read_varint() == 300
assert Identifier.read(reader) == Identifier.parse("minecraft:brand")
```

The modules are:

- `nullspace.types`: `PacketReader`, `PacketWriter`, `encode_varint`,
  `read_varint_async` and `ProtocolError`.
- `nullspace.identifier`, `nullspace.position` and `nullspace.profiles`:
  composite field types.
- `nullspace.responses`: packets the server sends.
- `nullspace.requests`: packets the server receives, each with `decode`
  and `handle`.
- `nullspace.protocol`: `ConnectionPhase`, `PacketRegistry`,
  `frame_packet` and `send_packet`.
- `nullspace.connection`: `Connection`, which runs the packet loop for
  one client.
- `nullspace.server`: `register_all`, `serve` and `main`.

To build your own server, register handlers on a `PacketRegistry` with
`register(phase, packet_id, packet_type)`. Here `phase` is a
`ConnectionPhase`, and `packet_type` is a class with a `decode(reader)`
classmethod and an async `handle(connection)` method.
`nullspace.server.register_all` fills a registry with the built-in
handlers.

## Tests

```
pip install ".[test]"
pytest
```