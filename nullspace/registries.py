"""Sends the bundled registry data and tag packets during configuration."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Union

from nullspace.protocol import send_packet

log = logging.getLogger(__name__)

REGISTRY_DATA_PACKET_ID = 0x07
UPDATE_TAGS_PACKET_ID = 0x0D
TAGS_FILE = "packet_tags.bin"

_REGISTRIES = (
    "damage_type",
    "worldgen_biome",
    "dimension_type",
    "cat_variant",
    "chicken_variant",
    "cow_variant",
    "frog_variant",
    "pig_variant",
    "wolf_variant",
    "wolf_sound_variant",
    "painting_variant",
    "zombie_nautilus_variant",
    "timeline",
)

REGISTRY_WHITELIST = frozenset(f"minecraft_{name}.bin" for name in _REGISTRIES)


async def send_all_registries(stream, directory: Union[str, Path]) -> None:
    """Send each whitelisted registry file as Registry Data, then the tag file as Update Tags."""
    directory = Path(directory)
    log.info("sending registry data from %s", directory)

    files = sorted(
        (entry for entry in directory.iterdir() if entry.is_file()),
        key=lambda entry: entry.name,
    )
    for entry in files:
        if entry.name in REGISTRY_WHITELIST:
            await send_packet(stream, REGISTRY_DATA_PACKET_ID, entry.read_bytes())
            log.info("registry %s sent", entry.name)

    tags = directory / TAGS_FILE
    if tags.is_file():
        log.info("sending tag update")
        await send_packet(stream, UPDATE_TAGS_PACKET_ID, tags.read_bytes())