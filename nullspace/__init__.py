"""Asyncio game server and wire types for the Minecraft Java Edition protocol."""

__version__ = "0.1.0"