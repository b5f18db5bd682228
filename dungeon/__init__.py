"""Multiplayer boss-fight arena game: pygame client, simulation and TCP relay server."""

__version__ = "0.1.0"