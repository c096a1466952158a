"""Game logic for a tile-based multiplayer survival game."""

__version__ = "0.1.0"