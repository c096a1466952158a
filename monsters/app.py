"""Command-line entry point that assembles and runs the game."""

from __future__ import annotations

import argparse
import sys
from typing import Optional, Sequence

from .application import Application, ApplicationSpecification, run_application
from .layers import SERVER_IP, SERVER_PORT, GameOver, MenuLayer, PlayLayer, Scene
from .network import UDPClient
from .player import Player
from .world import World

APP_NAME = "monsters"
DEFAULT_WORLD_TILES = 256
MIN_WORLD_TILES = 10
TILE_SIZE = 20


def _world_tiles(text: str) -> int:
    value = int(text)
    if value < MIN_WORLD_TILES:
        raise argparse.ArgumentTypeError(f"world needs at least {MIN_WORLD_TILES} tiles per side")
    return value


def _port(text: str) -> int:
    value = int(text)
    if not 0 < value <= 0xFFFF:
        raise argparse.ArgumentTypeError(f"port {value} out of range")
    return value


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog=APP_NAME, description="Multiplayer tile world game.")
    parser.add_argument("--server", default=SERVER_IP, help="game server address")
    parser.add_argument("--port", type=_port, default=SERVER_PORT, help="game server UDP port")
    parser.add_argument(
        "--world-tiles", type=_world_tiles, default=DEFAULT_WORLD_TILES, help="tiles per world side"
    )
    parser.add_argument("--name", default="", help="player name to start with")
    return parser


def create_application(argv: Optional[Sequence[str]] = None) -> Application:
    """Build the application with the menu and game layers attached."""
    args = _parser().parse_args(list(argv) if argv is not None else [])
    app = Application(ApplicationSpecification(name=APP_NAME))
    scene = Scene(player_name=args.name)
    world = World(tile_size=TILE_SIZE, tiles_x=args.world_tiles, tiles_y=args.world_tiles)
    client = UDPClient(args.server, args.port)
    app.push_layer(MenuLayer(scene))
    app.push_layer(PlayLayer(scene, client, world, Player(), app.input))
    return app


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the game until its window closes or the player dies."""
    if argv is None:
        argv = sys.argv[1:]
    try:
        return run_application(create_application, argv)
    except GameOver:
        return 0


if __name__ == "__main__":
    sys.exit(main())