# monsters

The game logic of a small tile-based multiplayer survival game. The world is
generated from a seeded 32-bit Mersenne Twister, so a world of a given size
always comes out the same: grass, trees with leaves, and a 5×5 cave. The
player walks around with collision, breaks trees, leaves and diamonds with a
pickaxe, places blocks from a three-slot inventory, types chat messages, and
is chased by enemies. Player state is exchanged with a server in a compact
UDP datagram format.

## Installation

```
pip install .
```

For the tests:

```
pip install ".[test]"
pytest
```

## The `monsters` command

```
monsters [--server ADDRESS] [--port PORT] [--world-tiles N] [--name NAME]
```

- `--server` – game server address (default `34.141.136.27`).
- `--port` – game server UDP port, 1–65535 (default `12345`).
- `--world-tiles` – tiles per world side, at least 10 (default `256`; tiles
  are 20 pixels square).
- `--name` – player name to start with.

The command builds an `Application` named `monsters`, pushes a `MenuLayer`
and a `PlayLayer` that share one `Scene`, and runs the frame loop. Pushing
the play layer opens the UDP client and gives the player a pickaxe. When the
application shuts down, layers are detached; the play layer sends a goodbye
packet (position −555, −555) and closes the socket. The command returns 0,
also when the player dies (`GameOver`).

### What it does not do

There is no window, no drawing, no sound and no text rendering. Keyboard and
mouse state live in a `monsters.input.Input` object that nothing in the
package fills from a real keyboard, and the menu's start button is the
`MenuLayer.start_pressed` flag, which nothing sets. Run on its own, the
command therefore stays on the menu and loops until interrupted (Ctrl-C).
To play, a front end has to feed the `Input` object and call
`MenuLayer.start_game()` (or set `start_pressed`), and draw the state that
`PlayLayer` keeps: `world`, `player`, `enemies`, `remote_players` and `chat`.

## Library use

- `monsters.rng.Random` – MT19937 with the standard 32-bit output sequence
  (default seed 5489): `set_seed`, `next_u32`, `uint(low, high)` (modulo
  reduction, inclusive), `uniform()` (single-precision in [0, 1]),
  `vec3(low, high)` and `in_unit_sphere()`.
- `monsters.timer.Timer` – `elapsed()` in seconds and `elapsed_millis()`;
  `ScopedTimer(name)` is a context manager that writes
  `[TIMER] name - Nms` when its block ends.
- `monsters.keycodes` – `KeyCode`, `MouseButton`, `CursorMode` and `KeyState`
  enums; key and button members print as their number.
- `monsters.input.Input` – `press`/`release`/`is_key_down`, mouse buttons,
  `move_mouse`/`mouse_position`, `set_cursor_mode`, and a typed-character
  queue (`type_text`, `drain_characters`).
- `monsters.frames` – `ResourceFreeQueue`, callbacks held per frame in flight
  and run when that frame comes round again, and `clamp_timestep`, which caps
  a frame's step at 0.0333 s.
- `monsters.application` – `Layer` (hooks `on_attach`, `on_update`,
  `on_ui_render`, `on_detach`) and `Application` with `push_layer`,
  `set_menubar_callback`, `submit_resource_free`, `run(max_frames)`,
  `close()`, `time()` and `shutdown()`; `run_application(factory, argv)` builds,
  runs and shuts down an application.
- `monsters.image` – `Image`, an RGBA (4 bytes per pixel) or RGBA32F
  (16 bytes per pixel) pixel buffer with `set_data`, `resize` and `release`;
  `Image.from_file` loads any file Pillow reads, floating-point images as
  RGBA32F.
- `monsters.world` – `World(tile_size, tiles_x, tiles_y)` with `create_world`,
  `tile_at`, `pixel`, `set_pixel` and `fill_tile`; `Block` names the terrain
  colours and `is_solid(color)` tells whether a colour blocks movement.
- `monsters.inventory` – `Item` (sprite path, amount, colour), the known items
  `GRASS`, `DIAMOND`, `LEAVE`, `TREE` and `PICKAXE`, `item_for_path`, and
  `Inventory` with `add_item` (stacks by path, ignored when full),
  `destroy_item`, `select` and `current`.
- `monsters.enemy.Enemy` – `attack(timestep, player)` moves at 100 px/s toward
  the player and, within range 1, deals 6 damage.
- `monsters.player` – `Player` with `move(world, direction, timestep, sprint)`
  (350 px/s, 2350 with sprint), `collides`, `place_block`, `type_characters`,
  `tick_chat` (a sent message clears after 5 s), `update_bounds` (0–5120),
  `to_packet`, `update_network` and `handle_input`; `Direction` gives the four
  movement directions.
- `monsters.network` – `GamePacket` and `BlockPacket`, `encode_packet` and
  `decode_packets`, and `UDPClient` with `start`, `stop`,
  `send_player_position` and `set_receive_callback`; used as a context
  manager it sends the goodbye packet on exit.
- `monsters.layers` – `Scene`, `MenuLayer`, `PlayLayer` and `GameOver`.

## Wire format

Each player record, all little-endian:

1. name: one length byte, then that many UTF-8 bytes
2. x, y: two 32-bit floats
3. current item path: length byte and bytes
4. chat message: length byte and bytes
5. changed-block count: unsigned 16-bit
6. per block: x, y, colour as signed 32-bit integers

A datagram may hold several records; `decode_packets` returns every complete
one and stops at the first truncated record.