"""Player-state datagrams and the UDP client that exchanges them."""

from __future__ import annotations

import socket
import struct
import threading
from dataclasses import dataclass, field
from typing import Callable, Optional

RECEIVE_BUFFER_SIZE = 8192
GOODBYE_POSITION = -555.0
MAX_STRING_BYTES = 0xFF
MAX_BLOCKS = 0xFFFF

_FLOAT = struct.Struct("<f")
_COUNT = struct.Struct("<H")
_BLOCK = struct.Struct("<iii")
_POLL_INTERVAL = 0.1


@dataclass
class BlockPacket:
    """A world tile that a player changed, identified by its top-left pixel."""

    x: int
    y: int
    color: int


@dataclass
class GamePacket:
    """One player's state as sent to and received from the server."""

    name: str
    x: float
    y: float
    current_block_name: str = ""
    chat_message: str = ""
    changed_blocks: list[BlockPacket] = field(default_factory=list)


ReceiveCallback = Callable[[list[GamePacket]], None]


def _short_string(text: str, what: str) -> bytes:
    raw = text.encode("utf-8")
    if len(raw) > MAX_STRING_BYTES:
        raise ValueError(f"{what} is {len(raw)} bytes; at most {MAX_STRING_BYTES} fit")
    return bytes([len(raw)]) + raw


def encode_packet(packet: GamePacket) -> bytes:
    """Serialise one player's state into its wire form."""
    if len(packet.changed_blocks) > MAX_BLOCKS:
        raise ValueError(f"at most {MAX_BLOCKS} changed blocks fit in a packet")
    parts = [
        _short_string(packet.name, "name"),
        _FLOAT.pack(packet.x),
        _FLOAT.pack(packet.y),
        _short_string(packet.current_block_name, "current block name"),
        _short_string(packet.chat_message, "chat message"),
        _COUNT.pack(len(packet.changed_blocks)),
    ]
    parts.extend(_BLOCK.pack(block.x, block.y, block.color) for block in packet.changed_blocks)
    return b"".join(parts)


def _read_short_string(data: bytes, offset: int) -> Optional[tuple[str, int]]:
    if offset + 1 > len(data):
        return None
    length = data[offset]
    offset += 1
    if offset + length > len(data):
        return None
    text = data[offset:offset + length].decode("utf-8", errors="replace")
    return text, offset + length


def decode_packets(data: bytes) -> list[GamePacket]:
    """Parse every complete player record in a datagram, stopping at the first truncated one."""
    data = bytes(data)
    size = len(data)
    offset = 0
    players: list[GamePacket] = []

    while offset < size:
        name_len = data[offset]
        if offset + 1 + name_len + 8 > size:
            break
        name = data[offset + 1:offset + 1 + name_len].decode("utf-8", errors="replace")
        offset += 1 + name_len
        (x,) = _FLOAT.unpack_from(data, offset)
        (y,) = _FLOAT.unpack_from(data, offset + _FLOAT.size)
        offset += 2 * _FLOAT.size

        read = _read_short_string(data, offset)
        if read is None:
            break
        current_block_name, offset = read

        read = _read_short_string(data, offset)
        if read is None:
            break
        chat_message, offset = read

        if offset + _COUNT.size > size:
            break
        (count,) = _COUNT.unpack_from(data, offset)
        offset += _COUNT.size

        blocks: list[BlockPacket] = []
        for _ in range(count):
            if offset + _BLOCK.size > size:
                break
            blocks.append(BlockPacket(*_BLOCK.unpack_from(data, offset)))
            offset += _BLOCK.size

        players.append(GamePacket(name, x, y, current_block_name, chat_message, blocks))

    return players


class UDPClient:
    """Sends this player's state to a server and hands received states to a callback."""

    def __init__(self, server_ip: str, server_port: int) -> None:
        self.server_address = (server_ip, server_port)
        self._socket: Optional[socket.socket] = None
        self._thread: Optional[threading.Thread] = None
        self._running = threading.Event()
        self._callback: Optional[ReceiveCallback] = None

    @property
    def running(self) -> bool:
        return self._running.is_set()

    @property
    def local_address(self) -> tuple[str, int]:
        if self._socket is None:
            raise RuntimeError("client is not started")
        return self._socket.getsockname()

    def start(self) -> None:
        """Open the socket and begin receiving in a background thread."""
        if self._socket is not None:
            raise RuntimeError("client is already started")
        sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM, socket.IPPROTO_UDP)
        try:
            sock.bind(("", 0))
            sock.settimeout(_POLL_INTERVAL)
        except OSError:
            sock.close()
            raise
        self._socket = sock
        self._running.set()
        self._thread = threading.Thread(target=self._receive_loop, name="udp-receive", daemon=True)
        self._thread.start()

    def stop(self) -> None:
        """Stop receiving and close the socket; safe to call more than once."""
        self._running.clear()
        if self._thread is not None:
            self._thread.join()
            self._thread = None
        if self._socket is not None:
            self._socket.close()
            self._socket = None

    def send_player_position(self, packet: GamePacket) -> None:
        if self._socket is None:
            raise RuntimeError("client is not started")
        self._socket.sendto(encode_packet(packet), self.server_address)

    def set_receive_callback(self, callback: Optional[ReceiveCallback]) -> None:
        self._callback = callback

    def _receive_loop(self) -> None:
        sock = self._socket
        assert sock is not None
        while self._running.is_set():
            try:
                data, _ = sock.recvfrom(RECEIVE_BUFFER_SIZE)
            except socket.timeout:
                continue
            except OSError:
                if not self._running.is_set():
                    break
                continue
            if not data:
                continue
            players = decode_packets(data)
            callback = self._callback
            if callback is not None and players:
                callback(players)

    def __enter__(self) -> "UDPClient":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            if self._socket is not None:
                self.send_player_position(GamePacket("", GOODBYE_POSITION, GOODBYE_POSITION))
        finally:
            self.stop()