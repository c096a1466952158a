import socket
import struct
import threading

import pytest

from monsters.network import (
    GOODBYE_POSITION,
    BlockPacket,
    GamePacket,
    UDPClient,
    decode_packets,
    encode_packet,
)


@pytest.fixture
def server():
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    sock.bind(("127.0.0.1", 0))
    sock.settimeout(2.0)
    yield sock
    sock.close()


def test_wire_layout_without_blocks():
    packet = GamePacket("ab", 1.0, 2.0, "c", "")
    expected = b"\x02ab" + struct.pack("<ff", 1.0, 2.0) + b"\x01c" + b"\x00" + b"\x00\x00"
    assert encode_packet(packet) == expected


def test_wire_layout_of_blocks():
    packet = GamePacket("", 0.0, 0.0, changed_blocks=[BlockPacket(1, 2, -3)])
    data = encode_packet(packet)
    assert data.endswith(b"\x01\x00" + struct.pack("<iii", 1, 2, -3))


def test_round_trip_of_several_packets():
    first = GamePacket(
        "alice",
        1.5,
        -2.25,
        "Resource/tree.png",
        "hello",
        [BlockPacket(20, 40, -9395396), BlockPacket(0, 0, -15063505)],
    )
    second = GamePacket("bob", 100.0, 200.0)
    assert decode_packets(encode_packet(first) + encode_packet(second)) == [first, second]


def test_round_trip_of_non_ascii_text():
    packet = GamePacket("jörg", 3.0, 4.0, chat_message="grüße")
    assert decode_packets(encode_packet(packet)) == [packet]


def test_empty_datagram_decodes_to_nothing():
    assert decode_packets(b"") == []


def test_truncated_record_is_dropped():
    whole = GamePacket("one", 1.0, 1.0)
    data = encode_packet(whole) + encode_packet(GamePacket("two", 2.0, 2.0))[:5]
    assert decode_packets(data) == [whole]


def test_truncated_blocks_keep_the_complete_ones():
    packet = GamePacket("p", 0.0, 0.0, changed_blocks=[BlockPacket(1, 1, 1), BlockPacket(2, 2, 2)])
    decoded = decode_packets(encode_packet(packet)[:-4])
    assert len(decoded) == 1
    assert decoded[0].changed_blocks == [BlockPacket(1, 1, 1)]


def test_overlong_name_is_rejected():
    with pytest.raises(ValueError):
        encode_packet(GamePacket("x" * 256, 0.0, 0.0))


def test_overlong_chat_is_rejected():
    with pytest.raises(ValueError):
        encode_packet(GamePacket("x", 0.0, 0.0, chat_message="y" * 300))


def test_send_before_start_fails():
    client = UDPClient("127.0.0.1", 9)
    with pytest.raises(RuntimeError):
        client.send_player_position(GamePacket("x", 0.0, 0.0))


def test_send_reaches_server(server):
    client = UDPClient("127.0.0.1", server.getsockname()[1])
    client.start()
    try:
        packet = GamePacket("me", 1.0, 2.0, "Resource/grass.png", "hi", [BlockPacket(20, 20, 7)])
        client.send_player_position(packet)
        data, _ = server.recvfrom(8192)
    finally:
        client.stop()
    assert decode_packets(data) == [packet]
    assert not client.running


def test_received_players_reach_callback(server):
    received = []
    event = threading.Event()

    def on_receive(players):
        received.append(players)
        event.set()

    client = UDPClient("127.0.0.1", server.getsockname()[1])
    client.set_receive_callback(on_receive)
    client.start()
    try:
        client.send_player_position(GamePacket("me", 0.0, 0.0))
        _, address = server.recvfrom(8192)
        others = [GamePacket("a", 1.0, 1.0), GamePacket("b", 2.0, 2.0, chat_message="yo")]
        server.sendto(b"".join(encode_packet(p) for p in others), address)
        assert event.wait(2.0)
    finally:
        client.stop()
    assert received == [others]


def test_context_manager_sends_goodbye(server):
    with UDPClient("127.0.0.1", server.getsockname()[1]) as client:
        assert client.running
        client.send_player_position(GamePacket("me", 5.0, 6.0))
    first, _ = server.recvfrom(8192)
    last, _ = server.recvfrom(8192)
    assert decode_packets(first)[0].name == "me"
    goodbye = decode_packets(last)[0]
    assert goodbye.name == ""
    assert goodbye.x == GOODBYE_POSITION
    assert goodbye.y == GOODBYE_POSITION
    assert not client.running


def test_stop_twice_is_harmless(server):
    client = UDPClient("127.0.0.1", server.getsockname()[1])
    client.start()
    client.stop()
    client.stop()
    with pytest.raises(RuntimeError):
        client.send_player_position(GamePacket("x", 0.0, 0.0))