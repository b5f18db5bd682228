import queue
import socket
import time

import pytest

from dungeon.client import NetworkClient, main
from dungeon.payload import FrameDecoder, Join, Leave, Move, Shoot, frame


def _read_payloads(conn, count):
    conn.settimeout(5.0)
    decoder = FrameDecoder()
    got = []
    while len(got) < count:
        data = conn.recv(1024)
        if not data:
            break
        got.extend(payload for payload, _ in decoder.feed(data))
    return got


def _closed_port():
    with socket.create_server(("127.0.0.1", 0)) as listener:
        return listener.getsockname()[1]


@pytest.fixture
def session():
    listener = socket.create_server(("127.0.0.1", 0))
    port = listener.getsockname()[1]
    outgoing = queue.Queue()
    incoming = queue.Queue()
    client = NetworkClient.connect(f"127.0.0.1:{port}", outgoing, incoming)
    listener.settimeout(5.0)
    conn, _ = listener.accept()
    yield client, conn, outgoing, incoming
    client.close()
    conn.close()
    listener.close()


def test_incoming_frames_reach_queue(session):
    _, conn, _, incoming = session
    conn.sendall(frame(Join(5)) + frame(Move(5, 1.5, 2.5)))
    assert incoming.get(timeout=5) == Join(5)
    assert incoming.get(timeout=5) == Move(5, 1.5, 2.5)


def test_split_frame_is_reassembled(session):
    _, conn, _, incoming = session
    data = frame(Move(9, 1.5, 2.5))
    conn.sendall(data[:3])
    time.sleep(0.05)
    conn.sendall(data[3:])
    assert incoming.get(timeout=5) == Move(9, 1.5, 2.5)


def test_outgoing_payloads_are_sent(session):
    _, conn, outgoing, _ = session
    shot = Shoot(1, 1.0, 2.0, 0.0, -1.0)
    outgoing.put(shot)
    assert _read_payloads(conn, 1) == [shot]


def test_close_flushes_pending_then_disconnects(session):
    client, conn, outgoing, _ = session
    outgoing.put(Leave(7))
    client.close()
    assert _read_payloads(conn, 1) == [Leave(7)]
    conn.settimeout(5.0)
    assert conn.recv(1024) == b""


@pytest.mark.parametrize("address", ["nohost", "localhost:abc", ":9000", "localhost:70000"])
def test_bad_address_raises(address):
    with pytest.raises(ValueError):
        NetworkClient.connect(address, queue.Queue(), queue.Queue())


def test_refused_connection_raises():
    port = _closed_port()
    with pytest.raises(OSError):
        NetworkClient.connect(f"127.0.0.1:{port}", queue.Queue(), queue.Queue())


def test_main_reports_failed_connection():
    port = _closed_port()
    assert main(["-a", f"127.0.0.1:{port}"]) == 1