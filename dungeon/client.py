"""Network client: connects to the relay server and runs the game."""

from __future__ import annotations

import argparse
import queue
import socket
import sys
import threading
import time
from typing import Optional, Sequence, Tuple

from .constants import NETWORK_BUFFER_SIZE, NETWORK_DEFAULT_ADDRESS
from .payload import FrameDecoder, frame

_STOP = object()


def _split_address(address: str) -> Tuple[str, int]:
    host, sep, port_text = address.rpartition(":")
    host = host.strip("[]")
    if not sep or not host:
        raise ValueError(f"address must be host:port, got {address!r}")
    try:
        port = int(port_text)
    except ValueError:
        raise ValueError(f"invalid port in address {address!r}") from None
    if not 0 <= port <= 65535:
        raise ValueError(f"port out of range in address {address!r}")
    return host, port


class NetworkClient:
    """Moves messages between two queues and a server connection.

    Payloads put on ``outgoing`` are written to the server; payloads the
    server sends are put on ``incoming``.
    """

    def __init__(self, sock: socket.socket, outgoing: queue.Queue, incoming: queue.Queue) -> None:
        self._sock = sock
        self._outgoing = outgoing
        self._incoming = incoming
        self._reader = threading.Thread(target=self._read_loop, daemon=True)
        self._writer = threading.Thread(target=self._write_loop, daemon=True)
        self._reader.start()
        self._writer.start()

    @classmethod
    def connect(cls, address: str, outgoing: queue.Queue, incoming: queue.Queue) -> "NetworkClient":
        """Connect to ``host:port`` and start relaying; raises OSError on failure."""
        host, port = _split_address(address)
        sock = socket.create_connection((host, port))
        try:
            sock.setsockopt(socket.IPPROTO_TCP, socket.TCP_NODELAY, 1)
        except OSError:
            sock.close()
            raise
        print(f"Connected to server at {address}")
        return cls(sock, outgoing, incoming)

    def _read_loop(self) -> None:
        decoder = FrameDecoder()
        while True:
            try:
                data = self._sock.recv(NETWORK_BUFFER_SIZE)
            except OSError:
                return
            if not data:
                print("Server disconnected")
                return
            for payload, _ in decoder.feed(data):
                self._incoming.put(payload)

    def _write_loop(self) -> None:
        while True:
            payload = self._outgoing.get()
            if payload is _STOP:
                return
            try:
                data = frame(payload)
            except (TypeError, ValueError):
                continue
            try:
                self._sock.sendall(data)
            except OSError:
                return

    def close(self) -> None:
        """Send what is still queued, then close the connection."""
        self._outgoing.put(_STOP)
        self._writer.join(timeout=2.0)
        try:
            self._sock.shutdown(socket.SHUT_RDWR)
        except OSError:
            pass
        self._sock.close()
        self._reader.join(timeout=2.0)

    def __enter__(self) -> "NetworkClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Dungeon multiplayer client")
    parser.add_argument(
        "-a",
        "--address",
        default=NETWORK_DEFAULT_ADDRESS,
        help="server address to connect to",
    )
    args = parser.parse_args(argv)
    print(f"Connecting to server at {args.address}...")

    player_id = int(time.time()) & 0xFFFFFFFF
    outgoing: queue.Queue = queue.Queue()
    incoming: queue.Queue = queue.Queue()
    try:
        client = NetworkClient.connect(args.address, outgoing, incoming)
    except (OSError, ValueError) as exc:
        print(f"Could not connect to {args.address}: {exc}", file=sys.stderr)
        return 1

    from .game_state import run_client_game

    with client:
        run_client_game(outgoing, incoming, player_id)
    return 0


if __name__ == "__main__":
    sys.exit(main())