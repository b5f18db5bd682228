"""Relay server: forwards game messages between connected clients."""

from __future__ import annotations

import argparse
import itertools
import socket
import sys
import threading
from typing import Dict, List, Optional, Sequence, Tuple

from .constants import NETWORK_BUFFER_SIZE, NETWORK_DEFAULT_PORT
from .payload import (
    BossAreaAttack,
    BossDash,
    BossDead,
    BossHit,
    BossMultiShoot,
    BossShield,
    BossShoot,
    BossSpawn,
    FrameDecoder,
    Join,
    Leave,
    Move,
    Payload,
    PlayerDirection,
    PlayerHit,
    PlayerKill,
    PlayerRespawn,
    Shoot,
    frame,
)


class Server:
    """Keeps the connected clients and the last known player positions."""

    def __init__(self) -> None:
        self.clients: Dict[int, socket.socket] = {}
        self.positions: Dict[int, Tuple[float, float]] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def start(self, host: str, port: int) -> None:
        """Listen for clients forever, serving each on its own thread."""
        with socket.create_server((host, port)) as listener:
            print(f"Server listening on {host}:{port}")
            while True:
                try:
                    sock, _ = listener.accept()
                except OSError as exc:
                    print(f"Error accepting connection: {exc}", file=sys.stderr)
                    continue
                threading.Thread(target=self.handle_client, args=(sock,), daemon=True).start()

    def handle_client(self, sock: socket.socket) -> None:
        """Serve one client until it disconnects."""
        with self._lock:
            client_id = next(self._ids)
            self.clients[client_id] = sock
        print(f"New client connected: {client_id}")
        try:
            sock.setsockopt(socket.IPPROTO_TCP, socket.TCP_NODELAY, 1)
        except OSError:
            pass

        decoder = FrameDecoder()
        while True:
            try:
                data = sock.recv(NETWORK_BUFFER_SIZE)
            except OSError:
                self.handle_disconnect(client_id)
                break
            if not data:
                print(f"Client {client_id} disconnected")
                self.handle_disconnect(client_id)
                break
            for payload, raw in decoder.feed(data):
                self.handle_payload(client_id, payload, raw)

    def handle_payload(self, sender_id: int, payload: Payload, message: bytes) -> None:
        """Record what the message changes and forward its raw frame."""
        match payload:
            case Move(player_id, x, y):
                with self._lock:
                    self.positions[player_id] = (x, y)
                self.broadcast_to_others(sender_id, message)
            case Join():
                self.send_current_state(sender_id)
                self.broadcast_to_others(sender_id, message)
            case Leave():
                with self._lock:
                    self.positions.pop(sender_id, None)
                self.broadcast_to_others(sender_id, message)
            case Shoot() | PlayerDirection():
                self.broadcast_to_others(sender_id, message)
            case (
                BossShoot()
                | PlayerHit()
                | BossHit()
                | BossSpawn()
                | BossDead()
                | BossMultiShoot()
                | BossDash()
                | BossAreaAttack()
                | BossShield()
                | PlayerRespawn()
                | PlayerKill()
            ):
                self.broadcast_to_all(message)
            case _:
                raise TypeError(f"not a payload: {payload!r}")

    def send_current_state(self, new_player_id: int) -> None:
        """Tell a new client about every other known player and its position."""
        with self._lock:
            sock = self.clients.get(new_player_id)
            if sock is None:
                return
            data = b"".join(
                frame(Join(player_id)) + frame(Move(player_id, x, y))
                for player_id, (x, y) in self.positions.items()
                if player_id != new_player_id
            )
            try:
                sock.sendall(data)
            except OSError:
                pass

    def handle_disconnect(self, client_id: int) -> None:
        """Forget a client and tell everyone else it left."""
        with self._lock:
            self.clients.pop(client_id, None)
            self.positions.pop(client_id, None)
        self.broadcast_to_all(frame(Leave(client_id)))

    def broadcast_to_others(self, sender_id: int, message: bytes) -> None:
        self._broadcast(message, exclude=sender_id)

    def broadcast_to_all(self, message: bytes) -> None:
        self._broadcast(message, exclude=None)

    def _broadcast(self, message: bytes, exclude: Optional[int]) -> None:
        with self._lock:
            failed: List[int] = []
            for client_id, sock in self.clients.items():
                if client_id == exclude:
                    continue
                try:
                    sock.sendall(message)
                except OSError:
                    failed.append(client_id)
            for client_id in failed:
                del self.clients[client_id]


def _port(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid port: {text!r}") from None
    if not 0 <= value <= 65535:
        raise argparse.ArgumentTypeError(f"port out of range: {value}")
    return value


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Dungeon multiplayer server")
    parser.add_argument(
        "-p", "--port", type=_port, default=NETWORK_DEFAULT_PORT, help="port to listen on"
    )
    args = parser.parse_args(argv)
    try:
        Server().start("0.0.0.0", args.port)
    except KeyboardInterrupt:
        pass
    return 0


if __name__ == "__main__":
    sys.exit(main())