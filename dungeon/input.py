"""Turning the local player's controls into movement, aiming and shots."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from .bullet import Bullet
from .constants import PLAYER_SPEED, Arena
from .payload import Payload, PlayerDirection, PlayerRespawn, Shoot
from .player import Player

Send = Optional[Callable[[Payload], None]]


@dataclass
class InputState:
    """The controls as seen in one frame.

    ``left``/``right``/``up``/``down`` are held keys, ``shoot`` and ``quit``
    were pressed this frame, and ``mouse`` is the pointer position, or None
    when it is unknown.
    """

    left: bool = False
    right: bool = False
    up: bool = False
    down: bool = False
    shoot: bool = False
    quit: bool = False
    mouse: Optional[Tuple[float, float]] = None


def _handle_respawn(player: Player, dt: float, arena: Arena, send: Send, audio) -> None:
    player.update_respawn(dt)
    if not player.can_respawn():
        return
    player.respawn(arena)
    if audio is not None:
        audio.play_respawn()
    if send is not None:
        send(PlayerRespawn(player.id, player.x, player.y))


def _aim_at_mouse(player: Player, mouse: Optional[Tuple[float, float]], send: Send) -> None:
    if mouse is None:
        return
    dx = mouse[0] - player.x
    dy = mouse[1] - player.y
    distance = math.hypot(dx, dy)
    if distance <= 0.0:
        return
    if player.set_direction(dx / distance, dy / distance) and send is not None:
        send(PlayerDirection(player.id, player.direction_x, player.direction_y))


def _shoot(player: Player, bullets: List[Bullet], send: Send, audio) -> None:
    bullets.append(
        Bullet.from_player(player.x, player.y, player.direction_x, player.direction_y, player.id)
    )
    if audio is not None:
        audio.play_player_shoot()
    if send is not None:
        send(Shoot(player.id, player.x, player.y, player.direction_x, player.direction_y))


def _move(player: Player, state: InputState, dt: float, arena: Arena) -> bool:
    speed = PLAYER_SPEED * dt
    steps = (
        (state.left, -speed, 0.0),
        (state.right, speed, 0.0),
        (state.up, 0.0, -speed),
        (state.down, 0.0, speed),
    )
    moved = False
    for held, vx, vy in steps:
        if held:
            player.move_by(vx, vy, arena)
            moved = True
    return moved


def update_player_input(
    local_player: Player,
    bullets: List[Bullet],
    state: InputState,
    dt: float,
    arena: Arena,
    send: Send = None,
    audio=None,
) -> bool:
    """Apply one frame of controls and return whether the player moved.

    A dead player only counts toward respawning and never moves.
    """
    if not local_player.is_alive:
        _handle_respawn(local_player, dt, arena, send, audio)
        return False

    _aim_at_mouse(local_player, state.mouse, send)
    if state.shoot:
        _shoot(local_player, bullets, send, audio)
    return _move(local_player, state, dt, arena)