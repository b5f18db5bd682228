"""The boss enemy: movement AI, ability timers and health."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Optional

from .constants import (
    BOSS_DASH_INTERVAL,
    BOSS_DASH_SPEED,
    BOSS_DASH_STOP_DISTANCE,
    BOSS_MAX_HEALTH,
    BOSS_MIN_DISTANCE_FROM_EDGE,
    BOSS_MOVE_INTERVAL,
    BOSS_MOVEMENT_VARIANCE,
    BOSS_POWER_INTERVAL,
    BOSS_RADIUS,
    BOSS_RESPAWN_TIME,
    BOSS_SHIELD_DURATION,
    BOSS_SHOOT_INTERVAL,
    BOSS_SPAWN_Y,
    BOSS_SPEED,
    UI_WARNING_DISPLAY_TIME,
    Arena,
)
from .player import Player
from .rng import gen_range

_ARRIVAL_DISTANCE = 5.0


def nearest_player(players: Iterable[Player], x: float, y: float) -> Optional[Player]:
    """Return the living player closest to ``(x, y)``, or None.

    Squared distances are truncated to whole numbers before comparing, and
    ties go to the player listed first.
    """
    alive = [p for p in players if p.is_alive]
    if not alive:
        return None
    return min(alive, key=lambda p: int((p.x - x) ** 2 + (p.y - y) ** 2))


def _warning(time_left: float) -> float:
    return time_left if 0.0 < time_left <= UI_WARNING_DISPLAY_TIME else 0.0


@dataclass
class Boss:
    """Boss state: position, health and the timers that drive its abilities."""

    x: float
    y: float
    health: int = BOSS_MAX_HEALTH
    max_health: int = BOSS_MAX_HEALTH
    alive: bool = True
    respawn_timer: float = 0.0
    shoot_timer: float = 0.0
    move_timer: float = 0.0
    target_x: Optional[float] = None
    target_y: Optional[float] = None
    power_timer: float = 0.0
    shield_timer: float = 0.0
    shield_active: bool = False
    dash_timer: float = 0.0
    is_dashing: bool = False
    dash_target_x: Optional[float] = None
    dash_target_y: Optional[float] = None

    def __post_init__(self) -> None:
        if self.target_x is None:
            self.target_x = self.x
        if self.target_y is None:
            self.target_y = self.y
        if self.dash_target_x is None:
            self.dash_target_x = self.x
        if self.dash_target_y is None:
            self.dash_target_y = self.y

    @classmethod
    def at_spawn(cls, arena: Arena) -> "Boss":
        """Create a boss at the top middle of the arena."""
        return cls(arena.width / 2.0, BOSS_SPAWN_Y)

    def respawn(self, arena: Arena) -> None:
        """Return to the spawn point with full health and fresh timers."""
        self.x = arena.width / 2.0
        self.y = BOSS_SPAWN_Y
        self.health = self.max_health
        self.alive = True
        self._reset_all_timers()

    def _reset_all_timers(self) -> None:
        self.respawn_timer = 0.0
        self.shoot_timer = 0.0
        self.move_timer = 0.0
        self.target_x = self.x
        self.target_y = self.y
        self.power_timer = 0.0
        self.shield_timer = 0.0
        self.shield_active = False
        self.dash_timer = 0.0
        self.is_dashing = False
        self.dash_target_x = self.x
        self.dash_target_y = self.y

    def update(self, dt: float, players: Iterable[Player], arena: Arena) -> None:
        """Advance timers and move; a dead boss only counts toward respawn."""
        if not self.alive:
            self.respawn_timer += dt
            return
        self._update_timers(dt)
        if self.is_dashing:
            self._update_dash(dt)
            return
        self._update_target(players, arena)
        self._move_towards_target(dt)

    def _update_timers(self, dt: float) -> None:
        self.shoot_timer += dt
        self.move_timer += dt
        self.power_timer += dt
        self.dash_timer += dt
        if self.shield_active:
            self.shield_timer += dt
            if self.shield_timer >= BOSS_SHIELD_DURATION:
                self.shield_active = False
                self.shield_timer = 0.0

    def _update_dash(self, dt: float) -> None:
        dx = self.dash_target_x - self.x
        dy = self.dash_target_y - self.y
        distance = math.hypot(dx, dy)
        if distance > BOSS_DASH_STOP_DISTANCE:
            step = BOSS_DASH_SPEED * dt
            self.x += dx / distance * step
            self.y += dy / distance * step
        else:
            self.is_dashing = False
            self.dash_timer = 0.0

    def _update_target(self, players: Iterable[Player], arena: Arena) -> None:
        if self.move_timer < BOSS_MOVE_INTERVAL:
            return
        target = nearest_player(players, self.x, self.y)
        if target is not None:
            self.target_x = target.x + gen_range(-BOSS_MOVEMENT_VARIANCE, BOSS_MOVEMENT_VARIANCE)
            self.target_y = target.y + gen_range(-BOSS_MOVEMENT_VARIANCE, BOSS_MOVEMENT_VARIANCE)
            low = BOSS_MIN_DISTANCE_FROM_EDGE
            self.target_x = min(max(self.target_x, low), arena.width - low)
            self.target_y = min(max(self.target_y, low), arena.height - low)
        self.move_timer = 0.0

    def _move_towards_target(self, dt: float) -> None:
        dx = self.target_x - self.x
        dy = self.target_y - self.y
        distance = math.hypot(dx, dy)
        if distance > _ARRIVAL_DISTANCE:
            step = BOSS_SPEED * dt
            self.x += dx / distance * step
            self.y += dy / distance * step

    def should_shoot(self) -> bool:
        return self.alive and self.shoot_timer >= BOSS_SHOOT_INTERVAL

    def reset_shoot_timer(self) -> None:
        self.shoot_timer = 0.0

    def should_use_power(self) -> bool:
        return self.alive and self.power_timer >= BOSS_POWER_INTERVAL and not self.is_dashing

    def should_dash(self) -> bool:
        return self.alive and self.dash_timer >= BOSS_DASH_INTERVAL and not self.is_dashing

    def should_respawn(self) -> bool:
        return not self.alive and self.respawn_timer >= BOSS_RESPAWN_TIME

    def take_damage(self, damage: int) -> bool:
        """Lose health unless shielded or dead; report whether this hit killed it."""
        if not self.alive or self.shield_active:
            return False
        if self.health <= damage:
            self.health = 0
            self.alive = False
            self.respawn_timer = 0.0
            return True
        self.health -= damage
        return False

    def activate_shield(self) -> None:
        self.shield_active = True
        self.shield_timer = 0.0

    def start_dash(self, target_x: float, target_y: float) -> None:
        self.is_dashing = True
        self.dash_target_x = target_x
        self.dash_target_y = target_y
        self.dash_timer = 0.0

    def reset_power_timer(self) -> None:
        self.power_timer = 0.0

    def distance_to(self, x: float, y: float) -> float:
        return math.hypot(self.x - x, self.y - y)

    def collides_with_point(self, x: float, y: float, radius: float) -> bool:
        return self.distance_to(x, y) <= BOSS_RADIUS + radius

    def power_warning_time(self) -> float:
        """Seconds until the next power, while the warning is shown; else 0."""
        return _warning(BOSS_POWER_INTERVAL - self.power_timer)

    def dash_warning_time(self) -> float:
        """Seconds until the next dash, while the warning is shown; else 0."""
        return _warning(BOSS_DASH_INTERVAL - self.dash_timer)

    def respawn_time_remaining(self) -> float:
        if self.alive:
            return 0.0
        return max(BOSS_RESPAWN_TIME - self.respawn_timer, 0.0)