"""Player entity."""

from __future__ import annotations

import math
from dataclasses import dataclass

from .constants import PLAYER_MAX_HEALTH, PLAYER_RADIUS, PLAYER_RESPAWN_TIME, Arena
from .rng import gen_range


@dataclass
class Player:
    """A player's position, facing, health and score."""

    id: int
    x: float
    y: float
    direction_x: float = 0.0
    direction_y: float = -1.0
    health: int = PLAYER_MAX_HEALTH
    max_health: int = PLAYER_MAX_HEALTH
    respawn_timer: float = 0.0
    is_alive: bool = True
    kills: int = 0

    @classmethod
    def at_center(cls, player_id: int, arena: Arena) -> "Player":
        """Create a player in the middle of the arena."""
        x, y = arena.center()
        return cls(player_id, x, y)

    def update_respawn(self, dt: float) -> None:
        if not self.is_alive:
            self.respawn_timer += dt

    def can_respawn(self) -> bool:
        return not self.is_alive and self.respawn_timer >= PLAYER_RESPAWN_TIME

    def respawn(self, arena: Arena) -> None:
        """Bring the player back at full health in the lower half of the arena."""
        self.x = gen_range(PLAYER_RADIUS, arena.width - PLAYER_RADIUS)
        self.y = gen_range(arena.height / 2.0, arena.height - PLAYER_RADIUS)
        self.health = self.max_health
        self.is_alive = True
        self.respawn_timer = 0.0

    def move_by(self, velocity_x: float, velocity_y: float, arena: Arena) -> None:
        self.x += velocity_x
        self.y += velocity_y
        self.clamp_to(arena)

    def set_direction(self, direction_x: float, direction_y: float) -> bool:
        """Set the facing and report whether it changed."""
        changed = self.direction_x != direction_x or self.direction_y != direction_y
        self.direction_x = direction_x
        self.direction_y = direction_y
        return changed

    def clamp_to(self, arena: Arena) -> None:
        """Keep the whole player circle inside the arena."""
        self.x = min(max(self.x, PLAYER_RADIUS), arena.width - PLAYER_RADIUS)
        self.y = min(max(self.y, PLAYER_RADIUS), arena.height - PLAYER_RADIUS)

    def take_damage(self, damage: int) -> bool:
        """Lose health and report whether this hit killed the player."""
        if not self.is_alive:
            return False
        self.health = max(self.health - damage, 0)
        if self.health == 0:
            self.is_alive = False
            self.respawn_timer = 0.0
            return True
        return False

    def respawn_time_remaining(self) -> float:
        if self.is_alive:
            return 0.0
        return max(PLAYER_RESPAWN_TIME - self.respawn_timer, 0.0)

    def distance_to(self, x: float, y: float) -> float:
        return math.hypot(self.x - x, self.y - y)

    def collides_with_point(self, x: float, y: float, radius: float) -> bool:
        return self.distance_to(x, y) <= PLAYER_RADIUS + radius