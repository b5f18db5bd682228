"""Projectiles fired by players and the boss."""

from __future__ import annotations

import math
from dataclasses import dataclass

from .constants import (
    BULLET_BOSS_LIFETIME,
    BULLET_BOSS_RADIUS,
    BULLET_BOSS_SPEED,
    BULLET_DAMAGE_BOSS_TO_PLAYER,
    BULLET_DAMAGE_PLAYER,
    BULLET_PLAYER_LIFETIME,
    BULLET_PLAYER_SPEED,
    BULLET_RADIUS,
    Arena,
)

BOSS_OWNER_ID = 0


@dataclass
class Bullet:
    """A moving projectile with a limited lifetime."""

    x: float
    y: float
    velocity_x: float
    velocity_y: float
    lifetime: float
    owner_id: int
    is_boss_bullet: bool = False

    @classmethod
    def from_player(
        cls, x: float, y: float, direction_x: float, direction_y: float, owner_id: int
    ) -> "Bullet":
        return cls(
            x,
            y,
            direction_x * BULLET_PLAYER_SPEED,
            direction_y * BULLET_PLAYER_SPEED,
            BULLET_PLAYER_LIFETIME,
            owner_id,
        )

    @classmethod
    def from_boss(
        cls, x: float, y: float, direction_x: float, direction_y: float
    ) -> "Bullet":
        return cls(
            x,
            y,
            direction_x * BULLET_BOSS_SPEED,
            direction_y * BULLET_BOSS_SPEED,
            BULLET_BOSS_LIFETIME,
            BOSS_OWNER_ID,
            is_boss_bullet=True,
        )

    def update(self, dt: float, arena: Arena) -> bool:
        """Advance the bullet; return True once it expired or left the arena."""
        self.x += self.velocity_x * dt
        self.y += self.velocity_y * dt
        self.lifetime -= dt
        return self.lifetime <= 0.0 or self._outside(arena)

    def _outside(self, arena: Arena) -> bool:
        return self.x < 0.0 or self.x > arena.width or self.y < 0.0 or self.y > arena.height

    @property
    def radius(self) -> float:
        return BULLET_BOSS_RADIUS if self.is_boss_bullet else BULLET_RADIUS

    def distance_to(self, x: float, y: float) -> float:
        return math.hypot(self.x - x, self.y - y)

    def collides_with(self, x: float, y: float, radius: float) -> bool:
        return self.distance_to(x, y) <= self.radius + radius

    def damage(self) -> int:
        return BULLET_DAMAGE_BOSS_TO_PLAYER if self.is_boss_bullet else BULLET_DAMAGE_PLAYER