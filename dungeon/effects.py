"""Short-lived visual effects: boss area attacks and damage numbers."""

from __future__ import annotations

import math
from dataclasses import dataclass

from .constants import (
    AREA_ATTACK_DAMAGE,
    AREA_ATTACK_DURATION,
    AREA_ATTACK_MAX_RADIUS,
    DAMAGE_INDICATOR_DURATION,
    DAMAGE_INDICATOR_FLOAT_SPEED,
)


@dataclass
class AreaAttack:
    """A circular blast centred on a point."""

    x: float
    y: float
    timer: float = 0.0
    max_time: float = AREA_ATTACK_DURATION

    def update(self, dt: float) -> bool:
        """Advance the effect; return True once it has finished."""
        self.timer += dt
        return self.timer >= self.max_time

    def progress(self) -> float:
        return min(max(self.timer / self.max_time, 0.0), 1.0)

    def affects_point(self, x: float, y: float) -> bool:
        return math.hypot(self.x - x, self.y - y) <= AREA_ATTACK_MAX_RADIUS

    def damage(self) -> int:
        return AREA_ATTACK_DAMAGE


@dataclass
class DamageIndicator:
    """A floating damage number that drifts upward and fades."""

    x: float
    y: float
    damage: int
    from_player: bool = False
    timer: float = 0.0
    max_time: float = DAMAGE_INDICATOR_DURATION

    def update(self, dt: float) -> bool:
        """Advance and float upward; return True once it has finished."""
        self.timer += dt
        self.y -= DAMAGE_INDICATOR_FLOAT_SPEED * dt
        return self.timer >= self.max_time

    def progress(self) -> float:
        return min(max(self.timer / self.max_time, 0.0), 1.0)