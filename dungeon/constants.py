"""Game tuning values and the size of the playing field."""

from __future__ import annotations

from dataclasses import dataclass

# Player
PLAYER_RADIUS = 15.0
PLAYER_SPEED = 200.0
PLAYER_MAX_HEALTH = 100
PLAYER_RESPAWN_TIME = 5.0
PLAYER_ARROW_LENGTH = 25.0
PLAYER_HEALTH_BAR_WIDTH = 40.0
PLAYER_HEALTH_BAR_HEIGHT = 4.0
PLAYER_COLLISION_RADIUS = 18.0  # player radius + bullet radius

# Boss
BOSS_RADIUS = 60.0
BOSS_INNER_RADIUS = 50.0
BOSS_SHIELD_RADIUS = 67.0
BOSS_DASH_EFFECT_RADIUS = 75.0
BOSS_MAX_HEALTH = 500
BOSS_SPEED = 60.0
BOSS_DASH_SPEED = 600.0
BOSS_SHOOT_INTERVAL = 1.4
BOSS_MOVE_INTERVAL = 1.5
BOSS_POWER_INTERVAL = 6.0
BOSS_DASH_INTERVAL = 4.0
BOSS_SHIELD_DURATION = 3.0
BOSS_RESPAWN_TIME = 5.0
BOSS_SPAWN_Y = 100.0
BOSS_MOVEMENT_VARIANCE = 250.0
BOSS_MIN_DISTANCE_FROM_EDGE = 50.0
BOSS_COLLISION_RADIUS = 63.0  # boss radius + bullet radius
BOSS_DASH_STOP_DISTANCE = 10.0
BOSS_HEALTH_BAR_WIDTH = 150.0
BOSS_HEALTH_BAR_HEIGHT = 13.0
BOSS_HEALTH_BAR_OFFSET_Y = 80.0

# Bullets
BULLET_RADIUS = 3.0
BULLET_BOSS_RADIUS = 5.0
BULLET_BOSS_INNER_RADIUS = 3.0
BULLET_PLAYER_SPEED = 400.0
BULLET_BOSS_SPEED = 300.0
BULLET_PLAYER_LIFETIME = 3.0
BULLET_BOSS_LIFETIME = 4.0
BULLET_DAMAGE_PLAYER = 15
BULLET_DAMAGE_BOSS = 10
BULLET_DAMAGE_BOSS_TO_PLAYER = 10

# Boss area attack
AREA_ATTACK_MAX_RADIUS = 100.0
AREA_ATTACK_DURATION = 1.0
AREA_ATTACK_DAMAGE = 20
AREA_ATTACK_WARNING_RADIUS = 10.0
AREA_ATTACK_WARNING_THRESHOLD = 0.5

# Floating damage numbers
DAMAGE_INDICATOR_DURATION = 1.5
DAMAGE_INDICATOR_FLOAT_SPEED = 30.0
DAMAGE_INDICATOR_TEXT_SIZE = 18.0

# Boss multi-shot
MULTI_SHOT_BULLET_COUNT = 5
MULTI_SHOT_SPREAD_ANGLE = 0.2
MULTI_SHOT_ANGLE_RANGE = range(-2, 3)

# User interface
UI_TEXT_SIZE_LARGE = 24.0
UI_TEXT_SIZE_MEDIUM = 20.0
UI_TEXT_SIZE_SMALL = 18.0
UI_TEXT_SIZE_TINY = 16.0
UI_TEXT_SIZE_MICRO = 14.0
UI_TEXT_SIZE_NANO = 12.0
UI_MARGIN = 10.0
UI_LINE_HEIGHT = 20.0
UI_SMALL_LINE_HEIGHT = 16.0
UI_LEADERBOARD_MAX_ENTRIES = 5
UI_WARNING_DISPLAY_TIME = 2.0
UI_HEALTH_TEXT_SIZE = 12.0
UI_HEALTH_TEXT_OFFSET_Y = 12.0

# Network
NETWORK_BUFFER_SIZE = 1024
NETWORK_MAX_MESSAGES_PER_FRAME = 100
NETWORK_DEFAULT_ADDRESS = "0.0.0.0:9000"
NETWORK_DEFAULT_PORT = 9000

# Transparency of effects
ALPHA_SHIELD_EFFECT = 0.3
ALPHA_DASH_EFFECT = 0.4
ALPHA_AREA_ATTACK = 0.3
ALPHA_GHOST_PLAYER = 0.5
ALPHA_DAMAGE_FADE = 1.0

# Boundaries
BOUNDS_PLAYER_MIN_DISTANCE_FROM_EDGE = 15.0
BOUNDS_SCREEN_EDGE_BUFFER = 50.0


@dataclass(frozen=True)
class Arena:
    """Size of the playing field in pixels."""

    width: float = 800.0
    height: float = 600.0

    def center(self) -> tuple[float, float]:
        """Return the middle point of the field."""
        return self.width / 2.0, self.height / 2.0