"""Drawing the arena, its entities and the user interface with pygame."""

from __future__ import annotations

import math
from functools import lru_cache
from typing import Iterable, List, Sequence, Tuple

import pygame

from .boss import Boss
from .bullet import Bullet
from .constants import (
    ALPHA_AREA_ATTACK,
    ALPHA_DAMAGE_FADE,
    ALPHA_DASH_EFFECT,
    ALPHA_GHOST_PLAYER,
    ALPHA_SHIELD_EFFECT,
    AREA_ATTACK_MAX_RADIUS,
    AREA_ATTACK_WARNING_RADIUS,
    AREA_ATTACK_WARNING_THRESHOLD,
    BOSS_DASH_EFFECT_RADIUS,
    BOSS_HEALTH_BAR_HEIGHT,
    BOSS_HEALTH_BAR_OFFSET_Y,
    BOSS_HEALTH_BAR_WIDTH,
    BOSS_INNER_RADIUS,
    BOSS_RADIUS,
    BOSS_SHIELD_RADIUS,
    BULLET_BOSS_INNER_RADIUS,
    BULLET_BOSS_RADIUS,
    BULLET_RADIUS,
    DAMAGE_INDICATOR_TEXT_SIZE,
    PLAYER_ARROW_LENGTH,
    PLAYER_HEALTH_BAR_HEIGHT,
    PLAYER_HEALTH_BAR_WIDTH,
    PLAYER_RADIUS,
    UI_HEALTH_TEXT_OFFSET_Y,
    UI_HEALTH_TEXT_SIZE,
    UI_LEADERBOARD_MAX_ENTRIES,
    UI_LINE_HEIGHT,
    UI_MARGIN,
    UI_SMALL_LINE_HEIGHT,
    UI_TEXT_SIZE_LARGE,
    UI_TEXT_SIZE_MEDIUM,
    UI_TEXT_SIZE_MICRO,
    UI_TEXT_SIZE_NANO,
    UI_TEXT_SIZE_SMALL,
    UI_TEXT_SIZE_TINY,
)
from .effects import AreaAttack, DamageIndicator
from .player import Player

WHITE = (255, 255, 255)
BLACK = (0, 0, 0)
BLUE = (0, 121, 241)
DARKBLUE = (0, 82, 172)
RED = (230, 41, 55)
MAROON = (190, 33, 55)
GREEN = (0, 228, 48)
DARKGREEN = (0, 117, 44)
YELLOW = (253, 249, 0)
ORANGE = (255, 161, 0)
DARKGRAY = (80, 80, 80)
DARKPURPLE = (112, 31, 126)

LOCAL_NAME = "You"


def _rgba(r: float, g: float, b: float, a: float) -> Tuple[int, int, int, int]:
    def channel(value: float) -> int:
        return round(min(max(value, 0.0), 1.0) * 255)

    return channel(r), channel(g), channel(b), channel(a)


@lru_cache(maxsize=None)
def _font(size: int) -> pygame.font.Font:
    if not pygame.font.get_init():
        pygame.font.init()
    return pygame.font.Font(None, size)


def _text_width(text: str, size: float) -> int:
    return _font(int(size)).size(text)[0]


def _text(surface: pygame.Surface, text: str, x: float, baseline: float, size: float, color) -> None:
    """Draw text whose baseline sits at ``baseline``."""
    font = _font(int(size))
    image = font.render(text, True, tuple(color[:3]))
    if len(color) == 4:
        image.set_alpha(color[3])
    surface.blit(image, (x, baseline - font.get_ascent()))


def _circle(surface: pygame.Surface, color, center, radius: float, width: int = 0) -> None:
    if radius <= 0:
        return
    if len(color) == 4 and color[3] < 255:
        size = int(math.ceil(radius)) * 2 + 2
        layer = pygame.Surface((size, size), pygame.SRCALPHA)
        pygame.draw.circle(layer, color, (size / 2, size / 2), radius, width)
        surface.blit(layer, (center[0] - size / 2, center[1] - size / 2))
    else:
        pygame.draw.circle(surface, tuple(color[:3]), center, radius, width)


def _rect(surface: pygame.Surface, color, x: float, y: float, w: float, h: float, width: int = 0) -> None:
    if w <= 0 or h <= 0:
        return
    pygame.draw.rect(surface, color, pygame.Rect(round(x), round(y), round(w), round(h)), width)


def leaderboard_entries(local_player: Player, remote_players: Iterable[Player]) -> List[Tuple[str, int]]:
    """Return the top players as ``(name, kills)``, most kills first.

    The local player is named "You" and comes first among equal scores.
    """
    entries = [(LOCAL_NAME, local_player.kills)]
    entries.extend((f"Player {p.id}", p.kills) for p in remote_players)
    ranked = sorted(entries, key=lambda entry: entry[1], reverse=True)
    return ranked[:UI_LEADERBOARD_MAX_ENTRIES]


def clear_screen(surface: pygame.Surface) -> None:
    surface.fill(WHITE)


def draw_ui(surface: pygame.Surface, local_player: Player, remote_players: Sequence[Player]) -> None:
    """Draw the player count, score, leaderboard and controls."""
    total = 1 + len(remote_players)
    _text(surface, f"Players Connected: {total}", UI_MARGIN, 30.0, UI_LINE_HEIGHT, BLACK)
    _text(surface, f"Your Kills: {local_player.kills}", UI_MARGIN, 50.0, UI_TEXT_SIZE_SMALL, DARKBLUE)

    _text(surface, "LEADERBOARD", UI_MARGIN, 90.0, UI_TEXT_SIZE_TINY, DARKGRAY)
    for rank, (name, kills) in enumerate(leaderboard_entries(local_player, remote_players), start=1):
        y = 110.0 + (rank - 1) * UI_SMALL_LINE_HEIGHT
        color = DARKBLUE if name == LOCAL_NAME else DARKGRAY
        _text(surface, f"{rank}. {name} - {kills} kills", UI_MARGIN, y, UI_TEXT_SIZE_MICRO, color)

    height = surface.get_height()
    controls = (
        ("ESC: Quit", height - 60.0),
        ("WASD: Move | Mouse: Aim & Shoot", height - 40.0),
        ("Space/Left Click: Shoot", height - 20.0),
    )
    for text, y in controls:
        _text(surface, text, UI_MARGIN, y, UI_TEXT_SIZE_TINY, DARKGRAY)


def draw_crosshair(surface: pygame.Surface, mouse_pos: Tuple[float, float]) -> None:
    x, y = mouse_pos
    size = 10.0
    _circle(surface, _rgba(0.0, 0.0, 0.0, 0.2), (x, y), 15.0)
    pygame.draw.line(surface, RED, (x - size, y), (x + size, y), 2)
    pygame.draw.line(surface, RED, (x, y - size), (x, y + size), 2)
    _circle(surface, RED, (x, y), 1.5)


def _draw_player_health_bar(surface: pygame.Surface, player: Player) -> None:
    bar_x = player.x - PLAYER_HEALTH_BAR_WIDTH / 2.0
    bar_y = player.y - 25.0
    _rect(surface, BLACK, bar_x, bar_y, PLAYER_HEALTH_BAR_WIDTH, PLAYER_HEALTH_BAR_HEIGHT)

    fraction = player.health / player.max_health
    if fraction > 0.6:
        color = GREEN
    elif fraction > 0.3:
        color = YELLOW
    else:
        color = RED
    _rect(surface, color, bar_x, bar_y, PLAYER_HEALTH_BAR_WIDTH * fraction, PLAYER_HEALTH_BAR_HEIGHT)
    _rect(surface, WHITE, bar_x, bar_y, PLAYER_HEALTH_BAR_WIDTH, PLAYER_HEALTH_BAR_HEIGHT, 1)

    text = f"{player.health}/{player.max_health}"
    width = _text_width(text, UI_TEXT_SIZE_NANO)
    _text(
        surface,
        text,
        bar_x + PLAYER_HEALTH_BAR_WIDTH / 2.0 - width / 2.0,
        bar_y + PLAYER_HEALTH_BAR_HEIGHT + UI_HEALTH_TEXT_OFFSET_Y,
        UI_HEALTH_TEXT_SIZE,
        WHITE,
    )


def _draw_player(surface: pygame.Surface, player: Player, is_local: bool) -> None:
    if player.is_alive:
        color = BLUE if is_local else RED
        arrow_color = DARKBLUE if is_local else MAROON
        _circle(surface, color, (player.x, player.y), PLAYER_RADIUS)
        end = (
            player.x + player.direction_x * PLAYER_ARROW_LENGTH,
            player.y + player.direction_y * PLAYER_ARROW_LENGTH,
        )
        pygame.draw.line(surface, arrow_color, (player.x, player.y), end, 2)
        _draw_player_health_bar(surface, player)
        if not is_local:
            text = f"K:{player.kills}"
            width = _text_width(text, UI_TEXT_SIZE_NANO)
            _text(surface, text, player.x - width / 2.0, player.y - 35.0, UI_TEXT_SIZE_NANO, WHITE)
        return

    ghost = (
        _rgba(0.5, 0.5, 0.5, ALPHA_GHOST_PLAYER)
        if is_local
        else _rgba(0.8, 0.2, 0.2, ALPHA_GHOST_PLAYER)
    )
    _circle(surface, ghost, (player.x, player.y), PLAYER_RADIUS)
    remaining = player.respawn_time_remaining()
    if remaining > 0.0:
        text = f"Respawning: {remaining:.1f}s"
        width = _text_width(text, UI_TEXT_SIZE_TINY)
        _text(surface, text, player.x - width / 2.0, player.y - 25.0, UI_TEXT_SIZE_TINY, WHITE)


def _draw_centered(surface: pygame.Surface, text: str, baseline: float, size: float, color) -> None:
    width = _text_width(text, size)
    _text(surface, text, surface.get_width() / 2.0 - width / 2.0, baseline, size, color)


def _draw_boss(surface: pygame.Surface, boss: Boss) -> None:
    if not boss.alive:
        remaining = boss.respawn_time_remaining()
        if remaining > 0.0:
            _draw_centered(
                surface, f"Boss respawning in: {remaining:.1f}s", 100.0, UI_TEXT_SIZE_LARGE, DARKGREEN
            )
        return

    center = (boss.x, boss.y)
    if boss.shield_active:
        _circle(surface, _rgba(0.0, 0.5, 1.0, ALPHA_SHIELD_EFFECT), center, BOSS_SHIELD_RADIUS)
        _circle(surface, BLUE, center, BOSS_SHIELD_RADIUS, 3)
    if boss.is_dashing:
        _circle(surface, _rgba(1.0, 0.5, 0.0, ALPHA_DASH_EFFECT), center, BOSS_DASH_EFFECT_RADIUS)
    _circle(surface, MAROON, center, BOSS_RADIUS)
    _circle(surface, RED, center, BOSS_INNER_RADIUS)

    bar_x = boss.x - BOSS_HEALTH_BAR_WIDTH / 2.0
    bar_y = boss.y - BOSS_HEALTH_BAR_OFFSET_Y
    _rect(surface, BLACK, bar_x, bar_y, BOSS_HEALTH_BAR_WIDTH, BOSS_HEALTH_BAR_HEIGHT)
    fraction = boss.health / boss.max_health
    _rect(surface, RED, bar_x, bar_y, BOSS_HEALTH_BAR_WIDTH * fraction, BOSS_HEALTH_BAR_HEIGHT)
    _rect(surface, WHITE, bar_x, bar_y, BOSS_HEALTH_BAR_WIDTH, BOSS_HEALTH_BAR_HEIGHT, 1)

    if boss.power_warning_time() > 0.0:
        _draw_centered(surface, "BOSS POWER INCOMING!", 50.0, UI_TEXT_SIZE_MEDIUM, ORANGE)
    if boss.dash_warning_time() > 0.0:
        _draw_centered(surface, "BOSS DASH INCOMING!", 70.0, UI_TEXT_SIZE_SMALL, YELLOW)


def _draw_area_attack(surface: pygame.Surface, attack: AreaAttack) -> None:
    progress = attack.progress()
    radius = AREA_ATTACK_MAX_RADIUS * (1.0 - progress)
    alpha = ALPHA_AREA_ATTACK * (1.0 - progress)
    center = (attack.x, attack.y)
    _circle(surface, _rgba(1.0, 0.3, 0.0, alpha), center, radius)
    _circle(surface, _rgba(1.0, 0.5, 0.0, alpha), center, radius, 3)
    if progress < AREA_ATTACK_WARNING_THRESHOLD:
        warning_alpha = (AREA_ATTACK_WARNING_THRESHOLD - progress) * 2.0
        _circle(surface, _rgba(1.0, 0.0, 0.0, warning_alpha), center, AREA_ATTACK_WARNING_RADIUS)


def _draw_bullet(surface: pygame.Surface, bullet: Bullet, local_player_id: int) -> None:
    center = (bullet.x, bullet.y)
    if bullet.is_boss_bullet:
        _circle(surface, MAROON, center, BULLET_BOSS_RADIUS)
        _circle(surface, ORANGE, center, BULLET_BOSS_INNER_RADIUS)
    else:
        color = DARKBLUE if bullet.owner_id == local_player_id else DARKPURPLE
        _circle(surface, color, center, BULLET_RADIUS)


def _draw_damage_indicator(surface: pygame.Surface, indicator: DamageIndicator) -> None:
    alpha = ALPHA_DAMAGE_FADE * (1.0 - indicator.progress())
    color = _rgba(1.0, 0.4, 0.0, alpha) if indicator.from_player else _rgba(1.0, 0.0, 0.0, alpha)
    text = f"-{indicator.damage}"
    width = _text_width(text, DAMAGE_INDICATOR_TEXT_SIZE)
    _text(surface, text, indicator.x - width / 2.0, indicator.y, DAMAGE_INDICATOR_TEXT_SIZE, color)


def draw_entities(
    surface: pygame.Surface,
    local_player: Player,
    remote_players: Sequence[Player],
    boss: Boss,
    bullets: Sequence[Bullet],
    area_attacks: Sequence[AreaAttack],
    damage_indicators: Sequence[DamageIndicator],
) -> None:
    """Draw every entity, back to front."""
    _draw_boss(surface, boss)
    _draw_player(surface, local_player, True)
    for player in remote_players:
        _draw_player(surface, player, False)
    for attack in area_attacks:
        _draw_area_attack(surface, attack)
    for bullet in bullets:
        _draw_bullet(surface, bullet, local_player.id)
    for indicator in damage_indicators:
        _draw_damage_indicator(surface, indicator)