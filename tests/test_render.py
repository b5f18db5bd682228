import pygame
import pytest

from dungeon import render
from dungeon.boss import Boss
from dungeon.bullet import Bullet
from dungeon.constants import UI_LEADERBOARD_MAX_ENTRIES
from dungeon.effects import AreaAttack, DamageIndicator
from dungeon.player import Player


@pytest.fixture
def surface():
    return pygame.Surface((800, 600))


def rgb(surface, pos):
    return tuple(surface.get_at(pos))[:3]


def test_leaderboard_sorted_and_capped():
    local = Player(1, 0.0, 0.0, kills=1)
    remotes = [Player(i, 0.0, 0.0, kills=k) for i, k in [(2, 3), (3, 0), (4, 2), (5, 5), (6, 4), (7, 1)]]
    entries = render.leaderboard_entries(local, remotes)
    assert len(entries) == UI_LEADERBOARD_MAX_ENTRIES
    assert entries == [
        ("Player 5", 5),
        ("Player 6", 4),
        ("Player 2", 3),
        ("Player 4", 2),
        ("You", 1),
    ]


def test_leaderboard_ties_keep_local_first():
    local = Player(1, 0.0, 0.0)
    remotes = [Player(9, 0.0, 0.0)]
    assert render.leaderboard_entries(local, remotes) == [("You", 0), ("Player 9", 0)]


def test_clear_screen_fills_white(surface):
    surface.fill(render.BLACK)
    render.clear_screen(surface)
    assert rgb(surface, (0, 0)) == render.WHITE
    assert rgb(surface, (799, 599)) == render.WHITE


def test_crosshair_center_and_shaded_background(surface):
    render.clear_screen(surface)
    render.draw_crosshair(surface, (50, 50))
    assert rgb(surface, (50, 50)) == render.RED
    shaded = rgb(surface, (62, 50))
    assert all(0 < channel < 255 for channel in shaded)
    assert rgb(surface, (200, 200)) == render.WHITE


def test_draw_ui_draws_text_in_corner(surface):
    render.clear_screen(surface)
    render.draw_ui(surface, Player(1, 0.0, 0.0), [Player(2, 0.0, 0.0)])
    corner = [rgb(surface, (x, y)) for x in range(0, 200) for y in range(0, 140)]
    assert any(pixel != render.WHITE for pixel in corner)
    assert rgb(surface, (700, 300)) == render.WHITE


def test_draw_entities_colours(surface):
    render.clear_screen(surface)
    local = Player(1, 400.0, 300.0)
    boss = Boss(400.0, 100.0)
    bullets = [
        Bullet.from_player(100.0, 500.0, 1.0, 0.0, 1),
        Bullet.from_player(200.0, 500.0, 1.0, 0.0, 2),
        Bullet.from_boss(300.0, 500.0, 1.0, 0.0),
    ]
    render.draw_entities(surface, local, [], boss, bullets, [], [])
    assert rgb(surface, (400, 100)) == render.RED
    assert rgb(surface, (400 + 55, 100)) == render.MAROON
    assert rgb(surface, (410, 300)) == render.BLUE
    assert rgb(surface, (100, 500)) == render.DARKBLUE
    assert rgb(surface, (200, 500)) == render.DARKPURPLE
    assert rgb(surface, (300, 500)) == render.ORANGE


def test_draw_entities_effects_change_pixels(surface):
    render.clear_screen(surface)
    local = Player(1, 50.0, 550.0)
    boss = Boss(400.0, 100.0, alive=False, health=0)
    ghost = Player(2, 700.0, 300.0, is_alive=False, health=0)
    attack = AreaAttack(600.0, 450.0)
    indicator = DamageIndicator(200.0, 300.0, 10)
    render.draw_entities(surface, local, [ghost], boss, [], [attack], [indicator])
    assert rgb(surface, (600, 450)) != render.WHITE
    assert rgb(surface, (700, 305)) != render.WHITE
    assert rgb(surface, (400, 150)) == render.WHITE