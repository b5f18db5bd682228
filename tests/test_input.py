import pytest

from dungeon.bullet import Bullet
from dungeon.constants import (
    BULLET_PLAYER_SPEED,
    PLAYER_RADIUS,
    PLAYER_RESPAWN_TIME,
    PLAYER_SPEED,
    Arena,
)
from dungeon.input import InputState, update_player_input
from dungeon.payload import PlayerDirection, PlayerRespawn, Shoot
from dungeon.player import Player


class FakeAudio:
    def __init__(self):
        self.calls = []

    def play_respawn(self):
        self.calls.append("respawn")

    def play_player_shoot(self):
        self.calls.append("shoot")


@pytest.fixture
def arena():
    return Arena()


def test_dead_player_waits_before_respawning(arena):
    player = Player(1, 100.0, 100.0, is_alive=False, health=0)
    sent = []
    moved = update_player_input(
        player, [], InputState(left=True), 1.0, arena, sent.append, None
    )
    assert moved is False
    assert player.is_alive is False
    assert player.respawn_timer == pytest.approx(1.0)
    assert sent == []


def test_dead_player_respawns_and_announces(arena):
    player = Player(1, 100.0, 100.0, is_alive=False, health=0)
    sent = []
    audio = FakeAudio()
    update_player_input(player, [], InputState(), PLAYER_RESPAWN_TIME, arena, sent.append, audio)
    assert player.is_alive
    assert player.health == player.max_health
    assert PLAYER_RADIUS <= player.x <= arena.width - PLAYER_RADIUS
    assert arena.height / 2.0 <= player.y <= arena.height - PLAYER_RADIUS
    assert sent == [PlayerRespawn(1, player.x, player.y)]
    assert audio.calls == ["respawn"]


def test_aiming_at_mouse_sends_direction_once(arena):
    player = Player(3, 100.0, 100.0)
    sent = []
    state = InputState(mouse=(200.0, 100.0))
    update_player_input(player, [], state, 0.016, arena, sent.append)
    assert (player.direction_x, player.direction_y) == (1.0, 0.0)
    assert sent == [PlayerDirection(3, 1.0, 0.0)]
    update_player_input(player, [], state, 0.016, arena, sent.append)
    assert len(sent) == 1


def test_mouse_on_player_keeps_direction(arena):
    player = Player(3, 100.0, 100.0)
    sent = []
    update_player_input(player, [], InputState(mouse=(100.0, 100.0)), 0.016, arena, sent.append)
    assert (player.direction_x, player.direction_y) == (0.0, -1.0)
    assert sent == []


def test_shooting_adds_bullet_and_message(arena):
    player = Player(4, 300.0, 200.0)
    bullets: list[Bullet] = []
    sent = []
    audio = FakeAudio()
    state = InputState(shoot=True, mouse=(300.0, 100.0))
    update_player_input(player, bullets, state, 0.016, arena, sent.append, audio)
    assert len(bullets) == 1
    bullet = bullets[0]
    assert bullet.owner_id == 4
    assert not bullet.is_boss_bullet
    assert bullet.velocity_y == pytest.approx(-BULLET_PLAYER_SPEED)
    assert sent[-1] == Shoot(4, 300.0, 200.0, player.direction_x, player.direction_y)
    assert audio.calls == ["shoot"]


def test_movement_uses_speed_and_reports_moving(arena):
    player = Player(1, 100.0, 100.0)
    moved = update_player_input(player, [], InputState(left=True, down=True), 0.1, arena)
    assert moved is True
    assert player.x == pytest.approx(100.0 - PLAYER_SPEED * 0.1)
    assert player.y == pytest.approx(100.0 + PLAYER_SPEED * 0.1)


def test_opposite_keys_cancel_out(arena):
    player = Player(1, 100.0, 100.0)
    moved = update_player_input(player, [], InputState(left=True, right=True), 0.1, arena)
    assert moved is True
    assert player.x == pytest.approx(100.0)


def test_no_keys_means_no_movement(arena):
    player = Player(1, 100.0, 100.0)
    assert update_player_input(player, [], InputState(), 0.1, arena) is False
    assert (player.x, player.y) == (100.0, 100.0)


def test_movement_is_clamped_to_arena(arena):
    player = Player(1, PLAYER_RADIUS, PLAYER_RADIUS)
    update_player_input(player, [], InputState(left=True, up=True), 0.5, arena)
    assert (player.x, player.y) == (PLAYER_RADIUS, PLAYER_RADIUS)