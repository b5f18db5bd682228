import pytest

from dungeon.bullet import Bullet
from dungeon.constants import (
    BULLET_BOSS_LIFETIME,
    BULLET_BOSS_SPEED,
    BULLET_PLAYER_LIFETIME,
    BULLET_PLAYER_SPEED,
    PLAYER_RADIUS,
    Arena,
)
from dungeon.player import Player

ARENA = Arena(800.0, 600.0)


def test_bullet_player_collision():
    player = Player(1, 100.0, 100.0)
    bullet = Bullet.from_player(100.0, 100.0, 1.0, 0.0, 2)
    assert bullet.collides_with(player.x, player.y, PLAYER_RADIUS)


def test_player_bullet_fields():
    bullet = Bullet.from_player(1.0, 2.0, 1.0, 0.0, 7)
    assert bullet.velocity_x == BULLET_PLAYER_SPEED
    assert bullet.velocity_y == 0.0
    assert bullet.lifetime == BULLET_PLAYER_LIFETIME
    assert bullet.owner_id == 7
    assert not bullet.is_boss_bullet


def test_boss_bullet_fields():
    bullet = Bullet.from_boss(1.0, 2.0, 0.0, -1.0)
    assert bullet.velocity_y == -BULLET_BOSS_SPEED
    assert bullet.lifetime == BULLET_BOSS_LIFETIME
    assert bullet.owner_id == 0
    assert bullet.is_boss_bullet


def test_damage_by_kind():
    assert Bullet.from_player(0.0, 0.0, 1.0, 0.0, 1).damage() == 15
    assert Bullet.from_boss(0.0, 0.0, 1.0, 0.0).damage() == 10


def test_collision_radius_depends_on_kind():
    player_bullet = Bullet.from_player(0.0, 0.0, 1.0, 0.0, 1)
    boss_bullet = Bullet.from_boss(0.0, 0.0, 1.0, 0.0)
    assert player_bullet.collides_with(18.0, 0.0, PLAYER_RADIUS)
    assert not player_bullet.collides_with(19.0, 0.0, PLAYER_RADIUS)
    assert boss_bullet.collides_with(19.0, 0.0, PLAYER_RADIUS)


def test_update_moves_and_keeps_live_bullet():
    bullet = Bullet.from_player(400.0, 300.0, 1.0, 0.0, 1)
    assert bullet.update(0.1, ARENA) is False
    assert bullet.x > 400.0
    assert bullet.y == 300.0
    assert bullet.lifetime < BULLET_PLAYER_LIFETIME


def test_update_removes_expired_bullet():
    bullet = Bullet.from_player(400.0, 300.0, 0.0, 0.0, 1)
    assert bullet.update(BULLET_PLAYER_LIFETIME, ARENA) is True


def test_update_removes_off_screen_bullet():
    bullet = Bullet.from_player(5.0, 300.0, -1.0, 0.0, 1)
    assert bullet.update(0.1, ARENA) is True


def test_distance_to():
    assert Bullet.from_boss(0.0, 0.0, 1.0, 0.0).distance_to(6.0, 8.0) == pytest.approx(10.0)