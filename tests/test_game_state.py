import queue

import pygame
import pytest

from dungeon.bullet import Bullet
from dungeon.constants import BOSS_DASH_INTERVAL, BOSS_POWER_INTERVAL, BOSS_SHOOT_INTERVAL, Arena
from dungeon.game_state import GameState
from dungeon.input import InputState
from dungeon.payload import (
    BossAreaAttack,
    BossDash,
    BossDead,
    BossMultiShoot,
    BossShield,
    BossShoot,
    BossSpawn,
    Join,
    Leave,
    Move,
    PlayerHit,
    Shoot,
)
from dungeon.player import Player


@pytest.fixture
def game():
    sent = []
    state = GameState(1, Arena(), send=sent.append)
    state.sent = sent
    return state


def test_game_state_creation():
    game_state = GameState(1)
    assert game_state.local_player.id == 1
    assert len(game_state.remote_players) == 0
    assert len(game_state.bullets) == 0
    assert game_state.boss.alive


def test_find_nearest_player_to_boss():
    # Boss spawns at (100, 100) in this arena.
    game_state = GameState(1, Arena(200.0, 200.0))
    players = [Player(2, 100.0, 100.0), Player(3, 200.0, 200.0)]
    nearest = game_state.find_nearest_player_to_boss(players)
    assert nearest is not None
    assert nearest.id == 2


def test_find_nearest_ignores_dead_players():
    game_state = GameState(1, Arena(200.0, 200.0))
    dead = Player(2, 100.0, 100.0, is_alive=False)
    assert game_state.find_nearest_player_to_boss([dead]) is None


def test_update_input_moves_player(game):
    moved = game.update_input(InputState(right=True), 0.1)
    assert moved is True
    assert game.local_player.x == pytest.approx(420.0)


def test_update_input_shoot_sends_and_spawns_bullet(game):
    game.update_input(InputState(shoot=True), 0.0)
    assert len(game.bullets) == 1
    assert game.bullets[0].owner_id == 1
    assert game.sent == [Shoot(1, 400.0, 300.0, 0.0, -1.0)]


def test_expired_bullet_removed(game):
    bullet = Bullet.from_boss(10.0, 10.0, 1.0, 0.0)
    bullet.lifetime = 0.05
    game.bullets.append(bullet)
    game.update_entities(0.1)
    assert bullet not in game.bullets


def test_remote_bullet_hits_local_player(game):
    game.remote_players.append(Player(2, 100.0, 500.0))
    game.bullets.append(Bullet.from_player(400.0, 300.0, 1.0, 0.0, 2))
    game.update_entities(0.0)
    assert game.bullets == []
    assert game.local_player.health == 85
    assert game.damage_indicators[-1].from_player is True
    assert PlayerHit(1, 85, 15) in game.sent


def test_remote_player_respawn_timer_advances(game):
    game.remote_players.append(Player(2, 100.0, 500.0, is_alive=False))
    game.update_entities(0.25)
    assert game.remote_players[0].respawn_timer == pytest.approx(0.25)


def test_boss_shoots_at_nearest_player(game):
    game.boss.shoot_timer = BOSS_SHOOT_INTERVAL
    game.update_entities(0.0)
    shots = [p for p in game.sent if isinstance(p, BossShoot)]
    assert shots == [BossShoot(400.0, 100.0, 0.0, 1.0)]
    assert [b.is_boss_bullet for b in game.bullets] == [True]
    assert game.boss.shoot_timer == 0.0


def test_boss_dash_targets_player(game):
    game.boss.dash_timer = BOSS_DASH_INTERVAL
    game.update_entities(0.0)
    assert game.boss.is_dashing
    assert BossDash(400.0, 300.0) in game.sent


def test_boss_power_uses_one_ability(game):
    game.boss.power_timer = BOSS_POWER_INTERVAL
    game.update_entities(0.0)
    assert game.boss.power_timer == 0.0
    kinds = [p for p in game.sent if isinstance(p, (BossMultiShoot, BossAreaAttack, BossShield))]
    assert len(kinds) == 1
    used = kinds[0]
    if isinstance(used, BossMultiShoot):
        assert len(used.directions) == 5
        assert len(game.bullets) == 5
    elif isinstance(used, BossAreaAttack):
        assert used == BossAreaAttack(400.0, 300.0)
        assert game.local_player.health == 80
        assert len(game.area_attacks) == 1
    else:
        assert used == BossShield(True)
        assert game.boss.shield_active


def test_boss_respawns(game):
    game.boss.alive = False
    game.boss.health = 0
    game.boss.respawn_timer = 5.0
    game.update_entities(0.0)
    assert game.boss.alive
    assert game.boss.health == 500
    assert BossSpawn(400.0, 100.0) in game.sent


def test_boss_does_not_respawn_without_players(game):
    game.local_player.is_alive = False
    game.boss.alive = False
    game.boss.respawn_timer = 5.0
    game.update_entities(0.0)
    assert game.boss.alive is False
    assert not any(isinstance(p, BossSpawn) for p in game.sent)


def test_process_network_messages_applies_payloads(game):
    inbox = queue.Queue()
    inbox.put(Join(2))
    inbox.put(BossDead())
    game.process_network_messages(inbox)
    assert [p.id for p in game.remote_players] == [2]
    assert game.boss.alive is False


def test_process_network_messages_limits_per_frame(game):
    inbox = queue.Queue()
    for i in range(150):
        inbox.put(Move(100 + i, 1.0, 1.0))
    game.process_network_messages(inbox)
    assert len(game.remote_players) == 101
    assert inbox.qsize() == 49


def test_send_leave_message(game):
    game.send_leave_message()
    assert game.sent == [Leave(1)]


def test_draw_paints_background_player_and_crosshair(game):
    surface = pygame.Surface((800, 600))
    game.draw(surface, (700, 500))
    assert tuple(surface.get_at((790, 590)))[:3] == (255, 255, 255)
    assert tuple(surface.get_at((700, 500)))[:3] == (230, 41, 55)
    assert tuple(surface.get_at((408, 305)))[:3] == (0, 121, 241)