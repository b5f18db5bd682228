"""Applying received network messages to the local game state."""

from __future__ import annotations

import logging
from typing import List

from .boss import Boss
from .bullet import Bullet
from .constants import Arena
from .effects import AreaAttack, DamageIndicator
from .payload import (
    BossAreaAttack,
    BossDash,
    BossDead,
    BossHit,
    BossMultiShoot,
    BossShield,
    BossShoot,
    BossSpawn,
    Join,
    Leave,
    Move,
    Payload,
    PlayerDirection,
    PlayerHit,
    PlayerKill,
    PlayerRespawn,
    Shoot,
)
from .player import Player

log = logging.getLogger(__name__)


def _find(players: List[Player], player_id: int):
    return next((p for p in players if p.id == player_id), None)


def _kill(player: Player) -> None:
    player.is_alive = False
    player.respawn_timer = 0.0


def handle_message(
    payload: Payload,
    local_player: Player,
    remote_players: List[Player],
    boss: Boss,
    bullets: List[Bullet],
    area_attacks: List[AreaAttack],
    damage_indicators: List[DamageIndicator],
    arena: Arena,
    audio=None,
) -> None:
    """Update the game state to reflect one message from the server."""
    match payload:
        case Move(player_id, x, y):
            player = _find(remote_players, player_id)
            if player is not None:
                player.x, player.y = x, y
            elif player_id != local_player.id:
                log.info("Adding player %s from move message (missed join?)", player_id)
                remote_players.append(Player(player_id, x, y))

        case Join(player_id):
            if player_id == local_player.id:
                log.info("Ignoring join message for local player %s", player_id)
            elif _find(remote_players, player_id) is not None:
                log.info("Player %s already exists, ignoring duplicate join", player_id)
            else:
                remote_players.append(Player.at_center(player_id, arena))
                if audio is not None:
                    audio.play_join()
                log.info(
                    "Player %s joined (total remote players: %d)",
                    player_id,
                    len(remote_players),
                )

        case Leave(player_id):
            before = len(remote_players)
            remote_players[:] = [p for p in remote_players if p.id != player_id]
            if len(remote_players) != before:
                log.info(
                    "Player %s left (remaining remote players: %d)",
                    player_id,
                    len(remote_players),
                )
            else:
                log.info("Received leave message for unknown player %s", player_id)

        case Shoot(player_id, x, y, direction_x, direction_y):
            if player_id != local_player.id:
                bullets.append(Bullet.from_player(x, y, direction_x, direction_y, player_id))

        case BossShoot(x, y, direction_x, direction_y):
            bullets.append(Bullet.from_boss(x, y, direction_x, direction_y))

        case PlayerHit(player_id, new_health, damage):
            if player_id == local_player.id:
                local_player.health = new_health
                if new_health == 0:
                    _kill(local_player)
            else:
                player = _find(remote_players, player_id)
                if player is not None:
                    player.health = new_health
                    if new_health == 0:
                        _kill(player)
                    damage_indicators.append(
                        DamageIndicator(player.x, player.y, damage, from_player=False)
                    )

        case BossHit(new_health):
            boss.health = new_health

        case BossSpawn(x, y):
            boss.x, boss.y = x, y
            boss.respawn(arena)

        case BossDead():
            boss.alive = False
            boss.health = 0
            boss.respawn_timer = 0.0

        case BossMultiShoot(x, y, directions):
            bullets.extend(Bullet.from_boss(x, y, dx, dy) for dx, dy in directions)

        case BossDash(target_x, target_y):
            boss.start_dash(target_x, target_y)

        case BossAreaAttack(center_x, center_y):
            attack = AreaAttack(center_x, center_y)
            area_attacks.append(attack)
            if local_player.is_alive and attack.affects_point(local_player.x, local_player.y):
                damage = attack.damage()
                local_player.take_damage(damage)
                damage_indicators.append(
                    DamageIndicator(local_player.x, local_player.y, damage, from_player=False)
                )

        case BossShield(active):
            if active:
                boss.activate_shield()
            else:
                boss.shield_active = False
                boss.shield_timer = 0.0

        case PlayerRespawn(player_id, x, y):
            if player_id != local_player.id:
                player = _find(remote_players, player_id)
                if player is not None:
                    player.x, player.y = x, y
                    player.health = player.max_health
                    player.is_alive = True
                    player.respawn_timer = 0.0
                    if audio is not None:
                        audio.play_respawn()

        case PlayerDirection(player_id, direction_x, direction_y):
            player = _find(remote_players, player_id)
            if player is not None:
                player.direction_x = direction_x
                player.direction_y = direction_y

        case PlayerKill(killer_id, victim_id):
            # The local player's own kills and deaths are already counted locally.
            if killer_id != local_player.id:
                killer = _find(remote_players, killer_id)
                if killer is not None:
                    killer.kills += 1
            if victim_id != local_player.id:
                victim = _find(remote_players, victim_id)
                if victim is not None:
                    _kill(victim)
                    victim.health = 0

        case _:
            raise TypeError(f"not a payload: {payload!r}")