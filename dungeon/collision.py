"""Bullet and area-attack hit detection and the damage it causes."""

from __future__ import annotations

from typing import Callable, List, MutableSequence, Optional, Sequence

from .boss import Boss
from .bullet import Bullet
from .constants import BOSS_RADIUS, PLAYER_RADIUS
from .effects import AreaAttack, DamageIndicator
from .payload import BossDead, BossHit, Payload, PlayerHit, PlayerKill
from .player import Player

Send = Optional[Callable[[Payload], None]]


def _play_outcome(audio, died: bool) -> None:
    if audio is None:
        return
    if died:
        audio.play_explosion()
    else:
        audio.play_hit()


def _boss_bullet_hit(
    bullet: Bullet,
    local_player: Player,
    damage_indicators: List[DamageIndicator],
    send: Send,
    audio,
) -> bool:
    if not (
        local_player.is_alive
        and bullet.collides_with(local_player.x, local_player.y, PLAYER_RADIUS)
    ):
        return False
    damage = bullet.damage()
    died = local_player.take_damage(damage)
    _play_outcome(audio, died)
    damage_indicators.append(
        DamageIndicator(local_player.x, local_player.y, damage, from_player=False)
    )
    if send is not None:
        send(PlayerHit(local_player.id, local_player.health, damage))
    return True


def _player_bullet_hit(
    bullet: Bullet,
    local_player: Player,
    remote_players: Sequence[Player],
    boss: Boss,
    damage_indicators: List[DamageIndicator],
    send: Send,
    audio,
) -> bool:
    # The local player's bullet hitting someone else: the victim's client owns
    # their health, so only the hit is announced here.
    if bullet.owner_id == local_player.id:
        victim = next(
            (
                p
                for p in remote_players
                if p.is_alive and bullet.collides_with(p.x, p.y, PLAYER_RADIUS)
            ),
            None,
        )
        if victim is not None:
            if send is not None:
                damage = bullet.damage()
                new_health = max(victim.health - damage, 0)
                send(PlayerHit(victim.id, new_health, damage))
                _play_outcome(audio, new_health == 0)
                if new_health == 0:
                    local_player.kills += 1
                    send(PlayerKill(local_player.id, victim.id))
            return True

    # Someone else's bullet hitting the local player.
    if (
        bullet.owner_id != local_player.id
        and local_player.is_alive
        and bullet.collides_with(local_player.x, local_player.y, PLAYER_RADIUS)
    ):
        damage = bullet.damage()
        died = local_player.take_damage(damage)
        _play_outcome(audio, died)
        if died:
            shooter = next((p for p in remote_players if p.id == bullet.owner_id), None)
            if shooter is not None:
                shooter.kills += 1
        damage_indicators.append(
            DamageIndicator(local_player.x, local_player.y, damage, from_player=True)
        )
        if send is not None:
            send(PlayerHit(local_player.id, local_player.health, damage))
        return True

    # Any player's bullet hitting the boss.
    if boss.alive and bullet.collides_with(boss.x, boss.y, BOSS_RADIUS):
        boss_died = boss.take_damage(bullet.damage())
        _play_outcome(audio, boss_died)
        damage_indicators.append(
            DamageIndicator(boss.x, boss.y, bullet.damage(), from_player=False)
        )
        if send is not None:
            send(BossDead() if boss_died else BossHit(boss.health))
        return True

    return False


def check_bullet_collisions(
    bullets: MutableSequence[Bullet],
    local_player: Player,
    remote_players: Sequence[Player],
    boss: Boss,
    damage_indicators: List[DamageIndicator],
    send: Send = None,
    audio=None,
) -> int:
    """Apply every bullet hit and remove the bullets that hit something.

    Returns the number of bullets removed.
    """
    survivors = []
    for bullet in bullets:
        if bullet.is_boss_bullet:
            hit = _boss_bullet_hit(bullet, local_player, damage_indicators, send, audio)
        else:
            hit = _player_bullet_hit(
                bullet, local_player, remote_players, boss, damage_indicators, send, audio
            )
        if not hit:
            survivors.append(bullet)
    removed = len(bullets) - len(survivors)
    bullets[:] = survivors
    return removed


def check_area_attack_collisions(
    area_attacks: Sequence[AreaAttack],
    local_player: Player,
    damage_indicators: List[DamageIndicator],
    send: Send = None,
    audio=None,
) -> None:
    """Damage the local player once for every area attack that covers it."""
    for attack in area_attacks:
        if not (local_player.is_alive and attack.affects_point(local_player.x, local_player.y)):
            continue
        damage = attack.damage()
        died = local_player.take_damage(damage)
        _play_outcome(audio, died)
        damage_indicators.append(
            DamageIndicator(local_player.x, local_player.y, damage, from_player=False)
        )
        if send is not None:
            send(PlayerHit(local_player.id, local_player.health, damage))