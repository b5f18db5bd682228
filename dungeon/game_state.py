"""The client-side game: entities, boss AI and the per-frame loop."""

from __future__ import annotations

import math
import queue
import sys
from typing import Callable, List, Optional, Sequence, Tuple

import pygame

from . import render
from .audio import AudioSystem
from .boss import Boss, nearest_player
from .bullet import Bullet
from .collision import check_bullet_collisions
from .constants import (
    MULTI_SHOT_ANGLE_RANGE,
    MULTI_SHOT_SPREAD_ANGLE,
    NETWORK_MAX_MESSAGES_PER_FRAME,
    Arena,
)
from .effects import AreaAttack, DamageIndicator
from .input import InputState, update_player_input
from .messages import handle_message
from .payload import (
    BossAreaAttack,
    BossDash,
    BossMultiShoot,
    BossShield,
    BossShoot,
    BossSpawn,
    Join,
    Leave,
    Move,
    Payload,
    PlayerHit,
)
from .player import Player
from .rng import gen_range

Send = Optional[Callable[[Payload], None]]


def _advance(items: list, step: Callable) -> None:
    """Run ``step`` on every item and keep those it does not report finished."""
    items[:] = [item for item in items if not step(item)]


class GameState:
    """All entities of one client and the logic that drives them each frame."""

    def __init__(
        self,
        player_id: int,
        arena: Optional[Arena] = None,
        send: Send = None,
        audio: Optional[AudioSystem] = None,
    ) -> None:
        self.arena = arena if arena is not None else Arena()
        self.local_player = Player.at_center(player_id, self.arena)
        self.remote_players: List[Player] = []
        self.bullets: List[Bullet] = []
        self.boss = Boss.at_spawn(self.arena)
        self.area_attacks: List[AreaAttack] = []
        self.damage_indicators: List[DamageIndicator] = []
        self.send = send
        self.audio = audio

    def _send(self, payload: Payload) -> None:
        if self.send is not None:
            self.send(payload)

    def update_input(self, state: InputState, dt: float) -> bool:
        """Apply one frame of controls; return whether the local player moved."""
        return update_player_input(
            self.local_player, self.bullets, state, dt, self.arena, self.send, self.audio
        )

    def update_entities(self, dt: float) -> None:
        """Advance every entity by ``dt`` seconds and resolve bullet hits."""
        _advance(self.bullets, lambda bullet: bullet.update(dt, self.arena))
        _advance(self.area_attacks, lambda attack: attack.update(dt))
        _advance(self.damage_indicators, lambda indicator: indicator.update(dt))
        for player in self.remote_players:
            player.update_respawn(dt)

        self._update_boss(dt)

        check_bullet_collisions(
            self.bullets,
            self.local_player,
            self.remote_players,
            self.boss,
            self.damage_indicators,
            self.send,
            self.audio,
        )

    def _update_boss(self, dt: float) -> None:
        players = [self.local_player] if self.local_player.is_alive else []
        players.extend(p for p in self.remote_players if p.is_alive)

        self.boss.update(dt, players, self.arena)
        if not players:
            return

        self._handle_boss_powers(players)
        self._handle_boss_dash(players)
        self._handle_boss_shooting(players)
        self._handle_boss_respawn()

    def _handle_boss_powers(self, players: Sequence[Player]) -> None:
        if not self.boss.should_use_power():
            return
        power = gen_range(0, 3)
        if power == 0:
            self._boss_multi_shot(players)
        elif power == 1:
            self._boss_area_attack(players)
        else:
            self._boss_shield()
        self.boss.reset_power_timer()

    def _boss_multi_shot(self, players: Sequence[Player]) -> None:
        target = self.find_nearest_player_to_boss(players)
        if target is None:
            return
        boss = self.boss
        dx = target.x - boss.x
        dy = target.y - boss.y
        directions: List[Tuple[float, float]] = []
        if math.hypot(dx, dy) > 0.0:
            base_angle = math.atan2(dy, dx)
            for step in MULTI_SHOT_ANGLE_RANGE:
                angle = base_angle + step * MULTI_SHOT_SPREAD_ANGLE
                directions.append((math.cos(angle), math.sin(angle)))
        self.bullets.extend(Bullet.from_boss(boss.x, boss.y, ddx, ddy) for ddx, ddy in directions)
        if self.audio is not None:
            self.audio.play_boss_multi_shot()
        self._send(BossMultiShoot(boss.x, boss.y, tuple(directions)))

    def _boss_area_attack(self, players: Sequence[Player]) -> None:
        target = self.find_nearest_player_to_boss(players)
        if target is None:
            return
        center_x, center_y = target.x, target.y
        attack = AreaAttack(center_x, center_y)
        local = self.local_player
        if local.is_alive and attack.affects_point(local.x, local.y):
            damage = attack.damage()
            local.take_damage(damage)
            self.damage_indicators.append(
                DamageIndicator(local.x, local.y, damage, from_player=False)
            )
            self._send(PlayerHit(local.id, local.health, damage))
        self.area_attacks.append(attack)
        if self.audio is not None:
            self.audio.play_boss_area_attack()
        self._send(BossAreaAttack(center_x, center_y))

    def _boss_shield(self) -> None:
        self.boss.activate_shield()
        if self.audio is not None:
            self.audio.play_boss_shield()
        self._send(BossShield(True))

    def _handle_boss_dash(self, players: Sequence[Player]) -> None:
        if not self.boss.should_dash():
            return
        target = self.find_nearest_player_to_boss(players)
        if target is None:
            return
        self.boss.start_dash(target.x, target.y)
        if self.audio is not None:
            self.audio.play_boss_dash()
        self._send(BossDash(target.x, target.y))

    def _handle_boss_shooting(self, players: Sequence[Player]) -> None:
        boss = self.boss
        if not boss.should_shoot() or boss.is_dashing:
            return
        target = self.find_nearest_player_to_boss(players)
        if target is not None:
            dx = target.x - boss.x
            dy = target.y - boss.y
            distance = math.hypot(dx, dy)
            if distance > 0.0:
                direction_x = dx / distance
                direction_y = dy / distance
                self.bullets.append(Bullet.from_boss(boss.x, boss.y, direction_x, direction_y))
                if self.audio is not None:
                    self.audio.play_boss_shoot()
                self._send(BossShoot(boss.x, boss.y, direction_x, direction_y))
        boss.reset_shoot_timer()

    def _handle_boss_respawn(self) -> None:
        if not self.boss.should_respawn():
            return
        self.boss.respawn(self.arena)
        if self.audio is not None:
            self.audio.play_respawn()
        self._send(BossSpawn(self.boss.x, self.boss.y))

    def find_nearest_player_to_boss(self, players: Sequence[Player]) -> Optional[Player]:
        """Return the living player closest to the boss, or None."""
        return nearest_player(players, self.boss.x, self.boss.y)

    def process_network_messages(self, inbox: "queue.Queue[Payload]") -> None:
        """Apply waiting messages without blocking, up to a per-frame limit."""
        processed = 0
        while True:
            try:
                payload = inbox.get_nowait()
            except queue.Empty:
                break
            handle_message(
                payload,
                self.local_player,
                self.remote_players,
                self.boss,
                self.bullets,
                self.area_attacks,
                self.damage_indicators,
                self.arena,
                self.audio,
            )
            processed += 1
            if processed > NETWORK_MAX_MESSAGES_PER_FRAME:
                break

    def draw(self, surface: pygame.Surface, mouse_pos: Tuple[float, float]) -> None:
        """Draw the whole frame onto ``surface``."""
        render.clear_screen(surface)
        render.draw_ui(surface, self.local_player, self.remote_players)
        render.draw_entities(
            surface,
            self.local_player,
            self.remote_players,
            self.boss,
            self.bullets,
            self.area_attacks,
            self.damage_indicators,
        )
        render.draw_crosshair(surface, mouse_pos)

    def send_leave_message(self) -> None:
        self._send(Leave(self.local_player.id))


def _read_controls() -> InputState:
    shoot = False
    quit_requested = False
    for event in pygame.event.get():
        if event.type == pygame.QUIT:
            quit_requested = True
        elif event.type == pygame.KEYDOWN:
            if event.key == pygame.K_ESCAPE:
                quit_requested = True
            elif event.key == pygame.K_SPACE:
                shoot = True
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            shoot = True
    keys = pygame.key.get_pressed()
    return InputState(
        left=bool(keys[pygame.K_LEFT] or keys[pygame.K_a]),
        right=bool(keys[pygame.K_RIGHT] or keys[pygame.K_d]),
        up=bool(keys[pygame.K_UP] or keys[pygame.K_w]),
        down=bool(keys[pygame.K_DOWN] or keys[pygame.K_s]),
        shoot=shoot,
        quit=quit_requested,
        mouse=pygame.mouse.get_pos(),
    )


def run_client_game(
    outbox: "queue.Queue[Payload]", inbox: "queue.Queue[Payload]", player_id: int
) -> None:
    """Open the game window and run frames until the player quits."""
    pygame.init()
    default = Arena()
    screen = pygame.display.set_mode((int(default.width), int(default.height)))
    pygame.display.set_caption("Dungeon")
    pygame.mouse.set_visible(True)
    width, height = screen.get_size()

    game = GameState(player_id, Arena(float(width), float(height)), send=outbox.put)
    try:
        game.audio = AudioSystem.load()
        print("Audio system initialized successfully")
    except pygame.error as exc:
        print(f"Failed to initialize audio system: {exc}", file=sys.stderr)
        print("Game will continue without sound effects", file=sys.stderr)

    outbox.put(Join(game.local_player.id))
    clock = pygame.time.Clock()
    try:
        while True:
            dt = clock.tick(60) / 1000.0
            state = _read_controls()
            if game.update_input(state, dt):
                player = game.local_player
                outbox.put(Move(player.id, player.x, player.y))
            game.update_entities(dt)
            game.process_network_messages(inbox)
            game.draw(screen, state.mouse if state.mouse is not None else (0.0, 0.0))
            pygame.display.flip()
            if state.quit:
                game.send_leave_message()
                break
    finally:
        pygame.quit()