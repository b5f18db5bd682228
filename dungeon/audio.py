"""Sound effects for game events."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Mapping, Union


class SoundType(Enum):
    """The sound effects the game can play."""

    PLAYER_SHOOT = "assets/bullet.wav"
    BOSS_SHOOT = "assets/boss_bullet.wav"
    HIT = "assets/hit.wav"
    EXPLOSION = "assets/explosion.wav"
    JOIN = "assets/join.wav"
    POWER_UP = "assets/powerup.wav"
    DASH = "assets/dash.wav"

    def file_path(self) -> str:
        """Path of the sound file, relative to the game's directory."""
        return self.value


@dataclass
class AudioSystem:
    """Holds the loaded sounds and plays them on demand."""

    sounds: Mapping[SoundType, Any] = field(default_factory=dict)

    @classmethod
    def load(cls, base_dir: Union[str, Path] = ".") -> "AudioSystem":
        """Start the mixer and load every sound that can be found.

        A sound that fails to load is reported and left out. Raises
        ``pygame.error`` if the mixer itself cannot start.
        """
        import pygame

        if not pygame.mixer.get_init():
            pygame.mixer.init()
        base = Path(base_dir)
        sounds = {}
        for sound_type in SoundType:
            path = base / sound_type.file_path()
            try:
                sounds[sound_type] = pygame.mixer.Sound(str(path))
            except (pygame.error, FileNotFoundError) as exc:
                print(f"Failed to load sound {sound_type.file_path()}: {exc}", file=sys.stderr)
        return cls(sounds)

    def play(self, sound_type: SoundType, volume: float = 1.0) -> None:
        """Play a sound once at the given volume; missing sounds are reported."""
        sound = self.sounds.get(sound_type)
        if sound is None:
            print(f"Sound not found: {sound_type.name}", file=sys.stderr)
            return
        channel = sound.play()
        if channel is not None:
            channel.set_volume(volume)

    def play_player_shoot(self) -> None:
        self.play(SoundType.PLAYER_SHOOT, 0.7)

    def play_boss_shoot(self) -> None:
        self.play(SoundType.BOSS_SHOOT, 0.8)

    def play_hit(self) -> None:
        self.play(SoundType.HIT, 0.6)

    def play_explosion(self) -> None:
        self.play(SoundType.EXPLOSION, 0.9)

    def play_join(self) -> None:
        self.play(SoundType.JOIN, 0.5)

    def play_power_up(self) -> None:
        self.play(SoundType.POWER_UP, 0.8)

    def play_boss_multi_shot(self) -> None:
        self.play_power_up()

    def play_boss_area_attack(self) -> None:
        self.play_power_up()

    def play_boss_shield(self) -> None:
        self.play_power_up()

    def play_boss_dash(self) -> None:
        self.play(SoundType.DASH, 0.9)

    def play_respawn(self) -> None:
        self.play_join()