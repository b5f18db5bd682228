"""Network messages and their wire format.

Each message is encoded as a little-endian ``u32`` variant tag followed by
its fields: ``u32`` integers, ``f32`` floats, one-byte booleans, and for
lists a ``u64`` length followed by the items. On the socket every message
is preceded by its byte length as a little-endian ``u32``.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass, fields
from functools import lru_cache
from typing import ClassVar, Union

_HEADER = struct.Struct("<I")
_LENGTH = struct.Struct("<Q")
_PAIR = struct.Struct("<ff")


class DecodeError(ValueError):
    """Raised when bytes do not hold a valid message."""


@dataclass(frozen=True)
class Move:
    player_id: int
    x: float
    y: float
    _layout: ClassVar[str] = "Iff"


@dataclass(frozen=True)
class Join:
    player_id: int
    _layout: ClassVar[str] = "I"


@dataclass(frozen=True)
class Leave:
    player_id: int
    _layout: ClassVar[str] = "I"


@dataclass(frozen=True)
class Shoot:
    player_id: int
    x: float
    y: float
    direction_x: float
    direction_y: float
    _layout: ClassVar[str] = "Iffff"


@dataclass(frozen=True)
class BossShoot:
    x: float
    y: float
    direction_x: float
    direction_y: float
    _layout: ClassVar[str] = "ffff"


@dataclass(frozen=True)
class PlayerHit:
    player_id: int
    new_health: int
    damage: int
    _layout: ClassVar[str] = "III"


@dataclass(frozen=True)
class BossHit:
    new_health: int
    _layout: ClassVar[str] = "I"


@dataclass(frozen=True)
class BossSpawn:
    x: float
    y: float
    _layout: ClassVar[str] = "ff"


@dataclass(frozen=True)
class BossDead:
    _layout: ClassVar[str] = ""


@dataclass(frozen=True)
class BossMultiShoot:
    x: float
    y: float
    directions: tuple[tuple[float, float], ...] = ()
    _layout: ClassVar[str] = "ff"

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "directions", tuple((dx, dy) for dx, dy in self.directions)
        )


@dataclass(frozen=True)
class BossDash:
    target_x: float
    target_y: float
    _layout: ClassVar[str] = "ff"


@dataclass(frozen=True)
class BossAreaAttack:
    center_x: float
    center_y: float
    _layout: ClassVar[str] = "ff"


@dataclass(frozen=True)
class BossShield:
    active: bool
    _layout: ClassVar[str] = "?"


@dataclass(frozen=True)
class PlayerRespawn:
    player_id: int
    x: float
    y: float
    _layout: ClassVar[str] = "Iff"


@dataclass(frozen=True)
class PlayerDirection:
    player_id: int
    direction_x: float
    direction_y: float
    _layout: ClassVar[str] = "Iff"


@dataclass(frozen=True)
class PlayerKill:
    killer_id: int
    victim_id: int
    _layout: ClassVar[str] = "II"


Payload = Union[
    Move,
    Join,
    Leave,
    Shoot,
    BossShoot,
    PlayerHit,
    BossHit,
    BossSpawn,
    BossDead,
    BossMultiShoot,
    BossDash,
    BossAreaAttack,
    BossShield,
    PlayerRespawn,
    PlayerDirection,
    PlayerKill,
]

# The position in this tuple is the variant tag on the wire.
_VARIANTS: tuple[type, ...] = (
    Move,
    Join,
    Leave,
    Shoot,
    BossShoot,
    PlayerHit,
    BossHit,
    BossSpawn,
    BossDead,
    BossMultiShoot,
    BossDash,
    BossAreaAttack,
    BossShield,
    PlayerRespawn,
    PlayerDirection,
    PlayerKill,
)
_TAGS = {cls: tag for tag, cls in enumerate(_VARIANTS)}


@lru_cache(maxsize=None)
def _struct_for(layout: str) -> struct.Struct:
    return struct.Struct("<" + layout.replace("?", "B"))


def encode(payload: Payload) -> bytes:
    """Encode a message body without the length prefix."""
    tag = _TAGS.get(type(payload))
    if tag is None:
        raise TypeError(f"not a payload: {payload!r}")
    layout = payload._layout
    names = [f.name for f in fields(payload)][: len(layout)]
    values = [
        int(getattr(payload, name)) if code == "?" else getattr(payload, name)
        for code, name in zip(layout, names)
    ]
    try:
        parts = [_HEADER.pack(tag), _struct_for(layout).pack(*values)]
        if isinstance(payload, BossMultiShoot):
            parts.append(_LENGTH.pack(len(payload.directions)))
            parts.extend(_PAIR.pack(dx, dy) for dx, dy in payload.directions)
    except (struct.error, OverflowError) as exc:
        raise ValueError(f"cannot encode {payload!r}: {exc}") from exc
    return b"".join(parts)


def decode(data: bytes) -> Payload:
    """Decode a message body; bytes after the message are ignored."""
    data = bytes(data)
    if len(data) < _HEADER.size:
        raise DecodeError("truncated variant tag")
    (tag,) = _HEADER.unpack_from(data)
    if tag >= len(_VARIANTS):
        raise DecodeError(f"unknown variant tag {tag}")
    cls = _VARIANTS[tag]
    layout = cls._layout
    body = _struct_for(layout)
    offset = _HEADER.size
    if len(data) < offset + body.size:
        raise DecodeError(f"truncated {cls.__name__} message")

    values: list = []
    for code, value in zip(layout, body.unpack_from(data, offset)):
        if code == "?":
            if value > 1:
                raise DecodeError(f"invalid boolean byte {value}")
            value = bool(value)
        values.append(value)
    offset += body.size

    if cls is BossMultiShoot:
        if len(data) < offset + _LENGTH.size:
            raise DecodeError("truncated direction count")
        (count,) = _LENGTH.unpack_from(data, offset)
        offset += _LENGTH.size
        end = offset + count * _PAIR.size
        if len(data) < end:
            raise DecodeError("truncated direction list")
        values.append(tuple(_PAIR.iter_unpack(data[offset:end])))

    return cls(*values)


def frame(payload: Payload) -> bytes:
    """Encode a message with its length prefix, ready to write to a socket."""
    body = encode(payload)
    return _HEADER.pack(len(body)) + body


class FrameDecoder:
    """Reassembles length-prefixed messages from a byte stream."""

    def __init__(self) -> None:
        self._buffer = bytearray()

    def feed(self, data: bytes) -> list[tuple[Payload, bytes]]:
        """Add received bytes and return every complete message.

        Each entry pairs the decoded payload with its raw frame, length
        prefix included. Complete frames that do not decode are dropped.
        """
        self._buffer += data
        messages: list[tuple[Payload, bytes]] = []
        while len(self._buffer) >= _HEADER.size:
            (length,) = _HEADER.unpack_from(self._buffer)
            end = _HEADER.size + length
            if len(self._buffer) < end:
                break
            raw = bytes(self._buffer[:end])
            del self._buffer[:end]
            try:
                payload = decode(raw[_HEADER.size:])
            except DecodeError:
                continue
            messages.append((payload, raw))
        return messages