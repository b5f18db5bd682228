# dungeon

A small real-time multiplayer arena game. Players share one arena, fight a
boss that shoots, fires spreads of bullets, dashes, raises a shield and drops
area attacks, and can shoot each other for kills shown on a leaderboard.

The package has two parts:

- a relay **server** (`dungeon.server`) that keeps track of connected
  clients and the last known player positions, and forwards game messages
  between them;
- a graphical **client** (`dungeon.client`, drawing with pygame) that runs
  the game simulation locally and exchanges length-prefixed messages with
  the server.

## Installation

```
pip install .
```

To run the test suite as well:

```
pip install ".[test]"
pytest
```

## Running a server

```
dungeon-server --port 9000
```

The server listens on all interfaces (`0.0.0.0`) on the given port, 9000 by
default, and serves each client on its own thread. `python -m dungeon.server`
does the same.

What the server does with each message:

- `Move` records the player's position and is forwarded to the other clients;
- `Join` makes the server send the new client a `Join` and a `Move` for every
  other known player, and is then forwarded to the other clients;
- `Leave` forgets the sender's position and is forwarded to the other clients;
- `Shoot` and `PlayerDirection` are forwarded to the other clients;
- every boss message, `PlayerHit`, `PlayerRespawn` and `PlayerKill` are sent
  to all clients, the sender included.

When a client disconnects, the server sends a `Leave` for it to everyone else.

## Running a client

```
dungeon-client --address 127.0.0.1:9000
```

The address has the form `host:port` and defaults to `0.0.0.0:9000`. If the
connection fails the command prints the error and exits with status 1.
`python -m dungeon.client` does the same.

The client opens an 800×600 window, picks its player id from the current
time, announces itself with a `Join` message and then sends a `Move`
whenever the local player moves. Pressing Esc or closing the window sends a
`Leave` and quits.

### Controls

| Key                  | Action |
|----------------------|--------|
| W A S D / arrow keys | Move   |
| Mouse                | Aim    |
| Space / left click   | Shoot  |
| Esc                  | Quit   |

A player who dies respawns after five seconds at a random spot in the lower
half of the arena. The boss respawns at the top middle of the arena five
seconds after it is defeated. Warnings appear on screen two seconds before
the boss uses a power or dashes.

### Sounds

The client loads sound effects from an `assets` directory under the current
working directory: `bullet.wav`, `boss_bullet.wav`, `hit.wav`,
`explosion.wav`, `join.wav`, `powerup.wav` and `dash.wav`. A file that cannot
be loaded is reported on standard error and left out; if the audio mixer
cannot start at all, the game runs without sound.

## Using the library

### Wire format

`dungeon.payload` defines one frozen dataclass per message (`Move`, `Join`,
`Leave`, `Shoot`, `BossShoot`, `PlayerHit`, `BossHit`, `BossSpawn`,
`BossDead`, `BossMultiShoot`, `BossDash`, `BossAreaAttack`, `BossShield`,
`PlayerRespawn`, `PlayerDirection`, `PlayerKill`) together with:

- `encode(payload)` / `decode(data)` for a message body, a little-endian
  `u32` variant tag followed by the fields (`decode` raises `DecodeError`
  on bad input);
- `frame(payload)`, the body preceded by its length as a little-endian `u32`;
- `FrameDecoder`, whose `feed(data)` takes bytes as they arrive and returns
  a list of `(payload, raw_frame)` pairs for every complete message.

```python
from dungeon.payload import FrameDecoder, Move, frame

decoder = FrameDecoder()
for payload, raw in decoder.feed(frame(Move(7, 120.0, 80.0))):
    print(payload)  # Move(player_id=7, x=120.0, y=80.0)
```

### Running the simulation headlessly

Entities (`dungeon.player.Player`, `dungeon.boss.Boss`,
`dungeon.bullet.Bullet`, `dungeon.effects.AreaAttack`,
`dungeon.effects.DamageIndicator`) take an explicit
`dungeon.constants.Arena` where they need the arena size.
`dungeon.game_state.GameState` ties them together and advances by an
explicit time step, so the game can be driven without a window:

```python
from dungeon.constants import Arena
from dungeon.game_state import GameState
from dungeon.input import InputState

sent = []
game = GameState(1, Arena(800.0, 600.0), send=sent.append)
game.update_input(InputState(right=True, shoot=True, mouse=(400.0, 100.0)), 1 / 60)
game.update_entities(1 / 60)
```

Messages received from the server are applied with
`GameState.process_network_messages(inbox)` (a `queue.Queue`), or one at a
time with `dungeon.messages.handle_message`. Bullet and area-attack hits are
resolved by `dungeon.collision.check_bullet_collisions` and
`dungeon.collision.check_area_attack_collisions`. Drawing onto a pygame
surface is in `dungeon.render`.

## What it does not do

The server only relays messages; it does not run the game itself. Each
client simulates the boss on its own and announces what it does, so clients
can disagree about the boss's state. There are no accounts, no
authentication, no persistent scores and no encryption on the connection.