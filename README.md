# dungeon_crawl

The rules of a small turn-based dungeon crawler, as a library you drive
from your own front end.

The dungeon is a 100 × 100 grid of floor (`.`) and wall (`#`) cells,
divided into 20 × 20 rooms joined by doorways. The player (`P`) moves one
cell per turn. After a number of moves, enemies (`T`) appear five steps
away and chase the player along the shortest path. Anyone within three
cells trades blows with the player. Once enough enemies have fallen, the
final boss (`E`) appears; killing it wins the level and raises the
player's level, health, attack and defense.

## Modules

### `dungeon_crawl.models`

The `Player`, `Enemy` and `FinalBoss` dataclasses, plus the grid size,
tokens, distances and `START_POSITION`. `FinalBoss.is_spawned()` tells
whether the boss is on the board (its `pos` is not `None`).

### `dungeon_crawl.game`

The board rules. Grids are lists of lists of one-character strings,
positions are `(row, col)` tuples.

- `generate_room()` builds a fresh dungeon grid.
- `show_grid(dungeon, position)` returns the 30-row by 40-column window
  around a position as text.
- `direction_for_key(key)` maps `w`/`a`/`s`/`d` to a step;
  `apply_move(dungeon, position, key)` moves the token and returns the new
  position. An unknown key or a blocked move raises `InvalidMove`.
- `bfs(position, dungeon)` returns the parent and distance grids that
  enemies use to chase the player.
- `duel(dungeon, player, boss, enemies, rng)` resolves one round of combat,
  removes killed enemies from the list and returns a `DuelResult` with the
  number of kills, whether any blows were traded, and the messages.
- `move_enemies(...)` and `move_final_boss(...)` step the chasers along
  their paths.
- `spawn_enemy(...)` places a copy of an enemy template near the player and
  returns it, or `None` if there is no room; `spawn_final_boss(...)`
  places the boss and returns whether it found a place.

Every function that rolls dice takes an `rng`, so a seeded
`random.Random` replays a game exactly.

### `dungeon_crawl.options`

- `load_players(path)` reads players from a file of fixed-size binary
  records.
- `rank_players(players)` orders players by level, then health, both
  descending; `format_leaderboard(players)` lays the ranking out as a
  table.
- `player_stats(player)` describes a player's name, level, health, coin,
  attack and defense.
- `StoreItem` lists the store's goods; each member has a `label`, `effect`,
  `cost`, and the `stat` and `amount` it adds. `purchase(player, item)`
  adds the amount to that stat and takes the cost from the player's coin,
  or raises `InsufficientGold` if the player cannot afford it.

### `dungeon_crawl.session`

- `Level(player, boss, enemy_template, rng=None)` sets up a level in a
  fresh dungeon, working on copies of the player and boss.
- `Level.step(key)` plays one turn and returns its messages. A blocked or
  unknown key yields `"Invalid move"`; `session.ESCAPE` abandons the level.
  Stepping a finished level raises `RuntimeError`.
- `Level.render()` returns the player's health, attack and defense above
  the visible part of the dungeon.
- `Level.can_move()` tells whether the player has an open cell next to it.
- `Level.outcome` holds an `Outcome`: `IN_PROGRESS`, `WON`, `LOST`, `QUIT`
  or `STUCK`. `Level.result()` returns the outcome together with the
  player to keep: upgraded and back at the start position on a win,
  unchanged otherwise.

## Playing a level

```python
import random
from dungeon_crawl.models import Player, Enemy, FinalBoss
from dungeon_crawl.session import Level, Outcome

player = Player(name="hero", attack=10, defense=5, health=100, lvl=1)
level = Level(player, FinalBoss(attack=20, defense=10, health=200),
              Enemy(attack=8, defense=3, health=30), random.Random(1))
while level.outcome is Outcome.IN_PROGRESS:
    print(level.render())
    for message in level.step(input("move (w/a/s/d): ")):
        print(message)
outcome, kept = level.result()
```

## What the package does not do

There is no command to run and no terminal front end: reading keys,
clearing the screen and pausing between turns are left to the caller.
There is no login, registration or password check, and players can be
read from a file but not written back. Enemy and boss stats for each
level are not built in; the caller supplies them.

## Requirements

Python 3.10 or later. Only the standard library is used.