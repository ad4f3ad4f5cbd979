"""Dungeon grid, movement, path finding, combat and spawning."""

from __future__ import annotations

import random
from collections import deque
from dataclasses import dataclass, field, replace
from typing import List, Optional, Tuple

from .models import (
    ATTACK_DIST,
    FLOOR,
    GRID_SIZE,
    SPAWN_DIST,
    VIEW_COLS,
    VIEW_ROWS,
    WALL,
    Enemy,
    FinalBoss,
    Player,
    Position,
)

Grid = List[List[str]]
ParentGrid = List[List[Optional[Position]]]
LevelGrid = List[List[int]]

MOVES: Tuple[Position, ...] = ((-1, 0), (1, 0), (0, 1), (0, -1))
KEY_DIRECTIONS = {"w": (-1, 0), "a": (0, -1), "s": (1, 0), "d": (0, 1)}
ENEMY_SPAWN_DIST = 5


class InvalidMove(ValueError):
    """Raised when a key is not a move or the move is blocked."""


@dataclass
class DuelResult:
    """What happened during one round of combat."""

    kills: int = 0
    dueled: bool = False
    messages: List[str] = field(default_factory=list)


def _in_bounds(row: int, col: int) -> bool:
    return 0 <= row < GRID_SIZE and 0 <= col < GRID_SIZE


def _neighbours(row: int, col: int):
    for dr, dc in MOVES:
        nr, nc = row + dr, col + dc
        if _in_bounds(nr, nc):
            yield nr, nc


def generate_room() -> Grid:
    """Build the 100x100 dungeon of 20x20 rooms joined by doors."""
    dungeon = [[FLOOR] * GRID_SIZE for _ in range(GRID_SIZE)]
    last = GRID_SIZE - 1
    for i in range(GRID_SIZE):
        for j in range(GRID_SIZE):
            if i in (0, last) or j in (0, last):
                dungeon[i][j] = WALL
            elif i % 20 == 0 or j % 20 == 0:
                if i % 10 == 0 and i % 20 != 0:
                    for k in (i - 2, i - 1, i):
                        dungeon[k][j] = FLOOR
                elif j % 10 == 0 and j % 20 != 0:
                    dungeon[i][j - 2:j + 1] = [FLOOR] * 3
                else:
                    dungeon[i][j] = WALL
            else:
                dungeon[i][j] = FLOOR
    return dungeon


def _window(center: int, span: int) -> Tuple[int, int]:
    start = max(center - span // 2, 0)
    end = start + span
    if end > GRID_SIZE:
        start -= end - GRID_SIZE
        end = GRID_SIZE
    return start, end


def show_grid(dungeon: Grid, position: Position) -> str:
    """Render the part of the dungeon visible around ``position``."""
    top, bottom = _window(position[0], VIEW_ROWS)
    left, right = _window(position[1], VIEW_COLS)
    return "".join("".join(row[left:right]) + "\n" for row in dungeon[top:bottom])


def direction_for_key(key: str) -> Position:
    """Map a W/A/S/D key to a (row, col) step."""
    try:
        return KEY_DIRECTIONS[key]
    except KeyError:
        raise InvalidMove(f"not a move key: {key!r}") from None


def apply_move(dungeon: Grid, position: Position, key: str) -> Position:
    """Move the token at ``position`` one step and return its new position."""
    dr, dc = direction_for_key(key)
    row, col = position
    new_row, new_col = row + dr, col + dc
    if not _in_bounds(new_row, new_col) or dungeon[new_row][new_col] != FLOOR:
        raise InvalidMove("the way is blocked")
    dungeon[row][col], dungeon[new_row][new_col] = (
        dungeon[new_row][new_col],
        dungeon[row][col],
    )
    return new_row, new_col


def bfs(position: Position, dungeon: Grid) -> Tuple[ParentGrid, LevelGrid]:
    """Breadth-first search from ``position``; returns parent and distance grids."""
    parent: ParentGrid = [[None] * GRID_SIZE for _ in range(GRID_SIZE)]
    level: LevelGrid = [[-1] * GRID_SIZE for _ in range(GRID_SIZE)]
    visited = [[cell == WALL for cell in row] for row in dungeon]

    row, col = position
    level[row][col] = 0
    visited[row][col] = True
    queue = deque([position])
    while queue:
        source = queue.popleft()
        sr, sc = source
        for nr, nc in _neighbours(sr, sc):
            if not visited[nr][nc]:
                level[nr][nc] = level[sr][sc] + 1
                parent[nr][nc] = source
                visited[nr][nc] = True
                queue.append((nr, nc))
    return parent, level


def _within_reach(a: Position, b: Position) -> bool:
    return abs(a[0] - b[0]) + abs(a[1] - b[1]) <= ATTACK_DIST


def _damage(attack: int, defense: int, rng: random.Random) -> int:
    base = max(0, attack - defense)
    if base == 0:
        return attack * rng.randint(0, 20) // 100
    return base * rng.randint(80, 120) // 100


def duel(
    dungeon: Grid,
    player: Player,
    boss: FinalBoss,
    enemies: List[Enemy],
    rng: random.Random,
) -> DuelResult:
    """Resolve one round of combat; killed enemies are removed from ``enemies``.

    If the player dies mid-round the round stops and ``enemies`` is left as is.
    """
    result = DuelResult()

    if boss.is_spawned():
        if _within_reach(boss.pos, player.pos):
            boss.health -= _damage(player.attack, boss.defense, rng)
            player.health -= _damage(boss.attack, player.defense, rng)
            result.dueled = True
        if boss.health > 0:
            result.messages.append("Final boss - Retained!!!")
        else:
            result.messages.append("Final boss - Killed!!!")
            row, col = boss.pos
            dungeon[row][col] = FLOOR
            boss.pos = None
        if player.health <= 0:
            return result

    survivors: List[Enemy] = []
    for number, enemy in enumerate(enemies, 1):
        if _within_reach(enemy.pos, player.pos):
            enemy.health -= _damage(player.attack, enemy.defense, rng)
            player.health -= _damage(enemy.attack, player.defense, rng)
            result.dueled = True

        if enemy.health > 0:
            result.messages.append(f"Enemy no.{number} - Retained!!!")
            survivors.append(enemy)
        else:
            result.messages.append(
                f"Enemy no.{number} - Killed!!!\n20 XP bonus received"
            )
            row, col = enemy.pos
            dungeon[row][col] = FLOOR
            result.kills += 1
            player.health += 20
            if rng.randint(0, 10) == 6:
                if rng.randint(0, 2) % 2 == 0:
                    player.attack += player.attack * rng.randint(110, 120) // 100
                    result.messages.append(
                        "Enemy weapon dropped, your weapon has been upgraded!!!"
                    )
                else:
                    player.defense += player.defense * rng.randint(110, 120) // 100
                    result.messages.append(
                        "Enemy armor dropped, your armor has been upgraded!!!"
                    )
        if player.health <= 0:
            return result

    enemies[:] = survivors
    return result


def move_enemies(dungeon: Grid, enemies: List[Enemy], parent: ParentGrid) -> None:
    """Step every enemy one cell along its path towards the player."""
    for enemy in enemies:
        row, col = enemy.pos
        target = parent[row][col]
        if target is None:
            continue
        tr, tc = target
        if dungeon[tr][tc] == FLOOR:
            dungeon[tr][tc] = enemy.token
            dungeon[row][col] = FLOOR
            enemy.pos = target


def move_final_boss(
    dungeon: Grid, player_token: str, boss: FinalBoss, parent: ParentGrid
) -> None:
    """Step the boss towards the player, trading cells with whatever blocks it."""
    if not boss.is_spawned():
        return
    row, col = boss.pos
    target = parent[row][col]
    if target is None:
        return
    tr, tc = target
    if dungeon[tr][tc] == FLOOR:
        dungeon[tr][tc] = boss.token
        dungeon[row][col] = FLOOR
        boss.pos = target
    elif dungeon[tr][tc] != player_token:
        dungeon[row][col], dungeon[tr][tc] = dungeon[tr][tc], dungeon[row][col]


def _spawn_candidates(
    dungeon: Grid, level: LevelGrid, position: Position, reach: int, distance: int
) -> List[Position]:
    row, col = position
    candidates = []
    for i in range(max(row - reach, 0), min(row + reach, GRID_SIZE)):
        for j in range(max(col - reach, 0), min(col + reach, GRID_SIZE)):
            open_around = all(dungeon[r][c] == FLOOR for r, c in _neighbours(i, j))
            if level[i][j] == distance and open_around and dungeon[i][j] == FLOOR:
                candidates.append((i, j))
    return candidates


def spawn_final_boss(
    dungeon: Grid,
    position: Position,
    level: LevelGrid,
    boss: FinalBoss,
    rng: random.Random,
) -> bool:
    """Place the boss near the player; return whether a place was found."""
    candidates = _spawn_candidates(dungeon, level, position, ATTACK_DIST, SPAWN_DIST)
    if not candidates:
        return False
    boss.pos = candidates[rng.randint(0, len(candidates) - 1)]
    row, col = boss.pos
    dungeon[row][col] = boss.token
    return True


def spawn_enemy(
    dungeon: Grid,
    level: LevelGrid,
    enemies: List[Enemy],
    position: Position,
    template: Enemy,
    rng: random.Random,
) -> Optional[Enemy]:
    """Place a copy of ``template`` near the player; return it, or None if no room."""
    candidates = _spawn_candidates(
        dungeon, level, position, ENEMY_SPAWN_DIST, ENEMY_SPAWN_DIST
    )
    if not candidates:
        return None
    spot = candidates[rng.randint(0, len(candidates) - 1)]
    enemy = replace(template, pos=spot)
    enemies.append(enemy)
    dungeon[spot[0]][spot[1]] = enemy.token
    return enemy