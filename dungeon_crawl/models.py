"""Game entities and tuning constants shared across the dungeon."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

Position = Tuple[int, int]

GRID_SIZE = 100
SLEEP_SECONDS = 0.4
ATTACK_DIST = 3
SPAWN_DIST = 5
VIEW_ROWS = 30
VIEW_COLS = 40
MAX_PASSWORD_SIZE = 20

PLAYER_TOKEN = "P"
FINAL_BOSS_TOKEN = "E"
ENEMY_TOKEN = "T"
FLOOR = "."
WALL = "#"

START_POSITION: Position = (5, 10)


@dataclass
class Player:
    """A registered player and the stats carried between levels."""

    name: str = ""
    password: str = ""
    attack: int = 0
    defense: int = 0
    health: int = 0
    lvl: int = 0
    coin: int = 0
    pos: Position = START_POSITION
    token: str = PLAYER_TOKEN


@dataclass
class Enemy:
    """A regular enemy roaming the dungeon."""

    attack: int = 0
    defense: int = 0
    health: int = 0
    pos: Optional[Position] = None
    token: str = ENEMY_TOKEN


@dataclass
class FinalBoss:
    """The boss that ends a level once it is killed."""

    attack: int = 0
    defense: int = 0
    health: int = 0
    pos: Optional[Position] = None
    token: str = FINAL_BOSS_TOKEN

    def is_spawned(self) -> bool:
        """Whether the boss currently stands on the grid."""
        return self.pos is not None