"""A single level of play: the turn loop around the dungeon mechanics."""

from __future__ import annotations

import random
from dataclasses import replace
from enum import Enum
from typing import List, Optional, Tuple

from .game import (
    InvalidMove,
    apply_move,
    bfs,
    duel,
    generate_room,
    move_enemies,
    move_final_boss,
    show_grid,
    spawn_enemy,
    spawn_final_boss,
)
from .models import FLOOR, GRID_SIZE, START_POSITION, Enemy, FinalBoss, Player

ESCAPE = "\x1b"
_STEPS = ((-1, 0), (1, 0), (0, 1), (0, -1))


class Outcome(Enum):
    """How a level stands or ended."""

    IN_PROGRESS = "in progress"
    WON = "won"
    LOST = "lost"
    QUIT = "quit"
    STUCK = "stuck"


class Level:
    """One level: the player, the boss and the enemies in a fresh dungeon."""

    def __init__(
        self,
        player: Player,
        boss: FinalBoss,
        enemy_template: Enemy,
        rng: Optional[random.Random] = None,
    ):
        self._original = replace(player)
        self.player = replace(player)
        self.boss = replace(boss)
        self.enemy_template = enemy_template
        self.rng = rng if rng is not None else random.Random()
        self.enemies: List[Enemy] = []
        self.move_count = 0
        self.kill_count = 0
        self.move_threshold = 5 + 2 * (10 - player.lvl)
        self.boss_spawned = False
        self.outcome = Outcome.IN_PROGRESS
        self.dungeon = generate_room()
        row, col = self.player.pos
        self.dungeon[row][col] = self.player.token

    def step(self, key: str) -> List[str]:
        """Play one turn for ``key`` and return the messages it produced."""
        if self.outcome is not Outcome.IN_PROGRESS:
            raise RuntimeError("the level is over")
        if key == ESCAPE:
            self.outcome = Outcome.QUIT
            return []

        messages: List[str] = []
        levels = None
        boss_killed = False
        try:
            self.player.pos = apply_move(self.dungeon, self.player.pos, key)
        except InvalidMove:
            messages.append("Invalid move")
        else:
            self.move_count += 1
            parent, levels = bfs(self.player.pos, self.dungeon)
            if self.boss.is_spawned():
                move_final_boss(self.dungeon, self.player.token, self.boss, parent)
            if self.enemies:
                move_enemies(self.dungeon, self.enemies, parent)
                fight = duel(self.dungeon, self.player, self.boss, self.enemies, self.rng)
                self.kill_count += fight.kills
                messages.extend(fight.messages)
                if self.player.health <= 0:
                    messages.append(
                        "You have lost this level as you have run out of health. "
                        "Better luck next time."
                    )
                    self.outcome = Outcome.LOST
                if self.boss.health <= 0:
                    boss_killed = True
                    self.boss.pos = None

        if self.move_count >= self.move_threshold and not boss_killed:
            if levels is None:
                _, levels = bfs(self.player.pos, self.dungeon)
            if self.kill_count >= 10 + self.player.lvl and not self.boss_spawned:
                if spawn_final_boss(
                    self.dungeon, self.player.pos, levels, self.boss, self.rng
                ):
                    self.boss_spawned = True
            self.move_count = 0
            spawned = spawn_enemy(
                self.dungeon,
                levels,
                self.enemies,
                self.player.pos,
                self.enemy_template,
                self.rng,
            )
            if spawned is None:
                self.move_count = self.move_threshold

        if boss_killed:
            messages.append("You have successfully completed the level!!!")
            self.player.lvl += 1
            self.player.health += 10
            self.player.attack += 2
            self.player.defense += 1
            self.outcome = Outcome.WON

        if self.outcome is Outcome.IN_PROGRESS and not self.can_move():
            self.outcome = Outcome.STUCK
        return messages

    def render(self) -> str:
        """The status lines and the visible part of the dungeon."""
        return (
            f"Player health - {self.player.health}\n"
            f"Player attack - {self.player.attack}\n"
            f"Player defense - {self.player.defense}\n"
            + show_grid(self.dungeon, self.player.pos)
        )

    def can_move(self) -> bool:
        """Whether any neighbouring cell of the player is open floor."""
        row, col = self.player.pos
        return any(
            0 <= row + dr < GRID_SIZE
            and 0 <= col + dc < GRID_SIZE
            and self.dungeon[row + dr][col + dc] == FLOOR
            for dr, dc in _STEPS
        )

    def result(self) -> Tuple[Outcome, Player]:
        """The outcome and the player to keep: upgraded on a win, unchanged otherwise."""
        if self.outcome is Outcome.WON:
            return self.outcome, replace(self.player, pos=START_POSITION)
        return self.outcome, replace(self._original)