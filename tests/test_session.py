import random

import pytest

from dungeon_crawl.models import (
    ENEMY_TOKEN,
    FINAL_BOSS_TOKEN,
    START_POSITION,
    VIEW_ROWS,
    WALL,
    Enemy,
    FinalBoss,
    Player,
)
from dungeon_crawl.session import ESCAPE, Level, Outcome


def make_player(**overrides):
    stats = dict(name="hero", attack=10, defense=5, health=50, lvl=1, coin=0)
    stats.update(overrides)
    return Player(**stats)


def make_level(player=None, boss=None, seed=0):
    player = player or make_player()
    boss = boss or FinalBoss(attack=30, defense=10, health=500)
    template = Enemy(attack=5, defense=2, health=20)
    return Level(player, boss, template, random.Random(seed))


def test_player_is_placed_on_grid():
    level = make_level()
    row, col = START_POSITION
    assert level.dungeon[row][col] == level.player.token
    assert level.can_move()
    assert level.outcome is Outcome.IN_PROGRESS


def test_move_threshold_follows_level():
    level = make_level(make_player(lvl=10))
    assert level.move_threshold == 5


def test_step_moves_player_without_touching_original():
    original = make_player()
    level = make_level(original)
    level.step("d")
    row, col = START_POSITION
    assert level.player.pos == (row, col + 1)
    assert level.dungeon[row][col + 1] == original.token
    assert level.move_count == 1
    assert original.pos == START_POSITION


def test_invalid_key_reports_and_keeps_position():
    level = make_level()
    messages = level.step("x")
    assert "Invalid move" in messages
    assert level.player.pos == START_POSITION
    assert level.move_count == 0
    assert level.outcome is Outcome.IN_PROGRESS


def test_escape_quits_and_discards_progress():
    original = make_player()
    level = make_level(original)
    level.step("d")
    level.step(ESCAPE)
    outcome, kept = level.result()
    assert outcome is Outcome.QUIT
    assert kept == original


def test_step_after_end_raises():
    level = make_level()
    level.step(ESCAPE)
    with pytest.raises(RuntimeError):
        level.step("d")


def test_surrounded_player_is_stuck():
    level = make_level()
    row, col = START_POSITION
    for dr, dc in ((-1, 0), (1, 0), (0, -1), (0, 1)):
        level.dungeon[row + dr][col + dc] = WALL
    messages = level.step("w")
    assert "Invalid move" in messages
    assert not level.can_move()
    assert level.outcome is Outcome.STUCK


def test_render_shows_status_and_view():
    level = make_level()
    text = level.render()
    assert text.startswith(f"Player health - {level.player.health}\n")
    assert f"Player attack - {level.player.attack}\n" in text
    assert text.count("\n") == 3 + VIEW_ROWS
    assert level.player.token in text


def test_enemy_spawns_after_threshold_moves():
    level = make_level(make_player(lvl=10))
    for key in "dadad":
        level.step(key)
    assert len(level.enemies) == 1
    enemy = level.enemies[0]
    assert enemy is not level.enemy_template
    assert enemy.attack == level.enemy_template.attack
    assert level.dungeon[enemy.pos[0]][enemy.pos[1]] == ENEMY_TOKEN
    assert level.move_count == 0


def test_boss_spawns_once_enough_kills():
    level = make_level(make_player(lvl=10))
    level.kill_count = 20
    for key in "dadad":
        level.step(key)
    assert level.boss_spawned
    assert level.boss.is_spawned()
    row, col = level.boss.pos
    assert level.dungeon[row][col] == FINAL_BOSS_TOKEN


def test_killing_boss_wins_and_levels_up():
    original = make_player(attack=100)
    boss = FinalBoss(attack=0, defense=0, health=1)
    level = make_level(original, boss)
    level.boss.pos = (5, 13)
    level.dungeon[5][13] = FINAL_BOSS_TOKEN
    guard = Enemy(attack=0, defense=0, health=1000, pos=(9, 11))
    level.enemies.append(guard)
    level.dungeon[9][11] = ENEMY_TOKEN

    messages = level.step("d")

    assert "You have successfully completed the level!!!" in messages
    assert level.outcome is Outcome.WON
    assert not level.boss.is_spawned()
    outcome, kept = level.result()
    assert outcome is Outcome.WON
    assert kept.lvl == original.lvl + 1
    assert kept.health == original.health + 10
    assert kept.attack == original.attack + 2
    assert kept.defense == original.defense + 1
    assert kept.pos == START_POSITION


def test_running_out_of_health_loses():
    original = make_player(health=1, defense=0)
    level = make_level(original)
    brute = Enemy(attack=100, defense=0, health=1000, pos=(7, 11))
    level.enemies.append(brute)
    level.dungeon[7][11] = ENEMY_TOKEN

    level.step("d")

    assert level.outcome is Outcome.LOST
    assert level.player.health <= 0
    outcome, kept = level.result()
    assert outcome is Outcome.LOST
    assert kept == original