from dungeon_crawl.models import Enemy, FinalBoss, Player


def test_player_defaults_to_player_token_and_start():
    player = Player(name="hero")
    assert player.token == "P"
    assert player.pos == (5, 10)


def test_enemy_token():
    assert Enemy(attack=3).token == "T"


def test_boss_token():
    assert FinalBoss(health=10).token == "E"


def test_boss_not_spawned_without_position():
    assert FinalBoss(health=10).is_spawned() is False


def test_boss_spawned_with_position():
    assert FinalBoss(health=10, pos=(3, 4)).is_spawned() is True