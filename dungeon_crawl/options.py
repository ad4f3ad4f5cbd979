"""Leaderboard, player statistics and the item store."""

from __future__ import annotations

import struct
from enum import Enum
from os import PathLike
from typing import Iterable, List, Union

from .models import Player

# token, name[20], password[20], padding, attack, defense, health, lvl, coin, row, col
_RECORD = struct.Struct("<c20s20s3x7i")
_TOKEN_ENCODING = "latin-1"

LEADERBOARD_TITLE = "========================= Leaderboard ========================="


class InsufficientGold(Exception):
    """Raised when the player cannot afford a store item."""


class StoreItem(Enum):
    """Items on sale, in the order the store lists them."""

    SMALL_HEALTH_POTION = ("Health Potion (small)", "Restores 20 HP", 10, "health", 20)
    BIG_HEALTH_POTION = ("Health Potion (big)", "Restores 50 HP", 25, "health", 50)
    IRON_SWORD = ("Weapons (Iron Sword)", "+10 attack", 50, "attack", 10)
    MYSTIC_BOW = ("Weapons (Mystic Bow)", "+15 attack", 100, "health", 15)
    LEATHER_ARMOR = ("Armor (Leather armor)", "+5 defense", 30, "health", 5)
    STEEL_ARMOR = ("Armor (Steel armor)", "+10 defense", 80, "health", 10)

    def __init__(self, label: str, effect: str, cost: int, stat: str, amount: int):
        self.label = label
        self.effect = effect
        self.cost = cost
        self.stat = stat
        self.amount = amount

    def __str__(self) -> str:
        return f"{self.label:<29}:\t {self.effect:<15}\tcost : {self.cost} gold"


def _decode(raw: bytes) -> str:
    return raw.split(b"\0", 1)[0].decode("utf-8", errors="replace")


def load_players(path: Union[str, PathLike]) -> List[Player]:
    """Read the fixed-size player records stored in ``path``.

    A trailing incomplete record is ignored.
    """
    with open(path, "rb") as handle:
        data = handle.read()
    usable = len(data) - len(data) % _RECORD.size
    players = []
    for fields in _RECORD.iter_unpack(data[:usable]):
        raw_token, raw_name, raw_password, attack, defense, health, lvl, coin, row, col = fields
        password = _decode(raw_password)
        players.append(
            Player(
                name=_decode(raw_name),
                password=password,
                attack=attack,
                defense=defense,
                health=health,
                lvl=lvl,
                coin=coin,
                pos=(row, col),
                token=raw_token.decode(_TOKEN_ENCODING),
            )
        )
    return players


def rank_players(players: Iterable[Player]) -> List[Player]:
    """Order players by level, then health, both descending; ties keep their order."""
    return sorted(players, key=lambda p: (-p.lvl, -p.health))


def format_leaderboard(players: Iterable[Player]) -> str:
    """Render the ranked leaderboard table."""
    lines = [
        "",
        LEADERBOARD_TITLE,
        f"{'Name':<20} {'Level':<10} {'Health':<10} {'Attack':<10} {'Defense':<10}",
    ]
    lines.extend(
        f"{p.name:<20} {p.lvl:<10} {p.health:<10} {p.attack:<10} {p.defense:<10}"
        for p in rank_players(players)
    )
    return "\n".join(lines) + "\n"


def player_stats(player: Player) -> str:
    """Describe the player's current statistics."""
    return (
        f"Username : {player.name}\n"
        f"Level : {player.lvl}\n"
        f"Health : {player.health}\n"
        f"Coin : {player.coin}\n"
        f"Attack : {player.attack}\n"
        f"Defense : {player.defense}\n"
    )


def purchase(player: Player, item: StoreItem) -> None:
    """Buy ``item`` for ``player``, paying in gold."""
    if player.coin < item.cost:
        raise InsufficientGold("Not enough gold.")
    setattr(player, item.stat, getattr(player, item.stat) + item.amount)
    player.coin -= item.cost