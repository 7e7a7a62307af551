"""
Deck statistics and decklist ordering.

Pure functions used for display and for recomputing a deck's game
record after an edit. Nothing here touches storage.
"""

import re
from dataclasses import replace
from typing import Literal

from deckkeeper.models.card import CardEntry
from deckkeeper.models.deck import DeckStats

SortKey = Literal["name", "mana", "type"]
SORT_KEYS: tuple[str, ...] = ("name", "mana", "type")

StatName = Literal["wins", "losses", "mulligans"]
STAT_NAMES: tuple[str, ...] = ("wins", "losses", "mulligans")

UNKNOWN_TYPE = "Unknown"

MANA_SYMBOL_PATTERN = re.compile(r"\{([^{}]*)\}")

# Symbols that stand for a chosen amount count as zero
VARIABLE_SYMBOLS = frozenset({"X", "Y", "Z"})


def _symbol_value(symbol: str) -> int:
    """Mana value of one brace-delimited cost symbol."""
    symbol = symbol.strip().upper()
    if not symbol:
        return 0
    if symbol.isdigit():
        return int(symbol)
    if symbol in VARIABLE_SYMBOLS:
        return 0
    # Hybrid with a generic half, e.g. {2/W}, counts the larger half
    first = symbol.split("/")[0]
    if first.isdigit():
        return int(first)
    # Colored, colorless, Phyrexian and snow pips count one each, as in the
    # game rules, so {3}{G}{G} is 5 (see "Mana value rule" in DESIGN.md)
    return 1


def mana_value_from_cost(mana_cost: str | None) -> int:
    """
    Compute mana value from a mana cost string.

    Examples:
        "{3}{G}{G}" -> 5
        "{X}{R}" -> 1
        "" -> 0
    """
    if not mana_cost:
        return 0
    return sum(_symbol_value(symbol) for symbol in MANA_SYMBOL_PATTERN.findall(mana_cost))


def mana_value(card: CardEntry) -> float:
    """
    Mana value of a decklist entry.

    The stored converted mana cost wins whenever it is present, including
    an explicit 0. The cost string is only parsed when cmc is None.
    """
    if card.cmc is not None:
        return card.cmc
    return mana_value_from_cost(card.mana_cost)


def primary_type(type_line: str | None) -> str:
    """
    Extract the type before the subtype separator.

    Examples:
        "Artifact Creature — Golem" -> "Artifact Creature"
        "Instant" -> "Instant"
        "" -> "Unknown"
    """
    if not type_line:
        return UNKNOWN_TYPE
    main_type = type_line.split("—")[0].strip()
    return main_type or UNKNOWN_TYPE


def sort_decklist(cards: list[CardEntry], sort_by: str = "name") -> list[CardEntry]:
    """
    Return the decklist in display order.

    Args:
        cards: Entries in stored order (not modified)
        sort_by: "name", "mana" (mana value, then name) or "type"
            (primary type, then name). Any other value keeps stored order.

    Returns:
        A new list
    """
    if sort_by == "name":
        return sorted(cards, key=lambda card: card.name)
    if sort_by == "mana":
        return sorted(cards, key=lambda card: (mana_value(card), card.name))
    if sort_by == "type":
        return sorted(cards, key=lambda card: (primary_type(card.type), card.name))
    return list(cards)


def overwrite_stats(stats: DeckStats, wins: int, losses: int, mulligans: int) -> DeckStats:
    """
    Replace the game record with values entered in the edit form.

    total_games is always recomputed as wins + losses.

    Raises:
        ValueError: If any value is negative
    """
    for stat, value in (("wins", wins), ("losses", losses), ("mulligans", mulligans)):
        if value < 0:
            raise ValueError(f"{stat} cannot be negative: {value}")

    return replace(
        stats,
        wins=wins,
        losses=losses,
        mulligans=mulligans,
        total_games=wins + losses,
    )


def adjust_stat(stats: DeckStats, stat: str, delta: int) -> DeckStats:
    """
    Apply a quick +/- adjustment to one stat.

    The stat never drops below zero. total_games moves by the change
    actually applied to wins or losses, so decrementing losses at 0 leaves
    it alone. Adjusting mulligans never touches total_games.

    Raises:
        ValueError: If stat is not wins, losses or mulligans
    """
    if stat not in STAT_NAMES:
        raise ValueError(f"Unknown stat: {stat}. Must be one of {STAT_NAMES}")

    current: int = getattr(stats, stat)
    updated = max(0, current + delta)
    applied = updated - current

    total_games = stats.total_games
    if stat in ("wins", "losses"):
        total_games = max(0, total_games + applied)

    return replace(stats, **{stat: updated}, total_games=total_games)
