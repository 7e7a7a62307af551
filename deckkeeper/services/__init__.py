"""
Deck import and deck management services.

Exports:
    ScryfallClient: Card lookup with exact-then-search fallback
    PacingPolicy: Spacing between external lookups
    import_deck: Parse, enrich and store a pasted decklist
    mana_value, primary_type, sort_decklist: Display helpers
    adjust_stat, overwrite_stats: Game record updates
"""

from deckkeeper.services.card_lookup import (
    CardLookup,
    ScryfallClient,
    card_entry_from_lookup,
    extract_cmc,
    extract_image_url,
)
from deckkeeper.services.deck_import import import_deck, resolve_commander_target
from deckkeeper.services.deck_service import (
    delete_deck,
    get_deck,
    quick_adjust_stat,
    update_notes,
    update_stats,
)
from deckkeeper.services.deck_stats import (
    adjust_stat,
    mana_value,
    mana_value_from_cost,
    overwrite_stats,
    primary_type,
    sort_decklist,
)
from deckkeeper.services.pacing import PacingPolicy, default_pacing

__all__ = [
    "CardLookup",
    "PacingPolicy",
    "ScryfallClient",
    "adjust_stat",
    "card_entry_from_lookup",
    "default_pacing",
    "delete_deck",
    "extract_cmc",
    "extract_image_url",
    "get_deck",
    "import_deck",
    "mana_value",
    "mana_value_from_cost",
    "overwrite_stats",
    "primary_type",
    "quick_adjust_stat",
    "resolve_commander_target",
    "sort_decklist",
    "update_notes",
    "update_stats",
]
