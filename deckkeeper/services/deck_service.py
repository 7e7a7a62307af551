"""
Edits to stored decks.

Every operation is a read-modify-write of the whole collection through the
CollectionStore.
"""

import logging
from dataclasses import replace

from deckkeeper.db.store import CollectionStore
from deckkeeper.models.deck import Deck
from deckkeeper.models.errors import DeckNotFoundError
from deckkeeper.services.deck_stats import adjust_stat, overwrite_stats

logger = logging.getLogger(__name__)


async def get_deck(store: CollectionStore, deck_id: str) -> Deck:
    """
    Fetch a deck by id.

    Raises:
        DeckNotFoundError: If no deck has this id
    """
    deck = await store.find_by_id(deck_id)
    if deck is None:
        raise DeckNotFoundError(deck_id)
    return deck


async def _save(store: CollectionStore, deck: Deck) -> Deck:
    if not await store.replace(deck.id, deck):
        raise DeckNotFoundError(deck.id)
    return deck


async def delete_deck(store: CollectionStore, deck_id: str) -> None:
    """
    Remove a deck from the collection.

    Raises:
        DeckNotFoundError: If no deck has this id
    """
    if not await store.delete(deck_id):
        raise DeckNotFoundError(deck_id)
    logger.info("Deleted deck %s", deck_id)


async def update_stats(
    store: CollectionStore,
    deck_id: str,
    wins: int,
    losses: int,
    mulligans: int,
    notes: str | None = None,
) -> Deck:
    """
    Overwrite a deck's game record from the edit-stats form.

    total_games becomes wins + losses. Notes are saved as well when given,
    as the edit form submits them together.
    """
    deck = await get_deck(store, deck_id)
    updated = replace(deck, stats=overwrite_stats(deck.stats, wins, losses, mulligans))
    if notes is not None:
        updated = replace(updated, notes=notes)
    return await _save(store, updated)


async def quick_adjust_stat(store: CollectionStore, deck_id: str, stat: str, delta: int) -> Deck:
    """
    Increment or decrement one stat by delta, never below zero.

    Raises:
        DeckNotFoundError: If no deck has this id
        ValueError: If stat is not wins, losses or mulligans
    """
    deck = await get_deck(store, deck_id)
    updated = replace(deck, stats=adjust_stat(deck.stats, stat, delta))
    return await _save(store, updated)


async def update_notes(store: CollectionStore, deck_id: str, notes: str) -> Deck:
    """Replace a deck's notes."""
    deck = await get_deck(store, deck_id)
    return await _save(store, replace(deck, notes=notes))
