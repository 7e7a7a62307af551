"""
Collection store.

Loads and saves the whole deck collection as one blob. There is no partial
update: every mutation reads the collection, changes it in memory and
writes it back in full. This is safe within a single process and event
loop; concurrent writers from several processes would need a lock, which
this store does not provide.
"""

import logging

from deckkeeper.config import settings
from deckkeeper.db.blob_store import BlobStore
from deckkeeper.models.collection import DeckCollection
from deckkeeper.models.deck import Deck

logger = logging.getLogger(__name__)


class CollectionStore:
    """Source of truth for all decks."""

    def __init__(self, blob_store: BlobStore, key: str | None = None) -> None:
        self.blob_store = blob_store
        self.key = key or settings.collection_key

    async def load_all(self) -> DeckCollection:
        """
        Load the collection.

        Returns:
            The stored collection. Empty if nothing has been stored yet
            or the stored data cannot be decoded.
        """
        raw = await self.blob_store.read(self.key)
        if not raw:
            return DeckCollection()

        try:
            return DeckCollection.from_json(raw)
        except (ValueError, TypeError, KeyError, AttributeError) as e:
            logger.warning("Invalid deck collection under %r; treating as empty: %s", self.key, e)
            return DeckCollection()

    async def save_all(self, collection: DeckCollection) -> None:
        """Overwrite the stored collection."""
        await self.blob_store.write(self.key, collection.to_json())

    async def find_by_id(self, deck_id: str) -> Deck | None:
        collection = await self.load_all()
        return collection.find(deck_id)

    async def append(self, deck: Deck) -> None:
        """Add a deck at the end of the collection and persist."""
        collection = await self.load_all()
        collection.append(deck)
        await self.save_all(collection)

    async def replace(self, deck_id: str, deck: Deck) -> bool:
        """
        Substitute a deck, keeping order and all other decks.

        Returns:
            False (and writes nothing) if no deck has the given id
        """
        collection = await self.load_all()
        if not collection.replace(deck_id, deck):
            return False
        await self.save_all(collection)
        return True

    async def delete(self, deck_id: str) -> bool:
        """
        Remove a deck.

        Returns:
            False (and writes nothing) if no deck has the given id
        """
        collection = await self.load_all()
        if not collection.remove(deck_id):
            return False
        await self.save_all(collection)
        return True
