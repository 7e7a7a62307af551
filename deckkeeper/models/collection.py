import json
import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

from deckkeeper.models.deck import Deck

logger = logging.getLogger(__name__)


@dataclass
class DeckCollection:
    """
    Every deck the user has imported.

    Decks keep their insertion order and are unique by id. The collection
    is persisted as a whole; there is no per-deck storage.
    """

    decks: list[Deck] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.decks)

    def __iter__(self) -> Iterator[Deck]:
        return iter(self.decks)

    def ids(self) -> set[str]:
        return {deck.id for deck in self.decks}

    def find(self, deck_id: str) -> Deck | None:
        """Linear scan for a deck by id."""
        for deck in self.decks:
            if deck.id == deck_id:
                return deck
        return None

    def append(self, deck: Deck) -> None:
        """Add a deck at the end. Raises ValueError on a duplicate id."""
        if self.find(deck.id) is not None:
            raise ValueError(f"Deck id already exists: {deck.id}")
        self.decks.append(deck)

    def replace(self, deck_id: str, deck: Deck) -> bool:
        """
        Substitute the deck with the given id in place.

        Returns:
            True if a deck was replaced, False if the id is absent
        """
        for index, existing in enumerate(self.decks):
            if existing.id == deck_id:
                self.decks[index] = deck
                return True
        return False

    def remove(self, deck_id: str) -> bool:
        """Drop the deck with the given id. Returns False if absent."""
        remaining = [deck for deck in self.decks if deck.id != deck_id]
        removed = len(remaining) != len(self.decks)
        self.decks = remaining
        return removed

    def to_json(self) -> str:
        return json.dumps([deck.to_dict() for deck in self.decks], ensure_ascii=False)

    @classmethod
    def from_json(cls, text: str) -> "DeckCollection":
        """
        Decode a serialized collection.

        Entries that are not objects, have no id or fail to decode are
        skipped, so one damaged deck never hides the others.

        Raises:
            ValueError: If the text is not a JSON array
        """
        payload: Any = json.loads(text)
        if not isinstance(payload, list):
            raise ValueError(f"Expected a JSON array of decks, got {type(payload).__name__}")

        collection = cls()
        for item in payload:
            if not isinstance(item, dict) or not item.get("id"):
                logger.warning("Skipping malformed deck entry: %r", item)
                continue
            try:
                deck = Deck.from_dict(item)
            except (ValueError, TypeError, KeyError, AttributeError) as e:
                logger.warning("Skipping undecodable deck %r: %s", item.get("id"), e)
                continue
            if collection.find(deck.id) is not None:
                logger.warning("Skipping duplicate deck id: %s", deck.id)
                continue
            collection.decks.append(deck)
        return collection
