from deckkeeper.models.card import CardEntry, ParsedLine
from deckkeeper.models.collection import DeckCollection
from deckkeeper.models.deck import Commander, Deck, DeckStats
from deckkeeper.models.errors import (
    DeckImportError,
    DeckImportValidationError,
    DeckNotFoundError,
    NoValidCardsError,
)

__all__ = [
    "CardEntry",
    "Commander",
    "Deck",
    "DeckCollection",
    "DeckImportError",
    "DeckImportValidationError",
    "DeckNotFoundError",
    "DeckStats",
    "NoValidCardsError",
    "ParsedLine",
]
