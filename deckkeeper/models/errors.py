"""
Errors raised by the deck import pipeline and deck mutations.

Validation errors are raised before any external call is made. An import
error means the whole import was abandoned and the collection is unchanged.
"""

NO_VALID_CARDS_MESSAGE = (
    "No valid cards found in decklist. "
    'Please check the format (e.g., "1 Card Name" or "1x Card Name")'
)

IMPORT_FAILED_MESSAGE = "Failed to import deck. Please check the decklist format and try again."


class DeckImportValidationError(Exception):
    """Raised when required import input is missing or unusable."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(reason)


class NoValidCardsError(DeckImportValidationError):
    """Raised when no line of the pasted decklist could be parsed."""

    def __init__(self) -> None:
        super().__init__(NO_VALID_CARDS_MESSAGE)


class DeckImportError(Exception):
    """
    Raised when an import fails after validation.

    This is a HARD FAILURE - no deck is added to the collection.
    """

    def __init__(self, message: str = IMPORT_FAILED_MESSAGE) -> None:
        super().__init__(message)


class DeckNotFoundError(Exception):
    """Raised when no deck exists with the requested id."""

    def __init__(self, deck_id: str) -> None:
        self.deck_id = deck_id
        super().__init__(f"Deck '{deck_id}' not found")
