"""
Deck import.

Turns a deck name, an optional commander name and pasted decklist text into
a Deck, enriching every line with Scryfall metadata, and adds it to the
collection.

Lookups run one at a time in decklist order with a pause after each. A card
that cannot be found still becomes a decklist entry, just without metadata.
The deck is only appended once it is fully assembled: an import either adds
one complete deck or leaves the collection untouched.
"""

import logging
from datetime import UTC, datetime
from typing import Any

from deckkeeper.db.store import CollectionStore
from deckkeeper.models.card import CardEntry, ParsedLine
from deckkeeper.models.deck import Commander, Deck, DeckStats
from deckkeeper.models.errors import (
    DeckImportError,
    DeckImportValidationError,
    NoValidCardsError,
)
from deckkeeper.parsers.decklist import parse_decklist
from deckkeeper.services.card_lookup import (
    CardLookup,
    card_entry_from_lookup,
    extract_image_url,
)
from deckkeeper.services.pacing import PacingPolicy, default_pacing

logger = logging.getLogger(__name__)


def validate_import_request(deck_name: str, decklist_text: str) -> None:
    """
    Check required import fields before anything else happens.

    Raises:
        DeckImportValidationError: If the decklist or deck name is blank
    """
    if not decklist_text or not decklist_text.strip():
        raise DeckImportValidationError("Please paste a decklist")
    if not deck_name or not deck_name.strip():
        raise DeckImportValidationError("Please enter a deck name")


def resolve_commander_target(parsed: list[ParsedLine], commander_name: str | None) -> str:
    """
    Decide which card name is the deck's commander.

    An explicit commander name always wins. Without one, the first parsed
    line is taken as the commander, which matches how Commander decklists
    are usually exported.

    Args:
        parsed: Parsed decklist lines (must not be empty)
        commander_name: Name the user typed, may be None or blank

    Returns:
        The trimmed commander name to look for
    """
    explicit = (commander_name or "").strip()
    if explicit:
        return explicit
    return parsed[0].name


def generate_deck_id(existing_ids: set[str], now: datetime) -> str:
    """
    Create a deck id from the creation time in epoch milliseconds.

    Bumped by one millisecond until it is unused, so two decks created
    in the same millisecond still get distinct ids.
    """
    millis = int(now.timestamp() * 1000)
    while str(millis) in existing_ids:
        millis += 1
    return str(millis)


def format_timestamp(now: datetime) -> str:
    """ISO-8601 in UTC with millisecond precision, e.g. 2024-05-01T12:00:00.000Z."""
    return now.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


async def lookup_decklist(
    parsed: list[ParsedLine],
    lookup: CardLookup,
    commander_target: str,
    pacing: PacingPolicy,
) -> tuple[list[CardEntry], dict[str, Any] | None]:
    """
    Look up every parsed line in order.

    Args:
        parsed: Parsed decklist lines
        lookup: Card lookup service
        commander_target: Commander name to watch for
        pacing: Pause applied after each lookup

    Returns:
        Tuple of (entries in decklist order, card data of the first line
        whose name matches commander_target case-insensitively, or None)
    """
    entries: list[CardEntry] = []
    commander_data: dict[str, Any] | None = None
    target = commander_target.casefold()

    for line in parsed:
        card = await lookup.fetch_card(line.name)
        entries.append(card_entry_from_lookup(line, card))

        if commander_data is None and line.name.casefold() == target:
            commander_data = card

        await pacing.wait()

    return entries, commander_data


def build_commander(
    commander_target: str,
    commander_data: dict[str, Any] | None,
    explicit_name: str,
) -> Commander | None:
    """
    Assemble the commander record.

    With card data the commander gets its image; with only an explicit
    name it is kept without one; otherwise the deck has no commander.
    """
    if commander_data is not None:
        return Commander(name=commander_target, image_url=extract_image_url(commander_data))
    if explicit_name:
        return Commander(name=explicit_name, image_url=None)
    return None


async def import_deck(
    store: CollectionStore,
    lookup: CardLookup,
    deck_name: str,
    decklist_text: str,
    commander_name: str | None = None,
    pacing: PacingPolicy | None = None,
    now: datetime | None = None,
) -> Deck:
    """
    Import a pasted decklist as a new deck.

    Args:
        store: Collection the deck is added to
        lookup: Card lookup service (normally a ScryfallClient)
        deck_name: Name for the new deck (required)
        decklist_text: Pasted decklist (required)
        commander_name: Optional commander; defaults to the first card
        pacing: Lookup pacing; defaults to the configured delay
        now: Creation time; defaults to the current time

    Returns:
        The stored deck. Its id identifies it from now on.

    Raises:
        DeckImportValidationError: Required input missing (nothing looked up)
        NoValidCardsError: No decklist line could be parsed
        DeckImportError: Anything else went wrong; the collection is unchanged
    """
    validate_import_request(deck_name, decklist_text)

    parsed = parse_decklist(decklist_text)
    if not parsed:
        raise NoValidCardsError()

    explicit_commander = (commander_name or "").strip()
    name = deck_name.strip()

    logger.info("Importing deck %r with %d card lines", name, len(parsed))

    try:
        pacing = pacing or default_pacing()
        commander_target = resolve_commander_target(parsed, explicit_commander)
        entries, commander_data = await lookup_decklist(parsed, lookup, commander_target, pacing)

        if explicit_commander and commander_data is None:
            commander_data = await lookup.fetch_card(explicit_commander)

        collection = await store.load_all()
        created = now or datetime.now(UTC)
        deck = Deck(
            id=generate_deck_id(collection.ids(), created),
            name=name,
            commander=build_commander(commander_target, commander_data, explicit_commander),
            decklist=entries,
            stats=DeckStats(),
            notes="",
            created_at=format_timestamp(created),
        )

        collection.append(deck)
        await store.save_all(collection)
    except Exception as e:
        logger.exception("Import of deck %r failed", name)
        raise DeckImportError() from e

    missing = sum(1 for entry in entries if entry.type == "" and entry.image_url is None)
    logger.info(
        "Imported deck %r as %s (%d entries, %d without card data)",
        name,
        deck.id,
        len(entries),
        missing,
    )
    return deck
