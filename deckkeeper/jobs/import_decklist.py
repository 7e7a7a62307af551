"""
Import a decklist file into the local collection.

Usage:
    python -m deckkeeper.jobs.import_decklist --name "Atraxa Superfriends" deck.txt
    pbpaste | python -m deckkeeper.jobs.import_decklist --name "Krenko" --commander "Krenko, Mob Boss" -
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from deckkeeper.db.blob_store import SqlBlobStore
from deckkeeper.db.database import async_session_factory, init_db
from deckkeeper.db.store import CollectionStore
from deckkeeper.models.deck import Deck
from deckkeeper.models.errors import DeckImportError, DeckImportValidationError
from deckkeeper.services.card_lookup import ScryfallClient
from deckkeeper.services.deck_import import import_deck

logger = logging.getLogger(__name__)

EXIT_IMPORT_FAILED = 1
EXIT_INVALID_INPUT = 2


def read_decklist(source: str) -> str:
    """Read decklist text from a file path, or stdin for "-"."""
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


async def run_import(deck_name: str, decklist_text: str, commander_name: str | None) -> Deck:
    """
    Import one decklist and commit it.

    Returns:
        The stored deck
    """
    await init_db()

    async with async_session_factory() as session, ScryfallClient() as lookup:
        store = CollectionStore(SqlBlobStore(session))
        deck = await import_deck(
            store,
            lookup,
            deck_name=deck_name,
            decklist_text=decklist_text,
            commander_name=commander_name,
        )
        await session.commit()

    return deck


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Prints the new deck id."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    parser = argparse.ArgumentParser(description="Import a decklist into the deck collection")
    parser.add_argument("--name", required=True, help="Deck name")
    parser.add_argument(
        "--commander",
        default=None,
        help="Commander name (default: first card in the decklist)",
    )
    parser.add_argument("decklist", help='Decklist file, or "-" to read stdin')
    args = parser.parse_args(argv)

    try:
        text = read_decklist(args.decklist)
    except (OSError, UnicodeDecodeError) as e:
        logger.error("Cannot read decklist %s: %s", args.decklist, e)
        return EXIT_INVALID_INPUT

    try:
        deck = asyncio.run(run_import(args.name, text, args.commander))
    except DeckImportValidationError as e:
        logger.error("%s", e.reason)
        return EXIT_INVALID_INPUT
    except DeckImportError as e:
        logger.error("%s", e)
        return EXIT_IMPORT_FAILED

    print(deck.id)
    return 0


if __name__ == "__main__":
    sys.exit(main())
