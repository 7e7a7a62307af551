"""Deck catalog: decklist import, Scryfall enrichment and per-deck game records."""
