from dataclasses import dataclass, field
from typing import Any

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from deckkeeper.db.blob_store import MemoryBlobStore, SqlBlobStore
from deckkeeper.db.store import CollectionStore
from deckkeeper.models.db import Base
from deckkeeper.services.pacing import PacingPolicy


@dataclass(frozen=True)
class RecordingPacing(PacingPolicy):
    """Pacing that records each pause instead of sleeping."""

    waits: list[float] = field(default_factory=list)

    async def wait(self) -> None:
        self.waits.append(self.delay_seconds)


class FakeLookup:
    """
    In-memory card lookup.

    Names are matched case-insensitively. A name listed in fail_on raises
    instead of returning, to simulate an unexpected error mid-import.
    """

    def __init__(
        self,
        cards: dict[str, dict[str, Any]] | None = None,
        fail_on: set[str] | None = None,
    ) -> None:
        self.cards = {name.casefold(): data for name, data in (cards or {}).items()}
        self.fail_on = fail_on or set()
        self.calls: list[str] = []

    async def fetch_card(self, name: str) -> dict[str, Any] | None:
        self.calls.append(name)
        if name in self.fail_on:
            raise RuntimeError(f"lookup exploded on {name}")
        return self.cards.get(name.casefold())


def scryfall_card(
    name: str,
    mana_cost: str = "",
    cmc: float | None = 0.0,
    type_line: str = "",
    rarity: str = "common",
    image: str | None = None,
) -> dict[str, Any]:
    """Minimal Scryfall card object."""
    card: dict[str, Any] = {
        "object": "card",
        "name": name,
        "mana_cost": mana_cost,
        "type_line": type_line,
        "rarity": rarity,
    }
    if cmc is not None:
        card["cmc"] = cmc
    if image is not None:
        card["image_uris"] = {"normal": image}
    return card


@pytest.fixture
def sample_cards() -> dict[str, dict[str, Any]]:
    """A handful of Commander staples as Scryfall returns them."""
    return {
        "Atraxa, Praetors' Voice": scryfall_card(
            "Atraxa, Praetors' Voice",
            mana_cost="{G}{W}{U}{B}",
            cmc=4.0,
            type_line="Legendary Creature — Phyrexian Angel Horror",
            rarity="mythic",
            image="https://cards.scryfall.io/normal/atraxa.jpg",
        ),
        "Sol Ring": scryfall_card(
            "Sol Ring",
            mana_cost="{1}",
            cmc=1.0,
            type_line="Artifact",
            rarity="uncommon",
            image="https://cards.scryfall.io/normal/sol-ring.jpg",
        ),
        "Arcane Signet": scryfall_card(
            "Arcane Signet",
            mana_cost="{2}",
            cmc=2.0,
            type_line="Artifact",
            image="https://cards.scryfall.io/normal/arcane-signet.jpg",
        ),
        "Command Tower": scryfall_card(
            "Command Tower",
            cmc=0.0,
            type_line="Land",
            image="https://cards.scryfall.io/normal/command-tower.jpg",
        ),
    }


@pytest.fixture
def fake_lookup(sample_cards: dict[str, dict[str, Any]]) -> FakeLookup:
    return FakeLookup(sample_cards)


@pytest.fixture
def pacing() -> RecordingPacing:
    return RecordingPacing()


@pytest.fixture
def memory_store() -> CollectionStore:
    return CollectionStore(MemoryBlobStore(), key="mtgDecks")


@pytest.fixture
async def async_engine():
    """Create an in-memory SQLite engine for testing."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def session(async_engine) -> AsyncSession:
    """Provide a database session for tests."""
    async_session = async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)
    async with async_session() as session:
        yield session


@pytest.fixture
def sql_store(session: AsyncSession) -> CollectionStore:
    return CollectionStore(SqlBlobStore(session), key="mtgDecks")


@pytest.fixture
def make_lookup():
    """Factory for FakeLookup instances."""
    return FakeLookup


@pytest.fixture
def card_factory():
    """Factory for minimal Scryfall card objects."""
    return scryfall_card
