"""FastAPI dependencies shared by the routers."""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from deckkeeper.db.blob_store import SqlBlobStore
from deckkeeper.db.database import get_session
from deckkeeper.db.store import CollectionStore
from deckkeeper.services.card_lookup import CardLookup, ScryfallClient
from deckkeeper.services.pacing import PacingPolicy, default_pacing


async def get_store(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> CollectionStore:
    """Collection store bound to the request's database session."""
    return CollectionStore(SqlBlobStore(session))


async def get_lookup() -> AsyncGenerator[CardLookup, None]:
    """Scryfall client that lives for one request."""
    async with ScryfallClient() as client:
        yield client


def get_pacing() -> PacingPolicy:
    return default_pacing()
