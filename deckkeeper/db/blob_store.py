"""
Key/value blob storage.

The deck collection is persisted as one serialized value under a fixed
key. Anything with read/write by key can back it.
"""

from typing import Protocol

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from deckkeeper.models.db import BlobDB


class BlobStore(Protocol):
    """Narrow persistence interface: whole values by key."""

    async def read(self, key: str) -> str | None: ...

    async def write(self, key: str, value: str) -> None: ...


class SqlBlobStore:
    """
    Blob store backed by the blob_store table.

    Writes are flushed but not committed; the session owner commits.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def read(self, key: str) -> str | None:
        result = await self.session.execute(select(BlobDB.value).where(BlobDB.key == key))
        return result.scalar_one_or_none()

    async def write(self, key: str, value: str) -> None:
        existing = await self.session.get(BlobDB, key)
        if existing is None:
            self.session.add(BlobDB(key=key, value=value))
        else:
            existing.value = value
        await self.session.flush()


class MemoryBlobStore:
    """Blob store held in a dict, for scripts and tests."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.blobs: dict[str, str] = dict(initial or {})

    async def read(self, key: str) -> str | None:
        return self.blobs.get(key)

    async def write(self, key: str, value: str) -> None:
        self.blobs[key] = value
