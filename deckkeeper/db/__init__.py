from deckkeeper.db.blob_store import BlobStore, MemoryBlobStore, SqlBlobStore
from deckkeeper.db.database import get_session, init_db
from deckkeeper.db.store import CollectionStore

__all__ = [
    "BlobStore",
    "CollectionStore",
    "MemoryBlobStore",
    "SqlBlobStore",
    "get_session",
    "init_db",
]
