from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from importlib.metadata import version as pkg_version

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from deckkeeper.api import decks_router, health_router
from deckkeeper.config import settings
from deckkeeper.db.database import init_db


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Create the blob store table on startup."""
    await init_db()
    yield


app = FastAPI(
    title=settings.app_name,
    version=pkg_version("deckkeeper"),
    lifespan=lifespan,
)

app.include_router(decks_router)
app.include_router(health_router)

# The deck browser runs as a separate local frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)
