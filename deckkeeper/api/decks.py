"""
Deck API endpoints.

Import, browse, annotate and track results for decks in the collection.
"""

from typing import Annotated, Literal

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, Field

from deckkeeper.api.dependencies import get_lookup, get_pacing, get_store
from deckkeeper.db.store import CollectionStore
from deckkeeper.models.card import CardEntry
from deckkeeper.models.deck import Deck
from deckkeeper.models.errors import (
    DeckImportError,
    DeckImportValidationError,
    DeckNotFoundError,
)
from deckkeeper.services.card_lookup import CardLookup
from deckkeeper.services.deck_import import import_deck
from deckkeeper.services.deck_service import (
    delete_deck,
    get_deck,
    quick_adjust_stat,
    update_notes,
    update_stats,
)
from deckkeeper.services.deck_stats import mana_value, primary_type, sort_decklist
from deckkeeper.services.pacing import PacingPolicy

router = APIRouter(prefix="/decks", tags=["decks"])


class CommanderResponse(BaseModel):
    name: str
    image_url: str | None = None


class StatsResponse(BaseModel):
    """Game record of a deck."""

    wins: int = 0
    losses: int = 0
    mulligans: int = 0
    total_games: int = 0
    win_rate: float = Field(default=0.0, description="Win percentage, one decimal")


class CardResponse(BaseModel):
    """A decklist entry with derived display fields."""

    name: str
    quantity: int
    image_url: str | None = None
    mana_cost: str = ""
    cmc: float | None = None
    type: str = ""
    rarity: str = ""
    mana_value: float = 0
    primary_type: str = "Unknown"


class DeckSummaryResponse(BaseModel):
    """A deck as shown in the deck list."""

    id: str
    name: str
    commander: CommanderResponse | None = None
    card_count: int = 0
    stats: StatsResponse
    created_at: str = ""


class DeckListResponse(BaseModel):
    decks: list[DeckSummaryResponse]
    count: int


class DeckDetailResponse(DeckSummaryResponse):
    """A deck with its decklist in the requested order."""

    notes: str = ""
    sort: str = "name"
    decklist: list[CardResponse] = Field(default_factory=list)


class DeckImportRequest(BaseModel):
    """Request model for importing a pasted decklist."""

    name: str = Field(..., description="Deck name", examples=["My Commander Deck"])
    commander: str | None = Field(
        default=None,
        description="Commander name. Defaults to the first card of the decklist.",
    )
    decklist: str = Field(
        ...,
        description='One card per line, e.g. "1 Sol Ring" or "1x Sol Ring"',
        examples=["1 Sol Ring\n1 Arcane Signet\n1 Command Tower"],
    )


class StatsUpdateRequest(BaseModel):
    """Values from the edit-stats form."""

    wins: int = Field(default=0, ge=0)
    losses: int = Field(default=0, ge=0)
    mulligans: int = Field(default=0, ge=0)
    notes: str | None = None


class NotesUpdateRequest(BaseModel):
    notes: str = ""


class DeleteResponse(BaseModel):
    id: str
    deleted: bool


def _stats_response(deck: Deck) -> StatsResponse:
    stats = deck.stats
    return StatsResponse(
        wins=stats.wins,
        losses=stats.losses,
        mulligans=stats.mulligans,
        total_games=stats.total_games,
        win_rate=stats.win_rate,
    )


def _commander_response(deck: Deck) -> CommanderResponse | None:
    if deck.commander is None:
        return None
    return CommanderResponse(name=deck.commander.name, image_url=deck.commander.image_url)


def _card_response(card: CardEntry) -> CardResponse:
    return CardResponse(
        name=card.name,
        quantity=card.quantity,
        image_url=card.image_url,
        mana_cost=card.mana_cost,
        cmc=card.cmc,
        type=card.type,
        rarity=card.rarity,
        mana_value=mana_value(card),
        primary_type=primary_type(card.type),
    )


def _summary_response(deck: Deck) -> DeckSummaryResponse:
    return DeckSummaryResponse(
        id=deck.id,
        name=deck.name,
        commander=_commander_response(deck),
        card_count=deck.card_count(),
        stats=_stats_response(deck),
        created_at=deck.created_at,
    )


def _detail_response(deck: Deck, sort: str = "name") -> DeckDetailResponse:
    return DeckDetailResponse(
        id=deck.id,
        name=deck.name,
        commander=_commander_response(deck),
        card_count=deck.card_count(),
        stats=_stats_response(deck),
        created_at=deck.created_at,
        notes=deck.notes,
        sort=sort,
        decklist=[_card_response(card) for card in sort_decklist(deck.decklist, sort)],
    )


def _not_found(e: DeckNotFoundError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.get("", response_model=DeckListResponse)
async def list_decks(
    store: Annotated[CollectionStore, Depends(get_store)],
) -> DeckListResponse:
    """All decks in the order they were imported."""
    collection = await store.load_all()
    decks = [_summary_response(deck) for deck in collection]
    return DeckListResponse(decks=decks, count=len(decks))


@router.post(
    "/import",
    response_model=DeckDetailResponse,
    status_code=status.HTTP_201_CREATED,
)
async def import_decklist(
    request: DeckImportRequest,
    store: Annotated[CollectionStore, Depends(get_store)],
    lookup: Annotated[CardLookup, Depends(get_lookup)],
    pacing: Annotated[PacingPolicy, Depends(get_pacing)],
) -> DeckDetailResponse:
    """
    Import a pasted decklist as a new deck.

    Every card is looked up on Scryfall one at a time, so large decklists
    take several seconds. Cards that cannot be found are kept without
    metadata. Returns the new deck; its id addresses the detail view.
    """
    try:
        deck = await import_deck(
            store,
            lookup,
            deck_name=request.name,
            decklist_text=request.decklist,
            commander_name=request.commander,
            pacing=pacing,
        )
    except DeckImportValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.reason) from e
    except DeckImportError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e),
        ) from e

    return _detail_response(deck)


@router.get("/{deck_id}", response_model=DeckDetailResponse)
async def get_deck_detail(
    deck_id: str,
    store: Annotated[CollectionStore, Depends(get_store)],
    sort: Annotated[Literal["name", "mana", "type"], Query()] = "name",
) -> DeckDetailResponse:
    """
    Get a deck with its decklist sorted for display.

    Sorting never changes the stored order. Returns 404 if deck not found.
    """
    try:
        deck = await get_deck(store, deck_id)
    except DeckNotFoundError as e:
        raise _not_found(e) from e
    return _detail_response(deck, sort)


@router.delete("/{deck_id}", response_model=DeleteResponse)
async def delete_deck_by_id(
    deck_id: str,
    store: Annotated[CollectionStore, Depends(get_store)],
) -> DeleteResponse:
    try:
        await delete_deck(store, deck_id)
    except DeckNotFoundError as e:
        raise _not_found(e) from e
    return DeleteResponse(id=deck_id, deleted=True)


@router.put("/{deck_id}/stats", response_model=DeckDetailResponse)
async def edit_stats(
    deck_id: str,
    request: StatsUpdateRequest,
    store: Annotated[CollectionStore, Depends(get_store)],
) -> DeckDetailResponse:
    """Overwrite wins, losses and mulligans. Total games becomes wins + losses."""
    try:
        deck = await update_stats(
            store,
            deck_id,
            wins=request.wins,
            losses=request.losses,
            mulligans=request.mulligans,
            notes=request.notes,
        )
    except DeckNotFoundError as e:
        raise _not_found(e) from e
    return _detail_response(deck)


@router.post("/{deck_id}/stats/{stat}/{direction}", response_model=DeckDetailResponse)
async def adjust_deck_stat(
    deck_id: str,
    stat: Literal["wins", "losses", "mulligans"],
    direction: Literal["increment", "decrement"],
    store: Annotated[CollectionStore, Depends(get_store)],
) -> DeckDetailResponse:
    """Add or remove one win, loss or mulligan. Stats never go below zero."""
    delta = 1 if direction == "increment" else -1
    try:
        deck = await quick_adjust_stat(store, deck_id, stat, delta)
    except DeckNotFoundError as e:
        raise _not_found(e) from e
    return _detail_response(deck)


@router.put("/{deck_id}/notes", response_model=DeckDetailResponse)
async def edit_notes(
    deck_id: str,
    request: NotesUpdateRequest,
    store: Annotated[CollectionStore, Depends(get_store)],
) -> DeckDetailResponse:
    try:
        deck = await update_notes(store, deck_id, request.notes)
    except DeckNotFoundError as e:
        raise _not_found(e) from e
    return _detail_response(deck)
