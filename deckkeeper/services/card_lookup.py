"""
Scryfall card lookup.

Resolves a user-typed card name to Scryfall card data. An exact-name
lookup is tried first; if Scryfall rejects it, a free-text search is made
and its first result used. Names typed by users often differ from the
canonical name in capitalization or punctuation.

API docs: https://scryfall.com/docs/api/cards
"""

import logging
from typing import Any, Protocol

import httpx

from deckkeeper.config import settings
from deckkeeper.models.card import CardEntry, ParsedLine

logger = logging.getLogger(__name__)


class CardLookup(Protocol):
    """Anything that can resolve a card name to card data."""

    async def fetch_card(self, name: str) -> dict[str, Any] | None: ...


class ScryfallClient:
    """
    Async Scryfall client used during deck import.

    Not-found cards and transport failures both come back as None; the
    failure is logged but never raised, so one bad card cannot stop an
    import. No retries are attempted.

    Usage:
        async with ScryfallClient() as lookup:
            data = await lookup.fetch_card("Sol Ring")
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        user_agent: str | None = None,
    ) -> None:
        self.base_url = (base_url or settings.scryfall_api_url).rstrip("/")
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            headers={
                "User-Agent": user_agent or settings.scryfall_user_agent,
                "Accept": "application/json",
            },
            timeout=timeout if timeout is not None else settings.lookup_timeout_seconds,
            follow_redirects=True,
        )

    async def __aenter__(self) -> "ScryfallClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_client:
            await self._client.aclose()

    async def fetch_named(self, name: str) -> dict[str, Any] | None:
        """Exact-name lookup. Returns None on any non-success response."""
        response = await self._client.get(
            f"{self.base_url}/cards/named", params={"exact": name}
        )
        if not response.is_success:
            return None
        data: dict[str, Any] = response.json()
        return data

    async def search_first(self, query: str) -> dict[str, Any] | None:
        """Free-text search. Returns the first match or None."""
        response = await self._client.get(f"{self.base_url}/cards/search", params={"q": query})
        if not response.is_success:
            return None
        results = response.json().get("data") or []
        if not results:
            return None
        first: dict[str, Any] = results[0]
        return first

    async def fetch_card(self, name: str) -> dict[str, Any] | None:
        """
        Resolve a card name, falling back from exact lookup to search.

        Args:
            name: Card name as typed by the user

        Returns:
            Scryfall card object, or None if not found or the request failed
        """
        try:
            data = await self.fetch_named(name)
            if data is None:
                logger.debug("Exact lookup missed for %r, trying search", name)
                data = await self.search_first(name)
        except httpx.HTTPError as e:
            logger.warning("Error fetching Scryfall card %r: %s", name, e)
            return None
        except ValueError as e:
            logger.warning("Invalid Scryfall response for %r: %s", name, e)
            return None

        if data is None:
            logger.warning("Card not found on Scryfall: %r", name)
        return data


def _first_face(card: dict[str, Any]) -> dict[str, Any]:
    faces = card.get("card_faces") or []
    if faces and isinstance(faces[0], dict):
        first: dict[str, Any] = faces[0]
        return first
    return {}


def extract_image_url(card: dict[str, Any] | None) -> str | None:
    """
    Extract the normal-size image URL from card data.

    Multi-faced cards have no top-level image; the front face's image
    is used instead.
    """
    if not card:
        return None
    image_uris = card.get("image_uris") or {}
    url = image_uris.get("normal")
    if url:
        return str(url)
    face_uris = _first_face(card).get("image_uris") or {}
    face_url = face_uris.get("normal")
    return str(face_url) if face_url else None


def extract_cmc(card: dict[str, Any] | None) -> float | None:
    """
    Extract converted mana cost, falling back to the front face.

    An explicit 0 is returned as 0, not None.
    """
    if not card:
        return None
    cmc = card.get("cmc")
    if cmc is None:
        cmc = _first_face(card).get("cmc")
    return float(cmc) if cmc is not None else None


def card_entry_from_lookup(line: ParsedLine, card: dict[str, Any] | None) -> CardEntry:
    """
    Build a decklist entry from a parsed line and its lookup result.

    Args:
        line: The parsed decklist line
        card: Scryfall card data, or None if the lookup missed

    Returns:
        CardEntry keeping the user's name and quantity. Metadata fields
        are empty when card is None.
    """
    if not card:
        return CardEntry(name=line.name, quantity=line.quantity)

    return CardEntry(
        name=line.name,
        quantity=line.quantity,
        image_url=extract_image_url(card),
        mana_cost=card.get("mana_cost") or "",
        cmc=extract_cmc(card),
        type=card.get("type_line") or "",
        rarity=card.get("rarity") or "",
    )
