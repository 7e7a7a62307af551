"""Tests for Scryfall card lookup."""

import httpx
import pytest
import respx

from deckkeeper.models.card import ParsedLine
from deckkeeper.services.card_lookup import (
    ScryfallClient,
    card_entry_from_lookup,
    extract_cmc,
    extract_image_url,
)

SCRYFALL = "https://api.scryfall.com"


@pytest.fixture
def sol_ring() -> dict:
    return {
        "object": "card",
        "name": "Sol Ring",
        "mana_cost": "{1}",
        "cmc": 1.0,
        "type_line": "Artifact",
        "rarity": "uncommon",
        "image_uris": {"normal": "https://cards.scryfall.io/normal/sol-ring.jpg"},
    }


@pytest.fixture
def modal_dfc() -> dict:
    """Double-faced card: images and cmc only on the faces."""
    return {
        "object": "card",
        "name": "Valki, God of Lies // Tibalt, Cosmic Impostor",
        "type_line": "Legendary Creature — God // Legendary Planeswalker — Tibalt",
        "rarity": "mythic",
        "card_faces": [
            {
                "name": "Valki, God of Lies",
                "mana_cost": "{1}{B}",
                "cmc": 2.0,
                "image_uris": {"normal": "https://cards.scryfall.io/normal/valki.jpg"},
            },
            {
                "name": "Tibalt, Cosmic Impostor",
                "mana_cost": "{5}{B}{R}",
                "image_uris": {"normal": "https://cards.scryfall.io/normal/tibalt.jpg"},
            },
        ],
    }


class TestFetchCard:
    """Exact lookup with search fallback."""

    @respx.mock
    async def test_exact_match(self, sol_ring: dict) -> None:
        """Exact hit returns the card without searching."""
        named = respx.get(f"{SCRYFALL}/cards/named", params={"exact": "Sol Ring"}).mock(
            return_value=httpx.Response(200, json=sol_ring)
        )
        search = respx.get(f"{SCRYFALL}/cards/search")

        async with ScryfallClient(base_url=SCRYFALL) as client:
            card = await client.fetch_card("Sol Ring")

        assert card is not None
        assert card["name"] == "Sol Ring"
        assert named.called
        assert not search.called

    @respx.mock
    async def test_falls_back_to_search(self, sol_ring: dict) -> None:
        """A failed exact lookup uses the first search result."""
        respx.get(f"{SCRYFALL}/cards/named").mock(
            return_value=httpx.Response(404, json={"object": "error", "code": "not_found"})
        )
        other = dict(sol_ring, name="Sol Talisman")
        search = respx.get(f"{SCRYFALL}/cards/search", params={"q": "sol ring"}).mock(
            return_value=httpx.Response(200, json={"object": "list", "data": [sol_ring, other]})
        )

        async with ScryfallClient(base_url=SCRYFALL) as client:
            card = await client.fetch_card("sol ring")

        assert search.called
        assert card is not None
        assert card["name"] == "Sol Ring"

    @respx.mock
    async def test_both_miss_returns_none(self) -> None:
        respx.get(f"{SCRYFALL}/cards/named").mock(return_value=httpx.Response(404))
        respx.get(f"{SCRYFALL}/cards/search").mock(return_value=httpx.Response(404))

        async with ScryfallClient(base_url=SCRYFALL) as client:
            assert await client.fetch_card("Not A Real Card") is None

    @respx.mock
    async def test_empty_search_results_return_none(self) -> None:
        respx.get(f"{SCRYFALL}/cards/named").mock(return_value=httpx.Response(404))
        respx.get(f"{SCRYFALL}/cards/search").mock(
            return_value=httpx.Response(200, json={"object": "list", "data": []})
        )

        async with ScryfallClient(base_url=SCRYFALL) as client:
            assert await client.fetch_card("Zzzz") is None

    @respx.mock
    async def test_transport_error_returns_none(self) -> None:
        """Network failures are logged and treated as a miss."""
        respx.get(f"{SCRYFALL}/cards/named").mock(side_effect=httpx.ConnectError("offline"))

        async with ScryfallClient(base_url=SCRYFALL) as client:
            assert await client.fetch_card("Sol Ring") is None

    @respx.mock
    async def test_invalid_json_returns_none(self) -> None:
        respx.get(f"{SCRYFALL}/cards/named").mock(
            return_value=httpx.Response(200, content=b"<html>oops</html>")
        )

        async with ScryfallClient(base_url=SCRYFALL) as client:
            assert await client.fetch_card("Sol Ring") is None

    @respx.mock
    async def test_uses_provided_client(self, sol_ring: dict) -> None:
        """An injected httpx client is used and left open."""
        respx.get(f"{SCRYFALL}/cards/named").mock(return_value=httpx.Response(200, json=sol_ring))

        async with httpx.AsyncClient() as http_client:
            async with ScryfallClient(client=http_client, base_url=SCRYFALL) as client:
                card = await client.fetch_card("Sol Ring")
            assert not http_client.is_closed

        assert card is not None


class TestExtraction:
    def test_image_from_top_level(self, sol_ring: dict) -> None:
        assert extract_image_url(sol_ring) == "https://cards.scryfall.io/normal/sol-ring.jpg"

    def test_image_from_first_face(self, modal_dfc: dict) -> None:
        assert extract_image_url(modal_dfc) == "https://cards.scryfall.io/normal/valki.jpg"

    def test_image_missing(self) -> None:
        assert extract_image_url({"name": "Token"}) is None
        assert extract_image_url(None) is None

    def test_cmc_from_top_level(self, sol_ring: dict) -> None:
        assert extract_cmc(sol_ring) == 1.0

    def test_cmc_from_first_face(self, modal_dfc: dict) -> None:
        assert extract_cmc(modal_dfc) == 2.0

    def test_explicit_zero_cmc_kept(self) -> None:
        assert extract_cmc({"name": "Ornithopter", "cmc": 0.0}) == 0.0

    def test_cmc_missing(self) -> None:
        assert extract_cmc({"name": "Mystery"}) is None


class TestCardEntryFromLookup:
    def test_found_card(self, sol_ring: dict) -> None:
        entry = card_entry_from_lookup(ParsedLine("sol ring", 1), sol_ring)

        assert entry.name == "sol ring"  # user's spelling is kept
        assert entry.quantity == 1
        assert entry.image_url == "https://cards.scryfall.io/normal/sol-ring.jpg"
        assert entry.mana_cost == "{1}"
        assert entry.cmc == 1.0
        assert entry.type == "Artifact"
        assert entry.rarity == "uncommon"

    def test_missing_card(self) -> None:
        entry = card_entry_from_lookup(ParsedLine("Unknown Card", 2), None)

        assert entry.name == "Unknown Card"
        assert entry.quantity == 2
        assert entry.image_url is None
        assert entry.mana_cost == ""
        assert entry.cmc is None
        assert entry.type == ""
        assert entry.rarity == ""
