from dataclasses import dataclass, field
from typing import Any

from deckkeeper.models.card import CardEntry


@dataclass(frozen=True, slots=True)
class Commander:
    """The featured card of a deck, tracked apart from the decklist."""

    name: str
    image_url: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "imageUrl": self.image_url}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Commander":
        return cls(name=str(data.get("name", "")), image_url=data.get("imageUrl"))


@dataclass(frozen=True, slots=True)
class DeckStats:
    """
    Game record for a deck.

    total_games always equals wins + losses; mulligans are tracked
    separately and never count as games.
    """

    wins: int = 0
    losses: int = 0
    mulligans: int = 0
    total_games: int = 0

    @property
    def win_rate(self) -> float:
        """Win percentage rounded to one decimal, 0 when no games played."""
        if self.total_games <= 0:
            return 0.0
        return round(self.wins / self.total_games * 100, 1)

    def to_dict(self) -> dict[str, int]:
        return {
            "wins": self.wins,
            "losses": self.losses,
            "mulligans": self.mulligans,
            "totalGames": self.total_games,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DeckStats":
        """Decode stored stats. A stored totalGames is ignored; it is always wins + losses."""
        wins = max(0, int(data.get("wins") or 0))
        losses = max(0, int(data.get("losses") or 0))
        return cls(
            wins=wins,
            losses=losses,
            mulligans=max(0, int(data.get("mulligans") or 0)),
            total_games=wins + losses,
        )


@dataclass
class Deck:
    """
    An imported deck.

    Attributes:
        id: Unique identifier derived from the creation timestamp
        name: Deck name chosen by the user
        commander: Featured card, None if none could be determined
        decklist: Card entries in the order they were pasted
        stats: Win/loss/mulligan record
        notes: Free-form user notes
        created_at: ISO-8601 creation timestamp
    """

    id: str
    name: str
    commander: Commander | None = None
    decklist: list[CardEntry] = field(default_factory=list)
    stats: DeckStats = field(default_factory=DeckStats)
    notes: str = ""
    created_at: str = ""

    def card_count(self) -> int:
        """Number of decklist entries (one per pasted line)."""
        return len(self.decklist)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "commander": self.commander.to_dict() if self.commander else None,
            "decklist": [card.to_dict() for card in self.decklist],
            "stats": self.stats.to_dict(),
            "notes": self.notes,
            "createdAt": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Deck":
        commander = data.get("commander")
        decklist = data.get("decklist")
        stats = data.get("stats")
        return cls(
            id=str(data["id"]),
            name=str(data.get("name", "")),
            commander=Commander.from_dict(commander) if isinstance(commander, dict) else None,
            decklist=[
                CardEntry.from_dict(card)
                for card in (decklist if isinstance(decklist, list) else [])
                if isinstance(card, dict)
            ],
            stats=DeckStats.from_dict(stats) if isinstance(stats, dict) else DeckStats(),
            notes=data.get("notes") or "",
            created_at=data.get("createdAt") or "",
        )
