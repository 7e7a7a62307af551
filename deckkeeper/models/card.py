from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class ParsedLine:
    """
    One card line read from a pasted decklist.

    Attributes:
        name: Card name as typed by the user
        quantity: Number of copies (always positive)
    """

    name: str
    quantity: int


@dataclass(frozen=True, slots=True)
class CardEntry:
    """
    A decklist line enriched with card database metadata.

    Every pasted line becomes its own entry; lines naming the same card
    are not merged. Metadata fields are empty when the lookup missed.

    Attributes:
        name: Card name as typed by the user
        quantity: Number of copies
        image_url: Normal-size card image, None if unknown
        mana_cost: Mana cost symbols (e.g., "{2}{U}{U}"), "" if unknown
        cmc: Converted mana cost from the database, None if unknown
        type: Full type line (e.g., "Creature — Human Wizard")
        rarity: common, uncommon, rare, mythic or "" if unknown
    """

    name: str
    quantity: int
    image_url: str | None = None
    mana_cost: str = ""
    cmc: float | None = None
    type: str = ""
    rarity: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "quantity": self.quantity,
            "imageUrl": self.image_url,
            "manaCost": self.mana_cost,
            "cmc": self.cmc,
            "type": self.type,
            "rarity": self.rarity,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CardEntry":
        return cls(
            name=str(data.get("name", "")),
            quantity=int(data.get("quantity") or 1),
            image_url=data.get("imageUrl"),
            mana_cost=data.get("manaCost") or "",
            cmc=data.get("cmc"),
            type=data.get("type") or "",
            rarity=data.get("rarity") or "",
        )
