from dataclasses import dataclass, field
from enum import Enum


class CardSize(str, Enum):
    """Physical size of the cards in a deck."""

    STANDARD = "standard"
    OVERSIZED = "oversized"


@dataclass(slots=True)
class ResolvedCard:
    """
    A card resolved to its playable representation.

    Attributes:
        name: Canonical card name (front face name for two-faced cards)
        description: Rules text, faces and rulings rendered as plain text
        image_url: Image of the primary state, at the requested quality
        count: Number of copies in the deck
        oversized: True for cards printed larger than standard size
        alternative_state: Back face or meld result (never has its own alternate)
    """

    name: str
    description: str
    image_url: str
    count: int = 1
    oversized: bool = False
    alternative_state: "ResolvedCard | None" = None

    def to_dict(self) -> dict[str, object]:
        data: dict[str, object] = {
            "name": self.name,
            "description": self.description,
            "image_url": self.image_url,
            "count": self.count,
            "oversized": self.oversized,
        }
        if self.alternative_state is not None:
            data["alternative_state"] = self.alternative_state.to_dict()
        return data


@dataclass
class Deck:
    """
    A resolved deck zone.

    Attributes:
        name: Deck name, with the zone label appended for non-main zones
        back_url: Image used for the back of every card
        cards: Resolved cards in deck list order
        card_size: Size of the cards in the deck (oversized when every card is)
    """

    name: str
    back_url: str
    cards: list[ResolvedCard] = field(default_factory=list)
    card_size: CardSize = CardSize.STANDARD

    def total_cards(self) -> int:
        """Total cards in the deck, all copies included."""
        return sum(card.count for card in self.cards)

    def to_dict(self) -> dict[str, object]:
        return {
            "name": self.name,
            "back_url": self.back_url,
            "card_size": self.card_size.value,
            "cards": [card.to_dict() for card in self.cards],
        }
