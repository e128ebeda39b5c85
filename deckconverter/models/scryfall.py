"""
Card metadata as returned by the Scryfall API.

Only the fields needed to build playable cards are modeled; unknown fields
are ignored so API additions don't break parsing.
"""

from enum import Enum

from pydantic import BaseModel, Field


class CardLayout(str, Enum):
    """Card layouts with dedicated handling."""

    NORMAL = "normal"
    SPLIT = "split"
    FLIP = "flip"
    TRANSFORM = "transform"
    MODAL_DFC = "modal_dfc"
    MELD = "meld"
    ADVENTURE = "adventure"


# Layouts with several faces printed on a single image
SINGLE_IMAGE_LAYOUTS = frozenset({CardLayout.SPLIT, CardLayout.FLIP, CardLayout.ADVENTURE})

MELD_RESULT_COMPONENT = "meld_result"


class ImageURIs(BaseModel):
    small: str = ""
    normal: str = ""
    large: str = ""
    png: str = ""


class CardFace(BaseModel):
    """One face of a multi-face card."""

    name: str
    mana_cost: str = ""
    type_line: str = ""
    oracle_text: str = ""
    power: str | None = None
    toughness: str | None = None
    loyalty: str | None = None
    image_uris: ImageURIs | None = None


class RelatedCard(BaseModel):
    """A card linked to another (meld parts, tokens, combo pieces)."""

    id: str
    component: str
    name: str
    uri: str


class ScryfallCard(BaseModel):
    """A single card printing."""

    id: str
    name: str
    layout: str = CardLayout.NORMAL.value
    mana_cost: str = ""
    type_line: str = ""
    oracle_text: str = ""
    power: str | None = None
    toughness: str | None = None
    loyalty: str | None = None
    image_uris: ImageURIs | None = None
    highres_image: bool = False
    oversized: bool = False
    all_parts: list[RelatedCard] = Field(default_factory=list)
    card_faces: list[CardFace] = Field(default_factory=list)

    def meld_result_id(self) -> str | None:
        """
        ID of the meld result linked to this card.

        The ID is the last path segment of the related card URI.
        """
        for part in self.all_parts:
            if part.component == MELD_RESULT_COMPONENT:
                card_id = part.uri.rstrip("/").rsplit("/", 1)[-1]
                return card_id or None
        return None


class Ruling(BaseModel):
    source: str = ""
    published_at: str = ""
    comment: str
