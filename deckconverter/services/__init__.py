from deckconverter.services.card_resolver import (
    CardResolver,
    build_card_description,
    build_card_face_description,
    build_card_faces_description,
    get_image_url,
    resolve_zone,
)
from deckconverter.services.deck_converter import DeckConverter, zone_deck_name
from deckconverter.services.scryfall_client import CardLookup, ScryfallClient

__all__ = [
    "CardLookup",
    "CardResolver",
    "DeckConverter",
    "ScryfallClient",
    "build_card_description",
    "build_card_face_description",
    "build_card_faces_description",
    "get_image_url",
    "resolve_zone",
    "zone_deck_name",
]
