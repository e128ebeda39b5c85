from typing import Any

import pytest

from deckconverter.models.failure import CardLookupError, CardNotFoundError
from deckconverter.models.scryfall import Ruling, ScryfallCard


class FakeLookup:
    """In-memory card lookup recording every call."""

    def __init__(
        self,
        cards: list[dict[str, Any]],
        rulings: dict[str, list[dict[str, Any]]] | None = None,
        failing_ids: frozenset[str] = frozenset(),
    ) -> None:
        parsed = [ScryfallCard.model_validate(card) for card in cards]
        self.by_name = {card.name: card for card in parsed}
        self.by_id = {card.id: card for card in parsed}
        self.rulings = rulings or {}
        self.failing_ids = failing_ids
        self.calls: list[tuple[str, ...]] = []

    def get_card_by_name(
        self, name: str, exact: bool = False, set_code: str | None = None
    ) -> ScryfallCard:
        self.calls.append(("named", name, set_code or ""))
        card = self.by_name.get(name)
        if card is None:
            raise CardNotFoundError(name)
        return card

    def get_card(self, card_id: str) -> ScryfallCard:
        self.calls.append(("card", card_id))
        if card_id in self.failing_ids:
            raise CardLookupError(message=f"Scryfall error for {card_id}: HTTP 500")
        card = self.by_id.get(card_id)
        if card is None:
            raise CardNotFoundError(card_id)
        return card

    def get_rulings(self, card_id: str) -> list[Ruling]:
        self.calls.append(("rulings", card_id))
        if card_id in self.failing_ids:
            raise CardLookupError(message=f"Scryfall error for {card_id}: HTTP 500")
        return [Ruling.model_validate(r) for r in self.rulings.get(card_id, [])]


def image_uris(slug: str) -> dict[str, str]:
    return {
        "small": f"https://img.test/small/{slug}.jpg",
        "normal": f"https://img.test/normal/{slug}.jpg",
        "large": f"https://img.test/large/{slug}.jpg",
        "png": f"https://img.test/png/{slug}.png",
    }


@pytest.fixture
def scryfall_cards() -> list[dict[str, Any]]:
    """Scryfall-like card objects covering every layout branch."""
    return [
        {
            "id": "bolt-id",
            "name": "Lightning Bolt",
            "layout": "normal",
            "mana_cost": "{R}",
            "type_line": "Instant",
            "oracle_text": "Lightning Bolt deals 3 damage to any target.",
            "image_uris": image_uris("bolt"),
            "highres_image": True,
        },
        {
            "id": "forest-id",
            "name": "Forest",
            "layout": "normal",
            "type_line": "Basic Land — Forest",
            "oracle_text": "({T}: Add {G}.)",
            "image_uris": image_uris("forest"),
            "highres_image": False,
        },
        {
            "id": "negate-id",
            "name": "Negate",
            "layout": "normal",
            "type_line": "Instant",
            "oracle_text": "Counter target noncreature spell.",
            "image_uris": image_uris("negate"),
            "highres_image": True,
        },
        {
            "id": "delver-id",
            "name": "Delver of Secrets // Insectile Aberration",
            "layout": "transform",
            "highres_image": True,
            "card_faces": [
                {
                    "name": "Delver of Secrets",
                    "type_line": "Creature — Human Wizard",
                    "oracle_text": "At the beginning of your upkeep, look at the top card of your library.",
                    "power": "1",
                    "toughness": "1",
                    "image_uris": image_uris("delver-front"),
                },
                {
                    "name": "Insectile Aberration",
                    "type_line": "Creature — Human Insect",
                    "oracle_text": "Flying",
                    "power": "3",
                    "toughness": "2",
                    "image_uris": image_uris("delver-back"),
                },
            ],
        },
        {
            "id": "fire-ice-id",
            "name": "Fire // Ice",
            "layout": "split",
            "image_uris": image_uris("fire-ice"),
            "highres_image": True,
            "card_faces": [
                {
                    "name": "Fire",
                    "type_line": "Instant",
                    "oracle_text": "Fire deals 2 damage divided as you choose.",
                },
                {
                    "name": "Ice",
                    "type_line": "Instant",
                    "oracle_text": "Tap target permanent.\nDraw a card.",
                },
            ],
        },
        {
            "id": "bruna-id",
            "name": "Bruna, the Fading Light",
            "layout": "meld",
            "type_line": "Legendary Creature — Angel Horror",
            "oracle_text": "Flying, vigilance",
            "power": "5",
            "toughness": "7",
            "image_uris": image_uris("bruna"),
            "highres_image": True,
            "all_parts": [
                {
                    "id": "bruna-id",
                    "component": "meld_part",
                    "name": "Bruna, the Fading Light",
                    "uri": "https://api.scryfall.com/cards/bruna-id",
                },
                {
                    "id": "brisela-id",
                    "component": "meld_result",
                    "name": "Brisela, Voice of Nightmares",
                    "uri": "https://api.scryfall.com/cards/brisela-id",
                },
            ],
        },
        {
            "id": "brisela-id",
            "name": "Brisela, Voice of Nightmares",
            "layout": "meld",
            "type_line": "Legendary Creature — Eldrazi Angel",
            "oracle_text": "Flying, first strike, vigilance, lifelink",
            "power": "9",
            "toughness": "10",
            "image_uris": image_uris("brisela"),
            "highres_image": True,
        },
        {
            "id": "gisela-id",
            "name": "Gisela, the Broken Blade",
            "layout": "meld",
            "type_line": "Legendary Creature — Angel Horror",
            "image_uris": image_uris("gisela"),
            "highres_image": True,
            "all_parts": [
                {
                    "id": "gisela-id",
                    "component": "meld_part",
                    "name": "Gisela, the Broken Blade",
                    "uri": "https://api.scryfall.com/cards/gisela-id",
                },
            ],
        },
        {
            "id": "graf-id",
            "name": "Graf Rats",
            "layout": "meld",
            "type_line": "Creature — Rat",
            "image_uris": image_uris("graf-rats"),
            "all_parts": [
                {
                    "id": "chittering-id",
                    "component": "meld_result",
                    "name": "Chittering Host",
                    "uri": "https://api.scryfall.com/cards/chittering-id",
                },
            ],
        },
        {
            "id": "scanless-id",
            "name": "Scanless Wonder",
            "layout": "normal",
            "type_line": "Artifact",
        },
    ]


@pytest.fixture
def lookup(scryfall_cards: list[dict[str, Any]]) -> FakeLookup:
    return FakeLookup(
        scryfall_cards,
        rulings={
            "bolt-id": [
                {
                    "source": "wotc",
                    "published_at": "2004-10-04",
                    "comment": "The damage is dealt by Lightning Bolt.",
                }
            ]
        },
        failing_ids=frozenset({"chittering-id"}),
    )


@pytest.fixture
def sample_deck_text() -> str:
    """Sample MTGO deck list with a blank line separated sideboard."""
    return """4 Lightning Bolt
20 Forest

2 Negate"""


@pytest.fixture
def make_lookup() -> type[FakeLookup]:
    """FakeLookup factory for tests needing their own card set."""
    return FakeLookup
