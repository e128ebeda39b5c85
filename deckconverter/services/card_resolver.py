"""
Card Variant Resolution Service.

Resolves the card references of one deck zone into playable cards, using a
card lookup (Scryfall) for images, layout and text.

Layouts are handled as follows:
    meld              front image, meld result as the (oversized) alternate state
    single image      normal cards, plus split, flip and adventure cards
    two faces         transform and modal cards, back face as the alternate state

INVARIANTS:
1. A failed primary lookup, rulings lookup or missing image aborts the zone
   (the error is raised, no partial deck is returned)
2. A meld card without a reachable meld result is skipped, not fatal
3. Lookups are sequential, spaced by a fixed delay
"""

import logging
import time
from collections.abc import Callable, Sequence
from typing import TypeVar

from deckconverter.config import HIGH_RESOLUTION_QUALITIES, ImageQuality, settings
from deckconverter.models.card_names import CardNames, CardReference
from deckconverter.models.deck import CardSize, Deck, ResolvedCard
from deckconverter.models.failure import CardLookupError, MissingImageError
from deckconverter.models.options import ResolveOptions
from deckconverter.models.scryfall import (
    SINGLE_IMAGE_LAYOUTS,
    CardFace,
    CardLayout,
    ImageURIs,
    Ruling,
    ScryfallCard,
)
from deckconverter.services.scryfall_client import CardLookup

logger = logging.getLogger(__name__)

T = TypeVar("T")


def get_image_url(
    uris: ImageURIs | None,
    highres_image: bool,
    quality: ImageQuality,
    name: str,
) -> str:
    """
    Pick the image URL for a quality tier.

    High resolution tiers fall back to "normal" when the card has no
    high resolution scan.

    Raises:
        MissingImageError: If the card has no image at all
    """
    if uris is None:
        raise MissingImageError(name)

    if quality in HIGH_RESOLUTION_QUALITIES and not highres_image:
        logger.warning(
            "High-resolution image not available for %s, using normal quality instead of %s",
            name,
            quality.value,
            extra={"card_name": name, "cause": "high-resolution image not available"},
        )
        quality = ImageQuality.NORMAL

    image_url: str = getattr(uris, quality.value)
    if not image_url:
        raise MissingImageError(name)
    return image_url


def _card_text(
    type_line: str,
    oracle_text: str,
    power: str | None,
    toughness: str | None,
    loyalty: str | None,
) -> str:
    parts = [type_line, oracle_text]
    if power is not None and toughness is not None:
        parts.append(f"{power}/{toughness}")
    elif loyalty is not None:
        parts.append(f"Loyalty: {loyalty}")
    return "\n\n".join(part for part in parts if part)


def _ruling_line(ruling: Ruling) -> str:
    if ruling.published_at:
        return f"- {ruling.published_at}: {ruling.comment}"
    return f"- {ruling.comment}"


def _rulings_text(rulings: Sequence[Ruling]) -> str:
    lines = ["Rulings:"]
    lines.extend(_ruling_line(ruling) for ruling in rulings)
    return "\n".join(lines)


def _with_rulings(text: str, rulings: Sequence[Ruling]) -> str:
    if not rulings:
        return text
    return f"{text}\n\n{_rulings_text(rulings)}" if text else _rulings_text(rulings)


def build_card_description(card: ScryfallCard, rulings: Sequence[Ruling] = ()) -> str:
    """Description of a single-faced card."""
    text = _card_text(card.type_line, card.oracle_text, card.power, card.toughness, card.loyalty)
    return _with_rulings(text, rulings)


def build_card_face_description(face: CardFace, rulings: Sequence[Ruling] = ()) -> str:
    """Description of one face of a two-faced card."""
    text = _card_text(face.type_line, face.oracle_text, face.power, face.toughness, face.loyalty)
    return _with_rulings(text, rulings)


def build_card_faces_description(faces: Sequence[CardFace], rulings: Sequence[Ruling] = ()) -> str:
    """Description of a card showing several faces on one image (split, flip, adventure)."""
    blocks = []
    for face in faces:
        text = _card_text(face.type_line, face.oracle_text, face.power, face.toughness, face.loyalty)
        blocks.append(f"{face.name}\n{text}" if text else face.name)
    return _with_rulings("\n\n".join(blocks), rulings)


class CardResolver:
    """
    Resolves CardNames -> Deck using a card lookup.

    CONTRACT:
    - Input: the card references of one zone
    - Output: a Deck holding one ResolvedCard per resolvable reference,
      OR a raised KnownError (no partial deck)
    """

    def __init__(
        self,
        lookup: CardLookup,
        api_call_interval: float | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """
        Initialize resolver.

        Args:
            lookup: Card data source
            api_call_interval: Delay between lookups in seconds.
                Defaults to the configured interval.
            sleep: Function used to wait between lookups
        """
        self._lookup = lookup
        self._interval = settings.api_call_interval if api_call_interval is None else api_call_interval
        self._sleep = sleep
        self._call_count = 0

    def _call(self, func: Callable[..., T], *args: object) -> T:
        """Run a lookup, waiting first if another lookup already ran."""
        if self._call_count > 0 and self._interval > 0:
            self._sleep(self._interval)
        self._call_count += 1
        return func(*args)

    def resolve(self, cards: CardNames, name: str, options: ResolveOptions) -> Deck:
        """
        Resolve every card of a zone.

        Args:
            cards: Card references of the zone, in deck list order
            name: Deck name (zone label already appended)
            options: Validated conversion options

        Returns:
            Deck with resolved cards

        Raises:
            CardLookupError: If a card or its rulings can't be looked up
            MissingImageError: If a card has no usable image
        """
        deck = Deck(name=name, back_url=options.back_url)

        for ref in cards.names:
            resolved = self._resolve_card(ref, cards.count(ref.name), options)
            if resolved is None:
                continue
            deck.cards.append(resolved)
            logger.info("Retrieved %s", ref.name)

        if deck.cards and all(card.oversized for card in deck.cards):
            # Planes, schemes and other oversized-only decks
            deck.card_size = CardSize.OVERSIZED

        return deck

    def _resolve_card(
        self,
        ref: CardReference,
        count: int,
        options: ResolveOptions,
    ) -> ResolvedCard | None:
        try:
            # Not exact: fuzzy search also matches names printed in other languages
            card = self._call(self._lookup.get_card_by_name, ref.name, False, ref.set_code)
        except CardLookupError as e:
            logger.error(
                "Card lookup failed for %s: %s",
                ref.name,
                e,
                extra={"card_name": ref.name, "cause": str(e)},
            )
            raise

        rulings: list[Ruling] = []
        if options.show_rulings:
            try:
                rulings = self._call(self._lookup.get_rulings, card.id)
            except CardLookupError as e:
                logger.error(
                    "Rulings lookup failed for %s: %s",
                    ref.name,
                    e,
                    extra={"card_name": ref.name, "cause": str(e)},
                )
                raise

        if card.layout == CardLayout.MELD:
            return self._resolve_meld(card, count, rulings, options)

        if len(card.card_faces) < 2 or card.layout in SINGLE_IMAGE_LAYOUTS:
            return self._resolve_single_image(card, count, rulings, options)

        return self._resolve_two_faces(card, count, rulings, options)

    def _resolve_meld(
        self,
        card: ScryfallCard,
        count: int,
        rulings: list[Ruling],
        options: ResolveOptions,
    ) -> ResolvedCard | None:
        meld_result_id = card.meld_result_id()
        if meld_result_id is None:
            logger.error(
                "No meld result found for card %s",
                card.name,
                extra={"card_name": card.name, "cause": "no meld result link"},
            )
            return None

        logger.debug("Querying meld result (card ID %s)", meld_result_id)

        try:
            meld_result = self._call(self._lookup.get_card, meld_result_id)
        except CardLookupError as e:
            logger.error(
                "Meld result lookup failed for %s: %s",
                card.name,
                e,
                extra={"card_name": card.name, "cause": str(e)},
            )
            return None

        return ResolvedCard(
            name=card.name,
            description=build_card_description(card, rulings),
            image_url=get_image_url(card.image_uris, card.highres_image, options.quality, card.name),
            count=count,
            alternative_state=ResolvedCard(
                name=meld_result.name,
                description=build_card_description(meld_result, rulings),
                image_url=get_image_url(
                    meld_result.image_uris,
                    meld_result.highres_image,
                    options.quality,
                    meld_result.name,
                ),
                oversized=True,
            ),
        )

    def _resolve_single_image(
        self,
        card: ScryfallCard,
        count: int,
        rulings: list[Ruling],
        options: ResolveOptions,
    ) -> ResolvedCard:
        if len(card.card_faces) > 1:
            description = build_card_faces_description(card.card_faces, rulings)
        else:
            description = build_card_description(card, rulings)

        return ResolvedCard(
            name=card.name,
            description=description,
            image_url=get_image_url(card.image_uris, card.highres_image, options.quality, card.name),
            count=count,
            oversized=card.oversized,
        )

    def _resolve_two_faces(
        self,
        card: ScryfallCard,
        count: int,
        rulings: list[Ruling],
        options: ResolveOptions,
    ) -> ResolvedCard:
        front, back = card.card_faces[0], card.card_faces[1]

        return ResolvedCard(
            name=front.name,
            description=build_card_face_description(front, rulings),
            image_url=get_image_url(front.image_uris, card.highres_image, options.quality, front.name),
            count=count,
            alternative_state=ResolvedCard(
                name=back.name,
                description=build_card_face_description(back, rulings),
                image_url=get_image_url(back.image_uris, card.highres_image, options.quality, back.name),
            ),
        )


def resolve_zone(
    cards: CardNames,
    name: str,
    options: ResolveOptions,
    lookup: CardLookup,
) -> list[ResolvedCard]:
    """Resolve one zone and return its cards."""
    return CardResolver(lookup).resolve(cards, name, options).cards
