"""
Deck conversion service.

Ties parsing and resolution together: a deck list becomes one Deck per
populated zone (main, then sideboard, then maybeboard).
"""

import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from deckconverter.models.deck import Deck
from deckconverter.models.options import ResolveOptions
from deckconverter.parsers.deck_list import ParsedDeck, Zone, parse_deck_file, parse_deck_lines
from deckconverter.services.card_resolver import CardResolver
from deckconverter.services.scryfall_client import CardLookup

logger = logging.getLogger(__name__)

ZONE_LABELS: dict[Zone, str] = {
    Zone.SIDEBOARD: "Sideboard",
    Zone.MAYBEBOARD: "Maybeboard",
}


def zone_deck_name(name: str, zone: Zone) -> str:
    """Deck name for a zone: the main deck keeps the plain name."""
    label = ZONE_LABELS.get(zone)
    return f"{name} - {label}" if label else name


class DeckConverter:
    """Converts deck lists into resolved decks."""

    def __init__(self, lookup: CardLookup, resolver: CardResolver | None = None) -> None:
        self._resolver = resolver or CardResolver(lookup)

    def from_parsed(self, parsed: ParsedDeck, name: str, options: ResolveOptions) -> list[Deck]:
        """
        Resolve every populated zone of a parsed deck list.

        Raises:
            KnownError: If any zone fails to resolve
        """
        decks: list[Deck] = []

        for zone in Zone:
            cards = parsed.get(zone)
            if cards is None:
                continue
            deck_name = zone_deck_name(name, zone)
            logger.info("Resolving %s (%d different card(s))", deck_name, len(cards))
            decks.append(self._resolver.resolve(cards, deck_name, options))

        return decks

    def from_lines(
        self,
        lines: Iterable[str],
        name: str,
        options: Mapping[str, Any] | None = None,
    ) -> list[Deck]:
        """
        Parse and resolve deck list lines.

        Args:
            lines: Deck list lines
            name: Deck name
            options: Raw conversion options (quality, show_rulings, back)

        Returns:
            One Deck per populated zone

        Raises:
            InvalidOptionError: If the options are invalid (checked before parsing)
            KnownError: If a zone fails to resolve
        """
        validated = ResolveOptions.from_mapping(options)
        parsed = parse_deck_lines(lines)
        return self.from_parsed(parsed, name, validated)

    def from_text(
        self,
        text: str,
        name: str,
        options: Mapping[str, Any] | None = None,
    ) -> list[Deck]:
        return self.from_lines(text.splitlines(), name, options)

    def from_file(self, path: Path, options: Mapping[str, Any] | None = None) -> list[Deck]:
        """
        Convert a deck list file. The deck is named after the file.

        Raises:
            OSError: If the file can't be read
            DeckListEncodingError: If the file is not valid UTF-8
        """
        name = path.stem
        logger.debug("Base file name: %s", name)

        validated = ResolveOptions.from_mapping(options)
        parsed = parse_deck_file(path)
        return self.from_parsed(parsed, name, validated)
