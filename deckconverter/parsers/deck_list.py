"""
Parser for plain text deck lists.

Supported line formats (first match wins):
    Arena:       4 Lightning Bolt (LEB) 163
    Workstation: SB: 4 [LEB] Lightning Bolt
    Generic:     SB: 4x Lightning Bolt # comment   (MTGO, TappedOut, ...)

Deck lists disagree on how the sideboard is delimited: a blank line, an
"SB:" prefix on each sideboard line, or a "Sideboard" header line. A blank
line only opens a provisional sideboard. It is retracted (merged back into
the main deck) when:
    - the first "SB:" line shows up while the provisional sideboard holds cards
    - the input ends after several blank lines and no "SB:" line at all
"""

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass, replace
from enum import Enum
from pathlib import Path

from deckconverter.models.card_names import CardNames
from deckconverter.models.failure import DeckListEncodingError

logger = logging.getLogger(__name__)

# TappedOut exports cards without a known printing with this set code
PLACEHOLDER_SET_CODE = "000"

SIDEBOARD_HEADER = "Sideboard"
MAYBEBOARD_HEADER = "Maybeboard"
COMMENT_PREFIX = "//"


class Zone(str, Enum):
    """Part of a deck list a card belongs to."""

    MAIN = "main"
    SIDEBOARD = "sideboard"
    MAYBEBOARD = "maybeboard"


@dataclass(frozen=True, slots=True)
class LineFormat:
    """
    A card line grammar.

    Patterns must define the `count` and `name` groups, and may define
    `set`, `sideboard` and `number`.
    """

    name: str
    pattern: re.Pattern[str]


LINE_FORMATS: tuple[LineFormat, ...] = (
    # "4 Lightning Bolt (LEB) 163"
    LineFormat(
        "arena",
        re.compile(
            r"^\s*(?P<count>\d+)\s+(?P<name>.+)\s+\((?P<set>[A-Z0-9_]{2,})\)"
            r"(\s+(?P<number>\d+[ab]*))?$"
        ),
    ),
    # "SB: 4 [LEB] Lightning Bolt"
    LineFormat(
        "workstation",
        re.compile(r"^(?P<sideboard>SB:)?\s*(?P<count>\d+)\s+\[(?P<set>[A-Z0-9_]+)\]\s+(?P<name>.+)$"),
    ),
    # "SB: 4x Lightning Bolt # comment"
    LineFormat(
        "generic",
        re.compile(r"^(?P<sideboard>SB:)?\s*(?P<count>\d+)x?\s+(?P<name>[^#]+)(\s+#(?P<comment>.*))?$"),
    ),
)


@dataclass(frozen=True, slots=True)
class ParseState:
    """
    Cross-line parser state.

    Attributes:
        zone: Zone receiving the next card
        sideboard_marker_seen: An "SB:" line was found; the sideboard is confirmed
        blank_line_count: Blank lines seen since the first main deck card
    """

    zone: Zone = Zone.MAIN
    sideboard_marker_seen: bool = False
    blank_line_count: int = 0


@dataclass
class ParsedDeck:
    """
    Result of parsing a deck list.

    Each zone is None when no card was ever filed under it.
    """

    main: CardNames | None = None
    sideboard: CardNames | None = None
    maybeboard: CardNames | None = None

    def get(self, zone: Zone) -> CardNames | None:
        return getattr(self, zone.value)

    def insert(self, zone: Zone, name: str, set_code: str | None, count: int) -> None:
        """File a card under a zone, creating the zone on first use."""
        cards = self.get(zone)
        if cards is None:
            cards = CardNames()
            setattr(self, zone.value, cards)
        cards.insert(name, set_code, count)

    def retract_sideboard(self) -> None:
        """Move every sideboard card back into the main deck."""
        if self.sideboard is None:
            return
        if self.main is None:
            self.main = CardNames()
        self.main.merge(self.sideboard)
        self.sideboard = None


def _normalize_name(raw_name: str) -> str:
    name = raw_name.strip()
    # Some formats use 3 slashes for split cards, Scryfall uses 2
    if "///" in name:
        name = name.replace("///", "//")
    return name


def _normalize_set(raw_set: str | None) -> str | None:
    if not raw_set:
        return None
    if raw_set == PLACEHOLDER_SET_CODE:
        logger.debug("Ignoring set code %s", raw_set)
        return None
    return raw_set


def parse_card_line(line: str, deck: ParsedDeck, state: ParseState) -> ParseState:
    """
    Parse a single card line and file the card under the current zone.

    Lines matching no format are dropped. A line with an unusable count is
    logged and dropped without affecting the rest of the parse.

    Args:
        line: Deck list line (not blank, not a header or comment)
        deck: Zones being filled
        state: State before this line

    Returns:
        State after this line
    """
    for line_format in LINE_FORMATS:
        match = line_format.pattern.match(line)
        if match is None:
            continue

        groups = match.groupdict()

        if groups.get("sideboard") and not state.sideboard_marker_seen:
            logger.debug('Switched to sideboard (found line starting with "SB:")')
            if deck.sideboard is not None and len(deck.sideboard) > 0:
                # The sideboard was opened by a blank line, but that blank
                # line was only a separator inside the main deck
                logger.debug("Merging %d provisional sideboard card(s) into main", len(deck.sideboard))
                deck.retract_sideboard()
            state = replace(state, zone=Zone.SIDEBOARD, sideboard_marker_seen=True)

        name = _normalize_name(groups["name"])
        set_code = _normalize_set(groups.get("set"))

        try:
            count = int(groups["count"])
        except ValueError as e:
            logger.error(
                "Error when parsing count for %s: %s",
                name,
                e,
                extra={"card_name": name, "cause": str(e)},
            )
            return state
        if count < 1:
            logger.error(
                "Invalid count %d for %s",
                count,
                name,
                extra={"card_name": name, "cause": f"invalid count {count}"},
            )
            return state

        logger.debug(
            "Found card: name=%s, count=%d, set=%s, zone=%s, format=%s",
            name,
            count,
            set_code,
            state.zone.value,
            line_format.name,
        )
        deck.insert(state.zone, name, set_code, count)
        return state

    return state


def parse_deck_line(line: str, deck: ParsedDeck, state: ParseState) -> ParseState:
    """
    Classify and process one deck list line.

    Args:
        line: Raw line, with or without its line terminator
        deck: Zones being filled
        state: State before this line

    Returns:
        State after this line
    """
    line = line.rstrip("\r\n")

    if not line:
        # A blank line after main deck cards may separate the sideboard
        if deck.main is not None and len(deck.main) > 0:
            if state.zone is Zone.MAIN:
                logger.debug("Switched to sideboard (found empty line)")
                state = replace(state, zone=Zone.SIDEBOARD)
            state = replace(state, blank_line_count=state.blank_line_count + 1)
        return state

    if line.startswith(SIDEBOARD_HEADER):
        if state.zone is Zone.MAIN:
            logger.debug("Switched to sideboard (found header)")
            state = replace(state, zone=Zone.SIDEBOARD)
        return state

    if line.startswith(MAYBEBOARD_HEADER):
        logger.debug("Switched to maybeboard (found header)")
        return replace(state, zone=Zone.MAYBEBOARD)

    if line.startswith(COMMENT_PREFIX):
        return state

    return parse_card_line(line, deck, state)


def parse_deck_lines(lines: Iterable[str]) -> ParsedDeck:
    """
    Parse deck list lines into main deck, sideboard and maybeboard.

    Args:
        lines: Deck list lines (a file object works)

    Returns:
        ParsedDeck with the zones that received cards

    Raises:
        OSError: If reading the lines fails
    """
    deck = ParsedDeck()
    state = ParseState()

    for line in lines:
        state = parse_deck_line(line, deck, state)

    if deck.sideboard is not None and not state.sideboard_marker_seen and state.blank_line_count > 1:
        # Several blank lines and no "SB:" line: the blank lines were
        # formatting, there was no sideboard
        logger.debug("Merging sideboard into main (%d empty lines, no SB: line)", state.blank_line_count)
        deck.retract_sideboard()

    for zone in Zone:
        cards = deck.get(zone)
        if cards is None:
            logger.debug("%s: 0 cards", zone.value.capitalize())
        else:
            logger.debug("%s: %d different card(s)\n%s", zone.value.capitalize(), len(cards), cards)

    return deck


def parse_deck_text(text: str) -> ParsedDeck:
    """Parse a deck list held in a string."""
    return parse_deck_lines(text.splitlines())


def parse_deck_file(path: Path) -> ParsedDeck:
    """
    Parse a UTF-8 deck list file.

    Raises:
        OSError: If the file can't be opened or read
        DeckListEncodingError: If the file is not valid UTF-8
    """
    try:
        with open(path, encoding="utf-8") as f:
            return parse_deck_lines(f)
    except UnicodeDecodeError as e:
        raise DeckListEncodingError(str(path), detail=str(e)) from e
