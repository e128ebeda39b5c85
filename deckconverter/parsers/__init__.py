from deckconverter.parsers.deck_list import (
    LINE_FORMATS,
    ParsedDeck,
    ParseState,
    Zone,
    parse_deck_file,
    parse_deck_line,
    parse_deck_lines,
    parse_deck_text,
)

__all__ = [
    "LINE_FORMATS",
    "ParseState",
    "ParsedDeck",
    "Zone",
    "parse_deck_file",
    "parse_deck_line",
    "parse_deck_lines",
    "parse_deck_text",
]
