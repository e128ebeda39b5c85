"""
Convert a deck list to resolved decks.

Reads a deck list file (or fetches a deck from a supported site), resolves
every card through Scryfall and prints the decks as JSON on stdout.

Usage:
    python -m deckconverter.jobs.convert_deck deck.txt -o quality=large -o show_rulings=true
"""

import argparse
import json
import logging
import sys
from pathlib import Path

import httpx

from deckconverter.config import settings
from deckconverter.models.deck import Deck
from deckconverter.models.failure import KnownError
from deckconverter.scrapers.deck_sites import fetch_deck
from deckconverter.services.deck_converter import DeckConverter
from deckconverter.services.scryfall_client import ScryfallClient

logger = logging.getLogger(__name__)


def parse_option(value: str) -> tuple[str, str]:
    """Parse a "key=value" option."""
    key, sep, option_value = value.partition("=")
    if not sep or not key:
        raise argparse.ArgumentTypeError(f"invalid option value: {value}")
    return key, option_value


def convert(target: str, options: dict[str, str], client: httpx.Client | None = None) -> list[Deck]:
    """
    Convert a deck list file or deck URL.

    Args:
        target: Path to a deck list file, or a deck URL
        options: Raw conversion options
        client: Optional httpx client shared by the site and Scryfall requests

    Raises:
        KnownError: If the deck can't be fetched or resolved
        OSError: If the file can't be read
    """
    with ScryfallClient(client=client) as lookup:
        converter = DeckConverter(lookup)

        if target.startswith(("http://", "https://")):
            name, text = fetch_deck(target, client)
            logger.info("Found deck: %s", name)
            return converter.from_text(text, name, options)

        return converter.from_file(Path(target), options)


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    parser = argparse.ArgumentParser(description="Convert a deck list into resolved decks")
    parser.add_argument(
        "target",
        help=(
            "Path to a deck list file, or a deck URL "
            "(Archidekt, ManaStack, Frogtown, Moxfield, Cube Cobra)"
        ),
    )
    parser.add_argument(
        "-o",
        "--option",
        dest="options",
        type=parse_option,
        action="append",
        default=[],
        help="Conversion option as key=value (quality, show_rulings, back)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose or settings.debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    try:
        decks = convert(args.target, dict(args.options))
    except KnownError as e:
        logger.error("Conversion failed: %s", e.message)
        print(e.to_detail().model_dump_json(indent=2), file=sys.stderr)
        return 1
    except OSError as e:
        logger.error("Couldn't read %s: %s", args.target, e)
        return 1

    print(json.dumps([deck.to_dict() for deck in decks], indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
