"""
Deck hosting site adapters.

Sites exposing structured (JSON) decks are rewritten as plain deck text with
"Sideboard" / "Maybeboard" header lines, so every source goes through the
same deck list parser. Frogtown embeds its deck data in the deck page.

Note: these APIs are undocumented and may change without notice.
"""

import json
import logging
import re
from collections.abc import Iterable
from typing import Any
from urllib.parse import urlparse

import httpx

from deckconverter.config import settings
from deckconverter.models.failure import DeckSourceError

logger = logging.getLogger(__name__)

ARCHIDEKT_API = "https://archidekt.com/api/decks"
MANASTACK_API = "https://manastack.com/api/deck"
MOXFIELD_API = "https://api.moxfield.com/v1/decks/all"
CUBECOBRA_DOWNLOAD = "https://cubecobra.com/cube/download/mtgo"

# Inline (no src attribute) script tags
FROGTOWN_SCRIPT_PATTERN = re.compile(
    r"<script(?![^>]*\bsrc=)[^>]*>(.*?)</script>",
    re.DOTALL | re.IGNORECASE,
)
FROGTOWN_DATA_PREFIX = "var includedData = "


def _deck_slug(url: str) -> str:
    """Last path segment of a deck URL (deck ID or slug)."""
    path = urlparse(url).path.rstrip("/")
    slug = path.rsplit("/", 1)[-1]
    if not slug:
        raise DeckSourceError(f"No deck ID found in {url}")
    return slug


def _sections_to_text(
    main: Iterable[str],
    sideboard: list[str],
    maybeboard: list[str] | None = None,
) -> str:
    lines = list(main)
    if sideboard:
        lines.append("Sideboard")
        lines.extend(sideboard)
    if maybeboard:
        lines.append("Maybeboard")
        lines.extend(maybeboard)
    return "".join(f"{line}\n" for line in lines)


def archidekt_to_text(payload: dict[str, Any]) -> str:
    """
    Rewrite an Archidekt deck as deck text.

    Commanders come first in the main deck. Lines use the Arena format
    ("1 Card Name (SET)") when the edition is known.
    """
    commanders: list[str] = []
    main: list[str] = []
    sideboard: list[str] = []
    maybeboard: list[str] = []

    for entry in payload.get("cards", []):
        card = entry.get("card", {})
        name = card.get("oracleCard", {}).get("name")
        if not name:
            logger.warning("Skipping Archidekt card without a name: %s", entry)
            continue

        line = f"{entry.get('quantity', 1)} {name}"
        edition_code = card.get("edition", {}).get("editioncode")
        if edition_code:
            line += f" ({edition_code.upper()})"

        category = entry.get("category")
        if category == "Commander":
            commanders.append(line)
        elif category == "Sideboard":
            sideboard.append(line)
        elif category == "Maybeboard":
            maybeboard.append(line)
        else:
            main.append(line)

    return _sections_to_text(commanders + main, sideboard, maybeboard)


def manastack_to_text(payload: dict[str, Any]) -> str:
    """Rewrite a ManaStack deck as deck text (one line per card entry)."""
    commanders: list[str] = []
    main: list[str] = []
    sideboard: list[str] = []
    maybeboard: list[str] = []

    for entry in payload.get("cards", []):
        name = entry.get("card", {}).get("name")
        if not name:
            logger.warning("Skipping ManaStack card without a name: %s", entry)
            continue

        line = f"1 {name}"
        if entry.get("commander"):
            commanders.append(line)
        elif entry.get("sideboard"):
            sideboard.append(line)
        elif entry.get("maybeboard"):
            maybeboard.append(line)
        else:
            main.append(line)

    return _sections_to_text(commanders + main, sideboard, maybeboard)


def frogtown_to_text(payload: dict[str, Any]) -> str:
    """
    Rewrite a Frogtown deck as deck text.

    Frogtown lists card IDs; names come from the ID to name table shipped
    with the deck. Unknown IDs are skipped.
    """
    details = payload.get("deckDetails", {})
    names: dict[str, str] = details.get("IDToNameSubset", {})

    def to_lines(card_ids: list[str]) -> list[str]:
        lines = []
        for card_id in card_ids:
            name = names.get(card_id)
            if name is None:
                logger.warning(
                    "Card ID %s not found in Frogtown name table",
                    card_id,
                    extra={"card_name": card_id, "cause": "unknown card ID"},
                )
                continue
            lines.append(f"1 {name}")
        return lines

    return _sections_to_text(
        to_lines(details.get("mainboard", [])),
        to_lines(details.get("sideboard", [])),
    )


def _get(url: str, client: httpx.Client | None = None) -> httpx.Response:
    try:
        if client:
            response = client.get(url)
        else:
            response = httpx.get(
                url,
                headers={"User-Agent": settings.user_agent},
                follow_redirects=True,
                timeout=settings.request_timeout,
            )
        response.raise_for_status()
    except httpx.HTTPError as e:
        raise DeckSourceError(f"Couldn't query {url}", detail=str(e)) from e
    return response


def _get_json(url: str, client: httpx.Client | None = None) -> Any:
    response = _get(url, client)
    try:
        return response.json()
    except ValueError as e:
        raise DeckSourceError(f"Couldn't parse response from {url}", detail=str(e)) from e


def fetch_archidekt_deck(url: str, client: httpx.Client | None = None) -> tuple[str, str]:
    """
    Fetch an Archidekt deck.

    Args:
        url: Deck page URL (https://archidekt.com/decks/<id>/...)
        client: Optional httpx client for connection reuse

    Returns:
        (deck name, deck text)

    Raises:
        DeckSourceError: If the deck can't be fetched
    """
    parts = [part for part in urlparse(url).path.split("/") if part]
    if len(parts) < 2 or parts[0] != "decks":
        raise DeckSourceError(f"No deck ID found in {url}")
    deck_id = parts[1]

    logger.info("Checking %s", url)
    payload = _get_json(f"{ARCHIDEKT_API}/{deck_id}/small/", client)
    return str(payload.get("name", deck_id)), archidekt_to_text(payload)


def extract_frogtown_data(html: str) -> dict[str, Any] | None:
    """
    Extract the deck payload embedded in a Frogtown deck page.

    The page ships its data in an inline script: `var includedData = {...};`

    Returns:
        The decoded payload, or None if the page has no such script

    Raises:
        DeckSourceError: If the embedded data is not valid JSON
    """
    for match in FROGTOWN_SCRIPT_PATTERN.finditer(html):
        script = match.group(1).strip()
        if not script.startswith(FROGTOWN_DATA_PREFIX):
            continue
        data = script.removeprefix(FROGTOWN_DATA_PREFIX).removesuffix(";")
        try:
            payload = json.loads(data)
        except ValueError as e:
            raise DeckSourceError("Couldn't parse Frogtown deck data", detail=str(e)) from e
        if not isinstance(payload, dict):
            raise DeckSourceError("Couldn't parse Frogtown deck data", detail="expected an object")
        return payload
    return None


def fetch_frogtown_deck(url: str, client: httpx.Client | None = None) -> tuple[str, str]:
    """
    Fetch a Frogtown deck from its deck page.

    Returns:
        (deck name, deck text)

    Raises:
        DeckSourceError: If the deck can't be fetched or the page holds no deck
    """
    logger.info("Checking %s", url)
    payload = extract_frogtown_data(_get(url, client).text)
    if payload is None:
        raise DeckSourceError(f"No deck data found in {url}")

    name = payload.get("deckDetails", {}).get("name") or _deck_slug(url)
    return str(name), frogtown_to_text(payload)


def fetch_manastack_deck(url: str, client: httpx.Client | None = None) -> tuple[str, str]:
    """
    Fetch a ManaStack deck.

    Returns:
        (deck name, deck text)

    Raises:
        DeckSourceError: If the deck can't be fetched
    """
    slug = _deck_slug(url)

    logger.info("Checking %s", url)
    payload = _get_json(f"{MANASTACK_API}?slug={slug}", client)
    return str(payload.get("name", slug)), manastack_to_text(payload)


def moxfield_download_url(url: str) -> str:
    """Plain text download URL of a Moxfield deck."""
    return f"{MOXFIELD_API}/{_deck_slug(url)}/download"


def cubecobra_download_url(url: str) -> str:
    """MTGO format download URL of a Cube Cobra cube."""
    return f"{CUBECOBRA_DOWNLOAD}/{_deck_slug(url)}"


def fetch_deck_text(url: str, client: httpx.Client | None = None) -> str:
    """
    Fetch a plain text deck list.

    Raises:
        DeckSourceError: If the deck can't be fetched
    """
    return _get(url, client).text


def fetch_deck(url: str, client: httpx.Client | None = None) -> tuple[str, str]:
    """
    Fetch a deck from any supported site.

    Args:
        url: Deck page URL
        client: Optional httpx client for connection reuse

    Returns:
        (deck name, deck text)

    Raises:
        DeckSourceError: If the site is not supported or the deck can't be fetched
    """
    host = (urlparse(url).hostname or "").removeprefix("www.")

    if host == "archidekt.com":
        return fetch_archidekt_deck(url, client)
    if host == "manastack.com":
        return fetch_manastack_deck(url, client)
    if host == "frogtown.me":
        return fetch_frogtown_deck(url, client)
    if host == "moxfield.com":
        return _deck_slug(url), fetch_deck_text(moxfield_download_url(url), client)
    if host == "cubecobra.com":
        return _deck_slug(url), fetch_deck_text(cubecobra_download_url(url), client)

    raise DeckSourceError(f"Unsupported deck site: {host or url}")
