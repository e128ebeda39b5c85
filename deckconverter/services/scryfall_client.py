"""
Scryfall card lookup client.

Synchronous client for the card endpoints used during resolution:
    GET /cards/named          card by name (fuzzy or exact, optionally by set)
    GET /cards/{id}           card by Scryfall ID (meld results)
    GET /cards/{id}/rulings   rulings for a card

API docs: https://scryfall.com/docs/api/cards
"""

import logging
from types import TracebackType
from typing import Any, Protocol

import httpx
from pydantic import ValidationError

from deckconverter.config import Settings, settings
from deckconverter.models.failure import CardLookupError, CardNotFoundError, FailureKind
from deckconverter.models.scryfall import Ruling, ScryfallCard

logger = logging.getLogger(__name__)


class CardLookup(Protocol):
    """Card data source used by the resolver."""

    def get_card_by_name(
        self, name: str, exact: bool = False, set_code: str | None = None
    ) -> ScryfallCard: ...

    def get_card(self, card_id: str) -> ScryfallCard: ...

    def get_rulings(self, card_id: str) -> list[Ruling]: ...


def _error_details(response: httpx.Response) -> str | None:
    """Extract the human readable error from a Scryfall error object."""
    try:
        data = response.json()
    except ValueError:
        return None
    if isinstance(data, dict):
        details = data.get("details")
        return str(details) if details else None
    return None


def _parse_card(data: Any, name: str) -> ScryfallCard:
    try:
        return ScryfallCard.model_validate(data)
    except ValidationError as e:
        raise CardLookupError(
            message=f"Unexpected Scryfall response for {name}",
            detail=str(e),
        ) from e


def _parse_rulings(data: Any, card_id: str) -> list[Ruling]:
    if not isinstance(data, dict) or not isinstance(data.get("data", []), list):
        raise CardLookupError(
            message=f"Unexpected Scryfall rulings response for {card_id}",
            detail=f"expected a list object, got {type(data).__name__}",
        )
    try:
        return [Ruling.model_validate(ruling) for ruling in data.get("data", [])]
    except ValidationError as e:
        raise CardLookupError(
            message=f"Unexpected Scryfall rulings response for {card_id}",
            detail=str(e),
        ) from e


class ScryfallClient:
    """
    Card lookup backed by the Scryfall REST API.

    Can be used as a context manager to close the underlying connection pool.
    """

    def __init__(
        self,
        client: httpx.Client | None = None,
        config: Settings | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            client: Optional httpx client for connection reuse
            config: Settings to use. Defaults to the module settings.
        """
        self._config = config or settings
        self._owns_client = client is None
        self._client = client or httpx.Client(
            headers={"User-Agent": self._config.user_agent, "Accept": "application/json"},
            follow_redirects=True,
            timeout=self._config.request_timeout,
        )

    def __enter__(self) -> "ScryfallClient":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def _get(self, path: str, params: dict[str, str] | None = None, name: str | None = None) -> Any:
        url = f"{self._config.scryfall_api_url}{path}"

        try:
            response = self._client.get(url, params=params)
        except httpx.RequestError as e:
            raise CardLookupError(
                message=f"Couldn't reach Scryfall for {name or path}",
                detail=str(e),
                kind=FailureKind.SERVICE_UNAVAILABLE,
            ) from e

        if response.status_code == 404:
            # Also returned for ambiguous fuzzy names
            raise CardNotFoundError(name or path, detail=_error_details(response))

        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise CardLookupError(
                message=f"Scryfall error for {name or path}: HTTP {response.status_code}",
                detail=_error_details(response),
            ) from e

        try:
            return response.json()
        except ValueError as e:
            raise CardLookupError(
                message=f"Unexpected Scryfall response for {name or path}",
                detail=str(e),
            ) from e

    def get_card_by_name(
        self, name: str, exact: bool = False, set_code: str | None = None
    ) -> ScryfallCard:
        """
        Look up a card by name.

        Fuzzy search is needed to match names printed in other languages.

        Args:
            name: Card name
            exact: Require an exact name match
            set_code: Restrict the search to a set

        Raises:
            CardNotFoundError: If no card, or several cards, match the name
            CardLookupError: If the request fails
        """
        params = {"exact" if exact else "fuzzy": name}
        if set_code:
            params["set"] = set_code.lower()

        data = self._get("/cards/named", params=params, name=name)
        logger.debug("API response for %s: %s", name, data)
        return _parse_card(data, name)

    def get_card(self, card_id: str) -> ScryfallCard:
        """Look up a card by its Scryfall ID."""
        data = self._get(f"/cards/{card_id}", name=card_id)
        return _parse_card(data, card_id)

    def get_rulings(self, card_id: str) -> list[Ruling]:
        """Fetch the rulings of a card, oldest first."""
        data = self._get(f"/cards/{card_id}/rulings", name=card_id)
        return _parse_rulings(data, card_id)
