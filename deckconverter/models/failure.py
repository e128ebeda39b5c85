"""
Failure classification for deck conversion.

Two classes of failure exist:

- Fatal to the batch: raised as a KnownError subclass. The whole zone (and
  therefore the whole conversion) is aborted, no partial deck is returned.
- Recoverable: a single line or card is skipped. These are never raised;
  they are reported through the logging stream with the offending card name
  and the cause attached to the record.
"""

from enum import Enum

from pydantic import BaseModel, Field


class FailureKind(str, Enum):
    """Classification of failure types."""

    # Input validation failures
    INVALID_INPUT = "invalid_input"
    MISSING_REQUIRED = "missing_required"

    # Resource failures
    NOT_FOUND = "not_found"

    # Service failures
    SERVICE_UNAVAILABLE = "service_unavailable"
    EXTERNAL_API_ERROR = "external_api_error"


class FailureDetail(BaseModel):
    """Serializable description of a failure."""

    kind: FailureKind = Field(
        ...,
        description="Classification of the failure",
    )
    message: str = Field(
        ...,
        description="User-appropriate explanation of what went wrong",
    )
    detail: str | None = Field(
        default=None,
        description="Additional technical detail (optional)",
    )
    suggestion: str | None = Field(
        default=None,
        description="Suggested action for the user",
    )


class KnownError(Exception):
    """
    Base class for exceptions that represent known, explainable failures.

    Subclass this for errors where the system knows exactly what went wrong.
    """

    def __init__(
        self,
        kind: FailureKind,
        message: str,
        detail: str | None = None,
        suggestion: str | None = None,
    ):
        self.kind = kind
        self.message = message
        self.detail = detail
        self.suggestion = suggestion
        super().__init__(message)

    def to_detail(self) -> FailureDetail:
        """Convert to a serializable FailureDetail."""
        return FailureDetail(
            kind=self.kind,
            message=self.message,
            detail=self.detail,
            suggestion=self.suggestion,
        )


class CardLookupError(KnownError):
    """The card data service could not answer a lookup."""

    def __init__(
        self,
        message: str,
        detail: str | None = None,
        kind: FailureKind = FailureKind.EXTERNAL_API_ERROR,
    ):
        super().__init__(
            kind=kind,
            message=message,
            detail=detail,
            suggestion="Retry later, or check the card data service status.",
        )


class CardNotFoundError(CardLookupError):
    """No card (or more than one card) matches the requested name."""

    def __init__(self, name: str, detail: str | None = None):
        self.name = name
        super().__init__(
            message=f"Card not found: {name}",
            detail=detail,
            kind=FailureKind.NOT_FOUND,
        )
        self.suggestion = "Check the card name spelling and set code in the deck list."


class MissingImageError(KnownError):
    """A card has no image for a state that must be displayed."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(
            kind=FailureKind.MISSING_REQUIRED,
            message=f"No image found for card {name}",
        )


class InvalidOptionError(KnownError):
    """A conversion option is unknown or has an invalid value."""

    def __init__(self, detail: str):
        super().__init__(
            kind=FailureKind.INVALID_INPUT,
            message="Invalid conversion options.",
            detail=detail,
            suggestion="Use quality=small|normal|large|png, show_rulings=true|false, back=<card back>.",
        )


class DeckSourceError(KnownError):
    """A deck hosting site could not provide a deck."""

    def __init__(self, message: str, detail: str | None = None):
        super().__init__(
            kind=FailureKind.EXTERNAL_API_ERROR,
            message=message,
            detail=detail,
        )


class DeckListEncodingError(KnownError):
    """A deck list file is not valid UTF-8 text."""

    def __init__(self, path: str, detail: str | None = None):
        self.path = path
        super().__init__(
            kind=FailureKind.INVALID_INPUT,
            message=f"Deck list is not valid UTF-8: {path}",
            detail=detail,
            suggestion="Save the deck list as UTF-8 text.",
        )
