"""
Conversion options.

Options arrive as loosely typed key/value pairs (CLI "key=value" strings or
a caller's mapping) and are validated once, before any parsing or lookup.
"""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from deckconverter.config import CARD_BACKS, DEFAULT_BACK, ImageQuality
from deckconverter.models.failure import InvalidOptionError


class ResolveOptions(BaseModel):
    """
    Validated conversion options.

    Attributes:
        quality: Image quality tier to select
        show_rulings: Append rulings to card descriptions (one extra lookup per card)
        back: Key of the card back to use
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    quality: ImageQuality = ImageQuality.NORMAL
    show_rulings: bool = False
    back: str = DEFAULT_BACK

    @field_validator("back")
    @classmethod
    def _known_back(cls, value: str) -> str:
        if value not in CARD_BACKS:
            raise ValueError(f"unknown card back {value!r}, expected one of {sorted(CARD_BACKS)}")
        return value

    @property
    def back_url(self) -> str:
        return CARD_BACKS[self.back]

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any] | None = None) -> "ResolveOptions":
        """
        Validate and normalize raw options.

        Raises:
            InvalidOptionError: If a key is unknown or a value is invalid
        """
        try:
            return cls.model_validate(dict(options or {}))
        except ValidationError as e:
            details = "; ".join(
                f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}" for err in e.errors()
            )
            raise InvalidOptionError(details) from e
