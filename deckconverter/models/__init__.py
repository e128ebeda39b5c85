from deckconverter.models.card_names import CardNames, CardReference
from deckconverter.models.deck import CardSize, Deck, ResolvedCard
from deckconverter.models.failure import (
    CardLookupError,
    CardNotFoundError,
    DeckListEncodingError,
    DeckSourceError,
    FailureDetail,
    FailureKind,
    InvalidOptionError,
    KnownError,
    MissingImageError,
)
from deckconverter.models.options import ResolveOptions
from deckconverter.models.scryfall import (
    CardFace,
    CardLayout,
    ImageURIs,
    RelatedCard,
    Ruling,
    ScryfallCard,
)

__all__ = [
    "CardFace",
    "CardLayout",
    "CardLookupError",
    "CardNames",
    "CardNotFoundError",
    "CardReference",
    "CardSize",
    "Deck",
    "DeckListEncodingError",
    "DeckSourceError",
    "FailureDetail",
    "FailureKind",
    "ImageURIs",
    "InvalidOptionError",
    "KnownError",
    "MissingImageError",
    "RelatedCard",
    "ResolveOptions",
    "ResolvedCard",
    "Ruling",
    "ScryfallCard",
]
