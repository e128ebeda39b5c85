"""
Zoned card collections produced by the deck list parser.

A deck list names each card once per line, but the same card may appear on
several lines (different printings, repeated entries). CardNames keeps the
first-seen order of names and accumulates their counts.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class CardReference:
    """
    A card as written in a deck list.

    Attributes:
        name: Card name (split cards use "//" as separator)
        set_code: Set code used to disambiguate the printing, if any
    """

    name: str
    set_code: str | None = None


@dataclass
class CardNames:
    """
    Ordered card references with cumulative counts.

    INVARIANT: a name appears at most once in `names`.
    """

    names: list[CardReference] = field(default_factory=list)
    counts: dict[str, int] = field(default_factory=dict)

    def insert(self, name: str, set_code: str | None = None, count: int = 1) -> None:
        """Add `count` copies of a card, keeping the position of the first insertion."""
        if name in self.counts:
            self.counts[name] += count
            return

        self.names.append(CardReference(name=name, set_code=set_code))
        self.counts[name] = count

    def merge(self, other: "CardNames") -> None:
        """
        Fold another collection into this one.

        Counts of names already present are summed; new names are appended
        in the other collection's order.
        """
        for ref in other.names:
            self.insert(ref.name, ref.set_code, other.counts[ref.name])

    def count(self, name: str) -> int:
        return self.counts.get(name, 0)

    def total_cards(self) -> int:
        """Total number of cards, all copies included."""
        return sum(self.counts.values())

    def __len__(self) -> int:
        return len(self.names)

    def __str__(self) -> str:
        return "".join(f"{self.counts[ref.name]} {ref.name}\n" for ref in self.names)
