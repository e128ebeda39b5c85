"""Tests for zoned card collections."""

import pytest

from deckconverter.models.card_names import CardNames, CardReference


class TestCardReference:
    def test_set_code_defaults_to_none(self) -> None:
        ref = CardReference(name="Forest")
        assert ref.set_code is None

    def test_frozen(self) -> None:
        ref = CardReference(name="Forest", set_code="M21")
        with pytest.raises(AttributeError):
            ref.name = "Island"  # type: ignore[misc]


class TestCardNamesInsert:
    def test_insert_new_card(self) -> None:
        cards = CardNames()
        cards.insert("Forest", "M21", 4)

        assert cards.names == [CardReference(name="Forest", set_code="M21")]
        assert cards.counts == {"Forest": 4}

    def test_default_count_is_one(self) -> None:
        cards = CardNames()
        cards.insert("Forest")

        assert cards.count("Forest") == 1

    def test_repeated_insert_accumulates(self) -> None:
        """Same name twice: one entry, summed count."""
        cards = CardNames()
        cards.insert("Forest", count=3)
        cards.insert("Island", count=2)
        cards.insert("Forest", count=4)

        assert [ref.name for ref in cards.names] == ["Forest", "Island"]
        assert cards.count("Forest") == 7

    def test_repeated_insert_keeps_first_set(self) -> None:
        cards = CardNames()
        cards.insert("Forest", "M21", 1)
        cards.insert("Forest", "ELD", 1)

        assert cards.names[0].set_code == "M21"

    def test_unknown_card_count_is_zero(self) -> None:
        assert CardNames().count("Forest") == 0


class TestCardNamesMerge:
    def test_merge_sums_overlapping_and_appends_new(self) -> None:
        main = CardNames()
        main.insert("Forest", count=4)
        main.insert("Island", count=2)

        side = CardNames()
        side.insert("Negate", count=2)
        side.insert("Island", count=1)
        side.insert("Duress", count=3)

        main.merge(side)

        assert [ref.name for ref in main.names] == ["Forest", "Island", "Negate", "Duress"]
        assert main.counts == {"Forest": 4, "Island": 3, "Negate": 2, "Duress": 3}

    def test_merge_empty_is_noop(self) -> None:
        main = CardNames()
        main.insert("Forest", count=4)

        main.merge(CardNames())

        assert main.counts == {"Forest": 4}


class TestCardNamesHelpers:
    def test_len_counts_distinct_names(self) -> None:
        cards = CardNames()
        cards.insert("Forest", count=20)
        cards.insert("Island", count=1)

        assert len(cards) == 2
        assert cards.total_cards() == 21

    def test_str_lists_count_and_name(self) -> None:
        cards = CardNames()
        cards.insert("Forest", count=20)
        cards.insert("Fire // Ice", count=1)

        assert str(cards) == "20 Forest\n1 Fire // Ice\n"
