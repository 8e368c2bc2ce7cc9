"""Tests for aggregation operations."""

import pytest

import dataexpr as de


@pytest.fixture
def engine() -> de.Engine:
    """Engine with the aggregation pack."""
    return de.create_engine(packs=[de.AGGREGATION])


class TestAggregations:
    """Tests for $count, $sum, $min, $max, $mean, $median, and $mode."""

    @pytest.mark.parametrize(
        ("name", "values", "expected"),
        [
            ("$count", [1, 2, 3], 3),
            ("$sum", [1, 2, 3], 6),
            ("$min", [3, 1, 2], 1),
            ("$max", [3, 1, 2], 3),
            ("$mean", [1, 2, 3, 4], 2.5),
            ("$median", [3, 1, 2], 2),
            ("$median", [1, 2, 3, 4], 2.5),
            ("$mode", [1, 2, 2, 3], 2),
            ("$mode", [2, 1, 1, 2], [1, 2]),
            ("$mode", [1, 2, 3], None),
            ("$mode", [1, True, 2, 2], 2),
            ("$mode", [True, True, 1], True),
        ],
    )
    def test_input(self, engine: de.Engine, name: str, values: list, expected: object) -> None:
        """Should aggregate the input array."""
        assert engine.apply({name: None}, values) == expected

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("$count", 0),
            ("$sum", 0),
            ("$min", None),
            ("$max", None),
            ("$mean", None),
            ("$median", None),
            ("$mode", None),
        ],
    )
    def test_empty(self, engine: de.Engine, name: str, expected: object) -> None:
        """Should handle empty arrays."""
        assert engine.apply({name: None}, []) == expected

    def test_operand_array(self, engine: de.Engine) -> None:
        """Should prefer a resolved array operand over the input."""
        assert engine.apply({"$sum": [1, 2]}, [10, 20]) == 3
        assert engine.apply({"$count": {"$get": "items"}}, {"items": [1, 2]}) == 2

    def test_evaluate(self, engine: de.Engine) -> None:
        """Should aggregate the evaluated operand."""
        assert engine.evaluate({"$max": [1, 5, 3]}) == 5

    def test_requires_array(self, engine: de.Engine) -> None:
        """Should reject input that is not an array."""
        with pytest.raises(de.DomainError, match=r"\$sum requires array operand or input data"):
            engine.apply({"$sum": None}, 5)

    def test_requires_numbers(self, engine: de.Engine) -> None:
        """Should reject non-numeric elements."""
        with pytest.raises(de.DomainError, match=r"\$sum cannot aggregate"):
            engine.apply({"$sum": None}, ["a"])
        with pytest.raises(de.DomainError, match=r"\$max cannot aggregate"):
            engine.apply({"$max": None}, [1, True])
