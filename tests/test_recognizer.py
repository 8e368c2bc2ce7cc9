"""Tests for expression recognition."""

import pytest

from dataexpr._recognizer import LITERAL, SIGIL, is_literal, is_registered, looks_expression_shaped, split_expression


class TestLooksExpressionShaped:
    """Tests for looks_expression_shaped function."""

    @pytest.mark.parametrize(
        "value",
        [
            {"$get": "x"},
            {"$unknown": None},
            {"$": 1},
            {"$literal": {"a": 1}},
        ],
    )
    def test_shaped(self, value: object) -> None:
        """Should accept single-key mappings whose key starts with the sigil."""
        assert looks_expression_shaped(value)

    @pytest.mark.parametrize(
        "value",
        [
            {},
            {"get": "x"},
            {"$get": "x", "$eq": 1},
            {"$get": "x", "other": 1},
            {1: "x"},
            [{"$get": "x"}],
            "$get",
            None,
            42,
        ],
    )
    def test_not_shaped(self, value: object) -> None:
        """Should reject everything else, including multi-key mappings."""
        assert not looks_expression_shaped(value)

    def test_sigil(self) -> None:
        """Should use the dollar sign as sigil."""
        assert SIGIL == "$"
        assert LITERAL.startswith(SIGIL)


class TestIsRegistered:
    """Tests for is_registered function."""

    def test_registered_name(self) -> None:
        """Should require the key to be one of the given names."""
        names = {"$get", "$eq"}

        assert is_registered({"$get": "x"}, names)
        assert not is_registered({"$gte": 1}, names)

    def test_shape_still_required(self) -> None:
        """Should reject multi-key mappings even if a key is registered."""
        assert not is_registered({"$get": "x", "$eq": 1}, {"$get", "$eq"})


class TestSplitExpression:
    """Tests for split_expression function."""

    def test_returns_name_and_operand(self) -> None:
        """Should destructure an expression into name and operand."""
        operand = {"path": "a.b"}

        name, result = split_expression({"$get": operand})

        assert name == "$get"
        assert result is operand


class TestIsLiteral:
    """Tests for is_literal function."""

    def test_literal(self) -> None:
        """Should detect the literal escape."""
        assert is_literal({"$literal": 4})
        assert not is_literal({"$get": "x"})
        assert not is_literal({"$literal": 4, "other": 1})
