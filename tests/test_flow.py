"""Tests for flow operations."""

import logging

import pytest

import dataexpr as de


@pytest.fixture
def engine() -> de.Engine:
    """Engine with every built-in operation."""
    return de.create_engine(packs=[de.ALL])


class TestPipe:
    """Tests for $pipe."""

    def test_apply(self, engine: de.Engine) -> None:
        """Should feed each result into the next expression."""
        expression = {"$pipe": [{"$get": "items"}, {"$map": {"$get": "price"}}, {"$sum": None}]}

        assert engine.apply(expression, {"items": [{"price": 2}, {"price": 5}]}) == 7

    def test_empty(self, engine: de.Engine) -> None:
        """Should return the input unchanged for an empty pipeline."""
        assert engine.apply({"$pipe": []}, {"a": 1}) == {"a": 1}

    def test_rejects_non_expressions(self, engine: de.Engine) -> None:
        """Should require every element to be a registered expression."""
        with pytest.raises(de.InvalidOperandError, match="is not a valid expression"):
            engine.apply({"$pipe": [{"$get": "a"}, "not an expression"]}, {})

    def test_rejects_non_array(self, engine: de.Engine) -> None:
        """Should require an array operand."""
        with pytest.raises(de.InvalidOperandError, match="operand must be an array of expressions"):
            engine.apply({"$pipe": {"$get": "a"}}, {})

    def test_evaluate_requires_pair(self, engine: de.Engine) -> None:
        """Should require [expressions, initialValue] in evaluate mode."""
        with pytest.raises(de.InvalidOperandError, match="requires array of length 2"):
            engine.evaluate({"$pipe": [{"$get": "a"}]})


class TestCompose:
    """Tests for $compose."""

    def test_apply(self, engine: de.Engine) -> None:
        """Should apply expressions from last to first."""
        expression = {"$compose": [{"$uppercase": None}, {"$get": "name"}]}

        assert engine.apply(expression, {"name": "ada"}) == "ADA"

    def test_evaluate(self, engine: de.Engine) -> None:
        """Should fold from the right over the evaluated seed."""
        expression = {"$compose": [[{"$add": 1}, {"$multiply": 2}], {"$literal": 5}]}

        # (5 * 2) + 1
        assert engine.evaluate(expression) == 11


class TestDefault:
    """Tests for $default."""

    def test_array_form(self, engine: de.Engine) -> None:
        """Should fall back when the expression yields None."""
        assert engine.apply({"$default": [{"$get": "missing"}, "fallback"]}, {}) == "fallback"
        assert engine.apply({"$default": [{"$get": "name"}, "fallback"]}, {"name": "Ada"}) == "Ada"

    def test_object_form(self, engine: de.Engine) -> None:
        """Should accept {expression, default}."""
        expression = {"$default": {"expression": {"$get": "a"}, "default": {"$get": "b"}}}

        assert engine.apply(expression, {"b": 2}) == 2

    def test_keeps_falsy_values(self, engine: de.Engine) -> None:
        """Should only replace None, not other falsy values."""
        assert engine.apply({"$default": [{"$get": "zero"}, 5]}, {"zero": 0}) == 0
        assert engine.apply({"$default": [{"$get": "flag"}, True]}, {"flag": False}) is False

    def test_evaluate(self, engine: de.Engine) -> None:
        """Should evaluate both parts in evaluate mode."""
        assert engine.evaluate({"$default": [None, {"$add": [1, 1]}]}) == 2

    def test_invalid_operand(self, engine: de.Engine) -> None:
        """Should reject operands of the wrong shape."""
        with pytest.raises(de.InvalidOperandError, match="exactly 2 elements"):
            engine.apply({"$default": [1, 2, 3]}, {})
        with pytest.raises(de.InvalidOperandError, match="expression, default"):
            engine.apply({"$default": "x"}, {})


class TestDebug:
    """Tests for $debug."""

    def test_logs_and_returns(self, engine: de.Engine, caplog: pytest.LogCaptureFixture) -> None:
        """Should log the resolved value and pass it through."""
        caplog.set_level(logging.INFO, logger="dataexpr")

        result = engine.apply({"$pipe": [{"$get": "a"}, {"$debug": {"$identity": None}}]}, {"a": [1, 2]})

        assert result == [1, 2]
        assert "$debug: [1, 2]" in caplog.text
