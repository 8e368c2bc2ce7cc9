"""Tests for conditional operations."""

import pytest

import dataexpr as de


@pytest.fixture
def engine() -> de.Engine:
    """Engine with every built-in operation."""
    return de.create_engine(packs=[de.ALL])


class TestIf:
    """Tests for $if."""

    def test_branches(self, engine: de.Engine) -> None:
        """Should pick a branch by the resolved condition."""
        expression = {"$if": {"if": {"$pipe": [{"$get": "age"}, {"$gte": 18}]}, "then": "adult", "else": "minor"}}

        assert engine.apply(expression, {"age": 20}) == "adult"
        assert engine.apply(expression, {"age": 10}) == "minor"

    def test_branches_resolved(self, engine: de.Engine) -> None:
        """Should resolve only the chosen branch against the input."""
        expression = {"$if": {"if": True, "then": {"$get": "a"}, "else": {"$gett": "never"}}}

        assert engine.apply(expression, {"a": 1}) == 1

    def test_missing_else(self, engine: de.Engine) -> None:
        """Should yield None for a missing branch."""
        assert engine.apply({"$if": {"if": False, "then": 1}}, {}) is None

    def test_non_boolean_condition(self, engine: de.Engine) -> None:
        """Should require a strict boolean condition."""
        with pytest.raises(de.DomainError, match=r"\$if.if must be a boolean"):
            engine.apply({"$if": {"if": 1, "then": "a", "else": "b"}}, {})

    def test_evaluate(self, engine: de.Engine) -> None:
        """Should evaluate the condition and branch without input."""
        expression = {"$if": {"if": {"$gt": [3, 2]}, "then": {"$add": [1, 2]}, "else": 0}}

        assert engine.evaluate(expression) == 3


class TestCase:
    """Tests for $case."""

    def test_literal_values(self, engine: de.Engine) -> None:
        """Should compare plain when values by deep equality."""
        expression = {
            "$case": {
                "value": {"$get": "status"},
                "cases": [
                    {"when": "active", "then": 1},
                    {"when": "inactive", "then": 0},
                ],
                "default": -1,
            },
        }

        assert engine.apply(expression, {"status": "inactive"}) == 0
        assert engine.apply(expression, {"status": "other"}) == -1

    def test_predicates_receive_case_value(self, engine: de.Engine) -> None:
        """Should apply expression clauses to the case value, not to the input."""
        expression = {
            "$case": {
                "value": {"$get": "score"},
                "cases": [
                    {"when": {"$gte": 90}, "then": "A"},
                    {"when": {"$gte": 80}, "then": "B"},
                ],
                "default": "C",
            },
        }

        assert engine.apply(expression, {"score": 85}) == "B"
        assert engine.apply(expression, {"score": 10}) == "C"

    def test_first_match_wins(self, engine: de.Engine) -> None:
        """Should return the first matching branch."""
        expression = {"$case": {"value": 4, "cases": [{"when": 4, "then": "a"}, {"when": 4, "then": "b"}]}}

        assert engine.apply(expression, {}) == "a"

    def test_literal_wrapped_when(self, engine: de.Engine) -> None:
        """Should compare a literal-wrapped when clause as data."""
        expression = {
            "$case": {
                "value": {"$literal": {"$gt": 1}},
                "cases": [{"when": {"$literal": {"$gt": 1}}, "then": "same"}],
                "default": "different",
            },
        }

        assert engine.apply(expression, {}) == "same"

    def test_then_resolved_against_input(self, engine: de.Engine) -> None:
        """Should resolve the chosen result against the original input."""
        expression = {"$case": {"value": 1, "cases": [{"when": 1, "then": {"$get": "name"}}]}}

        assert engine.apply(expression, {"name": "Ada"}) == "Ada"

    def test_non_boolean_predicate(self, engine: de.Engine) -> None:
        """Should require predicates to return a boolean."""
        expression = {"$case": {"value": 2, "cases": [{"when": {"$add": 1}, "then": "x"}]}}

        with pytest.raises(de.DomainError, match=r"\$case.when must resolve to a boolean"):
            engine.apply(expression, {})

    def test_missing_when(self, engine: de.Engine) -> None:
        """Should reject case items without 'when'."""
        with pytest.raises(de.InvalidOperandError, match="Case item must have 'when' property"):
            engine.apply({"$case": {"value": 1, "cases": [{"then": 1}]}}, {})

    def test_missing_cases(self, engine: de.Engine) -> None:
        """Should require a cases array."""
        with pytest.raises(de.InvalidOperandError, match="'cases' array"):
            engine.apply({"$case": {"value": 1}}, {})

    def test_evaluate(self, engine: de.Engine) -> None:
        """Should evaluate value, clauses, and results without input."""
        expression = {
            "$case": {
                "value": {"$add": [2, 2]},
                "cases": [
                    {"when": {"$gt": 10}, "then": "big"},
                    {"when": 4, "then": {"$multiply": [4, 10]}},
                ],
                "default": None,
            },
        }

        assert engine.evaluate(expression) == 40
