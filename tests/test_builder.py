"""Tests for folding packs into a definition map."""

import logging

import pytest

import dataexpr as de
from dataexpr.operations import ADD, GET, LITERAL_OPERATION, SUBTRACT


class TestBuildDefinitions:
    """Tests for build_definitions function."""

    def test_starts_from_base(self) -> None:
        """Should include the base pack by default."""
        definitions = de.build_definitions({"$get": GET})

        assert list(definitions) == ["$get", "$literal"]

    def test_skips_base(self) -> None:
        """Should start from an empty map when include_base is False."""
        definitions = de.build_definitions({"$get": GET}, [{"$add": ADD}], include_base=False)

        assert list(definitions) == ["$add", "$literal"]

    def test_whole_definition_replaced(self) -> None:
        """Should replace a definition entirely rather than merging its modes."""
        apply_only = de.Operation(apply_fn=lambda *_: "apply")
        evaluate_only = de.Operation(evaluate_fn=lambda *_: "evaluate")

        definitions = de.build_definitions({"$op": apply_only}, [{"$op": evaluate_only}])

        assert not definitions["$op"].supports(de.Mode.APPLY)
        assert definitions["$op"].supports(de.Mode.EVALUATE)

    def test_custom_last(self) -> None:
        """Should fold custom operations after every pack."""
        definitions = de.build_definitions({}, [{"$op": ADD}], {"$op": SUBTRACT})

        assert definitions["$op"].apply_fn is SUBTRACT.apply_fn

    def test_literal_forced(self) -> None:
        """Should install the built-in literal after all packs."""
        definitions = de.build_definitions({}, [{"$literal": ADD}], {"$literal": SUBTRACT})

        assert definitions["$literal"] is LITERAL_OPERATION

    def test_exclude(self) -> None:
        """Should remove excluded names after folding."""
        definitions = de.build_definitions({"$get": GET}, [{"$add": ADD}], exclude=["$get", "$unknown"])

        assert list(definitions) == ["$add", "$literal"]

    def test_read_only(self) -> None:
        """Should return a mapping that cannot be modified."""
        definitions = de.build_definitions({"$get": GET})

        with pytest.raises(TypeError):
            definitions["$add"] = ADD  # type: ignore[index]

    def test_logs_overrides(self, caplog: pytest.LogCaptureFixture) -> None:
        """Should log each overridden name at debug level."""
        caplog.set_level(logging.DEBUG, logger="dataexpr")

        de.build_definitions({"$get": GET}, [{"$get": ADD}])

        assert "overrides definition of $get" in caplog.text


class TestPackEntries:
    """Tests for normalizing pack entries to operations."""

    def test_operation_named(self) -> None:
        """Should register operations under their pack key."""
        definitions = de.build_definitions({}, [{"$plus": ADD}])

        assert definitions["$plus"].name == "$plus"
        assert ADD.name == ""

    def test_mapping_entry(self) -> None:
        """Should accept mappings with apply and evaluate callables."""
        definitions = de.build_definitions(
            {},
            [{"$op": {"apply": lambda _o, data, _c: data, "evaluate": lambda operand, _c: operand}}],
        )
        engine = de.Engine(definitions)

        assert engine.apply({"$op": 1}, "input") == "input"
        assert engine.evaluate({"$op": 1}) == 1

    def test_bare_callable_is_apply_only(self) -> None:
        """Should treat a bare callable as the apply form."""
        definitions = de.build_definitions({}, [{"$op": lambda *_: 1}])

        assert definitions["$op"].supports(de.Mode.APPLY)
        assert not definitions["$op"].supports(de.Mode.EVALUATE)

    def test_malformed_entry_fails_on_dispatch(self) -> None:
        """Should accept malformed entries at build time and fail when dispatched."""
        engine = de.create_engine(custom={"$bad": 5})

        assert engine.is_expression({"$bad": None})
        with pytest.raises(AttributeError):
            engine.apply({"$bad": None}, {})
