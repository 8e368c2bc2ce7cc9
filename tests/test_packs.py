"""Tests for the predefined packs."""

import pytest

import dataexpr as de


class TestPacks:
    """Tests for pack contents."""

    def test_base_names(self) -> None:
        """Should ship the near-universal operations in the base pack."""
        assert list(de.BASE) == [
            "$and",
            "$case",
            "$default",
            "$eq",
            "$filter",
            "$filterBy",
            "$get",
            "$gt",
            "$gte",
            "$identity",
            "$if",
            "$isDefined",
            "$literal",
            "$lt",
            "$lte",
            "$map",
            "$matches",
            "$ne",
            "$not",
            "$or",
            "$pipe",
            "$sort",
        ]

    def test_default_engine_uses_base(self) -> None:
        """Should register exactly the base pack by default."""
        assert set(de.create_engine().expression_names) == set(de.BASE)

    @pytest.mark.parametrize("name", sorted(de.PACKS))
    def test_all_is_superset(self, name: str) -> None:
        """Should include every operation of every other pack."""
        assert set(de.PACKS[name]) <= set(de.ALL)

    def test_all_extras(self) -> None:
        """Should include operations not grouped in any smaller pack."""
        assert {"$compose", "$debug", "$uuid"} <= set(de.ALL)

    def test_math_includes_random(self) -> None:
        """Should ship $random with the math pack."""
        assert "$random" in de.MATH

    def test_every_operation_supports_both_modes(self) -> None:
        """Should implement apply and evaluate for every built-in."""
        for name, operation in de.ALL.items():
            assert operation.supports(de.Mode.APPLY), name
            assert operation.supports(de.Mode.EVALUATE), name

    def test_packs_read_only(self) -> None:
        """Should not allow modifying a shared pack."""
        with pytest.raises(TypeError):
            de.MATH["$add"] = de.operations.SUBTRACT  # type: ignore[index]

    def test_registry_keys_lowercase(self) -> None:
        """Should key the registry by lowercase pack name."""
        assert all(name == name.lower() for name in de.PACKS)
        assert de.PACKS["all"] is de.ALL


class TestOperationsModule:
    """Tests for the public operations module."""

    def test_importable(self) -> None:
        """Should be importable as a submodule."""
        from dataexpr.operations import ADD, LITERAL_OPERATION  # noqa: PLC0415

        assert ADD is de.MATH["$add"]
        assert LITERAL_OPERATION is de.BASE["$literal"]

    def test_exports_every_definition(self) -> None:
        """Should re-export every built-in operation constant."""
        assert all(isinstance(getattr(de.operations, name), de.Operation) for name in de.operations.__all__)
        assert {id(operation) for operation in de.ALL.values()} <= {
            id(getattr(de.operations, name)) for name in de.operations.__all__
        }
