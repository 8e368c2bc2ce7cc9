"""Tests for clock-reading and random operations."""

import re
import time
import uuid
from datetime import datetime

import pytest

import dataexpr as de


@pytest.fixture
def engine() -> de.Engine:
    """Engine with every built-in operation."""
    return de.create_engine(packs=[de.ALL])


class TestTemporal:
    """Tests for $nowUTC, $nowLocal, and $timestamp."""

    def test_now_utc(self, engine: de.Engine) -> None:
        """Should return an ISO-8601 UTC string with milliseconds."""
        result = engine.apply({"$nowUTC": None}, {"ignored": True})

        assert re.fullmatch(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z", result)

    def test_now_local(self, engine: de.Engine) -> None:
        """Should return an ISO-8601 string with a UTC offset."""
        result = engine.evaluate({"$nowLocal": None})

        assert datetime.fromisoformat(result).tzinfo is not None

    def test_timestamp(self, engine: de.Engine) -> None:
        """Should return epoch milliseconds."""
        before = int(time.time() * 1000)
        result = engine.evaluate({"$timestamp": None})
        after = int(time.time() * 1000)

        assert isinstance(result, int)
        assert before - 1 <= result <= after + 1


class TestRandom:
    """Tests for $random."""

    def test_default_range(self, engine: de.Engine) -> None:
        """Should draw from [0, 1] by default."""
        for _ in range(20):
            assert 0 <= engine.apply({"$random": None}, None) <= 1

    def test_range_and_precision(self, engine: de.Engine) -> None:
        """Should honor min, max, and decimal precision."""
        for _ in range(20):
            value = engine.evaluate({"$random": {"min": 5, "max": 10, "precision": 2}})
            assert 5 <= value <= 10
            assert round(value, 2) == value

    def test_negative_precision(self, engine: de.Engine) -> None:
        """Should round to tens for precision -1."""
        for _ in range(20):
            value = engine.evaluate({"$random": {"min": 0, "max": 100, "precision": -1}})
            assert value % 10 == 0

    def test_invalid_bounds(self, engine: de.Engine) -> None:
        """Should reject non-numeric bounds."""
        with pytest.raises(de.InvalidOperandError, match="numeric min and max"):
            engine.evaluate({"$random": {"min": "a"}})


class TestUuid:
    """Tests for $uuid."""

    def test_version_4(self, engine: de.Engine) -> None:
        """Should generate distinct version 4 UUID strings."""
        first = engine.apply({"$uuid": None}, None)
        second = engine.evaluate({"$uuid": None})

        assert uuid.UUID(first).version == 4
        assert first != second
