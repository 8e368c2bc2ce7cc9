"""Temporal operations. They read the clock on every call and ignore operand and input."""

import time
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any

from dataexpr._types import Operation


def _generative(generate: Callable[[], Any]) -> Operation:
    return Operation(
        apply_fn=lambda _operand, _input_data, _context: generate(),
        evaluate_fn=lambda _operand, _context: generate(),
    )


def _now_utc() -> str:
    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _now_local() -> str:
    return datetime.now().astimezone().isoformat(timespec="milliseconds")


NOW_UTC = _generative(_now_utc)
NOW_LOCAL = _generative(_now_local)
TIMESTAMP = _generative(lambda: time.time_ns() // 1_000_000)
