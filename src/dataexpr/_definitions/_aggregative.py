"""Aggregation operations over arrays of values."""

import statistics
from collections.abc import Callable
from typing import Any

from dataexpr._errors import DomainError
from dataexpr._types import Context, Operation

from ._helpers import describe, is_list, is_number


def _aggregative(name: str, calculate: Callable[[list[Any]], Any]) -> Operation:
    """Build an aggregation.

    The apply form aggregates the resolved operand when it is an array and the
    input data otherwise. The evaluate form aggregates the evaluated operand.
    """

    def run(values: Any) -> Any:
        if not is_list(values):
            msg = f"{name} requires array operand or input data"
            raise DomainError(msg)
        try:
            return calculate(list(values))
        except TypeError as e:
            msg = f"{name} cannot aggregate {describe(values)}"
            raise DomainError(msg) from e

    def apply(operand: Any, input_data: Any, context: Context) -> Any:
        resolved = context.apply(operand, input_data)
        return run(resolved if is_list(resolved) else input_data)

    return Operation(apply_fn=apply, evaluate_fn=lambda operand, context: run(context.evaluate(operand)))


def _numbers(values: list[Any]) -> list[Any]:
    if not all(is_number(value) for value in values):
        raise TypeError
    return values


def _or_none(calculate: Callable[[list[Any]], Any]) -> Callable[[list[Any]], Any]:
    return lambda values: calculate(_numbers(values)) if values else None


COUNT = _aggregative("$count", len)
SUM = _aggregative("$sum", lambda values: sum(_numbers(values)))
MIN = _aggregative("$min", _or_none(min))
MAX = _aggregative("$max", _or_none(max))
MEAN = _aggregative("$mean", _or_none(statistics.fmean))
MEDIAN = _aggregative("$median", _or_none(statistics.median))


def _mode(values: list[Any]) -> Any:
    """Most frequent value; a sorted list on ties; None when nothing repeats."""
    # Booleans hash like 0 and 1 but never count as numbers
    counts: dict[tuple[bool, Any], int] = {}
    for value in values:
        key = (isinstance(value, bool), value)
        counts[key] = counts.get(key, 0) + 1
    highest = max(counts.values(), default=0)
    if highest <= 1:
        return None
    modes = sorted(value for (_, value), count in counts.items() if count == highest)
    return modes[0] if len(modes) == 1 else modes


MODE = _aggregative("$mode", _mode)
