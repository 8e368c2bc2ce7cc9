"""Generative operations producing random values."""

import random
import uuid
from collections.abc import Mapping
from typing import Any

from dataexpr._errors import InvalidOperandError
from dataexpr._types import Operation

from ._helpers import is_number


def _random(operand: Any) -> float:
    """Draw a uniform number from ``{min, max, precision}`` (defaults 0, 1, none).

    A non-negative precision rounds to that many decimal places; a negative
    precision rounds to a multiple of ``10 ** -precision``.
    """
    options = operand if isinstance(operand, Mapping) else {}
    low = options.get("min", 0)
    high = options.get("max", 1)
    precision = options.get("precision")
    if not is_number(low) or not is_number(high):
        msg = "$random requires numeric min and max"
        raise InvalidOperandError(msg)

    value = random.uniform(low, high)  # noqa: S311
    if precision is None:
        return value
    if not is_number(precision):
        msg = "$random precision must be a number"
        raise InvalidOperandError(msg)
    if precision >= 0:
        return round(value, int(precision))
    factor = 10 ** -int(precision)
    return round(value / factor) * factor


RANDOM = Operation(
    apply_fn=lambda operand, _input_data, _context: _random(operand),
    evaluate_fn=lambda operand, _context: _random(operand),
)

UUID = Operation(
    apply_fn=lambda _operand, _input_data, _context: str(uuid.uuid4()),
    evaluate_fn=lambda _operand, _context: str(uuid.uuid4()),
)
