"""Diagnostics for expression-shaped values that name no registered operation."""

import json
from collections.abc import Mapping, Sequence
from typing import Any

from ._errors import UnrecognizedOperationError
from ._recognizer import LITERAL, split_expression

SUGGESTION_THRESHOLD = 0.4
SUGGESTION_THRESHOLD_ABSOLUTE = 20
MAX_LISTED_OPERATORS = 8


def edit_distance(a: str, b: str, limit: int | None = None) -> int:
    """Compute the Levenshtein distance between two strings.

    Args:
        a: First string.
        b: Second string.
        limit: Stop early and return ``limit + 1`` once every path exceeds it.

    Returns:
        The number of single-character insertions, deletions, and
        substitutions needed to turn ``a`` into ``b``.

    Example:
        >>> edit_distance("$gte", "$gt")
        1

    """
    if len(a) < len(b):
        a, b = b, a
    if limit is not None and len(a) - len(b) > limit:
        return limit + 1

    previous = list(range(len(b) + 1))
    for i, char_a in enumerate(a, start=1):
        current = [i]
        for j, char_b in enumerate(b, start=1):
            current.append(
                min(
                    previous[j] + 1,
                    current[j - 1] + 1,
                    previous[j - 1] + (char_a != char_b),
                ),
            )
        if limit is not None and min(current) > limit:
            return limit + 1
        previous = current
    return previous[-1]


def suggest_name(invalid_op: str, candidates: Sequence[str]) -> str | None:
    """Find the registered name closest to a mistyped one.

    Matching is case-insensitive. A candidate qualifies when its distance is
    within 40% of the mistyped name's length (capped at 20). Among qualifying
    candidates the first one with the smallest distance wins.
    """
    limit = int(min(SUGGESTION_THRESHOLD * len(invalid_op), SUGGESTION_THRESHOLD_ABSOLUTE))
    needle = invalid_op.lower()

    best: str | None = None
    best_distance = limit + 1
    for candidate in candidates:
        distance = edit_distance(needle, candidate.lower(), limit)
        if distance < best_distance:
            best, best_distance = candidate, distance
    return best


def unknown_operator_message(value: Mapping[str, Any], available: Sequence[str]) -> tuple[str, str, str | None]:
    """Build the diagnostic for an expression-shaped but unregistered value.

    Returns:
        Tuple of (message, invalid operator name, suggestion or None).

    """
    invalid_op, _ = split_expression(value)
    suggestion = suggest_name(invalid_op, available)

    if suggestion is not None:
        help_text = f'Did you mean "{suggestion}"?'
    else:
        listed = ", ".join(available[:MAX_LISTED_OPERATORS])
        more = ", ..." if len(available) > MAX_LISTED_OPERATORS else ""
        help_text = f"Available operators: {listed}{more}."

    wrapped = json.dumps({LITERAL: value}, default=repr)
    msg = (
        f'Unknown expression operator: "{invalid_op}". {help_text} '
        f"Use {wrapped} if you meant this as a literal value."
    )
    return msg, invalid_op, suggestion


def unknown_operator_error(value: Mapping[str, Any], available: Sequence[str]) -> UnrecognizedOperationError:
    """Create the error raised when dispatching an unregistered operator."""
    msg, invalid_op, suggestion = unknown_operator_message(value, available)
    return UnrecognizedOperationError(msg, invalid_op, suggestion, tuple(available))
