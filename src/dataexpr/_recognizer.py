"""Classify values as ordinary data, expression-shaped, or registered expressions."""

from collections.abc import Container, Mapping
from typing import Any

SIGIL = "$"
LITERAL = "$literal"


def looks_expression_shaped(value: Any) -> bool:
    """Check whether a value has the shape of an expression.

    A value is expression-shaped when it is a mapping with exactly one key and
    that key starts with the sigil. Sequences and multi-key mappings are always
    ordinary data.

    Example:
        >>> looks_expression_shaped({"$get": "name"})
        True
        >>> looks_expression_shaped({"$get": "name", "other": 1})
        False

    """
    if not isinstance(value, Mapping) or len(value) != 1:
        return False
    (key,) = value
    return isinstance(key, str) and key.startswith(SIGIL)


def is_registered(value: Any, names: Container[str]) -> bool:
    """Check whether a value is an expression naming one of ``names``."""
    return looks_expression_shaped(value) and next(iter(value)) in names


def split_expression(value: Mapping[str, Any]) -> tuple[str, Any]:
    """Return the ``(name, operand)`` pair of an expression-shaped mapping."""
    ((name, operand),) = value.items()
    return name, operand


def is_literal(value: Any) -> bool:
    """Check whether a value is wrapped in the literal escape."""
    return looks_expression_shaped(value) and LITERAL in value
