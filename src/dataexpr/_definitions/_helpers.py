"""Shared helpers for the built-in operation definitions."""

import json
import re
from collections.abc import Mapping, Sequence
from typing import Any

from dataexpr._errors import DomainError, InvalidOperandError

WILDCARD = "$"

_BRACKET_RE = re.compile(r"\[([^\]]*)\]")


def describe(value: Any) -> str:
    """Render a value for an error message."""
    return json.dumps(value, default=repr)


def is_list(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, str | bytes)


def is_number(value: Any) -> bool:
    return isinstance(value, int | float) and not isinstance(value, bool)


def parse_path(path: str) -> list[str]:
    """Split a property path into segments.

    Supports dot notation and bracket notation.

    Example:
        >>> parse_path("items[0].name")
        ['items', '0', 'name']
        >>> parse_path("items[$].id")
        ['items', '$', 'id']

    """
    if path in ("", "."):
        return []
    normalized = _BRACKET_RE.sub(r".\1", path)
    return [segment for segment in normalized.split(".") if segment]


def _step(current: Any, segment: str) -> Any:
    if isinstance(current, Mapping):
        return current.get(segment)
    if is_list(current):
        try:
            index = int(segment)
        except ValueError:
            return None
        if 0 <= index < len(current):
            return current[index]
    return None


def get_path(data: Any, path: str | Sequence[str]) -> Any:
    """Read a value from nested data by path.

    A ``$`` segment maps the rest of the path over every element of the
    current list and flattens the results. Missing values yield None.

    Example:
        >>> get_path({"items": [{"id": 1}, {"id": 2}]}, "items.$.id")
        [1, 2]

    """
    segments = parse_path(path) if isinstance(path, str) else list(path)
    current = data
    for index, segment in enumerate(segments):
        if current is None:
            return None
        if segment == WILDCARD:
            items = current if is_list(current) else [current]
            rest = segments[index + 1 :]
            if not rest:
                return list(items)
            flattened: list[Any] = []
            for item in items:
                result = get_path(item, rest)
                if is_list(result):
                    flattened.extend(result)
                else:
                    flattened.append(result)
            return flattened
        current = _step(current, segment)
    return current


def path_exists(data: Any, path: str) -> bool:
    """Check that every segment of a path is present, even if its value is None."""
    current = data
    for segment in parse_path(path):
        if isinstance(current, Mapping):
            if segment not in current:
                return False
            current = current[segment]
        elif is_list(current):
            try:
                index = int(segment)
            except ValueError:
                return False
            if not 0 <= index < len(current):
                return False
            current = current[index]
        else:
            return False
    return True


def deep_equal(a: Any, b: Any) -> bool:
    """Compare two values structurally.

    Booleans are never equal to numbers, unlike Python's ``==``.
    """
    if isinstance(a, bool) or isinstance(b, bool):
        return isinstance(a, bool) and isinstance(b, bool) and a == b
    if isinstance(a, Mapping) and isinstance(b, Mapping):
        return a.keys() == b.keys() and all(deep_equal(a[key], b[key]) for key in a)
    if is_list(a) and is_list(b):
        return len(a) == len(b) and all(deep_equal(x, y) for x, y in zip(a, b, strict=True))
    if is_list(a) or is_list(b) or isinstance(a, Mapping) or isinstance(b, Mapping):
        return False
    return a == b


def contains(items: Sequence[Any], value: Any) -> bool:
    return any(deep_equal(item, value) for item in items)


def require_list(name: str, value: Any) -> list[Any]:
    """Ensure input data is a list, raising a domain error otherwise."""
    if not is_list(value):
        msg = f"{name} can only be applied to arrays"
        raise DomainError(msg)
    return list(value)


def require_mapping(name: str, operand: Any, shape: str) -> Mapping[str, Any]:
    """Ensure an operand is a mapping, raising an operand error naming ``shape``."""
    if not isinstance(operand, Mapping):
        msg = f"{name} operand must be an object: {shape}"
        raise InvalidOperandError(msg)
    return operand


def require_keys(name: str, operand: Any, *keys: str) -> Mapping[str, Any]:
    """Ensure an evaluate-form operand is a mapping carrying ``keys``."""
    shape = "{" + ", ".join(keys) + "}"
    if not isinstance(operand, Mapping):
        msg = f"{name} evaluate form requires object operand: {shape}"
        raise InvalidOperandError(msg)
    missing = [key for key in keys if key not in operand]
    if missing:
        quoted = " and ".join(f"'{key}'" for key in missing)
        msg = f"{name} evaluate form requires {quoted} properties"
        raise InvalidOperandError(msg)
    return operand


def require_pair(name: str, operand: Any, shape: str) -> tuple[Any, Any]:
    """Ensure an operand is a list of exactly two elements."""
    if not is_list(operand) or len(operand) != 2:  # noqa: PLR2004
        msg = f"{name} requires array of length 2: {shape}"
        raise InvalidOperandError(msg)
    return operand[0], operand[1]


def require_string(name: str, value: Any) -> str:
    if not isinstance(value, str):
        msg = f"{name} requires string input"
        raise DomainError(msg)
    return value


def require_number(name: str, value: Any) -> int | float:
    if not is_number(value):
        msg = f"{name} requires numeric values, got {describe(value)}"
        raise DomainError(msg)
    return value
