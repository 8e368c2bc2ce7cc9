"""Predicate operations: comparisons, membership, existence, and boolean logic."""

import operator
from collections.abc import Callable, Mapping
from typing import Any

from dataexpr._errors import DomainError, InvalidOperandError
from dataexpr._types import Context, Operation

from ._helpers import contains, deep_equal, describe, is_list, path_exists, require_keys


def _comparison(name: str, compare: Callable[[Any, Any], bool]) -> Operation:
    """Build a comparison operation.

    The apply form compares the input data (left) with the resolved operand
    (right). The evaluate form takes ``[left, right]`` or ``{left, right}``.
    """

    def checked(left: Any, right: Any) -> bool:
        try:
            return compare(left, right)
        except TypeError as e:
            msg = f"{name} cannot compare {describe(left)} with {describe(right)}"
            raise DomainError(msg) from e

    def evaluate(operand: Any, context: Context) -> bool:
        if is_list(operand) and len(operand) == 2:  # noqa: PLR2004
            left, right = operand
        elif isinstance(operand, Mapping):
            operand = require_keys(name, operand, "left", "right")
            left, right = operand["left"], operand["right"]
        else:
            msg = f"{name} evaluate form requires [left, right] or {{left, right}}"
            raise InvalidOperandError(msg)
        return checked(context.evaluate(left), context.evaluate(right))

    return Operation(
        apply_fn=lambda operand, input_data, context: checked(input_data, context.apply(operand, input_data)),
        evaluate_fn=evaluate,
    )


def _ordered(compare: Callable[[Any, Any], bool]) -> Callable[[Any, Any], bool]:
    # Ordering is only defined between numbers or between strings
    def wrapped(left: Any, right: Any) -> bool:
        if isinstance(left, bool) or isinstance(right, bool):
            raise TypeError
        return compare(left, right)

    return wrapped


EQ = _comparison("$eq", deep_equal)
NE = _comparison("$ne", lambda left, right: not deep_equal(left, right))
GT = _comparison("$gt", _ordered(operator.gt))
GTE = _comparison("$gte", _ordered(operator.ge))
LT = _comparison("$lt", _ordered(operator.lt))
LTE = _comparison("$lte", _ordered(operator.le))


def _inclusion(name: str, *, negate: bool) -> Operation:
    def check(value: Any, items: Any) -> bool:
        if not is_list(items):
            msg = f"{name} parameter must be an array"
            raise InvalidOperandError(msg)
        return contains(items, value) is not negate

    def evaluate(operand: Any, context: Context) -> bool:
        operand = require_keys(name, operand, "array", "value")
        return check(context.evaluate(operand["value"]), context.evaluate(operand["array"]))

    return Operation(
        apply_fn=lambda operand, input_data, context: check(input_data, context.apply(operand, input_data)),
        evaluate_fn=evaluate,
    )


IN = _inclusion("$in", negate=False)
NIN = _inclusion("$nin", negate=True)


def _within(value: Any, bounds: Any) -> bool:
    if not isinstance(bounds, Mapping) or "min" not in bounds or "max" not in bounds:
        msg = "$between requires object operand: {min, max}"
        raise InvalidOperandError(msg)
    try:
        return bounds["min"] <= value <= bounds["max"]
    except TypeError as e:
        msg = f"$between cannot compare {describe(value)} with {describe(bounds)}"
        raise DomainError(msg) from e


def _between_evaluate(operand: Any, context: Context) -> bool:
    resolved = context.evaluate(require_keys("$between", operand, "value", "min", "max"))
    return _within(resolved["value"], resolved)


BETWEEN = Operation(
    apply_fn=lambda operand, input_data, context: _within(input_data, context.apply(operand, input_data)),
    evaluate_fn=_between_evaluate,
)


def _expressions(name: str, operand: Any) -> list[Any]:
    if not is_list(operand):
        msg = f"{name} operand must be an array of expressions"
        raise InvalidOperandError(msg)
    return list(operand)


AND = Operation(
    apply_fn=lambda operand, input_data, context: all(
        context.apply(expr, input_data) for expr in _expressions("$and", operand)
    ),
    evaluate_fn=lambda operand, context: all(context.evaluate(expr) for expr in _expressions("$and", operand)),
)

OR = Operation(
    apply_fn=lambda operand, input_data, context: any(
        context.apply(expr, input_data) for expr in _expressions("$or", operand)
    ),
    evaluate_fn=lambda operand, context: any(context.evaluate(expr) for expr in _expressions("$or", operand)),
)

NOT = Operation(
    apply_fn=lambda operand, input_data, context: not context.apply(operand, input_data),
    evaluate_fn=lambda operand, context: not context.evaluate(operand),
)

IS_EMPTY = Operation(
    apply_fn=lambda _operand, input_data, _context: input_data is None,
    evaluate_fn=lambda operand, context: context.evaluate(operand) is None,
)

IS_PRESENT = Operation(
    apply_fn=lambda _operand, input_data, _context: input_data is not None,
    evaluate_fn=lambda operand, context: context.evaluate(operand) is not None,
)


def _require_path(path: Any) -> str:
    if not isinstance(path, str):
        msg = "$exists operand must resolve to a string path"
        raise InvalidOperandError(msg)
    return path


def _exists_evaluate(operand: Any, context: Context) -> bool:
    operand = require_keys("$exists", operand, "object", "path")
    return path_exists(context.evaluate(operand["object"]), _require_path(context.evaluate(operand["path"])))


EXISTS = Operation(
    apply_fn=lambda operand, input_data, context: path_exists(
        input_data,
        _require_path(context.apply(operand, input_data)),
    ),
    evaluate_fn=_exists_evaluate,
)
