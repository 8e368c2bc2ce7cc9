"""Flow operations: literal escape, composition, defaults, and debugging."""

import logging
from collections.abc import Callable, Mapping
from functools import reduce
from typing import Any, TypeAlias

from dataexpr._errors import InvalidOperandError
from dataexpr._recognizer import LITERAL
from dataexpr._types import Context, Operation

from ._helpers import describe, is_list, require_pair

logger = logging.getLogger(__name__)


def _literal(operand: Any, *_: Any) -> Any:
    return operand


LITERAL_OPERATION = Operation(apply_fn=_literal, evaluate_fn=_literal, name=LITERAL)


_Fold: TypeAlias = Callable[[list[Any], Callable[[Any, Any], Any], Any], Any]


def _check_expressions(name: str, expressions: Any, context: Context) -> list[Any]:
    if not is_list(expressions):
        msg = f"{name} operand must be an array of expressions"
        raise InvalidOperandError(msg)
    for expression in expressions:
        if not context.is_expression(expression):
            msg = f"{describe(expression)} is not a valid expression"
            raise InvalidOperandError(msg)
    return list(expressions)


def _composition(name: str, fold: _Fold) -> Operation:
    """Build a composition operation from a fold over its expressions.

    Each expression is applied to the result of the previous one. The apply
    form seeds the fold with the input data; the evaluate form takes
    ``[expressions, seed]`` and evaluates the seed first.
    """

    def apply(operand: Any, input_data: Any, context: Context) -> Any:
        expressions = _check_expressions(name, operand, context)
        return fold(expressions, lambda acc, expr: context.apply(expr, acc), input_data)

    def evaluate(operand: Any, context: Context) -> Any:
        raw_expressions, seed = require_pair(name, operand, "[expressions, initialValue]")
        expressions = _check_expressions(name, raw_expressions, context)
        return fold(expressions, lambda acc, expr: context.apply(expr, acc), context.evaluate(seed))

    return Operation(apply_fn=apply, evaluate_fn=evaluate)


def _fold_left(items: list[Any], step: Callable[[Any, Any], Any], seed: Any) -> Any:
    return reduce(step, items, seed)


def _fold_right(items: list[Any], step: Callable[[Any, Any], Any], seed: Any) -> Any:
    return reduce(step, reversed(items), seed)


PIPE = _composition("$pipe", _fold_left)
COMPOSE = _composition("$compose", _fold_right)


def _default_parts(operand: Any) -> tuple[Any, Any]:
    if is_list(operand):
        if len(operand) != 2:  # noqa: PLR2004
            msg = "$default array form must have exactly 2 elements: [expression, default]"
            raise InvalidOperandError(msg)
        return operand[0], operand[1]
    if isinstance(operand, Mapping) and "expression" in operand and "default" in operand:
        return operand["expression"], operand["default"]
    msg = "$default operand must be an object with { expression, default } or array [expression, default]"
    raise InvalidOperandError(msg)


def _default_apply(operand: Any, input_data: Any, context: Context) -> Any:
    expression, fallback = _default_parts(operand)
    result = context.apply(expression, input_data)
    return result if result is not None else context.apply(fallback, input_data)


def _default_evaluate(operand: Any, context: Context) -> Any:
    expression, fallback = _default_parts(operand)
    result = context.evaluate(expression)
    return result if result is not None else context.evaluate(fallback)


DEFAULT = Operation(apply_fn=_default_apply, evaluate_fn=_default_evaluate)


def _debug_apply(operand: Any, input_data: Any, context: Context) -> Any:
    value = context.apply(operand, input_data)
    logger.info("$debug: %r", value)
    return value


def _debug_evaluate(operand: Any, context: Context) -> Any:
    value = context.evaluate(operand)
    logger.info("$debug: %r", value)
    return value


DEBUG = Operation(apply_fn=_debug_apply, evaluate_fn=_debug_evaluate)
