"""Arithmetic operations."""

import math
import operator
from collections.abc import Callable
from typing import Any, TypeAlias

from dataexpr._errors import DomainError, InvalidOperandError
from dataexpr._types import Context, Operation

from ._helpers import is_list, is_number, require_number

_Binary: TypeAlias = Callable[[Any, Any], Any]


def _binary(name: str, compute: _Binary) -> Operation:
    """Build a binary arithmetic operation.

    The apply form accepts either ``[left, right]`` or a single right-hand
    operand combined with the input data. The evaluate form requires
    ``[left, right]``.
    """

    def run(left: Any, right: Any) -> Any:
        return compute(require_number(name, left), require_number(name, right))

    def pair(resolved: Any) -> tuple[Any, Any]:
        if len(resolved) != 2:  # noqa: PLR2004
            msg = f"{name} in array form requires exactly 2 elements"
            raise InvalidOperandError(msg)
        return resolved[0], resolved[1]

    def apply(operand: Any, input_data: Any, context: Context) -> Any:
        resolved = context.apply(operand, input_data)
        if is_list(resolved):
            return run(*pair(resolved))
        return run(input_data, resolved)

    def evaluate(operand: Any, context: Context) -> Any:
        resolved = context.evaluate(operand)
        if not is_list(resolved):
            msg = f"{name} evaluate form requires array operand: [left, right]"
            raise InvalidOperandError(msg)
        return run(*pair(resolved))

    return Operation(apply_fn=apply, evaluate_fn=evaluate)


def _divide(left: float, right: float) -> float:
    if right == 0:
        msg = "Division by zero"
        raise DomainError(msg)
    return left / right


def _modulo(left: float, right: float) -> float:
    # Python's % already takes the sign of the divisor
    if right == 0:
        msg = "Modulo by zero"
        raise DomainError(msg)
    return left % right


def _power(base: float, exponent: float) -> float:
    if base < 0 and exponent % 1 != 0:
        msg = "Complex numbers are not supported (negative base with fractional exponent)"
        raise DomainError(msg)
    if base == 0 and exponent < 0:
        msg = "Division by zero (0 raised to negative exponent)"
        raise DomainError(msg)
    return base**exponent


ADD = _binary("$add", operator.add)
SUBTRACT = _binary("$subtract", operator.sub)
MULTIPLY = _binary("$multiply", operator.mul)
DIVIDE = _binary("$divide", _divide)
MODULO = _binary("$modulo", _modulo)
POW = _binary("$pow", _power)


def _unary(name: str, compute: Callable[[Any], Any]) -> Operation:
    """Build a unary operation on the resolved operand, or on the input when the operand is not a number."""

    def apply(operand: Any, input_data: Any, context: Context) -> Any:
        resolved = context.apply(operand, input_data)
        return compute(resolved if is_number(resolved) else require_number(name, input_data))

    return Operation(
        apply_fn=apply,
        evaluate_fn=lambda operand, context: compute(require_number(name, context.evaluate(operand))),
    )


def _sqrt(value: float) -> float:
    if value < 0:
        msg = "Complex numbers are not supported (square root of negative number)"
        raise DomainError(msg)
    return math.sqrt(value)


ABS = _unary("$abs", abs)
CEIL = _unary("$ceil", math.ceil)
FLOOR = _unary("$floor", math.floor)
SQRT = _unary("$sqrt", _sqrt)
