"""Conditional operations: $if and $case."""

from collections.abc import Callable, Mapping
from typing import Any

from dataexpr._errors import DomainError, InvalidOperandError
from dataexpr._recognizer import is_literal
from dataexpr._types import Context, Operation

from ._helpers import deep_equal, describe, is_list, require_mapping


def _require_condition(condition: Any) -> bool:
    if not isinstance(condition, bool):
        msg = f"$if.if must be a boolean or an expression that resolves to one, got {describe(condition)}"
        raise DomainError(msg)
    return condition


def _if_operand(operand: Any) -> Mapping[str, Any]:
    operand = require_mapping("$if", operand, "{if, then, else}")
    if "if" not in operand:
        msg = "$if operand requires an 'if' property"
        raise InvalidOperandError(msg)
    return operand


def _if_apply(operand: Any, input_data: Any, context: Context) -> Any:
    operand = _if_operand(operand)
    branch = "then" if _require_condition(context.apply(operand["if"], input_data)) else "else"
    return context.apply(operand.get(branch), input_data)


def _if_evaluate(operand: Any, context: Context) -> Any:
    operand = _if_operand(operand)
    branch = "then" if _require_condition(context.evaluate(operand["if"])) else "else"
    return context.evaluate(operand.get(branch))


IF = Operation(apply_fn=_if_apply, evaluate_fn=_if_evaluate)


def _case_matches(
    when: Any,
    value: Any,
    context: Context,
    resolve: Callable[[Any], Any],
) -> bool:
    """Decide whether one ``when`` clause matches the case value.

    A registered expression (other than a literal) is a predicate: it is
    applied with the case value as its input and must return a boolean. Any
    other clause is resolved and compared with the case value structurally.
    """
    if context.is_expression(when) and not is_literal(when):
        condition = context.apply(when, value)
        if not isinstance(condition, bool):
            msg = f"$case.when must resolve to a boolean, got {describe(condition)}"
            raise DomainError(msg)
        return condition
    return deep_equal(resolve(when), value)


def _select_branch(operand: Any, context: Context, resolve: Callable[[Any], Any]) -> Any:
    operand = require_mapping("$case", operand, "{value, cases, default}")
    cases = operand.get("cases")
    if not is_list(cases):
        msg = "$case operand requires a 'cases' array"
        raise InvalidOperandError(msg)

    value = resolve(operand.get("value"))
    for case in cases:
        if not isinstance(case, Mapping) or "when" not in case:
            msg = "Case item must have 'when' property"
            raise InvalidOperandError(msg)
        if _case_matches(case["when"], value, context, resolve):
            return resolve(case.get("then"))
    return resolve(operand.get("default"))


CASE = Operation(
    apply_fn=lambda operand, input_data, context: _select_branch(
        operand,
        context,
        lambda value: context.apply(value, input_data),
    ),
    evaluate_fn=lambda operand, context: _select_branch(operand, context, context.evaluate),
)
