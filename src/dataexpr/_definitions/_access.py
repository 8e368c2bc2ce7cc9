"""Access operations: read values out of input data."""

from collections.abc import Mapping
from typing import Any

from dataexpr._errors import InvalidOperandError
from dataexpr._recognizer import looks_expression_shaped
from dataexpr._types import Context, Operation

from ._helpers import deep_equal, get_path, is_list, require_keys, require_mapping


def _get_apply(operand: Any, input_data: Any, context: Context) -> Any:
    if isinstance(operand, Mapping) and not looks_expression_shaped(operand):
        if "path" not in operand:
            msg = "$get object form requires 'path' property"
            raise InvalidOperandError(msg)
        result = get_path(input_data, _resolve_path(context.apply(operand["path"], input_data)))
        if result is None and operand.get("default") is not None:
            return context.apply(operand["default"], input_data)
        return result

    path = context.apply(operand, input_data)
    if path == ".":
        return input_data
    return get_path(input_data, _resolve_path(path))


def _resolve_path(path: Any) -> Any:
    if isinstance(path, str) or (is_list(path) and all(isinstance(part, str) for part in path)):
        return path
    msg = "$get operand must be string or object with {path, default?}"
    raise InvalidOperandError(msg)


def _get_evaluate(operand: Any, context: Context) -> Any:
    operand = require_keys("$get", operand, "object", "path")
    result = get_path(context.evaluate(operand["object"]), _resolve_path(context.evaluate(operand["path"])))
    if result is None and operand.get("default") is not None:
        return context.evaluate(operand["default"])
    return result


GET = Operation(apply_fn=_get_apply, evaluate_fn=_get_evaluate)


def _prop(data: Any, prop: Any) -> Any:
    if isinstance(data, Mapping):
        return data.get(prop)
    if is_list(data) and isinstance(prop, int) and not isinstance(prop, bool) and 0 <= prop < len(data):
        return data[prop]
    return None


PROP = Operation(
    apply_fn=lambda operand, input_data, context: _prop(input_data, context.apply(operand, input_data)),
    evaluate_fn=lambda operand, context: _prop(
        context.evaluate(require_keys("$prop", operand, "object", "property")["object"]),
        context.evaluate(operand["property"]),
    ),
)


IDENTITY = Operation(
    apply_fn=lambda _operand, input_data, _context: input_data,
    evaluate_fn=lambda operand, context: context.evaluate(operand),
)


IS_DEFINED = Operation(
    apply_fn=lambda operand, input_data, context: context.apply(operand, input_data) is not None,
    evaluate_fn=lambda operand, context: context.evaluate(operand) is not None,
)


def _select_apply(operand: Any, input_data: Any, context: Context) -> Any:
    if is_list(operand):
        result: dict[str, Any] = {}
        for prop in operand:
            key = prop if isinstance(prop, str) else context.apply(prop, input_data)
            value = get_path(input_data, key)
            if value is not None:
                result[key] = value
        return result

    if isinstance(operand, Mapping) and not looks_expression_shaped(operand):
        return {key: context.apply(expr, input_data) for key, expr in operand.items()}

    msg = "$select operand must be array of paths or object with key mappings"
    raise InvalidOperandError(msg)


def _select_evaluate(operand: Any, context: Context) -> Any:
    operand = require_keys("$select", operand, "object", "selection")
    return _select_apply(operand["selection"], context.evaluate(operand["object"]), context)


SELECT = Operation(apply_fn=_select_apply, evaluate_fn=_select_evaluate)


def conditions_hold(conditions: Mapping[str, Any], item: Any, context: Context) -> bool:
    """Check a path-to-condition mapping against one item.

    Conditions that are registered expressions are applied to the value at
    their path and must return True. Any other condition is compared with the
    value by deep equality.
    """
    for path, condition in conditions.items():
        value = get_path(item, path)
        if context.is_expression(condition):
            if context.apply(condition, value) is not True:
                return False
        elif not deep_equal(value, condition):
            return False
    return True


def _matches_apply(operand: Any, input_data: Any, context: Context) -> bool:
    conditions = require_mapping("$matches", operand, "{path: condition, ...}")
    return conditions_hold(conditions, input_data, context)


def _matches_evaluate(operand: Any, context: Context) -> bool:
    operand = require_keys("$matches", operand, "data", "conditions")
    conditions = require_mapping("$matches", operand["conditions"], "{path: condition, ...}")
    return conditions_hold(conditions, context.evaluate(operand["data"]), context)


MATCHES = Operation(apply_fn=_matches_apply, evaluate_fn=_matches_evaluate)
