"""Object operations: key/value views and reshaping."""

from collections.abc import Callable, Mapping
from typing import Any

from dataexpr._errors import DomainError, InvalidOperandError
from dataexpr._types import Context, Operation

from ._helpers import is_list, require_keys


def _require_object(name: str, value: Any) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        msg = f"{name} can only be applied to objects"
        raise DomainError(msg)
    return value


def _view(name: str, view: Callable[[Mapping[str, Any]], Any]) -> Operation:
    return Operation(
        apply_fn=lambda _operand, input_data, _context: view(_require_object(name, input_data)),
        evaluate_fn=lambda operand, context: view(_require_object(name, context.evaluate(operand))),
    )


KEYS = _view("$keys", lambda obj: list(obj.keys()))
VALUES = _view("$values", lambda obj: list(obj.values()))
PAIRS = _view("$pairs", lambda obj: [[key, value] for key, value in obj.items()])


def _from_pairs(pairs: Any) -> dict[str, Any]:
    if not is_list(pairs) or not all(is_list(pair) and len(pair) == 2 for pair in pairs):  # noqa: PLR2004
        msg = "$fromPairs requires an array of [key, value] pairs"
        raise DomainError(msg)
    return {str(key): value for key, value in pairs}


FROM_PAIRS = Operation(
    apply_fn=lambda _operand, input_data, _context: _from_pairs(input_data),
    evaluate_fn=lambda operand, context: _from_pairs(context.evaluate(operand)),
)


def _merge(objects: list[Any]) -> dict[str, Any]:
    result: dict[str, Any] = {}
    for obj in objects:
        result.update(_require_object("$merge", obj))
    return result


def _merge_apply(operand: Any, input_data: Any, context: Context) -> dict[str, Any]:
    resolved = context.apply(operand, input_data)
    return _merge([input_data, *(resolved if is_list(resolved) else [resolved])])


def _merge_evaluate(operand: Any, context: Context) -> dict[str, Any]:
    resolved = context.evaluate(operand)
    if not is_list(resolved):
        msg = "$merge evaluate form requires array operand: [object, ...objects]"
        raise InvalidOperandError(msg)
    return _merge(resolved)


MERGE = Operation(apply_fn=_merge_apply, evaluate_fn=_merge_evaluate)


def _keyed(name: str, *, keep: bool) -> Operation:
    """Build $pick (keep listed keys) or $omit (drop listed keys)."""

    def run(obj: Any, keys: Any) -> dict[str, Any]:
        obj = _require_object(name, obj)
        if not is_list(keys):
            msg = f"{name} operand must be an array of property names"
            raise InvalidOperandError(msg)
        return {key: value for key, value in obj.items() if (key in keys) is keep}

    def evaluate(operand: Any, context: Context) -> dict[str, Any]:
        operand = require_keys(name, operand, "object", "properties")
        return run(context.evaluate(operand["object"]), context.evaluate(operand["properties"]))

    return Operation(
        apply_fn=lambda operand, input_data, context: run(input_data, context.apply(operand, input_data)),
        evaluate_fn=evaluate,
    )


PICK = _keyed("$pick", keep=True)
OMIT = _keyed("$omit", keep=False)
