"""Array operations: iteration, transformation, slicing, grouping, and sorting."""

from collections.abc import Callable, Mapping
from typing import Any, TypeAlias

from dataexpr._errors import DomainError, InvalidOperandError
from dataexpr._types import Context, Operation

from ._access import conditions_hold
from ._helpers import (
    contains,
    describe,
    get_path,
    is_list,
    is_number,
    require_keys,
    require_list,
    require_mapping,
    require_pair,
)

_ItemFn: TypeAlias = Callable[[Any], Any]


def _iteration(name: str, run: Callable[[list[Any], _ItemFn], Any]) -> Operation:
    """Build an operation applying its operand expression to every element.

    The apply form iterates over the input data. The evaluate form takes
    ``[array, expression]`` and evaluates the array first.
    """

    def apply(operand: Any, input_data: Any, context: Context) -> Any:
        items = require_list(name, input_data)
        return run(items, lambda item: context.apply(operand, item))

    def evaluate(operand: Any, context: Context) -> Any:
        array, expression = require_pair(name, operand, "[array, expression]")
        items = require_list(name, context.evaluate(array))
        return run(items, lambda item: context.apply(expression, item))

    return Operation(apply_fn=apply, evaluate_fn=evaluate)


def _flat_map(items: list[Any], item_fn: _ItemFn) -> list[Any]:
    result: list[Any] = []
    for item in items:
        mapped = item_fn(item)
        if is_list(mapped):
            result.extend(mapped)
        else:
            result.append(mapped)
    return result


MAP = _iteration("$map", lambda items, fn: [fn(item) for item in items])
FILTER = _iteration("$filter", lambda items, fn: [item for item in items if fn(item)])
FIND = _iteration("$find", lambda items, fn: next((item for item in items if fn(item)), None))
ALL = _iteration("$all", lambda items, fn: all(fn(item) for item in items))
ANY = _iteration("$any", lambda items, fn: any(fn(item) for item in items))
FLAT_MAP = _iteration("$flatMap", _flat_map)


def _filter_by(items: Any, conditions: Any, context: Context) -> list[Any]:
    items = require_list("$filterBy", items)
    conditions = require_mapping("$filterBy", conditions, "{path: condition, ...}")
    return [item for item in items if conditions_hold(conditions, item, context)]


def _filter_by_evaluate(operand: Any, context: Context) -> list[Any]:
    operand = require_keys("$filterBy", operand, "array", "conditions")
    return _filter_by(context.evaluate(operand["array"]), operand["conditions"], context)


FILTER_BY = Operation(
    apply_fn=lambda operand, input_data, context: _filter_by(input_data, operand, context),
    evaluate_fn=_filter_by_evaluate,
)


def _accessor(name: str, access: Callable[[list[Any]], Any]) -> Operation:
    """Build an accessor on the resolved operand array, or on the input array."""

    def apply(operand: Any, input_data: Any, context: Context) -> Any:
        resolved = context.apply(operand, input_data)
        if is_list(resolved):
            return access(list(resolved))
        if not is_list(input_data):
            msg = f"{name} requires array operand or input data"
            raise DomainError(msg)
        return access(list(input_data))

    return Operation(
        apply_fn=apply,
        evaluate_fn=lambda operand, context: access(require_list(name, context.evaluate(operand))),
    )


FIRST = _accessor("$first", lambda items: items[0] if items else None)
LAST = _accessor("$last", lambda items: items[-1] if items else None)


def _unique(items: list[Any]) -> list[Any]:
    result: list[Any] = []
    for item in items:
        if not contains(result, item):
            result.append(item)
    return result


def _transform(name: str, transform: Callable[[list[Any]], Any]) -> Operation:
    """Build an operand-free transformation of the input array."""
    return Operation(
        apply_fn=lambda _operand, input_data, _context: transform(require_list(name, input_data)),
        evaluate_fn=lambda operand, context: transform(require_list(name, context.evaluate(operand))),
    )


REVERSE = _transform("$reverse", lambda items: items[::-1])
UNIQUE = _transform("$unique", _unique)


def _parameterized(name: str, run: Callable[[list[Any], Any], Any], shape: str) -> Operation:
    """Build an array operation taking one resolved parameter.

    The apply form runs on the input array; the evaluate form takes
    ``[array, parameter]``.
    """

    def evaluate(operand: Any, context: Context) -> Any:
        array, param = require_pair(name, operand, shape)
        return run(require_list(name, context.evaluate(array)), context.evaluate(param))

    return Operation(
        apply_fn=lambda operand, input_data, context: run(
            require_list(name, input_data),
            context.apply(operand, input_data),
        ),
        evaluate_fn=evaluate,
    )


def _join(items: list[Any], separator: Any) -> str:
    if separator is None:
        separator = ","
    if not isinstance(separator, str):
        msg = "$join separator must be a string"
        raise InvalidOperandError(msg)
    return separator.join("" if item is None else str(item) for item in items)


def _count(name: str, count: Any) -> int:
    if not is_number(count):
        msg = f"{name} requires a numeric count"
        raise InvalidOperandError(msg)
    return max(int(count), 0)


def _concat(items: list[Any], arrays: Any) -> list[Any]:
    if not is_list(arrays) or not all(is_list(array) for array in arrays):
        msg = "$concat operand must be an array of arrays"
        raise InvalidOperandError(msg)
    result = list(items)
    for array in arrays:
        result.extend(array)
    return result


JOIN = _parameterized("$join", _join, "[array, separator]")
TAKE = _parameterized("$take", lambda items, count: items[: _count("$take", count)], "[array, count]")
SKIP = _parameterized("$skip", lambda items, count: items[_count("$skip", count) :], "[array, count]")
CONCAT = _parameterized("$concat", _concat, "[array, arrays]")


def _flatten(items: list[Any], depth: int) -> list[Any]:
    result: list[Any] = []
    for item in items:
        if is_list(item) and depth > 0:
            result.extend(_flatten(list(item), depth - 1))
        else:
            result.append(item)
    return result


def _flatten_depth(operand: Any) -> int:
    if isinstance(operand, Mapping) and is_number(operand.get("depth")):
        return int(operand["depth"])
    return 1


FLATTEN = Operation(
    apply_fn=lambda operand, input_data, _context: _flatten(
        require_list("$flatten", input_data),
        _flatten_depth(operand),
    ),
    evaluate_fn=lambda operand, context: _flatten(
        require_list("$flatten", context.evaluate(require_keys("$flatten", operand, "array")["array"])),
        _flatten_depth(operand),
    ),
)


def _key_fn(selector: Any, context: Context) -> _ItemFn:
    """Turn a path string or an expression into a per-item key function."""
    if isinstance(selector, str):
        return lambda item: get_path(item, selector)
    return lambda item: context.apply(selector, item)


def _pluck(items: Any, selector: Any, context: Context) -> list[Any]:
    key = _key_fn(selector, context)
    return [key(item) for item in require_list("$pluck", items)]


def _pluck_evaluate(operand: Any, context: Context) -> list[Any]:
    array, selector = require_pair("$pluck", operand, "[array, path]")
    return _pluck(context.evaluate(array), selector, context)


PLUCK = Operation(
    apply_fn=lambda operand, input_data, context: _pluck(input_data, operand, context),
    evaluate_fn=_pluck_evaluate,
)


def _group_by(items: Any, selector: Any, context: Context) -> dict[str, list[Any]]:
    key = _key_fn(selector, context)
    groups: dict[str, list[Any]] = {}
    for item in require_list("$groupBy", items):
        group = key(item)
        if group is None:
            msg = f"{describe(item)} could not be grouped by {describe(selector)}"
            raise DomainError(msg)
        groups.setdefault(group if isinstance(group, str) else describe(group), []).append(item)
    return groups


def _group_by_evaluate(operand: Any, context: Context) -> dict[str, list[Any]]:
    array, selector = require_pair("$groupBy", operand, "[array, path]")
    return _group_by(context.evaluate(array), selector, context)


GROUP_BY = Operation(
    apply_fn=lambda operand, input_data, context: _group_by(input_data, operand, context),
    evaluate_fn=_group_by_evaluate,
)


_SORT_SHAPE = "$sort operand must be string, object with 'by' property, or array of sort criteria"


def _sort_criteria(operand: Any) -> list[tuple[Any, bool]]:
    if isinstance(operand, str):
        return [(operand, False)]
    if isinstance(operand, Mapping) and "by" in operand:
        return [(operand["by"], bool(operand.get("desc", False)))]
    if is_list(operand) and operand:
        return [criterion for part in operand for criterion in _sort_criteria(part)]
    raise InvalidOperandError(_SORT_SHAPE)


def _sort(items: Any, operand: Any, context: Context) -> list[Any]:
    result = require_list("$sort", items)
    # Stable sorts applied from the least to the most significant criterion
    for selector, descending in reversed(_sort_criteria(operand)):
        key = _key_fn(selector, context)
        present = [item for item in result if key(item) is not None]
        missing = [item for item in result if key(item) is None]
        try:
            present.sort(key=key, reverse=descending)
        except TypeError as e:
            msg = f"$sort cannot order values selected by {describe(selector)}"
            raise DomainError(msg) from e
        result = present + missing
    return result


def _sort_evaluate(operand: Any, context: Context) -> list[Any]:
    operand = require_keys("$sort", operand, "array", "sortCriteria")
    return _sort(context.evaluate(operand["array"]), operand["sortCriteria"], context)


SORT = Operation(
    apply_fn=lambda operand, input_data, context: _sort(input_data, operand, context),
    evaluate_fn=_sort_evaluate,
)


def _coalesce(values: Any) -> Any:
    if not is_list(values):
        msg = "$coalesce operand must be an array"
        raise InvalidOperandError(msg)
    return next((value for value in values if value is not None), None)


COALESCE = Operation(
    apply_fn=lambda operand, input_data, context: _coalesce(context.apply(operand, input_data)),
    evaluate_fn=lambda operand, context: _coalesce(context.evaluate(operand)),
)
