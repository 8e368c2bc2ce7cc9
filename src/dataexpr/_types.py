"""Core data types shared by the engine and operation definitions."""

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import StrEnum, auto
from typing import Any, Protocol, TypeAlias

from ._errors import UnsupportedModeError

Value: TypeAlias = None | bool | int | float | str | list["Value"] | dict[str, "Value"]


class Mode(StrEnum):
    """The two evaluation modes of an expression."""

    APPLY = auto()  # Bound to external input data
    EVALUATE = auto()  # Self-contained, all values embedded in the tree


@dataclass(frozen=True, slots=True)
class Context:
    """Engine callbacks handed to every operation call.

    All three callables are bound to the same engine snapshot, so custom and
    built-in operations can resolve nested sub-expressions regardless of the
    order in which their packs were registered.

    Attributes:
        apply: Resolve a value against input data.
        evaluate: Resolve a self-contained value.
        is_expression: Check whether a value is a registered expression.

    """

    apply: Callable[[Any, Any], Any]
    evaluate: Callable[[Any], Any]
    is_expression: Callable[[Any], bool]


class ApplyFn(Protocol):
    def __call__(self, operand: Any, input_data: Any, context: Context, /) -> Any: ...


class EvaluateFn(Protocol):
    def __call__(self, operand: Any, context: Context, /) -> Any: ...


@dataclass(frozen=True, slots=True)
class Operation:
    """Definition of a single named operation.

    An operation declares the modes it supports by the callables it carries.
    Calling a mode without a callable raises UnsupportedModeError from the
    operation itself; the dispatcher never checks modes up front.

    Attributes:
        apply_fn: Implementation of the input-bound form, or None.
        evaluate_fn: Implementation of the self-contained form, or None.
        name: Registered name. Filled in by the engine builder.

    Example:
        >>> double = Operation(
        ...     apply_fn=lambda operand, data, ctx: data * 2,
        ...     evaluate_fn=lambda operand, ctx: ctx.evaluate(operand) * 2,
        ... )

    """

    apply_fn: ApplyFn | None = None
    evaluate_fn: EvaluateFn | None = None
    name: str = ""

    def supports(self, mode: Mode) -> bool:
        """Check whether this operation implements the given mode."""
        if mode == Mode.APPLY:
            return self.apply_fn is not None
        return self.evaluate_fn is not None

    def apply(self, operand: Any, input_data: Any, context: Context) -> Any:
        if self.apply_fn is None:
            raise UnsupportedModeError(self.name, Mode.APPLY)
        return self.apply_fn(operand, input_data, context)

    def evaluate(self, operand: Any, context: Context) -> Any:
        if self.evaluate_fn is None:
            raise UnsupportedModeError(self.name, Mode.EVALUATE)
        return self.evaluate_fn(operand, context)


Pack: TypeAlias = Mapping[str, Operation]


@dataclass(frozen=True, slots=True)
class OperationCall:
    """A single dispatch of a registered operation, as seen by middleware.

    Attributes:
        name: Registered operation name.
        mode: The mode the operation is being invoked in.
        operand: The unresolved operand attached to the expression key.
        input_data: Input data in apply mode; always None in evaluate mode.

    """

    name: str
    mode: Mode
    operand: Any
    input_data: Any = None


Proceed: TypeAlias = Callable[[OperationCall], Any]
Middleware: TypeAlias = Callable[[OperationCall, Proceed], Any]
