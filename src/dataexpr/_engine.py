"""Expression engine: recursive dispatch in apply and evaluate modes."""

import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from ._builder import build_definitions
from ._diagnostics import unknown_operator_error, unknown_operator_message
from ._errors import ExpressionValidationError
from ._packs import BASE
from ._recognizer import LITERAL, is_registered, looks_expression_shaped, split_expression
from ._types import Context, Middleware, Mode, Operation, OperationCall, Pack, Proceed

logger = logging.getLogger(__name__)


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, str | bytes)


def _wrap(layer: Middleware, proceed: Proceed) -> Proceed:
    def wrapped(call: OperationCall) -> Any:
        return layer(call, proceed)

    return wrapped


@dataclass(frozen=True, slots=True)
class Engine:
    """An immutable expression engine over one composition of packs.

    Engines are safe to share between threads: the definition map is
    read-only and every context handed to an operation closes over this
    same engine.

    Attributes:
        definitions: Read-only mapping from operation name to Operation.
        middleware: Wrappers around every operation dispatch, outermost first.

    """

    definitions: Mapping[str, Operation]
    middleware: tuple[Middleware, ...] = ()
    _context: Context = field(init=False, repr=False, compare=False)
    _names: tuple[str, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_names", tuple(self.definitions))
        object.__setattr__(
            self,
            "_context",
            Context(apply=self.apply, evaluate=self.evaluate, is_expression=self.is_expression),
        )

    @property
    def expression_names(self) -> tuple[str, ...]:
        """Registered operation names in registration order."""
        return self._names

    @property
    def context(self) -> Context:
        """The context passed to every operation call."""
        return self._context

    def is_expression(self, value: Any) -> bool:
        """Check whether a value is an expression naming a registered operation."""
        return is_registered(value, self.definitions)

    def apply(self, value: Any, input_data: Any = None) -> Any:
        """Resolve a value against input data.

        Registered expressions are dispatched to their operation. Sequences and
        ordinary mappings are rebuilt with every element resolved against the
        same input data. Scalars are returned unchanged.

        Args:
            value: An expression or any data possibly containing expressions.
            input_data: The data operations read in apply mode.

        Returns:
            The resolved value.

        Raises:
            UnrecognizedOperationError: If an expression-shaped value names no
                registered operation.

        Example:
            >>> engine = create_engine()
            >>> engine.apply({"$pipe": [{"$get": "age"}, {"$gte": 5}]}, {"age": 6})
            True

        """
        if looks_expression_shaped(value):
            name, operand = split_expression(value)
            if name not in self.definitions:
                raise unknown_operator_error(value, self._names)
            return self._dispatch(OperationCall(name=name, mode=Mode.APPLY, operand=operand, input_data=input_data))

        if _is_sequence(value):
            return [self.apply(item, input_data) for item in value]
        if isinstance(value, Mapping):
            return {key: self.apply(item, input_data) for key, item in value.items()}
        return value

    def evaluate(self, value: Any) -> Any:
        """Resolve a self-contained value.

        Mirrors ``apply`` but no input data exists anywhere in the recursion;
        operations must find every value they need inside their operand.

        Example:
            >>> create_engine(packs=[MATH]).evaluate({"$add": [2, 3]})
            5

        """
        if looks_expression_shaped(value):
            name, operand = split_expression(value)
            if name not in self.definitions:
                raise unknown_operator_error(value, self._names)
            return self._dispatch(OperationCall(name=name, mode=Mode.EVALUATE, operand=operand))

        if _is_sequence(value):
            return [self.evaluate(item) for item in value]
        if isinstance(value, Mapping):
            return {key: self.evaluate(item) for key, item in value.items()}
        return value

    def _invoke(self, call: OperationCall) -> Any:
        definition = self.definitions[call.name]
        logger.debug("Dispatching %s (%s)", call.name, call.mode)
        if call.mode == Mode.APPLY:
            return definition.apply(call.operand, call.input_data, self._context)
        return definition.evaluate(call.operand, self._context)

    def _dispatch(self, call: OperationCall) -> Any:
        proceed: Proceed = self._invoke
        for layer in reversed(self.middleware):
            proceed = _wrap(layer, proceed)
        return proceed(call)

    def validate_expression(self, value: Any) -> list[str]:
        """Collect a diagnostic for every unknown operator in a value.

        No operation is invoked. Operands of the literal escape are not
        inspected, since they are data by definition.

        Returns:
            One message per unknown operator, in document order. Empty when
            the value is valid.

        """
        errors: list[str] = []
        self._collect_errors(value, errors)
        return errors

    def _collect_errors(self, value: Any, errors: list[str]) -> None:
        if looks_expression_shaped(value):
            name, operand = split_expression(value)
            if name not in self.definitions:
                message, _, _ = unknown_operator_message(value, self._names)
                errors.append(message)
            elif name != LITERAL:
                self._collect_errors(operand, errors)
        elif _is_sequence(value):
            for item in value:
                self._collect_errors(item, errors)
        elif isinstance(value, Mapping):
            for item in value.values():
                self._collect_errors(item, errors)

    def ensure_valid_expression(self, value: Any) -> bool:
        """Raise if a value contains any unknown operator.

        Raises:
            ExpressionValidationError: With every diagnostic joined by newlines.

        """
        errors = self.validate_expression(value)
        if errors:
            raise ExpressionValidationError(errors)
        return True


def create_engine(
    *,
    packs: Iterable[Pack] = (),
    custom: Pack | None = None,
    include_base: bool = True,
    exclude: Iterable[str] = (),
    middleware: Iterable[Middleware] = (),
) -> Engine:
    """Create an engine from packs of operations.

    Args:
        packs: Extension packs, later packs overriding earlier ones by name.
        custom: Operations with the highest precedence.
        include_base: Whether to start from the base pack.
        exclude: Operation names to remove. The literal escape always stays.
        middleware: Wrappers around every dispatch, outermost first.

    Returns:
        A new immutable Engine.

    Example:
        >>> engine = create_engine(packs=[MATH], custom={"$double": lambda _, data, ctx: data * 2})
        >>> engine.apply({"$double": None}, 21)
        42

    """
    definitions = build_definitions(
        BASE,
        packs,
        custom,
        include_base=include_base,
        exclude=exclude,
    )
    return Engine(definitions=definitions, middleware=tuple(middleware))
