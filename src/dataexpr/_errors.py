"""Exception hierarchy for dataexpr.

Kept separate from the engine so operation modules can raise these errors
without importing the engine.
"""


class DataExprError(Exception):
    """Base class for all errors raised by dataexpr."""


class UnrecognizedOperationError(DataExprError):
    """A value looks like an expression but names no registered operation."""

    def __init__(self, message: str, invalid_op: str, suggestion: str | None, available: tuple[str, ...]) -> None:
        super().__init__(message)
        self.invalid_op = invalid_op
        self.suggestion = suggestion
        self.available = available


class InvalidOperandError(DataExprError):
    """An operand does not have the shape an operation requires."""


class UnsupportedModeError(InvalidOperandError):
    """An operation was invoked in a mode it does not implement."""

    def __init__(self, name: str, mode: str) -> None:
        label = name or "<anonymous operation>"
        super().__init__(f"{label} does not support {mode} mode")
        self.name = name
        self.mode = mode


class DomainError(DataExprError):
    """An operation received well-shaped but semantically invalid values."""


class ExpressionValidationError(DataExprError):
    """An expression tree contains one or more unknown operators."""

    def __init__(self, errors: list[str]) -> None:
        super().__init__("\n".join(errors))
        self.errors = errors
