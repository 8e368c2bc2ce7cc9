"""Interpreter for JSON-compatible data expressions."""

__all__ = [
    "AGGREGATION",
    "ALL",
    "ARRAY",
    "BASE",
    "COMPARISON",
    "FILTERING",
    "LITERAL",
    "LOGIC",
    "MATH",
    "OBJECT",
    "PACKS",
    "PROJECTION",
    "SIGIL",
    "STRING",
    "TEMPORAL",
    "Context",
    "DataExprError",
    "DomainError",
    "Engine",
    "ExpressionValidationError",
    "InvalidOperandError",
    "Middleware",
    "Mode",
    "Operation",
    "OperationCall",
    "Pack",
    "UnrecognizedOperationError",
    "UnsupportedModeError",
    "Value",
    "build_definitions",
    "create_engine",
    "edit_distance",
    "looks_expression_shaped",
    "operations",
    "suggest_name",
]

from . import operations
from ._builder import build_definitions
from ._diagnostics import edit_distance, suggest_name
from ._engine import Engine, create_engine
from ._errors import (
    DataExprError,
    DomainError,
    ExpressionValidationError,
    InvalidOperandError,
    UnrecognizedOperationError,
    UnsupportedModeError,
)
from ._packs import (
    AGGREGATION,
    ALL,
    ARRAY,
    BASE,
    COMPARISON,
    FILTERING,
    LOGIC,
    MATH,
    OBJECT,
    PACKS,
    PROJECTION,
    STRING,
    TEMPORAL,
)
from ._recognizer import LITERAL, SIGIL, looks_expression_shaped
from ._types import Context, Middleware, Mode, Operation, OperationCall, Pack, Value
