"""Built-in operation definitions, grouped by concern."""

__all__ = [
    "ABS",
    "ADD",
    "ALL",
    "AND",
    "ANY",
    "BETWEEN",
    "CASE",
    "CEIL",
    "COALESCE",
    "COMPOSE",
    "CONCAT",
    "COUNT",
    "DEBUG",
    "DEFAULT",
    "DIVIDE",
    "EQ",
    "EXISTS",
    "FILTER",
    "FILTER_BY",
    "FIND",
    "FIRST",
    "FLATTEN",
    "FLAT_MAP",
    "FLOOR",
    "FROM_PAIRS",
    "GET",
    "GROUP_BY",
    "GT",
    "GTE",
    "IDENTITY",
    "IF",
    "IN",
    "IS_DEFINED",
    "IS_EMPTY",
    "IS_PRESENT",
    "JOIN",
    "KEYS",
    "LAST",
    "LITERAL_OPERATION",
    "LOWERCASE",
    "LT",
    "LTE",
    "MAP",
    "MATCHES",
    "MATCHES_GLOB",
    "MATCHES_LIKE",
    "MATCHES_REGEX",
    "MAX",
    "MEAN",
    "MEDIAN",
    "MERGE",
    "MIN",
    "MODE",
    "MODULO",
    "MULTIPLY",
    "NE",
    "NIN",
    "NOT",
    "NOW_LOCAL",
    "NOW_UTC",
    "OMIT",
    "OR",
    "PAIRS",
    "PICK",
    "PIPE",
    "PLUCK",
    "POW",
    "PROP",
    "RANDOM",
    "REPLACE",
    "REVERSE",
    "SELECT",
    "SKIP",
    "SORT",
    "SPLIT",
    "SQRT",
    "SUBSTRING",
    "SUBTRACT",
    "SUM",
    "TAKE",
    "TIMESTAMP",
    "TRIM",
    "UNIQUE",
    "UPPERCASE",
    "UUID",
    "VALUES",
]

from ._access import GET, IDENTITY, IS_DEFINED, MATCHES, PROP, SELECT
from ._aggregative import COUNT, MAX, MEAN, MEDIAN, MIN, MODE, SUM
from ._array import (
    ALL,
    ANY,
    COALESCE,
    CONCAT,
    FILTER,
    FILTER_BY,
    FIND,
    FIRST,
    FLAT_MAP,
    FLATTEN,
    GROUP_BY,
    JOIN,
    LAST,
    MAP,
    PLUCK,
    REVERSE,
    SKIP,
    SORT,
    TAKE,
    UNIQUE,
)
from ._conditional import CASE, IF
from ._flow import COMPOSE, DEBUG, DEFAULT, LITERAL_OPERATION, PIPE
from ._generative import RANDOM, UUID
from ._math import ABS, ADD, CEIL, DIVIDE, FLOOR, MODULO, MULTIPLY, POW, SQRT, SUBTRACT
from ._object import FROM_PAIRS, KEYS, MERGE, OMIT, PAIRS, PICK, VALUES
from ._predicate import AND, BETWEEN, EQ, EXISTS, GT, GTE, IN, IS_EMPTY, IS_PRESENT, LT, LTE, NE, NIN, NOT, OR
from ._string import LOWERCASE, MATCHES_GLOB, MATCHES_LIKE, MATCHES_REGEX, REPLACE, SPLIT, SUBSTRING, TRIM, UPPERCASE
from ._temporal import NOW_LOCAL, NOW_UTC, TIMESTAMP
