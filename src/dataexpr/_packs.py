"""Predefined packs of operations.

A pack is a plain mapping from expression name to operation. Packs are meant to
be combined through ``create_engine(packs=[...])``; later packs override
earlier ones.
"""

from collections.abc import Mapping
from types import MappingProxyType

from . import _definitions as ops
from ._types import Operation, Pack


def _pack(entries: Mapping[str, Operation]) -> Pack:
    return MappingProxyType(dict(entries))


BASE = _pack(
    {
        "$and": ops.AND,
        "$case": ops.CASE,
        "$default": ops.DEFAULT,
        "$eq": ops.EQ,
        "$filter": ops.FILTER,
        "$filterBy": ops.FILTER_BY,
        "$get": ops.GET,
        "$gt": ops.GT,
        "$gte": ops.GTE,
        "$identity": ops.IDENTITY,
        "$if": ops.IF,
        "$isDefined": ops.IS_DEFINED,
        "$literal": ops.LITERAL_OPERATION,
        "$lt": ops.LT,
        "$lte": ops.LTE,
        "$map": ops.MAP,
        "$matches": ops.MATCHES,
        "$ne": ops.NE,
        "$not": ops.NOT,
        "$or": ops.OR,
        "$pipe": ops.PIPE,
        "$sort": ops.SORT,
    },
)

AGGREGATION = _pack(
    {
        "$count": ops.COUNT,
        "$max": ops.MAX,
        "$mean": ops.MEAN,
        "$median": ops.MEDIAN,
        "$min": ops.MIN,
        "$mode": ops.MODE,
        "$sum": ops.SUM,
    },
)

ARRAY = _pack(
    {
        "$all": ops.ALL,
        "$any": ops.ANY,
        "$coalesce": ops.COALESCE,
        "$concat": ops.CONCAT,
        "$filter": ops.FILTER,
        "$filterBy": ops.FILTER_BY,
        "$find": ops.FIND,
        "$first": ops.FIRST,
        "$flatMap": ops.FLAT_MAP,
        "$flatten": ops.FLATTEN,
        "$groupBy": ops.GROUP_BY,
        "$join": ops.JOIN,
        "$last": ops.LAST,
        "$map": ops.MAP,
        "$pluck": ops.PLUCK,
        "$reverse": ops.REVERSE,
        "$skip": ops.SKIP,
        "$sort": ops.SORT,
        "$take": ops.TAKE,
        "$unique": ops.UNIQUE,
    },
)

COMPARISON = _pack(
    {
        "$between": ops.BETWEEN,
        "$eq": ops.EQ,
        "$gt": ops.GT,
        "$gte": ops.GTE,
        "$in": ops.IN,
        "$isEmpty": ops.IS_EMPTY,
        "$isPresent": ops.IS_PRESENT,
        "$lt": ops.LT,
        "$lte": ops.LTE,
        "$ne": ops.NE,
        "$nin": ops.NIN,
    },
)

FILTERING = _pack(
    {
        # Comparisons
        "$between": ops.BETWEEN,
        "$eq": ops.EQ,
        "$ne": ops.NE,
        "$gt": ops.GT,
        "$gte": ops.GTE,
        "$lt": ops.LT,
        "$lte": ops.LTE,
        # Logic
        "$and": ops.AND,
        "$or": ops.OR,
        "$not": ops.NOT,
        # Applications
        "$all": ops.ALL,
        "$any": ops.ANY,
        "$filter": ops.FILTER,
        "$filterBy": ops.FILTER_BY,
        "$find": ops.FIND,
        "$matches": ops.MATCHES,
        # Membership and existence
        "$in": ops.IN,
        "$nin": ops.NIN,
        "$isEmpty": ops.IS_EMPTY,
        "$isPresent": ops.IS_PRESENT,
        "$exists": ops.EXISTS,
        "$matchesRegex": ops.MATCHES_REGEX,
    },
)

LOGIC = _pack(
    {
        "$and": ops.AND,
        "$case": ops.CASE,
        "$if": ops.IF,
        "$not": ops.NOT,
        "$or": ops.OR,
    },
)

MATH = _pack(
    {
        "$abs": ops.ABS,
        "$add": ops.ADD,
        "$ceil": ops.CEIL,
        "$divide": ops.DIVIDE,
        "$floor": ops.FLOOR,
        "$modulo": ops.MODULO,
        "$multiply": ops.MULTIPLY,
        "$pow": ops.POW,
        "$sqrt": ops.SQRT,
        "$subtract": ops.SUBTRACT,
        "$random": ops.RANDOM,
    },
)

OBJECT = _pack(
    {
        "$select": ops.SELECT,
        "$prop": ops.PROP,
        "$merge": ops.MERGE,
        "$pick": ops.PICK,
        "$omit": ops.OMIT,
        "$keys": ops.KEYS,
        "$values": ops.VALUES,
        "$pairs": ops.PAIRS,
        "$fromPairs": ops.FROM_PAIRS,
    },
)

PROJECTION = _pack(
    {
        # Field access
        "$get": ops.GET,
        "$select": ops.SELECT,
        # Array transformations
        "$concat": ops.CONCAT,
        "$filter": ops.FILTER,
        "$flatMap": ops.FLAT_MAP,
        "$join": ops.JOIN,
        "$map": ops.MAP,
        "$pluck": ops.PLUCK,
        "$unique": ops.UNIQUE,
        # Value transformations
        "$lowercase": ops.LOWERCASE,
        "$substring": ops.SUBSTRING,
        "$uppercase": ops.UPPERCASE,
        # Computed fields
        "$if": ops.IF,
        "$case": ops.CASE,
        "$eq": ops.EQ,
        "$ne": ops.NE,
        "$gt": ops.GT,
        "$gte": ops.GTE,
        "$lt": ops.LT,
        "$lte": ops.LTE,
        "$in": ops.IN,
        "$nin": ops.NIN,
    },
)

STRING = _pack(
    {
        "$lowercase": ops.LOWERCASE,
        "$matchesGlob": ops.MATCHES_GLOB,
        "$matchesLike": ops.MATCHES_LIKE,
        "$matchesRegex": ops.MATCHES_REGEX,
        "$replace": ops.REPLACE,
        "$split": ops.SPLIT,
        "$substring": ops.SUBSTRING,
        "$trim": ops.TRIM,
        "$uppercase": ops.UPPERCASE,
    },
)

TEMPORAL = _pack(
    {
        "$nowLocal": ops.NOW_LOCAL,
        "$nowUTC": ops.NOW_UTC,
        "$timestamp": ops.TIMESTAMP,
    },
)

ALL = _pack(
    {
        **BASE,
        **AGGREGATION,
        **ARRAY,
        **COMPARISON,
        **FILTERING,
        **LOGIC,
        **MATH,
        **OBJECT,
        **PROJECTION,
        **STRING,
        **TEMPORAL,
        "$compose": ops.COMPOSE,
        "$debug": ops.DEBUG,
        "$uuid": ops.UUID,
    },
)

PACKS: dict[str, Pack] = {
    "aggregation": AGGREGATION,
    "all": ALL,
    "array": ARRAY,
    "base": BASE,
    "comparison": COMPARISON,
    "filtering": FILTERING,
    "logic": LOGIC,
    "math": MATH,
    "object": OBJECT,
    "projection": PROJECTION,
    "string": STRING,
    "temporal": TEMPORAL,
}
