"""Order Rules Example for dataexpr.

This example demonstrates dataexpr's capabilities for rule-style data processing:
- Combining predefined packs with a custom pack
- Nested sub-expressions inside custom operations through the context
- Middleware for tracing every dispatch
- Validation with "did you mean" suggestions

The custom pack can also be used from the command line:
    dataexpr apply '{"$discounted": 0.1}' -d order.json -p examples.order_rules:pack
"""

import logging
from typing import Any

import dataexpr as de

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Custom Pack
# -----------------------------------------------------------------------------


def _discounted_apply(operand: Any, input_data: Any, context: de.Context) -> float:
    rate = context.apply(operand, input_data)
    return round(input_data["total"] * (1 - rate), 2)


def _discounted_evaluate(operand: Any, context: de.Context) -> float:
    total, rate = context.evaluate(operand)
    return round(total * (1 - rate), 2)


pack: de.Pack = {
    "$discounted": de.Operation(apply_fn=_discounted_apply, evaluate_fn=_discounted_evaluate),
    # Plain callables register as apply-only operations
    "$lineCount": lambda _operand, input_data, _context: len(input_data["lines"]),
}


# -----------------------------------------------------------------------------
# Middleware
# -----------------------------------------------------------------------------


def trace(call: de.OperationCall, proceed: Any) -> Any:
    result = proceed(call)
    logger.info("%s (%s) -> %r", call.name, call.mode, result)
    return result


# -----------------------------------------------------------------------------
# Rules
# -----------------------------------------------------------------------------

engine = de.create_engine(packs=[de.ARRAY, de.AGGREGATION, de.MATH, pack], middleware=[trace])

order = {
    "customer": {"tier": "gold"},
    "total": 120.0,
    "lines": [
        {"sku": "A-1", "qty": 2, "price": 30.0},
        {"sku": "B-7", "qty": 1, "price": 60.0},
    ],
}

# Discount rate depends on the customer tier
rate = {
    "$case": {
        "value": {"$get": "customer.tier"},
        "cases": [
            {"when": "gold", "then": 0.15},
            {"when": "silver", "then": 0.05},
        ],
        "default": 0,
    },
}

checkout = {
    "items": {"$lineCount": None},
    "quantity": {"$pipe": [{"$get": "lines"}, {"$pluck": "qty"}, {"$sum": None}]},
    "skus": {"$pipe": [{"$get": "lines"}, {"$pluck": "sku"}, {"$join": ", "}]},
    "payable": {"$discounted": rate},
}


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(message)s")

    print(engine.apply(checkout, order))  # noqa: T201
    print(engine.evaluate({"$discounted": [200, 0.25]}))  # noqa: T201

    for problem in engine.validate_expression({"$pipe": [{"$get": "lines"}, {"$coutn": None}]}):
        print(problem)  # noqa: T201
