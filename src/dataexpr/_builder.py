"""Fold operation packs into one immutable definition map."""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import replace
from types import MappingProxyType
from typing import Any

from ._definitions import LITERAL_OPERATION
from ._recognizer import LITERAL
from ._types import Operation, Pack

logger = logging.getLogger(__name__)


def _as_operation(name: str, entry: Any) -> Any:
    """Normalize one pack entry to an Operation registered under ``name``.

    Entries of an unknown shape are returned unchanged; they fail when the
    operation is first dispatched.
    """
    if isinstance(entry, Operation):
        return entry if entry.name == name else replace(entry, name=name)
    if isinstance(entry, Mapping) and ("apply" in entry or "evaluate" in entry):
        return Operation(apply_fn=entry.get("apply"), evaluate_fn=entry.get("evaluate"), name=name)
    if callable(entry):
        return Operation(apply_fn=entry, name=name)
    return entry


def build_definitions(
    base: Pack,
    packs: Iterable[Pack] = (),
    custom: Pack | None = None,
    *,
    include_base: bool = True,
    exclude: Iterable[str] = (),
) -> Mapping[str, Operation]:
    """Build the name-to-operation map an engine dispatches on.

    Packs are folded in order, so on a name collision the later pack replaces
    the whole definition of the earlier one. ``custom`` is folded last, then
    excluded names are removed and the literal escape is installed.

    Args:
        base: The base pack.
        packs: Extension packs in increasing precedence.
        custom: Highest-precedence pack.
        include_base: Whether to start from ``base`` or from an empty map.
        exclude: Names to remove after folding. Unknown names are ignored.

    Returns:
        A read-only mapping. Caller-supplied packs are never modified.

    """
    layers: list[Pack] = [base] if include_base else []
    layers.extend(packs)
    if custom:
        layers.append(custom)

    definitions: dict[str, Any] = {}
    for index, layer in enumerate(layers):
        for name, entry in layer.items():
            if name in definitions:
                logger.debug("Pack %d overrides definition of %s", index, name)
            definitions[name] = _as_operation(name, entry)

    for name in exclude:
        definitions.pop(name, None)

    definitions[LITERAL] = LITERAL_OPERATION

    logger.debug("Built definition map with %d operations", len(definitions))
    return MappingProxyType(definitions)
