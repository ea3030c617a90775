"""Public match predicates.

Each predicate fixes a context, then checks the pattern against every
candidate value. ``match`` is the everyday assertion helper::

    assert match({"id": WILDCARD, "name": "dilbert"}, record)

``submatch`` asks whether the pattern is a structural sub-part of the value
(extra keys, extra set members and extra trailing items are all tolerated).
"""

from __future__ import annotations

from collections.abc import Set
from typing import Any, Tuple

from .context import DEFAULT_CONTEXT, SUBMATCH_CONTEXT, ContextSpec, merge_context
from .eval.match import match_value
from .eval.setmatch import match_set
from .types import WILDCARD, MatchArgumentError, MatchContext, Pattern, Value

__all__ = [
    "WILDCARD",
    "MatchContext",
    "match",
    "submatch",
    "match_with_context",
    "set_match",
    "set_match_with_context",
]


def _require_values(entry: str, values: Tuple[Any, ...]) -> None:
    if not values:
        raise MatchArgumentError(f"{entry}() needs at least one value to match against")


def _match_all(ctx: MatchContext, pattern: Pattern, values: Tuple[Value, ...]) -> bool:
    return all(match_value(ctx, pattern, value) for value in values)


def match(pattern: Pattern, *values: Value) -> bool:
    _require_values("match", values)
    return _match_all(DEFAULT_CONTEXT, pattern, values)


def submatch(pattern: Pattern, value: Value) -> bool:
    return match_value(SUBMATCH_CONTEXT, pattern, value)


def match_with_context(context: ContextSpec, pattern: Pattern, *values: Value) -> bool:
    ctx = merge_context(context)
    _require_values("match_with_context", values)
    return _match_all(ctx, pattern, values)


def set_match(pattern: Pattern, *values: Value) -> bool:
    return set_match_with_context(None, pattern, *values)


def set_match_with_context(context: ContextSpec, pattern: Pattern, *values: Value) -> bool:
    """Match set against sets without shape dispatch at the top level."""
    ctx = merge_context(context)
    _require_values("set_match", values)

    for operand in (pattern, *values):
        if not isinstance(operand, Set):
            raise MatchArgumentError(f"set_match expects sets, got {type(operand).__name__}")

    return all(match_set(ctx, pattern, value) for value in values)
