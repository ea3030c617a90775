"""
Structural Match Logic

Implements recursive structural matching of a pattern against a value:
- Equal operands always match
- The wildcard matches any single value (when enabled)
- Mapping matching: same key set (or pattern keys a subset under submap_ok)
- Set matching: delegated to the backtracking search in setmatch
- Sequence matching: positional, prefix-only under subvec_ok
- Anything else: no match
"""

from __future__ import annotations

from ..types import MatchContext, Pattern, Shape, Value
from ..utils import is_wildcard, mapping_view, sequence_items, shape_of


def match_value(ctx: MatchContext, pattern: Pattern, value: Value) -> bool:
    """
    Structural match: does pattern describe value?

    Rules (first hit wins):
    1. pattern is value, or pattern == value
    2. pattern is the wildcard and ctx.wildcard_ok
    3. both mappings -> match_mapping
    4. both sets -> match_set
    5. both sequences -> match_sequence
    6. otherwise no match
    """
    # Identity first, as container == does, so NaN matches itself.
    if pattern is value or pattern == value:
        return True

    if is_wildcard(ctx, pattern):
        return True

    match (shape_of(pattern), shape_of(value)):
        case (Shape.MAPPING, Shape.MAPPING):
            return match_mapping(ctx, pattern, value)
        case (Shape.SET, Shape.SET):
            from .setmatch import match_set
            return match_set(ctx, pattern, value)
        case (Shape.SEQUENCE, Shape.SEQUENCE):
            return match_sequence(ctx, pattern, value)
        case _:
            return False


def match_mapping(ctx: MatchContext, pattern: Pattern, value: Value) -> bool:
    pat_map = mapping_view(pattern)
    val_map = mapping_view(value)
    pat_keys = pat_map.keys()
    val_keys = val_map.keys()

    if ctx.submap_ok:
        if not pat_keys <= val_keys:
            return False
    elif pat_keys != val_keys:
        return False

    # Value keys outside the pattern are never looked at.
    for key in pat_keys:
        if not match_value(ctx, pat_map[key], val_map[key]):
            return False

    return True


def match_sequence(ctx: MatchContext, pattern: Pattern, value: Value) -> bool:
    pat_items = sequence_items(pattern)
    val_items = sequence_items(value)

    if ctx.subvec_ok:
        if len(pat_items) > len(val_items):
            return False
    elif len(pat_items) != len(val_items):
        return False

    return all(match_value(ctx, p, v) for p, v in zip(pat_items, val_items))
