from __future__ import annotations

import dataclasses
from collections.abc import Collection, Mapping, Sequence, Set
from typing import Any, Tuple

from .types import WILDCARD, MatchContext, Shape

_ATOMIC_COLLECTIONS: Tuple[type, ...] = (str, bytes, bytearray, memoryview)


def is_record(value: Any) -> bool:
    """Dataclass instances (not the classes themselves) take the mapping shape."""
    return dataclasses.is_dataclass(value) and not isinstance(value, type)


def shape_of(value: Any) -> Shape:
    if isinstance(value, Mapping) or is_record(value):
        return Shape.MAPPING

    if isinstance(value, Set):
        return Shape.SET

    if isinstance(value, _ATOMIC_COLLECTIONS):
        return Shape.SCALAR

    # Iterators are left alone; matching them would consume the caller's data.
    if isinstance(value, Collection):
        return Shape.SEQUENCE

    return Shape.SCALAR


def mapping_view(value: Any) -> Mapping[Any, Any]:
    if isinstance(value, Mapping):
        return value

    return {f.name: getattr(value, f.name) for f in dataclasses.fields(value)}


def sequence_items(value: Any) -> Sequence[Any]:
    if isinstance(value, Sequence):
        return value

    return tuple(value)


def is_wildcard(ctx: MatchContext, value: Any) -> bool:
    return ctx.wildcard_ok and value is WILDCARD


def is_plain_scalar(ctx: MatchContext, value: Any) -> bool:
    """True when only an equal value can match; such set elements skip the search."""
    return shape_of(value) is Shape.SCALAR and not is_wildcard(ctx, value)
