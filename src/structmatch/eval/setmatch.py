"""
Unordered set matching.

Every pattern element has to be paired with its own value element; no value
element is used twice. Plain scalars are paired with their equal element up
front through a hash lookup. Wildcards and composite elements then go through
a depth-first search that tries each remaining value element in turn and
falls back to the next candidate whenever the rest of the pattern cannot be
placed. The search keeps its own stack of frames, so set size never reaches
the interpreter's recursion limit. Each frame holds a freshly built remainder
tuple, so abandoning a branch needs no cleanup.
"""

from __future__ import annotations

import logging
from collections.abc import Hashable
from typing import Any, Iterable, List, Optional, Tuple

from ..types import MatchContext
from ..utils import is_plain_scalar, is_wildcard

log = logging.getLogger(__name__)

Remaining = Tuple[Any, ...]


def match_set(ctx: MatchContext, pattern: Iterable[Any], value: Iterable[Any]) -> bool:
    pat_items = tuple(pattern)
    val_items = tuple(value)

    if len(pat_items) > len(val_items):
        return False

    if not ctx.subset_ok and len(pat_items) != len(val_items):
        return False

    scalars = [item for item in pat_items if is_plain_scalar(ctx, item)]
    unplaced = _place_scalars(scalars, val_items)
    if unplaced is None:
        return False

    searched = _search_order(ctx, (item for item in pat_items if not is_plain_scalar(ctx, item)))
    return _match_remaining(ctx, searched, unplaced)


def _place_scalars(scalars: List[Any], val_items: Remaining) -> Optional[Remaining]:
    """Remove the equal partner of every scalar; None when one has no partner."""
    if not scalars:
        return val_items

    # At most one set element equals a scalar, so there is nothing to choose.
    wanted = set(scalars)
    leftover = []

    for item in val_items:
        if isinstance(item, Hashable) and item in wanted:
            wanted.remove(item)
        else:
            leftover.append(item)

    if wanted:
        return None

    return tuple(leftover)


def _search_order(ctx: MatchContext, pattern: Iterable[Any]) -> Remaining:
    """Plain scalars first (no branching), composites next, wildcards last."""
    scalars = []
    composites = []
    wildcards = []

    for item in pattern:
        if is_wildcard(ctx, item):
            wildcards.append(item)
        elif is_plain_scalar(ctx, item):
            scalars.append(item)
        else:
            composites.append(item)

    return tuple(scalars + composites + wildcards)


def _without(items: Remaining, index: int) -> Remaining:
    return items[:index] + items[index + 1:]


class _Frame:
    """One placed pattern element: the values it chose from and its untried candidates."""

    __slots__ = ("remaining", "candidates", "chosen")

    def __init__(self, head: Any, remaining: Remaining) -> None:
        self.remaining = remaining
        self.candidates = iter(_candidate_order(head, remaining))
        self.chosen: Any = None


def _match_remaining(ctx: MatchContext, pat_items: Remaining, val_items: Remaining) -> bool:
    if not pat_items:
        return not val_items or ctx.subset_ok

    from .match import match_value

    stack = [_Frame(pat_items[0], val_items)]

    while stack:
        depth = len(stack) - 1
        head = pat_items[depth]
        frame = stack[-1]

        for index in frame.candidates:
            if match_value(ctx, head, frame.remaining[index]):
                break
        else:
            stack.pop()
            if stack:
                parent = stack[-1]
                log.debug(
                    "set match: %r -> %r left %r unplaced, backtracking",
                    pat_items[depth - 1], parent.chosen, pat_items[depth:],
                )
            continue

        frame.chosen = frame.remaining[index]
        rest = _without(frame.remaining, index)

        if depth + 1 < len(pat_items):
            stack.append(_Frame(pat_items[depth + 1], rest))
        elif not rest or ctx.subset_ok:
            return True

    return False


def _candidate_order(head: Any, val_items: Remaining) -> List[int]:
    """Try the literally equal element first; every other element follows in order."""
    equal = [i for i, v in enumerate(val_items) if v == head]
    others = [i for i in range(len(val_items)) if i not in equal]
    return equal + others
