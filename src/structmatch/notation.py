"""Text notation for patterns.

``parse_pattern`` turns an EDN-flavoured literal into the Python structure the
matcher works on::

    parse_pattern('{:db/id _ :db/ident :people}')
    # {'db/id': WILDCARD, 'db/ident': 'people'}

Vectors ``[...]`` become lists, ``(...)`` tuples, ``{...}`` dicts and
``#{...}`` frozensets. Keywords and bare names read as plain strings.
"""

from __future__ import annotations

import ast
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from lark import Lark, Token, Transformer, UnexpectedInput, v_args
from lark.exceptions import VisitError

from .types import WILDCARD, PatternSyntaxError

GRAMMAR_PATH = Path(__file__).resolve().with_name("pattern.lark")


@lru_cache(maxsize=1)
def make_parser() -> Lark:
    grammar = GRAMMAR_PATH.read_text(encoding="utf-8")
    return Lark(grammar, parser="lalr", propagate_positions=True)


def _meta_position(meta: Any) -> Tuple[Optional[int], Optional[int]]:
    return getattr(meta, "line", None), getattr(meta, "column", None)


def _require_hashable(item: Any, what: str, meta: Any) -> None:
    try:
        hash(item)
    except TypeError:
        line, col = _meta_position(meta)
        raise PatternSyntaxError(f"{what} must be hashable, got {type(item).__name__}", line, col) from None


class PatternBuilder(Transformer):
    """Bottom-up conversion of the parse tree into plain Python values."""

    def NUMBER(self, tok: Token) -> Any:
        text = tok.value
        if any(ch in text for ch in ".eE"):
            return float(text)
        return int(text)

    def STRING(self, tok: Token) -> str:
        return ast.literal_eval(tok.value)

    def KEYWORD(self, tok: Token) -> str:
        return tok.value[1:]

    def NAME(self, tok: Token) -> str:
        return tok.value

    def WILDCARD(self, _tok: Token) -> Any:
        return WILDCARD

    def true(self, _c: List[Any]) -> bool:
        return True

    def false(self, _c: List[Any]) -> bool:
        return False

    def nil(self, _c: List[Any]) -> None:
        return None

    def vector(self, c: List[Any]) -> List[Any]:
        return list(c)

    def tuple(self, c: List[Any]) -> Tuple[Any, ...]:
        return tuple(c)

    def pair(self, c: List[Any]) -> Tuple[Any, Any]:
        key, value = c
        return key, value

    @v_args(meta=True)
    def mapping(self, meta: Any, c: List[Tuple[Any, Any]]) -> Dict[Any, Any]:
        out: Dict[Any, Any] = {}

        for key, value in c:
            _require_hashable(key, "Map key", meta)
            if key in out:
                line, col = _meta_position(meta)
                raise PatternSyntaxError(f"Duplicate map key {key!r}", line, col)
            out[key] = value

        return out

    @v_args(meta=True)
    def setlit(self, meta: Any, c: List[Any]) -> frozenset:
        for item in c:
            _require_hashable(item, "Set element", meta)

        items = frozenset(c)
        if len(items) != len(c):
            line, col = _meta_position(meta)
            raise PatternSyntaxError("Duplicate set element", line, col)

        return items


def _error_position(exc: UnexpectedInput) -> Tuple[Optional[int], Optional[int]]:
    line = getattr(exc, "line", None)
    col = getattr(exc, "column", None)

    # UnexpectedEOF reports -1 for both.
    if line is not None and line < 1:
        line = None
    if col is not None and col < 1:
        col = None

    return line, col


def parse_pattern(text: str) -> Any:
    if not isinstance(text, str):
        raise PatternSyntaxError(f"Pattern source must be a string, got {type(text).__name__}")

    try:
        tree = make_parser().parse(text)
    except UnexpectedInput as exc:
        line, col = _error_position(exc)
        raise PatternSyntaxError(f"Invalid pattern: {type(exc).__name__}", line, col) from exc

    # A bare atom parses to a Token rather than a Tree.
    if isinstance(tree, Token):
        return getattr(PatternBuilder(), tree.type)(tree)

    try:
        return PatternBuilder().transform(tree)
    except VisitError as exc:
        if isinstance(exc.orig_exc, PatternSyntaxError):
            raise exc.orig_exc from None
        raise
