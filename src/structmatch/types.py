from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Optional

from typing_extensions import TypeAlias

# ---------- Value Model ----------

class WildcardToken:
    """Pattern element that stands for exactly one value of any shape.

    There is a single instance, ``WILDCARD``. It is hashable so it can sit in
    sets and frozensets, and it compares equal only to itself.
    """
    __slots__ = ()
    _instance: Optional['WildcardToken'] = None

    def __new__(cls) -> 'WildcardToken':
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "_"

    def __reduce__(self) -> str:
        return "WILDCARD"

WILDCARD = WildcardToken()

Pattern: TypeAlias = Any
Value: TypeAlias = Any

class Shape(Enum):
    """Structural category of a pattern or value operand."""

    SCALAR = auto()
    MAPPING = auto()
    SEQUENCE = auto()
    SET = auto()

@dataclass(frozen=True)
class MatchContext:
    submap_ok: bool = False
    subset_ok: bool = False
    subvec_ok: bool = False
    wildcard_ok: bool = True

    def __repr__(self) -> str:
        on = [name for name in OPTION_NAMES if getattr(self, name)]
        return "MatchContext(" + ", ".join(on) + ")"

OPTION_NAMES = ("submap_ok", "subset_ok", "subvec_ok", "wildcard_ok")

# ---------- Exceptions ----------

class StructMatchError(Exception):
    pass

class MatchArgumentError(StructMatchError):
    """Raised when an entry point is called with arguments it cannot accept."""

class PatternSyntaxError(StructMatchError):
    line: Optional[int]
    column: Optional[int]

    def __init__(self, message: str, line: Optional[int] = None, column: Optional[int] = None):
        super().__init__(message)
        self.line = line
        self.column = column

    def __str__(self) -> str:  # pragma: no cover - trivial formatting
        msg = super().__str__()

        if self.line is None:
            return msg

        if self.column is None:
            return f"{msg} (line {self.line})"

        return f"{msg} (line {self.line}, col {self.column})"
