"""Recursive matchers behind the public predicates."""

__all__ = [
    "match",
    "setmatch",
]
