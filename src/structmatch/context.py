from __future__ import annotations

from collections.abc import Mapping
from dataclasses import fields, replace
from typing import Any, Dict, Optional, Union

from .types import OPTION_NAMES, MatchArgumentError, MatchContext

ContextSpec = Union[None, MatchContext, Mapping[str, Any]]

DEFAULT_CONTEXT = MatchContext()
SUBMATCH_CONTEXT = MatchContext(submap_ok=True, subset_ok=True, subvec_ok=True, wildcard_ok=False)


def _option_name(key: Any) -> Optional[str]:
    """Accept both ``submap_ok`` and the kebab-case ``submap-ok`` spelling."""
    if not isinstance(key, str):
        return None

    name = key.lstrip(":").replace("-", "_")
    return name if name in OPTION_NAMES else None


def _require_bool(key: Any, flag: Any) -> None:
    if not isinstance(flag, bool):
        raise MatchArgumentError(f"Option '{key}' must be a bool, got {type(flag).__name__}")


def merge_context(overrides: ContextSpec, base: MatchContext = DEFAULT_CONTEXT) -> MatchContext:
    """
    Build the context for one top-level match call.

    - None => base unchanged.
    - MatchContext => used as-is (it already names every option) once its
      flags are checked to be real bools.
    - Mapping => known option names override base; unknown keys are ignored.
    """
    if overrides is None:
        return base

    if isinstance(overrides, MatchContext):
        for field in fields(overrides):
            _require_bool(field.name, getattr(overrides, field.name))
        return overrides

    if not isinstance(overrides, Mapping):
        raise MatchArgumentError(
            f"Match context must be a mapping or MatchContext, got {type(overrides).__name__}"
        )

    changes: Dict[str, bool] = {}

    for key, flag in overrides.items():
        name = _option_name(key)
        if name is None:
            continue

        _require_bool(key, flag)
        changes[name] = flag

    if not changes:
        return base

    return replace(base, **changes)
