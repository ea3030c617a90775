from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, List, Optional

from .context import SUBMATCH_CONTEXT, ContextSpec
from .notation import parse_pattern
from .predicates import match_with_context, set_match_with_context
from .types import MatchArgumentError, PatternSyntaxError

log = logging.getLogger(__name__)

EXIT_MATCH = 0
EXIT_NO_MATCH = 1
EXIT_ERROR = 2


class _SourceLoader:
    def __init__(self) -> None:
        self._stdin: Optional[str] = None

    def load(self, arg: str) -> str:
        """
        Resolve one CLI argument into notation text.
        - "-" => read stdin (once; later "-" arguments reuse it).
        - Existing file => read file contents.
        - Otherwise treat the argument as literal notation.
        """
        if arg == "-":
            if self._stdin is None:
                self._stdin = sys.stdin.read()
            return self._stdin

        candidate = Path(arg)
        if candidate.is_file():
            return candidate.read_text(encoding="utf-8")

        return arg


def build_arg_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="structmatch",
        description="Check that a pattern matches every given value.",
    )
    ap.add_argument("pattern", help="Pattern notation, a file path, or - for stdin")
    ap.add_argument("values", nargs="+", help="Value notation, a file path, or - for stdin")
    ap.add_argument("--submap", action="store_true", help="Allow extra keys in mapping values")
    ap.add_argument("--subset", action="store_true", help="Allow extra elements in set values")
    ap.add_argument("--subvec", action="store_true", help="Allow extra trailing items in sequence values")
    ap.add_argument("--no-wildcard", action="store_true", help="Treat _ as a literal value")
    ap.add_argument("--submatch", action="store_true", help="All relaxations on, wildcard off")
    ap.add_argument("--sets", action="store_true", help="Operands are sets; match them directly")
    ap.add_argument("-v", "--verbose", action="store_true", help="Log the set search at debug level")
    return ap


def context_from_args(args: argparse.Namespace) -> ContextSpec:
    if args.submatch:
        return SUBMATCH_CONTEXT

    return {
        "submap_ok": args.submap,
        "subset_ok": args.subset,
        "subvec_ok": args.subvec,
        "wildcard_ok": not args.no_wildcard,
    }


def run(args: argparse.Namespace) -> bool:
    loader = _SourceLoader()
    pattern: Any = parse_pattern(loader.load(args.pattern))
    values: List[Any] = [parse_pattern(loader.load(arg)) for arg in args.values]
    context = context_from_args(args)

    if args.sets:
        return set_match_with_context(context, pattern, *values)

    return match_with_context(context, pattern, *values)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    try:
        matched = run(args)
    except (PatternSyntaxError, MatchArgumentError, OSError) as exc:
        print(f"structmatch: {exc}", file=sys.stderr)
        return EXIT_ERROR

    log.debug("pattern %s against %d value(s): %s", args.pattern, len(args.values), matched)
    print("true" if matched else "false")
    return EXIT_MATCH if matched else EXIT_NO_MATCH


if __name__ == "__main__":
    sys.exit(main())
