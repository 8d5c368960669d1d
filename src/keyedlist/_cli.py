from __future__ import annotations

import argparse
import json
import sys
from collections.abc import Callable

from keyedlist._diff import DiffResult, diff
from keyedlist._dup import DedupResult, count_duplicates, deduplicate
from keyedlist._group import KeyedMap
from keyedlist._key import KeyExtractionError, KeyFn
from keyedlist._term import bold, dim, force_color, marker
from keyedlist._util import _jsonable


def _read_lines(path: str) -> list[str]:
    if path == "-":
        raw = sys.stdin.read().splitlines()
    else:
        with open(path, encoding="utf-8") as f:
            raw = f.read().splitlines()
    return [line for line in raw if line.strip()]


def _line_key(field: int | None, sep: str | None) -> KeyFn:
    if field is None:
        return lambda line: line

    def key(line: str) -> str:
        parts = line.split(sep)
        try:
            return parts[field]
        except IndexError:
            raise KeyExtractionError(f"line has no field {field}: {line!r}") from None

    return key


# ---------------------------------------------------------------------------
# human output
# ---------------------------------------------------------------------------

def _print_dups(report: KeyedMap, *, quiet: bool) -> None:
    if not quiet:
        for k, n in report.items():
            print(f"{n:>5}  {bold(k)}")
    print(dim(f"{len(report)} duplicated keys"))


def _print_dedup(result: DedupResult, *, quiet: bool, verbose: bool) -> None:
    if not quiet:
        for line in result.retained:
            print(line)
        if verbose:
            for k, lines in result.removed.items():
                print(dim(f"# removed for {k}:"))
                for line in lines:
                    print(f"  {marker('ignored')} {line}")
    print(dim(f"{len(result.retained)} retained, {result.removed_count} removed"))


def _print_diff(result: DiffResult, key: KeyFn, *, quiet: bool, verbose: bool) -> None:
    if not quiet:
        for line in result.left:
            print(f"{marker('left')} {line}")
        for line in result.right:
            print(f"{marker('right')} {line}")
        if verbose:
            for line, _ in result.both:
                print(f"{marker('both')} {key(line)}")
        for entry in result.ignored:
            print(f"{marker('ignored')} {entry.side:<5} {entry.item}")
    print(dim(
        f"{len(result.left)} left, {len(result.right)} right, "
        f"{len(result.both)} both, {len(result.ignored)} ignored"
    ))


# ---------------------------------------------------------------------------
# commands
# ---------------------------------------------------------------------------

def _cmd_dups(args: argparse.Namespace, key: KeyFn) -> int:
    report = count_duplicates(_read_lines(args.file), key=key)
    if args.json:
        print(json.dumps({"duplicates": _jsonable(report)}, indent=2))
    else:
        _print_dups(report, quiet=args.quiet)
    return 1 if report else 0


def _cmd_dedup(args: argparse.Namespace, key: KeyFn) -> int:
    result = deduplicate(_read_lines(args.file), key=key)
    if args.json:
        print(json.dumps(_jsonable(result), indent=2))
    else:
        _print_dedup(result, quiet=args.quiet, verbose=args.verbose)
    return 0


def _cmd_diff(args: argparse.Namespace, key: KeyFn) -> int:
    result = diff(_read_lines(args.left), _read_lines(args.right), key=key)
    if args.json:
        print(json.dumps(_jsonable(result), indent=2))
    else:
        _print_diff(result, key, quiet=args.quiet, verbose=args.verbose)
    return 0 if result.is_empty() else 1


def _build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--field", type=int, default=None, help="0-based field used as the key (default: whole line)")
    common.add_argument("--sep", default=None, help="Field separator for --field (default: whitespace)")
    common.add_argument("--json", action="store_true", help="Output results as JSON to stdout")
    common.add_argument("-q", "--quiet", action="store_true", help="Only print the summary line")
    common.add_argument("-v", "--verbose", action="store_true", help="Also show paired keys and removed lines")
    common.add_argument("--no-color", action="store_true", help="Disable ANSI colors")

    p = argparse.ArgumentParser(prog="keyedlist", description="Keyed duplicate detection and diffing of text lines.")
    sub = p.add_subparsers(dest="command", required=True)

    dups = sub.add_parser("dups", parents=[common], help="Report keys that occur more than once")
    dups.add_argument("file", help="Input file, or - for stdin")
    dups.set_defaults(run=_cmd_dups)

    dedup = sub.add_parser("dedup", parents=[common], help="Keep the last line per key")
    dedup.add_argument("file", help="Input file, or - for stdin")
    dedup.set_defaults(run=_cmd_dedup)

    d = sub.add_parser("diff", parents=[common], help="Compare two files by key")
    d.add_argument("left", help="Left input file")
    d.add_argument("right", help="Right input file")
    d.set_defaults(run=_cmd_diff)
    return p


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)

    if args.no_color or args.json:
        force_color(False)

    if args.sep is not None and args.field is None:
        print("error: --sep only applies together with --field", file=sys.stderr)
        return 2

    run: Callable[[argparse.Namespace, KeyFn], int] = args.run
    key = _line_key(args.field, args.sep)
    try:
        return run(args, key)
    except OSError as e:
        print(f"error: could not read input: {e}", file=sys.stderr)
        return 2
    except KeyExtractionError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
