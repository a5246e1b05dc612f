from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from .artifacts import write_release_index_json
from .config import ErrorPolicy, ReleaseIndexConfig
from .data_access import load_version_dates, read_changelog
from .module import run_release_index
from .outline import render_outline


def _non_negative_int(value: str) -> int:
    try:
        n = int(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"expected an integer, got {value!r}") from e
    if n < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {n}")
    return n


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="release-index",
        description="Split a changelog into per-release sections, classify them by library and write a dated release index.",
    )
    p.add_argument("--changelog", required=True, type=Path, help="Markdown changelog document.")
    p.add_argument(
        "--dates",
        required=False,
        type=Path,
        default=None,
        help='Date index JSON: [{"library", "version", "date"}]. Without it every date is unresolved.',
    )
    p.add_argument("--output", required=True, type=Path, help="Path to write the release index JSON artifact.")
    p.add_argument("--many-lines", type=_non_negative_int, default=30, help="Body line count above which a release is flagged many_lines.")
    p.add_argument(
        "--large-article", type=_non_negative_int, default=2000, help="Body character count above which a release is flagged large_article."
    )
    p.add_argument(
        "--on-error",
        choices=[e.value for e in ErrorPolicy],
        default=ErrorPolicy.ABORT.value,
        help="What to do with a release title whose version cannot be extracted.",
    )
    p.add_argument("--outline", action="store_true", help="Print a Markdown outline of the index to stdout.")
    p.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return p


def main(argv: list[str] | None = None) -> int:
    args = build_arg_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(levelname)s %(name)s: %(message)s")

    cfg = ReleaseIndexConfig(
        many_lines_threshold=args.many_lines,
        large_article_threshold=args.large_article,
        on_classification_error=ErrorPolicy(args.on_error),
    )
    version_dates = [] if args.dates is None else load_version_dates(args.dates)

    result = run_release_index(
        read_changelog(args.changelog),
        version_dates,
        cfg,
        source_changelog_relpath=args.changelog.as_posix(),
    )
    write_release_index_json(result=result, out_file=args.output)

    if args.outline:
        print(render_outline(result.groups), end="")

    summary = {
        "ok": result.ok,
        "groups": len(result.groups),
        "releases": sum(len(g.releases) for g in result.groups),
        "unresolved_dates": result.meta["counts"]["unresolved_dates"],
        "errors": len(result.errors),
    }
    print(json.dumps(summary, sort_keys=True, separators=(",", ":"), ensure_ascii=False))

    return 0 if result.ok else 2


if __name__ == "__main__":
    raise SystemExit(main())
