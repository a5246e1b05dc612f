#!/usr/bin/env python3
"""
debug_print_releases.py

Purpose
- Inspect a release index JSON artifact (written by `release-index`) in the terminal.
- Prints per-group counts, unresolved dates, classification errors and warnings.
- Optionally prints the full Markdown outline.

Usage examples
  python3 tools/debug_print_releases.py artifacts/release_index.json
  python3 tools/debug_print_releases.py artifacts/release_index.json --outline
  python3 tools/debug_print_releases.py artifacts/release_index.json --group effector-react
"""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import List, Optional

from changelog.artifacts import load_release_index_json
from changelog.outline import format_release_date, render_outline
from contracts.releases import ReleaseIndexResult


def _truncate(s: str, n: int) -> str:
    if n <= 0 or len(s) <= n:
        return s
    return s[: max(0, n - 3)] + "..."


def print_summary(result: ReleaseIndexResult, *, group_filter: Optional[str], max_snippet: int) -> None:
    print(f"ok={result.ok} groups={len(result.groups)} errors={len(result.errors)}")
    if result.source_changelog_relpath:
        print(f"source={result.source_changelog_relpath}")

    for g in result.groups:
        if group_filter is not None and g.group_id != group_filter:
            continue
        unresolved = sum(1 for r in g.releases if not r.date_resolved)
        print(f"\n=== {g.library} (#{g.group_id}) releases={len(g.releases)} unresolved_dates={unresolved} ===")
        for r in g.releases:
            flags = []
            if r.many_lines:
                flags.append("many_lines")
            if r.large_article:
                flags.append("large_article")
            flag_str = f" [{','.join(flags)}]" if flags else ""
            print(f"  {r.release_id:<32} {_truncate(r.version, max_snippet):<16} {format_release_date(r.date)}{flag_str}")

    if result.errors:
        print("\n-- ERRORS --")
        for e in result.errors:
            print(f"  {e.code}: {_truncate(e.message, max_snippet)}")

    warnings = result.meta.get("warnings") or []
    if warnings:
        print("\n-- WARNINGS --")
        for w in warnings:
            detail = json.dumps(w.get("detail") or {}, sort_keys=True, ensure_ascii=False)
            print(f"  {w.get('code', '')}: {_truncate(detail, max_snippet)}")


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(prog="debug-print-releases")
    ap.add_argument("input", type=Path, help="Release index JSON artifact.")
    ap.add_argument("--group", default=None, help="Only show one group (by group id).")
    ap.add_argument("--outline", action="store_true", help="Print the Markdown outline after the summary.")
    ap.add_argument("--max-snippet", type=int, default=120, help="Max characters for a snippet.")
    args = ap.parse_args(argv)

    result = load_release_index_json(args.input)
    print_summary(result, group_filter=args.group, max_snippet=args.max_snippet)

    if args.outline:
        groups = [g for g in result.groups if args.group is None or g.group_id == args.group]
        print()
        print(render_outline(groups), end="")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
