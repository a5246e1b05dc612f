from __future__ import annotations

import json
from pathlib import Path

from contracts.releases import VersionDate


class DateIndexError(Exception):
    pass


def load_version_dates(path: Path) -> list[VersionDate]:
    """
    Load a date index: a JSON array of {"library", "version", "date"} rows,
    `date` in epoch milliseconds. Row order is preserved.
    """
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise DateIndexError(f"Date index is not valid JSON: {path}") from e

    if not isinstance(raw, list):
        raise DateIndexError(f"Date index must be a JSON array, got {type(raw).__name__}: {path}")

    out: list[VersionDate] = []
    for i, row in enumerate(raw):
        if not isinstance(row, dict):
            raise DateIndexError(f"Date index row {i} must be an object")
        try:
            out.append(VersionDate.from_dict(row))
        except (KeyError, TypeError, ValueError) as e:
            raise DateIndexError(f"Date index row {i} is malformed: {row!r}") from e
    return out


def read_changelog(path: Path) -> str:
    return path.read_text(encoding="utf-8")
