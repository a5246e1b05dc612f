from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from contracts.releases import ReleaseIndexResult


def serialize_release_index(result: ReleaseIndexResult) -> str:
    """
    Canonical JSON text of a release index: sorted keys, two-space indent,
    trailing newline. Release bodies are written as full token trees so the
    artifact can be rendered again without the source changelog.
    """
    payload: dict[str, Any] = result.to_dict()
    return (
        json.dumps(payload, ensure_ascii=False, sort_keys=True, separators=(",", ":"), indent=2)
        + "\n"
    )


def write_release_index_json(*, result: ReleaseIndexResult, out_file: Path) -> None:
    out_file.parent.mkdir(parents=True, exist_ok=True)
    out_file.write_text(serialize_release_index(result), encoding="utf-8")


def load_release_index_json(path: Path) -> ReleaseIndexResult:
    raw = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(raw, dict):
        raise TypeError(f"release index artifact must be a JSON object: {path}")
    return ReleaseIndexResult.from_dict(raw)
