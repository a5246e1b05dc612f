from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from typing import Any

from contracts.releases import (
    Library,
    ReleaseGroup,
    ReleaseIndexError,
    ReleaseIndexResult,
    ReleaseNote,
    VersionDate,
)
from markdown_ast import TokenizerConfig, parse_to_ast

from .assembler import assemble_groups
from .classifier import ClassificationError, classify_section, classify_sections
from .config import ErrorPolicy, ReleaseIndexConfig
from .segmenter import segment
from .versions import build_date_lookup

logger = logging.getLogger(__name__)

_INDEX_ALGORITHM = "heading_sections"
_INDEX_VERSION = "heading_sections_v1"


def _stable_json(x: Any) -> str:
    return json.dumps(x, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def _params_dict(cfg: ReleaseIndexConfig) -> dict[str, Any]:
    return {
        "many_lines_threshold": cfg.many_lines_threshold,
        "large_article_threshold": cfg.large_article_threshold,
        "on_classification_error": cfg.on_classification_error.value,
    }


def _unresolved_date_warnings(notes: list[ReleaseNote]) -> list[dict[str, Any]]:
    return [
        {
            "code": "RELEASE_DATE_UNRESOLVED",
            "message": "No date index entry matches any version in the release title.",
            "detail": {"library": n.library.package_name, "version": n.version, "release_id": n.release_id},
        }
        for n in notes
        if not n.date_resolved
    ]


def _canonicalize_meta(meta: dict[str, Any]) -> None:
    """
    Emit list-accumulated meta fields in a deterministic order, independent of
    the order in which sections were processed.
    """
    warnings = meta.get("warnings")
    if isinstance(warnings, list):
        meta["warnings"] = sorted(
            warnings,
            key=lambda w: (str(w.get("code", "")), _stable_json(w.get("detail") or {})),
        )


def build_release_groups(
    document_text: str,
    version_dates: Sequence[VersionDate],
    config: ReleaseIndexConfig | None = None,
    *,
    tokenizer_config: TokenizerConfig | None = None,
) -> list[ReleaseGroup]:
    """
    Rebuild the full release index from a changelog document and a date index.

    Pure: identical inputs give structurally equal groups. A malformed release
    title raises ClassificationError.
    """
    cfg = config or ReleaseIndexConfig()
    tokens = parse_to_ast(document_text, tokenizer_config)
    notes = classify_sections(segment(tokens), build_date_lookup(version_dates), cfg)
    return assemble_groups(notes)


def run_release_index(
    document_text: str,
    version_dates: Sequence[VersionDate],
    config: ReleaseIndexConfig | None = None,
    *,
    tokenizer_config: TokenizerConfig | None = None,
    source_changelog_relpath: str | None = None,
) -> ReleaseIndexResult:
    """
    Host-facing release index run with an auditable result envelope.

    Classification failures follow `config.on_classification_error`:
    ABORT re-raises, SKIP records a CLASSIFICATION_FAILED error for the section
    and continues with the remaining sections (ok=False).
    Unresolved dates are warnings only; ok stays True.
    """
    cfg = config or ReleaseIndexConfig()
    tokens = parse_to_ast(document_text, tokenizer_config)
    sections = segment(tokens)
    date_lookup = build_date_lookup(version_dates)

    errors: list[ReleaseIndexError] = []
    notes: list[ReleaseNote] = []
    for idx, section in enumerate(sections):
        try:
            notes.extend(classify_section(section, date_lookup, cfg))
        except ClassificationError as e:
            if cfg.on_classification_error is ErrorPolicy.ABORT:
                raise
            logger.warning("skipping release section %d: %s", idx, e)
            errors.append(
                ReleaseIndexError(
                    code="CLASSIFICATION_FAILED",
                    message=str(e),
                    detail={
                        "section_index": idx,
                        "heading_token_id": section[0].token_id,
                        "library": e.library.value,
                        "title_text": e.title_text,
                    },
                )
            )

    groups = assemble_groups(notes)

    meta: dict[str, Any] = {
        "algorithm": _INDEX_ALGORITHM,
        "version": _INDEX_VERSION,
        "params": _params_dict(cfg),
        "counts": {
            "tokens_in": len(tokens),
            "sections": len(sections),
            "sections_failed": len(errors),
            "releases": len(notes),
            "releases_by_library": {lib.value: sum(1 for n in notes if n.library is lib) for lib in Library},
            "unresolved_dates": sum(1 for n in notes if not n.date_resolved),
        },
        "warnings": _unresolved_date_warnings(notes),
    }
    _canonicalize_meta(meta)

    return ReleaseIndexResult(
        ok=len(errors) == 0,
        errors=errors,
        meta=meta,
        groups=groups,
        source_changelog_relpath=source_changelog_relpath,
    )
