from __future__ import annotations

import re

_PUNCT_RUN_RE = re.compile(r"[(),?{}.:\[\]=;&$!]+")
_SPACE_RUN_RE = re.compile(r" +")
_HYPHEN_RUN_RE = re.compile(r"-+")


def format_id(text: str) -> str:
    """
    Deterministic anchor/slug for arbitrary display text.

    Punctuation runs and space runs become single hyphens, hyphen runs collapse,
    edge hyphens are stripped and the result is lower-cased. Idempotent; no
    uniqueness is enforced.
    """
    s = _PUNCT_RUN_RE.sub("-", text)
    s = _SPACE_RUN_RE.sub("-", s)
    s = _HYPHEN_RUN_RE.sub("-", s)
    return s.strip("-").lower()


def anchor(slug: str) -> str:
    return f"#{slug}"
