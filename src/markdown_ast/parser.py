from __future__ import annotations

import itertools
from typing import Any, Iterator

import mistune

from contracts.markdown import MdToken, TokenKind

from .config import TokenizerConfig


def _fmt_token_id(idx: int) -> str:
    return f"t{idx:06d}"


def _build_markdown(config: TokenizerConfig) -> mistune.Markdown:
    return mistune.create_markdown(renderer="ast", plugins=list(config.plugins))


def _normalize_attrs(kind: TokenKind, raw_type: str, raw: dict[str, Any]) -> dict[str, Any]:
    attrs = raw.get("attrs") or {}
    if kind is TokenKind.HEADING:
        return {"level": int(attrs.get("level", 6))}
    if kind is TokenKind.LIST:
        return {"ordered": bool(attrs.get("ordered", False)), "depth": int(attrs.get("depth", 0))}
    if kind is TokenKind.LISTITEM:
        if raw_type == "task_list_item":
            return {"task": True, "checked": bool(attrs.get("checked", False))}
        return {"task": False, "checked": None}
    if kind in (TokenKind.LINK, TokenKind.IMAGE):
        title = attrs.get("title")
        return {"href": str(attrs.get("url", "")), "title": (None if title is None else str(title))}
    if kind is TokenKind.CODE:
        info = attrs.get("info")
        return {} if not info else {"info": str(info)}
    # Unknown plugin tokens keep whatever scalar attrs they carry.
    if kind is TokenKind.UNKNOWN:
        return {k: v for k, v in attrs.items() if isinstance(v, (str, int, float, bool)) or v is None}
    return {}


def _convert(raw_tokens: list[dict[str, Any]], ids: Iterator[int]) -> list[MdToken]:
    out: list[MdToken] = []
    for raw in raw_tokens:
        raw_type = str(raw.get("type", ""))
        kind = TokenKind.from_raw(raw_type)
        # Pre-order: the parent takes its id before its children.
        token_id = _fmt_token_id(next(ids))
        value = raw.get("raw")
        children = _convert(list(raw.get("children") or []), ids)
        out.append(
            MdToken(
                token_id=token_id,
                kind=kind,
                raw_type=raw_type,
                value=(None if value is None else str(value)),
                attrs=_normalize_attrs(kind, raw_type, raw),
                children=children,
            )
        )
    return out


def parse_to_ast(text: str, config: TokenizerConfig | None = None) -> list[MdToken]:
    """
    Tokenize Markdown text into a flat top-level token sequence.

    Nested structure (list items, inline formatting, link labels) is carried in
    each token's `children`. Headings carry `attrs["level"]`.
    Token IDs are assigned in document pre-order, so identical text always
    yields identical IDs.
    """
    cfg = config or TokenizerConfig()
    md = _build_markdown(cfg)
    raw_tokens = md(text)
    if not isinstance(raw_tokens, list):
        raise TypeError("mistune AST renderer must return a token list")
    return _convert(raw_tokens, itertools.count())
