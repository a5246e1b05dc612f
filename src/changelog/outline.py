from __future__ import annotations

import logging
import re
from datetime import datetime, timezone
from typing import Callable, Iterable

from contracts.markdown import MdToken, TokenKind
from contracts.releases import UNRESOLVED_DATE, ReleaseGroup, ReleaseNote
from markdown_ast import extract_text

from .formatting import anchor, format_id

logger = logging.getLogger(__name__)

_MD_ANCHOR_RE = re.compile(r"\.md#")
_MD_UPPER_ANCHOR_RE = re.compile(r"\.MD#")


def normalize_href(href: str) -> str:
    """
    Point links at sibling Markdown documents to in-page anchors:
    "api.md" -> "#api", "api.md#store" -> "api#store".
    """
    if href.endswith(".md"):
        return "#" + href.replace(".md", "", 1)
    if href.endswith(".MD"):
        return "#" + href.replace(".MD", "", 1)
    if _MD_ANCHOR_RE.search(href):
        return _MD_ANCHOR_RE.sub("#", href, count=1)
    if _MD_UPPER_ANCHOR_RE.search(href):
        return _MD_UPPER_ANCHOR_RE.sub("#", href, count=1)
    return href


def _utc(date_ms: int) -> datetime:
    return datetime.fromtimestamp(date_ms / 1000, tz=timezone.utc)


def format_release_date(date_ms: int) -> str:
    # "August 1, 2021"
    if date_ms == UNRESOLVED_DATE:
        return "date unknown"
    dt = _utc(date_ms)
    return f"{dt.strftime('%B')} {dt.day}, {dt.year}"


def release_date_iso(date_ms: int) -> str | None:
    if date_ms == UNRESOLVED_DATE:
        return None
    return _utc(date_ms).isoformat(timespec="milliseconds").replace("+00:00", "Z")


# ----------------------------
# Token rendering
# ----------------------------


def _children(tok: MdToken) -> str:
    return "".join(render_token(c) for c in tok.children)


def _value(tok: MdToken) -> str:
    return tok.value if tok.value is not None else _children(tok)


def _wrap(marker: str) -> Callable[[MdToken], str]:
    return lambda tok: f"{marker}{_children(tok)}{marker}"


def _heading(tok: MdToken) -> str:
    text = "".join(extract_text(tok.children))
    level = min(max(tok.level or 6, 1), 6)
    return f"{'#' * level} [{_children(tok)}]({anchor(format_id(text))})\n\n"


def _text(tok: MdToken) -> str:
    if tok.value is not None:
        return tok.value
    # block-level text inside list items
    return _children(tok) + "\n"


def _code(tok: MdToken) -> str:
    body = (tok.value or "").rstrip("\n")
    return f"```{tok.attrs.get('info', '')}\n{body}\n```\n\n"


def _blockquote(tok: MdToken) -> str:
    lines = _children(tok).strip("\n").split("\n")
    return "\n".join(f"> {ln}" if ln else ">" for ln in lines) + "\n\n"


def _list(tok: MdToken) -> str:
    ordered = bool(tok.attrs.get("ordered"))
    out: list[str] = []
    for i, item in enumerate(tok.children, start=1):
        marker = f"{i}. " if ordered else "- "
        pad = " " * len(marker)
        first, *rest = render_token(item).strip("\n").split("\n")
        out.append(marker + first)
        out.extend(pad + ln if ln else "" for ln in rest)
    return "\n".join(out) + "\n\n"


def _listitem(tok: MdToken) -> str:
    if tok.attrs.get("task") or tok.attrs.get("checked") is not None:
        logger.warning("task list items are not supported (token %s)", tok.token_id)
    return _children(tok)


def _link(tok: MdToken) -> str:
    if tok.attrs.get("title") is not None:
        logger.warning("link title is not supported (token %s)", tok.token_id)
    return f"[{_children(tok)}]({normalize_href(str(tok.attrs.get('href', '')))})"


def _image(tok: MdToken) -> str:
    return f"![{_children(tok)}]({tok.attrs.get('href', '')})"


def _unknown(tok: MdToken) -> str:
    logger.warning("unsupported token type %r (token %s)", tok.raw_type, tok.token_id)
    return f"[token {tok.raw_type}]"


_RENDERERS: dict[TokenKind, Callable[[MdToken], str]] = {
    TokenKind.HEADING: _heading,
    TokenKind.PARAGRAPH: lambda tok: _children(tok) + "\n\n",
    TokenKind.TEXT: _text,
    TokenKind.SPACE: lambda tok: "",
    TokenKind.SOFTBREAK: lambda tok: "\n",
    TokenKind.BR: lambda tok: "  \n",
    TokenKind.HR: lambda tok: "---\n\n",
    TokenKind.CODE: _code,
    TokenKind.CODESPAN: lambda tok: f"`{tok.value or ''}`",
    TokenKind.STRONG: _wrap("**"),
    TokenKind.EM: _wrap("*"),
    TokenKind.DEL: _wrap("~~"),
    TokenKind.BLOCKQUOTE: _blockquote,
    TokenKind.LIST: _list,
    TokenKind.LISTITEM: _listitem,
    TokenKind.LINK: _link,
    TokenKind.IMAGE: _image,
    TokenKind.HTML: _value,
    TokenKind.UNKNOWN: _unknown,
}


def render_token(tok: MdToken) -> str:
    return _RENDERERS.get(tok.kind, _unknown)(tok)


def render_tokens(tokens: Iterable[MdToken]) -> str:
    return "".join(render_token(t) for t in tokens)


# ----------------------------
# Index rendering
# ----------------------------


def _release_header(note: ReleaseNote) -> list[str]:
    iso = release_date_iso(note.date)
    when = format_release_date(note.date) if iso is None else f"{format_release_date(note.date)} ({iso})"
    return [f"### [{note.version}]({anchor(note.release_id)})", "", f"_{when}_", ""]


def render_outline(groups: list[ReleaseGroup], *, title: str = "Changelog") -> str:
    """
    Render release groups as a Markdown outline: navigation, one section per
    group, one sub-section per release with its date and body.
    """
    lines: list[str] = [f"# {title}", ""]
    lines.extend(f"- [{g.library}]({anchor(g.group_id)})" for g in groups)
    lines.append("")

    for g in groups:
        lines.extend([f"## [{g.library}]({anchor(g.group_id)})", ""])
        for note in g.releases:
            lines.extend(_release_header(note))
            body = render_tokens(note.content).strip("\n")
            if body:
                lines.extend([body, ""])

    return "\n".join(lines).rstrip("\n") + "\n"
