from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class TokenKind(str, Enum):
    HEADING = "heading"
    PARAGRAPH = "paragraph"
    TEXT = "text"
    SPACE = "space"
    SOFTBREAK = "softbreak"
    BR = "br"
    HR = "hr"
    CODE = "code"
    CODESPAN = "codespan"
    STRONG = "strong"
    EM = "em"
    DEL = "del"
    BLOCKQUOTE = "blockquote"
    LIST = "list"
    LISTITEM = "listitem"
    LINK = "link"
    IMAGE = "image"
    HTML = "html"
    UNKNOWN = "unknown"

    @staticmethod
    def from_raw(raw_type: str) -> "TokenKind":
        """
        Map a tokenizer type name onto the closed kind set.

        Unrecognized names map to UNKNOWN; the original name stays on the token
        (`MdToken.raw_type`) so consumers can still report it.
        """
        kind = _RAW_TYPE_KINDS.get(raw_type)
        if kind is not None:
            return kind
        try:
            return TokenKind(raw_type)
        except ValueError:
            return TokenKind.UNKNOWN


# mistune AST type names -> kinds
_RAW_TYPE_KINDS: dict[str, TokenKind] = {
    "heading": TokenKind.HEADING,
    "paragraph": TokenKind.PARAGRAPH,
    "text": TokenKind.TEXT,
    "block_text": TokenKind.TEXT,
    "blank_line": TokenKind.SPACE,
    "softbreak": TokenKind.SOFTBREAK,
    "linebreak": TokenKind.BR,
    "thematic_break": TokenKind.HR,
    "block_code": TokenKind.CODE,
    "codespan": TokenKind.CODESPAN,
    "strong": TokenKind.STRONG,
    "emphasis": TokenKind.EM,
    "strikethrough": TokenKind.DEL,
    "block_quote": TokenKind.BLOCKQUOTE,
    "list": TokenKind.LIST,
    "list_item": TokenKind.LISTITEM,
    "task_list_item": TokenKind.LISTITEM,
    "link": TokenKind.LINK,
    "image": TokenKind.IMAGE,
    "block_html": TokenKind.HTML,
    "inline_html": TokenKind.HTML,
}


@dataclass(frozen=True, slots=True)
class MdToken:
    token_id: str  # t{index:06d}, document pre-order
    kind: TokenKind
    raw_type: str
    value: str | None = None  # leaf text (text, code, codespan, html)
    attrs: dict[str, Any] = field(default_factory=dict)
    children: list["MdToken"] = field(default_factory=list)

    @property
    def level(self) -> int | None:
        if self.kind is not TokenKind.HEADING:
            return None
        return int(self.attrs.get("level", 6))

    @property
    def is_heading(self) -> bool:
        return self.kind is TokenKind.HEADING

    def to_dict(self) -> dict[str, Any]:
        return {
            "token_id": self.token_id,
            "kind": self.kind.value,
            "raw_type": self.raw_type,
            "value": self.value,
            "attrs": dict(self.attrs),
            "children": [c.to_dict() for c in self.children],
        }

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "MdToken":
        children_raw = d.get("children") or []
        if not isinstance(children_raw, list):
            raise TypeError("MdToken.children must be a list")
        return MdToken(
            token_id=str(d["token_id"]),
            kind=TokenKind.from_raw(str(d.get("kind", ""))),
            raw_type=str(d.get("raw_type", d.get("kind", ""))),
            value=(None if d.get("value") is None else str(d.get("value"))),
            attrs=dict(d.get("attrs") or {}),
            children=[MdToken.from_dict(c) for c in children_raw],
        )
