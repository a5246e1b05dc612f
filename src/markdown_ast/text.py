from __future__ import annotations

from typing import Iterable

from contracts.markdown import MdToken, TokenKind

# Kinds that end a visual line when line breaks are preserved.
_BLOCK_KINDS: frozenset[TokenKind] = frozenset(
    {TokenKind.HEADING, TokenKind.PARAGRAPH, TokenKind.CODE, TokenKind.HR}
)

# Raw markup is not visible text.
_INVISIBLE_KINDS: frozenset[TokenKind] = frozenset({TokenKind.HTML, TokenKind.SPACE})


def _ends_line(tok: MdToken) -> bool:
    if tok.kind in _BLOCK_KINDS:
        return True
    # block-level text (list item body) carries children instead of a value
    return tok.kind is TokenKind.TEXT and tok.value is None


def _walk(tokens: Iterable[MdToken], *, skip: frozenset[str], keep_line_breaks: bool, out: list[str]) -> None:
    for tok in tokens:
        if tok.kind.value in skip or tok.raw_type in skip:
            continue
        if tok.kind in _INVISIBLE_KINDS:
            continue

        if tok.kind in (TokenKind.SOFTBREAK, TokenKind.BR):
            out.append("\n" if keep_line_breaks else " ")
        elif tok.kind is TokenKind.HR:
            pass
        elif tok.value is not None:
            out.append(tok.value.rstrip("\n") if tok.kind is TokenKind.CODE else tok.value)
        else:
            _walk(tok.children, skip=skip, keep_line_breaks=keep_line_breaks, out=out)

        if keep_line_breaks and _ends_line(tok) and not (out and out[-1].endswith("\n")):
            out.append("\n")


def extract_text(
    tokens: Iterable[MdToken],
    *,
    skip_nodes: Iterable[str] = (),
    keep_line_breaks: bool = False,
) -> list[str]:
    """
    Flatten the visible text of a token sequence.

    - `skip_nodes`: kind values (or tokenizer type names) whose whole subtree is
      omitted, e.g. ["code"] to leave out code blocks.
    - `keep_line_breaks`: block boundaries and soft/hard breaks become "\\n";
      otherwise breaks become a single space and blocks are concatenated.

    `"".join(result)` is the flattened text.
    """
    out: list[str] = []
    _walk(tokens, skip=frozenset(skip_nodes), keep_line_breaks=keep_line_breaks, out=out)
    return out
