"""
Canonical, authoritative pipeline contracts.

These models are the schema boundary between stages:
- tokenizer stage (`markdown_ast`) -> `MdToken` trees
- release index stage (`changelog`) -> `ReleaseNote` / `ReleaseGroup` / `ReleaseIndexResult`

Stage code should consume/produce these contract objects (not ad-hoc dicts).
"""

from .markdown import MdToken, TokenKind
from .releases import (
    UNRESOLVED_DATE,
    Library,
    ReleaseGroup,
    ReleaseIndexError,
    ReleaseIndexResult,
    ReleaseNote,
    VersionDate,
)

__all__ = [
    "MdToken",
    "TokenKind",
    "UNRESOLVED_DATE",
    "Library",
    "VersionDate",
    "ReleaseNote",
    "ReleaseGroup",
    "ReleaseIndexError",
    "ReleaseIndexResult",
]
