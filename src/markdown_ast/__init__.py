"""
Tokenizer stage (Markdown text -> token tree).

Contract:
- Input: Markdown text
- Output: flat top-level sequence of `contracts.markdown.MdToken`, nested
  structure carried as owned child sequences, headings carry a level
- Constraints: no interpretation of release content; parsing is delegated to
  mistune's AST renderer and only mapped onto the closed TokenKind set
"""

from .config import TokenizerConfig
from .parser import parse_to_ast
from .text import extract_text

__all__ = ["TokenizerConfig", "extract_text", "parse_to_ast"]
