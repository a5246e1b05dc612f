from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class TokenizerConfig:
    """
    Tokenizer stage parameters.

    Plugins are mistune plugin names. Token types a plugin introduces that
    have no TokenKind counterpart (footnotes, tables, ...) surface as
    TokenKind.UNKNOWN.
    """

    plugins: tuple[str, ...] = ("strikethrough", "task_lists")

    def validate(self) -> None:
        if not isinstance(self.plugins, tuple):
            raise TypeError("plugins must be a tuple of plugin names")
        for name in self.plugins:
            if not isinstance(name, str) or name.strip() == "":
                raise ValueError(f"invalid plugin name: {name!r}")
        if len(set(self.plugins)) != len(self.plugins):
            raise ValueError("plugins must not contain duplicates")

    def __post_init__(self) -> None:
        self.validate()
