from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ErrorPolicy(str, Enum):
    ABORT = "abort"  # re-raise the first classification failure
    SKIP = "skip"  # record the failure, drop the section, keep going


@dataclass(frozen=True, slots=True)
class ReleaseIndexConfig:
    """
    Release index parameters.

    Defaults are explicit constants; nothing is read from the environment.
    Thresholds only flag releases for presentation, they never drop content.
    """

    many_lines_threshold: int = 30  # many_lines = body line count > threshold
    large_article_threshold: int = 2000  # large_article = body char count > threshold
    on_classification_error: ErrorPolicy = ErrorPolicy.ABORT

    def validate(self) -> None:
        if self.many_lines_threshold < 0:
            raise ValueError("many_lines_threshold must be >= 0")
        if self.large_article_threshold < 0:
            raise ValueError("large_article_threshold must be >= 0")
        if not isinstance(self.on_classification_error, ErrorPolicy):
            raise TypeError("on_classification_error must be an ErrorPolicy")

    def __post_init__(self) -> None:
        self.validate()
