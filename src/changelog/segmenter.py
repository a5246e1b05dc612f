from __future__ import annotations

from enum import Enum
from typing import Iterable

from contracts.markdown import MdToken


class SegmenterState(str, Enum):
    BEFORE_FIRST_RELEASE = "before_first_release"  # accumulating preamble
    IN_RELEASE = "in_release"  # accumulating a release section


class Segmenter:
    """
    Single-pass state machine splitting a token sequence into release sections.

    - level-1 heading: document title; the accumulator is dropped and the
      machine returns to BEFORE_FIRST_RELEASE (what follows is preamble)
    - heading of level >= 2: starts a release; the previous accumulator is
      emitted only if it was a release (IN_RELEASE), never if it was preamble
    - anything else: appended to the accumulator

    Every emitted section starts with its release heading.
    """

    def __init__(self) -> None:
        self.state = SegmenterState.BEFORE_FIRST_RELEASE
        self._current: list[MdToken] = []
        self._sections: list[list[MdToken]] = []

    def _flush(self) -> None:
        if self.state is SegmenterState.IN_RELEASE and self._current:
            self._sections.append(self._current)

    def feed(self, token: MdToken) -> None:
        level = token.level
        if level is None:
            self._current.append(token)
            return
        if level == 1:
            # unlike a sticky "release seen" flag, a title reopens the preamble
            self._current = []
            self.state = SegmenterState.BEFORE_FIRST_RELEASE
            return
        self._flush()
        self.state = SegmenterState.IN_RELEASE
        self._current = [token]

    def finish(self) -> list[list[MdToken]]:
        self._flush()
        self._current = []
        return self._sections


def segment(tokens: Iterable[MdToken]) -> list[list[MdToken]]:
    seg = Segmenter()
    for tok in tokens:
        seg.feed(tok)
    return seg.finish()
