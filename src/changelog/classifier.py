from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Iterable

from contracts.markdown import MdToken
from contracts.releases import Library, ReleaseNote
from markdown_ast import extract_text

from .config import ReleaseIndexConfig
from .formatting import format_id
from .versions import DateLookup, find_release_date, match_effector_version, match_react_version, match_vue_version

# Title membership tests. "effector" alone must not be the prefix of an
# adapter name ("effector-react").
_EFFECTOR_MENTIONED_RE = re.compile(r"effector(?!-)")
_REACT_MENTIONED_RE = re.compile(r"effector-react")
_VUE_MENTIONED_RE = re.compile(r"effector-vue")

_VERSION_MATCHERS: dict[Library, Callable[[str], str | None]] = {
    Library.EFFECTOR: match_effector_version,
    Library.REACT: match_react_version,
    Library.VUE: match_vue_version,
}


class ClassificationError(ValueError):
    """A library is mentioned in a release title but its version cannot be extracted."""

    def __init__(self, *, library: Library, title_text: str) -> None:
        super().__init__(f"cannot extract {library.package_name} version from release title {title_text!r}")
        self.library = library
        self.title_text = title_text


@dataclass(frozen=True, slots=True)
class TitleMentions:
    effector: bool
    react: bool
    vue: bool

    def libraries(self) -> list[Library]:
        # Declared library order.
        out: list[Library] = []
        if self.effector:
            out.append(Library.EFFECTOR)
        if self.react:
            out.append(Library.REACT)
        if self.vue:
            out.append(Library.VUE)
        return out


@dataclass(frozen=True, slots=True)
class BodyStats:
    many_lines: bool
    large_article: bool


def title_text(section: list[MdToken]) -> str:
    return "".join(extract_text([section[0]]))


def detect_mentions(title: str) -> TitleMentions:
    return TitleMentions(
        effector=_EFFECTOR_MENTIONED_RE.search(title) is not None,
        react=_REACT_MENTIONED_RE.search(title) is not None,
        vue=_VUE_MENTIONED_RE.search(title) is not None,
    )


def body_stats(content: list[MdToken], config: ReleaseIndexConfig) -> BodyStats:
    text = "".join(extract_text(content, skip_nodes=["code"], keep_line_breaks=True))
    # the last block ends a line, it does not open a new one
    text = text.removesuffix("\n")
    return BodyStats(
        many_lines=len(text.split("\n")) > config.many_lines_threshold,
        large_article=len(text) > config.large_article_threshold,
    )


def extract_library_versions(title: str, mentions: TitleMentions) -> list[tuple[Library, str]]:
    """
    Resolve (library, version) pairs for a release title.

    - only the primary library named: version is the title minus the name
    - no library named: the whole title is the version (bare "21.8.0" headings)
    - otherwise each named library's version is matched after its name; a failed
      match raises ClassificationError
    """
    if mentions.effector and not mentions.react and not mentions.vue:
        return [(Library.EFFECTOR, title.replace(Library.EFFECTOR.package_name, "", 1).strip())]
    if not mentions.effector and not mentions.react and not mentions.vue:
        return [(Library.EFFECTOR, title)]

    out: list[tuple[Library, str]] = []
    for library in mentions.libraries():
        version = _VERSION_MATCHERS[library](title)
        if version is None:
            raise ClassificationError(library=library, title_text=title)
        out.append((library, version))
    return out


def classify_section(
    section: list[MdToken],
    date_lookup: DateLookup,
    config: ReleaseIndexConfig,
) -> list[ReleaseNote]:
    """
    Classify one release section (heading first) into release notes.

    A title naming several libraries yields one note per library; the notes
    share the same body tokens and statistics.
    """
    if not section:
        raise ValueError("release section must start with its heading token")

    title = title_text(section)
    content = section[1:]
    stats = body_stats(content, config)

    notes: list[ReleaseNote] = []
    for library, version in extract_library_versions(title, detect_mentions(title)):
        package = library.package_name
        notes.append(
            ReleaseNote(
                version=version,
                release_id=format_id(f"{package} {version}"),
                date=find_release_date(date_lookup, package, version),
                library=library,
                content=content,
                many_lines=stats.many_lines,
                large_article=stats.large_article,
            )
        )
    return notes


def classify_sections(
    sections: Iterable[list[MdToken]],
    date_lookup: DateLookup,
    config: ReleaseIndexConfig,
) -> list[ReleaseNote]:
    notes: list[ReleaseNote] = []
    for section in sections:
        notes.extend(classify_section(section, date_lookup, config))
    return notes
