from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from .markdown import MdToken

# Sentinel for releases whose version is missing from the date index.
UNRESOLVED_DATE = -1


class Library(str, Enum):
    """
    Internal library keys. Declaration order is the group order of the index:
    the primary library first, then the adapters.
    """

    EFFECTOR = "effector"
    REACT = "react"
    VUE = "vue"

    @property
    def package_name(self) -> str:
        # Name used in changelog titles, the date index and anchors.
        return _PACKAGE_NAMES[self]


_PACKAGE_NAMES: dict[Library, str] = {
    Library.EFFECTOR: "effector",
    Library.REACT: "effector-react",
    Library.VUE: "effector-vue",
}


@dataclass(frozen=True, slots=True)
class VersionDate:
    library: str  # package name, e.g. "effector-react"
    version: str
    date: int  # epoch milliseconds

    def to_dict(self) -> dict[str, Any]:
        return {"library": self.library, "version": self.version, "date": self.date}

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "VersionDate":
        return VersionDate(library=str(d["library"]), version=str(d["version"]), date=int(d["date"]))


@dataclass(frozen=True, slots=True)
class ReleaseNote:
    version: str
    release_id: str  # format_id("<package name> <version>")
    date: int  # epoch milliseconds or UNRESOLVED_DATE
    library: Library
    content: list[MdToken]  # release body, heading excluded
    many_lines: bool
    large_article: bool

    @property
    def date_resolved(self) -> bool:
        return self.date != UNRESOLVED_DATE

    def to_dict(self) -> dict[str, Any]:
        return {
            "version": self.version,
            "release_id": self.release_id,
            "date": self.date,
            "library": self.library.value,
            "content": [t.to_dict() for t in self.content],
            "many_lines": self.many_lines,
            "large_article": self.large_article,
        }

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "ReleaseNote":
        content_raw = d.get("content") or []
        if not isinstance(content_raw, list):
            raise TypeError("ReleaseNote.content must be a list")
        return ReleaseNote(
            version=str(d["version"]),
            release_id=str(d["release_id"]),
            date=int(d.get("date", UNRESOLVED_DATE)),
            library=Library(str(d["library"])),
            content=[MdToken.from_dict(t) for t in content_raw],
            many_lines=bool(d.get("many_lines", False)),
            large_article=bool(d.get("large_article", False)),
        )


@dataclass(frozen=True, slots=True)
class ReleaseGroup:
    library: str  # display name
    group_id: str
    releases: list[ReleaseNote]

    def to_dict(self) -> dict[str, Any]:
        return {
            "library": self.library,
            "group_id": self.group_id,
            "releases": [r.to_dict() for r in self.releases],
        }

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "ReleaseGroup":
        releases_raw = d.get("releases") or []
        if not isinstance(releases_raw, list):
            raise TypeError("ReleaseGroup.releases must be a list")
        return ReleaseGroup(
            library=str(d["library"]),
            group_id=str(d["group_id"]),
            releases=[ReleaseNote.from_dict(r) for r in releases_raw],
        )


@dataclass(frozen=True, slots=True)
class ReleaseIndexError:
    code: str
    message: str
    detail: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"code": self.code, "message": self.message, "detail": self.detail}

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "ReleaseIndexError":
        return ReleaseIndexError(
            code=str(d["code"]),
            message=str(d.get("message", "")),
            detail=(None if d.get("detail") is None else dict(d["detail"])),
        )


@dataclass(frozen=True, slots=True)
class ReleaseIndexResult:
    ok: bool
    errors: list[ReleaseIndexError]
    meta: dict[str, Any]  # algorithm/version, params, counts, warnings
    groups: list[ReleaseGroup]
    source_changelog_relpath: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "ok": self.ok,
            "errors": [e.to_dict() for e in self.errors],
            "meta": dict(self.meta),
            "groups": [g.to_dict() for g in self.groups],
            "source_changelog_relpath": self.source_changelog_relpath,
        }

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "ReleaseIndexResult":
        groups_raw = d.get("groups") or []
        if not isinstance(groups_raw, list):
            raise TypeError("ReleaseIndexResult.groups must be a list")
        return ReleaseIndexResult(
            ok=bool(d.get("ok", False)),
            errors=[ReleaseIndexError.from_dict(e) for e in (d.get("errors") or [])],
            meta=dict(d.get("meta") or {}),
            groups=[ReleaseGroup.from_dict(g) for g in groups_raw],
            source_changelog_relpath=(
                None if d.get("source_changelog_relpath") is None else str(d.get("source_changelog_relpath"))
            ),
        )
