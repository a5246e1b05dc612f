from __future__ import annotations

import logging
import re
from collections.abc import Mapping, Sequence
from contracts.releases import UNRESOLVED_DATE, VersionDate

logger = logging.getLogger(__name__)

# MAJOR.MINOR.PATCH with an optional lowercase prerelease tag (21.0.0-beta.1).
SEMVER_RE = re.compile(r"\d+\.\d+\.\d+(?:-[a-z]+[a-z0-9.]*)?")

# Version-after-name patterns. The primary library must not be followed by a
# hyphen (that would be an adapter name); its version may carry a
# -MAJOR.MINOR.PATCH build suffix.
EFFECTOR_VERSION_RE = re.compile(r"(?:effector[^-]).*?(\d+\.\d+\.\d+(-\d+\.\d+\.\d+)?)")
REACT_VERSION_RE = re.compile(r"(?:effector-react).*?(\d+\.\d+\.\d+)")
VUE_VERSION_RE = re.compile(r"(?:effector-vue).*?(\d+\.\d+\.\d+)")

DateLookup = Mapping[tuple[str, str], int]


def extract_versions(text: str) -> list[str]:
    """All semver-like substrings of `text`, left to right."""
    return [m.group(0) for m in SEMVER_RE.finditer(text)]


def _match_version(pattern: re.Pattern[str], title: str) -> str | None:
    m = pattern.search(title)
    return None if m is None else m.group(1)


def match_effector_version(title: str) -> str | None:
    return _match_version(EFFECTOR_VERSION_RE, title)


def match_react_version(title: str) -> str | None:
    return _match_version(REACT_VERSION_RE, title)


def match_vue_version(title: str) -> str | None:
    return _match_version(VUE_VERSION_RE, title)


def build_date_lookup(version_dates: Sequence[VersionDate]) -> dict[tuple[str, str], int]:
    # First row wins for duplicated (library, version) pairs.
    lookup: dict[tuple[str, str], int] = {}
    for vd in version_dates:
        lookup.setdefault((vd.library, vd.version), vd.date)
    return lookup


def find_release_date(
    date_index: DateLookup | Sequence[VersionDate],
    library: str,
    version: str,
) -> int:
    """
    Resolve a release date for `library` from a raw version string.

    `version` may embed several version numbers (combined headings); each one is
    tried left to right and the first with a date index entry wins. Misses are
    logged and skipped. Returns UNRESOLVED_DATE when nothing matches; never raises.
    """
    lookup = date_index if isinstance(date_index, Mapping) else build_date_lookup(date_index)

    candidates = extract_versions(version)
    if not candidates:
        logger.warning("no version number found in %r for %s", version, library)
        return UNRESOLVED_DATE

    for candidate in candidates:
        date = lookup.get((library, candidate))
        if date is None:
            logger.warning("no version info found for %s %s", library, candidate)
            continue
        return date
    return UNRESOLVED_DATE
