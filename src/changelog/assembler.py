from __future__ import annotations

from typing import Iterable

from contracts.releases import Library, ReleaseGroup, ReleaseNote

from .formatting import format_id


def assemble_groups(notes: Iterable[ReleaseNote]) -> list[ReleaseGroup]:
    """
    Partition notes into one group per library, in declared library order.

    Every library gets a group, even without releases. Notes keep the order in
    which they were classified (document order).
    """
    buckets: dict[Library, list[ReleaseNote]] = {lib: [] for lib in Library}
    for note in notes:
        buckets[note.library].append(note)

    return [
        ReleaseGroup(library=lib.package_name, group_id=format_id(lib.package_name), releases=buckets[lib])
        for lib in Library
    ]
