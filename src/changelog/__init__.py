"""
Release index stage: changelog token tree -> dated, grouped release index.

- segmentation: one section per release heading (level >= 2); level-1
  headings are document titles and reset to preamble
- classification: each section is attributed to the libraries its title names
  and yields one ReleaseNote per library
- grouping: one ReleaseGroup per library, fixed order, stable anchor IDs

No rendering, no network access, no Markdown validation. Recomputed in full
from (document text, date index) on every call.
"""

from .assembler import assemble_groups
from .classifier import ClassificationError, classify_section, classify_sections
from .config import ErrorPolicy, ReleaseIndexConfig
from .formatting import format_id
from .module import build_release_groups, run_release_index
from .segmenter import Segmenter, SegmenterState, segment
from .versions import build_date_lookup, extract_versions, find_release_date

__all__ = [
    "ClassificationError",
    "ErrorPolicy",
    "ReleaseIndexConfig",
    "Segmenter",
    "SegmenterState",
    "assemble_groups",
    "build_date_lookup",
    "build_release_groups",
    "classify_section",
    "classify_sections",
    "extract_versions",
    "find_release_date",
    "format_id",
    "run_release_index",
    "segment",
]
