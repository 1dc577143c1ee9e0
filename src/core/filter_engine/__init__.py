from .builder import build_engine
from .indexer import build_index
from .matcher import FilterEngine, VisibilityListener, empty_result, entry_matches
from .models import FilterConfig, IndexEntry, ItemIndex, Section, Visibility
from .normalize import normalize_text, split_query
from .sections import build_sections, find_section_title

__all__ = [
    "FilterConfig",
    "IndexEntry",
    "ItemIndex",
    "Section",
    "Visibility",
    "FilterEngine",
    "VisibilityListener",
    "build_engine",
    "build_index",
    "build_sections",
    "find_section_title",
    "entry_matches",
    "empty_result",
    "normalize_text",
    "split_query",
]
