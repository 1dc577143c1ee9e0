from __future__ import annotations

from ...libs.interfaces.document import Document
from .indexer import build_index
from .matcher import FilterEngine
from .models import FilterConfig
from .sections import DEFAULT_HEADING_SELECTOR, DEFAULT_TITLE_SELECTOR, build_sections


def build_engine(
    document: Document,
    config: FilterConfig,
    *,
    heading_selector: str = DEFAULT_HEADING_SELECTOR,
    title_selector: str = DEFAULT_TITLE_SELECTOR,
) -> FilterEngine:
    """Index the page once and aggregate its sections."""
    index = build_index(
        document,
        config.item_selector,
        value_selector=config.value_selector,
        attribute_names=config.attribute_names,
    )
    sections = build_sections(
        document,
        config.section_selector,
        config.item_selector,
        index,
        heading_selector=heading_selector,
        title_selector=title_selector,
    )
    return FilterEngine(index=index, sections=sections)
