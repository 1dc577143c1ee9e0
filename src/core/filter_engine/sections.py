from __future__ import annotations

from ...libs.interfaces.document import Document, Node
from ...observability.obs import api as obs
from .models import ItemIndex, Section
from .normalize import normalize_text


DEFAULT_HEADING_SELECTOR = "h2, h3, h4"
DEFAULT_TITLE_SELECTOR = ".section-title"


def find_section_title(
    document: Document,
    section: Node,
    *,
    heading_selector: str = DEFAULT_HEADING_SELECTOR,
    title_selector: str = DEFAULT_TITLE_SELECTOR,
) -> str | None:
    """Text of the first heading in `section`, or of its explicit title element."""
    heading = document.select_one(heading_selector, within=section)
    if heading is None:
        return None
    explicit = document.select_one(title_selector, within=heading)
    return document.text(explicit if explicit is not None else heading)


def build_sections(
    document: Document,
    section_selector: str | None,
    item_selector: str,
    index: ItemIndex,
    *,
    heading_selector: str = DEFAULT_HEADING_SELECTOR,
    title_selector: str = DEFAULT_TITLE_SELECTOR,
) -> list[Section]:
    sections: list[Section] = []
    if not section_selector:
        return sections

    with obs.with_stage("section_build", {"section_selector": section_selector}):
        for container in document.select(section_selector):
            raw_title = find_section_title(
                document,
                container,
                heading_selector=heading_selector,
                title_selector=title_selector,
            )
            title = normalize_text(raw_title) if raw_title else None
            section = Section(element=container, title=title)
            for node in document.select(item_selector, within=container):
                entry = index.lookup(document.node_key(node))
                if entry is None:
                    continue
                section.items.append(entry)
                if title:
                    entry.sections.append(title)
            sections.append(section)

        obs.event(
            "sections.built",
            {
                "section_count": len(sections),
                "untitled_count": sum(1 for s in sections if s.title is None),
                "empty_count": sum(1 for s in sections if not s.items),
            },
        )
    return sections
