from __future__ import annotations

from dataclasses import dataclass, field
from typing import Hashable, Iterator

from ...libs.interfaces.document import Node


@dataclass(eq=False)
class IndexEntry:
    """One searchable item of the page."""

    position: int
    element: Node
    values: tuple[str, ...] = ()
    sections: list[str] = field(default_factory=list)
    matched: bool = True

    def searched_values(self) -> list[str]:
        return [*self.values, *self.sections]


@dataclass(eq=False)
class Section:
    element: Node
    title: str | None = None
    items: list[IndexEntry] = field(default_factory=list)

    @property
    def matched(self) -> bool:
        return any(item.matched for item in self.items)


@dataclass
class ItemIndex:
    """Entries in discovery order plus the node -> position lookup table."""

    entries: list[IndexEntry] = field(default_factory=list)
    positions: dict[Hashable, int] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[IndexEntry]:
        return iter(self.entries)

    def __getitem__(self, position: int) -> IndexEntry:
        return self.entries[position]

    def add(self, key: Hashable, element: Node, values: list[str]) -> IndexEntry:
        entry = IndexEntry(position=len(self.entries), element=element, values=tuple(values))
        self.entries.append(entry)
        self.positions[key] = entry.position
        return entry

    def lookup(self, key: Hashable) -> IndexEntry | None:
        pos = self.positions.get(key)
        return None if pos is None else self.entries[pos]


@dataclass(frozen=True)
class FilterConfig:
    """Selectors that describe where items, values and sections live."""

    item_selector: str
    value_selector: str | None = None
    attribute_names: tuple[str, ...] = ()
    section_selector: str | None = None

    @staticmethod
    def parse_attribute_names(raw: str | None) -> tuple[str, ...]:
        if not raw:
            return ()
        return tuple(n.strip() for n in raw.split(",") if n.strip())


@dataclass(frozen=True)
class Visibility:
    """What the presentation layer should show after one evaluation."""

    query_parts: tuple[str, ...]
    entries_hidden: tuple[bool, ...]
    sections_hidden: tuple[bool, ...]
    show_empty: bool

    @property
    def matched_positions(self) -> list[int]:
        return [i for i, hidden in enumerate(self.entries_hidden) if not hidden]
