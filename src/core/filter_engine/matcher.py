from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Sequence

from ...observability.obs import api as obs
from .models import IndexEntry, ItemIndex, Section, Visibility
from .normalize import split_query


VisibilityListener = Callable[[Visibility], None]


def entry_matches(entry: IndexEntry, query_parts: Sequence[str]) -> bool:
    """Every token must be a substring of at least one searched value."""
    searched = entry.searched_values()
    return all(any(q in v for v in searched) for q in query_parts)


def empty_result(index: ItemIndex) -> bool:
    return len(index) > 0 and not any(e.matched for e in index)


@dataclass
class FilterEngine:
    """
    Recomputes match state over a fixed index on every query.

    Each `evaluate` call is a full pass (no diffing against the previous
    query); afterwards the resulting `Visibility` is pushed to listeners.
    """

    index: ItemIndex
    sections: list[Section] = field(default_factory=list)
    listeners: list[VisibilityListener] = field(default_factory=list)
    last_query: str = ""
    evaluations: int = 0

    def subscribe(self, listener: VisibilityListener) -> None:
        if not callable(listener):
            raise TypeError("listener must be callable")
        self.listeners.append(listener)

    def evaluate(self, query: str) -> None:
        with obs.with_stage("evaluate"):
            query_parts = split_query(query)
            for entry in self.index:
                entry.matched = entry_matches(entry, query_parts)

            self.last_query = query
            self.evaluations += 1
            vis = self._visibility(query_parts)
            obs.event(
                "filter.evaluated",
                {
                    "token_count": len(query_parts),
                    "matched_count": len(vis.matched_positions),
                    "entry_count": len(self.index),
                    "show_empty": vis.show_empty,
                },
            )
            obs.metric("filter.matched_count", len(vis.matched_positions))

        for listener in self.listeners:
            listener(vis)

    def visibility(self) -> Visibility:
        return self._visibility(split_query(self.last_query))

    def matched_entries(self) -> list[IndexEntry]:
        return [e for e in self.index if e.matched]

    def section_matched(self, section: Section) -> bool:
        return section.matched

    @property
    def empty_result(self) -> bool:
        return empty_result(self.index)

    def _visibility(self, query_parts: list[str]) -> Visibility:
        return Visibility(
            query_parts=tuple(query_parts),
            entries_hidden=tuple(not e.matched for e in self.index),
            sections_hidden=tuple(not s.matched for s in self.sections),
            show_empty=empty_result(self.index),
        )
