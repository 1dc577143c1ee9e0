from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Hashable, Protocol


# Nodes are opaque to the engine: only the document adapter looks inside them.
Node = Any


class Document(Protocol):
    """Read-only view over a parsed page, addressed with CSS selectors."""

    def select(self, selector: str, *, within: Node | None = None) -> list[Node]:
        """All nodes matching `selector` in document order (empty on no match)."""
        ...

    def select_one(self, selector: str, *, within: Node | None = None) -> Node | None:
        ...

    def text(self, node: Node) -> str:
        """Rendered text of `node`, whitespace runs collapsed."""
        ...

    def attribute(self, node: Node, name: str) -> str | None: ...

    def set_attribute(self, node: Node, name: str, value: str) -> None: ...

    def data(self, node: Node, key: str) -> str | None:
        """Value of a dataset entry (`fooBar` -> `data-foo-bar`) or None."""
        ...

    def links(self, node: Node) -> list[str]:
        """Targets of navigable links inside `node`, in document order."""
        ...

    def node_key(self, node: Node) -> Hashable:
        """Stable identity of `node` for the lifetime of the document."""
        ...

    def render(self) -> str: ...


class Presenter(Protocol):
    """Reflects filter facts onto document nodes."""

    def set_hidden(self, node: Node, hidden: bool) -> None: ...

    def set_empty_shown(self, node: Node, shown: bool) -> None: ...

    def set_active(self, node: Node, active: bool) -> None: ...


@dataclass
class LoadedPage:
    page_id: str
    document: Document
    source_chars: int = 0
