from __future__ import annotations

from dataclasses import dataclass

from ...interfaces.document import Node


def _classes(node: Node) -> list[str]:
    value = node.get("class")
    if value is None:
        return []
    if isinstance(value, str):
        return value.split()
    return list(value)


def toggle_class(node: Node, name: str, on: bool) -> None:
    classes = _classes(node)
    if on and name not in classes:
        classes.append(name)
    elif not on and name in classes:
        classes = [c for c in classes if c != name]
    else:
        return
    if classes:
        node["class"] = classes
    else:
        del node["class"]


def has_class(node: Node, name: str) -> bool:
    return name in _classes(node)


@dataclass
class CssClassPresenter:
    """Mirror visibility facts as CSS classes on `bs4.Tag` nodes."""

    hidden_class: str = "filtered--hidden"
    empty_shown_class: str = "empty-results--shown"
    active_class: str = "search--active"

    def set_hidden(self, node: Node, hidden: bool) -> None:
        toggle_class(node, self.hidden_class, hidden)

    def set_empty_shown(self, node: Node, shown: bool) -> None:
        toggle_class(node, self.empty_shown_class, shown)

    def set_active(self, node: Node, active: bool) -> None:
        toggle_class(node, self.active_class, active)
