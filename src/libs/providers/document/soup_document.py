from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Hashable

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import PreformattedString
from soupsieve import SelectorSyntaxError

from ...errors import PageLoadError
from ...interfaces.document import LoadedPage, Node


_UPPER_RE = re.compile(r"[A-Z]")

# Elements whose boundaries render as a line break.
_BLOCK_TAGS = frozenset(
    {
        "address", "article", "aside", "blockquote", "dd", "details", "div", "dl", "dt",
        "figcaption", "figure", "footer", "form", "h1", "h2", "h3", "h4", "h5", "h6",
        "header", "hr", "li", "main", "nav", "ol", "p", "pre", "section", "summary",
        "table", "tbody", "td", "tfoot", "th", "thead", "tr", "ul",
    }
)
_HIDDEN_TAGS = frozenset({"script", "style", "template", "noscript"})


def dataset_attr(key: str) -> str:
    """Map a dataset key to its attribute name (`fooBar` -> `data-foo-bar`)."""
    k = key.strip()
    if k.startswith("data-"):
        return k
    return "data-" + _UPPER_RE.sub(lambda m: "-" + m.group(0).lower(), k)


def _rendered_strings(node: Tag, out: list[str]) -> None:
    """Collect text the way it renders: `<br>` and block boundaries break words."""
    for child in node.children:
        if isinstance(child, Tag):
            if child.name == "br":
                out.append(" ")
                continue
            if child.name in _HIDDEN_TAGS:
                continue
            block = child.name in _BLOCK_TAGS
            if block:
                out.append(" ")
            _rendered_strings(child, out)
            if block:
                out.append(" ")
        elif isinstance(child, NavigableString) and not isinstance(child, PreformattedString):
            out.append(str(child))


class SoupDocument:
    """`Document` over a BeautifulSoup tree; nodes are `bs4.Tag` objects."""

    def __init__(self, soup: BeautifulSoup) -> None:
        self.soup = soup

    @classmethod
    def from_html(cls, html: str, *, parser: str = "html.parser") -> "SoupDocument":
        return cls(BeautifulSoup(html, parser))

    def select(self, selector: str, *, within: Node | None = None) -> list[Node]:
        if not selector or not selector.strip():
            return []
        root = self.soup if within is None else within
        try:
            return list(root.select(selector))
        except SelectorSyntaxError:
            # A malformed selector matches nothing.
            return []

    def select_one(self, selector: str, *, within: Node | None = None) -> Node | None:
        found = self.select(selector, within=within)
        return found[0] if found else None

    def text(self, node: Node) -> str:
        parts: list[str] = []
        _rendered_strings(node, parts)
        return " ".join("".join(parts).split())

    def attribute(self, node: Node, name: str) -> str | None:
        value = node.get(name)
        if value is None:
            return None
        if isinstance(value, list):
            return " ".join(value)
        return str(value)

    def set_attribute(self, node: Node, name: str, value: str) -> None:
        node[name] = value

    def data(self, node: Node, key: str) -> str | None:
        return self.attribute(node, dataset_attr(key))

    def links(self, node: Node) -> list[str]:
        return [str(a["href"]) for a in node.select("a[href]")]

    def node_key(self, node: Node) -> Hashable:
        return id(node)

    def render(self) -> str:
        return str(self.soup)


@dataclass
class SoupPageLoader:
    """Parse an HTML file into a `SoupDocument`."""

    parser: str = "html.parser"
    encoding: str = "utf-8"

    def load(self, path: str | Path) -> LoadedPage:
        p = Path(path)
        try:
            html = p.read_text(encoding=self.encoding)
        except FileNotFoundError as exc:
            raise PageLoadError(f"page not found: {p}") from exc
        except (OSError, UnicodeDecodeError) as exc:
            raise PageLoadError(f"page unreadable: {p} ({type(exc).__name__})") from exc
        return self.load_html(html, page_id=p.name)

    def load_html(self, html: str, *, page_id: str = "inline") -> LoadedPage:
        return LoadedPage(
            page_id=page_id,
            document=SoupDocument(BeautifulSoup(html, self.parser)),
            source_chars=len(html),
        )
