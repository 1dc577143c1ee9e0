from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable

from ..core.filter_engine import FilterConfig, FilterEngine, IndexEntry, Visibility, build_engine
from ..core.settings import SearchSettings, SectionSettings
from ..libs.interfaces.document import Document, Node, Presenter
from ..observability.obs import api as obs
from .events import EventDispatcher, SearchEvent


Navigate = Callable[[str], Any]


def filter_config_from_box(document: Document, box: Node, fallback: SearchSettings) -> FilterConfig | None:
    """
    Read the filter selectors from the search box's data attributes.

    `data-items`, `data-elements`, `data-attributes` and `data-sections` win
    over the configured fallbacks. Returns None without an item selector.
    """
    items = document.data(box, "items") or fallback.items
    if not items:
        return None
    return FilterConfig(
        item_selector=items,
        value_selector=document.data(box, "elements") or fallback.elements,
        attribute_names=FilterConfig.parse_attribute_names(
            document.data(box, "attributes") or fallback.attributes
        ),
        section_selector=document.data(box, "sections") or fallback.sections,
    )


@dataclass
class SearchComponent:
    """The search box wired to a filter engine and a presenter."""

    document: Document
    engine: FilterEngine
    presenter: Presenter
    component: Node
    box: Node
    empty_state: Node | None = None
    clear_buttons: list[Node] = field(default_factory=list)
    navigate: Navigate | None = None
    value: str = ""
    focused: bool = False
    dispatcher: EventDispatcher = field(default_factory=EventDispatcher)

    @classmethod
    def attach(
        cls,
        document: Document,
        presenter: Presenter,
        *,
        search: SearchSettings | None = None,
        sections: SectionSettings | None = None,
        navigate: Navigate | None = None,
    ) -> "SearchComponent | None":
        """
        Discover the search component and build the index behind it.

        Returns None (and wires nothing) when the page has no search
        component, no search box, or no item selector.
        """
        search = search or SearchSettings()
        sections = sections or SectionSettings()

        component = document.select_one(search.component)
        if component is None:
            obs.event("search.unavailable", {"missing": "component"})
            return None
        box = document.select_one(search.box)
        if box is None:
            obs.event("search.unavailable", {"missing": "box"})
            return None
        config = filter_config_from_box(document, box, search)
        if config is None:
            obs.event("search.unavailable", {"missing": "items"})
            return None

        engine = build_engine(
            document,
            config,
            heading_selector=sections.heading_selector,
            title_selector=sections.title_selector,
        )
        comp = cls(
            document=document,
            engine=engine,
            presenter=presenter,
            component=component,
            box=box,
            empty_state=document.select_one(search.empty_state),
            clear_buttons=document.select(search.clear),
            navigate=navigate,
            value=document.attribute(box, "value") or "",
        )
        comp._wire()
        # A pre-filled box filters right away.
        engine.evaluate(comp.value)
        return comp

    def _wire(self) -> None:
        self.engine.subscribe(self._present)
        self.dispatcher.register(SearchEvent.TEXT_CHANGED, self._on_text_changed)
        self.dispatcher.register(SearchEvent.CANCEL, self._on_cancel)
        self.dispatcher.register(SearchEvent.CONFIRM, self._on_confirm)
        self.dispatcher.register(SearchEvent.FOCUS, self._on_focus)
        self.dispatcher.register(SearchEvent.BLUR, self._on_blur)
        self.dispatcher.register(SearchEvent.CLEAR, self._on_clear)

    # --- public API ---
    def dispatch(self, event: SearchEvent | str, value: str | None = None) -> Any:
        obs.event("search.event", {"event": str(getattr(event, "value", event))})
        return self.dispatcher.dispatch(event, value)

    def click(self, node: Node) -> bool:
        """Route a click; only the clear buttons react."""
        key = self.document.node_key(node)
        if any(self.document.node_key(b) == key for b in self.clear_buttons):
            self.dispatch(SearchEvent.CLEAR)
            return True
        return False

    @property
    def active(self) -> bool:
        return self.focused or self.value.strip() != ""

    def visible_entries(self) -> list[IndexEntry]:
        return self.engine.matched_entries()

    # --- handlers ---
    def _set_value(self, value: str) -> None:
        self.value = value
        self.document.set_attribute(self.box, "value", value)

    def _on_text_changed(self, value: str | None) -> None:
        self._set_value(value or "")
        self.engine.evaluate(self.value)
        self._update_component()

    def _on_cancel(self, _value: str | None) -> None:
        self._set_value("")
        self.engine.evaluate(self.value)
        self._on_blur(None)

    def _on_confirm(self, _value: str | None) -> str | None:
        found = self.engine.matched_entries()
        if len(found) != 1:
            return None
        links = self.document.links(found[0].element)
        if not links:
            return None
        href = links[0]
        obs.event("search.navigate", {"href": href, "position": found[0].position})
        if self.navigate is not None:
            self.navigate(href)
        return href

    def _on_focus(self, _value: str | None) -> None:
        self.focused = True
        self._update_component()

    def _on_blur(self, _value: str | None) -> None:
        self.focused = False
        self._update_component()

    def _on_clear(self, _value: str | None) -> None:
        self._set_value("")
        self.engine.evaluate(self.value)
        self._on_blur(None)

    # --- presentation ---
    def _update_component(self) -> None:
        self.presenter.set_active(self.component, self.active)

    def _present(self, vis: Visibility) -> None:
        for entry, hidden in zip(self.engine.index, vis.entries_hidden):
            self.presenter.set_hidden(entry.element, hidden)
        for section, hidden in zip(self.engine.sections, vis.sections_hidden):
            self.presenter.set_hidden(section.element, hidden)
        if self.empty_state is not None and len(self.engine.index) > 0:
            self.presenter.set_empty_shown(self.empty_state, vis.show_empty)
