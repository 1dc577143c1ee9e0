from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ..core.settings import Settings, load_settings_or_default
from ..libs.providers import register_builtin_providers
from ..libs.registry import ProviderRegistry
from ..observability.obs import api as obs
from ..observability.trace.context import TraceContext
from ..observability.trace.envelope import TraceEnvelope
from .events import SearchEvent
from .search_box import SearchComponent


@dataclass
class FilterReport:
    page_id: str
    available: bool
    query: str
    matched_positions: list[int] = field(default_factory=list)
    sections_matched: list[bool] = field(default_factory=list)
    show_empty: bool = False
    html: str = ""
    trace: TraceEnvelope | None = None


@dataclass
class Runtime:
    loader: Any
    presenter: Any


def build_runtime(settings: Settings, registry: ProviderRegistry | None = None) -> Runtime:
    if registry is None:
        registry = ProviderRegistry()
        register_builtin_providers(registry)
    loader = registry.create("document", settings.providers.document, parser=settings.providers.parser)
    presenter = registry.create(
        "presenter",
        settings.providers.presenter,
        hidden_class=settings.classes.hidden,
        empty_shown_class=settings.classes.empty_shown,
        active_class=settings.classes.active,
    )
    return Runtime(loader=loader, presenter=presenter)


@dataclass
class FilterRunner:
    """Filter one page file for one query and render the result."""

    settings_path: str | Path = "config/settings.yaml"
    settings: Settings | None = None

    def run(self, page_path: str | Path, query: str | None = None) -> FilterReport:
        settings = self.settings or load_settings_or_default(self.settings_path)
        page_id = Path(page_path).name
        ctx = TraceContext.new(trace_type="filter", page_id=page_id)
        with TraceContext.activate(ctx):
            runtime = build_runtime(settings)
            page = runtime.loader.load(page_path)
            comp = SearchComponent.attach(
                page.document,
                runtime.presenter,
                search=settings.search,
                sections=settings.sections,
            )
            if comp is not None and query is not None:
                comp.dispatch(SearchEvent.TEXT_CHANGED, query)

            with obs.with_stage("render"):
                html = page.document.render()

            report = FilterReport(page_id=page.page_id, available=comp is not None, query="", html=html)
            if comp is not None:
                vis = comp.engine.visibility()
                report.query = comp.value
                report.matched_positions = vis.matched_positions
                report.sections_matched = [not h for h in vis.sections_hidden]
                report.show_empty = vis.show_empty
            report.trace = ctx.finish()
        return report
