from __future__ import annotations

import json
from pathlib import Path

import pytest

from src.core.settings import Settings, load_settings
from src.libs.errors import PageLoadError
from src.libs.providers.document import SoupDocument
from src.libs.providers.presenter import has_class
from src.observability.obs import api as obs
from src.observability.sinks.jsonl import JsonlSink
from src.ui.runner import FilterRunner


@pytest.mark.integration
def test_runner_filters_page_and_renders(sample_page: Path) -> None:
    report = FilterRunner(settings=Settings()).run(sample_page, "widget")

    assert report.available
    assert report.page_id == "index.html"
    assert report.query == "widget"
    assert report.matched_positions == [0]
    assert report.sections_matched == [True, False, False, False]
    assert not report.show_empty

    doc = SoupDocument.from_html(report.html)
    assert not has_class(doc.select_one("#alpha"), "filtered--hidden")
    assert has_class(doc.select_one("#beta"), "filtered--hidden")
    assert has_class(doc.select_one("#advanced"), "filtered--hidden")
    assert doc.attribute(doc.select_one("#search-box"), "value") == "widget"

    assert report.trace is not None
    report.trace.validate(strict=True)
    assert report.trace.trace_type == "filter"
    assert report.trace.aggregates["evaluation_count"] == 2  # attach + query
    assert "render" in report.trace.aggregates["stage_ms"]


@pytest.mark.integration
def test_runner_no_results(sample_page: Path) -> None:
    report = FilterRunner(settings=Settings()).run(sample_page, "zzz")
    assert report.matched_positions == []
    assert report.sections_matched == [False, False, False, False]
    assert report.show_empty
    doc = SoupDocument.from_html(report.html)
    assert has_class(doc.select_one("#search-empty-results"), "empty-results--shown")


@pytest.mark.integration
def test_runner_page_without_search_is_left_alone(tmp_path: Path) -> None:
    page = tmp_path / "plain.html"
    page.write_text("<ul><li class='item'>x</li></ul>", encoding="utf-8")

    report = FilterRunner(settings=Settings()).run(page, "x")
    assert not report.available
    assert "filtered--hidden" not in report.html
    assert report.trace is not None
    assert "search.unavailable" in list(report.trace.iter_event_kinds())


@pytest.mark.integration
def test_runner_missing_page_raises(tmp_path: Path) -> None:
    with pytest.raises(PageLoadError):
        FilterRunner(settings=Settings()).run(tmp_path / "missing.html", "x")


@pytest.mark.integration
def test_runner_uses_settings_file_and_writes_trace(tmp_path: Path, sample_page: Path) -> None:
    (tmp_path / "config").mkdir()
    settings_path = tmp_path / "config" / "settings.yaml"
    settings_path.write_text(
        "paths:\n  logs_dir: logs\nclasses:\n  hidden: gone\n",
        encoding="utf-8",
    )
    settings = load_settings(settings_path)
    obs.set_sink(JsonlSink(settings.paths.logs_dir))

    report = FilterRunner(settings_path=settings_path).run(sample_page, "gamma")
    doc = SoupDocument.from_html(report.html)
    assert has_class(doc.select_one("#alpha"), "gone")
    assert not has_class(doc.select_one("#gamma"), "gone")

    lines = (tmp_path / "logs" / "traces.jsonl").read_text(encoding="utf-8").splitlines()
    assert len(lines) == 1
    assert json.loads(lines[0])["page_id"] == "index.html"
