from __future__ import annotations

import io
import sys
from pathlib import Path

import pytest

from src.core.settings import Settings
from src.libs.providers.document import SoupDocument
from src.libs.providers.presenter import CssClassPresenter
from src.observability.obs import api as obs
from src.ui import SearchComponent
from src.ui.console import ConsoleDriver
from src.ui.entry import serve_console


def _driver(sample_html: str, script: str) -> tuple[ConsoleDriver, io.StringIO]:
    doc = SoupDocument.from_html(sample_html)
    comp = SearchComponent.attach(doc, CssClassPresenter())
    assert comp is not None
    out = io.StringIO()
    return ConsoleDriver(component=comp, stdin=io.StringIO(script), stdout=out), out


def test_console_reports_matches_per_line(sample_html: str) -> None:
    driver, out = _driver(sample_html, "widget\nzzz\n:clear\n")
    driver.serve()

    lines = out.getvalue().splitlines()
    assert lines[0] == "4/4 shown"
    assert "1/4 shown" in lines
    assert "  [0] alpha widget" in lines
    assert "no results" in lines
    assert lines[-5:] == [
        "4/4 shown",
        "  [0] alpha widget",
        "  [1] beta gadget",
        "  [2] gamma tool",
        "  [3] delta's thing",
    ]


def test_console_confirm_focus_and_render(sample_html: str) -> None:
    driver, out = _driver(sample_html, ":focus\nbeta\n:enter\n:blur\n:cancel\n:enter\n:render\n")
    driver.serve()

    text = out.getvalue()
    assert "-> /beta.html" in text
    assert "(no single match with a link)" in text
    assert driver.navigated == ["/beta.html"]
    lines = text.splitlines()
    assert lines[5] == "active"
    assert lines[lines.index("-> /beta.html") + 1] == "active"
    assert 'id="search-box"' in text
    assert driver.component.value == ""


def test_console_line_keeps_inner_spacing(sample_html: str) -> None:
    driver, _ = _driver(sample_html, "  alpha   widget  \n")
    driver.serve()
    assert driver.component.value == "  alpha   widget  "
    assert [e.position for e in driver.component.visible_entries()] == [0]


def test_console_traces_each_line_separately(sample_html: str, mocker) -> None:
    sink = mocker.Mock()
    obs.set_sink(sink)
    driver, _ = _driver(sample_html, "gamma\n:enter\nzzz\n")
    driver.page_id = "index.html"
    driver.serve()

    envelopes = [c.args[0] for c in sink.on_trace_end.call_args_list]
    assert [e.trace_type for e in envelopes] == ["console_event"] * 3
    assert len({e.trace_id for e in envelopes}) == 3
    assert [e.aggregates["evaluation_count"] for e in envelopes] == [1, 0, 1]
    assert all(e.page_id == "index.html" for e in envelopes)


def test_console_streams_resolved_when_driver_is_built(
    sample_html: str, monkeypatch: pytest.MonkeyPatch
) -> None:
    fake_in, fake_out = io.StringIO("beta\n"), io.StringIO()
    monkeypatch.setattr(sys, "stdin", fake_in)
    monkeypatch.setattr(sys, "stdout", fake_out)

    comp = SearchComponent.attach(SoupDocument.from_html(sample_html), CssClassPresenter())
    assert comp is not None
    ConsoleDriver(component=comp).serve()

    assert "1/4 shown" in fake_out.getvalue().splitlines()


def test_serve_console_uses_current_stdout(
    sample_page: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    fake_in, fake_out = io.StringIO("zzz\n"), io.StringIO()
    monkeypatch.setattr(sys, "stdin", fake_in)
    monkeypatch.setattr(sys, "stdout", fake_out)

    assert serve_console(sample_page, Settings()) == 0
    assert fake_out.getvalue().splitlines()[-1] == "no results"
