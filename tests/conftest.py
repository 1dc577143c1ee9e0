from __future__ import annotations

from pathlib import Path

import pytest

from src.observability.obs import api as obs


SAMPLE_PAGE = """
<html>
<body>
  <div class="search">
    <input id="search-box" type="text"
           data-items=".item" data-elements=".name"
           data-attributes="aliases, topicId" data-sections="section">
    <a href="#" id="search-box-clear">Clear</a>
  </div>
  <p id="search-empty-results">Nothing found.</p>
  <main>
    <section id="intro">
      <h2><span class="anchor">#</span><span class="section-title">Intro</span></h2>
      <div class="item" id="alpha" data-aliases="first, “Smart” Quote">
        <a href="/alpha.html"><span class="name">Alpha Widget</span></a>
      </div>
      <div class="item" id="beta" data-topic-id="gadget-42">
        <span class="name">Beta Gadget</span>
        <a href="/beta.html">one</a><a href="/beta-2.html">two</a>
      </div>
    </section>
    <section id="advanced">
      <h3>Advanced</h3>
      <div class="item" id="gamma"><span class="name">Gamma Tool</span></div>
    </section>
    <section id="untitled">
      <div class="item" id="delta"><span class="name">Delta’s Thing</span></div>
    </section>
    <section id="empty"><h2>Nothing Here</h2></section>
  </main>
</body>
</html>
"""


@pytest.fixture
def tmp_workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolated working directory for tests that write with relative paths."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def mock_clock(monkeypatch: pytest.MonkeyPatch) -> float:
    """Freeze time.time() to a deterministic value."""
    import time

    fixed = 1_700_000_000.0
    monkeypatch.setattr(time, "time", lambda: fixed)
    return fixed


@pytest.fixture
def sample_html() -> str:
    return SAMPLE_PAGE


@pytest.fixture
def sample_page(tmp_path: Path) -> Path:
    p = tmp_path / "index.html"
    p.write_text(SAMPLE_PAGE, encoding="utf-8")
    return p


@pytest.fixture(autouse=True)
def _reset_obs_sink():
    yield
    obs.set_sink(None)


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """
    Default behavior: only run unit tests.

    An explicit `-m ...` expression is respected as given.
    """
    if config.option.markexpr:
        return

    deselect: list[pytest.Item] = []
    keep: list[pytest.Item] = []

    for item in items:
        if item.get_closest_marker("integration") or item.get_closest_marker("e2e"):
            deselect.append(item)
        else:
            keep.append(item)

    if deselect:
        config.hook.pytest_deselected(items=deselect)
        items[:] = keep
