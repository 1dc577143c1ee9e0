from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path
from typing import Sequence, TextIO

from ..core.settings import Settings, load_settings_or_default
from ..libs.errors import PageLoadError
from ..observability.obs import api as obs
from ..observability.sinks.jsonl import JsonlSink
from ..observability.trace.context import TraceContext
from .console import ConsoleDriver
from .runner import build_runtime
from .search_box import SearchComponent


SETTINGS_ENV = "PAGE_FILTER_SETTINGS_PATH"


def build_observability(settings: Settings) -> JsonlSink:
    sink = JsonlSink(settings.paths.logs_dir)
    obs.set_sink(sink)
    return sink


def serve_console(
    page_path: str | Path,
    settings: Settings,
    *,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
) -> int:
    """
    Load and attach under one `session` trace, then serve the console.

    Each console line gets its own trace so nothing accumulates across a
    long session.
    """
    stdout = stdout if stdout is not None else sys.stdout
    page_id = Path(page_path).name
    ctx = TraceContext.new(trace_type="session", page_id=page_id)
    with TraceContext.activate(ctx):
        try:
            runtime = build_runtime(settings)
            page = runtime.loader.load(page_path)
            comp = SearchComponent.attach(
                page.document,
                runtime.presenter,
                search=settings.search,
                sections=settings.sections,
            )
        finally:
            ctx.finish()

    if comp is None:
        stdout.write("search unavailable on this page\n")
        return 0
    ConsoleDriver(component=comp, stdin=stdin, stdout=stdout, page_id=page_id).serve()
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Filter the items of an HTML page interactively.")
    parser.add_argument("page", help="path to the HTML page")
    parser.add_argument(
        "--settings",
        default=os.environ.get(SETTINGS_ENV, "config/settings.yaml"),
        help=f"settings file (default: ${SETTINGS_ENV} or config/settings.yaml)",
    )
    args = parser.parse_args(argv)

    settings = load_settings_or_default(args.settings)
    build_observability(settings)
    try:
        return serve_console(args.page, settings)
    except PageLoadError as e:
        sys.stderr.write(f"{e}\n")
        return 2
    finally:
        obs.set_sink(None)


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
