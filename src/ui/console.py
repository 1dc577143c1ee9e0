from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import Iterator, TextIO

from ..observability.trace.context import TraceContext
from .events import SearchEvent
from .search_box import SearchComponent


# `:name` lines map to the discrete events; any other line is new query text.
COMMANDS: dict[str, SearchEvent] = {
    ":clear": SearchEvent.CLEAR,
    ":cancel": SearchEvent.CANCEL,
    ":enter": SearchEvent.CONFIRM,
    ":focus": SearchEvent.FOCUS,
    ":blur": SearchEvent.BLUR,
}
RENDER_COMMAND = ":render"


@dataclass
class ConsoleDriver:
    """Line-driven search box over stdin/stdout."""

    component: SearchComponent
    stdin: TextIO | None = None
    stdout: TextIO | None = None
    page_id: str = "unknown"
    navigated: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.stdin is None:
            self.stdin = sys.stdin
        if self.stdout is None:
            self.stdout = sys.stdout

    def serve(self) -> None:
        """Feed lines to the component until EOF, one event and one trace per line."""
        self._report()
        for line in self._iter_lines():
            ctx = TraceContext.new(trace_type="console_event", page_id=self.page_id)
            with TraceContext.activate(ctx):
                try:
                    self.handle_line(line.rstrip("\r\n"))
                finally:
                    ctx.finish()

    def handle_line(self, line: str) -> None:
        cmd = line.strip()
        if cmd == RENDER_COMMAND:
            self._write(self.component.document.render())
            return

        event = COMMANDS.get(cmd)
        if event is None:
            self.component.dispatch(SearchEvent.TEXT_CHANGED, line)
            self._report()
            return

        result = self.component.dispatch(event)
        if event is SearchEvent.CONFIRM:
            if result is None:
                self._write("(no single match with a link)")
            else:
                self.navigated.append(result)
                self._write(f"-> {result}")
            return
        if event in (SearchEvent.FOCUS, SearchEvent.BLUR):
            self._write("active" if self.component.active else "inactive")
            return
        self._report()

    def _report(self) -> None:
        engine = self.component.engine
        matched = engine.matched_entries()
        if engine.empty_result:
            self._write("no results")
            return
        self._write(f"{len(matched)}/{len(engine.index)} shown")
        for entry in matched:
            label = entry.values[0] if entry.values else "(no text)"
            self._write(f"  [{entry.position}] {label}")

    def _iter_lines(self) -> Iterator[str]:
        while True:
            line = self.stdin.readline()
            if line == "":
                break
            yield line

    def _write(self, text: str) -> None:
        self.stdout.write(text + "\n")
        self.stdout.flush()
