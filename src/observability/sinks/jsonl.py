from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from ..trace.envelope import TraceEnvelope


DEFAULT_FILE_NAME = "traces.jsonl"


class JsonlSink:
    """
    Append-only JSONL sink: one finished trace envelope per line.

    `path_or_dir` may name a `.jsonl` file or a directory (created on demand).
    """

    def __init__(self, path_or_dir: str | Path) -> None:
        p = Path(path_or_dir)
        self.path = p if p.suffix == ".jsonl" else p / DEFAULT_FILE_NAME
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def write(self, envelope: TraceEnvelope) -> None:
        line = json.dumps(envelope.to_dict(), ensure_ascii=True, default=str)
        with self.path.open("a", encoding="utf-8") as f:
            f.write(line + "\n")

    def read_all(self) -> list[dict[str, Any]]:
        if not self.path.exists():
            return []
        with self.path.open("r", encoding="utf-8") as f:
            return [json.loads(line) for line in f if line.strip()]

    # Span/event/metric records are already carried by the envelope.
    def on_event(self, record: dict[str, Any]) -> None:
        return

    def on_metric(self, record: dict[str, Any]) -> None:
        return

    def on_span_end(self, record: dict[str, Any]) -> None:
        return

    def on_trace_end(self, envelope: TraceEnvelope) -> None:
        self.write(envelope)
