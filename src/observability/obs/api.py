from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator, Protocol

from ..trace.context import TraceContext
from ..trace.envelope import EventRecord, SpanRecord, TraceEnvelope


class ObsSink(Protocol):
    def on_event(self, record: dict[str, Any]) -> None: ...

    def on_metric(self, record: dict[str, Any]) -> None: ...

    def on_span_end(self, record: dict[str, Any]) -> None: ...

    def on_trace_end(self, envelope: TraceEnvelope) -> None: ...


_SINK: ObsSink | None = None


def set_sink(sink: ObsSink | None) -> None:
    global _SINK
    _SINK = sink


def get_sink() -> ObsSink | None:
    return _SINK


def _span_id(ctx: TraceContext) -> str | None:
    cur = ctx.current_span()
    return cur.span_id if cur else None


def _event_record(ctx: TraceContext, ev: EventRecord) -> dict[str, Any]:
    return {
        "trace_id": ctx.trace_id,
        "span_id": _span_id(ctx),
        "ts": ev.ts,
        "kind": ev.kind,
        "attrs": ev.attrs,
    }


@contextmanager
def span(name: str, attrs: dict[str, Any] | None = None) -> Iterator[SpanRecord | None]:
    """Open a span on the active trace; without one this is a no-op."""
    ctx = TraceContext.current()
    if ctx is None:
        yield None
        return

    with ctx.start_span(name, attrs) as s:
        try:
            yield s
        finally:
            if _SINK is not None:
                _SINK.on_span_end({"trace_id": ctx.trace_id, **s.to_dict()})


def event(kind: str, attrs: dict[str, Any] | None = None) -> None:
    ctx = TraceContext.current()
    if ctx is None:
        return

    ev = ctx.add_event(kind, attrs)
    if _SINK is not None:
        _SINK.on_event(_event_record(ctx, ev))


def metric(name: str, value: float | int, attrs: dict[str, Any] | None = None) -> None:
    """Record a metric; it is also kept as a `metric` event on the span."""
    ctx = TraceContext.current()
    if ctx is None:
        return

    ev = ctx.add_event("metric", {"name": name, "value": value, **(attrs or {})})
    if _SINK is not None:
        _SINK.on_metric(
            {
                "trace_id": ctx.trace_id,
                "span_id": _span_id(ctx),
                "ts": ev.ts,
                "name": name,
                "value": value,
                "attrs": attrs or {},
            }
        )


@contextmanager
def with_stage(stage_name: str, attrs: dict[str, Any] | None = None) -> Iterator[SpanRecord | None]:
    """Wrap a stage in a `stage.<name>` span with start/end/error events."""
    stage_key = stage_name.strip()
    if stage_key.startswith("stage."):
        stage_key = stage_key[len("stage.") :]

    with span(f"stage.{stage_key}", {"stage": stage_key, **(attrs or {})}) as s:
        event("stage.start", {"stage": stage_key})
        try:
            yield s
        except Exception as e:
            event("stage.error", {"stage": stage_key, "message": str(e), "exc_type": type(e).__name__})
            raise
        finally:
            event("stage.end", {"stage": stage_key})
