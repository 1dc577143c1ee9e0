from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, field
import contextvars
import time
import traceback
import uuid
from typing import Any, Iterator

from .envelope import (
    EventRecord,
    SpanRecord,
    TraceEnvelope,
    compute_aggregates,
    new_event,
    new_span,
)


_CTX: contextvars.ContextVar["TraceContext | None"] = contextvars.ContextVar(
    "trace_context", default=None
)


def _now() -> float:
    return time.time()


def _new_id(prefix: str) -> str:
    return f"{prefix}_{uuid.uuid4().hex}"


@dataclass
class TraceContext:
    """Collects spans and events for one filter run or console session."""

    trace_id: str
    start_ts: float
    trace_type: str = "unknown"
    page_id: str = "unknown"
    _spans: dict[str, SpanRecord] = field(default_factory=dict)
    _stack: list[str] = field(default_factory=list)
    _order: list[str] = field(default_factory=list)
    _trace_events: list[EventRecord] = field(default_factory=list)

    @classmethod
    def new(
        cls,
        trace_id: str | None = None,
        *,
        trace_type: str = "unknown",
        page_id: str = "unknown",
    ) -> "TraceContext":
        return cls(
            trace_id=trace_id or _new_id("trace"),
            trace_type=trace_type,
            page_id=page_id,
            start_ts=_now(),
        )

    @classmethod
    def current(cls) -> "TraceContext | None":
        return _CTX.get()

    @classmethod
    @contextmanager
    def activate(cls, ctx: "TraceContext") -> Iterator["TraceContext"]:
        token = _CTX.set(ctx)
        try:
            yield ctx
        finally:
            _CTX.reset(token)

    def current_span(self) -> SpanRecord | None:
        if not self._stack:
            return None
        return self._spans.get(self._stack[-1])

    @contextmanager
    def start_span(self, name: str, attrs: dict[str, Any] | None = None) -> Iterator[SpanRecord]:
        span_id = _new_id("span")
        s = new_span(
            span_id=span_id,
            name=name,
            parent_span_id=self._stack[-1] if self._stack else None,
            start_ts=_now(),
            attrs=dict(attrs or {}),
        )
        self._spans[span_id] = s
        self._stack.append(span_id)
        self._order.append(span_id)

        try:
            yield s
        except Exception as e:
            s.status = "error"
            self.add_event(
                "error",
                {
                    "exc_type": type(e).__name__,
                    "message": str(e),
                    "traceback": "".join(traceback.format_exc(limit=5)),
                },
            )
            raise
        finally:
            if self._stack and self._stack[-1] == span_id:
                self._stack.pop()
            s.end_ts = _now()

    def add_event(self, kind: str, attrs: dict[str, Any] | None = None) -> EventRecord:
        ev = new_event(kind, attrs, ts=_now())
        cur = self.current_span()
        if cur is None:
            self._trace_events.append(ev)
        else:
            cur.events.append(ev)
        return ev

    def finish(self) -> TraceEnvelope:
        # Close leaked spans so the envelope stays well-formed.
        if self._stack:
            self._trace_events.append(
                EventRecord(ts=_now(), kind="warn.span_leak", attrs={"open_span_count": len(self._stack)})
            )
            while self._stack:
                s = self._spans.get(self._stack.pop())
                if s and s.end_ts is None:
                    s.status = "error"
                    s.end_ts = _now()

        spans = [self._spans[sid] for sid in self._order if sid in self._spans]
        envelope = TraceEnvelope(
            trace_id=self.trace_id,
            trace_type=self.trace_type,
            status="error" if any(s.status == "error" for s in spans) else "ok",
            start_ts=self.start_ts,
            end_ts=_now(),
            page_id=self.page_id,
            spans=spans,
            events=list(self._trace_events),
        )
        envelope.aggregates = compute_aggregates(envelope)

        from ..obs import api as obs

        sink = obs.get_sink()
        if sink is not None:
            sink.on_trace_end(envelope)
        return envelope
