from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable


JsonDict = dict[str, Any]

TRACE_SCHEMA_VERSION = "trace.v1"
STAGE_PREFIX = "stage."

# Finite event vocabulary; strict validation rejects anything else.
ALLOWED_EVENT_KINDS: set[str] = {
    "stage.start",
    "stage.end",
    "stage.error",
    "index.built",
    "sections.built",
    "filter.evaluated",
    "search.event",
    "search.unavailable",
    "search.navigate",
    "metric",
    "error",
    "warn.span_leak",
}


def _check_event_kind(kind: str, *, strict: bool) -> str:
    k = (kind or "").strip()
    if strict and k not in ALLOWED_EVENT_KINDS:
        raise ValueError(f"invalid event.kind: {kind!r}")
    return k


def _check_span_name(name: str, *, strict: bool) -> None:
    if strict and not name.startswith(STAGE_PREFIX):
        raise ValueError(f"invalid span.name (must start with {STAGE_PREFIX!r}): {name!r}")


def new_event(
    kind: str,
    attrs: JsonDict | None = None,
    *,
    ts: float | None = None,
    strict: bool = False,
) -> "EventRecord":
    k = _check_event_kind(kind, strict=strict)
    return EventRecord(ts=0.0 if ts is None else ts, kind=k, attrs=dict(attrs or {}))


def new_span(
    *,
    span_id: str,
    name: str,
    parent_span_id: str | None,
    start_ts: float,
    attrs: JsonDict | None = None,
    strict: bool = False,
) -> "SpanRecord":
    _check_span_name(name, strict=strict)
    return SpanRecord(
        span_id=span_id,
        name=name,
        parent_span_id=parent_span_id,
        start_ts=start_ts,
        attrs=dict(attrs or {}),
    )


@dataclass(frozen=True)
class EventRecord:
    ts: float
    kind: str
    attrs: JsonDict = field(default_factory=dict)

    def to_dict(self) -> JsonDict:
        return {"ts": self.ts, "kind": self.kind, "attrs": self.attrs}


@dataclass
class SpanRecord:
    span_id: str
    name: str
    parent_span_id: str | None
    start_ts: float
    end_ts: float | None = None
    status: str = "ok"  # ok|error
    attrs: JsonDict = field(default_factory=dict)
    events: list[EventRecord] = field(default_factory=list)

    @property
    def duration_ms(self) -> float | None:
        if self.end_ts is None:
            return None
        return (self.end_ts - self.start_ts) * 1000.0

    def to_dict(self) -> JsonDict:
        return {
            "span_id": self.span_id,
            "name": self.name,
            "parent_span_id": self.parent_span_id,
            "start_ts": self.start_ts,
            "end_ts": self.end_ts,
            "status": self.status,
            "attrs": self.attrs,
            "events": [e.to_dict() for e in self.events],
        }


@dataclass
class TraceEnvelope:
    trace_id: str
    start_ts: float
    end_ts: float
    trace_type: str = "unknown"  # filter|session|console_event|unknown
    status: str = "ok"  # ok|error
    page_id: str = "unknown"
    spans: list[SpanRecord] = field(default_factory=list)
    events: list[EventRecord] = field(default_factory=list)  # trace-level events
    aggregates: JsonDict = field(default_factory=dict)
    schema_version: str = TRACE_SCHEMA_VERSION

    def to_dict(self) -> JsonDict:
        return {
            "schema_version": self.schema_version,
            "trace_id": self.trace_id,
            "trace_type": self.trace_type,
            "status": self.status,
            "start_ts": self.start_ts,
            "end_ts": self.end_ts,
            "page_id": self.page_id,
            "spans": [s.to_dict() for s in self.spans],
            "events": [e.to_dict() for e in self.events],
            "aggregates": self.aggregates,
        }

    def validate(self, *, strict: bool = True) -> None:
        if not self.trace_id:
            raise ValueError("trace_id missing")
        if strict:
            for span in self.spans:
                _check_span_name(span.name, strict=True)
                for ev in span.events:
                    _check_event_kind(ev.kind, strict=True)
            for ev in self.events:
                _check_event_kind(ev.kind, strict=True)

    def iter_events(self) -> Iterable[EventRecord]:
        for s in self.spans:
            yield from s.events
        yield from self.events

    def iter_event_kinds(self) -> Iterable[str]:
        for ev in self.iter_events():
            yield ev.kind


def compute_aggregates(envelope: TraceEnvelope) -> JsonDict:
    """Summaries the dashboards read without walking spans."""
    stage_ms: dict[str, float] = {}
    for s in envelope.spans:
        if not s.name.startswith(STAGE_PREFIX):
            continue
        d = s.duration_ms
        if d is None:
            continue
        key = s.name[len(STAGE_PREFIX) :]
        stage_ms[key] = stage_ms.get(key, 0.0) + d

    evaluations = [ev for ev in envelope.iter_events() if ev.kind == "filter.evaluated"]
    out: JsonDict = {
        "stage_ms": stage_ms,
        "evaluation_count": len(evaluations),
        "error_count": sum(1 for s in envelope.spans if s.status == "error"),
    }
    if evaluations:
        out["last_matched_count"] = evaluations[-1].attrs.get("matched_count")
    return out
