from __future__ import annotations

from dataclasses import dataclass


@dataclass
class FilterError(Exception):
    stage: str
    message: str

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"{self.stage}: {self.message}"


class PageLoadError(FilterError):
    def __init__(self, message: str | None = None) -> None:
        super().__init__(stage="page_load", message=message or "page could not be loaded")


class EventDispatchError(FilterError):
    def __init__(self, message: str | None = None) -> None:
        super().__init__(stage="dispatch", message=message or "event could not be dispatched")
