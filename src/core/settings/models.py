from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping


def _as_path(v: Any, default: Path) -> Path:
    if v is None:
        return default
    if isinstance(v, Path):
        return v
    if isinstance(v, str):
        return Path(v)
    raise TypeError(f"expected path-like value, got {type(v).__name__}")


def _as_str(d: Mapping[str, Any], key: str, default: str) -> str:
    v = d.get(key, default)
    if v is None:
        return default
    if not isinstance(v, str):
        raise TypeError(f"{key} must be str, got {type(v).__name__}")
    return v


def _as_opt_str(d: Mapping[str, Any], key: str) -> str | None:
    v = d.get(key)
    if v is None:
        return None
    if not isinstance(v, str):
        raise TypeError(f"{key} must be str, got {type(v).__name__}")
    return v or None


def _section(raw: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    v = raw.get(key)
    if v is None:
        return {}
    if not isinstance(v, Mapping):
        raise TypeError(f"{key} must be mapping, got {type(v).__name__}")
    return v


@dataclass
class PathsSettings:
    logs_dir: Path = Path("logs")

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "PathsSettings":
        return cls(logs_dir=_as_path(d.get("logs_dir"), cls.logs_dir))


@dataclass
class SearchSettings:
    """Where the search component lives, plus fallback filter selectors."""

    component: str = ".search"
    box: str = "#search-box"
    clear: str = "#search-box-clear, .search-box-clear"
    empty_state: str = "#search-empty-results"
    # Used when the search box does not carry data-items/... itself.
    items: str | None = None
    elements: str | None = None
    attributes: str | None = None
    sections: str | None = None

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "SearchSettings":
        return cls(
            component=_as_str(d, "component", cls.component),
            box=_as_str(d, "box", cls.box),
            clear=_as_str(d, "clear", cls.clear),
            empty_state=_as_str(d, "empty_state", cls.empty_state),
            items=_as_opt_str(d, "items"),
            elements=_as_opt_str(d, "elements"),
            attributes=_as_opt_str(d, "attributes"),
            sections=_as_opt_str(d, "sections"),
        )


@dataclass
class SectionSettings:
    heading_selector: str = "h2, h3, h4"
    title_selector: str = ".section-title"

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "SectionSettings":
        return cls(
            heading_selector=_as_str(d, "heading_selector", cls.heading_selector),
            title_selector=_as_str(d, "title_selector", cls.title_selector),
        )


@dataclass
class ClassSettings:
    hidden: str = "filtered--hidden"
    empty_shown: str = "empty-results--shown"
    active: str = "search--active"

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "ClassSettings":
        return cls(
            hidden=_as_str(d, "hidden", cls.hidden),
            empty_shown=_as_str(d, "empty_shown", cls.empty_shown),
            active=_as_str(d, "active", cls.active),
        )


@dataclass
class ProviderSettings:
    document: str = "html.soup"
    presenter: str = "css.classes"
    parser: str = "html.parser"

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "ProviderSettings":
        return cls(
            document=_as_str(d, "document", cls.document),
            presenter=_as_str(d, "presenter", cls.presenter),
            parser=_as_str(d, "parser", cls.parser),
        )


@dataclass
class Settings:
    paths: PathsSettings = field(default_factory=PathsSettings)
    search: SearchSettings = field(default_factory=SearchSettings)
    sections: SectionSettings = field(default_factory=SectionSettings)
    classes: ClassSettings = field(default_factory=ClassSettings)
    providers: ProviderSettings = field(default_factory=ProviderSettings)

    # Raw mapping kept for debugging.
    raw: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any] | None) -> "Settings":
        raw = dict(raw or {})
        return cls(
            paths=PathsSettings.from_dict(_section(raw, "paths")),
            search=SearchSettings.from_dict(_section(raw, "search")),
            sections=SectionSettings.from_dict(_section(raw, "sections")),
            classes=ClassSettings.from_dict(_section(raw, "classes")),
            providers=ProviderSettings.from_dict(_section(raw, "providers")),
            raw=raw,
        )
