from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable


class ProviderRegistryError(RuntimeError):
    pass


class ProviderAlreadyRegisteredError(ProviderRegistryError):
    pass


class ProviderNotFoundError(ProviderRegistryError):
    pass


@dataclass
class ProviderRegistry:
    """(kind, provider_id) -> constructor for documents and presenters."""

    _ctors: dict[str, dict[str, Callable[..., Any]]] = field(default_factory=dict)

    def register(self, kind: str, provider_id: str, ctor: Callable[..., Any]) -> None:
        if not isinstance(kind, str) or not kind:
            raise ValueError("kind must be a non-empty string")
        if not isinstance(provider_id, str) or not provider_id:
            raise ValueError("provider_id must be a non-empty string")
        if not callable(ctor):
            raise TypeError("ctor must be callable")

        by_kind = self._ctors.setdefault(kind, {})
        if provider_id in by_kind:
            raise ProviderAlreadyRegisteredError(f"{kind}:{provider_id} already registered")
        by_kind[provider_id] = ctor

    def has(self, kind: str, provider_id: str) -> bool:
        return provider_id in self._ctors.get(kind, {})

    def provider_ids(self, kind: str) -> list[str]:
        return sorted(self._ctors.get(kind, {}))

    def create(self, kind: str, provider_id: str, **kwargs: Any) -> Any:
        try:
            ctor = self._ctors[kind][provider_id]
        except KeyError as exc:
            raise ProviderNotFoundError(f"{kind}:{provider_id} not found") from exc
        return ctor(**kwargs)
