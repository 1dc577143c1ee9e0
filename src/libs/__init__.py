"""Document interfaces, providers and the provider registry."""
from .registry import (
    ProviderAlreadyRegisteredError,
    ProviderNotFoundError,
    ProviderRegistry,
    ProviderRegistryError,
)

__all__ = [
    "ProviderRegistry",
    "ProviderRegistryError",
    "ProviderAlreadyRegisteredError",
    "ProviderNotFoundError",
]
