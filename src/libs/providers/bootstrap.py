from __future__ import annotations

from ..registry import ProviderRegistry
from .document.soup_document import SoupPageLoader
from .presenter.css_classes import CssClassPresenter


def register_builtin_providers(registry: ProviderRegistry) -> None:
    """Register the page loader and presenter that ship with the package."""

    registry.register("document", "html.soup", SoupPageLoader)
    registry.register("presenter", "css.classes", CssClassPresenter)
