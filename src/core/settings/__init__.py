from .loader import load_settings, load_settings_or_default
from .models import ClassSettings, PathsSettings, ProviderSettings, SearchSettings, SectionSettings, Settings

__all__ = [
    "load_settings",
    "load_settings_or_default",
    "Settings",
    "PathsSettings",
    "SearchSettings",
    "SectionSettings",
    "ClassSettings",
    "ProviderSettings",
]
