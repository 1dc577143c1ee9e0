from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from .models import Settings


def _load_yaml_mapping(p: Path) -> dict[str, Any]:
    with p.open("r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}
    if not isinstance(raw, dict):
        raise TypeError("settings root must be a mapping")
    return raw


def load_settings(path: str | Path) -> Settings:
    """
    Load `config/settings.yaml`.

    Relative paths in `paths.*` are resolved against the repo root, i.e. the
    parent of the `config/` directory.
    """
    p = Path(path).expanduser().resolve()
    root = p.parent.parent

    s = Settings.from_dict(_load_yaml_mapping(p))
    if not s.paths.logs_dir.is_absolute():
        s.paths.logs_dir = (root / s.paths.logs_dir).resolve()
    return s


def load_settings_or_default(path: str | Path) -> Settings:
    """Like `load_settings`, but a missing file yields the built-in defaults."""
    p = Path(path).expanduser()
    if not p.exists():
        return Settings()
    return load_settings(p)
