from __future__ import annotations

import json
import os
import subprocess
import sys
from pathlib import Path

import pytest


def _write_settings_yaml(p: Path, *, logs_dir: Path) -> None:
    p.write_text(f"paths:\n  logs_dir: {logs_dir.as_posix()}\n", encoding="utf-8")


@pytest.mark.integration
def test_console_entry_session_writes_trace_jsonl(tmp_path: Path, sample_page: Path) -> None:
    logs_dir = tmp_path / "logs"
    settings_path = tmp_path / "settings.yaml"
    _write_settings_yaml(settings_path, logs_dir=logs_dir)

    env = dict(os.environ)
    env["PAGE_FILTER_SETTINGS_PATH"] = str(settings_path)

    repo_root = Path(__file__).resolve().parents[2]
    p = subprocess.run(
        [sys.executable, "-m", "src.ui.entry", str(sample_page)],
        input="gamma\n:enter\nzzz\n",
        capture_output=True,
        text=True,
        env=env,
        cwd=str(repo_root),
        timeout=60,
    )
    assert p.returncode == 0, p.stderr

    lines = p.stdout.splitlines()
    assert lines[0] == "4/4 shown"
    assert "1/4 shown" in lines
    assert "  [2] gamma tool" in lines
    assert "(no single match with a link)" in lines
    assert lines[-1] == "no results"

    records = [json.loads(x) for x in (logs_dir / "traces.jsonl").read_text(encoding="utf-8").splitlines()]
    assert [r["trace_type"] for r in records] == ["session", "console_event", "console_event", "console_event"]
    assert [r["aggregates"]["evaluation_count"] for r in records] == [1, 1, 0, 1]
    assert all(r["page_id"] == "index.html" for r in records)


@pytest.mark.integration
def test_console_entry_missing_page(tmp_path: Path) -> None:
    settings_path = tmp_path / "settings.yaml"
    _write_settings_yaml(settings_path, logs_dir=tmp_path / "logs")

    repo_root = Path(__file__).resolve().parents[2]
    p = subprocess.run(
        [sys.executable, "-m", "src.ui.entry", str(tmp_path / "nope.html"), "--settings", str(settings_path)],
        capture_output=True,
        text=True,
        cwd=str(repo_root),
        timeout=60,
    )
    assert p.returncode == 2
    assert "page_load" in p.stderr
