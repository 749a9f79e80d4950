from __future__ import annotations

import logging
import stat
from pathlib import Path
from typing import Callable, List

import pytest

from open_pdf.models import AutomationScript, ExecutionOutcome
from open_pdf.runner.base import ScriptExecutor


class RecordingExecutor(ScriptExecutor):
    name = "recording"

    def __init__(self, outcome: ExecutionOutcome | None = None):
        self.outcome = outcome or ExecutionOutcome.success()
        self.scripts: List[AutomationScript] = []

    def execute(self, script: AutomationScript) -> ExecutionOutcome:
        self.scripts.append(script)
        return self.outcome


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    cfg = tmp_path / "config"
    monkeypatch.setenv("OPEN_PDF_CONFIG_DIR", str(cfg))
    for name in ("OPEN_PDF_STRATEGY", "OPEN_PDF_TIMEOUT", "OPEN_PDF_OSASCRIPT", "OPEN_PDF_DEBUG"):
        monkeypatch.delenv(name, raising=False)
    return cfg


@pytest.fixture(autouse=True)
def reset_package_logger():
    yield
    pkg = logging.getLogger("open_pdf")
    for handler in list(pkg.handlers):
        pkg.removeHandler(handler)
    pkg.setLevel(logging.NOTSET)


@pytest.fixture()
def pdf_file(tmp_path: Path) -> Path:
    path = tmp_path / "docs" / "a.pdf"
    path.parent.mkdir()
    path.write_bytes(b"%PDF-1.4\n%%EOF\n")
    return path


@pytest.fixture()
def fake_osascript(tmp_path: Path) -> Callable[..., Path]:
    """stdin をファイルに保存して指定コードで終了する osascript の代役。"""

    def _create(exit_code: int = 0, stderr_text: str = "") -> Path:
        script = tmp_path / f"osascript-{exit_code}"
        capture = tmp_path / "captured.applescript"
        lines = ["#!/bin/sh", f'cat > "{capture}"']
        if stderr_text:
            lines.append(f"echo '{stderr_text}' >&2")
        lines.append(f"exit {exit_code}")
        script.write_text("\n".join(lines) + "\n")
        script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return script

    return _create


@pytest.fixture()
def captured_script(tmp_path: Path) -> Path:
    return tmp_path / "captured.applescript"
