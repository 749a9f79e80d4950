# src/open_pdf/runner/factory.py
from __future__ import annotations

from open_pdf.config_store import Settings
from open_pdf.errors import ConfigError
from open_pdf.runner.async_runner import AsyncBoundedWaitExecutor
from open_pdf.runner.base import ScriptExecutor
from open_pdf.runner.subprocess_runner import BlockingSubprocessExecutor


def build_executor(settings: Settings) -> ScriptExecutor:
    if settings.strategy == "subprocess":
        return BlockingSubprocessExecutor(interpreter=settings.osascript)
    if settings.strategy == "async":
        return AsyncBoundedWaitExecutor(timeout=settings.timeout)
    raise ConfigError(f"Unknown execution strategy: {settings.strategy!r}")
