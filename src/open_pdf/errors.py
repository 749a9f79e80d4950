# src/open_pdf/errors.py
# CLI が 1 行エラーで報告する例外群
from __future__ import annotations

from pathlib import Path


class OpenPdfError(Exception):
    """Base class for every failure the CLI reports."""


class UsageError(OpenPdfError):
    """Raised when the command line is missing the file argument."""


class DocumentNotFoundError(OpenPdfError):
    """Raised when the resolved document path does not exist."""

    def __init__(self, path: Path):
        super().__init__(f"File does not exist at resolved path: {path}")
        self.path = path


class InvalidPageError(OpenPdfError):
    """Raised when a page token has no digits left after sanitizing."""

    def __init__(self, raw: str):
        super().__init__(f"Invalid page number provided: '{raw}'")
        self.raw = raw


class ScriptInjectionError(OpenPdfError):
    """Raised when a value cannot be embedded in an AppleScript string literal."""


class ConfigError(OpenPdfError):
    """Raised for unknown config keys or values that fail validation."""


class ScriptCompileError(OpenPdfError):
    """Raised when the in-process AppleScript engine cannot build the script."""


class ScriptRunError(OpenPdfError):
    """Raised when the in-process engine ran the script and it failed."""

    def __init__(self, message: str, number: int | None = None):
        super().__init__(message)
        self.number = number
