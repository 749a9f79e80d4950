# src/open_pdf/report.py
from __future__ import annotations
import logging
from pathlib import Path
from typing import Optional

import typer

from open_pdf.errors import OpenPdfError, UsageError
from open_pdf.models import ExecutionOutcome

logger = logging.getLogger(__name__)

USAGE = "Usage: open-pdf <file> [page]"


def _error_line(message: str) -> None:
    typer.secho(f"Error: {message}", err=True, fg=typer.colors.RED)


def report(
    outcome: ExecutionOutcome,
    path: Optional[Path] = None,
    page: Optional[str] = None,
) -> int:
    """ExecutionOutcome を終了コードに変換。exit はしない（cli 側で一度だけ）。"""
    if outcome.ok:
        logger.debug("[SUCCESS] Opened %s at page %s.", path, page)
        logger.debug("[LOG] Program finished successfully.")
        return 0
    _error_line(outcome.describe())
    return 1


def report_error(exc: OpenPdfError) -> int:
    _error_line(str(exc))
    if isinstance(exc, UsageError):
        typer.echo(USAGE, err=True)
    return 1
