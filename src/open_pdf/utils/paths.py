# src/open_pdf/utils/paths.py
from __future__ import annotations
import logging
import os
from pathlib import Path
from typing import Callable

from open_pdf.errors import DocumentNotFoundError, UsageError

logger = logging.getLogger(__name__)


def resolve_path(raw: str, cwd: str | Path) -> Path:
    """
    ユーザー指定のパスを絶対パスに正規化する。
    ~ を展開し、相対パスなら cwd 基準で結合、最後に . / .. とシンボリックリンクを解決。
    """
    expanded = Path(os.path.expanduser(raw))
    if not expanded.is_absolute():
        expanded = Path(cwd) / expanded
    # strict=False: 存在チェックは locate_document 側で行う
    return expanded.resolve(strict=False)


def locate_document(
    raw: str,
    cwd: str | Path,
    exists: Callable[[str], bool] = os.path.exists,
) -> Path:
    if not raw:
        raise UsageError("No file path provided.")
    path = resolve_path(raw, cwd)
    logger.debug("[LOG] Resolved absolute file path: %s", path)
    if not exists(str(path)):
        raise DocumentNotFoundError(path)
    return path
