# src/open_pdf/page.py
from __future__ import annotations
import logging

from open_pdf.errors import InvalidPageError

logger = logging.getLogger(__name__)

DEFAULT_PAGE = "1"
_DIGITS = frozenset("0123456789")


def sanitize_page(raw: str | None = DEFAULT_PAGE) -> str:
    """
    ページ指定から ASCII の数字だけを残す。
    "-5" は "5" になる（符号は捨てる）。数字が一つも残らなければ InvalidPageError。
    上限チェックはしない（範囲外は Preview 側に任せる）。
    """
    if raw is None:
        raw = DEFAULT_PAGE
    page = "".join(ch for ch in raw if ch in _DIGITS)
    if not page:
        raise InvalidPageError(raw)
    logger.debug("[LOG] Sanitized page number: '%s'", page)
    return page
