# src/open_pdf/script.py
from __future__ import annotations
import logging
from pathlib import Path

from open_pdf.errors import InvalidPageError, ScriptInjectionError
from open_pdf.models import AutomationScript

logger = logging.getLogger(__name__)

VIEWER_APP = "Preview"

# Preview の「ページへ移動…」は ⌥⌘G
SCRIPT_TEMPLATE = """\
tell application "{app}"
    activate
    open POSIX file "{path}"
    tell front document
        tell application "System Events"
            keystroke "g" using {{option down, command down}} -- Go to Page…
            delay {dialog_delay}
            keystroke "{page}"
            delay {typing_delay}
            keystroke return
        end tell
    end tell
end tell
"""


def escape_applescript_string(value: str) -> str:
    """
    AppleScript の文字列リテラルに埋め込めるようにエスケープする。
    \\ と " はエスケープ、制御文字（改行含む）は安全に埋め込めないので拒否。
    """
    out = []
    for ch in value:
        if ch == "\\" or ch == '"':
            out.append("\\" + ch)
        elif ord(ch) < 0x20 or ord(ch) == 0x7F:
            raise ScriptInjectionError(
                f"Path contains a control character (U+{ord(ch):04X}) "
                f"that cannot be embedded in AppleScript: {value!r}"
            )
        else:
            out.append(ch)
    return "".join(out)


def _format_delay(seconds: float) -> str:
    text = f"{float(seconds):.3f}".rstrip("0").rstrip(".")
    return text or "0"


def build_script(
    path: Path,
    page: str,
    *,
    dialog_delay: float = 0.5,
    typing_delay: float = 0.2,
) -> AutomationScript:
    if not page or not page.isascii() or not page.isdigit():
        raise InvalidPageError(page)
    source = SCRIPT_TEMPLATE.format(
        app=VIEWER_APP,
        path=escape_applescript_string(str(path)),
        page=page,
        dialog_delay=_format_delay(dialog_delay),
        typing_delay=_format_delay(typing_delay),
    )
    logger.debug("[LOG] Synthesized AppleScript:\n%s", source)
    return AutomationScript(source=source, path=Path(path), page=page)
