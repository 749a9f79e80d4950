# src/open_pdf/models.py
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional


class FailureKind(str, Enum):
    SPAWN = "spawn"
    COMPILE = "compile"
    INTERPRETER = "interpreter"
    TIMEOUT = "timeout"


@dataclass(frozen=True)
class AutomationScript:
    source: str
    path: Path
    page: str


@dataclass(frozen=True)
class ExecutionOutcome:
    ok: bool
    kind: Optional[FailureKind] = None
    status: Optional[int] = None
    detail: str = ""
    # 失敗を報告した実行系（osascript / NSAppleScript）
    via: str = "osascript"

    @classmethod
    def success(cls) -> "ExecutionOutcome":
        return cls(ok=True)

    @classmethod
    def failure(
        cls,
        kind: FailureKind,
        detail: str = "",
        status: int | None = None,
        via: str = "osascript",
    ) -> "ExecutionOutcome":
        return cls(ok=False, kind=kind, status=status, detail=detail, via=via)

    def describe(self) -> str:
        """1行の診断メッセージ。"""
        if self.ok:
            return "osascript executed successfully."
        if self.kind is FailureKind.SPAWN:
            msg = "Failed to run osascript process"
        elif self.kind is FailureKind.COMPILE:
            msg = "Failed to compile AppleScript"
        elif self.kind is FailureKind.TIMEOUT:
            msg = "AppleScript did not finish before the wait timed out"
        elif self.status is not None and self.via == "osascript":
            msg = f"osascript failed with exit code {self.status}"
        elif self.status is not None:
            msg = f"{self.via} failed with AppleScript error {self.status}"
        else:
            msg = "AppleScript execution failed"
        return f"{msg}: {self.detail}" if self.detail else msg
