# src/open_pdf/runner/base.py
from __future__ import annotations
from abc import ABC, abstractmethod

from open_pdf.models import AutomationScript, ExecutionOutcome


class ScriptExecutor(ABC):
    """AppleScript を実行して結果を ExecutionOutcome で返す。プロセスは終了させない。"""

    name: str = "base"

    @abstractmethod
    def execute(self, script: AutomationScript) -> ExecutionOutcome:
        raise NotImplementedError
