# src/open_pdf/runner/subprocess_runner.py
from __future__ import annotations
import logging
import subprocess

from open_pdf.models import AutomationScript, ExecutionOutcome, FailureKind
from open_pdf.runner.base import ScriptExecutor

logger = logging.getLogger(__name__)

DEFAULT_OSASCRIPT = "/usr/bin/osascript"


class BlockingSubprocessExecutor(ScriptExecutor):
    """
    osascript を子プロセスで起動し、stdin からスクリプトを流し込んで終了まで待つ。
    タイムアウトなし（osascript / Preview 次第）。
    """

    name = "subprocess"

    def __init__(self, interpreter: str = DEFAULT_OSASCRIPT):
        self.interpreter = interpreter

    def execute(self, script: AutomationScript) -> ExecutionOutcome:
        cmd = [self.interpreter, "-"]  # "-" = stdin から読む
        logger.debug("[LOG] Creating process: %s", cmd)
        try:
            proc = subprocess.Popen(
                cmd,
                stdin=subprocess.PIPE,
                stderr=subprocess.PIPE,
            )
        except OSError as e:
            return ExecutionOutcome.failure(FailureKind.SPAWN, detail=str(e))

        # communicate: 書き込み → stdin close → 終了待ち
        _, err = proc.communicate(input=script.source.encode("utf-8"))
        code = proc.returncode
        logger.debug("[LOG] osascript exited with code: %s", code)
        if code == 0:
            return ExecutionOutcome.success()
        detail = err.decode("utf-8", errors="replace").strip() if err else ""
        return ExecutionOutcome.failure(FailureKind.INTERPRETER, detail=detail, status=code)
