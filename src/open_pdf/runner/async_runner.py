# src/open_pdf/runner/async_runner.py
# NSAppleScript をバックグラウンドで実行し、上限付きで完了を待つ。
# 完了通知は Future 1 個（1 回だけ set）。ワーカーは daemon なのでタイムアウト後もプロセス終了を妨げない。
from __future__ import annotations
import logging
import threading
from concurrent.futures import Future, TimeoutError as FutureTimeout
from typing import Any, Optional, Protocol

from open_pdf.errors import ScriptCompileError, ScriptRunError
from open_pdf.models import AutomationScript, ExecutionOutcome, FailureKind
from open_pdf.runner.base import ScriptExecutor

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 5.0
ENGINE_NAME = "NSAppleScript"


class AppleScriptEngine(Protocol):
    def compile(self, source: str) -> Any: ...

    def run(self, compiled: Any) -> None: ...


class NSAppleScriptEngine:
    """pyobjc の NSAppleScript を使うエンジン（macOS のみ）。"""

    def _script_class(self) -> Any:
        try:
            from Foundation import NSAppleScript
        except ImportError as e:
            raise ScriptCompileError(
                f"In-process AppleScript engine is unavailable (pyobjc Foundation): {e}"
            ) from e
        return NSAppleScript

    def compile(self, source: str) -> Any:
        script = self._script_class().alloc().initWithSource_(source)
        if script is None:
            raise ScriptCompileError("NSAppleScript could not be created from source")
        ok, error = script.compileAndReturnError_(None)
        if not ok:
            raise ScriptCompileError(_error_message(error))
        return script

    def run(self, compiled: Any) -> None:
        result, error = compiled.executeAndReturnError_(None)
        if result is None:
            number = error.get("NSAppleScriptErrorNumber") if error else None
            raise ScriptRunError(_error_message(error), int(number) if number is not None else None)


def _error_message(error: Optional[Any]) -> str:
    if not error:
        return "unknown AppleScript error"
    return str(error.get("NSAppleScriptErrorMessage") or error)


class AsyncBoundedWaitExecutor(ScriptExecutor):
    name = "async"

    def __init__(self, engine: Optional[AppleScriptEngine] = None, timeout: float = DEFAULT_TIMEOUT):
        self.engine = engine if engine is not None else NSAppleScriptEngine()
        self.timeout = timeout

    def _worker(self, source: str, done: "Future[ExecutionOutcome]") -> None:
        # compile と execute は同じスレッドで（NSAppleScript はスレッドをまたがせない）
        try:
            compiled = self.engine.compile(source)
        except ScriptCompileError as e:
            done.set_result(ExecutionOutcome.failure(FailureKind.COMPILE, detail=str(e), via=ENGINE_NAME))
            return
        except Exception as e:
            done.set_result(ExecutionOutcome.failure(FailureKind.COMPILE, detail=repr(e), via=ENGINE_NAME))
            return
        try:
            self.engine.run(compiled)
        except ScriptRunError as e:
            done.set_result(
                ExecutionOutcome.failure(
                    FailureKind.INTERPRETER, detail=str(e), status=e.number, via=ENGINE_NAME
                )
            )
        except Exception as e:
            done.set_result(
                ExecutionOutcome.failure(FailureKind.INTERPRETER, detail=repr(e), via=ENGINE_NAME)
            )
        else:
            done.set_result(ExecutionOutcome.success())

    def execute(self, script: AutomationScript) -> ExecutionOutcome:
        done: "Future[ExecutionOutcome]" = Future()
        worker = threading.Thread(
            target=self._worker,
            args=(script.source, done),
            name="open-pdf-applescript",
            daemon=True,
        )
        logger.debug("[LOG] Dispatching AppleScript to background worker (wait %.1fs)", self.timeout)
        worker.start()
        try:
            outcome = done.result(timeout=self.timeout)
        except FutureTimeout:
            logger.debug("[LOG] No completion signal within %.1fs", self.timeout)
            return ExecutionOutcome.failure(
                FailureKind.TIMEOUT,
                detail=f"no completion signal after {self.timeout:g}s",
                via=ENGINE_NAME,
            )
        logger.debug("[LOG] Background AppleScript finished: ok=%s", outcome.ok)
        return outcome
