"""
ScriptExecutor: execute(script, context, timeout_ms) -> ExecutionResult.

Compiles with RestrictedPython (ScriptPolicy), runs the script body as one
asyncio task and races it against the time budget. On timer win the task is
cancelled; loops that never suspend are stopped by the deadline guards the
policy injects. Script faults never propagate: every run ends in exactly one
ExecutionResult (completed, failed or timed out) with the output captured so far.
"""

import asyncio
import logging
import time
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from code_executor.core.config import settings

from .context import ScriptContext
from .sandbox import SCRIPT_ENTRYPOINT, build_restricted_globals, compile_script

_log = logging.getLogger(__name__)

# How long a cancelled task may take to unwind before it is abandoned.
_CANCEL_GRACE_SECONDS = 1.0


class ScriptTimeoutError(TimeoutError):
    """Raised inside the script when its time budget is exhausted."""

    pass


class ExecutionResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool
    output: list[str] = Field(default_factory=list)
    error: str | None = None
    elapsed_ms: float = Field(alias="elapsedMs")


class _Deadline:
    """Wall-clock budget shared by the timer race and the in-script guards."""

    def __init__(self, timeout_ms: int) -> None:
        self.timeout_ms = timeout_ms
        self._expires_at = time.monotonic() + timeout_ms / 1000
        self.expired = False

    def remaining(self) -> float:
        return max(0.0, self._expires_at - time.monotonic())

    def check(self) -> None:
        if self.expired or time.monotonic() >= self._expires_at:
            self.expired = True
            raise ScriptTimeoutError(self.message())

    def message(self) -> str:
        return f"Script execution timed out after {self.timeout_ms}ms"


def describe_error(exc: BaseException) -> str:
    """Human-readable one-line description: 'ExceptionType: message'."""
    if isinstance(exc, SyntaxError):
        if exc.args and isinstance(exc.args[0], (tuple, list)):
            return "SyntaxError: " + "; ".join(str(m) for m in exc.args[0])
        if exc.lineno:
            return f"SyntaxError: {exc.msg} (line {exc.lineno})"
        return f"SyntaxError: {exc.msg}"
    message = str(exc)
    name = type(exc).__name__
    return f"{name}: {message}" if message else name


def resolve_timeout_ms(timeout_ms: int | None) -> int:
    """Default to SCRIPT_EXEC_TIMEOUT_MS; cap at SCRIPT_MAX_TIMEOUT_MS."""
    if timeout_ms is None:
        timeout_ms = settings.SCRIPT_EXEC_TIMEOUT_MS
    if timeout_ms <= 0:
        raise ValueError("timeout_ms must be positive")
    return min(int(timeout_ms), settings.SCRIPT_MAX_TIMEOUT_MS)


async def _cancel(task: "asyncio.Task[Any]") -> None:
    task.cancel()
    await asyncio.wait({task}, timeout=_CANCEL_GRACE_SECONDS)
    if not task.done():
        _log.warning("Script task did not stop within %.1fs after cancel", _CANCEL_GRACE_SECONDS)
    elif not task.cancelled():
        task.exception()  # mark retrieved


class ScriptExecutor:
    """
    Run a Python script in a RestrictedPython sandbox with ScriptContext
    (memory, log, print, sleep, gather).
    """

    async def execute(
        self,
        script: str,
        context: ScriptContext,
        *,
        timeout_ms: int | None = None,
    ) -> ExecutionResult:
        """
        Compile, run and capture. Returns success with all output, or failure with
        the output captured before the fault/timeout. elapsed_ms is measured here.
        """
        budget = resolve_timeout_ms(timeout_ms)
        started = time.perf_counter()

        def _result(error: str | None = None) -> ExecutionResult:
            return ExecutionResult(
                success=error is None,
                output=context.output.lines,
                error=error,
                elapsed_ms=round((time.perf_counter() - started) * 1000, 3),
            )

        try:
            code = compile_script(script)
        except SyntaxError as e:
            _log.debug("Script rejected at compile time: %s", e)
            return _result(describe_error(e))

        deadline = _Deadline(budget)
        g = build_restricted_globals(context.to_dict(), check_deadline=deadline.check)
        try:
            exec(code, g)
            entrypoint = g[SCRIPT_ENTRYPOINT]
        except Exception as e:
            return _result(describe_error(e))

        task = asyncio.ensure_future(entrypoint())
        done, _ = await asyncio.wait({task}, timeout=deadline.remaining())
        if not done:
            await _cancel(task)
            _log.info("Script timed out after %dms (output lines: %d)", budget, len(context.output))
            return _result(deadline.message())

        if task.cancelled():
            return _result("CancelledError: script task was cancelled")
        exc = task.exception()
        if deadline.expired:
            _log.info("Script timed out after %dms (output lines: %d)", budget, len(context.output))
            return _result(deadline.message())
        if exc is not None:
            _log.debug("Script failed: %r", exc)
            return _result(describe_error(exc))

        result = _result()
        _log.debug("Script completed in %.1fms", result.elapsed_ms)
        return result
