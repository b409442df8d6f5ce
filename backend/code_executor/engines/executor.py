"""
Code executor: one entry point for transports.

Builds a fresh ScriptContext per request on the configured memory backend and
runs it through ScriptExecutor. The blocking variant runs a private event loop
so callers can hand it to a worker thread.
"""

import asyncio
import logging

from code_executor.engines.script import ExecutionResult, ScriptContext, ScriptExecutor
from code_executor.memory.backend import MemoryBackend

_log = logging.getLogger(__name__)

RECORD_COUNT_SCRIPT = "graph = await memory.read_graph()\nprint(len(graph['entities']))\n"


class CodeExecutor:
    """
    aexecute(code, timeout_ms=None) -> ExecutionResult
    execute(code, timeout_ms=None)  -> ExecutionResult (blocking)
    """

    def __init__(self, backend: MemoryBackend) -> None:
        self._backend = backend

    async def aexecute(self, code: str, *, timeout_ms: int | None = None) -> ExecutionResult:
        ctx = ScriptContext(backend=self._backend, logger=_log)
        return await ScriptExecutor().execute(code, ctx, timeout_ms=timeout_ms)

    def execute(self, code: str, *, timeout_ms: int | None = None) -> ExecutionResult:
        """Run on a new event loop. Must not be called from a running loop."""
        return asyncio.run(self.aexecute(code, timeout_ms=timeout_ms))

    def record_count(self) -> int:
        """Entity count via the engine (fixed script, first output line)."""
        result = self.execute(RECORD_COUNT_SCRIPT)
        if not result.success:
            _log.warning("record count script failed: %s", result.error)
            return 0
        try:
            return int(result.output[0]) if result.output else 0
        except ValueError:
            return 0
