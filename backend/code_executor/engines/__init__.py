"""
Engines: Script (RestrictedPython + asyncio), CodeExecutor, result reporter.
"""

from code_executor.engines.executor import CodeExecutor
from code_executor.engines.reporter import render_text, to_response
from code_executor.engines.script import ExecutionResult, ScriptContext, ScriptExecutor

__all__ = [
    "CodeExecutor",
    "ExecutionResult",
    "ScriptContext",
    "ScriptExecutor",
    "render_text",
    "to_response",
]
