"""
Script engine (Python, RestrictedPython, asyncio).

Exports: ScriptExecutor, ScriptContext, ExecutionResult, compile_script, build_restricted_globals.
"""

from .context import ScriptContext
from .executor import ExecutionResult, ScriptExecutor, ScriptTimeoutError
from .sandbox import build_restricted_globals, compile_script

__all__ = [
    "ExecutionResult",
    "ScriptContext",
    "ScriptExecutor",
    "ScriptTimeoutError",
    "compile_script",
    "build_restricted_globals",
]
