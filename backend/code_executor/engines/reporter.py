"""
Result reporter: ExecutionResult -> response record / text rendering.

Pure functions. A result that breaks the success/error invariant is an engine
bug, so it raises ValueError instead of being reported to the caller.
"""

from typing import Any

from code_executor.engines.script import ExecutionResult


def to_response(result: ExecutionResult) -> dict[str, Any]:
    """{success, output, error, elapsedMs}; error is None iff success."""
    if result.success != (result.error is None):
        raise ValueError("error must be set iff success is false")
    return {
        "success": result.success,
        "output": list(result.output),
        "error": result.error,
        "elapsedMs": result.elapsed_ms,
    }


def render_text(result: ExecutionResult, total_ms: float | None = None) -> str:
    """Human-readable block: status, timing, then the (partial) output indented."""
    body = to_response(result)
    output = [f"  {line}" for line in body["output"]]
    if body["success"]:
        lines = ["✓ Code executed successfully", f"Execution time: {body['elapsedMs']}ms"]
        if total_ms is not None:
            lines.append(f"Total time: {total_ms}ms")
        lines += ["", "Output:", *output]
    else:
        lines = [
            "✗ Code execution failed",
            f"Error: {body['error']}",
            f"Execution time: {body['elapsedMs']}ms",
            "",
            "Partial output:",
            *output,
        ]
    return "\n".join(lines)
