"""
Execute API: run one agent script against the memory tools.

Execution is blocking (CPU-bound scripts run until their deadline guard fires),
so it runs in a worker thread with its own event loop; the server loop keeps
accepting requests meanwhile.
"""

import asyncio
import logging
import time

from fastapi import APIRouter

from code_executor.api.deps import ExecutorDep
from code_executor.engines import render_text, to_response
from code_executor.schemas import (
    ExecuteRequest,
    ExecuteResponse,
    ExecuteTextResponse,
    RecordCount,
)

_log = logging.getLogger(__name__)

router = APIRouter(prefix="/execute", tags=["execute"])


@router.post("", response_model=ExecuteResponse)
async def execute_code(body: ExecuteRequest, executor: ExecutorDep) -> dict:
    """
    Run `code` once. Script failures and timeouts are reported in the body
    (success=false, error, partial output) with status 200.
    """
    result = await asyncio.to_thread(executor.execute, body.code, timeout_ms=body.timeout_ms)
    if not result.success:
        _log.info("Script execution failed: %s", result.error)
    return to_response(result)


@router.post("/text", response_model=ExecuteTextResponse)
async def execute_code_text(body: ExecuteRequest, executor: ExecutorDep) -> dict:
    """Same as POST /execute, rendered as a human-readable text block."""
    started = time.perf_counter()
    result = await asyncio.to_thread(executor.execute, body.code, timeout_ms=body.timeout_ms)
    total_ms = round((time.perf_counter() - started) * 1000, 3)
    return {"text": render_text(result, total_ms=total_ms), "isError": not result.success}


@router.get("/record-count", response_model=RecordCount)
async def record_count(executor: ExecutorDep) -> RecordCount:
    """Current entity count (debugging). Runs a fixed script through the engine."""
    count = await asyncio.to_thread(executor.record_count)
    return RecordCount(count=count)
