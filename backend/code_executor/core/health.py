"""
Health-check helpers for liveness and readiness probes.

Liveness:  is the process alive and not deadlocked?  (cheap, no I/O)
Readiness: can it serve traffic?  (memory backend answers a read)
"""

import asyncio
import logging

from code_executor.core.memory import get_memory_backend

logger = logging.getLogger(__name__)


def check_memory_backend() -> bool:
    """Ping the configured memory backend. Returns True if ok."""
    try:
        return asyncio.run(get_memory_backend().ping())
    except Exception:
        logger.warning("Memory backend check failed", exc_info=True)
        return False


def liveness_check() -> tuple[bool, list[str]]:
    """
    Lightweight liveness probe: confirms the Python process is responsive.
    Return format matches readiness_check for consistency.
    """
    return (True, [])


def readiness_check() -> tuple[bool, list[str]]:
    """
    Returns (ok, list of failure messages). Blocking: run it in a worker thread.
    """
    failures: list[str] = []

    if not check_memory_backend():
        failures.append("memory_backend")

    return (len(failures) == 0, failures)
