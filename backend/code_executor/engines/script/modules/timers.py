"""
Timer primitives for script engine: sleep and gather.

The only suspension points a script has besides memory calls.
"""

import asyncio
from typing import Any


async def sleep(seconds: float) -> None:
    """Suspend the script for `seconds` (negative values count as 0)."""
    await asyncio.sleep(max(0.0, float(seconds)))


async def gather(*aws: Any) -> list[Any]:
    """Run awaitables concurrently; results in argument order. Completion order is not guaranteed."""
    return list(await asyncio.gather(*aws))


def make_timer_globals() -> dict[str, Any]:
    return {"sleep": sleep, "gather": gather}
