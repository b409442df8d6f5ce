"""
ScriptContext: memory, log, print, sleep, gather for one script execution.
"""

import logging
from typing import Any

from code_executor.memory.backend import MemoryBackend

from .modules import (
    OutputBuffer,
    make_log_module,
    make_memory_module,
    make_print_factory,
    make_timer_globals,
)


class ScriptContext:
    """
    Injects memory, log, print, sleep and gather into the script namespace.
    Owns the output buffer; build a new context for every execution.
    """

    def __init__(
        self,
        *,
        backend: MemoryBackend,
        logger: logging.Logger | None = None,
        log_extra: dict[str, Any] | None = None,
    ) -> None:
        self.output = OutputBuffer()
        self.memory = make_memory_module(backend=backend)
        self.log = make_log_module(
            buffer=self.output, logger_instance=logger, extra=log_extra
        )

    def to_dict(self) -> dict[str, Any]:
        """Namespace for exec(compiled, globals): memory, log, _print_, sleep, gather."""
        return {
            "memory": self.memory,
            "log": self.log,
            "_print_": make_print_factory(self.output),
            **make_timer_globals(),
        }
