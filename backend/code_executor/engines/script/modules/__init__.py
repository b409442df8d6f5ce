"""
Script context modules: memory, log, output capture, timers.
"""

from code_executor.engines.script.modules.log import make_log_module
from code_executor.engines.script.modules.memory import make_memory_module
from code_executor.engines.script.modules.output import (
    OutputBuffer,
    format_value,
    make_print_factory,
)
from code_executor.engines.script.modules.timers import make_timer_globals

__all__ = [
    "OutputBuffer",
    "format_value",
    "make_log_module",
    "make_memory_module",
    "make_print_factory",
    "make_timer_globals",
]
