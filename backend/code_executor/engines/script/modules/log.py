"""
Log module for script engine: info, warn, error, debug.

Each call writes one captured output line (prefixed for warn/error/debug) and
forwards the same line to the service logger.
"""

import logging
from types import SimpleNamespace
from typing import Any

from code_executor.engines.script.modules.output import OutputBuffer

logger = logging.getLogger(__name__)

_PREFIXES = {
    logging.DEBUG: "[DEBUG] ",
    logging.INFO: "",
    logging.WARNING: "[WARN] ",
    logging.ERROR: "[ERROR] ",
}


def make_log_module(
    *,
    buffer: OutputBuffer,
    logger_instance: logging.Logger | None = None,
    extra: dict[str, Any] | None = None,
) -> Any:
    """Build the `log` object: info, warn, error, debug. extra is passed to logger as context."""
    log = logger_instance or logger
    ext = extra or {}

    def _log(level: int, *values: Any) -> None:
        line = buffer.write_values(values, prefix=_PREFIXES[level])
        if ext:
            log.log(level, "script: %s", line, extra=ext)
        else:
            log.log(level, "script: %s", line)

    def info(*values: Any) -> None:
        _log(logging.INFO, *values)

    def warn(*values: Any) -> None:
        _log(logging.WARNING, *values)

    def error(*values: Any) -> None:
        _log(logging.ERROR, *values)

    def debug(*values: Any) -> None:
        _log(logging.DEBUG, *values)

    return SimpleNamespace(info=info, warn=warn, error=error, debug=debug)
