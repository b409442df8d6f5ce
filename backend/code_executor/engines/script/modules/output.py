"""
Output capture for script engine: the buffer behind `print` and `log`.

Each write appends exactly one line at call time, so output order is the order
in which the script issued writes, regardless of awaits in between.
"""

import json
from typing import Any


def format_value(value: Any) -> str:
    """str as-is; dict/list/tuple as indented JSON; everything else via str()."""
    if isinstance(value, str):
        return value
    if isinstance(value, (dict, list, tuple)):
        try:
            return json.dumps(value, indent=2, default=str)
        except (TypeError, ValueError):
            return str(value)
    return str(value)


class OutputBuffer:
    """Ordered list of captured lines for one execution."""

    __slots__ = ("_lines",)

    def __init__(self) -> None:
        self._lines: list[str] = []

    def write(self, line: str) -> None:
        self._lines.append(line)

    def write_values(self, values: tuple[Any, ...], *, sep: str = " ", prefix: str = "") -> str:
        line = prefix + sep.join(format_value(v) for v in values)
        self._lines.append(line)
        return line

    @property
    def lines(self) -> list[str]:
        return list(self._lines)

    def __len__(self) -> int:
        return len(self._lines)


class _PrintCollector:
    """
    RestrictedPython print collector: `print(...)` becomes `_print._call_print(...)`.

    Lines go to the shared buffer; the collector also keeps its own print-only
    copy, so `printed` excludes `log.*` lines.
    """

    def __init__(self, buffer: OutputBuffer) -> None:
        self._buffer = buffer
        self._printed: list[str] = []

    def _call_print(self, *objects: Any, sep: str | None = None, **kwargs: Any) -> None:
        # end/file/flush are accepted and ignored: one call is one line.
        line = self._buffer.write_values(objects, sep=" " if sep is None else str(sep))
        self._printed.append(line)

    def __call__(self) -> str:
        """Value of the `printed` name: print output so far, one line per call."""
        return "\n".join(self._printed)


def make_print_factory(buffer: OutputBuffer) -> Any:
    """Build `_print_`: RestrictedPython calls it with _getattr_ at each scope entry."""
    collector = _PrintCollector(buffer)

    def _print_(_getattr: Any = None) -> _PrintCollector:
        return collector

    return _print_
