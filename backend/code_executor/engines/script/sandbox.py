"""
RestrictedPython sandbox for agent scripts.

The script body is compiled as one coroutine: top-level `await` is allowed,
and the whole module body is moved into `async def __script_main__()`.

Allowed: safe builtins plus list, dict, set, tuple, len, range, enumerate,
zip, sorted, min, max, sum, any, all, map, filter, reversed; json, math and re
as namespaces of their functions (never the modules themselves, whose public
attributes lead back to sys and os); datetime/date/time/timedelta; and context
objects (memory, log, sleep, gather).
`print` is captured into the execution output.

Blocked: open, exec, eval, compile, __import__, `_`-prefixed names and
attributes, async for / async with.

Every `while` body and every guarded iteration calls the deadline check, so
CPU-bound loops stop at the time budget even when they never suspend.
range, list and tuple come from RestrictedPython.Limits, so a single builtin
call cannot materialise or walk an unbounded range.
"""

import ast
import builtins
import json
import math
import operator
import re
from collections.abc import Callable, Iterable, Iterator
from datetime import date, datetime, time, timedelta
from types import SimpleNamespace
from typing import Any

from RestrictedPython import RestrictingNodeTransformer, compile_restricted
from RestrictedPython.Eval import default_guarded_getitem, default_guarded_getiter
from RestrictedPython.Guards import (
    full_write_guard,
    guarded_iter_unpack_sequence,
    guarded_unpack_sequence,
    safe_builtins,
    safer_getattr,
)
from RestrictedPython.Limits import limited_list, limited_range, limited_tuple

SCRIPT_ENTRYPOINT = "__script_main__"
DEADLINE_GUARD = "_deadline_"

_EXTRA_BUILTINS = (
    "dict",
    "set",
    "frozenset",
    "len",
    "enumerate",
    "zip",
    "sorted",
    "reversed",
    "min",
    "max",
    "sum",
    "abs",
    "any",
    "all",
    "map",
    "filter",
    "isinstance",
)

_JSON_FUNCTIONS = ("loads", "dumps")

_MATH_NAMES = (
    "ceil",
    "floor",
    "trunc",
    "sqrt",
    "exp",
    "log",
    "log2",
    "log10",
    "pow",
    "fabs",
    "fsum",
    "isclose",
    "isfinite",
    "isinf",
    "isnan",
    "gcd",
    "pi",
    "e",
    "tau",
    "inf",
    "nan",
)

_RE_FUNCTIONS = (
    "compile",
    "match",
    "search",
    "fullmatch",
    "findall",
    "finditer",
    "sub",
    "subn",
    "split",
    "escape",
    "error",
)

_RE_FLAGS = ("IGNORECASE", "I", "MULTILINE", "M", "DOTALL", "S", "VERBOSE", "X", "ASCII", "A")

_INPLACE_OPS: dict[str, Callable[[Any, Any], Any]] = {
    "+=": operator.iadd,
    "-=": operator.isub,
    "*=": operator.imul,
    "/=": operator.itruediv,
    "//=": operator.ifloordiv,
    "%=": operator.imod,
    "**=": operator.ipow,
    "<<=": operator.ilshift,
    ">>=": operator.irshift,
    "&=": operator.iand,
    "|=": operator.ior,
    "^=": operator.ixor,
    "@=": operator.imatmul,
}


class ScriptPolicy(RestrictingNodeTransformer):
    """
    Default RestrictedPython policy plus:
    - `await` expressions and `async def` helpers
    - the module body wrapped into one async entrypoint
    - a deadline check at the top of each `while` body
    """

    def visit_Await(self, node: ast.Await) -> ast.AST:
        return self.node_contents_visit(node)

    def visit_AsyncFunctionDef(self, node: ast.AsyncFunctionDef) -> ast.AST:
        return self.visit_FunctionDef(node)

    def visit_While(self, node: ast.While) -> ast.AST:
        node = super().visit_While(node)
        check = ast.Expr(
            value=ast.Call(
                func=ast.Name(id=DEADLINE_GUARD, ctx=ast.Load()),
                args=[],
                keywords=[],
            )
        )
        node.body.insert(0, ast.copy_location(check, node))
        return node

    def visit_Module(self, node: ast.Module) -> ast.AST:
        node = super().visit_Module(node)
        wrapper = ast.parse(f"async def {SCRIPT_ENTRYPOINT}():\n    pass\n").body[0]
        if node.body:
            wrapper.body = node.body
        node.body = [wrapper]
        ast.fix_missing_locations(node)
        return node


def compile_script(script: str, filename: str = "<script>") -> Any:
    """
    Compile script with ScriptPolicy. Raises SyntaxError on parse errors or
    policy violations.

    Returns a code object; exec(code, globals) defines the async entrypoint.
    """
    tree = compile(
        script,
        filename,
        "exec",
        flags=ast.PyCF_ONLY_AST | ast.PyCF_ALLOW_TOP_LEVEL_AWAIT,
        dont_inherit=True,
    )
    code = compile_restricted(tree, filename, "exec", policy=ScriptPolicy)
    if code is None:
        raise SyntaxError("RestrictedPython: compile failed")
    return code


def _inplacevar(op: str, x: Any, y: Any) -> Any:
    fn = _INPLACE_OPS.get(op)
    if fn is None:
        raise SyntaxError(f"Unsupported augmented assignment: {op}")
    return fn(x, y)


def _apply(func: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
    return func(*args, **kwargs)


def _make_guarded_getiter(
    check_deadline: Callable[[], None] | None,
) -> Callable[[Iterable[Any]], Iterator[Any]]:
    if check_deadline is None:
        return default_guarded_getiter

    def _getiter(ob: Iterable[Any]) -> Iterator[Any]:
        for item in default_guarded_getiter(ob):
            check_deadline()
            yield item

    return _getiter


def _limited_list(*args: Any) -> list[Any]:
    return limited_list(*args) if args else []


def _limited_tuple(*args: Any) -> tuple[Any, ...]:
    return limited_tuple(*args) if args else ()


def _make_safe_builtins() -> dict[str, Any]:
    """safe_builtins plus the container/utility builtins scripts need for data work."""
    safe = dict(safe_builtins)
    for name in _EXTRA_BUILTINS:
        safe.setdefault(name, getattr(builtins, name))
    safe["range"] = limited_range
    safe["list"] = _limited_list
    safe["tuple"] = _limited_tuple
    return safe


def _make_guard_globals(check_deadline: Callable[[], None] | None) -> dict[str, Any]:
    """Guards required by RestrictedPython's rewritten bytecode."""
    return {
        "_getattr_": safer_getattr,
        "_getiter_": _make_guarded_getiter(check_deadline),
        "_getitem_": default_guarded_getitem,
        "_iter_unpack_sequence_": guarded_iter_unpack_sequence,
        "_unpack_sequence_": guarded_unpack_sequence,
        "_inplacevar_": _inplacevar,
        "_apply_": _apply,
        "_write_": full_write_guard,
        DEADLINE_GUARD: check_deadline or (lambda: None),
    }


def _namespace(module: Any, names: Iterable[str]) -> SimpleNamespace:
    return SimpleNamespace(**{name: getattr(module, name) for name in names})


def _make_extra_globals() -> dict[str, Any]:
    """json, math and re as allow-listed namespaces; date/time types as-is."""
    regex = _namespace(re, _RE_FUNCTIONS)
    for flag in _RE_FLAGS:
        setattr(regex, flag, int(getattr(re, flag)))
    return {
        "json": _namespace(json, _JSON_FUNCTIONS),
        "math": _namespace(math, _MATH_NAMES),
        "re": regex,
        "datetime": datetime,
        "date": date,
        "time": time,
        "timedelta": timedelta,
    }


def build_restricted_globals(
    context_dict: dict[str, Any],
    *,
    check_deadline: Callable[[], None] | None = None,
) -> dict[str, Any]:
    """
    Build the globals dict for exec(compiled, globals): safe builtins, guards,
    extras (json, math, re, datetime) and the context (memory, log, _print_, ...).
    Only names listed here are reachable from the script.
    """
    safe = _make_safe_builtins()
    g: dict[str, Any] = {
        "__builtins__": safe,
        "__name__": "script",
        "__metaclass__": type,
    }
    g.update(_make_guard_globals(check_deadline))
    g.update(_make_extra_globals())
    g.update(context_dict)
    return g
