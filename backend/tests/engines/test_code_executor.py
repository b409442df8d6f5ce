"""Unit tests for engines.executor.CodeExecutor."""

import asyncio

from code_executor.engines import CodeExecutor
from code_executor.memory import GraphStore, InMemoryBackend


def test_execute_blocking(backend: InMemoryBackend) -> None:
    res = CodeExecutor(backend).execute("print('ok')")
    assert res.success is True
    assert res.output == ["ok"]


def test_aexecute_inside_running_loop(backend: InMemoryBackend) -> None:
    res = asyncio.run(CodeExecutor(backend).aexecute("await sleep(0)\nprint(1 + 1)"))
    assert res.output == ["2"]


def test_each_request_gets_fresh_output(backend: InMemoryBackend) -> None:
    executor = CodeExecutor(backend)
    executor.execute("print('first')")
    assert executor.execute("print('second')").output == ["second"]


def test_timeout_passed_through(backend: InMemoryBackend) -> None:
    res = CodeExecutor(backend).execute("while True:\n    pass\n", timeout_ms=30)
    assert res.error == "Script execution timed out after 30ms"


def test_record_count(backend: InMemoryBackend) -> None:
    assert CodeExecutor(backend).record_count() == 50


def test_record_count_empty_store() -> None:
    assert CodeExecutor(InMemoryBackend(GraphStore())).record_count() == 0


def test_record_count_failure_returns_zero(store: GraphStore) -> None:
    class Broken(InMemoryBackend):
        async def read_graph(self) -> dict:
            raise RuntimeError("down")

    assert CodeExecutor(Broken(store)).record_count() == 0
