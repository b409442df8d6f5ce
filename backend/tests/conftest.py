from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient

from code_executor.api.deps import get_code_executor
from code_executor.core.memory import reset_memory_backend
from code_executor.engines import CodeExecutor
from code_executor.main import app
from code_executor.memory import Entity, Graph, GraphStore, InMemoryBackend


def make_records(count: int = 50) -> Graph:
    """Record_001..Record_{count}, type TestRecord, one observation 'count: 0'."""
    return Graph(
        entities=[
            Entity(
                name=f"Record_{i:03d}",
                entity_type="TestRecord",
                observations=["count: 0"],
            )
            for i in range(1, count + 1)
        ]
    )


@pytest.fixture
def store() -> GraphStore:
    return GraphStore(make_records())


@pytest.fixture
def backend(store: GraphStore) -> InMemoryBackend:
    return InMemoryBackend(store)


@pytest.fixture
def client(backend: InMemoryBackend) -> Generator[TestClient, None, None]:
    app.dependency_overrides[get_code_executor] = lambda: CodeExecutor(backend)
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
    reset_memory_backend()
