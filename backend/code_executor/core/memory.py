"""
Shared memory backend for the service.

All executions go through this module so there is exactly one GraphStore
(in-memory mode) or one RemoteMemoryBackend (remote mode) per process.
"""

import logging
import threading

from code_executor.core.config import settings
from code_executor.memory.backend import (
    InMemoryBackend,
    MemoryBackend,
    RemoteMemoryBackend,
)
from code_executor.memory.loader import load_graph_file, make_demo_records
from code_executor.memory.store import GraphStore

_LOG = logging.getLogger(__name__)

_lock = threading.Lock()
_store: GraphStore | None = None
_backend: MemoryBackend | None = None


def get_graph_store() -> GraphStore:
    """Process-wide GraphStore, created empty on first use."""
    global _store
    if _store is not None:
        return _store
    with _lock:
        if _store is None:
            _store = GraphStore()
        return _store


def get_memory_backend() -> MemoryBackend:
    """Backend selected by MEMORY_BACKEND ("memory" or "remote")."""
    global _backend
    if _backend is not None:
        return _backend
    store = get_graph_store() if settings.MEMORY_BACKEND == "memory" else None
    with _lock:
        if _backend is None:
            if store is None:
                _LOG.info("Using remote memory backend at %s", settings.MEMORY_REMOTE_URL)
                _backend = RemoteMemoryBackend(
                    settings.MEMORY_REMOTE_URL, timeout=settings.MEMORY_REMOTE_TIMEOUT
                )
            else:
                _backend = InMemoryBackend(store)
        return _backend


def seed_graph_store(store: GraphStore | None = None) -> int:
    """
    Load initial contents: GRAPH_SEED_FILE if set, else GRAPH_SEED_RECORDS demo
    records. Returns the number of entities loaded (0 when nothing configured).
    """
    target = store or get_graph_store()
    if settings.GRAPH_SEED_FILE:
        graph = load_graph_file(settings.GRAPH_SEED_FILE)
    elif settings.GRAPH_SEED_RECORDS > 0:
        graph = make_demo_records(settings.GRAPH_SEED_RECORDS)
    else:
        return 0
    target.load(graph)
    return len(graph.entities)


def reset_memory_backend() -> None:
    """Drop the shared store and backend (tests)."""
    global _store, _backend
    with _lock:
        _store = None
        _backend = None
