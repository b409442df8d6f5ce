"""
Knowledge graph memory: store, models, loaders and tool backends.
"""

from code_executor.memory.backend import (
    InMemoryBackend,
    MemoryBackend,
    MemoryBackendError,
    MemoryTool,
    RemoteMemoryBackend,
)
from code_executor.memory.models import (
    AddObservationInput,
    DeleteObservationInput,
    Entity,
    Graph,
    Relation,
)
from code_executor.memory.store import GraphStore

__all__ = [
    "AddObservationInput",
    "DeleteObservationInput",
    "Entity",
    "Graph",
    "GraphStore",
    "InMemoryBackend",
    "MemoryBackend",
    "MemoryBackendError",
    "MemoryTool",
    "Relation",
    "RemoteMemoryBackend",
]
