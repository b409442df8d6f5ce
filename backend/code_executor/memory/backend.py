"""
Memory tool backends: the capability table behind the script `memory` namespace.

MemoryTool is the closed set of tool names. MemoryBackend declares one abstract
coroutine per tool, so a backend that misses a case cannot be instantiated.

- InMemoryBackend: delegates to a GraphStore in this process.
- RemoteMemoryBackend: POSTs each call to an out-of-process tool service.

Both return the same plain-data shapes; scripts cannot tell them apart.
"""

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any

import httpx

from code_executor.memory.models import (
    AddObservationInput,
    DeleteObservationInput,
    Entity,
    Relation,
)
from code_executor.memory.store import GraphStore

_log = logging.getLogger(__name__)

DEFAULT_REMOTE_TIMEOUT = 30.0


class MemoryTool(str, Enum):
    READ_GRAPH = "read_graph"
    CREATE_ENTITIES = "create_entities"
    CREATE_RELATIONS = "create_relations"
    ADD_OBSERVATIONS = "add_observations"
    DELETE_ENTITIES = "delete_entities"
    DELETE_OBSERVATIONS = "delete_observations"
    DELETE_RELATIONS = "delete_relations"
    SEARCH_NODES = "search_nodes"
    OPEN_NODES = "open_nodes"


class MemoryBackendError(RuntimeError):
    """A backend could not complete a tool call (transport or protocol failure)."""

    pass


class MemoryBackend(ABC):
    """Async capability table: exactly one method per MemoryTool."""

    @abstractmethod
    async def read_graph(self) -> dict[str, Any]: ...

    @abstractmethod
    async def create_entities(self, entities: list[Entity]) -> dict[str, Any]: ...

    @abstractmethod
    async def create_relations(self, relations: list[Relation]) -> dict[str, Any]: ...

    @abstractmethod
    async def add_observations(
        self, observations: list[AddObservationInput]
    ) -> dict[str, Any]: ...

    @abstractmethod
    async def delete_entities(self, entity_names: list[str]) -> dict[str, Any]: ...

    @abstractmethod
    async def delete_observations(
        self, deletions: list[DeleteObservationInput]
    ) -> dict[str, Any]: ...

    @abstractmethod
    async def delete_relations(self, relations: list[Relation]) -> dict[str, Any]: ...

    @abstractmethod
    async def search_nodes(self, query: str) -> dict[str, Any]: ...

    @abstractmethod
    async def open_nodes(self, names: list[str]) -> dict[str, Any]: ...

    async def ping(self) -> bool:
        """Readiness check. In-process backends are always ready."""
        return True


class InMemoryBackend(MemoryBackend):
    """Routes every tool call to a GraphStore held in this process."""

    def __init__(self, store: GraphStore) -> None:
        self._store = store

    async def read_graph(self) -> dict[str, Any]:
        return self._store.read_graph()

    async def create_entities(self, entities: list[Entity]) -> dict[str, Any]:
        return self._store.create_entities(entities)

    async def create_relations(self, relations: list[Relation]) -> dict[str, Any]:
        return self._store.create_relations(relations)

    async def add_observations(
        self, observations: list[AddObservationInput]
    ) -> dict[str, Any]:
        return self._store.add_observations(observations)

    async def delete_entities(self, entity_names: list[str]) -> dict[str, Any]:
        return self._store.delete_entities(entity_names)

    async def delete_observations(
        self, deletions: list[DeleteObservationInput]
    ) -> dict[str, Any]:
        return self._store.delete_observations(deletions)

    async def delete_relations(self, relations: list[Relation]) -> dict[str, Any]:
        return self._store.delete_relations(relations)

    async def search_nodes(self, query: str) -> dict[str, Any]:
        return self._store.search_nodes(query)

    async def open_nodes(self, names: list[str]) -> dict[str, Any]:
        return self._store.open_nodes(names)


class RemoteMemoryBackend(MemoryBackend):
    """
    Tool service over HTTP: POST {base_url}/tools/{tool} with the tool arguments
    as a JSON object; the JSON response body is the tool result.

    A fresh httpx.AsyncClient is opened per call so the backend can be shared
    by executions running on different event loops.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = DEFAULT_REMOTE_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self._base_url, timeout=self._timeout, transport=self._transport
        )

    async def _call(self, tool: MemoryTool, arguments: dict[str, Any]) -> dict[str, Any]:
        try:
            async with self._client() as client:
                resp = await client.post(f"/tools/{tool.value}", json=arguments)
                resp.raise_for_status()
                body = resp.json()
        except httpx.HTTPStatusError as e:
            raise MemoryBackendError(
                f"{tool.value} failed with HTTP {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            _log.warning("Remote memory call %s failed: %s", tool.value, e)
            raise MemoryBackendError(f"{tool.value} failed: {e}") from e
        except ValueError as e:
            raise MemoryBackendError(f"{tool.value} returned invalid JSON") from e
        if not isinstance(body, dict):
            raise MemoryBackendError(f"{tool.value} returned {type(body).__name__}, expected object")
        return body

    async def read_graph(self) -> dict[str, Any]:
        return await self._call(MemoryTool.READ_GRAPH, {})

    async def create_entities(self, entities: list[Entity]) -> dict[str, Any]:
        return await self._call(
            MemoryTool.CREATE_ENTITIES, {"entities": [e.to_wire() for e in entities]}
        )

    async def create_relations(self, relations: list[Relation]) -> dict[str, Any]:
        return await self._call(
            MemoryTool.CREATE_RELATIONS, {"relations": [r.to_wire() for r in relations]}
        )

    async def add_observations(
        self, observations: list[AddObservationInput]
    ) -> dict[str, Any]:
        return await self._call(
            MemoryTool.ADD_OBSERVATIONS,
            {"observations": [o.to_wire() for o in observations]},
        )

    async def delete_entities(self, entity_names: list[str]) -> dict[str, Any]:
        return await self._call(
            MemoryTool.DELETE_ENTITIES, {"entityNames": list(entity_names)}
        )

    async def delete_observations(
        self, deletions: list[DeleteObservationInput]
    ) -> dict[str, Any]:
        return await self._call(
            MemoryTool.DELETE_OBSERVATIONS,
            {"deletions": [d.to_wire() for d in deletions]},
        )

    async def delete_relations(self, relations: list[Relation]) -> dict[str, Any]:
        return await self._call(
            MemoryTool.DELETE_RELATIONS, {"relations": [r.to_wire() for r in relations]}
        )

    async def search_nodes(self, query: str) -> dict[str, Any]:
        return await self._call(MemoryTool.SEARCH_NODES, {"query": query})

    async def open_nodes(self, names: list[str]) -> dict[str, Any]:
        return await self._call(MemoryTool.OPEN_NODES, {"names": list(names)})

    async def ping(self) -> bool:
        try:
            await self.read_graph()
            return True
        except MemoryBackendError:
            return False
