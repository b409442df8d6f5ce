"""
Memory module for script engine: the nine knowledge-graph tools.

read_graph, create_entities, create_relations, add_observations,
delete_entities, delete_observations, delete_relations, search_nodes,
open_nodes. All are coroutines: scripts call them with `await`.

Arguments are plain data (lists of dicts using wire keys, or str); they are
validated before reaching the backend. Results are plain data copied out of
the backend response, so a script never holds a reference into the store.
"""

import copy
from types import SimpleNamespace
from typing import Any

from pydantic import TypeAdapter, ValidationError

from code_executor.memory.backend import MemoryBackend, MemoryTool
from code_executor.memory.models import (
    AddObservationInput,
    DeleteObservationInput,
    Entity,
    Relation,
)

_ENTITIES = TypeAdapter(list[Entity])
_RELATIONS = TypeAdapter(list[Relation])
_ADD_OBSERVATIONS = TypeAdapter(list[AddObservationInput])
_DELETE_OBSERVATIONS = TypeAdapter(list[DeleteObservationInput])
_NAMES = TypeAdapter(list[str])
_QUERY = TypeAdapter(str)


def _validate(tool: MemoryTool, adapter: TypeAdapter, value: Any) -> Any:
    try:
        return adapter.validate_python(value)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or 'value'}: {err['msg']}"
            for err in e.errors()
        )
        raise ValueError(f"memory.{tool.value}: invalid arguments ({problems})") from None


def make_memory_module(*, backend: MemoryBackend) -> Any:
    """Build the `memory` object bound to one backend."""

    async def read_graph() -> dict[str, Any]:
        return copy.deepcopy(await backend.read_graph())

    async def create_entities(entities: list[dict[str, Any]]) -> dict[str, Any]:
        items = _validate(MemoryTool.CREATE_ENTITIES, _ENTITIES, entities)
        return copy.deepcopy(await backend.create_entities(items))

    async def create_relations(relations: list[dict[str, Any]]) -> dict[str, Any]:
        items = _validate(MemoryTool.CREATE_RELATIONS, _RELATIONS, relations)
        return copy.deepcopy(await backend.create_relations(items))

    async def add_observations(observations: list[dict[str, Any]]) -> dict[str, Any]:
        items = _validate(MemoryTool.ADD_OBSERVATIONS, _ADD_OBSERVATIONS, observations)
        return copy.deepcopy(await backend.add_observations(items))

    async def delete_entities(entity_names: list[str]) -> dict[str, Any]:
        names = _validate(MemoryTool.DELETE_ENTITIES, _NAMES, entity_names)
        return copy.deepcopy(await backend.delete_entities(names))

    async def delete_observations(deletions: list[dict[str, Any]]) -> dict[str, Any]:
        items = _validate(MemoryTool.DELETE_OBSERVATIONS, _DELETE_OBSERVATIONS, deletions)
        return copy.deepcopy(await backend.delete_observations(items))

    async def delete_relations(relations: list[dict[str, Any]]) -> dict[str, Any]:
        items = _validate(MemoryTool.DELETE_RELATIONS, _RELATIONS, relations)
        return copy.deepcopy(await backend.delete_relations(items))

    async def search_nodes(query: str) -> dict[str, Any]:
        q = _validate(MemoryTool.SEARCH_NODES, _QUERY, query)
        return copy.deepcopy(await backend.search_nodes(q))

    async def open_nodes(names: list[str]) -> dict[str, Any]:
        items = _validate(MemoryTool.OPEN_NODES, _NAMES, names)
        return copy.deepcopy(await backend.open_nodes(items))

    return SimpleNamespace(
        read_graph=read_graph,
        create_entities=create_entities,
        create_relations=create_relations,
        add_observations=add_observations,
        delete_entities=delete_entities,
        delete_observations=delete_observations,
        delete_relations=delete_relations,
        search_nodes=search_nodes,
        open_nodes=open_nodes,
    )
