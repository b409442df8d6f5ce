"""
In-memory knowledge graph store.

Holds entities (keyed by name, creation order kept) and relations (a list,
duplicates allowed). Every operation runs under one lock so calls coming from
concurrent executions are atomic. Mutations against missing targets are
silent no-ops: batch scripts should not need existence checks.
"""

import logging
import threading
from typing import Any

from code_executor.memory.models import (
    AddObservationInput,
    AddObservationResult,
    DeleteObservationInput,
    Entity,
    Graph,
    Relation,
    entity_record,
    relation_record,
)

_log = logging.getLogger(__name__)


class GraphStore:
    """
    Entity/relation state plus the nine graph operations.

    Inputs are validated models; outputs are plain dicts/lists built fresh on
    every call, so callers never hold references into the store.
    """

    def __init__(self, graph: Graph | None = None) -> None:
        self._lock = threading.RLock()
        self._entities: dict[str, Entity] = {}
        self._relations: list[Relation] = []
        if graph is not None:
            self.load(graph)

    # ------------------------------------------------------------------
    # Loading (not exposed to scripts)
    # ------------------------------------------------------------------

    def load(self, graph: Graph) -> None:
        """Replace the whole graph. Later entities with a duplicate name win."""
        with self._lock:
            self._entities = {}
            for entity in graph.entities:
                self._entities[entity.name] = entity.model_copy(deep=True)
            self._relations = [r.model_copy() for r in graph.relations]
        _log.info(
            "Graph loaded: %d entities, %d relations",
            len(self._entities),
            len(self._relations),
        )

    def clear(self) -> None:
        with self._lock:
            self._entities = {}
            self._relations = []

    def entity_count(self) -> int:
        with self._lock:
            return len(self._entities)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def read_graph(self) -> dict[str, Any]:
        with self._lock:
            return {
                "entities": [entity_record(e) for e in self._entities.values()],
                "relations": [relation_record(r) for r in self._relations],
            }

    def search_nodes(self, query: str) -> dict[str, Any]:
        """Case-insensitive substring match on name, entityType or any observation."""
        q = query.lower()
        with self._lock:
            matches = [
                entity_record(e)
                for e in self._entities.values()
                if q in e.name.lower()
                or q in e.entity_type.lower()
                or any(q in o.lower() for o in e.observations)
            ]
        return {"entities": matches, "relations": []}

    def open_nodes(self, names: list[str]) -> dict[str, Any]:
        """Entities for the given names, in request order; unknown names are omitted."""
        with self._lock:
            found = [
                entity_record(self._entities[n]) for n in names if n in self._entities
            ]
        return {"entities": found, "relations": []}

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def create_entities(self, entities: list[Entity]) -> dict[str, Any]:
        """Insert or overwrite by name (last write wins, observations replaced)."""
        created: list[dict[str, Any]] = []
        with self._lock:
            for entity in entities:
                self._entities[entity.name] = entity.model_copy(deep=True)
                created.append(entity.to_wire())
        return {"entities": created}

    def create_relations(self, relations: list[Relation]) -> dict[str, Any]:
        """Append unconditionally. Endpoints are not checked for existence."""
        with self._lock:
            self._relations.extend(r.model_copy() for r in relations)
        return {"relations": [r.to_wire() for r in relations]}

    def add_observations(self, items: list[AddObservationInput]) -> dict[str, Any]:
        results: list[dict[str, Any]] = []
        with self._lock:
            for item in items:
                entity = self._entities.get(item.entity_name)
                if entity is None:
                    continue
                entity.observations.extend(item.contents)
                results.append(
                    AddObservationResult(
                        entity_name=item.entity_name,
                        added_observations=list(item.contents),
                    ).to_wire()
                )
        return {"results": results}

    def delete_entities(self, names: list[str]) -> dict[str, Any]:
        """Remove entities and every relation with the name as either endpoint."""
        with self._lock:
            for name in names:
                self._entities.pop(name, None)
                self._relations = [
                    r for r in self._relations if r.from_ != name and r.to != name
                ]
        return {"success": True, "message": "Entities deleted successfully"}

    def delete_observations(self, items: list[DeleteObservationInput]) -> dict[str, Any]:
        with self._lock:
            for item in items:
                entity = self._entities.get(item.entity_name)
                if entity is None:
                    continue
                drop = set(item.observations)
                entity.observations = [o for o in entity.observations if o not in drop]
        return {"success": True}

    def delete_relations(self, relations: list[Relation]) -> dict[str, Any]:
        """Remove every relation equal to one of the given triples."""
        keys = {r.key() for r in relations}
        with self._lock:
            self._relations = [r for r in self._relations if r.key() not in keys]
        return {"success": True}
