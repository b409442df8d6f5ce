"""Unit tests for memory.store.GraphStore."""

from code_executor.memory import (
    AddObservationInput,
    DeleteObservationInput,
    Entity,
    Graph,
    GraphStore,
    Relation,
)


def _entity(name: str, entity_type: str = "Server", *obs: str) -> Entity:
    return Entity(name=name, entity_type=entity_type, observations=list(obs))


def _rel(a: str, b: str, kind: str = "connects_to") -> Relation:
    return Relation(from_=a, to=b, relation_type=kind)


class TestCreateAndRead:
    def test_create_distinct_entities_read_back_in_order(self) -> None:
        store = GraphStore()
        store.create_entities([_entity("S1", "Server", "status: active")])
        store.create_entities(
            [_entity("S2", "Server", "status: inactive"), _entity("DB1", "Database")]
        )
        graph = store.read_graph()
        assert graph["entities"] == [
            {"type": "entity", "name": "S1", "entityType": "Server", "observations": ["status: active"]},
            {"type": "entity", "name": "S2", "entityType": "Server", "observations": ["status: inactive"]},
            {"type": "entity", "name": "DB1", "entityType": "Database", "observations": []},
        ]
        assert graph["relations"] == []

    def test_create_returns_inputs(self) -> None:
        out = GraphStore().create_entities([_entity("S1", "Server", "a")])
        assert out == {"entities": [{"name": "S1", "entityType": "Server", "observations": ["a"]}]}

    def test_create_existing_name_overwrites(self) -> None:
        store = GraphStore()
        store.create_entities([_entity("S1", "Server", "old-1", "old-2")])
        store.create_entities([_entity("S1", "Host", "new")])
        entities = store.read_graph()["entities"]
        assert len(entities) == 1
        assert entities[0]["entityType"] == "Host"
        assert entities[0]["observations"] == ["new"]

    def test_read_graph_is_idempotent(self) -> None:
        store = GraphStore()
        store.create_entities([_entity("S1", "Server", "x")])
        store.create_relations([_rel("S1", "S2")])
        assert store.read_graph() == store.read_graph()

    def test_read_graph_returns_copies(self) -> None:
        store = GraphStore()
        store.create_entities([_entity("S1", "Server", "x")])
        snapshot = store.read_graph()
        snapshot["entities"][0]["observations"].append("tampered")
        assert store.read_graph()["entities"][0]["observations"] == ["x"]

    def test_input_model_not_aliased_by_store(self) -> None:
        store = GraphStore()
        entity = _entity("S1", "Server", "x")
        store.create_entities([entity])
        entity.observations.append("later")
        assert store.open_nodes(["S1"])["entities"][0]["observations"] == ["x"]


class TestRelations:
    def test_duplicates_allowed_and_no_integrity_check(self) -> None:
        store = GraphStore()
        out = store.create_relations([_rel("A", "B"), _rel("A", "B")])
        assert len(out["relations"]) == 2
        assert out["relations"][0] == {"from": "A", "to": "B", "relationType": "connects_to"}
        assert len(store.read_graph()["relations"]) == 2

    def test_delete_relations_removes_all_exact_matches(self) -> None:
        store = GraphStore()
        store.create_relations([_rel("A", "B"), _rel("A", "B"), _rel("A", "B", "owns"), _rel("B", "A")])
        assert store.delete_relations([_rel("A", "B")]) == {"success": True}
        remaining = store.read_graph()["relations"]
        assert [(r["from"], r["to"], r["relationType"]) for r in remaining] == [
            ("A", "B", "owns"),
            ("B", "A", "connects_to"),
        ]

    def test_delete_relations_missing_is_noop(self) -> None:
        store = GraphStore()
        store.create_relations([_rel("A", "B")])
        assert store.delete_relations([_rel("X", "Y")]) == {"success": True}
        assert len(store.read_graph()["relations"]) == 1


class TestObservations:
    def test_add_observations_appends_and_reports(self) -> None:
        store = GraphStore()
        store.create_entities([_entity("S1", "Server", "a")])
        out = store.add_observations(
            [AddObservationInput(entity_name="S1", contents=["b", "a"])]
        )
        assert out == {"results": [{"entityName": "S1", "addedObservations": ["b", "a"]}]}
        assert store.open_nodes(["S1"])["entities"][0]["observations"] == ["a", "b", "a"]

    def test_add_observations_missing_entity_skipped(self) -> None:
        store = GraphStore()
        store.create_entities([_entity("S1")])
        out = store.add_observations(
            [
                AddObservationInput(entity_name="Nope", contents=["x"]),
                AddObservationInput(entity_name="S1", contents=["y"]),
            ]
        )
        assert out == {"results": [{"entityName": "S1", "addedObservations": ["y"]}]}
        assert [e["name"] for e in store.read_graph()["entities"]] == ["S1"]

    def test_delete_observations_removes_all_occurrences(self) -> None:
        store = GraphStore()
        store.create_entities([_entity("S1", "Server", "a", "b", "a", "c")])
        out = store.delete_observations(
            [DeleteObservationInput(entity_name="S1", observations=["a", "zzz"])]
        )
        assert out == {"success": True}
        assert store.open_nodes(["S1"])["entities"][0]["observations"] == ["b", "c"]

    def test_delete_observations_missing_entity_noop(self) -> None:
        store = GraphStore()
        out = store.delete_observations(
            [DeleteObservationInput(entity_name="Nope", observations=["a"])]
        )
        assert out == {"success": True}


class TestDeleteEntities:
    def test_cascades_to_relations_leaving_unrelated(self) -> None:
        store = GraphStore()
        store.create_entities([_entity("A"), _entity("B"), _entity("C")])
        store.create_relations([_rel("A", "B"), _rel("C", "A"), _rel("B", "C")])
        out = store.delete_entities(["A"])
        assert out == {"success": True, "message": "Entities deleted successfully"}
        graph = store.read_graph()
        assert [e["name"] for e in graph["entities"]] == ["B", "C"]
        assert [(r["from"], r["to"]) for r in graph["relations"]] == [("B", "C")]

    def test_missing_name_is_noop(self) -> None:
        store = GraphStore()
        store.create_entities([_entity("A")])
        assert store.delete_entities(["Nope"])["success"] is True
        assert store.entity_count() == 1


class TestSearchAndOpen:
    def _store(self) -> GraphStore:
        store = GraphStore()
        store.create_entities(
            [
                _entity("Server_001", "Server", "status: active", "region: us-east"),
                _entity("Server_002", "Server", "status: INACTIVE"),
                _entity("Database_001", "Database", "type: postgres"),
                _entity("Cache", "Redis", "ttl: 60"),
            ]
        )
        store.create_relations([_rel("Server_001", "Database_001")])
        return store

    def test_search_matches_name_type_or_observation_case_insensitive(self) -> None:
        store = self._store()
        names = lambda q: [e["name"] for e in store.search_nodes(q)["entities"]]  # noqa: E731
        assert names("ACTIVE") == ["Server_001", "Server_002"]
        assert names("database") == ["Database_001"]
        assert names("redis") == ["Cache"]
        assert names("_001") == ["Server_001", "Database_001"]
        assert names("nothing-here") == []

    def test_search_returns_no_relations(self) -> None:
        assert self._store().search_nodes("server")["relations"] == []

    def test_open_nodes_omits_unknown_names(self) -> None:
        out = self._store().open_nodes(["Cache", "Missing", "Server_002"])
        assert [e["name"] for e in out["entities"]] == ["Cache", "Server_002"]
        assert out["relations"] == []


class TestLoad:
    def test_load_replaces_state(self) -> None:
        store = GraphStore()
        store.create_entities([_entity("Old")])
        store.load(Graph(entities=[_entity("New")], relations=[_rel("New", "X")]))
        graph = store.read_graph()
        assert [e["name"] for e in graph["entities"]] == ["New"]
        assert len(graph["relations"]) == 1

    def test_clear(self) -> None:
        store = GraphStore()
        store.create_entities([_entity("A")])
        store.clear()
        assert store.read_graph() == {"entities": [], "relations": []}
