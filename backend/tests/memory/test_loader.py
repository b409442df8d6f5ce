"""Unit tests for memory.loader."""

import json
from pathlib import Path

import pytest

from code_executor.memory.loader import (
    GraphFileError,
    load_graph_file,
    make_demo_records,
    parse_graph_jsonl,
)


def test_parse_jsonl_entities_and_relations() -> None:
    text = "\n".join(
        [
            json.dumps({"type": "entity", "name": "A", "entityType": "T", "observations": ["x"]}),
            "",
            json.dumps({"type": "relation", "from": "A", "to": "B", "relationType": "r"}),
        ]
    )
    graph = parse_graph_jsonl(text)
    assert [e.name for e in graph.entities] == ["A"]
    assert graph.entities[0].observations == ["x"]
    assert graph.relations[0].key() == ("A", "B", "r")


def test_parse_jsonl_invalid_json_reports_line() -> None:
    with pytest.raises(GraphFileError, match="line 2"):
        parse_graph_jsonl('{"type": "entity", "name": "A", "entityType": "T"}\n{oops')


def test_parse_jsonl_unknown_type() -> None:
    with pytest.raises(GraphFileError, match="unknown record type"):
        parse_graph_jsonl('{"type": "edge"}')


def test_load_json_file(tmp_path: Path) -> None:
    p = tmp_path / "graph.json"
    p.write_text(
        json.dumps(
            {
                "entities": [{"name": "A", "entityType": "T", "observations": []}],
                "relations": [{"from": "A", "to": "A", "relationType": "self"}],
            }
        )
    )
    graph = load_graph_file(p)
    assert len(graph.entities) == 1
    assert len(graph.relations) == 1


def test_load_jsonl_file(tmp_path: Path) -> None:
    p = tmp_path / "memory.jsonl"
    p.write_text(json.dumps({"type": "entity", "name": "A", "entityType": "T"}) + "\n")
    assert load_graph_file(p).entities[0].name == "A"


def test_load_json_file_invalid(tmp_path: Path) -> None:
    p = tmp_path / "graph.json"
    p.write_text('{"entities": [{"name": 1}]}')
    with pytest.raises(GraphFileError):
        load_graph_file(p)


def test_demo_records() -> None:
    graph = make_demo_records(50)
    assert len(graph.entities) == 50
    first, third = graph.entities[0], graph.entities[2]
    assert first.name == "Record_001"
    assert first.entity_type == "TestRecord"
    assert first.observations == ["count: 0", "status: active", "category: B"]
    assert third.observations == ["count: 0", "status: inactive", "category: A"]
    assert graph.entities[-1].name == "Record_050"
