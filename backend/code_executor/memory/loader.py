"""
Graph loaders: populate a GraphStore before the first execution request.

Two sources:
- a graph file, either one JSON object {"entities": [...], "relations": [...]}
  or JSON Lines where each line is {"type": "entity"|"relation", ...}
- generated demo records (Record_001 .. Record_NNN)
"""

import json
import logging
from pathlib import Path

from code_executor.memory.models import Entity, Graph, Relation

_log = logging.getLogger(__name__)

_CATEGORIES = ("A", "B", "C")


class GraphFileError(ValueError):
    """Raised when a graph file cannot be parsed."""

    pass


def parse_graph_jsonl(text: str) -> Graph:
    """Parse JSON Lines; blank lines are skipped, unknown record types are rejected."""
    entities: list[Entity] = []
    relations: list[Relation] = []
    for lineno, line in enumerate(text.splitlines(), start=1):
        line = line.strip()
        if not line:
            continue
        try:
            record = json.loads(line)
        except json.JSONDecodeError as e:
            raise GraphFileError(f"line {lineno}: invalid JSON ({e.msg})") from e
        kind = record.get("type") if isinstance(record, dict) else None
        if kind == "entity":
            entities.append(Entity.model_validate(record))
        elif kind == "relation":
            relations.append(Relation.model_validate(record))
        else:
            raise GraphFileError(f"line {lineno}: unknown record type {kind!r}")
    return Graph(entities=entities, relations=relations)


def load_graph_file(path: str | Path) -> Graph:
    """Read a .json or .jsonl graph file."""
    p = Path(path)
    text = p.read_text(encoding="utf-8")
    if p.suffix == ".jsonl":
        graph = parse_graph_jsonl(text)
    else:
        try:
            graph = Graph.model_validate_json(text)
        except ValueError as e:
            raise GraphFileError(f"{p}: {e}") from e
    _log.info(
        "Read graph file %s: %d entities, %d relations",
        p,
        len(graph.entities),
        len(graph.relations),
    )
    return graph


def make_demo_records(count: int) -> Graph:
    """
    Records named Record_001..Record_{count:03d}, type TestRecord, each with
    'count: 0', an active/inactive status (every third inactive) and a category.
    """
    entities = [
        Entity(
            name=f"Record_{i:03d}",
            entity_type="TestRecord",
            observations=[
                "count: 0",
                "status: inactive" if i % 3 == 0 else "status: active",
                f"category: {_CATEGORIES[i % 3]}",
            ],
        )
        for i in range(1, count + 1)
    ]
    return Graph(entities=entities, relations=[])
