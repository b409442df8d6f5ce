"""
Knowledge graph models: Entity, Relation, Graph and the tool argument shapes.

Field aliases follow the memory tool server wire format (entityType,
relationType, entityName, ...) so scripts and remote backends see the same keys.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class _WireModel(BaseModel):
    """Accepts both alias and attribute names; dumps by alias."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


class Entity(_WireModel):
    name: str
    entity_type: str = Field(alias="entityType")
    observations: list[str] = Field(default_factory=list)


class Relation(_WireModel):
    from_: str = Field(alias="from")
    to: str
    relation_type: str = Field(alias="relationType")

    def key(self) -> tuple[str, str, str]:
        """Identity used for exact-match deletion."""
        return (self.from_, self.to, self.relation_type)


class Graph(_WireModel):
    entities: list[Entity] = Field(default_factory=list)
    relations: list[Relation] = Field(default_factory=list)


class AddObservationInput(_WireModel):
    entity_name: str = Field(alias="entityName")
    contents: list[str]


class AddObservationResult(_WireModel):
    entity_name: str = Field(alias="entityName")
    added_observations: list[str] = Field(alias="addedObservations")


class DeleteObservationInput(_WireModel):
    entity_name: str = Field(alias="entityName")
    observations: list[str]


def entity_record(entity: Entity) -> dict[str, Any]:
    """Entity as returned by graph reads: tagged with type='entity'."""
    return {
        "type": "entity",
        "name": entity.name,
        "entityType": entity.entity_type,
        "observations": list(entity.observations),
    }


def relation_record(relation: Relation) -> dict[str, Any]:
    """Relation as returned by graph reads: tagged with type='relation'."""
    return {
        "type": "relation",
        "from": relation.from_,
        "to": relation.to,
        "relationType": relation.relation_type,
    }
