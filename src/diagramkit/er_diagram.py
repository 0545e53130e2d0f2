"""Entity-relationship diagram: entities with attributes, and relationships."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping

from diagramkit.base import (
    DEFAULT_VERSION,
    Diagram,
    VersionToken,
    ensure_unique,
    payload_list,
    require_text,
)
from diagramkit.exceptions import DanglingReferenceError, DuplicateElementError
from diagramkit.models.base import build_element, build_elements
from diagramkit.models.config import DiagramConfig
from diagramkit.models.er import (
    Cardinality,
    ERDAttribute,
    ERDEntity,
    ERDRelationship,
)

logger = logging.getLogger(__name__)


def _check_relationships(relationships: Iterable[ERDRelationship], entity_names: set[str]) -> None:
    for rel in relationships:
        if rel.entity1 not in entity_names or rel.entity2 not in entity_names:
            raise DanglingReferenceError(
                f"Relationship refers to non-existent entities ('{rel.entity1}' or '{rel.entity2}')"
            )


class ERDiagram(Diagram):
    """Entities keyed by name plus the relationships between them.

    Relationships have no identifier of their own; diffs match them by value.
    """

    def __init__(
        self,
        entities: Iterable[ERDEntity | Mapping[str, Any]] | None = None,
        relationships: Iterable[ERDRelationship | Mapping[str, Any]] | None = None,
        version: VersionToken = DEFAULT_VERSION,
        *,
        config: DiagramConfig | None = None,
    ) -> None:
        super().__init__(version, config=config)
        entity_list = build_elements(ERDEntity, entities)
        relationship_list = build_elements(ERDRelationship, relationships)
        ensure_unique((e.name for e in entity_list), "Entity")
        _check_relationships(relationship_list, {e.name for e in entity_list})

        self._entities: dict[str, ERDEntity] = {e.name: e for e in entity_list}
        self._relationships: list[ERDRelationship] = relationship_list
        self._update_checksum()

    @property
    def entities(self) -> list[ERDEntity]:
        return list(self._entities.values())

    @property
    def relationships(self) -> list[ERDRelationship]:
        return list(self._relationships)

    def add_entity(
        self,
        name: str,
        attributes: Iterable[ERDAttribute | Mapping[str, Any]] = (),
    ) -> ERDEntity:
        """Add an entity built from attribute definitions.

        Raises:
            EmptyFieldError: If the name is blank.
            DuplicateElementError: If an entity with that name exists.
        """
        require_text(name, "Entity name")
        if name in self._entities:
            raise DuplicateElementError("Entity", name)
        entity = build_element(ERDEntity, {
            "name": name,
            "attributes": build_elements(ERDAttribute, attributes),
        })
        self._entities[name] = entity
        self._update_checksum()
        logger.debug("Added entity %s", name)
        return entity

    def add_relationship(
        self,
        entity1: str,
        entity2: str,
        cardinality1: Cardinality | str,
        cardinality2: Cardinality | str,
        identifying: bool = False,
        label: str | None = None,
    ) -> ERDRelationship:
        """Relate two existing entities.

        Raises:
            DanglingReferenceError: If either entity does not exist.
        """
        relationship = build_element(ERDRelationship, {
            "entity1": entity1,
            "entity2": entity2,
            "cardinality1": cardinality1,
            "cardinality2": cardinality2,
            "identifying": identifying,
            "label": label,
        })
        _check_relationships([relationship], set(self._entities))
        self._relationships.append(relationship)
        self._update_checksum()
        return relationship

    def find_entity(self, name: str) -> ERDEntity | None:
        return self._entities.get(name)

    def content_payload(self) -> dict[str, Any]:
        return {
            "entities": [e.to_dict() for e in self._entities.values()],
            "relationships": [r.to_dict() for r in self._relationships],
        }

    def identifiable_elements(self) -> dict[str, list[Any]]:
        return {
            "entities": list(self._entities.values()),
            "relationships": list(self._relationships),
        }

    @classmethod
    def _from_payload(
        cls,
        data: Mapping[str, Any],
        *,
        version: VersionToken,
        config: DiagramConfig | None,
    ) -> ERDiagram:
        return cls(
            entities=payload_list(data, "entities"),
            relationships=payload_list(data, "relationships"),
            version=version,
            config=config,
        )
