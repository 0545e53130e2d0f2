"""UML class diagram: classes and the relationships between them."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping

from diagramkit.base import DEFAULT_VERSION, Diagram, VersionToken, ensure_unique, payload_list
from diagramkit.exceptions import DanglingReferenceError, DuplicateElementError
from diagramkit.models.base import build_element, build_elements
from diagramkit.models.class_diagram import ClassEntity, Relationship
from diagramkit.models.config import DiagramConfig

logger = logging.getLogger(__name__)


def _check_relationships(relationships: Iterable[Relationship], class_names: set[str]) -> None:
    for rel in relationships:
        if rel.source_class_name not in class_names or rel.target_class_name not in class_names:
            raise DanglingReferenceError(
                f"Relationship refers to non-existent class names "
                f"('{rel.source_class_name}' or '{rel.target_class_name}')"
            )


class ClassDiagram(Diagram):
    """Classes identified by name, linked by typed relationships."""

    def __init__(
        self,
        classes: Iterable[ClassEntity | Mapping[str, Any]] | None = None,
        relationships: Iterable[Relationship | Mapping[str, Any]] | None = None,
        version: VersionToken = DEFAULT_VERSION,
        *,
        config: DiagramConfig | None = None,
    ) -> None:
        super().__init__(version, config=config)
        class_list = build_elements(ClassEntity, classes)
        relationship_list = build_elements(Relationship, relationships)
        ensure_unique((c.name for c in class_list), "Class")
        _check_relationships(relationship_list, {c.name for c in class_list})

        self._classes: list[ClassEntity] = class_list
        self._relationships: list[Relationship] = relationship_list
        self._update_checksum()

    @property
    def classes(self) -> list[ClassEntity]:
        return list(self._classes)

    @property
    def relationships(self) -> list[Relationship]:
        return list(self._relationships)

    def add_class(self, class_entity: ClassEntity | Mapping[str, Any]) -> ClassEntity:
        class_entity = build_element(ClassEntity, class_entity)
        if self.find_class(class_entity.name) is not None:
            raise DuplicateElementError("Class", class_entity.name)
        self._classes.append(class_entity)
        self._update_checksum()
        logger.debug("Added class %s", class_entity.name)
        return class_entity

    def add_relationship(self, relationship: Relationship | Mapping[str, Any]) -> Relationship:
        relationship = build_element(Relationship, relationship)
        _check_relationships([relationship], {c.name for c in self._classes})
        self._relationships.append(relationship)
        self._update_checksum()
        return relationship

    def find_class(self, class_name: str) -> ClassEntity | None:
        return next((c for c in self._classes if c.name == class_name), None)

    def content_payload(self) -> dict[str, Any]:
        return {
            "classes": [c.to_dict() for c in self._classes],
            "relationships": [r.to_dict() for r in self._relationships],
        }

    def identifiable_elements(self) -> dict[str, list[Any]]:
        return {"classes": list(self._classes), "relationships": list(self._relationships)}

    @classmethod
    def _from_payload(
        cls,
        data: Mapping[str, Any],
        *,
        version: VersionToken,
        config: DiagramConfig | None,
    ) -> ClassDiagram:
        return cls(
            classes=payload_list(data, "classes"),
            relationships=payload_list(data, "relationships"),
            version=version,
            config=config,
        )
