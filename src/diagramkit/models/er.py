"""Entity-relationship diagram element models.

Cardinalities follow crow's foot notation.
"""

from __future__ import annotations

import enum
from typing import Optional

from pydantic import AliasChoices, Field

from diagramkit.models.base import Element, NonEmptyStr


class KeyType(str, enum.Enum):
    """Key markers on an entity attribute."""

    PK = "PK"
    FK = "FK"
    UK = "UK"


class Cardinality(str, enum.Enum):
    """Cardinality of one side of a relationship."""

    ZERO_OR_ONE = "ZERO_OR_ONE"  # |o
    ONE_ONLY = "ONE_ONLY"  # ||
    ZERO_OR_MORE = "ZERO_OR_MORE"  # }o
    ONE_OR_MORE = "ONE_OR_MORE"  # }|


class ERDAttribute(Element):
    """A typed column of an entity."""

    type: NonEmptyStr
    name: NonEmptyStr
    keys: tuple[KeyType, ...] = ()
    comment: Optional[str] = None


class ERDEntity(Element):
    """A table. Serialized attributes live under ``attributes``."""

    name: NonEmptyStr
    attributes: tuple[ERDAttribute, ...] = Field(
        default=(),
        validation_alias=AliasChoices("attributes", "entity_attributes"),
    )


class ERDRelationship(Element):
    """A relationship between two entities, referenced by name."""

    entity1: NonEmptyStr
    entity2: NonEmptyStr
    cardinality1: Cardinality
    cardinality2: Cardinality
    identifying: bool = False
    label: Optional[str] = None
