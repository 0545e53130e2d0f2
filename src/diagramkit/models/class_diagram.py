"""UML class diagram element models."""

from __future__ import annotations

from typing import Optional

from diagramkit.models.base import Element, NonEmptyStr


class ClassEntity(Element):
    """A class box: its name plus attribute and method signatures."""

    name: NonEmptyStr
    attributes: tuple[str, ...] = ()  # e.g. "id: Integer"
    methods: tuple[str, ...] = ()  # e.g. "find(id: Integer)"


class Relationship(Element):
    """Association, inheritance, composition, ... between two classes."""

    source_class_name: NonEmptyStr
    target_class_name: NonEmptyStr
    type: NonEmptyStr
    label: Optional[str] = None
