"""Base element model for diagramkit.

Every diagram element (node, edge, commit, slice, ...) is a frozen Pydantic
model: equality is by value, instances are never mutated in place, and
``to_dict()`` yields the JSON-ready form used in content payloads.
"""

from __future__ import annotations

from typing import Annotated, Any, Iterable, TypeVar

from pydantic import BaseModel, Field, ValidationError

from diagramkit.exceptions import DiagramValidationError

NonEmptyStr = Annotated[str, Field(min_length=1)]

E = TypeVar("E", bound="Element")


class Element(BaseModel):
    """Immutable value object contained in a diagram."""

    model_config = {"frozen": True, "extra": "forbid", "populate_by_name": True}

    def to_dict(self) -> dict[str, Any]:
        """JSON-mode dump; optional fields that are unset (None) are omitted."""
        return self.model_dump(mode="json", exclude_none=True)


def build_element(model_class: type[E], data: Any) -> E:
    """Coerce a dict (or an existing instance) into ``model_class``.

    Raises:
        DiagramValidationError: If the data does not fit the element schema.
    """
    if isinstance(data, model_class):
        return data
    try:
        return model_class.model_validate(data)
    except ValidationError as e:
        raise DiagramValidationError(
            f"Invalid {model_class.__name__}: {e}"
        ) from e


def build_elements(model_class: type[E], items: Iterable[Any] | None) -> list[E]:
    """Coerce every item of ``items`` with :func:`build_element`."""
    return [build_element(model_class, item) for item in (items or [])]
