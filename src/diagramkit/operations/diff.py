"""Diff operations: structural comparison between two diagrams' elements.

Provides compute_diff() which compares two mappings of element-type tag to
element collection and returns a structured DiagramDiff with per-type
added, removed and modified elements.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator, Mapping, Sequence

from diagramkit.engine.hashing import canonical_json

# Fields tried, in order, to identify an element across two diagrams.
IDENTIFIER_FIELDS: tuple[str, ...] = ("id", "name", "title", "label")


@dataclass(frozen=True)
class ModifiedElement:
    """An element present on both sides whose content changed.

    Attributes:
        old: The element as it is in the diagram being diffed from.
        new: The element as it is in the other diagram.
    """

    old: Any
    new: Any

    def to_dict(self) -> dict[str, Any]:
        return {"old": _element_dict(self.old), "new": _element_dict(self.new)}


@dataclass(frozen=True)
class ElementDiff:
    """Changes for one element type.

    Attributes:
        added: Elements only in the other diagram.
        removed: Elements only in this diagram.
        modified: Elements sharing an identifier but differing in content.
    """

    added: list[Any] = field(default_factory=list)
    removed: list[Any] = field(default_factory=list)
    modified: list[ModifiedElement] = field(default_factory=list)

    def __bool__(self) -> bool:
        return bool(self.added or self.removed or self.modified)

    def to_dict(self) -> dict[str, list]:
        """Dict form; empty categories are left out."""
        result: dict[str, list] = {}
        if self.added:
            result["added"] = [_element_dict(e) for e in self.added]
        if self.removed:
            result["removed"] = [_element_dict(e) for e in self.removed]
        if self.modified:
            result["modified"] = [m.to_dict() for m in self.modified]
        return result


@dataclass(frozen=True)
class DiagramDiff:
    """Structured diff between two diagrams of the same type.

    Attributes:
        changes: Map of element-type tag -> ElementDiff. Only types with at
            least one change are present.
    """

    changes: dict[str, ElementDiff] = field(default_factory=dict)

    def __bool__(self) -> bool:
        return bool(self.changes)

    def __len__(self) -> int:
        return len(self.changes)

    def __contains__(self, element_type: object) -> bool:
        return element_type in self.changes

    def __getitem__(self, element_type: str) -> ElementDiff:
        return self.changes[element_type]

    def __iter__(self) -> Iterator[str]:
        return iter(self.changes)

    @property
    def is_empty(self) -> bool:
        return not self.changes

    def to_dict(self) -> dict[str, dict[str, list]]:
        return {tag: delta.to_dict() for tag, delta in self.changes.items()}

    def pprint(self, *, file: Any = None) -> None:
        """Pretty-print this diff with colored added/removed/modified markers."""
        from diagramkit.formatting import pprint_diagram_diff
        pprint_diagram_diff(self, file=file)


def _element_dict(element: Any) -> Any:
    if hasattr(element, "to_dict"):
        return element.to_dict()
    return element


def element_identifier(element: Any) -> tuple[str, Any]:
    """Return the key used to match ``element`` across two collections.

    The first of ``id``, ``name``, ``title``, ``label`` that the element has
    with a non-None value wins. Elements with none of them are identified by
    their full value. The key is tagged with the rule that produced it.
    """
    for attr in IDENTIFIER_FIELDS:
        value = getattr(element, attr, None)
        if value is not None:
            return (attr, value)
    return ("value", canonical_json(_element_dict(element)))


def diff_collection(
    self_collection: Sequence[Any],
    other_collection: Sequence[Any],
) -> ElementDiff:
    """Diff two collections of the same element type.

    Elements are matched by :func:`element_identifier`. When an identifier
    repeats inside one collection, its first occurrence is used for the
    modified check.
    """
    self_ids = [element_identifier(el) for el in self_collection]
    other_ids = [element_identifier(el) for el in other_collection]

    self_by_id: dict[tuple[str, Any], Any] = {}
    for ident, el in zip(self_ids, self_collection):
        self_by_id.setdefault(ident, el)
    other_by_id: dict[tuple[str, Any], Any] = {}
    for ident, el in zip(other_ids, other_collection):
        other_by_id.setdefault(ident, el)

    # Shared identifiers never land in added/removed, only (maybe) in modified.
    modified = [
        ModifiedElement(old=old, new=other_by_id[ident])
        for ident, old in self_by_id.items()
        if ident in other_by_id and old != other_by_id[ident]
    ]
    added = [
        el for ident, el in zip(other_ids, other_collection)
        if ident not in self_by_id
    ]
    removed = [
        el for ident, el in zip(self_ids, self_collection)
        if ident not in other_by_id
    ]

    return ElementDiff(added=added, removed=removed, modified=modified)


def compute_diff(
    self_elements: Mapping[str, Sequence[Any]],
    other_elements: Mapping[str, Sequence[Any]],
) -> DiagramDiff:
    """Compute a structural diff between two element mappings.

    Only element types present on both sides are compared; a type that one
    side does not expose is ignored.

    Args:
        self_elements: Element-type tag -> elements of the diagram diffed from.
        other_elements: Element-type tag -> elements of the other diagram.

    Returns:
        DiagramDiff holding an ElementDiff for every type that changed.
    """
    changes: dict[str, ElementDiff] = {}
    for element_type, self_collection in self_elements.items():
        if element_type not in other_elements:
            continue
        delta = diff_collection(
            list(self_collection or []),
            list(other_elements[element_type] or []),
        )
        if delta:
            changes[element_type] = delta
    return DiagramDiff(changes=changes)
