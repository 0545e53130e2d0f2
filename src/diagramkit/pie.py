"""Pie chart diagram.

Slice percentages are derived data: any percentage supplied by the caller
(or found in a serialized payload) is discarded and every slice's share is
recomputed whenever the set of slices changes.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping

from diagramkit.base import DEFAULT_VERSION, Diagram, VersionToken, ensure_unique, payload_list
from diagramkit.exceptions import DuplicateElementError
from diagramkit.models.base import build_element, build_elements
from diagramkit.models.config import DiagramConfig
from diagramkit.models.pie import Slice

logger = logging.getLogger(__name__)


def _with_percentages(slices: list[Slice]) -> list[Slice]:
    total = sum(s.value for s in slices)
    return [
        s.model_copy(update={
            "percentage": 0.0 if total == 0 else round(s.value / total * 100.0, 2),
        })
        for s in slices
    ]


class PieDiagram(Diagram):
    """A titled pie chart; slices are identified by label."""

    def __init__(
        self,
        title: str = "",
        slices: Iterable[Slice | Mapping[str, Any]] | None = None,
        version: VersionToken = DEFAULT_VERSION,
        *,
        config: DiagramConfig | None = None,
    ) -> None:
        super().__init__(version, config=config)
        slice_list = [
            s.model_copy(update={"percentage": None}) for s in build_elements(Slice, slices)
        ]
        ensure_unique((s.label for s in slice_list), "Slice")

        self._title: str = title if isinstance(title, str) else ""
        self._slices: list[Slice] = _with_percentages(slice_list)
        self._update_checksum()

    @property
    def title(self) -> str:
        return self._title

    @property
    def slices(self) -> list[Slice]:
        return list(self._slices)

    def add_slice(self, slice_: Slice | Mapping[str, Any]) -> Slice:
        """Add a slice and recompute every percentage.

        Returns the stored slice, with its percentage filled in.

        Raises:
            DuplicateElementError: If a slice with that label exists.
        """
        new_slice = build_element(Slice, slice_)
        if self.find_slice(new_slice.label) is not None:
            raise DuplicateElementError("Slice", new_slice.label)
        self._slices = _with_percentages(self._slices + [new_slice])
        self._update_checksum()
        logger.debug("Added slice %s (value=%s)", new_slice.label, new_slice.value)
        return self._slices[-1]

    def find_slice(self, label: str) -> Slice | None:
        return next((s for s in self._slices if s.label == label), None)

    def total_value(self) -> float:
        return sum(s.value for s in self._slices)

    def content_payload(self) -> dict[str, Any]:
        return {
            "title": self._title,
            "slices": [s.to_dict() for s in self._slices],
        }

    def identifiable_elements(self) -> dict[str, list[Any]]:
        return {"slices": list(self._slices)}

    @classmethod
    def _from_payload(
        cls,
        data: Mapping[str, Any],
        *,
        version: VersionToken,
        config: DiagramConfig | None,
    ) -> PieDiagram:
        return cls(
            title=data.get("title") or "",
            slices=payload_list(data, "slices"),
            version=version,
            config=config,
        )
