"""Pie chart element models."""

from __future__ import annotations

from typing import Optional

from pydantic import Field

from diagramkit.models.base import Element, NonEmptyStr


class Slice(Element):
    """A labelled slice. ``percentage`` is computed by the owning diagram."""

    label: NonEmptyStr
    value: float = Field(ge=0)
    percentage: Optional[float] = None
