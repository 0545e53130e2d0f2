"""State machine element models."""

from __future__ import annotations

from typing import Optional

from diagramkit.models.base import Element, NonEmptyStr


class State(Element):
    id: NonEmptyStr
    label: Optional[str] = None


class Transition(Element):
    """A move between two states; the label usually names the trigger."""

    source_state_id: NonEmptyStr
    target_state_id: NonEmptyStr
    label: Optional[str] = None


class Event(Element):
    id: NonEmptyStr
    label: Optional[str] = None
