"""State machine diagram: states, transitions between them, and events."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping

from diagramkit.base import DEFAULT_VERSION, Diagram, VersionToken, ensure_unique, payload_list
from diagramkit.exceptions import DanglingReferenceError, DuplicateElementError
from diagramkit.models.base import build_element, build_elements
from diagramkit.models.config import DiagramConfig
from diagramkit.models.state import Event, State, Transition

logger = logging.getLogger(__name__)


def _check_transitions(transitions: Iterable[Transition], state_ids: set[str]) -> None:
    for transition in transitions:
        if transition.source_state_id not in state_ids or transition.target_state_id not in state_ids:
            raise DanglingReferenceError(
                f"Transition refers to non-existent state IDs "
                f"('{transition.source_state_id}' or '{transition.target_state_id}')"
            )


class StateDiagram(Diagram):
    """States and events keyed by id; transitions must join known states."""

    def __init__(
        self,
        title: str = "",
        states: Iterable[State | Mapping[str, Any]] | None = None,
        transitions: Iterable[Transition | Mapping[str, Any]] | None = None,
        events: Iterable[Event | Mapping[str, Any]] | None = None,
        version: VersionToken = DEFAULT_VERSION,
        *,
        config: DiagramConfig | None = None,
    ) -> None:
        super().__init__(version, config=config)
        state_list = build_elements(State, states)
        transition_list = build_elements(Transition, transitions)
        event_list = build_elements(Event, events)
        ensure_unique((s.id for s in state_list), "State")
        ensure_unique((e.id for e in event_list), "Event")
        _check_transitions(transition_list, {s.id for s in state_list})

        self._title: str = title if isinstance(title, str) else ""
        self._states: list[State] = state_list
        self._transitions: list[Transition] = transition_list
        self._events: list[Event] = event_list
        self._update_checksum()

    @property
    def title(self) -> str:
        return self._title

    @property
    def states(self) -> list[State]:
        return list(self._states)

    @property
    def transitions(self) -> list[Transition]:
        return list(self._transitions)

    @property
    def events(self) -> list[Event]:
        return list(self._events)

    def add_state(self, state: State | Mapping[str, Any]) -> State:
        state = build_element(State, state)
        if self.find_state(state.id) is not None:
            raise DuplicateElementError("State", state.id)
        self._states.append(state)
        self._update_checksum()
        logger.debug("Added state %s", state.id)
        return state

    def add_transition(self, transition: Transition | Mapping[str, Any]) -> Transition:
        """Add a transition. Both endpoints must already be states."""
        transition = build_element(Transition, transition)
        _check_transitions([transition], {s.id for s in self._states})
        self._transitions.append(transition)
        self._update_checksum()
        logger.debug(
            "Added transition %s -> %s", transition.source_state_id, transition.target_state_id,
        )
        return transition

    def add_event(self, event: Event | Mapping[str, Any]) -> Event:
        event = build_element(Event, event)
        if self.find_event(event.id) is not None:
            raise DuplicateElementError("Event", event.id)
        self._events.append(event)
        self._update_checksum()
        logger.debug("Added event %s", event.id)
        return event

    def find_state(self, state_id: str) -> State | None:
        return next((s for s in self._states if s.id == state_id), None)

    def find_event(self, event_id: str) -> Event | None:
        return next((e for e in self._events if e.id == event_id), None)

    def content_payload(self) -> dict[str, Any]:
        return {
            "title": self._title,
            "states": [s.to_dict() for s in self._states],
            "transitions": [t.to_dict() for t in self._transitions],
            "events": [e.to_dict() for e in self._events],
        }

    def identifiable_elements(self) -> dict[str, list[Any]]:
        return {
            "states": list(self._states),
            "transitions": list(self._transitions),
            "events": list(self._events),
        }

    @classmethod
    def _from_payload(
        cls,
        data: Mapping[str, Any],
        *,
        version: VersionToken,
        config: DiagramConfig | None,
    ) -> StateDiagram:
        return cls(
            title=data.get("title") or "",
            states=payload_list(data, "states"),
            transitions=payload_list(data, "transitions"),
            events=payload_list(data, "events"),
            version=version,
            config=config,
        )
