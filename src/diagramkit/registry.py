"""Diagram type registry and deserialization factory.

Maps CamelCase diagram class names to diagram classes and turns wire
envelopes (``{type, version, checksum, data}``) back into diagrams. The
registry is an explicit mapping: nothing is resolved from module globals.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any, Mapping

from diagramkit.engine.naming import camel_to_snake, snake_to_camel
from diagramkit.exceptions import (
    DiagramParseError,
    InvalidEnvelopeError,
    NotADiagramTypeError,
    UnknownDiagramTypeError,
)
from diagramkit.models.config import DiagramConfig

if TYPE_CHECKING:
    from diagramkit.base import Diagram

logger = logging.getLogger(__name__)


class DiagramTypeRegistry:
    """Registry of diagram classes keyed by class name.

    A fresh registry holds the built-in diagram types. Extra types can be
    registered as long as they implement the Diagram contract.
    """

    def __init__(self, *, include_builtins: bool = True) -> None:
        self._classes: dict[str, Any] = {}
        if include_builtins:
            for cls in _builtin_diagram_classes():
                self._classes[cls.__name__] = cls

    def register(self, cls: Any, *, name: str | None = None) -> Any:
        """Register ``cls`` under ``name`` (defaults to its class name).

        Usable as a class decorator. Raises ValueError if the name is taken.
        """
        key = name or cls.__name__
        if key in self._classes:
            raise ValueError(
                f"Diagram type '{key}' is already registered. "
                f"Unregister it first to re-register."
            )
        self._classes[key] = cls
        return cls

    def unregister(self, name: str) -> None:
        """Remove a registered type."""
        self._classes.pop(name, None)

    def is_registered(self, name: str) -> bool:
        return name in self._classes

    @property
    def class_names(self) -> set[str]:
        """All registered class names."""
        return set(self._classes.keys())

    def resolve(self, type_name: str) -> type[Diagram]:
        """Resolve a snake_case envelope type to a Diagram subclass.

        Only the canonical spelling resolves: ``FLOWCHART_DIAGRAM`` or
        ``flowchart__diagram`` do not.

        Raises:
            UnknownDiagramTypeError: If the name is not canonical or nothing
                is registered for it.
            NotADiagramTypeError: If the registered value is not a Diagram.
        """
        from diagramkit.base import Diagram

        class_name = snake_to_camel(type_name)
        cls = self._classes.get(class_name)
        if cls is None or camel_to_snake(class_name) != type_name:
            raise UnknownDiagramTypeError(type_name, class_name)
        if not (isinstance(cls, type) and issubclass(cls, Diagram)):
            raise NotADiagramTypeError(class_name)
        logger.debug("Resolved diagram type %r to %s", type_name, class_name)
        return cls


def _builtin_diagram_classes() -> list[type[Diagram]]:
    from diagramkit.class_diagram import ClassDiagram
    from diagramkit.er_diagram import ERDiagram
    from diagramkit.flowchart import FlowchartDiagram
    from diagramkit.gantt import GanttDiagram
    from diagramkit.gitgraph import GitgraphDiagram
    from diagramkit.pie import PieDiagram
    from diagramkit.state import StateDiagram
    from diagramkit.timeline import TimelineDiagram

    return [
        FlowchartDiagram,
        ClassDiagram,
        ERDiagram,
        GanttDiagram,
        PieDiagram,
        StateDiagram,
        TimelineDiagram,
        GitgraphDiagram,
    ]


_default_registry: DiagramTypeRegistry | None = None


def default_registry() -> DiagramTypeRegistry:
    """The process-wide registry used when none is passed explicitly."""
    global _default_registry
    if _default_registry is None:
        _default_registry = DiagramTypeRegistry()
    return _default_registry


def parse_envelope(source: Mapping[str, Any] | str | bytes) -> dict[str, Any]:
    """Turn JSON text or a mapping into an envelope dict.

    Raises:
        DiagramParseError: If text is not valid JSON.
        InvalidEnvelopeError: If the result is not an object.
    """
    if isinstance(source, (str, bytes, bytearray)):
        try:
            parsed = json.loads(source)
        except json.JSONDecodeError as e:
            raise DiagramParseError(f"Failed to parse JSON: {e}") from e
    else:
        parsed = source
    if not isinstance(parsed, Mapping):
        raise InvalidEnvelopeError(
            f"Diagram envelope must be an object, got {type(parsed).__name__}"
        )
    return {str(k): v for k, v in parsed.items()}


def deserialize(
    source: Mapping[str, Any] | str | bytes,
    *,
    registry: DiagramTypeRegistry | None = None,
    config: DiagramConfig | None = None,
    strict: bool | None = None,
    stacklevel: int = 1,
) -> Diagram:
    """Rebuild a diagram from an envelope or its JSON text.

    Args:
        source: Envelope mapping, or JSON text holding one.
        registry: Registry to resolve the type in. Defaults to the
            built-in registry.
        config: Configuration for the rebuilt diagram.
        strict: Reject checksum mismatches. Defaults to
            ``config.strict_checksum``.
        stacklevel: Frame a checksum mismatch warning is attributed to,
            counted from the caller of this function.

    Raises:
        DiagramParseError: Invalid JSON text.
        InvalidEnvelopeError: Not an object, missing ``type``, or ``data``
            that is not an object.
        UnknownDiagramTypeError / NotADiagramTypeError: Type resolution.
        DiagramValidationError: Payload violates a diagram invariant.
    """
    envelope = parse_envelope(source)

    type_name = envelope.get("type")
    if not type_name:
        raise InvalidEnvelopeError("Diagram envelope must include a 'type' key")
    if not isinstance(type_name, str):
        raise InvalidEnvelopeError(
            f"Diagram envelope 'type' must be a string, got {type(type_name).__name__}"
        )

    data = envelope.get("data")
    if data is None:
        data = {}
    if not isinstance(data, Mapping):
        raise InvalidEnvelopeError("Diagram envelope 'data' must be an object")

    from diagramkit.base import DEFAULT_VERSION

    cls = (registry or default_registry()).resolve(type_name)
    return cls.from_content(
        data,
        envelope.get("version", DEFAULT_VERSION),
        envelope.get("checksum"),
        strict=strict,
        config=config,
        stacklevel=stacklevel + 1,
    )
