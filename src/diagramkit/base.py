"""Abstract diagram aggregate.

Diagram is the contract every concrete diagram implements: an opaque
version token, a checksum derived from content, the wire envelope, equality
by checksum, and structural diffing. Subclasses own their element
collections and must call ``_update_checksum()`` at the end of ``__init__``
and of every content-changing mutation.
"""

from __future__ import annotations

import abc
import json
import logging
import warnings
from typing import TYPE_CHECKING, Any, Iterable, Mapping, Sequence, Union

from diagramkit.engine.hashing import content_hash
from diagramkit.engine.naming import camel_to_snake
from diagramkit.exceptions import (
    ChecksumMismatchError,
    ChecksumMismatchWarning,
    DuplicateElementError,
    EmptyFieldError,
)
from diagramkit.models.config import DEFAULT_CONFIG, DiagramConfig
from diagramkit.operations.diff import DiagramDiff, compute_diff

if TYPE_CHECKING:
    from diagramkit.registry import DiagramTypeRegistry

logger = logging.getLogger(__name__)

VersionToken = Union[str, int, None]

DEFAULT_VERSION: VersionToken = 1


class Diagram(abc.ABC):
    """Base class for all diagram types.

    Two diagrams are equal when they are of the same class and their
    checksums match; the version token does not take part in equality.
    """

    def __init__(
        self,
        version: VersionToken = DEFAULT_VERSION,
        *,
        config: DiagramConfig | None = None,
    ) -> None:
        self._version = version
        self._config = config or DEFAULT_CONFIG
        self._checksum: str | None = None

    # ------------------------------------------------------------------
    # Contract
    # ------------------------------------------------------------------

    @abc.abstractmethod
    def content_payload(self) -> dict[str, Any]:
        """JSON-ready dict of this diagram's content (the envelope ``data``)."""

    @abc.abstractmethod
    def identifiable_elements(self) -> dict[str, list[Any]]:
        """Element-type tag -> elements, as compared by :meth:`diff`."""

    @classmethod
    @abc.abstractmethod
    def _from_payload(
        cls,
        data: Mapping[str, Any],
        *,
        version: VersionToken,
        config: DiagramConfig | None,
    ) -> Diagram:
        """Rebuild a diagram from its content payload (no checksum checks)."""

    def hashable_payload(self) -> dict[str, Any]:
        """The part of the content the checksum covers.

        Defaults to the full content payload. Subclasses drop fields that
        are serialized but are not semantic content.
        """
        return self.content_payload()

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------

    @property
    def version(self) -> VersionToken:
        return self._version

    @property
    def checksum(self) -> str:
        if self._checksum is None:
            self._update_checksum()
        return self._checksum  # type: ignore[return-value]

    @property
    def config(self) -> DiagramConfig:
        return self._config

    @classmethod
    def type_name(cls) -> str:
        """Canonical lower-snake-case type name used in envelopes."""
        return camel_to_snake(cls.__name__)

    def _update_checksum(self) -> None:
        self._checksum = content_hash(self.hashable_payload())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Diagram):
            return NotImplemented
        return type(self) is type(other) and self.checksum == other.checksum

    def __hash__(self) -> int:
        return hash((type(self), self.checksum))

    def equals(self, other: object) -> bool:
        return isinstance(other, Diagram) and self == other

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(version={self._version!r}, "
            f"checksum={self.checksum[:12]})"
        )

    # ------------------------------------------------------------------
    # Diff
    # ------------------------------------------------------------------

    def diff(self, other: Diagram) -> DiagramDiff:
        """Structural diff from this diagram to ``other``.

        Empty when ``other`` is of a different class or equal to this one.
        """
        if type(other) is not type(self) or self == other:
            return DiagramDiff()
        return compute_diff(self.identifiable_elements(), other.identifiable_elements())

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        """The wire envelope: ``{type, version, checksum, data}``."""
        return {
            "type": self.type_name(),
            "version": self._version,
            "checksum": self.checksum,
            "data": self.content_payload(),
        }

    def to_json(self, *, indent: int | None = None) -> str:
        if indent is None:
            indent = self._config.json_indent
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    @classmethod
    def from_content(
        cls,
        data: Mapping[str, Any] | None,
        version: VersionToken = DEFAULT_VERSION,
        checksum: str | None = None,
        *,
        strict: bool | None = None,
        config: DiagramConfig | None = None,
        stacklevel: int = 1,
    ) -> Diagram:
        """Rebuild a diagram of this class from a content payload.

        Args:
            data: The envelope ``data`` object.
            version: Version token to carry over.
            checksum: Checksum declared by the envelope, if any.
            strict: Raise instead of warn on a checksum mismatch. Defaults
                to ``config.strict_checksum``.
            config: Configuration for the rebuilt diagram.
            stacklevel: Frame a mismatch warning is attributed to, counted
                from the caller of this method (1 = the direct caller).

        Raises:
            DiagramValidationError: If the payload violates an invariant.
            ChecksumMismatchError: On mismatch when strict.
        """
        diagram = cls._from_payload(data or {}, version=version, config=config)
        if strict is None:
            strict = diagram.config.strict_checksum
        diagram._verify_checksum(checksum, strict=strict, stacklevel=stacklevel + 1)
        return diagram

    def _verify_checksum(self, expected: str | None, *, strict: bool, stacklevel: int = 1) -> None:
        if expected is None or expected == self.checksum:
            return
        if strict:
            raise ChecksumMismatchError(self.type_name(), expected, self.checksum)
        logger.warning(
            "Checksum mismatch for loaded %s (version: %r): expected %s, got %s",
            type(self).__name__, self._version, expected, self.checksum,
        )
        warnings.warn(
            f"Checksum mismatch for loaded {type(self).__name__} "
            f"(version: {self._version!r}). Expected {expected}, got {self.checksum}.",
            ChecksumMismatchWarning,
            stacklevel=stacklevel + 1,
        )

    @classmethod
    def from_dict(
        cls,
        envelope: Mapping[str, Any],
        *,
        registry: DiagramTypeRegistry | None = None,
        config: DiagramConfig | None = None,
    ) -> Diagram:
        """Deserialize an envelope into whichever diagram type it names."""
        from diagramkit.registry import deserialize

        return deserialize(envelope, registry=registry, config=config, stacklevel=2)

    @classmethod
    def from_json(
        cls,
        text: str | bytes,
        *,
        registry: DiagramTypeRegistry | None = None,
        config: DiagramConfig | None = None,
    ) -> Diagram:
        """Parse JSON text and deserialize the envelope it holds."""
        from diagramkit.registry import deserialize

        return deserialize(text, registry=registry, config=config, stacklevel=2)


# ---------------------------------------------------------------------------
# Validation helpers shared by concrete diagrams
# ---------------------------------------------------------------------------


def ensure_unique(identifiers: Iterable[str], kind: str) -> None:
    """Raise DuplicateElementError on the first repeated identifier."""
    seen: set[str] = set()
    for identifier in identifiers:
        if identifier in seen:
            raise DuplicateElementError(kind, identifier)
        seen.add(identifier)


def require_text(value: str | None, what: str) -> str:
    """Strip ``value``; raise EmptyFieldError when nothing is left."""
    cleaned = (value or "").strip()
    if not cleaned:
        raise EmptyFieldError(f"{what} cannot be empty")
    return cleaned


def payload_list(data: Mapping[str, Any], key: str) -> Sequence[Any]:
    """``data[key]`` as a list, treating a missing or null key as empty."""
    return data.get(key) or []
