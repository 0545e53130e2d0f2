"""diagramkit exception hierarchy.

All diagramkit-specific exceptions inherit from DiagramError. Non-fatal
conditions are reported as warnings deriving from DiagramWarning.
"""


class DiagramError(Exception):
    """Base exception for all diagramkit errors."""


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


class DiagramValidationError(DiagramError, ValueError):
    """Raised when diagram content or a mutation violates an invariant.

    Named DiagramValidationError (not ValidationError) to avoid
    collision with pydantic.ValidationError.
    """


class DuplicateElementError(DiagramValidationError):
    """Raised when an element identifier is already taken."""

    def __init__(self, kind: str, identifier: str) -> None:
        self.kind = kind
        self.identifier = identifier
        super().__init__(f"{kind} '{identifier}' already exists")


class DanglingReferenceError(DiagramValidationError):
    """Raised when an element references something that does not exist."""


class EmptyFieldError(DiagramValidationError):
    """Raised when a required text field is empty or blank."""


class CommitNotFoundError(DiagramValidationError):
    """Raised when a commit id lookup fails."""

    def __init__(self, commit_id: str) -> None:
        self.commit_id = commit_id
        super().__init__(f"Commit '{commit_id}' does not exist")


class BranchNotFoundError(DiagramValidationError):
    """Raised when a branch lookup fails."""

    def __init__(self, branch_name: str) -> None:
        self.branch_name = branch_name
        super().__init__(f"Branch '{branch_name}' does not exist")


class InvalidBranchNameError(DiagramValidationError):
    """Raised when a branch name violates naming rules."""

    def __init__(self, name: str, reason: str) -> None:
        self.name = name
        self.reason = reason
        super().__init__(f"Invalid branch name '{name}': {reason}")


class GraphStateError(DiagramValidationError):
    """Raised when a commit-graph operation is not allowed in the current state."""


# ---------------------------------------------------------------------------
# Deserialization
# ---------------------------------------------------------------------------


class DiagramParseError(DiagramError):
    """Raised when serialized diagram text is not valid JSON."""


class InvalidEnvelopeError(DiagramError):
    """Raised when a parsed envelope has the wrong shape or lacks 'type'."""


class UnknownDiagramTypeError(DiagramError, LookupError):
    """Raised when an envelope type does not resolve to a registered diagram."""

    def __init__(self, type_name: str, class_name: str) -> None:
        self.type_name = type_name
        self.class_name = class_name
        super().__init__(
            f"Unknown diagram type '{type_name}' (resolved class name '{class_name}')"
        )


class NotADiagramTypeError(DiagramError, TypeError):
    """Raised when a registered name resolves to something that is not a Diagram."""

    def __init__(self, class_name: str) -> None:
        self.class_name = class_name
        super().__init__(f"'{class_name}' is not a Diagram subclass")


class ChecksumMismatchError(DiagramError):
    """Raised on checksum mismatch when loading in strict mode."""

    def __init__(self, type_name: str, expected: str, actual: str) -> None:
        self.type_name = type_name
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Checksum mismatch for {type_name}: expected {expected}, got {actual}"
        )


# ---------------------------------------------------------------------------
# Warnings
# ---------------------------------------------------------------------------


class DiagramWarning(UserWarning):
    """Base class for non-fatal diagramkit warnings."""


class ChecksumMismatchWarning(DiagramWarning):
    """Loaded content hashes to a different checksum than the envelope declared."""


class AmbiguousCherryPickWarning(DiagramWarning):
    """A merge commit was cherry-picked without choosing a parent lineage."""
