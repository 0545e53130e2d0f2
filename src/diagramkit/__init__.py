"""diagramkit: versioned, checksummed, diffable diagram models.

Every diagram is a content-addressed value object: it can be built up
incrementally, serialized to a JSON envelope and read back through the type
registry, and structurally diffed against another version of itself.
"""

from diagramkit._version import __version__

# Aggregate contract and serialization
from diagramkit.base import Diagram
from diagramkit.registry import (
    DiagramTypeRegistry,
    default_registry,
    deserialize,
    parse_envelope,
)

# Concrete diagrams
from diagramkit.class_diagram import ClassDiagram
from diagramkit.er_diagram import ERDiagram
from diagramkit.flowchart import FlowchartDiagram
from diagramkit.gantt import GanttDiagram
from diagramkit.gitgraph import GitgraphDiagram
from diagramkit.pie import PieDiagram
from diagramkit.state import StateDiagram
from diagramkit.timeline import TimelineDiagram

# Element models
from diagramkit.models.class_diagram import ClassEntity, Relationship
from diagramkit.models.er import (
    Cardinality,
    ERDAttribute,
    ERDEntity,
    ERDRelationship,
    KeyType,
)
from diagramkit.models.flowchart import Edge, Node
from diagramkit.models.gantt import GanttSection, Task, TaskStatus
from diagramkit.models.gitgraph import CommitKind, GitBranch, GitCommit
from diagramkit.models.pie import Slice
from diagramkit.models.state import Event, State, Transition
from diagramkit.models.timeline import TimelineEvent, TimelinePeriod, TimelineSection

# Configuration
from diagramkit.models.config import DEFAULT_CONFIG, DiagramConfig

# Diff results
from diagramkit.operations.diff import DiagramDiff, ElementDiff, ModifiedElement

# Exceptions
from diagramkit.exceptions import (
    AmbiguousCherryPickWarning,
    BranchNotFoundError,
    ChecksumMismatchError,
    ChecksumMismatchWarning,
    CommitNotFoundError,
    DanglingReferenceError,
    DiagramError,
    DiagramParseError,
    DiagramValidationError,
    DiagramWarning,
    DuplicateElementError,
    EmptyFieldError,
    GraphStateError,
    InvalidBranchNameError,
    InvalidEnvelopeError,
    NotADiagramTypeError,
    UnknownDiagramTypeError,
)

__all__ = [
    "__version__",
    "Diagram",
    "DiagramTypeRegistry",
    "default_registry",
    "deserialize",
    "parse_envelope",
    "ClassDiagram",
    "ERDiagram",
    "FlowchartDiagram",
    "GanttDiagram",
    "GitgraphDiagram",
    "PieDiagram",
    "StateDiagram",
    "TimelineDiagram",
    "ClassEntity",
    "Relationship",
    "Cardinality",
    "ERDAttribute",
    "ERDEntity",
    "ERDRelationship",
    "KeyType",
    "Edge",
    "Node",
    "GanttSection",
    "Task",
    "TaskStatus",
    "CommitKind",
    "GitBranch",
    "GitCommit",
    "Slice",
    "Event",
    "State",
    "Transition",
    "TimelineEvent",
    "TimelinePeriod",
    "TimelineSection",
    "DEFAULT_CONFIG",
    "DiagramConfig",
    "DiagramDiff",
    "ElementDiff",
    "ModifiedElement",
    "AmbiguousCherryPickWarning",
    "BranchNotFoundError",
    "ChecksumMismatchError",
    "ChecksumMismatchWarning",
    "CommitNotFoundError",
    "DanglingReferenceError",
    "DiagramError",
    "DiagramParseError",
    "DiagramValidationError",
    "DiagramWarning",
    "DuplicateElementError",
    "EmptyFieldError",
    "GraphStateError",
    "InvalidBranchNameError",
    "InvalidEnvelopeError",
    "NotADiagramTypeError",
    "UnknownDiagramTypeError",
]
