"""
Core data models for the Flow Editor.

This module defines the fundamental data structures used throughout the flow editor,
including semantic node kinds, per-kind descriptors, graph nodes, connections and
the transient connection attempt evaluated by the rule validator.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Any, Optional, Union
from enum import Enum
import uuid


class _Unbounded:
    """Sentinel for a degree constraint with no upper bound."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNBOUNDED"

    def __reduce__(self):
        return (_Unbounded, ())


UNBOUNDED = _Unbounded()

DegreeLimit = Union[int, _Unbounded]


class NodeKind(Enum):
    """Enumeration of semantic node kinds, keyed by the BPMN tag the editor stores."""
    START = "bpmn:StartEvent"
    END = "bpmn:EndEvent"
    WAIT = "bpmn:IntermediateCatchEvent"
    SWITCH = "bpmn:UserTask"
    JOIN = "bpmn:ManualTask"
    BROADCAST = "bpmn:ScriptTask"
    JOIN_BROADCAST = "bpmn:ServiceTask"
    CONDITION_FLOW = "bpmn:ExclusiveGateway"
    ROLLBACK = "bpmn:ParallelGateway"

    @classmethod
    def from_tag(cls, type_id: str) -> Optional['NodeKind']:
        """Resolve a semantic tag to a kind, or None if the tag is not known."""
        try:
            return cls(type_id)
        except ValueError:
            return None


class ShapeKind(Enum):
    """Base shape class used to draw a node."""
    ENGINE_DEFAULT = "engine_default"
    ROUNDED_TASK = "rounded_task"
    DIAMOND_GATEWAY = "diamond_gateway"
    DECORATED_EVENT = "decorated_event"


class Verdict(Enum):
    """Outcome of a connection rule evaluation."""
    ACCEPT = "accept"
    REJECT = "reject"


class ViolationSide(Enum):
    """Which end of a connection attempt broke a degree constraint."""
    SOURCE = "source"
    TARGET = "target"


@dataclass(frozen=True)
class NodeTypeDescriptor:
    """Immutable declaration of a semantic node kind and its constraints."""
    type_id: str
    label: str
    max_incoming: DegreeLimit = UNBOUNDED
    max_outgoing: DegreeLimit = UNBOUNDED
    shape_kind: ShapeKind = ShapeKind.ROUNDED_TASK
    icon_ref: Optional[str] = None
    default_size: tuple = (100, 80)
    messages: Dict[str, Dict[str, str]] = field(default_factory=dict, compare=False, hash=False)

    @property
    def kind(self) -> Optional[NodeKind]:
        return NodeKind.from_tag(self.type_id)

    def allows_more_outgoing(self, current: int) -> bool:
        """Check whether one more outgoing edge stays within the declared bound."""
        return self.max_outgoing is UNBOUNDED or current < self.max_outgoing

    def allows_more_incoming(self, current: int) -> bool:
        """Check whether one more incoming edge stays within the declared bound."""
        return self.max_incoming is UNBOUNDED or current < self.max_incoming

    def message(self, side: ViolationSide, locale: str = "en") -> str:
        """Return the user-facing rejection text for a violation on the given side."""
        catalog = self.messages.get(locale) or self.messages.get("en") or {}
        text = catalog.get(side.value)
        if text:
            return text
        if side is ViolationSide.SOURCE:
            return f"{self.label} allows only {self.max_outgoing} outgoing connection"
        return f"{self.label} accepts only {self.max_incoming} incoming connection"


@dataclass
class GraphNode:
    """A shape on the diagram. Owned by the engine; the core only reads it."""
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    type: str = NodeKind.SWITCH.value
    x: float = 0.0
    y: float = 0.0
    width: float = 100.0
    height: float = 80.0
    incoming: List[str] = field(default_factory=list)
    outgoing: List[str] = field(default_factory=list)
    business_object: Dict[str, Any] = field(default_factory=dict)

    @property
    def incoming_count(self) -> int:
        return len(self.incoming or [])

    @property
    def outgoing_count(self) -> int:
        return len(self.outgoing or [])

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'id': self.id,
            'type': self.type,
            'x': self.x,
            'y': self.y,
            'width': self.width,
            'height': self.height,
            'incoming': list(self.incoming),
            'outgoing': list(self.outgoing),
        }


@dataclass
class Connection:
    """Represents a committed sequence flow between two graph nodes."""
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    source_id: str = ""
    target_id: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {'id': self.id, 'source': self.source_id, 'target': self.target_id}


@dataclass(frozen=True)
class ConnectionAttempt:
    """A candidate edge for a single connect gesture. Either end may be absent."""
    source: Optional[GraphNode] = None
    target: Optional[GraphNode] = None


@dataclass(frozen=True)
class ConnectionVerdict:
    """Result of validating a connection attempt."""
    verdict: Verdict
    reason: Optional[str] = None
    message: Optional[str] = None
    side: Optional[ViolationSide] = None
    node_id: Optional[str] = None
    node_type: Optional[str] = None

    @property
    def accepted(self) -> bool:
        return self.verdict is Verdict.ACCEPT

    @classmethod
    def accept(cls) -> 'ConnectionVerdict':
        return cls(Verdict.ACCEPT)

    @classmethod
    def reject(cls, reason: str, message: str, side: ViolationSide,
               node: GraphNode) -> 'ConnectionVerdict':
        return cls(Verdict.REJECT, reason=reason, message=message, side=side,
                   node_id=node.id, node_type=node.type)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'verdict': self.verdict.value,
            'reason': self.reason,
            'message': self.message,
            'side': self.side.value if self.side else None,
            'node_id': self.node_id,
            'node_type': self.node_type,
        }
