"""
Node Type Registry: the fixed catalog of semantic node kinds.

Each kind the editor can place on the canvas is declared exactly once here,
together with its structural constraints (how many incoming / outgoing
sequence flows it tolerates) and its rendering descriptor (base shape class
and icon). Nothing else in the package hard-codes per-kind behavior: the
connection rules read the degree limits and the renderer reads the shape
and icon from the descriptor.

                     in   out   shape        icon
    Start            ∞    ∞     engine       -
    End              ∞    ∞     engine       -
    Wait (timer)     ∞    ∞     event+icon   timer.svg
    Switch           ∞    1     rounded      switch-task.svg
    Join             ∞    1     rounded      join-task.svg
    Broadcast        1    ∞     rounded      broadcast-task.svg
    Join&Broadcast   ∞    ∞     rounded      join-broadcast-task.svg
    Condition Flow   ∞    ∞     diamond      condition-flow.svg
    Rollback         ∞    ∞     diamond      rollback.svg

Unknown tags never fail: they resolve to a default task descriptor, or to a
default gateway descriptor when the tag names a gateway.
"""

from typing import Dict, Iterator, List, Optional, Union

from .models import (
    NodeKind, NodeTypeDescriptor, ShapeKind, UNBOUNDED
)


TASK_SIZE = (100, 80)
GATEWAY_SIZE = (50, 50)
EVENT_SIZE = (36, 36)

DEFAULT_TASK_ICON = "default-task.svg"
DEFAULT_GATEWAY_ICON = "default-gateway.svg"


# =============================================================================
# REJECTION MESSAGES: (locale → side → text)
# =============================================================================

def _messages(label: str, outgoing: bool = False, incoming: bool = False) -> Dict[str, Dict[str, str]]:
    catalog: Dict[str, Dict[str, str]] = {'en': {}, 'vi': {}}
    if outgoing:
        catalog['en']['source'] = f"{label} allows only 1 outgoing connection"
        catalog['vi']['source'] = f"{label} chỉ được 1 outgoing connection"
    if incoming:
        catalog['en']['target'] = f"{label} accepts only 1 incoming connection"
        catalog['vi']['target'] = f"{label} chỉ nhận 1 incoming connection"
    return catalog


# =============================================================================
# DESCRIPTOR TABLE: declaration order is palette order
# =============================================================================

NODE_TYPES: Dict[NodeKind, NodeTypeDescriptor] = {
    NodeKind.START: NodeTypeDescriptor(
        type_id=NodeKind.START.value,
        label="Start Transition",
        shape_kind=ShapeKind.ENGINE_DEFAULT,
        default_size=EVENT_SIZE,
    ),
    NodeKind.END: NodeTypeDescriptor(
        type_id=NodeKind.END.value,
        label="End Transition",
        shape_kind=ShapeKind.ENGINE_DEFAULT,
        default_size=EVENT_SIZE,
    ),
    NodeKind.WAIT: NodeTypeDescriptor(
        type_id=NodeKind.WAIT.value,
        label="Wait Task",
        shape_kind=ShapeKind.DECORATED_EVENT,
        icon_ref="timer.svg",
        default_size=EVENT_SIZE,
    ),
    NodeKind.SWITCH: NodeTypeDescriptor(
        type_id=NodeKind.SWITCH.value,
        label="Switch Task",
        max_outgoing=1,
        shape_kind=ShapeKind.ROUNDED_TASK,
        icon_ref="switch-task.svg",
        default_size=TASK_SIZE,
        messages=_messages("Switch Task", outgoing=True),
    ),
    NodeKind.JOIN: NodeTypeDescriptor(
        type_id=NodeKind.JOIN.value,
        label="Join Task",
        max_outgoing=1,
        shape_kind=ShapeKind.ROUNDED_TASK,
        icon_ref="join-task.svg",
        default_size=TASK_SIZE,
        messages=_messages("Join Task", outgoing=True),
    ),
    NodeKind.BROADCAST: NodeTypeDescriptor(
        type_id=NodeKind.BROADCAST.value,
        label="Broadcast Task",
        max_incoming=1,
        shape_kind=ShapeKind.ROUNDED_TASK,
        icon_ref="broadcast-task.svg",
        default_size=TASK_SIZE,
        messages=_messages("Broadcast Task", incoming=True),
    ),
    NodeKind.JOIN_BROADCAST: NodeTypeDescriptor(
        type_id=NodeKind.JOIN_BROADCAST.value,
        label="Join & Broadcast Task",
        shape_kind=ShapeKind.ROUNDED_TASK,
        icon_ref="join-broadcast-task.svg",
        default_size=TASK_SIZE,
    ),
    NodeKind.CONDITION_FLOW: NodeTypeDescriptor(
        type_id=NodeKind.CONDITION_FLOW.value,
        label="Condition Flow",
        shape_kind=ShapeKind.DIAMOND_GATEWAY,
        icon_ref="condition-flow.svg",
        default_size=GATEWAY_SIZE,
    ),
    NodeKind.ROLLBACK: NodeTypeDescriptor(
        type_id=NodeKind.ROLLBACK.value,
        label="Rollback Flow",
        shape_kind=ShapeKind.DIAMOND_GATEWAY,
        icon_ref="rollback.svg",
        default_size=GATEWAY_SIZE,
    ),
}


def is_gateway_tag(type_id: str) -> bool:
    """Check whether a tag names a gateway (branching/merging) element."""
    local_name = (type_id or "").rsplit(":", 1)[-1]
    return local_name.endswith("Gateway")


def is_event_tag(type_id: str) -> bool:
    """Check whether a tag names an event element."""
    local_name = (type_id or "").rsplit(":", 1)[-1]
    return local_name.endswith("Event")


class NodeTypeRegistry:
    """Read-only lookup over the node type descriptors."""

    def __init__(self, descriptors: Optional[Dict[NodeKind, NodeTypeDescriptor]] = None):
        table = NODE_TYPES if descriptors is None else descriptors
        self._by_tag: Dict[str, NodeTypeDescriptor] = {
            descriptor.type_id: descriptor for descriptor in table.values()
        }
        self._kinds: List[NodeKind] = list(table.keys())

    def __contains__(self, type_id: Union[str, NodeKind]) -> bool:
        return self._tag(type_id) in self._by_tag

    def __iter__(self) -> Iterator[NodeTypeDescriptor]:
        for kind in self._kinds:
            yield self._by_tag[kind.value]

    def __len__(self) -> int:
        return len(self._kinds)

    def get(self, type_id: Union[str, NodeKind]) -> NodeTypeDescriptor:
        """Resolve a tag to its descriptor, falling back to a default one."""
        tag = self._tag(type_id)
        descriptor = self._by_tag.get(tag)
        if descriptor is not None:
            return descriptor
        return default_descriptor(tag)

    def is_declared(self, type_id: Union[str, NodeKind]) -> bool:
        return self._tag(type_id) in self._by_tag

    def tags(self) -> List[str]:
        return [kind.value for kind in self._kinds]

    @staticmethod
    def _tag(type_id: Union[str, NodeKind]) -> str:
        if isinstance(type_id, NodeKind):
            return type_id.value
        return type_id or ""


def default_descriptor(type_id: str) -> NodeTypeDescriptor:
    """Build the fallback descriptor for a tag with no declaration."""
    if is_gateway_tag(type_id):
        return NodeTypeDescriptor(
            type_id=type_id,
            label=type_id,
            shape_kind=ShapeKind.DIAMOND_GATEWAY,
            icon_ref=DEFAULT_GATEWAY_ICON,
            default_size=GATEWAY_SIZE,
        )
    return NodeTypeDescriptor(
        type_id=type_id,
        label=type_id,
        shape_kind=ShapeKind.ROUNDED_TASK,
        icon_ref=DEFAULT_TASK_ICON,
        default_size=EVENT_SIZE if is_event_tag(type_id) else TASK_SIZE,
    )


# Global registry instance
registry = NodeTypeRegistry()


def get_registry() -> NodeTypeRegistry:
    """Get the global node type registry instance."""
    return registry
