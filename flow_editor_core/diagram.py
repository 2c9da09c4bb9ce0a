"""
In-memory diagram engine hosting the flow editor customizations.

This is the minimal engine surface the customization modules plug into:
a graph of shapes and sequence flows, an element factory, a create service
for palette gestures and the global connect tool. Connecting two shapes fires
``connect.start`` on the event bus; the edge is committed by the engine's own
listener at default priority, so any higher-priority listener can veto it
first.
"""

import logging
from collections import OrderedDict
from typing import Any, Dict, Optional, Tuple

from .event_bus import CONNECT_START, DEFAULT_PRIORITY, Event, EventBus
from .exceptions import DuplicateNodeError, UnknownNodeError
from .models import Connection, ConnectionVerdict, GraphNode
from .node_types import NodeTypeRegistry, get_registry


class Diagram:
    """Holds the shapes and connections of one process graph."""

    def __init__(self, event_bus: Optional[EventBus] = None):
        self.logger = logging.getLogger(__name__)
        self.event_bus = event_bus or EventBus()
        self.nodes: Dict[str, GraphNode] = {}
        self.connections: Dict[str, Connection] = {}
        self.event_bus.on(CONNECT_START, self._commit_connection, DEFAULT_PRIORITY)

    def add_node(self, node: GraphNode) -> str:
        """Add a node to the diagram and return its ID."""
        if node.id in self.nodes:
            raise DuplicateNodeError(node.id)
        self.nodes[node.id] = node
        self.event_bus.fire('shape.added', element=node)
        return node.id

    def get_node(self, node_id: str) -> GraphNode:
        try:
            return self.nodes[node_id]
        except KeyError:
            raise UnknownNodeError(node_id) from None

    def remove_node(self, node_id: str) -> GraphNode:
        """Remove a node and every connection touching it."""
        node = self.get_node(node_id)
        for connection_id in list(node.incoming) + list(node.outgoing):
            if connection_id in self.connections:
                self.remove_connection(connection_id)
        del self.nodes[node_id]
        self.event_bus.fire('shape.removed', element=node)
        return node

    def connect(self, source_id: Optional[str], target_id: Optional[str]) -> Tuple[Optional[Connection], ConnectionVerdict]:
        """Run a connect gesture between two nodes.

        Returns the committed connection (None if vetoed or dangling) together
        with the verdict the rule listeners left on the event.
        """
        source = self.get_node(source_id) if source_id else None
        target = self.get_node(target_id) if target_id else None
        event = self.event_bus.fire(CONNECT_START, source=source, target=target)
        verdict = event.context.get('verdict') or ConnectionVerdict.accept()
        return event.context.get('connection'), verdict

    def remove_connection(self, connection_id: str) -> Connection:
        connection = self.connections.pop(connection_id)
        source = self.nodes.get(connection.source_id)
        target = self.nodes.get(connection.target_id)
        if source is not None and connection_id in source.outgoing:
            source.outgoing.remove(connection_id)
        if target is not None and connection_id in target.incoming:
            target.incoming.remove(connection_id)
        return connection

    def _commit_connection(self, event: Event):
        if event.default_prevented:
            return None
        source = event.context.get('source')
        target = event.context.get('target')
        if source is None or target is None:
            return None
        connection = Connection(source_id=source.id, target_id=target.id)
        self.connections[connection.id] = connection
        source.outgoing.append(connection.id)
        target.incoming.append(connection.id)
        event.context['connection'] = connection
        self.logger.debug("Committed connection %s: %s -> %s",
                          connection.id, source.id, target.id)
        return connection

    def to_dict(self) -> Dict[str, Any]:
        return {
            'nodes': [node.to_dict() for node in self.nodes.values()],
            'connections': [connection.to_dict() for connection in self.connections.values()],
        }


class ElementFactory:
    """Builds graph nodes sized by their type's default size."""

    def __init__(self, registry: Optional[NodeTypeRegistry] = None):
        self.registry = registry or get_registry()

    def create_shape(self, type: str, **attrs) -> GraphNode:
        width, height = self.registry.get(type).default_size
        attrs.setdefault('width', width)
        attrs.setdefault('height', height)
        return GraphNode(type=type, **attrs)


class CreateService:
    """Places shapes produced by palette gestures onto the diagram."""

    def __init__(self, diagram: Diagram):
        self.diagram = diagram

    def start(self, event: Dict[str, Any], shape: GraphNode) -> GraphNode:
        """Center the shape on the gesture position and add it to the diagram."""
        x = float(event.get('x', 0.0))
        y = float(event.get('y', 0.0))
        shape.x = x - shape.width / 2
        shape.y = y - shape.height / 2
        self.diagram.add_node(shape)
        return shape


class GlobalConnect:
    """The palette's global connect tool: a mode toggle."""

    def __init__(self, event_bus: Optional[EventBus] = None):
        self.event_bus = event_bus
        self.active = False

    def toggle(self, event: Optional[Dict[str, Any]] = None) -> bool:
        self.active = not self.active
        if self.event_bus is not None:
            self.event_bus.fire('global-connect.toggled', active=self.active)
        return self.active


class ContextPad:
    """The engine's unfiltered per-node actions."""

    def __init__(self, diagram: Diagram):
        self.diagram = diagram

    def get_context_pad_entries(self, element: GraphNode) -> Dict[str, Dict[str, Any]]:
        self.diagram.get_node(element.id)
        entries = OrderedDict()
        entries['append.end-event'] = {'group': 'model', 'className': 'bpmn-icon-end-event-none',
                                       'title': 'Append end event'}
        entries['append.gateway'] = {'group': 'model', 'className': 'bpmn-icon-gateway-none',
                                     'title': 'Append gateway'}
        entries['append.append-task'] = {'group': 'model', 'className': 'bpmn-icon-task',
                                         'title': 'Append task'}
        entries['append.intermediate-event'] = {'group': 'model',
                                                'className': 'bpmn-icon-intermediate-event-none',
                                                'title': 'Append intermediate/boundary event'}
        entries['append.text-annotation'] = {'group': 'artifact',
                                             'className': 'bpmn-icon-text-annotation',
                                             'title': 'Add text annotation'}
        entries['replace'] = {'group': 'edit', 'className': 'bpmn-icon-screw-wrench',
                              'title': 'Change type'}
        entries['delete'] = {'group': 'edit', 'className': 'bpmn-icon-trash',
                             'title': 'Remove'}
        entries['connect'] = {'group': 'connect', 'className': 'bpmn-icon-connection-multi',
                              'title': 'Connect using sequence/message flow or association'}
        return entries
