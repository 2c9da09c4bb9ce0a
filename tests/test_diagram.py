"""
Unit tests for the in-memory diagram engine.
"""

import gc
import weakref

import pytest

from flow_editor_core.diagram import (
    ContextPad, CreateService, Diagram, ElementFactory, GlobalConnect
)
from flow_editor_core.event_bus import CONNECT_START, EventBus
from flow_editor_core.exceptions import DuplicateNodeError, UnknownNodeError
from flow_editor_core.models import GraphNode


@pytest.fixture
def diagram():
    return Diagram()


def add(diagram, type_id, node_id):
    node = GraphNode(id=node_id, type=type_id)
    diagram.add_node(node)
    return node


class TestDiagram:
    """Test cases for Diagram."""

    def test_add_and_get_node(self, diagram):
        node = add(diagram, 'bpmn:UserTask', 'a')
        assert diagram.get_node('a') is node

    def test_duplicate_node(self, diagram):
        add(diagram, 'bpmn:UserTask', 'a')
        with pytest.raises(DuplicateNodeError):
            diagram.add_node(GraphNode(id='a'))

    def test_unknown_node(self, diagram):
        with pytest.raises(UnknownNodeError) as exc_info:
            diagram.get_node('missing')
        assert exc_info.value.node_id == 'missing'

    def test_connect_commits_edge(self, diagram):
        a = add(diagram, 'bpmn:UserTask', 'a')
        b = add(diagram, 'bpmn:EndEvent', 'b')

        connection, verdict = diagram.connect('a', 'b')

        assert verdict.accepted
        assert connection.source_id == 'a' and connection.target_id == 'b'
        assert a.outgoing == [connection.id]
        assert b.incoming == [connection.id]
        assert diagram.connections[connection.id] is connection

    def test_dangling_connect_creates_nothing(self, diagram):
        add(diagram, 'bpmn:UserTask', 'a')

        connection, verdict = diagram.connect('a', None)

        assert connection is None
        assert verdict.accepted
        assert diagram.connections == {}

    def test_prevented_connect_creates_nothing(self):
        bus = EventBus()
        diagram = Diagram(bus)
        add(diagram, 'bpmn:UserTask', 'a')
        add(diagram, 'bpmn:EndEvent', 'b')
        bus.on(CONNECT_START, lambda event: event.prevent_default(), 1500)

        connection, _ = diagram.connect('a', 'b')

        assert connection is None
        assert diagram.get_node('a').outgoing == []

    def test_remove_node_drops_incident_edges(self, diagram):
        a = add(diagram, 'bpmn:ServiceTask', 'a')
        add(diagram, 'bpmn:ServiceTask', 'b')
        c = add(diagram, 'bpmn:ServiceTask', 'c')
        diagram.connect('a', 'b')
        diagram.connect('b', 'c')

        diagram.remove_node('b')

        assert diagram.connections == {}
        assert a.outgoing == []
        assert c.incoming == []

    def test_to_dict(self, diagram):
        add(diagram, 'bpmn:UserTask', 'a')
        add(diagram, 'bpmn:EndEvent', 'b')
        diagram.connect('a', 'b')

        data = diagram.to_dict()

        assert [n['id'] for n in data['nodes']] == ['a', 'b']
        assert data['connections'][0]['source'] == 'a'


class TestServices:
    """Test cases for the element factory, create service and connect tool."""

    def test_element_factory_sizes(self):
        factory = ElementFactory()

        task = factory.create_shape(type='bpmn:UserTask')
        event = factory.create_shape(type='bpmn:IntermediateCatchEvent')
        unknown = factory.create_shape(type='bpmn:InclusiveGateway')

        assert (task.width, task.height) == (100, 80)
        assert (event.width, event.height) == (36, 36)
        assert (unknown.width, unknown.height) == (50, 50)

    def test_create_service_centers_shape(self, diagram):
        create = CreateService(diagram)
        shape = ElementFactory().create_shape(type='bpmn:UserTask')

        create.start({'x': 200, 'y': 100}, shape)

        assert (shape.x, shape.y) == (150, 60)
        assert diagram.nodes == {shape.id: shape}

    def test_removed_shapes_are_not_retained(self, diagram):
        create = CreateService(diagram)
        factory = ElementFactory()
        refs = []
        for _ in range(20):
            shape = create.start({}, factory.create_shape(type='bpmn:ScriptTask'))
            refs.append(weakref.ref(shape))
            diagram.remove_node(shape.id)
        del shape
        gc.collect()

        assert diagram.nodes == {}
        assert all(ref() is None for ref in refs)

    def test_global_connect_toggle(self):
        bus = EventBus()
        seen = []
        bus.on('global-connect.toggled', lambda event: seen.append(event.context['active']))
        tool = GlobalConnect(bus)

        assert tool.toggle() is True
        assert tool.toggle({'x': 1}) is False
        assert seen == [True, False]

    def test_context_pad_rejects_unknown_element(self, diagram):
        with pytest.raises(UnknownNodeError):
            ContextPad(diagram).get_context_pad_entries(GraphNode(id='ghost'))
