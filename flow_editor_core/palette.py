"""
Tool palette for the flow editor.

The palette is a static, ordered table of entries. Create entries carry the
same action for click and drag-start: ask the element factory for a shape of
the entry's type and hand it to the create service at the gesture position.
The last entry toggles the global connect tool.
"""

from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

from .exceptions import UnknownToolError
from .models import NodeKind
from .node_types import NodeTypeRegistry, get_registry


Action = Callable[[Dict[str, Any]], Any]

# (entry id, kind, group, icon class) in palette order
CREATE_ENTRIES = (
    ('create.start-event', NodeKind.START, 'event', 'bpmn-icon-start-event-none'),
    ('create.end-event', NodeKind.END, 'event', 'bpmn-icon-end-event-none'),
    ('create.wait-event', NodeKind.WAIT, 'event', 'bpmn-icon-intermediate-event-catch-timer'),
    ('create.switch-task', NodeKind.SWITCH, 'activity', 'bpmn-icon-user-task'),
    ('create.join-task', NodeKind.JOIN, 'activity', 'bpmn-icon-manual-task'),
    ('create.broadcast-task', NodeKind.BROADCAST, 'activity', 'bpmn-icon-script-task'),
    ('create.join-broadcast-task', NodeKind.JOIN_BROADCAST, 'activity', 'bpmn-icon-service-task'),
    ('create.condition-flow-gateway', NodeKind.CONDITION_FLOW, 'gateway', 'bpmn-icon-gateway-xor'),
    ('create.rollback-gateway', NodeKind.ROLLBACK, 'gateway', 'bpmn-icon-gateway-parallel'),
)

# locale → title of the global connect tool
GLOBAL_CONNECT_TITLES = {
    'en': "Activate the connect tool",
    'vi': "Kích hoạt công cụ nối",
}
GLOBAL_CONNECT_TITLE = GLOBAL_CONNECT_TITLES['en']


@dataclass
class PaletteEntry:
    """One palette tool: group, icon class, title and gesture actions."""
    group: str
    class_name: Optional[str] = None
    title: Optional[str] = None
    action: Dict[str, Action] = field(default_factory=dict)
    separator: bool = False
    node_type: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Serializable view of the entry; actions are reported by gesture name only."""
        if self.separator:
            return {'group': self.group, 'separator': True}
        data = {
            'group': self.group,
            'className': self.class_name,
            'title': self.title,
            'actions': sorted(self.action),
        }
        if self.node_type:
            data['type'] = self.node_type
        return data


class PaletteProvider:
    """Declares the creatable node types and the global connect tool."""

    def __init__(self, create, element_factory, global_connect,
                 registry: Optional[NodeTypeRegistry] = None,
                 locale: str = 'en'):
        self._create = create
        self._element_factory = element_factory
        self._global_connect = global_connect
        self.registry = registry or get_registry()
        self.locale = locale

    def get_palette_entries(self) -> 'OrderedDict[str, PaletteEntry]':
        entries: 'OrderedDict[str, PaletteEntry]' = OrderedDict()

        for entry_id, kind, group, class_name in CREATE_ENTRIES:
            action = self._create_action(kind.value)
            entries[entry_id] = PaletteEntry(
                group=group,
                class_name=class_name,
                title=self.registry.get(kind).label,
                action={'dragstart': action, 'click': action},
                node_type=kind.value,
            )

        entries['tool-separator'] = PaletteEntry(group='tools', separator=True)
        entries['tool-global-connect'] = PaletteEntry(
            group='tools',
            class_name='bpmn-icon-connection-multi',
            title=GLOBAL_CONNECT_TITLES.get(self.locale, GLOBAL_CONNECT_TITLE),
            action={'click': self._global_connect.toggle},
        )
        return entries

    def trigger(self, entry_id: str, gesture: str = 'click',
                event: Optional[Dict[str, Any]] = None) -> Any:
        """Invoke an entry's action the way the palette UI would."""
        entry = self.get_palette_entries().get(entry_id)
        if entry is None or gesture not in entry.action:
            raise UnknownToolError(entry_id)
        return entry.action[gesture](event or {})

    def _create_action(self, node_type: str) -> Action:
        def create_shape(event: Dict[str, Any]):
            shape = self._element_factory.create_shape(type=node_type)
            return self._create.start(event, shape)
        return create_shape
