"""
Flow modeler: the diagram engine with the flow editor customizations installed.

    user gesture → event bus → connection rules (may veto) → engine commit
                                                        → renderer draws nodes

The palette and the context pad filter are queried by the UI and take no part
in the validation/render pipeline.
"""

import logging
from typing import Callable, Dict, List, Optional, Tuple

from .config import EditorSettings
from .connect_rules import ConnectionRuleValidator
from .context_pad import ContextPadFilter
from .diagram import ContextPad, CreateService, Diagram, ElementFactory, GlobalConnect
from .event_bus import EventBus
from .exceptions import FlowEditorError, UnknownToolError
from .models import Connection, ConnectionVerdict, GraphNode
from .node_types import NodeTypeRegistry, get_registry
from .palette import PaletteEntry, PaletteProvider
from .renderer import BaseRenderer, CustomRenderer, RendererRegistry
from .svg import DrawSurface


class FlowModeler:
    """Wires the engine services and the customization modules together."""

    def __init__(self, settings: Optional[EditorSettings] = None,
                 registry: Optional[NodeTypeRegistry] = None,
                 notify: Optional[Callable[[ConnectionVerdict], None]] = None):
        self.logger = logging.getLogger(__name__)
        self.settings = settings or EditorSettings()
        self.registry = registry or get_registry()
        self.notifications: List[ConnectionVerdict] = []

        # Engine services
        self.event_bus = EventBus()
        self.diagram = Diagram(self.event_bus)
        self.element_factory = ElementFactory(self.registry)
        self.create = CreateService(self.diagram)
        self.global_connect = GlobalConnect(self.event_bus)
        self.renderers = RendererRegistry(BaseRenderer())

        # Customizations
        self.connect_rules = ConnectionRuleValidator(
            self.registry, notify=notify or self.notifications.append,
            locale=self.settings.locale,
        )
        self.connect_rules.register(self.event_bus)
        self.custom_renderer = CustomRenderer(
            self.renderers.base_renderer, self.registry,
            icon_base_url=self.settings.icon_base_url,
        )
        self.renderers.register(self.custom_renderer)
        self.palette = PaletteProvider(self.create, self.element_factory,
                                       self.global_connect, self.registry,
                                       locale=self.settings.locale)
        self.context_pad = ContextPadFilter(ContextPad(self.diagram).get_context_pad_entries)

    def palette_entries(self) -> Dict[str, PaletteEntry]:
        return self.palette.get_palette_entries()

    def create_node(self, entry_id: str, x: float = 0.0, y: float = 0.0) -> GraphNode:
        """Run a palette create entry at a canvas position."""
        entry = self.palette_entries().get(entry_id)
        if entry is None:
            raise UnknownToolError(entry_id)
        if entry.node_type is None:
            raise FlowEditorError(f"Palette entry {entry_id} does not create a node",
                                  {'tool_id': entry_id})
        return self.palette.trigger(entry_id, 'click', {'x': x, 'y': y})

    def connect(self, source_id: Optional[str],
                target_id: Optional[str]) -> Tuple[Optional[Connection], ConnectionVerdict]:
        return self.diagram.connect(source_id, target_id)

    def check_connection(self, source_id: Optional[str],
                         target_id: Optional[str]) -> ConnectionVerdict:
        """Evaluate the rules for a prospective connection without committing it."""
        source = self.diagram.get_node(source_id) if source_id else None
        target = self.diagram.get_node(target_id) if target_id else None
        return self.connect_rules.validate(source, target)

    def context_pad_entries(self, node_id: str) -> Dict:
        return self.context_pad(self.diagram.get_node(node_id))

    def draw(self, node_id: str, surface: Optional[DrawSurface] = None) -> DrawSurface:
        surface = surface if surface is not None else DrawSurface()
        self.renderers.draw_shape(surface, self.diagram.get_node(node_id))
        return surface

    def render_svg(self, node_id: str) -> str:
        return self.renderers.render_svg(self.diagram.get_node(node_id))

    def shape_path(self, node_id: str) -> str:
        return self.renderers.get_shape_path(self.diagram.get_node(node_id))
