"""
Shape rendering for the flow editor.

Rendering is a table dispatch: a node's type tag resolves to a descriptor in
the node type registry, the descriptor's shape kind selects a recipe builder,
and the recipe (base primitive plus centered icon) is appended to a
caller-owned draw surface.

    DecoratedEvent  → engine default shape + 20×20 icon at the centroid
    DiamondGateway  → diamond on the bounding-box edge midpoints + 16×16 icon
    RoundedTask     → rounded rectangle (rx 8) over the full box + 24×24 icon

The custom renderer only claims the fixed list of custom tags; everything else
goes to the base renderer, which stands in for the engine's built-in one.
Boundary paths used for edge routing always come from the base renderer.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

from .models import GraphNode, NodeKind, NodeTypeDescriptor, ShapeKind
from .node_types import NodeTypeRegistry, get_registry, is_event_tag, is_gateway_tag
from .svg import (
    DrawSurface, SvgElement, circle_path, diamond_path,
    diamond_points, points_attr, rect_path
)


DEFAULT_RENDER_PRIORITY = 1000
HIGH_PRIORITY = 2000

CUSTOM_TYPES: Tuple[str, ...] = (
    NodeKind.SWITCH.value,
    NodeKind.JOIN_BROADCAST.value,
    NodeKind.BROADCAST.value,
    NodeKind.JOIN.value,
    NodeKind.CONDITION_FLOW.value,
    NodeKind.ROLLBACK.value,
    NodeKind.WAIT.value,
)

EVENT_ICON_SIZE = 20
GATEWAY_ICON_SIZE = 16
TASK_ICON_SIZE = 24
TASK_CORNER_RADIUS = 8
STROKE_WIDTH = 2
STROKE_COLOR = "#000000"
FILL_COLOR = "#ffffff"


@dataclass(frozen=True)
class IconPlacement:
    """An icon overlay: asset href and its box in node-local coordinates."""
    href: str
    x: float
    y: float
    width: float
    height: float

    def to_element(self) -> SvgElement:
        return SvgElement('image', (
            ('xlink:href', self.href),
            ('width', self.width),
            ('height', self.height),
            ('x', self.x),
            ('y', self.y),
        ))


@dataclass(frozen=True)
class RenderRecipe:
    """What to draw for one node: a base primitive (or the engine default) and an icon."""
    shape_kind: ShapeKind
    icon: IconPlacement
    shape: Optional[SvgElement] = None

    @property
    def delegates_base(self) -> bool:
        return self.shape is None

    def to_dict(self) -> Dict:
        return {
            'shape_kind': self.shape_kind.value,
            'shape': self.shape.to_dict() if self.shape else None,
            'icon': {
                'href': self.icon.href,
                'x': self.icon.x,
                'y': self.icon.y,
                'width': self.icon.width,
                'height': self.icon.height,
            },
        }


def centered_icon(href: str, width: float, height: float, size: float) -> IconPlacement:
    """Place a size×size icon at the center of a width×height box."""
    return IconPlacement(href, (width - size) / 2, (height - size) / 2, size, size)


# =============================================================================
# BASE RENDERER: the engine's built-in look
# =============================================================================

class BaseRenderer:
    """Default renderer: circles for events, diamonds for gateways, rectangles otherwise."""

    priority = DEFAULT_RENDER_PRIORITY

    def can_render(self, node: GraphNode) -> bool:
        return True

    def draw_shape(self, surface: DrawSurface, node: GraphNode) -> SvgElement:
        width, height = node.width, node.height
        if is_event_tag(node.type):
            radius = min(width, height) / 2
            shape = SvgElement.create('circle', cx=width / 2, cy=height / 2, r=radius,
                                      fill=FILL_COLOR, stroke=STROKE_COLOR,
                                      stroke_width=STROKE_WIDTH)
        elif is_gateway_tag(node.type):
            shape = SvgElement.create('polygon', points=points_attr(diamond_points(width, height)),
                                      fill=FILL_COLOR, stroke=STROKE_COLOR,
                                      stroke_width=STROKE_WIDTH)
        else:
            shape = SvgElement.create('rect', width=width, height=height, rx=10, ry=10,
                                      fill=FILL_COLOR, stroke=STROKE_COLOR,
                                      stroke_width=STROKE_WIDTH)
        return surface.append(shape)

    def get_shape_path(self, node: GraphNode) -> str:
        """Boundary path of a node in diagram coordinates."""
        if is_event_tag(node.type):
            return circle_path(node.x, node.y, node.width, node.height)
        if is_gateway_tag(node.type):
            return diamond_path(node.x, node.y, node.width, node.height)
        return rect_path(node.x, node.y, node.width, node.height)


# =============================================================================
# CUSTOM RENDERER
# =============================================================================

class CustomRenderer:
    """Draws the flow editor's custom node kinds over the base renderer."""

    def __init__(self, base_renderer: BaseRenderer,
                 registry: Optional[NodeTypeRegistry] = None,
                 icon_base_url: str = "/icons/",
                 priority: int = HIGH_PRIORITY):
        self.base_renderer = base_renderer
        self.registry = registry or get_registry()
        self.icon_base_url = icon_base_url if icon_base_url.endswith("/") else icon_base_url + "/"
        self.priority = priority
        self._builders: Dict[ShapeKind, Callable[[NodeTypeDescriptor, float, float], RenderRecipe]] = {
            ShapeKind.DECORATED_EVENT: self._decorated_event,
            ShapeKind.DIAMOND_GATEWAY: self._diamond_gateway,
            ShapeKind.ROUNDED_TASK: self._rounded_task,
        }

    def can_render(self, node: GraphNode) -> bool:
        return node.type in CUSTOM_TYPES

    def recipe_for(self, type_id: str, width: float, height: float) -> RenderRecipe:
        """Build the draw recipe for a type and geometry. Pure in its inputs."""
        descriptor = self.registry.get(type_id)
        builder = self._builders.get(descriptor.shape_kind, self._rounded_task)
        return builder(descriptor, width, height)

    def draw_shape(self, surface: DrawSurface, node: GraphNode) -> SvgElement:
        """Append the node's visual to the surface and return its main primitive."""
        recipe = self.recipe_for(node.type, node.width, node.height)
        if recipe.delegates_base:
            shape = self.base_renderer.draw_shape(surface, node)
        else:
            shape = surface.append(recipe.shape)
        surface.append(recipe.icon.to_element())
        return shape

    def get_shape_path(self, node: GraphNode) -> str:
        return self.base_renderer.get_shape_path(node)

    def icon_href(self, icon_ref: Optional[str], fallback: str) -> str:
        return self.icon_base_url + (icon_ref or fallback)

    def _decorated_event(self, descriptor: NodeTypeDescriptor, width: float,
                         height: float) -> RenderRecipe:
        href = self.icon_href(descriptor.icon_ref, "default-task.svg")
        return RenderRecipe(ShapeKind.DECORATED_EVENT,
                            centered_icon(href, width, height, EVENT_ICON_SIZE))

    def _diamond_gateway(self, descriptor: NodeTypeDescriptor, width: float,
                         height: float) -> RenderRecipe:
        diamond = SvgElement.create('polygon', points=points_attr(diamond_points(width, height)),
                                    fill=FILL_COLOR, stroke=STROKE_COLOR,
                                    stroke_width=STROKE_WIDTH)
        href = self.icon_href(descriptor.icon_ref, "default-gateway.svg")
        return RenderRecipe(ShapeKind.DIAMOND_GATEWAY,
                            centered_icon(href, width, height, GATEWAY_ICON_SIZE),
                            shape=diamond)

    def _rounded_task(self, descriptor: NodeTypeDescriptor, width: float,
                      height: float) -> RenderRecipe:
        rect = SvgElement.create('rect', width=width, height=height,
                                 rx=TASK_CORNER_RADIUS, ry=TASK_CORNER_RADIUS,
                                 fill=FILL_COLOR, stroke=STROKE_COLOR,
                                 stroke_width=STROKE_WIDTH)
        href = self.icon_href(descriptor.icon_ref, "default-task.svg")
        return RenderRecipe(ShapeKind.ROUNDED_TASK,
                            centered_icon(href, width, height, TASK_ICON_SIZE),
                            shape=rect)


class RendererRegistry:
    """Picks the highest-priority renderer willing to draw a node."""

    def __init__(self, base_renderer: Optional[BaseRenderer] = None):
        self.logger = logging.getLogger(__name__)
        self.base_renderer = base_renderer or BaseRenderer()
        self._renderers: List = [self.base_renderer]

    def register(self, renderer) -> None:
        self._renderers.append(renderer)
        self._renderers.sort(key=lambda r: -r.priority)

    def renderer_for(self, node: GraphNode):
        for renderer in self._renderers:
            if renderer.can_render(node):
                return renderer
        return self.base_renderer

    def draw_shape(self, surface: DrawSurface, node: GraphNode) -> SvgElement:
        renderer = self.renderer_for(node)
        self.logger.debug("Drawing %s %s with %s", node.type, node.id,
                          type(renderer).__name__)
        return renderer.draw_shape(surface, node)

    def get_shape_path(self, node: GraphNode) -> str:
        return self.renderer_for(node).get_shape_path(node)

    def render_svg(self, node: GraphNode) -> str:
        """Draw a node onto a fresh surface and serialize it."""
        surface = DrawSurface()
        self.draw_shape(surface, node)
        return surface.to_svg(node.width, node.height)
