"""
Flow Editor Core - connection rules and custom rendering for the FlowHub process editor.

This package provides the node type registry, the interactive connection rule
validator, the type-dispatched shape renderer, the tool palette and the context
pad filter that customize a BPMN diagram engine for FlowHub workflows.
"""

__version__ = "0.1.0"
__author__ = "FlowHub Development Team"

from .models import (
    NodeKind, ShapeKind, Verdict, ViolationSide, UNBOUNDED,
    NodeTypeDescriptor, GraphNode, Connection, ConnectionAttempt, ConnectionVerdict
)
from .node_types import NodeTypeRegistry, NODE_TYPES, get_registry
from .event_bus import EventBus, Event
from .connect_rules import ConnectionRuleValidator
from .renderer import BaseRenderer, CustomRenderer, RendererRegistry, RenderRecipe
from .svg import DrawSurface, SvgElement
from .palette import PaletteProvider, PaletteEntry
from .context_pad import ContextPadFilter, filter_context_pad_entries
from .diagram import Diagram, ElementFactory, CreateService, GlobalConnect, ContextPad
from .modeler import FlowModeler
from .config import EditorSettings
from .exceptions import FlowEditorError, UnknownNodeError, UnknownToolError

__all__ = [
    "NodeKind",
    "ShapeKind",
    "Verdict",
    "ViolationSide",
    "UNBOUNDED",
    "NodeTypeDescriptor",
    "GraphNode",
    "Connection",
    "ConnectionAttempt",
    "ConnectionVerdict",
    "NodeTypeRegistry",
    "NODE_TYPES",
    "get_registry",
    "EventBus",
    "Event",
    "ConnectionRuleValidator",
    "BaseRenderer",
    "CustomRenderer",
    "RendererRegistry",
    "RenderRecipe",
    "DrawSurface",
    "SvgElement",
    "PaletteProvider",
    "PaletteEntry",
    "ContextPadFilter",
    "filter_context_pad_entries",
    "Diagram",
    "ElementFactory",
    "CreateService",
    "GlobalConnect",
    "ContextPad",
    "FlowModeler",
    "EditorSettings",
    "FlowEditorError",
    "UnknownNodeError",
    "UnknownToolError",
]
