"""
Flow-editor exceptions.

Rejected connections are not errors and never raise; these cover misuse of
the engine surface (unknown ids, unknown tools).
"""

from typing import Optional, Any, Dict


class FlowEditorError(Exception):
    """Base exception for all flow-editor errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.details = details or {}


class UnknownNodeError(FlowEditorError):
    """Raised when a node id does not exist on the diagram."""

    def __init__(self, node_id: str):
        super().__init__(f"Unknown node: {node_id}", {'node_id': node_id})
        self.node_id = node_id


class DuplicateNodeError(FlowEditorError):
    """Raised when a node id is added to the diagram twice."""

    def __init__(self, node_id: str):
        super().__init__(f"Node already exists: {node_id}", {'node_id': node_id})
        self.node_id = node_id


class UnknownToolError(FlowEditorError):
    """Raised when a palette entry id is not declared."""

    def __init__(self, tool_id: str):
        super().__init__(f"Unknown palette entry: {tool_id}", {'tool_id': tool_id})
        self.tool_id = tool_id
