"""
Public API surface for building expression graphs.
"""

from __future__ import annotations

from .core.graph import GraphError, NodeGraph
from .core.nodes import ExprNode, GraphNode, NodeError, NumberNode, SinkNode, StringNode
from .core.ports import InPinId, OutPinId, PinDefinition, PinKind
from .core.registry import (
    NodeRegistry,
    RegistrationError,
    register_node,
    registry_default,
)
from .core.settings import GraphSettings
from .expr.state import ExprNodeState


# ---------------------------------------------------------------------------
# Built-in node kinds registered on the default registry
# ---------------------------------------------------------------------------


@register_node("Number")
def number_node(settings: GraphSettings) -> NumberNode:
    return NumberNode(settings.default_value)


@register_node("Expr")
def expr_node(settings: GraphSettings) -> ExprNode:
    return ExprNode(
        ExprNodeState(
            settings.default_expression,
            default_value=settings.default_value,
        )
    )


@register_node("String")
def string_node(settings: GraphSettings) -> StringNode:
    return StringNode()


@register_node("Sink")
def sink_node(settings: GraphSettings) -> SinkNode:
    return SinkNode()


__all__ = [
    "ExprNode",
    "ExprNodeState",
    "GraphError",
    "GraphNode",
    "GraphSettings",
    "InPinId",
    "NodeError",
    "NodeGraph",
    "NodeRegistry",
    "NumberNode",
    "OutPinId",
    "PinDefinition",
    "PinKind",
    "RegistrationError",
    "SinkNode",
    "StringNode",
    "register_node",
    "registry_default",
]
