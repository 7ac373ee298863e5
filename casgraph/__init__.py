"""Convenience exports for the casgraph package."""

from .expr import (
    ExprEvaluationError,
    ExprNodeState,
    ExprSyntaxError,
    evaluate,
    extract_bindings,
    parse_expr,
    reconcile,
)
from .node import (
    ExprNode,
    GraphError,
    GraphSettings,
    InPinId,
    NodeGraph,
    NumberNode,
    OutPinId,
    SinkNode,
    StringNode,
    register_node,
)

__all__ = [
    "ExprEvaluationError",
    "ExprNode",
    "ExprNodeState",
    "ExprSyntaxError",
    "GraphError",
    "GraphSettings",
    "InPinId",
    "NodeGraph",
    "NumberNode",
    "OutPinId",
    "SinkNode",
    "StringNode",
    "evaluate",
    "extract_bindings",
    "parse_expr",
    "reconcile",
    "register_node",
]
