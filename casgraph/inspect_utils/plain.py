"""Human-friendly console inspection for expressions and node graphs."""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from ..core.graph import NodeGraph
from ..core.nodes import ExprNode, GraphNode, NumberNode, SinkNode, StringNode
from ..core.ports import InPinId, OutPinId
from ..expr.ast import BinaryOp, Expression, Literal, UnaryOp, Variable
from ..expr.evaluate import ExprEvaluationError, format_float

ASCII_BRANCH_LAST = "+-- "
ASCII_BRANCH_MID = "|-- "
ASCII_PIPE_LAST = "    "
ASCII_PIPE_MID = "|   "


def _expr_label(expr: Expression) -> str:
    if isinstance(expr, Variable):
        return f"var {expr.name}"
    if isinstance(expr, Literal):
        return f"num {format_float(expr.value, precision=12)}"
    if isinstance(expr, UnaryOp):
        return f"unary {expr.op.value}"
    if isinstance(expr, BinaryOp):
        return f"binary {expr.op.symbol}"
    raise TypeError(f"Unsupported expression node: {type(expr)!r}")


def _expr_children(expr: Expression) -> Sequence[Expression]:
    if isinstance(expr, UnaryOp):
        return (expr.operand,)
    if isinstance(expr, BinaryOp):
        return (expr.left, expr.right)
    return ()


def render_expr_tree(expr: Expression) -> str:
    """Render an expression tree, one node per line.

    >>> print(render_expr_tree(parse_expr("a + 2")))
    binary +
    |-- var a
    +-- num 2.0
    """
    lines: List[str] = []
    # (node, line prefix, prefix handed to its children)
    stack: List[Tuple[Expression, str, str]] = [(expr, "", "")]
    while stack:
        node, prefix, child_prefix = stack.pop()
        lines.append(f"{prefix}{_expr_label(node)}")
        children = _expr_children(node)
        for idx in reversed(range(len(children))):
            is_last = idx == len(children) - 1
            branch = ASCII_BRANCH_LAST if is_last else ASCII_BRANCH_MID
            pipe = ASCII_PIPE_LAST if is_last else ASCII_PIPE_MID
            stack.append((children[idx], child_prefix + branch, child_prefix + pipe))
    return "\n".join(lines)


def _format_value(value: object, precision: int) -> str:
    if isinstance(value, float):
        return format_float(value, precision)
    return repr(value)


def _node_summary(graph: NodeGraph, node_id: int, node: GraphNode) -> str:
    precision = graph.settings.display_precision
    if isinstance(node, NumberNode):
        return format_float(node.value, precision)
    if isinstance(node, StringNode):
        return repr(node.value)
    if isinstance(node, ExprNode):
        try:
            result = format_float(graph.evaluate(node_id), precision)
        except ExprEvaluationError as exc:
            result = f"<error: {exc}>"
        marker = "" if node.state.is_valid else " (invalid, showing last valid)"
        return f"{node.text!r} = {result}{marker}"
    if isinstance(node, SinkNode):
        value = graph.sink_value(node_id)
        return "None" if value is None else _format_value(value, precision)
    return ""


def _remote_label(remotes: Sequence[OutPinId]) -> Optional[str]:
    if not remotes:
        return None
    return ", ".join(f"#{remote.node}.{remote.output}" for remote in remotes)


def render_graph(graph: NodeGraph) -> str:
    """Render every node with its input pins and incoming wires."""
    lines: List[str] = [f"NodeGraph ({len(graph)} nodes)"]
    entries = sorted(graph.nodes(), key=lambda item: item[0])
    for idx, (node_id, node) in enumerate(entries):
        is_last = idx == len(entries) - 1
        branch = ASCII_BRANCH_LAST if is_last else ASCII_BRANCH_MID
        summary = _node_summary(graph, node_id, node)
        lines.append(f"{branch}#{node_id} {node.title}: {summary}".rstrip())
        pipe = ASCII_PIPE_LAST if is_last else ASCII_PIPE_MID
        for pin in range(node.inputs()):
            definition = node.input_pin(pin)
            pin_branch = ASCII_BRANCH_LAST if pin == node.inputs() - 1 else ASCII_BRANCH_MID
            wired = _remote_label(graph.remotes(InPinId(node_id, pin)))
            detail = f"<- {wired}" if wired else _unwired_detail(node, pin, graph.settings.display_precision)
            lines.append(f"{pipe}{pin_branch}in {pin} [{definition.label}] {detail}".rstrip())
    return "\n".join(lines)


def _unwired_detail(node: GraphNode, pin: int, precision: int) -> str:
    if isinstance(node, ExprNode) and pin > 0:
        return f"= {format_float(node.state.values[pin - 1], precision)}"
    return ""


def print_graph(graph: NodeGraph) -> None:
    print(render_graph(graph))


def print_expr_tree(expr: Expression) -> None:
    print(render_expr_tree(expr))


__all__ = [
    "print_expr_tree",
    "print_graph",
    "render_expr_tree",
    "render_graph",
]
