"""
Node kinds that can live in a :class:`~casgraph.core.graph.NodeGraph`.
"""

from __future__ import annotations

from typing import Any, Optional

from ..dbg import Debug
from ..expr.state import ExprNodeState
from .ports import PinDefinition, PinKind


class NodeError(Exception):
    """Base class for node-related failures."""


class GraphNode:
    """Base class describing a node's pins."""

    title = "Node"

    def inputs(self) -> int:
        return 0

    def outputs(self) -> int:
        return 0

    def input_pin(self, index: int) -> PinDefinition:
        raise NodeError(f"{self.title} node has no input {index}")

    def output_pin(self, index: int) -> PinDefinition:
        raise NodeError(f"{self.title} node has no output {index}")

    def output_value(self, index: int) -> Any:
        raise NodeError(f"{self.title} node has no output {index}")

    def _check_input(self, index: int) -> None:
        if not 0 <= index < self.inputs():
            raise NodeError(
                f"{self.title} node has {self.inputs()} inputs, got index {index}"
            )

    def _check_output(self, index: int) -> None:
        if not 0 <= index < self.outputs():
            raise NodeError(
                f"{self.title} node has {self.outputs()} outputs, got index {index}"
            )

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class NumberNode(GraphNode):
    """Editable numeric value with a single output."""

    title = "Number"

    def __init__(self, value: float = 0.0):
        self.value = float(value)

    def outputs(self) -> int:
        return 1

    def output_pin(self, index: int) -> PinDefinition:
        self._check_output(index)
        return PinDefinition(PinKind.NUMBER, "value")

    def output_value(self, index: int) -> float:
        self._check_output(index)
        return self.value

    def __repr__(self) -> str:
        return f"NumberNode({self.value!r})"


class StringNode(GraphNode):
    """Editable text with a single output."""

    title = "String"

    def __init__(self, value: str = ""):
        self.value = value

    def outputs(self) -> int:
        return 1

    def output_pin(self, index: int) -> PinDefinition:
        self._check_output(index)
        return PinDefinition(PinKind.STRING, "text")

    def output_value(self, index: int) -> str:
        self._check_output(index)
        return self.value

    def __repr__(self) -> str:
        return f"StringNode({self.value!r})"


class SinkNode(GraphNode):
    """Single input that displays whatever is wired into it."""

    title = "Sink"

    def inputs(self) -> int:
        return 1

    def input_pin(self, index: int) -> PinDefinition:
        self._check_input(index)
        return PinDefinition(PinKind.ANY, "value")


class ExprNode(Debug, GraphNode):
    """Expression node: text on input 0, one numeric input per variable.

    The number of inputs follows the expression: ``1 + len(bindings)``.
    """

    title = "Expr"

    def __init__(self, state: Optional[ExprNodeState] = None):
        super().__init__()
        self.state = state if state is not None else ExprNodeState()

    @property
    def text(self) -> str:
        return self.state.text

    def inputs(self) -> int:
        return self.state.input_count

    def outputs(self) -> int:
        return 1

    def input_pin(self, index: int) -> PinDefinition:
        self._check_input(index)
        if index == 0:
            return PinDefinition(PinKind.STRING, self.state.label_in(0))
        return PinDefinition(PinKind.NUMBER, self.state.label_in(index))

    def output_pin(self, index: int) -> PinDefinition:
        self._check_output(index)
        return PinDefinition(PinKind.NUMBER, "result")

    def output_value(self, index: int) -> float:
        self._check_output(index)
        return self.eval()

    def eval(self) -> float:
        return self._timed(self.state.eval)

    def __repr__(self) -> str:
        return f"ExprNode({self.state.text!r})"


__all__ = [
    "ExprNode",
    "GraphNode",
    "NodeError",
    "NumberNode",
    "SinkNode",
    "StringNode",
]
