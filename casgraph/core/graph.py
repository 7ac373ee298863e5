"""
In-memory node graph: nodes, wires, and expression pin maintenance.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterator, List, Optional, Tuple

import networkx as nx

from ..expr.reconcile import Patch
from .nodes import ExprNode, GraphNode, NodeError, NumberNode, StringNode
from .ports import InPinId, OutPinId
from .registry import NodeRegistry, registry_default
from .settings import DEFAULT_SETTINGS, GraphSettings

logger = logging.getLogger(__name__)

Wire = Tuple[OutPinId, InPinId]


class GraphError(RuntimeError):
    """Raised when a graph operation references missing nodes or breaks acyclicity."""


class NodeGraph:
    """Nodes keyed by integer id, wired output pin -> input pin.

    Wires are stored as edges of a ``networkx.MultiDiGraph`` keyed by
    ``(output, input)``. Each input pin holds at most one wire.
    """

    def __init__(
        self,
        *,
        settings: Optional[GraphSettings] = None,
        registry: Optional[NodeRegistry] = None,
    ):
        self.settings = settings or DEFAULT_SETTINGS
        self.registry = registry or registry_default
        self._graph = nx.MultiDiGraph()
        self._next_id = 0

    # ------------------------------------------------------------------
    # Nodes
    # ------------------------------------------------------------------

    def insert_node(self, node: GraphNode) -> int:
        if not isinstance(node, GraphNode):
            raise NodeError(f"Expected GraphNode, got {type(node)!r}")
        node_id = self._next_id
        self._next_id += 1
        self._graph.add_node(node_id, node=node)
        return node_id

    def add(self, kind: str) -> int:
        """Create a node of a registered ``kind`` and insert it."""
        return self.insert_node(self.registry.create(kind, self.settings))

    def add_from_output(self, kind: str, out_pin: OutPinId) -> int:
        """Create ``kind`` and wire ``out_pin`` into its input 0."""
        source = self.node(out_pin.node).output_pin(out_pin.output).kind
        if kind not in self.registry.kinds_accepting(source, self.settings):
            raise GraphError(f"{kind} node cannot take a {source.value} wire on input 0")
        node_id = self.add(kind)
        self.connect(out_pin, InPinId(node_id, 0))
        return node_id

    def add_from_input(self, kind: str, in_pin: InPinId) -> int:
        """Create ``kind`` and wire its output 0 into ``in_pin``."""
        target = self.node(in_pin.node).input_pin(in_pin.input).kind
        if kind not in self.registry.kinds_feeding(target, self.settings):
            raise GraphError(f"{kind} node cannot feed a {target.value} input")
        node_id = self.add(kind)
        self.connect(OutPinId(node_id, 0), in_pin)
        return node_id

    def remove_node(self, node_id: int) -> GraphNode:
        node = self.node(node_id)
        self._graph.remove_node(node_id)
        return node

    def node(self, node_id: int) -> GraphNode:
        try:
            return self._graph.nodes[node_id]["node"]
        except KeyError as exc:
            raise GraphError(f"Unknown node {node_id}") from exc

    def expr_node(self, node_id: int) -> ExprNode:
        node = self.node(node_id)
        if not isinstance(node, ExprNode):
            raise NodeError(f"Node {node_id} is a {node.title} node, not an Expr node")
        return node

    def nodes(self) -> Iterator[Tuple[int, GraphNode]]:
        for node_id, data in self._graph.nodes(data="node"):
            yield node_id, data

    def __len__(self) -> int:
        return self._graph.number_of_nodes()

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._graph

    # ------------------------------------------------------------------
    # Wires
    # ------------------------------------------------------------------

    def wires(self) -> List[Wire]:
        return sorted(
            (OutPinId(src, key[0]), InPinId(dst, key[1]))
            for src, dst, key in self._graph.edges(keys=True)
        )

    def remotes(self, in_pin: InPinId) -> List[OutPinId]:
        self.node(in_pin.node)
        return sorted(
            OutPinId(src, key[0])
            for src, _, key in self._graph.in_edges(in_pin.node, keys=True)
            if key[1] == in_pin.input
        )

    def connect(self, out_pin: OutPinId, in_pin: InPinId) -> bool:
        """Wire ``out_pin`` into ``in_pin`` if their pin kinds are compatible.

        Returns ``False`` without touching the graph when the kinds differ.
        Any wire already attached to ``in_pin`` is replaced.
        """
        source = self.node(out_pin.node).output_pin(out_pin.output)
        target = self.node(in_pin.node).input_pin(in_pin.input)
        if not target.kind.accepts(source.kind):
            logger.warning(
                "Rejected connection %s -> %s: %s output cannot feed %s input",
                out_pin,
                in_pin,
                source.kind.value,
                target.kind.value,
            )
            return False
        if not self.settings.allow_cycles and self._creates_cycle(out_pin.node, in_pin.node):
            raise GraphError(f"Connecting {out_pin} -> {in_pin} would create a cycle")

        self.drop_inputs(in_pin)
        self._attach(out_pin, in_pin)
        return True

    def disconnect(self, out_pin: OutPinId, in_pin: InPinId) -> bool:
        key = (out_pin.output, in_pin.input)
        if not self._graph.has_edge(out_pin.node, in_pin.node, key=key):
            return False
        self._graph.remove_edge(out_pin.node, in_pin.node, key=key)
        return True

    def drop_inputs(self, in_pin: InPinId) -> List[OutPinId]:
        """Remove every wire into ``in_pin`` and return their sources."""
        removed = self.remotes(in_pin)
        for remote in removed:
            self.disconnect(remote, in_pin)
        return removed

    def _attach(self, out_pin: OutPinId, in_pin: InPinId) -> None:
        self._graph.add_edge(out_pin.node, in_pin.node, key=(out_pin.output, in_pin.input))

    def _creates_cycle(self, src: int, dst: int) -> bool:
        return src == dst or nx.has_path(self._graph, dst, src)

    # ------------------------------------------------------------------
    # Expression nodes
    # ------------------------------------------------------------------

    def set_expr_text(self, node_id: int, text: str) -> bool:
        """Edit an expression node's text and keep its variable pins in step."""
        node = self.expr_node(node_id)
        changed = node.state.on_text_changed(text)
        if changed and node.state.last_patch is not None:
            self.apply_patch(node_id, node.state.last_patch)
        return changed

    def apply_patch(self, node_id: int, patch: Patch) -> None:
        """Mirror a binding patch onto the wires of expression node ``node_id``.

        Dropped bindings lose their wire; kept bindings whose position changed
        have their wire moved to the new pin without re-validating it. All
        moving wires are detached before any is re-attached.
        """
        self.expr_node(node_id)
        for drop in patch.drops:
            self.drop_inputs(InPinId(node_id, drop.old_index + 1))

        detached: List[Tuple[OutPinId, InPinId]] = []
        for keep in patch.moves:
            target = InPinId(node_id, keep.new_index + 1)
            for remote in self.drop_inputs(InPinId(node_id, keep.old_index + 1)):
                detached.append((remote, target))
        for remote, target in detached:
            self._attach(remote, target)

        if patch.drops or detached:
            logger.debug(
                "Node %d: dropped %d pins, moved %d wires",
                node_id,
                len(patch.drops),
                len(detached),
            )

    def pull_inputs(self, node_id: int) -> None:
        """Refresh an expression node from the wires attached to it.

        A string wired into the text pin replaces the text; numbers wired into
        variable pins overwrite the stored values.
        """
        node = self.expr_node(node_id)
        for remote in self.remotes(InPinId(node_id, 0)):
            self.set_expr_text(node_id, str(self.output_value(remote)))
        for index in range(len(node.state.bindings)):
            for remote in self.remotes(InPinId(node_id, index + 1)):
                node.state.set_value(index, self.output_value(remote))

    # ------------------------------------------------------------------
    # Values
    # ------------------------------------------------------------------

    def output_value(self, out_pin: OutPinId) -> Any:
        node = self.node(out_pin.node)
        if isinstance(node, ExprNode):
            self.pull_inputs(out_pin.node)
        return node.output_value(out_pin.output)

    def evaluate(self, node_id: int) -> Any:
        return self.output_value(OutPinId(node_id, 0))

    def sink_value(self, node_id: int) -> Optional[Any]:
        remotes = self.remotes(InPinId(node_id, 0))
        if not remotes:
            return None
        return self.output_value(remotes[0])

    def add_number(self, value: float = 0.0) -> int:
        return self.insert_node(NumberNode(value))

    def add_string(self, value: str = "") -> int:
        return self.insert_node(StringNode(value))

    def add_expr(self, text: Optional[str] = None) -> int:
        node_id = self.add("Expr")
        if text is not None:
            self.set_expr_text(node_id, text)
        return node_id

    def snapshot(self) -> Dict[int, Any]:
        """Current output 0 of every node that has one."""
        return {
            node_id: self.evaluate(node_id)
            for node_id, node in self.nodes()
            if node.outputs()
        }


__all__ = ["GraphError", "NodeGraph", "Wire"]
