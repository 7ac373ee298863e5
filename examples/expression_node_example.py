"""
Demonstrate live editing of an expression node.

Two number nodes feed an expression; editing the text keeps the wires on the
variables that survive the edit. Run with::

    python examples/expression_node_example.py
"""

import logging

from casgraph import InPinId, NodeGraph, OutPinId
from casgraph.inspect_utils import print_expr_tree, print_graph


def main() -> None:
    logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    graph = NodeGraph()
    width = graph.add_number(4.0)
    height = graph.add_number(2.5)
    area = graph.add_expr("width * height")
    sink = graph.add("Sink")

    graph.connect(OutPinId(width, 0), InPinId(area, 1))
    graph.connect(OutPinId(height, 0), InPinId(area, 2))
    graph.connect(OutPinId(area, 0), InPinId(sink, 0))
    print_graph(graph)

    print("\n-- half-typed edit, last valid expression stays active --")
    graph.set_expr_text(area, "height * width +")
    print_graph(graph)

    print("\n-- variables swapped, wires follow their names --")
    graph.set_expr_text(area, "height * width + margin")
    print_graph(graph)

    print("\n-- expression tree --")
    print_expr_tree(graph.expr_node(area).state.ast)


if __name__ == "__main__":
    main()
