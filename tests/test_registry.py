"""
Tests for node registration and console inspection.
"""

import pytest

from casgraph import GraphError, InPinId, NodeGraph, OutPinId, parse_expr
from casgraph.core.nodes import ExprNode, NumberNode
from casgraph.core.ports import PinKind
from casgraph.core.registry import NodeRegistry, RegistrationError, registry_default
from casgraph.inspect_utils import render_expr_tree, render_graph


class TestNodeRegistry:
    def test_builtin_kinds(self):
        assert registry_default.names[:4] == ["Number", "Expr", "String", "Sink"]

    def test_create_builtin(self):
        graph = NodeGraph()
        node_id = graph.add("Number")
        assert isinstance(graph.node(node_id), NumberNode)

    def test_unknown_kind(self):
        with pytest.raises(RegistrationError):
            NodeGraph().add("Missing")

    def test_duplicate_registration(self):
        registry = NodeRegistry()
        registry.register("Five", lambda settings: NumberNode(5.0))
        with pytest.raises(RegistrationError):
            registry.register("Five", lambda settings: NumberNode(5.0))

    def test_decorator_registration(self):
        registry = NodeRegistry()

        @registry.register("Pi")
        def pi_node(settings):
            return NumberNode(3.14159)

        graph = NodeGraph(registry=registry)
        assert graph.evaluate(graph.add("Pi")) == 3.14159
        assert "Pi" in registry

    def test_factory_must_return_node(self):
        registry = NodeRegistry()
        registry.register("Bad", lambda settings: 1.0)
        with pytest.raises(RegistrationError):
            registry.create("Bad")


class TestDroppedWireKinds:
    def test_kinds_taking_a_number_wire(self):
        assert registry_default.kinds_accepting(PinKind.NUMBER)[:1] == ["Sink"]
        assert "Expr" not in registry_default.kinds_accepting(PinKind.NUMBER)

    def test_kinds_taking_a_string_wire(self):
        assert registry_default.kinds_accepting(PinKind.STRING)[:2] == ["Expr", "Sink"]

    def test_kinds_feeding_a_number_pin(self):
        assert registry_default.kinds_feeding(PinKind.NUMBER)[:2] == ["Number", "Expr"]
        assert "String" not in registry_default.kinds_feeding(PinKind.NUMBER)

    def test_kinds_feeding_a_string_pin(self):
        assert registry_default.kinds_feeding(PinKind.STRING)[:1] == ["String"]

    def test_custom_registry(self):
        registry = NodeRegistry()
        registry.register("Five", lambda settings: NumberNode(5.0))
        assert registry.kinds_accepting(PinKind.ANY) == []
        assert registry.kinds_feeding(PinKind.ANY) == ["Five"]

    def test_add_from_output(self):
        graph = NodeGraph()
        text = graph.add_string("a * 2")
        expr = graph.add_from_output("Expr", OutPinId(text, 0))
        assert isinstance(graph.node(expr), ExprNode)
        assert graph.remotes(InPinId(expr, 0)) == [OutPinId(text, 0)]
        assert graph.evaluate(expr) == 0.0

    def test_add_from_input(self):
        graph = NodeGraph()
        expr = graph.add_expr("a * 2")
        number = graph.add_from_input("Number", InPinId(expr, 1))
        assert graph.remotes(InPinId(expr, 1)) == [OutPinId(number, 0)]

    def test_incompatible_kind_not_created(self):
        graph = NodeGraph()
        expr = graph.add_expr("a")
        with pytest.raises(GraphError):
            graph.add_from_input("String", InPinId(expr, 1))
        assert len(graph) == 1


class TestPlainRendering:
    def test_expr_tree(self):
        rendered = render_expr_tree(parse_expr("a + 2 * -b"))
        assert rendered.splitlines() == [
            "binary +",
            "|-- var a",
            "+-- binary *",
            "    |-- num 2.0",
            "    +-- unary -",
            "        +-- var b",
        ]

    def test_graph_listing(self):
        graph = NodeGraph()
        number = graph.add_number(3.0)
        expr = graph.add_expr("a * b")
        graph.connect(OutPinId(number, 0), InPinId(expr, 1))
        rendered = render_graph(graph)
        lines = rendered.splitlines()
        assert lines[0] == "NodeGraph (2 nodes)"
        assert "#0 Number: 3.0" in lines[1]
        assert "#1 Expr: 'a * b' = 0.0" in rendered
        assert "in 1 [a] <- #0.0" in rendered
        assert "in 2 [b] = 0.0" in rendered

    def test_long_chain_tree(self):
        lines = render_expr_tree(parse_expr("*".join(["a"] * 1500))).splitlines()
        assert len(lines) == 2999
        assert lines[-1] == "+-- var a"

    def test_invalid_expression_marked(self):
        graph = NodeGraph()
        expr = graph.add_expr("a")
        graph.set_expr_text(expr, "a +")
        assert "invalid" in render_graph(graph)
