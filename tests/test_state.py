"""
Tests for the expression node state.
"""

import pytest

from casgraph.expr import ExprNodeState, ExprSyntaxError, Literal, parse_expr


class TestInitialState:
    def test_defaults(self):
        state = ExprNodeState()
        assert state.text == "0"
        assert state.bindings == []
        assert state.values == []
        assert state.ast == Literal(0.0)
        assert state.eval() == 0.0
        assert state.input_count == 1

    def test_initial_text(self):
        state = ExprNodeState("a + b")
        assert state.bindings == ["a", "b"]
        assert state.values == [0.0, 0.0]


class TestOnTextChanged:
    def test_same_text_is_noop(self):
        state = ExprNodeState("a")
        assert state.on_text_changed("a") is False
        assert state.last_patch is not None

    def test_new_variables_report_change(self):
        state = ExprNodeState()
        assert state.on_text_changed("x * 2") is True
        assert state.bindings == ["x"]
        assert state.values == [0.0]
        assert len(state.values) == len(state.bindings)

    def test_same_bindings_replace_tree_only(self):
        state = ExprNodeState("a + b")
        state.set_value(0, 3.0)
        state.set_value(1, 4.0)
        patch = state.last_patch
        assert state.on_text_changed("a * b") is False
        assert state.ast == parse_expr("a * b")
        assert state.values == [3.0, 4.0]
        assert state.last_patch is patch
        assert state.eval() == 12.0

    def test_values_survive_renames(self):
        state = ExprNodeState("a + b")
        state.set_value(0, 1.0)
        state.set_value(1, 2.0)
        assert state.on_text_changed("a + c") is True
        assert state.bindings == ["a", "c"]
        assert state.values == [1.0, 0.0]

    def test_reorder_moves_values(self):
        state = ExprNodeState("a - b")
        state.set_value(0, 1.0)
        state.set_value(1, 2.0)
        assert state.on_text_changed("b - a") is True
        assert state.bindings == ["b", "a"]
        assert state.values == [2.0, 1.0]
        assert state.eval() == 1.0

    def test_invalid_text_leaves_state_untouched(self):
        state = ExprNodeState("a + b")
        state.set_value(0, 5.0)
        ast, bindings, values = state.ast, list(state.bindings), list(state.values)

        assert state.on_text_changed("a + b +") is False
        assert state.text == "a + b +"
        assert state.ast == ast
        assert state.bindings == bindings
        assert state.values == values
        assert isinstance(state.last_error, ExprSyntaxError)
        assert not state.is_valid
        assert state.eval() == 5.0

    def test_recovering_from_invalid_text(self):
        state = ExprNodeState("a")
        state.on_text_changed("a +")
        assert state.on_text_changed("a + z") is True
        assert state.is_valid
        assert state.bindings == ["a", "z"]

    def test_literal_drops_all_bindings(self):
        state = ExprNodeState("a + b")
        assert state.on_text_changed("4") is True
        assert state.bindings == []
        assert state.values == []
        assert state.last_patch.drops and not state.last_patch.new
        assert state.eval() == 4.0

    def test_default_value_for_new_bindings(self):
        state = ExprNodeState(default_value=1.5)
        state.on_text_changed("k")
        assert state.values == [1.5]

    def test_long_flat_chain(self):
        state = ExprNodeState()
        assert state.on_text_changed("+".join(["a"] * 1200)) is True
        assert state.bindings == ["a"]
        state.set_value(0, 1.0)
        assert state.eval() == 1200.0
        assert state.is_valid

    def test_deep_nesting_keeps_previous_tree(self):
        state = ExprNodeState("a")
        state.set_value(0, 3.0)
        assert state.on_text_changed("(" * 1000 + "x" + ")" * 1000) is False
        assert state.bindings == ["a"]
        assert state.values == [3.0]
        assert state.eval() == 3.0
        assert not state.is_valid
        assert "nested too deeply" in str(state.last_error)


class TestValueAccess:
    def test_set_value_bypasses_reconciliation(self):
        state = ExprNodeState("a")
        patch = state.last_patch
        state.set_value(0, 9.0)
        assert state.last_patch is patch
        assert state.eval() == 9.0

    def test_set_value_out_of_range(self):
        state = ExprNodeState("a")
        with pytest.raises(IndexError):
            state.set_value(1, 1.0)

    def test_value_of(self):
        state = ExprNodeState("a + b")
        state.set_value(1, 7.0)
        assert state.value_of("b") == 7.0
        with pytest.raises(KeyError):
            state.value_of("c")

    def test_labels(self):
        state = ExprNodeState("y + x")
        assert state.label_in(0) == "expr"
        assert state.label_in(1) == "y"
        assert state.label_in(2) == "x"
        with pytest.raises(IndexError):
            state.label_in(3)
