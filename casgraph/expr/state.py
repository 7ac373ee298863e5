"""State owned by an expression node: text, tree, bindings and values."""

from __future__ import annotations

import logging
from typing import List, Optional

from .ast import Expression, Literal
from .bindings import extract_bindings
from .evaluate import ExprEvaluationError, evaluate
from .parser import ExprSyntaxError, parse_expr
from .reconcile import Patch, reconcile

logger = logging.getLogger(__name__)

DEFAULT_TEXT = "0"


class ExprNodeState:
    """Expression text kept in sync with one numeric value per free variable.

    ``ast`` always holds the last successfully parsed tree, so a half-typed
    edit never disturbs evaluation. ``values[i]`` is the value bound to
    ``bindings[i]``, which the graph exposes on input pin ``i + 1``.
    """

    def __init__(self, text: str = DEFAULT_TEXT, *, default_value: float = 0.0):
        self.text = DEFAULT_TEXT
        self.ast: Expression = Literal(0.0)
        self.bindings: List[str] = []
        self.values: List[float] = []
        self.default_value = float(default_value)
        self.last_error: Optional[ExprSyntaxError] = None
        self.last_patch: Optional[Patch] = None
        if text != DEFAULT_TEXT:
            self.on_text_changed(text)

    @property
    def input_count(self) -> int:
        return 1 + len(self.bindings)

    @property
    def is_valid(self) -> bool:
        """Whether the current text is the source of the current tree."""
        return self.last_error is None

    def on_text_changed(self, new_text: str) -> bool:
        """Store ``new_text`` and report whether the binding list changed."""
        if new_text == self.text:
            return False
        self.text = new_text

        try:
            new_ast = parse_expr(new_text)
        except ExprSyntaxError as exc:
            self.last_error = exc
            logger.debug("Keeping previous expression, %r does not parse: %s", new_text, exc)
            return False

        new_bindings = extract_bindings(new_ast)
        if new_bindings == self.bindings:
            self.ast = new_ast
            self.last_error = None
            return False

        patch = reconcile(self.bindings, self.values, new_bindings, default=self.default_value)
        self.values = patch.values()
        self.bindings = new_bindings
        self.ast = new_ast
        self.last_patch = patch
        self.last_error = None
        return True

    def set_value(self, index: int, value: float) -> None:
        """Overwrite the value bound to ``bindings[index]``."""
        if not 0 <= index < len(self.values):
            raise IndexError(f"Binding index {index} out of range for {len(self.values)} bindings")
        self.values[index] = float(value)

    def value_of(self, name: str) -> float:
        try:
            return self.values[self.bindings.index(name)]
        except ValueError as exc:
            raise KeyError(name) from exc

    def label_in(self, pin: int) -> str:
        if pin == 0:
            return "expr"
        if not 1 <= pin <= len(self.bindings):
            raise IndexError(f"Input pin {pin} out of range")
        return self.bindings[pin - 1]

    def eval(self) -> float:
        if len(self.bindings) != len(self.values):
            raise ExprEvaluationError(
                f"Bindings and values differ in length: {len(self.bindings)} != {len(self.values)}"
            )
        return evaluate(self.ast, self.bindings, self.values)


__all__ = ["DEFAULT_TEXT", "ExprNodeState"]
