"""Free-variable discovery for expression trees."""

from __future__ import annotations

from typing import List

from .ast import BinaryOp, Expression, Literal, UnaryOp, Variable


def extend_bindings(expr: Expression, bindings: List[str]) -> None:
    """Append names referenced by ``expr`` that are not yet in ``bindings``.

    Traversal is depth-first and left-to-right, so the resulting order is the
    order in which names first appear in the source text.
    """
    seen = set(bindings)
    stack: List[Expression] = [expr]
    while stack:
        node = stack.pop()
        if isinstance(node, Variable):
            if node.name not in seen:
                seen.add(node.name)
                bindings.append(node.name)
        elif isinstance(node, Literal):
            continue
        elif isinstance(node, UnaryOp):
            stack.append(node.operand)
        elif isinstance(node, BinaryOp):
            # left is popped first
            stack.append(node.right)
            stack.append(node.left)
        else:
            raise TypeError(f"Unsupported expression node: {type(node)!r}")


def extract_bindings(expr: Expression) -> List[str]:
    bindings: List[str] = []
    extend_bindings(expr, bindings)
    return bindings


__all__ = ["extend_bindings", "extract_bindings"]
