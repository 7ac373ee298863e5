"""AST node definitions for algebraic expressions."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple, Union


class UnOp(Enum):
    IDENTITY = "+"
    NEGATE = "-"


class BinOp(Enum):
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"

    @property
    def is_additive(self) -> bool:
        return self in (BinOp.ADD, BinOp.SUB)

    @property
    def symbol(self) -> str:
        return self.value


@dataclass(frozen=True)
class Variable:
    name: str


@dataclass(frozen=True)
class Literal:
    value: float


@dataclass(frozen=True)
class UnaryOp:
    op: UnOp
    operand: "Expression"


@dataclass(frozen=True)
class BinaryOp:
    left: "Expression"
    op: BinOp
    right: "Expression"


Expression = Union[Variable, Literal, UnaryOp, BinaryOp]


def _literal_text(value: float) -> str:
    if math.isnan(value):
        raise ValueError("NaN literal has no textual form")
    if math.isinf(value):
        return "1e999" if value > 0 else "-1e999"
    return repr(value)


def to_text(expr: Expression) -> str:
    """Render an expression back to fully parenthesised text.

    Trees produced by :func:`~casgraph.expr.parser.parse_expr` parse back to
    an equal tree. Literals that overflowed to infinity are written as
    ``1e999``; NaN has no literal form and raises ``ValueError``.
    """
    pieces: List[str] = []
    stack: List[Tuple[Expression, bool]] = [(expr, False)]
    while stack:
        node, operands_ready = stack.pop()
        if isinstance(node, Variable):
            pieces.append(node.name)
        elif isinstance(node, Literal):
            pieces.append(_literal_text(node.value))
        elif isinstance(node, UnaryOp):
            if not operands_ready:
                stack.append((node, True))
                stack.append((node.operand, False))
                continue
            operand = pieces.pop()
            if isinstance(node.operand, UnaryOp) or operand.startswith("-"):
                operand = f"({operand})"
            pieces.append(f"{node.op.value}{operand}")
        elif isinstance(node, BinaryOp):
            if not operands_ready:
                stack.append((node, True))
                stack.append((node.right, False))
                stack.append((node.left, False))
                continue
            right = pieces.pop()
            left = pieces.pop()
            pieces.append(f"({left} {node.op.symbol} {right})")
        else:
            raise TypeError(f"Unsupported expression node: {type(node)!r}")
    return pieces[-1]


__all__ = [
    "BinOp",
    "BinaryOp",
    "Expression",
    "Literal",
    "UnOp",
    "UnaryOp",
    "Variable",
    "to_text",
]
