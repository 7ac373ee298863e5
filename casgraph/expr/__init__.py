"""Public entrypoints for the expression subsystem."""

from __future__ import annotations

from .ast import BinaryOp, BinOp, Expression, Literal, UnaryOp, UnOp, Variable, to_text
from .bindings import extend_bindings, extract_bindings
from .evaluate import ExprEvaluationError, evaluate, format_float
from .parser import ExprSyntaxError, parse_expr
from .reconcile import Drop, Insert, Keep, Patch, reconcile
from .state import ExprNodeState

__all__ = [
    "BinOp",
    "BinaryOp",
    "Drop",
    "ExprEvaluationError",
    "ExprNodeState",
    "ExprSyntaxError",
    "Expression",
    "Insert",
    "Keep",
    "Literal",
    "Patch",
    "UnOp",
    "UnaryOp",
    "Variable",
    "evaluate",
    "extend_bindings",
    "extract_bindings",
    "format_float",
    "parse_expr",
    "reconcile",
    "to_text",
]
