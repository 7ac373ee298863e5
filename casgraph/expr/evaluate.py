"""Evaluation of expression trees against bound values."""

from __future__ import annotations

import math
import operator
from typing import Callable, Dict, List, Mapping, Sequence, Tuple

from .ast import BinaryOp, BinOp, Expression, Literal, UnaryOp, UnOp, Variable


class ExprEvaluationError(RuntimeError):
    """Raised when bindings and values are out of step with an expression."""


def _divide(lhs: float, rhs: float) -> float:
    # IEEE-754 semantics: x/0 -> +-inf, 0/0 -> nan
    if rhs == 0.0:
        if lhs == 0.0 or math.isnan(lhs):
            return math.nan
        return math.copysign(math.inf, lhs) * math.copysign(1.0, rhs)
    return lhs / rhs


_BINARY_FUNCS: Dict[BinOp, Callable[[float, float], float]] = {
    BinOp.ADD: operator.add,
    BinOp.SUB: operator.sub,
    BinOp.MUL: operator.mul,
    BinOp.DIV: _divide,
}


def binding_index(bindings: Sequence[str]) -> Dict[str, int]:
    return {name: idx for idx, name in enumerate(bindings)}


def evaluate(expr: Expression, bindings: Sequence[str], values: Sequence[float]) -> float:
    """Evaluate ``expr`` where ``values[i]`` is the value bound to ``bindings[i]``."""
    if len(bindings) != len(values):
        raise ExprEvaluationError(
            f"Bindings and values differ in length: {len(bindings)} != {len(values)}"
        )
    return _evaluate(expr, binding_index(bindings), values)


def _evaluate(expr: Expression, index: Mapping[str, int], values: Sequence[float]) -> float:
    """Post-order walk with an explicit stack; operands pile up in ``results``."""
    results: List[float] = []
    stack: List[Tuple[Expression, bool]] = [(expr, False)]
    while stack:
        node, operands_ready = stack.pop()
        if isinstance(node, Literal):
            results.append(float(node.value))
        elif isinstance(node, Variable):
            try:
                results.append(float(values[index[node.name]]))
            except KeyError as exc:
                raise ExprEvaluationError(f"Unbound variable '{node.name}'") from exc
        elif isinstance(node, UnaryOp):
            if operands_ready:
                if node.op is UnOp.NEGATE:
                    results.append(-results.pop())
            else:
                stack.append((node, True))
                stack.append((node.operand, False))
        elif isinstance(node, BinaryOp):
            if operands_ready:
                rhs = results.pop()
                lhs = results.pop()
                results.append(_BINARY_FUNCS[node.op](lhs, rhs))
            else:
                stack.append((node, True))
                stack.append((node.right, False))
                stack.append((node.left, False))
        else:
            raise TypeError(f"Unsupported expression node: {type(node)!r}")
    return results[-1]


def format_float(value: float, precision: int = 3) -> str:
    """Round ``value`` for display, keeping infinities and NaN readable."""
    if math.isnan(value):
        return "nan"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    rounded = round(value, precision)
    if rounded == 0.0:
        rounded = 0.0
    return repr(rounded)


__all__ = ["ExprEvaluationError", "binding_index", "evaluate", "format_float"]
