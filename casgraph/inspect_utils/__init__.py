"""Inspection helpers for expression trees and node graphs."""

from .plain import (
    print_expr_tree,
    print_graph,
    render_expr_tree,
    render_graph,
)

__all__ = [
    "render_expr_tree",
    "print_expr_tree",
    "render_graph",
    "print_graph",
]
