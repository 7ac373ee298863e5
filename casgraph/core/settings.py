"""
Configuration shared by a node graph and the nodes it creates.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..expr.state import DEFAULT_TEXT


@dataclass(frozen=True)
class GraphSettings:
    """Tunable behaviour of :class:`~casgraph.core.graph.NodeGraph`."""

    display_precision: int = 3
    default_expression: str = DEFAULT_TEXT
    default_value: float = 0.0
    allow_cycles: bool = False

    def __post_init__(self) -> None:
        if self.display_precision < 0:
            raise ValueError("display_precision must be non-negative")


DEFAULT_SETTINGS = GraphSettings()


__all__ = ["DEFAULT_SETTINGS", "GraphSettings"]
