"""
Node-kind registry used to populate "add node" menus.
"""

from __future__ import annotations

from typing import Callable, Dict, Iterator, List, Optional

from .nodes import GraphNode
from .ports import PinKind
from .settings import DEFAULT_SETTINGS, GraphSettings

NodeFactory = Callable[[GraphSettings], GraphNode]


class RegistrationError(RuntimeError):
    """Raised when node registration fails."""


class NodeRegistry:
    """Registry mapping display names to node factories."""

    def __init__(self) -> None:
        self._entries: Dict[str, NodeFactory] = {}

    def register(
        self,
        name: str,
        factory: Optional[NodeFactory] = None,
    ):
        if factory is None:
            def wrapper(f: NodeFactory) -> NodeFactory:
                self.register(name, f)
                return f

            return wrapper

        if name in self._entries:
            raise RegistrationError(f"Node kind '{name}' already registered")
        if not callable(factory):
            raise RegistrationError(f"Factory for '{name}' is not callable: {type(factory)!r}")
        self._entries[name] = factory
        return factory

    def get(self, name: str) -> NodeFactory:
        try:
            return self._entries[name]
        except KeyError as exc:
            raise RegistrationError(f"Unknown node kind '{name}'") from exc

    def create(self, name: str, settings: Optional[GraphSettings] = None) -> GraphNode:
        node = self.get(name)(settings or DEFAULT_SETTINGS)
        if not isinstance(node, GraphNode):
            raise RegistrationError(
                f"Factory for '{name}' produced an invalid node: {type(node)!r}"
            )
        return node

    def kinds_accepting(
        self, source: PinKind, settings: Optional[GraphSettings] = None
    ) -> List[str]:
        """Kinds whose input 0 can take a wire from a ``source`` output.

        These are the nodes that can be created at the loose end of a wire
        dragged out of an output pin.
        """
        names: List[str] = []
        for name in self._entries:
            node = self.create(name, settings)
            if node.inputs() and node.input_pin(0).kind.accepts(source):
                names.append(name)
        return names

    def kinds_feeding(
        self, target: PinKind, settings: Optional[GraphSettings] = None
    ) -> List[str]:
        """Kinds whose output 0 can be wired into a ``target`` input."""
        names: List[str] = []
        for name in self._entries:
            node = self.create(name, settings)
            if node.outputs() and target.accepts(node.output_pin(0).kind):
                names.append(name)
        return names

    @property
    def names(self) -> List[str]:
        return list(self._entries)

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)


registry_default = NodeRegistry()


def register_node(name: str, factory: Optional[NodeFactory] = None):
    """Register a node factory on the default registry."""
    return registry_default.register(name, factory)


__all__ = [
    "NodeFactory",
    "NodeRegistry",
    "RegistrationError",
    "register_node",
    "registry_default",
]
