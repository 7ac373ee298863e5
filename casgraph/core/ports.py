"""
Pin identifiers and pin type compatibility.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class PinKind(Enum):
    NUMBER = "number"
    STRING = "string"
    ANY = "any"

    def accepts(self, source: "PinKind") -> bool:
        """Whether an input of this kind may be wired to a ``source`` output."""
        return self is PinKind.ANY or self is source


@dataclass(frozen=True)
class PinDefinition:
    """Description of a node input/output pin."""

    kind: PinKind
    label: str = ""


@dataclass(frozen=True, order=True)
class OutPinId:
    node: int
    output: int


@dataclass(frozen=True, order=True)
class InPinId:
    node: int
    input: int


__all__ = ["InPinId", "OutPinId", "PinDefinition", "PinKind"]
