"""Diffing of binding lists between successive parses.

Reconciliation is pure: it describes how the pins of an expression node must
change when its binding list changes, and leaves the actual wire surgery to
the graph layer (see :meth:`casgraph.core.graph.NodeGraph.apply_patch`).

Binding ``i`` is exposed on input pin ``i + 1``; pin 0 carries the text.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple, Union

from .evaluate import ExprEvaluationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Keep:
    """Binding present before and after; its value is carried over."""

    old_index: int
    new_index: int
    name: str
    value: float

    @property
    def moved(self) -> bool:
        return self.old_index != self.new_index


@dataclass(frozen=True)
class Drop:
    """Binding that disappeared; its pin and wire go away."""

    old_index: int
    name: str


@dataclass(frozen=True)
class Insert:
    """Binding that is new; its pin starts unconnected."""

    new_index: int
    name: str
    value: float = 0.0


OldEntry = Union[Keep, Drop]
NewEntry = Union[Keep, Insert]


@dataclass(frozen=True)
class Patch:
    old: Tuple[OldEntry, ...]
    new: Tuple[NewEntry, ...]

    @property
    def bindings(self) -> List[str]:
        return [entry.name for entry in self.new]

    def values(self) -> List[float]:
        return [entry.value for entry in self.new]

    @property
    def keeps(self) -> List[Keep]:
        return [entry for entry in self.old if isinstance(entry, Keep)]

    @property
    def drops(self) -> List[Drop]:
        return [entry for entry in self.old if isinstance(entry, Drop)]

    @property
    def moves(self) -> List[Keep]:
        return [entry for entry in self.keeps if entry.moved]

    @property
    def inserts(self) -> List[Insert]:
        return [entry for entry in self.new if isinstance(entry, Insert)]

    @property
    def is_identity(self) -> bool:
        return len(self.old) == len(self.new) and all(
            isinstance(entry, Keep) and not entry.moved for entry in self.old
        )


def reconcile(
    old_bindings: Sequence[str],
    old_values: Sequence[float],
    new_bindings: Sequence[str],
    *,
    default: float = 0.0,
) -> Patch:
    """Map ``old_bindings`` onto ``new_bindings`` by name."""
    if len(old_bindings) != len(old_values):
        raise ExprEvaluationError(
            f"Bindings and values differ in length: {len(old_bindings)} != {len(old_values)}"
        )

    if len(set(new_bindings)) != len(new_bindings):
        duplicates = sorted({name for name in new_bindings if new_bindings.count(name) > 1})
        raise ValueError(f"Duplicate bindings in new binding list: {', '.join(duplicates)}")

    old_index: Dict[str, int] = {}
    for idx, name in enumerate(old_bindings):
        old_index.setdefault(name, idx)

    old_entries: List[Optional[OldEntry]] = [None] * len(old_bindings)
    new_entries: List[NewEntry] = []
    for new_idx, name in enumerate(new_bindings):
        idx = old_index.get(name)
        if idx is None:
            new_entries.append(Insert(new_index=new_idx, name=name, value=default))
            continue
        keep = Keep(old_index=idx, new_index=new_idx, name=name, value=float(old_values[idx]))
        old_entries[idx] = keep
        new_entries.append(keep)

    for idx, name in enumerate(old_bindings):
        if old_entries[idx] is None:
            old_entries[idx] = Drop(old_index=idx, name=name)

    patch = Patch(old=tuple(old_entries), new=tuple(new_entries))
    logger.debug(
        "Reconciled %d -> %d bindings: %d kept (%d moved), %d dropped, %d inserted",
        len(old_bindings),
        len(new_bindings),
        len(patch.keeps),
        len(patch.moves),
        len(patch.drops),
        len(patch.inserts),
    )
    return patch


__all__ = ["Drop", "Insert", "Keep", "Patch", "reconcile"]
