# model/node.py

"""
Nodes of a Petri net.

A node is identified by its id; Places additionally carry a token count and
Transitions an optional ContextObject. The arcs touching a node are derived
by the owning PetriNet and attached when the net is built, so they always
agree with the net's arc collection.

Equality and hashing use the node kind and id only. The same place taken from
two snapshots with different markings therefore compares equal, which lets
formulas evaluated on one snapshot be checked against paths of another.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional, Tuple

from .context import ContextObject


@dataclass(frozen=True, slots=True)
class Arc:
    """Directed arc between two node ids. Duplicate arcs model arc weights."""

    source: str
    target: str

    def __str__(self) -> str:
        return f"{self.source} -> {self.target}"


@dataclass(frozen=True, slots=True)
class Node:
    id: str
    incoming_arcs: Tuple[Arc, ...] = field(default=(), compare=False, repr=False, kw_only=True)
    outgoing_arcs: Tuple[Arc, ...] = field(default=(), compare=False, repr=False, kw_only=True)
    # id of the node this one was copied from when unfolding, None otherwise
    origin: Optional[str] = field(default=None, compare=False, kw_only=True)

    @property
    def is_place(self) -> bool:
        return False

    @property
    def is_transition(self) -> bool:
        return False

    def __str__(self) -> str:
        return self.id


@dataclass(frozen=True, slots=True)
class Place(Node):
    markers: int = field(default=0, compare=False)

    @property
    def is_place(self) -> bool:
        return True

    @property
    def is_marked(self) -> bool:
        return self.markers > 0


@dataclass(frozen=True, slots=True)
class Transition(Node):
    context: Optional[ContextObject] = field(default=None, compare=False)

    @property
    def is_transition(self) -> bool:
        return True
