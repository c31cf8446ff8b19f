# logic/formula.py
# This file is part of Ariadne - A Petri Net Route Model Checker
#
# Base classes and primitives of the two-sorted branching-time logic

"""Formula trees for the two-sorted branching-time logic.

State formulas are evaluated at places, transition formulas at transitions.
Every formula node is an immutable dataclass offering three operations:

    evaluate(node, paths)  truth value at `node` over a precomputed path set
    symbol()               operator name
    write_formula()        fully parenthesized rendering ``SYMBOL(arg, ...)``

Evaluation is a pure function of (formula, node, paths). Paths alternate
places and transitions, so a temporal operator of one domain looks only at
every second node of a path, starting from the node it is evaluated at.

The primitive operators EXIST_UNTIL, FORALL_NEXT and MODAL are implemented
here once for both domains; the domain-specific classes in
:mod:`logic.state` and :mod:`logic.transition` delegate to them.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Sequence, Tuple, Type

from model.node import Node, Place, Transition
from .exceptions import FormulaDomainError

Path = Tuple[Node, ...]
Paths = Sequence[Path]


class Domain(Enum):
    """The two sorts of the logic."""

    STATE = "state"
    TRANSITION = "transition"


class Formula(ABC):
    """Base class of every formula node."""

    __slots__ = ()

    @abstractmethod
    def evaluate(self, node: Node, paths: Paths) -> bool:
        raise NotImplementedError

    @abstractmethod
    def symbol(self) -> str:
        raise NotImplementedError

    def operands(self) -> Tuple[Formula, ...]:
        """Direct subformulas, in rendering order."""
        return ()

    def write_formula(self) -> str:
        args = self.operands()
        if not args:
            return self.symbol()
        return f"{self.symbol()}({', '.join(arg.write_formula() for arg in args)})"

    def __str__(self) -> str:
        return self.write_formula()


class StateFormula(Formula):
    """Formula evaluated at places."""

    __slots__ = ()

    def _check(self, node: Node) -> Place:
        return _require(self, node, Place, "state")


class TransitionFormula(Formula):
    """Formula evaluated at transitions."""

    __slots__ = ()

    def _check(self, node: Node) -> Transition:
        return _require(self, node, Transition, "transition")


def _require(formula: Formula, node: Node, kind: Type[Node], domain: str):
    if not isinstance(node, kind):
        raise FormulaDomainError(
            f"{formula.symbol()} is a {domain} formula and cannot be evaluated at "
            f"{type(node).__name__} {getattr(node, 'id', node)!r}"
        )
    return node


@dataclass(frozen=True, slots=True)
class TT(StateFormula, TransitionFormula):
    """Always true, in both domains."""

    def evaluate(self, node: Node, paths: Paths) -> bool:
        return True

    def symbol(self) -> str:
        return "TT"


@dataclass(frozen=True, slots=True)
class FF(StateFormula, TransitionFormula):
    """Always false, in both domains."""

    def evaluate(self, node: Node, paths: Paths) -> bool:
        return False

    def symbol(self) -> str:
        return "FF"


# ----------------------------------------------------------------------
# path primitives shared by both domains
# ----------------------------------------------------------------------


def paths_from(node: Node, paths: Paths) -> Iterator[Path]:
    """Paths of the set that start at `node`."""
    return (path for path in paths if path and path[0] == node)


def exist_until(node: Node, paths: Paths, hold: Formula, goal: Formula) -> bool:
    """Some path from `node` reaches a `goal` node with `hold` true at every earlier one.

    Only nodes of the start node's domain (every second node) are inspected;
    position 0 is `node` itself.
    """
    for path in paths_from(node, paths):
        for current in path[::2]:
            if goal.evaluate(current, paths):
                return True
            if not hold.evaluate(current, paths):
                break
    return False


def forall_next(node: Node, paths: Paths, parameter: Formula) -> bool:
    """`parameter` holds at the next node of the same domain on every path from `node`.

    Paths without such a node impose nothing, so the operator is vacuously
    true at nodes from which no path continues.
    """
    for path in paths_from(node, paths):
        if len(path) > 2 and not parameter.evaluate(path[2], paths):
            return False
    return True


def exists_successor(node: Node, paths: Paths, parameter: Formula) -> bool:
    """Some direct successor of `node` (a node of the other domain) satisfies `parameter`."""
    checked = set()
    for path in paths_from(node, paths):
        if len(path) < 2 or path[1] in checked:
            continue
        checked.add(path[1])
        if parameter.evaluate(path[1], paths):
            return True
    return False
