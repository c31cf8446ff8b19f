# logic/state.py
# This file is part of Ariadne - A Petri Net Route Model Checker
#
# State formulas: evaluated at places

from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple

from model.node import Node
from .expression import NodeExpression
from .formula import (
    TT,
    Formula,
    Paths,
    StateFormula,
    TransitionFormula,
    exist_until,
    exists_successor,
    forall_next,
    paths_from,
)


@dataclass(frozen=True, slots=True)
class NodeNF(StateFormula):
    """Atomic proposition: a place predicate."""

    expression: NodeExpression

    def evaluate(self, node: Node, paths: Paths) -> bool:
        return self.expression(self._check(node))

    def symbol(self) -> str:
        return "NF"

    def write_formula(self) -> str:
        return f"NF({self.expression.label})"


@dataclass(frozen=True, slots=True)
class NodeAnd(StateFormula):
    left: StateFormula
    right: StateFormula

    def evaluate(self, node: Node, paths: Paths) -> bool:
        self._check(node)
        return self.left.evaluate(node, paths) and self.right.evaluate(node, paths)

    def symbol(self) -> str:
        return "AND"

    def operands(self) -> Tuple[Formula, ...]:
        return (self.left, self.right)


@dataclass(frozen=True, slots=True)
class NodeOr(StateFormula):
    left: StateFormula
    right: StateFormula

    def evaluate(self, node: Node, paths: Paths) -> bool:
        self._check(node)
        return self.left.evaluate(node, paths) or self.right.evaluate(node, paths)

    def symbol(self) -> str:
        return "OR"

    def operands(self) -> Tuple[Formula, ...]:
        return (self.left, self.right)


@dataclass(frozen=True, slots=True)
class NodeNot(StateFormula):
    parameter: StateFormula

    def evaluate(self, node: Node, paths: Paths) -> bool:
        self._check(node)
        return not self.parameter.evaluate(node, paths)

    def symbol(self) -> str:
        return "NOT"

    def operands(self) -> Tuple[Formula, ...]:
        return (self.parameter,)


@dataclass(frozen=True, slots=True)
class NodeModal(StateFormula):
    """Some transition directly after the place satisfies `parameter`.

    A place without outgoing arcs never satisfies MODAL.
    """

    parameter: TransitionFormula

    def evaluate(self, node: Node, paths: Paths) -> bool:
        self._check(node)
        return exists_successor(node, paths, self.parameter)

    def symbol(self) -> str:
        return "MODAL"

    def operands(self) -> Tuple[Formula, ...]:
        return (self.parameter,)


@dataclass(frozen=True, slots=True)
class NodeExistUntil(StateFormula):
    """E[parameter1 U parameter2] over the places of a path."""

    parameter1: StateFormula
    parameter2: StateFormula

    def evaluate(self, node: Node, paths: Paths) -> bool:
        self._check(node)
        return exist_until(node, paths, self.parameter1, self.parameter2)

    def symbol(self) -> str:
        return "EXIST_UNTIL"

    def operands(self) -> Tuple[Formula, ...]:
        return (self.parameter1, self.parameter2)


@dataclass(frozen=True, slots=True)
class NodeForallNext(StateFormula):
    parameter: StateFormula

    def evaluate(self, node: Node, paths: Paths) -> bool:
        self._check(node)
        return forall_next(node, paths, self.parameter)

    def symbol(self) -> str:
        return "FORALL_NEXT"

    def operands(self) -> Tuple[Formula, ...]:
        return (self.parameter,)


# derived operators, evaluated through their rewrites


@dataclass(frozen=True, slots=True)
class NodeEv(StateFormula):
    """Eventually: EXIST_UNTIL(TT, parameter)."""

    parameter: StateFormula

    def evaluate(self, node: Node, paths: Paths) -> bool:
        return NodeExistUntil(TT(), self.parameter).evaluate(node, paths)

    def symbol(self) -> str:
        return "EV"

    def operands(self) -> Tuple[Formula, ...]:
        return (self.parameter,)


@dataclass(frozen=True, slots=True)
class NodePos(StateFormula):
    """Possibly: same rewrite as EV."""

    parameter: StateFormula

    def evaluate(self, node: Node, paths: Paths) -> bool:
        return NodeExistUntil(TT(), self.parameter).evaluate(node, paths)

    def symbol(self) -> str:
        return "POS"

    def operands(self) -> Tuple[Formula, ...]:
        return (self.parameter,)


@dataclass(frozen=True, slots=True)
class NodeAlong(StateFormula):
    """Along: NOT(EV(NOT(parameter)))."""

    parameter: StateFormula

    def evaluate(self, node: Node, paths: Paths) -> bool:
        return NodeNot(NodeEv(NodeNot(self.parameter))).evaluate(node, paths)

    def symbol(self) -> str:
        return "ALONG"

    def operands(self) -> Tuple[Formula, ...]:
        return (self.parameter,)


@dataclass(frozen=True, slots=True)
class NodeExistModal(StateFormula):
    """Some successor place satisfies `parameter1` while the transition in
    between satisfies `parameter2`.

    Same verdicts as MODAL(AND(parameter2, MODAL(parameter1))) with the inner
    operators taken in the transition domain.
    """

    parameter1: StateFormula
    parameter2: TransitionFormula

    def evaluate(self, node: Node, paths: Paths) -> bool:
        self._check(node)
        for path in paths_from(node, paths):
            if (
                len(path) > 2
                and self.parameter2.evaluate(path[1], paths)
                and self.parameter1.evaluate(path[2], paths)
            ):
                return True
        return False

    def symbol(self) -> str:
        return "EXIST_MODAL"

    def operands(self) -> Tuple[Formula, ...]:
        return (self.parameter1, self.parameter2)
