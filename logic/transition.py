# logic/transition.py
# This file is part of Ariadne - A Petri Net Route Model Checker
#
# Transition formulas: evaluated at transitions

from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple

from model.node import Node
from .expression import ArcExpression
from .formula import (
    TT,
    Formula,
    Paths,
    StateFormula,
    TransitionFormula,
    exist_until,
    exists_successor,
    forall_next,
)
from .state import NodeAnd, NodeModal


@dataclass(frozen=True, slots=True)
class TransitionAF(TransitionFormula):
    """Atomic proposition: a transition predicate."""

    expression: ArcExpression

    def evaluate(self, node: Node, paths: Paths) -> bool:
        return self.expression(self._check(node))

    def symbol(self) -> str:
        return "AF"

    def write_formula(self) -> str:
        return f"AF({self.expression.label})"


@dataclass(frozen=True, slots=True)
class TransitionAnd(TransitionFormula):
    left: TransitionFormula
    right: TransitionFormula

    def evaluate(self, node: Node, paths: Paths) -> bool:
        self._check(node)
        return self.left.evaluate(node, paths) and self.right.evaluate(node, paths)

    def symbol(self) -> str:
        return "AND"

    def operands(self) -> Tuple[Formula, ...]:
        return (self.left, self.right)


@dataclass(frozen=True, slots=True)
class TransitionOr(TransitionFormula):
    left: TransitionFormula
    right: TransitionFormula

    def evaluate(self, node: Node, paths: Paths) -> bool:
        self._check(node)
        return self.left.evaluate(node, paths) or self.right.evaluate(node, paths)

    def symbol(self) -> str:
        return "OR"

    def operands(self) -> Tuple[Formula, ...]:
        return (self.left, self.right)


@dataclass(frozen=True, slots=True)
class TransitionNot(TransitionFormula):
    parameter: TransitionFormula

    def evaluate(self, node: Node, paths: Paths) -> bool:
        self._check(node)
        return not self.parameter.evaluate(node, paths)

    def symbol(self) -> str:
        return "NOT"

    def operands(self) -> Tuple[Formula, ...]:
        return (self.parameter,)


@dataclass(frozen=True, slots=True)
class TransitionModal(TransitionFormula):
    """Some place directly after the transition satisfies `parameter`."""

    parameter: StateFormula

    def evaluate(self, node: Node, paths: Paths) -> bool:
        self._check(node)
        return exists_successor(node, paths, self.parameter)

    def symbol(self) -> str:
        return "MODAL"

    def operands(self) -> Tuple[Formula, ...]:
        return (self.parameter,)


@dataclass(frozen=True, slots=True)
class TransitionExistUntil(TransitionFormula):
    """E[parameter1 U parameter2] over the transitions of a path."""

    parameter1: TransitionFormula
    parameter2: TransitionFormula

    def evaluate(self, node: Node, paths: Paths) -> bool:
        self._check(node)
        return exist_until(node, paths, self.parameter1, self.parameter2)

    def symbol(self) -> str:
        return "EXIST_UNTIL"

    def operands(self) -> Tuple[Formula, ...]:
        return (self.parameter1, self.parameter2)


@dataclass(frozen=True, slots=True)
class TransitionForallNext(TransitionFormula):
    parameter: TransitionFormula

    def evaluate(self, node: Node, paths: Paths) -> bool:
        self._check(node)
        return forall_next(node, paths, self.parameter)

    def symbol(self) -> str:
        return "FORALL_NEXT"

    def operands(self) -> Tuple[Formula, ...]:
        return (self.parameter,)


@dataclass(frozen=True, slots=True)
class TransitionEv(TransitionFormula):
    parameter: TransitionFormula

    def evaluate(self, node: Node, paths: Paths) -> bool:
        return TransitionExistUntil(TT(), self.parameter).evaluate(node, paths)

    def symbol(self) -> str:
        return "EV"

    def operands(self) -> Tuple[Formula, ...]:
        return (self.parameter,)


@dataclass(frozen=True, slots=True)
class TransitionPos(TransitionFormula):
    parameter: TransitionFormula

    def evaluate(self, node: Node, paths: Paths) -> bool:
        return TransitionExistUntil(TT(), self.parameter).evaluate(node, paths)

    def symbol(self) -> str:
        return "POS"

    def operands(self) -> Tuple[Formula, ...]:
        return (self.parameter,)


@dataclass(frozen=True, slots=True)
class TransitionAlong(TransitionFormula):
    parameter: TransitionFormula

    def evaluate(self, node: Node, paths: Paths) -> bool:
        return TransitionNot(TransitionEv(TransitionNot(self.parameter))).evaluate(node, paths)

    def symbol(self) -> str:
        return "ALONG"

    def operands(self) -> Tuple[Formula, ...]:
        return (self.parameter,)


@dataclass(frozen=True, slots=True)
class TransitionExistModal(TransitionFormula):
    """Some following place satisfies `parameter1` and is itself followed by
    a transition satisfying `parameter2`.

    Evaluated as MODAL(AND(parameter1, MODAL(parameter2))).
    """

    parameter1: StateFormula
    parameter2: TransitionFormula

    def evaluate(self, node: Node, paths: Paths) -> bool:
        rewrite = TransitionModal(NodeAnd(self.parameter1, NodeModal(self.parameter2)))
        return rewrite.evaluate(node, paths)

    def symbol(self) -> str:
        return "EXIST_MODAL"

    def operands(self) -> Tuple[Formula, ...]:
        return (self.parameter1, self.parameter2)
