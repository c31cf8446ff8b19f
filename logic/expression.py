# logic/expression.py

"""
Caller-supplied predicates at the leaves of formula trees.

An expression pairs a predicate with a display label. Expressions compare and
render by label only; two expressions with equivalent predicates but
different labels are different to the logic, and two with the same label are
assumed to be the same predicate. Choosing labels is the caller's job.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable

from model.node import Place, Transition


@dataclass(frozen=True, slots=True)
class NodeExpression:
    """Predicate over a place."""

    predicate: Callable[[Place], bool] = field(compare=False, repr=False)
    label: str = ""

    def __call__(self, place: Place) -> bool:
        return bool(self.predicate(place))

    def __str__(self) -> str:
        return self.label


@dataclass(frozen=True, slots=True)
class ArcExpression:
    """Predicate over a transition and its ContextObject."""

    predicate: Callable[[Transition], bool] = field(compare=False, repr=False)
    label: str = ""

    def __call__(self, transition: Transition) -> bool:
        return bool(self.predicate(transition))

    def __str__(self) -> str:
        return self.label
