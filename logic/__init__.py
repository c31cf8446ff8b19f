# logic/__init__.py

"""Two-sorted branching-time logic over Petri net routes.

This package provides:
  • StateFormula / TransitionFormula: formula trees evaluated at places / transitions
  • NodeExpression / ArcExpression: labelled predicates at the leaves
  • CTLEvaluator: evaluation entry point returning verdicts
  • FormulaDomainError: raised when a formula meets a node of the other domain
"""

from .evaluator import CTLEvaluator, EvaluationResult
from .exceptions import FormulaDomainError
from .expression import ArcExpression, NodeExpression
from .formula import FF, TT, Domain, Formula, StateFormula, TransitionFormula
from .state import (
    NodeAlong,
    NodeAnd,
    NodeEv,
    NodeExistModal,
    NodeExistUntil,
    NodeForallNext,
    NodeModal,
    NodeNF,
    NodeNot,
    NodeOr,
    NodePos,
)
from .transition import (
    TransitionAF,
    TransitionAlong,
    TransitionAnd,
    TransitionEv,
    TransitionExistModal,
    TransitionExistUntil,
    TransitionForallNext,
    TransitionModal,
    TransitionNot,
    TransitionOr,
    TransitionPos,
)

__all__ = [
    "ArcExpression",
    "CTLEvaluator",
    "Domain",
    "EvaluationResult",
    "FF",
    "Formula",
    "FormulaDomainError",
    "NodeAlong",
    "NodeAnd",
    "NodeEv",
    "NodeExistModal",
    "NodeExistUntil",
    "NodeExpression",
    "NodeForallNext",
    "NodeModal",
    "NodeNF",
    "NodeNot",
    "NodeOr",
    "NodePos",
    "StateFormula",
    "TT",
    "TransitionAF",
    "TransitionAlong",
    "TransitionAnd",
    "TransitionEv",
    "TransitionExistModal",
    "TransitionExistUntil",
    "TransitionForallNext",
    "TransitionFormula",
    "TransitionModal",
    "TransitionNot",
    "TransitionOr",
    "TransitionPos",
]
