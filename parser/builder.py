# parser/builder.py
# This file is part of Ariadne - A Petri Net Route Model Checker
#
# Turns call trees into typed formula trees

"""Builds formula trees from parsed call trees.

The same operator name denotes different classes in the two domains
(``AND`` is :class:`NodeAnd` under a state formula and :class:`TransitionAnd`
under a transition formula), so the builder carries the expected domain down
the tree. The root's domain is chosen by the caller; each operator fixes the
domain of its arguments, e.g. ``MODAL`` switches to the other domain and
``EXIST_MODAL`` takes a state argument followed by a transition argument.
"""

from __future__ import annotations
from typing import Dict, List, Tuple, Type

from logic import state, transition
from logic.formula import FF, TT, Domain, Formula
from . import ast_nodes as ast
from .exceptions import ParseError
from .predicates import place_expression, transition_expression
from utils.logger import get_logger

S, T = Domain.STATE, Domain.TRANSITION

# operator name -> (class, domains of its arguments)
OperatorTable = Dict[str, Tuple[Type[Formula], Tuple[Domain, ...]]]

STATE_OPERATORS: OperatorTable = {
    "AND": (state.NodeAnd, (S, S)),
    "OR": (state.NodeOr, (S, S)),
    "NOT": (state.NodeNot, (S,)),
    "MODAL": (state.NodeModal, (T,)),
    "EXIST_UNTIL": (state.NodeExistUntil, (S, S)),
    "FORALL_NEXT": (state.NodeForallNext, (S,)),
    "EV": (state.NodeEv, (S,)),
    "POS": (state.NodePos, (S,)),
    "ALONG": (state.NodeAlong, (S,)),
    "EXIST_MODAL": (state.NodeExistModal, (S, T)),
}

TRANSITION_OPERATORS: OperatorTable = {
    "AND": (transition.TransitionAnd, (T, T)),
    "OR": (transition.TransitionOr, (T, T)),
    "NOT": (transition.TransitionNot, (T,)),
    "MODAL": (transition.TransitionModal, (S,)),
    "EXIST_UNTIL": (transition.TransitionExistUntil, (T, T)),
    "FORALL_NEXT": (transition.TransitionForallNext, (T,)),
    "EV": (transition.TransitionEv, (T,)),
    "POS": (transition.TransitionPos, (T,)),
    "ALONG": (transition.TransitionAlong, (T,)),
    "EXIST_MODAL": (transition.TransitionExistModal, (S, T)),
}

CONSTANTS = {"TT": TT, "FF": FF}


class FormulaBuilder(ast.Visitor):
    """Visitor resolving operator names against the expected domain.

    Attributes:
        _domains: Stack of expected domains, top is the domain of the node
            currently being visited
    """

    def __init__(self):
        self._domains: List[Domain] = []

    def build(self, root: ast.Call, domain: Domain = Domain.STATE) -> Formula:
        logger = get_logger()
        logger.debug(f"Building {domain.value} formula from {root}")

        self._domains = [domain]
        result = root.accept(self)

        logger.debug(f"Built {type(result).__name__}")
        return result

    def _visit_in(self, node: ast.Arg, domain: Domain) -> Formula:
        self._domains.append(domain)
        try:
            return node.accept(self)
        finally:
            self._domains.pop()

    def visit_text(self, n: ast.Text) -> Formula:
        raise ParseError(f"String {n} is only allowed as a predicate argument")

    def visit_call(self, n: ast.Call) -> Formula:
        domain = self._domains[-1]

        if n.name in CONSTANTS:
            self._expect_arity(n, 0)
            return CONSTANTS[n.name]()

        if n.name == "NF":
            self._expect_domain(n, domain, Domain.STATE)
            return state.NodeNF(place_expression(*self._predicate(n)))

        if n.name == "AF":
            self._expect_domain(n, domain, Domain.TRANSITION)
            return transition.TransitionAF(transition_expression(*self._predicate(n)))

        table = STATE_OPERATORS if domain is Domain.STATE else TRANSITION_OPERATORS
        if n.name not in table:
            other = TRANSITION_OPERATORS if domain is Domain.STATE else STATE_OPERATORS
            if n.name in other:
                raise ParseError(f"{n.name} is not a {domain.value} operator: {n}")
            raise ParseError(f"Unknown operator '{n.name}' in {n}")

        cls, arg_domains = table[n.name]
        self._expect_arity(n, len(arg_domains))
        return cls(*(self._visit_in(arg, d) for arg, d in zip(n.args, arg_domains)))

    @staticmethod
    def _expect_arity(n: ast.Call, arity: int) -> None:
        if len(n.args) != arity:
            raise ParseError(f"{n.name} takes {arity} argument(s), got {len(n.args)}: {n}")

    @staticmethod
    def _expect_domain(n: ast.Call, actual: Domain, expected: Domain) -> None:
        if actual is not expected:
            raise ParseError(f"{n.name}(...) is a {expected.value} formula, expected {actual.value}: {n}")

    @staticmethod
    def _predicate(n: ast.Call) -> Tuple[str, ...]:
        """Unpack ``NF(name(\"arg\", ...))`` into ``(name, arg, ...)``."""
        if len(n.args) != 1 or not isinstance(n.args[0], ast.Call):
            raise ParseError(f"{n.name} takes exactly one predicate: {n}")
        call = n.args[0]
        if not all(isinstance(arg, ast.Text) for arg in call.args):
            raise ParseError(f"Predicate arguments must be strings: {call}")
        return (call.name, *(arg.value for arg in call.args))
