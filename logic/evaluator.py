# logic/evaluator.py
# This file is part of Ariadne - A Petri Net Route Model Checker
#
# Entry point for evaluating formulas over a precomputed path set

from __future__ import annotations
from dataclasses import dataclass

from model.node import Node
from utils.logger import get_logger
from .formula import Formula, Paths

logger = get_logger()


@dataclass(frozen=True, slots=True)
class EvaluationResult:
    """Outcome of checking one formula at one node."""

    formula: str
    node: str
    holds: bool

    def __bool__(self) -> bool:
        return self.holds

    def __str__(self) -> str:
        mark = "✅" if self.holds else "❌"
        return f"{mark} {self.formula} @ {self.node}: {self.holds}"


class CTLEvaluator:
    """Evaluates formula trees at nodes of a net.

    The evaluator holds no state. Paths are normally produced by
    ``simulator.get_node_paths(graph)`` from the step graph of the net, so
    verdicts only follow transitions that fire in some reachable marking
    and every node of the net starts at least one path.
    """

    @staticmethod
    def evaluate(formula: Formula, node: Node, paths: Paths) -> bool:
        result = formula.evaluate(node, paths)
        logger.formula_result(formula.write_formula(), node.id, result)
        return result

    @staticmethod
    def check(formula: Formula, node: Node, paths: Paths) -> EvaluationResult:
        holds = CTLEvaluator.evaluate(formula, node, paths)
        return EvaluationResult(formula.write_formula(), node.id, holds)
