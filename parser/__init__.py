# parser/__init__.py
# This file is part of Ariadne - A Petri Net Route Model Checker
#
# Formula parsing components

"""Textual formula language.

Formulas are written exactly as ``Formula.write_formula()`` renders them:

    EXIST_UNTIL(TT, NF(id("end")))
    MODAL(AND(AF(reads("data")), AF(requires("france"))))

so any rendered formula parses back to an equal tree.

Core Functions:
    parse: Converts formula strings into call trees
    parse_formula: Complete pipeline from text to a state or transition formula

Example:
    >>> from parser import parse_formula
    >>> f = parse_formula('EV(NF(id("end")))')
    >>> str(f)
    'EV(NF(id("end")))'
"""

from logic.formula import Domain, Formula
from .ast_nodes import Call, Text
from .builder import FormulaBuilder
from .exceptions import ParseError
from .grammar import _FormulaParser
from .predicates import place_expression, transition_expression
from utils.logger import get_logger


def parse(source: str) -> Call:
    """Parse formula text into a call tree.

    Uses a fresh parser instance for each invocation.

    Raises:
        ParseError: Formula text is malformed
    """
    logger = get_logger()
    parser = _FormulaParser()

    try:
        return parser.parse(source)
    except ParseError:
        raise
    except Exception as exc:
        logger.debug(f"Unexpected parsing error: {type(exc).__name__}: {exc}")
        raise ParseError(str(exc)) from exc


def parse_formula(source: str, domain: Domain = Domain.STATE) -> Formula:
    """Parse formula text into a formula tree of the requested domain.

    Args:
        source: Formula text in call notation
        domain: Domain of the root formula, state (places) by default

    Returns:
        A StateFormula or TransitionFormula

    Raises:
        ParseError: Text is malformed, names are unknown, or operators are
            used outside their domain
    """
    return FormulaBuilder().build(parse(source), domain)


__all__ = [
    "Call",
    "FormulaBuilder",
    "ParseError",
    "Text",
    "parse",
    "parse_formula",
    "place_expression",
    "transition_expression",
]
