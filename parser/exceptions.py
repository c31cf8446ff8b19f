# parser/exceptions.py
# This file is part of Ariadne - A Petri Net Route Model Checker
#
# Custom exceptions for formula parsing

"""Exceptions raised while turning formula text into formula trees."""


class ParseError(RuntimeError):
    """Exception raised when formula parsing fails.

    Covers both syntax errors and well-formed calls that do not denote a
    formula: unknown operators or predicates, wrong argument counts, and
    operators used in the wrong domain.
    """

    pass
