# parser/ast_nodes.py
# This file is part of Ariadne - A Petri Net Route Model Checker
#
# Syntax tree for formula text

"""Syntax tree produced by the formula grammar.

The tree is deliberately untyped: every operator, constant and predicate is a
:class:`Call`, every quoted argument a :class:`Text`. Deciding what a name
means, and in which domain, is left to :class:`parser.builder.FormulaBuilder`.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Protocol, Tuple, Union


class Visitor(Protocol):
    """Interface for syntax tree visitors."""

    def visit_call(self, n: Call): ...

    def visit_text(self, n: Text): ...


@dataclass(frozen=True, slots=True)
class Call:
    """A name, optionally applied to arguments: ``NAME`` or ``NAME(arg, ...)``."""

    name: str
    args: Tuple[Arg, ...] = ()

    def accept(self, v: Visitor):
        return v.visit_call(self)

    def __str__(self) -> str:
        if not self.args:
            return self.name
        return f"{self.name}({', '.join(str(arg) for arg in self.args)})"


@dataclass(frozen=True, slots=True)
class Text:
    """A quoted string argument."""

    value: str

    def accept(self, v: Visitor):
        return v.visit_text(self)

    def __str__(self) -> str:
        return f'"{self.value}"'


Arg = Union[Call, Text]
