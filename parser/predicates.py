# parser/predicates.py
# This file is part of Ariadne - A Petri Net Route Model Checker
#
# Named predicates available inside NF(...) and AF(...)

"""Library of named predicates for formula text.

Place predicates (inside ``NF``):
    terminal        no outgoing arcs
    source          no incoming arcs
    marked          holds at least one token
    id("p")         the place is named ``p``

Transition predicates (inside ``AF``):
    reads("d")      the step reads dataset ``d``
    writes("d")     the step writes dataset ``d``
    erases("d")     the step erases dataset ``d``
    requires("c")   ``c`` is part of the step's required context
    app / control   the step's kind
    id("t")         the transition is named ``t``

Transitions without a ContextObject satisfy none of the context predicates.
Every expression is labelled with its own call text, e.g. ``reads("data")``,
so a rendered formula parses back to an equal one.
"""

from __future__ import annotations
from typing import Callable, Dict, Sequence, Tuple

from logic.expression import ArcExpression, NodeExpression
from model.context import TransitionKind
from model.node import Transition
from .exceptions import ParseError

# name -> (number of string arguments, factory taking those arguments)
PredicateTable = Dict[str, Tuple[int, Callable[..., Callable]]]


def _context_check(method: str) -> Callable[[str], Callable[[Transition], bool]]:
    def factory(tag: str) -> Callable[[Transition], bool]:
        def predicate(transition: Transition) -> bool:
            context = transition.context
            return context is not None and getattr(context, method)(tag)

        return predicate

    return factory


def _kind_check(kind: TransitionKind) -> Callable[[], Callable[[Transition], bool]]:
    def factory() -> Callable[[Transition], bool]:
        return lambda t: t.context is not None and t.context.kind is kind

    return factory


PLACE_PREDICATES: PredicateTable = {
    "terminal": (0, lambda: lambda place: not place.outgoing_arcs),
    "source": (0, lambda: lambda place: not place.incoming_arcs),
    "marked": (0, lambda: lambda place: place.is_marked),
    "id": (1, lambda name: lambda place: place.id == name),
}

TRANSITION_PREDICATES: PredicateTable = {
    "reads": (1, _context_check("reads")),
    "writes": (1, _context_check("writes")),
    "erases": (1, _context_check("erases")),
    "requires": (1, _context_check("requires")),
    "app": (0, _kind_check(TransitionKind.APP)),
    "control": (0, _kind_check(TransitionKind.CONTROL)),
    "id": (1, lambda name: lambda transition: transition.id == name),
}


def _label(name: str, args: Sequence[str]) -> str:
    if not args:
        return name
    quoted = ", ".join('"' + arg + '"' for arg in args)
    return f"{name}({quoted})"


def _instantiate(table: PredicateTable, kind: str, name: str, args: Sequence[str]):
    if name not in table:
        known = ", ".join(sorted(table))
        raise ParseError(f"Unknown {kind} predicate '{name}' (expected one of: {known})")
    arity, factory = table[name]
    if len(args) != arity:
        raise ParseError(
            f"{kind.capitalize()} predicate '{name}' takes {arity} argument(s), got {len(args)}"
        )
    return factory(*args)


def place_expression(name: str, *args: str) -> NodeExpression:
    """Build the named place predicate, e.g. ``place_expression("id", "end")``."""
    predicate = _instantiate(PLACE_PREDICATES, "place", name, args)
    return NodeExpression(predicate, _label(name, args))


def transition_expression(name: str, *args: str) -> ArcExpression:
    """Build the named transition predicate, e.g. ``transition_expression("reads", "data")``."""
    predicate = _instantiate(TRANSITION_PREDICATES, "transition", name, args)
    return ArcExpression(predicate, _label(name, args))
