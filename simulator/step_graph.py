# simulator/step_graph.py

"""
StepGraph
=========

Reachability graph of a Petri net. Each Step wraps the net snapshot of one
reachable marking and is identified by that marking alone; NetArcs connect
steps and record the transition whose firing leads from source to target.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from model.marking import Marking
from model.petri_net import PetriNet


@dataclass(frozen=True, slots=True)
class Step:
    net: PetriNet = field(compare=False, repr=False)
    marking: Marking = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "marking", self.net.marking)

    def __str__(self) -> str:
        return str(self.marking)


@dataclass(frozen=True, slots=True)
class NetArc:
    source: Step
    target: Step
    transition: str

    def __str__(self) -> str:
        return f"{self.source} --{self.transition}--> {self.target}"


@dataclass(frozen=True, slots=True)
class StepGraph:
    """
    All reachable steps of a net, connected by the firings between them.

    Attributes:
      steps: Every reachable step, in discovery order, each marking once.
      arcs: One NetArc per (step, enabled transition) pair.
      initial: Step of the initial marking.
    """
    steps: Tuple[Step, ...]
    arcs: Tuple[NetArc, ...]
    initial: Step
    _outgoing: Dict[Step, Tuple[NetArc, ...]] = field(init=False, repr=False, compare=False)
    _by_marking: Dict[Marking, Step] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        outgoing: Dict[Step, List[NetArc]] = {step: [] for step in self.steps}
        for arc in self.arcs:
            outgoing[arc.source].append(arc)
        object.__setattr__(self, "_outgoing", {s: tuple(a) for s, a in outgoing.items()})
        object.__setattr__(self, "_by_marking", {s.marking: s for s in self.steps})

    def outgoing(self, step: Step) -> Tuple[NetArc, ...]:
        return self._outgoing.get(step, ())

    def successors(self, step: Step) -> Tuple[Step, ...]:
        """Distinct successor steps, in arc order."""
        seen: Dict[Step, None] = {}
        for arc in self.outgoing(step):
            seen.setdefault(arc.target, None)
        return tuple(seen)

    def step_for(self, marking: Marking) -> Optional[Step]:
        return self._by_marking.get(marking)

    def terminal_steps(self) -> Tuple[Step, ...]:
        """Steps without outgoing arcs (deadlocks or proper ends of a route)."""
        return tuple(s for s in self.steps if not self._outgoing.get(s))

    def __len__(self) -> int:
        return len(self.steps)
