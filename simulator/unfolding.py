# simulator/unfolding.py
# This file is part of Ariadne - A Petri Net Route Model Checker
#
# Net unfolding and extraction of parallel transition sets

"""Concurrency analysis through net unfolding.

Interleaving semantics hides true concurrency: two independent firings show up
in the step graph only as two orders of the same pair. The unfolding makes the
partial order explicit. It unrolls the net into an acyclic occurrence net in
which every *event* is one occurrence of a transition and every *condition*
is one token of a place, each produced by exactly one event (or initially
present). Independent branches become disjoint copies of the structure, so
causality between two occurrences is just a directed path in the unfolded net.

The prefix is built along the reachability graph of the net. Every step
gets one representative run, which is a configuration of the prefix, and
every arc of the step graph becomes the occurrence of its transition on the
conditions that run leaves behind. Where a place holds several tokens the
oldest conditions are consumed first. Occurrences with the same transition
and the same input conditions are one event, so concurrent firings that the
step graph interleaves collapse into a single event per branch. An arc that
leads to an already represented marking only adds a cut-off event, whose
output conditions are never consumed.

Every reachable marking of the net is therefore reached by a configuration of
the prefix, every enabled transition extends that configuration, and the
prefix has at most one event per arc of the step graph.

The parallel sets of an unfolded step graph are the maximal groups of fired
occurrences that are pairwise causally unordered within one run.
"""

from __future__ import annotations
from collections import Counter, deque
from dataclasses import dataclass, field
from itertools import combinations
from typing import Dict, FrozenSet, List, Optional, Set, Tuple

import networkx as nx

from model.marking import Marking
from model.node import Arc, Place, Transition
from model.petri_net import PetriNet
from utils.logger import get_logger
from .exceptions import ExplorationLimitExceeded
from .petri_net_simulator import build_step_graph
from .step_graph import Step, StepGraph

ParallelSet = FrozenSet[Transition]

# place id -> conditions currently holding its tokens, oldest first
Cut = Dict[str, Tuple[int, ...]]


@dataclass(frozen=True, slots=True)
class _Condition:
    index: int
    place: str
    producer: Optional[int]


@dataclass(slots=True)
class _Event:
    index: int
    transition: str
    preset: Tuple[int, ...]
    postset: Tuple[int, ...]
    # cleared once the event extends the representative run of a new marking
    cutoff: bool = True


@dataclass(slots=True)
class _Prefix:
    """Mutable construction state of the branching process."""

    net: PetriNet
    max_events: Optional[int] = None
    conditions: List[_Condition] = field(default_factory=list)
    events: List[_Event] = field(default_factory=list)
    by_key: Dict[Tuple[str, Tuple[int, ...]], _Event] = field(default_factory=dict)

    def add_condition(self, place: str, producer: Optional[int]) -> int:
        index = len(self.conditions)
        self.conditions.append(_Condition(index, place, producer))
        return index

    def initial_cut(self) -> Cut:
        cut: Cut = {}
        for place in self.net.places:
            if place.markers:
                cut[place.id] = tuple(
                    self.add_condition(place.id, None) for _ in range(place.markers)
                )
        return cut

    def extend(self, cut: Cut, transition: str) -> _Event:
        """The event of `transition` on the oldest matching conditions of `cut`.

        Raises:
            ExplorationLimitExceeded: A new event would exceed `max_events`
        """
        preset = tuple(sorted(
            condition
            for place, count in self.net.preset(transition).items()
            for condition in cut[place][:count]
        ))
        event = self.by_key.get((transition, preset))
        if event is not None:
            return event

        if self.max_events is not None and len(self.events) >= self.max_events:
            raise ExplorationLimitExceeded(
                f"Unfolding of {self.net.id} needs more than {self.max_events} events",
                self.max_events,
            )
        index = len(self.events)
        postset = tuple(
            self.add_condition(place, index)
            for place, count in sorted(self.net.postset(transition).items())
            for _ in range(count)
        )
        event = _Event(index, transition, preset, postset)
        self.events.append(event)
        self.by_key[(transition, preset)] = event
        return event

    def after(self, cut: Cut, event: _Event) -> Cut:
        """Cut reached from `cut` by the occurrence of `event`."""
        result = dict(cut)
        for place, count in self.net.preset(event.transition).items():
            result[place] = result[place][count:]
        for condition in event.postset:
            place = self.conditions[condition].place
            result[place] = result.get(place, ()) + (condition,)
        return {place: held for place, held in result.items() if held}


def _build_prefix(net: PetriNet, graph: StepGraph, max_events: Optional[int]) -> _Prefix:
    prefix = _Prefix(net, max_events)
    cuts: Dict[Step, Cut] = {graph.initial: prefix.initial_cut()}

    # steps come in discovery order, so the arc that discovered a step is
    # met before any arc leaving it
    for step in graph.steps:
        cut = cuts[step]
        for arc in graph.outgoing(step):
            event = prefix.extend(cut, arc.transition)
            if arc.target not in cuts:
                cuts[arc.target] = prefix.after(cut, event)
                event.cutoff = False

    return prefix


def get_unfolded_petri_net(
    net: PetriNet, max_events: Optional[int] = None, graph: Optional[StepGraph] = None
) -> PetriNet:
    """Unfold `net` into a complete finite prefix of its branching process.

    Conditions become places ``"<place>#<n>"`` (initially marked ones carry a
    token) and events become transitions ``"<transition>#<n>"`` that keep the
    ContextObject of the transition they occur of. Every node records its
    origin. The result is acyclic and 1-safe, so building its step graph
    always terminates.

    Args:
        net: Bounded net to unfold, starting from its current marking
        max_events: Optional budget on the number of events
        graph: Step graph of `net` if already built; explored otherwise

    Raises:
        ExplorationLimitExceeded: The prefix needs more than `max_events` events
    """
    if graph is None:
        graph = build_step_graph(net)
    prefix = _build_prefix(net, graph, max_events)

    places = [
        Place(
            f"{c.place}#{c.index}",
            1 if c.producer is None else 0,
            origin=c.place,
        )
        for c in prefix.conditions
    ]
    transitions = []
    arcs: List[Arc] = []
    for event in prefix.events:
        original = net.node(event.transition)
        event_id = f"{event.transition}#{event.index}"
        transitions.append(Transition(event_id, original.context, origin=event.transition))
        for condition in event.preset:
            arcs.append(Arc(places[condition].id, event_id))
        for condition in event.postset:
            arcs.append(Arc(event_id, places[condition].id))

    cutoffs = sum(1 for e in prefix.events if e.cutoff)
    get_logger().unfolding_built(net.id, len(prefix.events), len(prefix.conditions), cutoffs)
    return PetriNet(f"{net.id}#unfolded", tuple(places) + tuple(transitions), tuple(arcs))


def folded_marking(step: Step) -> Marking:
    """Map the marking of an unfolded step back onto the original places."""
    tokens: Counter = Counter()
    for place_id, count in step.marking.tokens:
        tokens[step.net.node(place_id).origin or place_id] += count
    return Marking(tokens)


def _configurations(graph: StepGraph) -> Dict[Step, FrozenSet[str]]:
    """Transitions fired on the way to each step (first path found by BFS)."""
    fired: Dict[Step, FrozenSet[str]] = {graph.initial: frozenset()}
    queue = deque([graph.initial])
    while queue:
        current = queue.popleft()
        for arc in graph.outgoing(current):
            if arc.target not in fired:
                fired[arc.target] = fired[current] | {arc.transition}
                queue.append(arc.target)
    return fired


def get_parallel_sets(unfolded_graph: StepGraph) -> List[ParallelSet]:
    """Maximal sets of pairwise concurrent transition occurrences.

    For every maximal step of the graph, the transitions fired to reach it are
    split into maximal groups in which no member causally precedes another,
    where causality is a directed path in the net. On an unfolded net every
    reachable marking has exactly one such set of fired occurrences and the
    net is acyclic, so the groups are exactly the concurrent occurrences.

    Args:
        unfolded_graph: Step graph of a net produced by get_unfolded_petri_net

    Returns:
        Distinct parallel sets, largest first
    """
    net = unfolded_graph.initial.net
    transitions = {t.id: t for t in net.transitions}
    structure = net.to_networkx()
    causes = {
        t_id: {a for a in nx.ancestors(structure, t_id) if a in transitions}
        for t_id in transitions
    }

    configurations = _configurations(unfolded_graph)
    maximal = unfolded_graph.terminal_steps() or unfolded_graph.steps

    found: Set[ParallelSet] = set()
    for step in maximal:
        fired = sorted(configurations.get(step, frozenset()))
        concurrency = nx.Graph()
        concurrency.add_nodes_from(fired)
        for a, b in combinations(fired, 2):
            if a not in causes[b] and b not in causes[a]:
                concurrency.add_edge(a, b)
        for clique in nx.find_cliques(concurrency):
            found.add(frozenset(transitions[t_id] for t_id in clique))

    get_logger().debug(f"Found {len(found)} parallel sets in {net.id}")
    return sorted(found, key=lambda s: (-len(s), sorted(t.id for t in s)))
