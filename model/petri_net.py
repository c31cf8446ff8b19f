# model/petri_net.py
# This file is part of Ariadne - A Petri Net Route Model Checker
#
# Immutable Petri net snapshot with structural validation and the firing rule

"""Petri net snapshots.

A :class:`PetriNet` holds one fixed structure together with one fixed
marking. Firing a transition never mutates the net; it returns a new
snapshot whose places carry the updated token counts. The state-space
explorer relies on this to treat every reachable marking as its own value.
"""

from __future__ import annotations
from collections import Counter
from dataclasses import dataclass, field, replace
from typing import Dict, FrozenSet, Iterable, List, Mapping, Tuple, Union

import networkx as nx

from .exceptions import StructuralValidationError, TransitionNotEnabledError
from .marking import Marking
from .node import Arc, Node, Place, Transition
from utils.logger import get_logger

logger = get_logger()

TransitionRef = Union[str, Transition]


@dataclass(frozen=True, slots=True, eq=False)
class PetriNet:
    """A bipartite net of places and transitions plus its current marking.

    Construction validates the structure and rebinds every node so that its
    ``incoming_arcs`` / ``outgoing_arcs`` reflect the arc collection. Arcs are
    kept in a tuple: duplicate arcs are meaningful and model weights.

    Attributes:
        id: Identifier of the net (typically the route it was compiled from)
        nodes: Places and transitions, rebound to their arcs
        arcs: All arcs, duplicates included
    """

    id: str
    nodes: Tuple[Node, ...]
    arcs: Tuple[Arc, ...]
    _index: Dict[str, Node] = field(init=False, repr=False)
    _pre: Dict[str, Dict[str, int]] = field(init=False, repr=False)
    _post: Dict[str, Dict[str, int]] = field(init=False, repr=False)
    _marking: Marking = field(init=False, repr=False)

    def __post_init__(self) -> None:
        nodes = tuple(self.nodes)
        arcs = tuple(self.arcs)
        index = self._validate(nodes, arcs)

        incoming: Dict[str, List[Arc]] = {node_id: [] for node_id in index}
        outgoing: Dict[str, List[Arc]] = {node_id: [] for node_id in index}
        pre: Dict[str, Counter] = {}
        post: Dict[str, Counter] = {}
        for arc in arcs:
            outgoing[arc.source].append(arc)
            incoming[arc.target].append(arc)
            if isinstance(index[arc.target], Transition):
                pre.setdefault(arc.target, Counter())[arc.source] += 1
            else:
                post.setdefault(arc.source, Counter())[arc.target] += 1

        bound = tuple(
            replace(
                node,
                incoming_arcs=tuple(incoming[node.id]),
                outgoing_arcs=tuple(outgoing[node.id]),
            )
            for node in nodes
        )
        object.__setattr__(self, "nodes", bound)
        object.__setattr__(self, "arcs", arcs)
        object.__setattr__(self, "_index", {node.id: node for node in bound})
        object.__setattr__(self, "_pre", {t: dict(c) for t, c in pre.items()})
        object.__setattr__(self, "_post", {t: dict(c) for t, c in post.items()})
        object.__setattr__(
            self, "_marking", Marking({n.id: n.markers for n in bound if n.is_place})
        )

    @staticmethod
    def _validate(nodes: Tuple[Node, ...], arcs: Tuple[Arc, ...]) -> Dict[str, Node]:
        index: Dict[str, Node] = {}
        for node in nodes:
            if not isinstance(node, (Place, Transition)):
                raise StructuralValidationError(
                    f"Node {node!r} is neither a Place nor a Transition"
                )
            if node.id in index:
                raise StructuralValidationError(f"Duplicate node id: {node.id}")
            if isinstance(node, Place) and node.markers < 0:
                raise StructuralValidationError(
                    f"Place {node.id} has a negative marker count ({node.markers})"
                )
            index[node.id] = node

        for arc in arcs:
            missing = [end for end in (arc.source, arc.target) if end not in index]
            if missing:
                raise StructuralValidationError(
                    f"Arc {arc} references unknown node(s): {', '.join(missing)}"
                )
            if type(index[arc.source]) is type(index[arc.target]):
                kind = type(index[arc.source]).__name__
                raise StructuralValidationError(
                    f"Arc {arc} connects two nodes of kind {kind}; the net must be bipartite"
                )
        return index

    @classmethod
    def build(
        cls,
        net_id: str,
        nodes: Iterable[Node],
        arcs: Iterable[Union[Arc, Tuple[str, str]]],
    ) -> PetriNet:
        """Build a net from nodes and arcs given as Arc objects or id pairs."""
        arc_objs = tuple(a if isinstance(a, Arc) else Arc(*a) for a in arcs)
        return cls(net_id, tuple(nodes), arc_objs)

    # ------------------------------------------------------------------
    # structure
    # ------------------------------------------------------------------

    @property
    def places(self) -> Tuple[Place, ...]:
        return tuple(n for n in self.nodes if n.is_place)

    @property
    def transitions(self) -> Tuple[Transition, ...]:
        return tuple(n for n in self.nodes if n.is_transition)

    def node(self, node_id: str) -> Node:
        try:
            return self._index[node_id]
        except KeyError:
            raise KeyError(f"Net {self.id} has no node {node_id!r}") from None

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._index

    def preset(self, transition: TransitionRef) -> Dict[str, int]:
        """Input places of `transition` with the number of arcs from each."""
        return dict(self._pre.get(self._transition_id(transition), {}))

    def postset(self, transition: TransitionRef) -> Dict[str, int]:
        """Output places of `transition` with the number of arcs to each."""
        return dict(self._post.get(self._transition_id(transition), {}))

    def successors(self, node_id: str) -> Tuple[Node, ...]:
        """Distinct targets of the outgoing arcs of `node_id`, in arc order."""
        seen: Dict[str, Node] = {}
        for arc in self.node(node_id).outgoing_arcs:
            seen.setdefault(arc.target, self._index[arc.target])
        return tuple(seen.values())

    def to_networkx(self) -> nx.DiGraph:
        """Bipartite directed graph of the structure; parallel arcs become a weight."""
        graph = nx.DiGraph(name=self.id)
        for node in self.nodes:
            if isinstance(node, Place):
                graph.add_node(node.id, kind="place", markers=node.markers)
            else:
                graph.add_node(node.id, kind="transition", context=node.context)
        for arc in self.arcs:
            if graph.has_edge(arc.source, arc.target):
                graph[arc.source][arc.target]["weight"] += 1
            else:
                graph.add_edge(arc.source, arc.target, weight=1)
        return graph

    # ------------------------------------------------------------------
    # marking and firing rule
    # ------------------------------------------------------------------

    @property
    def marking(self) -> Marking:
        return self._marking

    def is_enabled(self, transition: TransitionRef) -> bool:
        """A transition is enabled iff each input place holds one token per arc."""
        t_id = self._transition_id(transition)
        return self._marking.covers(self._pre.get(t_id, {}))

    def enabled_transitions(self) -> FrozenSet[Transition]:
        """Transitions enabled in the current marking. Order is not significant."""
        counts = self._marking.as_dict()
        return frozenset(
            t
            for t in self.transitions
            if all(counts.get(pid, 0) >= need for pid, need in self._pre.get(t.id, {}).items())
        )

    def fire(self, transition: TransitionRef) -> PetriNet:
        """Fire `transition` and return the successor snapshot.

        Raises:
            TransitionNotEnabledError: The transition lacks input tokens
        """
        t_id = self._transition_id(transition)
        if not self.is_enabled(t_id):
            raise TransitionNotEnabledError(
                f"Transition {t_id} is not enabled in marking {self.marking}"
            )

        tokens = self._marking.as_dict()
        for place_id, count in self._pre.get(t_id, {}).items():
            tokens[place_id] -= count
        for place_id, count in self._post.get(t_id, {}).items():
            tokens[place_id] = tokens.get(place_id, 0) + count

        successor = self._remarked(tokens)
        if logger.is_debug_enabled():
            logger.debug(f"Fired {t_id}: {self.marking} -> {successor.marking}")
        return successor

    def with_marking(self, marking: Union[Marking, Mapping[str, int]]) -> PetriNet:
        """Return a snapshot of the same structure carrying `marking`."""
        tokens = marking.as_dict() if isinstance(marking, Marking) else dict(marking)
        unknown = set(tokens) - {p.id for p in self.places}
        if unknown:
            raise StructuralValidationError(
                f"Marking references unknown place(s): {', '.join(sorted(unknown))}"
            )
        negative = sorted(pid for pid, count in tokens.items() if count < 0)
        if negative:
            raise StructuralValidationError(
                f"Marking has negative counts on: {', '.join(negative)}"
            )
        return self._remarked(tokens)

    def _remarked(self, tokens: Mapping[str, int]) -> PetriNet:
        """Copy of this validated snapshot with new marker counts.

        The structure is shared, so nothing is validated or rebound again;
        only places whose count changes get a new node object.
        """
        nodes = tuple(
            replace(n, markers=tokens.get(n.id, 0))
            if n.is_place and n.markers != tokens.get(n.id, 0)
            else n
            for n in self.nodes
        )
        net = object.__new__(PetriNet)
        object.__setattr__(net, "id", self.id)
        object.__setattr__(net, "nodes", nodes)
        object.__setattr__(net, "arcs", self.arcs)
        object.__setattr__(net, "_index", {node.id: node for node in nodes})
        object.__setattr__(net, "_pre", self._pre)
        object.__setattr__(net, "_post", self._post)
        object.__setattr__(net, "_marking", Marking(tokens))
        return net

    def _transition_id(self, transition: TransitionRef) -> str:
        t_id = transition.id if isinstance(transition, Node) else transition
        node = self._index.get(t_id)
        if node is None or not node.is_transition:
            raise KeyError(f"Net {self.id} has no transition {t_id!r}")
        return t_id

    def __str__(self) -> str:
        return (
            f"PetriNet({self.id}: {len(self.places)} places, "
            f"{len(self.transitions)} transitions, {len(self.arcs)} arcs, "
            f"marking={self.marking})"
        )
