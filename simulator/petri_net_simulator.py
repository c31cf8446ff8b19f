# simulator/petri_net_simulator.py
# This file is part of Ariadne - A Petri Net Route Model Checker
#
# Breadth-first state-space exploration and path enumeration

"""State-space exploration of Petri nets.

The explorer builds the reachability graph of a net by breadth-first search
over markings, then enumerates paths through either the graph of markings or
its projection onto the places and transitions of the net. Both
enumerations stop a path at its first repeated element, so cycles never
cause infinite recursion.

Boundedness of the input net is a precondition: exploring an unbounded net
does not terminate unless a ``max_steps`` budget is given.
"""

from __future__ import annotations
from collections import deque
from typing import Callable, Dict, Hashable, List, Optional, Sequence, Tuple, TypeVar

from model.node import Node
from model.petri_net import PetriNet
from utils.logger import get_logger
from .exceptions import ExplorationLimitExceeded
from .step_graph import NetArc, Step, StepGraph

T = TypeVar("T", bound=Hashable)

StepPath = Tuple[Step, ...]
NodePath = Tuple[Node, ...]


def build_step_graph(net: PetriNet, max_steps: Optional[int] = None) -> StepGraph:
    """Explore every marking reachable from the net's current marking.

    Keeps a frontier of unexplored steps and a visited map keyed by marking.
    Every firing is recorded as a NetArc, including firings that lead back to
    an already visited marking; only new markings are explored further.

    Args:
        net: Initial snapshot; its marking is the initial marking
        max_steps: Optional budget on the number of distinct markings

    Returns:
        StepGraph with exactly one Step per reachable marking

    Raises:
        ExplorationLimitExceeded: More than `max_steps` markings are reachable
    """
    logger = get_logger()
    logger.exploration_start(net.id, len(net.places), len(net.transitions), str(net.marking))

    initial = Step(net)
    visited: Dict[Step, Step] = {initial: initial}
    order: List[Step] = [initial]
    arcs: List[NetArc] = []
    frontier = deque([initial])

    while frontier:
        current = frontier.popleft()
        # sorted only so that logs and discovery order are reproducible
        enabled = sorted(current.net.enabled_transitions(), key=lambda t: t.id)
        for transition in enabled:
            candidate = Step(current.net.fire(transition))
            successor = visited.get(candidate)
            if successor is None:
                if max_steps is not None and len(visited) >= max_steps:
                    raise ExplorationLimitExceeded(
                        f"Net {net.id} has more than {max_steps} reachable markings",
                        max_steps,
                    )
                successor = candidate
                visited[successor] = successor
                order.append(successor)
                frontier.append(successor)
            arcs.append(NetArc(current, successor, transition.id))

    graph = StepGraph(tuple(order), tuple(arcs), initial)
    logger.step_graph_built(net.id, len(graph.steps), len(graph.arcs))
    return graph


def _enumerate_paths(start: T, successors: Callable[[T], Sequence[T]]) -> List[Tuple[T, ...]]:
    """Enumerate maximal simple paths from `start`.

    A path ends at an element without successors, or right after the first
    element that already occurs earlier on the path.
    """
    paths: List[Tuple[T, ...]] = []
    stack: List[Tuple[T, ...]] = [(start,)]
    while stack:
        path = stack.pop()
        following = successors(path[-1])
        if not following:
            paths.append(path)
            continue
        # reversed so that paths come out in successor order
        for nxt in reversed(following):
            if nxt in path:
                paths.append(path + (nxt,))
            else:
                stack.append(path + (nxt,))
    return paths


def get_all_paths(graph: StepGraph) -> List[StepPath]:
    """Every path of steps starting at the initial step.

    A path terminates at a step without outgoing arcs or by revisiting a step
    already on the path; the revisited step closes the path. The number of
    paths is exponential in the worst case.
    """
    paths = _enumerate_paths(graph.initial, graph.successors)
    get_logger().paths_enumerated("step", len(paths))
    return paths


def get_node_paths(graph: StepGraph) -> List[NodePath]:
    """Every path through the net that its reachable behaviour can follow.

    This is the path set formulas are evaluated over: the step graph projected
    onto the nodes of its net. A place leads to a transition, and a transition
    to a place, only along arcs of a transition that fires on some NetArc of
    the graph; arcs of transitions that never fire in a reachable marking are
    dropped. One enumeration is started from every node, so even a dead
    transition or an unreachable place starts a (one-node) path.

    Paths alternate places and transitions and end at a node without
    successors or at the first repeated node, which is included. Duplicate
    arcs do not duplicate paths.
    """
    net = graph.initial.net
    fired = {arc.transition for arc in graph.arcs}

    def successors(node: Node) -> Tuple[Node, ...]:
        if node.is_transition:
            return net.successors(node.id) if node.id in fired else ()
        return tuple(t for t in net.successors(node.id) if t.id in fired)

    paths: List[NodePath] = []
    for node in net.nodes:
        paths.extend(_enumerate_paths(node, successors))
    get_logger().paths_enumerated("node", len(paths))
    return paths
