# simulator/__init__.py
# This file is part of Ariadne - A Petri Net Route Model Checker
#
# State-space exploration, unfolding and concurrency queries

"""Simulation of route Petri nets.

Builds the reachability graph of a net (one Step per reachable marking),
enumerates paths through it and through the net structure, unfolds nets to
expose true concurrency and answers concurrency-counting queries.

Example:
    >>> from simulator import build_step_graph, get_all_paths
    >>> graph = build_step_graph(net)
    >>> paths = get_all_paths(graph)
"""

from .exceptions import ExplorationLimitExceeded
from .parallel_evaluator import ParallelEvaluator
from .petri_net_simulator import build_step_graph, get_all_paths, get_node_paths
from .step_graph import NetArc, Step, StepGraph
from .unfolding import folded_marking, get_parallel_sets, get_unfolded_petri_net

__all__ = [
    "ExplorationLimitExceeded",
    "NetArc",
    "ParallelEvaluator",
    "Step",
    "StepGraph",
    "build_step_graph",
    "folded_marking",
    "get_all_paths",
    "get_node_paths",
    "get_parallel_sets",
    "get_unfolded_petri_net",
]
