# utils/graphviz_generator.py
# This file is part of Ariadne - A Petri Net Route Model Checker
#
# DOT rendering of nets and step graphs

"""Graphviz rendering of nets and step graphs.

Node ids of route nets freely contain characters such as ``:`` that DOT
treats as port separators, so nodes are emitted under synthetic names
(``p0``, ``t0``, ``s0``) and labelled with their real ids.
"""

from typing import Dict, Union

from graphviz import Digraph

from model.petri_net import PetriNet
from simulator.step_graph import Step, StepGraph


def generate_graphviz(item: Union[PetriNet, StepGraph]) -> str:
    """Return the DOT source of a net or of a step graph."""
    if isinstance(item, PetriNet):
        return _net_to_dot(item).source
    if isinstance(item, StepGraph):
        return _graph_to_dot(item).source
    raise TypeError(f"Cannot render {type(item).__name__} as DOT")


def _net_to_dot(net: PetriNet) -> Digraph:
    dot = Digraph(name=f"net_{net.id}", comment=f"Petri net {net.id}")
    dot.attr(rankdir="LR")

    names: Dict[str, str] = {}
    for i, place in enumerate(net.places):
        names[place.id] = f"p{i}"
        tokens = "●" * place.markers if place.markers <= 3 else str(place.markers)
        label = f"{place.id}\n{tokens}" if place.markers else place.id
        style = {"style": "filled", "fillcolor": "lightyellow"} if place.is_marked else {}
        dot.node(names[place.id], label, shape="circle", **style)

    for i, transition in enumerate(net.transitions):
        names[transition.id] = f"t{i}"
        label = transition.id
        if transition.context is not None:
            label += f"\n[{transition.context}]"
        dot.node(names[transition.id], label, shape="box")

    for arc in net.arcs:
        dot.edge(names[arc.source], names[arc.target])

    return dot


def _graph_to_dot(graph: StepGraph) -> Digraph:
    dot = Digraph(name="step_graph", comment="Reachability graph")

    names: Dict[Step, str] = {}
    for i, step in enumerate(graph.steps):
        names[step] = f"s{i}"
        shape = "doublecircle" if step == graph.initial else "ellipse"
        dot.node(names[step], str(step.marking), shape=shape)

    for arc in graph.arcs:
        dot.edge(names[arc.source], names[arc.target], label=arc.transition)

    return dot
